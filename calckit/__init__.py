"""calckit - Terminal arithmetic calculator.

A left-to-right calculator with:
- Basic and scientific keypads (trigonometry in degrees, logs, roots)
- Operator chaining, percentage and 8-decimal rounding
- Persistent, bounded calculation history with export
- Theme, keypad mode and sound preferences
- Keyboard-style input from the command line or an interactive REPL
"""

__version__ = "1.0.0"

from .engine import (
    CalculatorEngine,
    CalculatorError,
    DivisionByZeroError,
    EngineState,
    ErrorPolicy,
    NegativeSquareRootError,
    Operation,
    ScientificFunction,
)
from .history import (
    HistoryEntry,
    HistoryLog,
    HistoryStore,
)
from .numeric import (
    format_for_display,
    round_result,
)
from .dispatcher import (
    Action,
    Command,
    InputDispatcher,
)

__all__ = [
    # Engine
    "CalculatorEngine",
    "CalculatorError",
    "DivisionByZeroError",
    "EngineState",
    "ErrorPolicy",
    "NegativeSquareRootError",
    "Operation",
    "ScientificFunction",
    # History
    "HistoryEntry",
    "HistoryLog",
    "HistoryStore",
    # Numbers
    "format_for_display",
    "round_result",
    # Input
    "Action",
    "Command",
    "InputDispatcher",
]
