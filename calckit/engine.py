"""Calculator engine for calckit.

Holds the calculator's input state and evaluates one step at a time:
- Operand entry (digits, decimal point, backspace)
- Left-to-right operator chaining (no precedence)
- Percentage and scientific functions
- Rounding to 8 decimal places and display formatting
"""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from .history import HistoryEntry
from .numeric import (
    format_for_display,
    number_to_string,
    parse_operand,
    round_result,
)


DIGITS = "0123456789"
DECIMAL_POINT = "."


class CalculatorError(Exception):
    """Base class for user-visible calculator errors."""


class DivisionByZeroError(CalculatorError, ZeroDivisionError):
    """Raised when the pending operation divides by zero."""

    def __init__(self, message: str = "Cannot divide by zero!"):
        super().__init__(message)


class NegativeSquareRootError(CalculatorError, ValueError):
    """Raised when taking the square root of a negative number."""

    def __init__(self, message: str = "Cannot calculate square root of negative number!"):
        super().__init__(message)


class Operation(Enum):
    """Binary arithmetic operations, valued by their display symbol."""

    ADD = "+"
    SUBTRACT = "−"
    MULTIPLY = "×"
    DIVIDE = "÷"

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def parse(cls, token: str) -> "Operation":
        """Resolve an operator from its symbol, keyboard key or name."""
        aliases = {
            "+": cls.ADD,
            "add": cls.ADD,
            "−": cls.SUBTRACT,
            "-": cls.SUBTRACT,
            "subtract": cls.SUBTRACT,
            "×": cls.MULTIPLY,
            "*": cls.MULTIPLY,
            "x": cls.MULTIPLY,
            "multiply": cls.MULTIPLY,
            "÷": cls.DIVIDE,
            "/": cls.DIVIDE,
            "divide": cls.DIVIDE,
        }
        try:
            return aliases[token.strip().lower()]
        except KeyError:
            raise ValueError(f"Unknown operation: {token!r}") from None


class ScientificFunction(Enum):
    """Single-operand functions and constants of the scientific keypad."""

    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    LOG = "log"
    LN = "ln"
    SQRT = "sqrt"
    SQUARE = "square"
    PI = "pi"
    E = "e"

    @property
    def is_constant(self) -> bool:
        return self in (ScientificFunction.PI, ScientificFunction.E)

    @classmethod
    def parse(cls, name: str) -> "ScientificFunction":
        """Resolve a function by name ("power" is the keypad's name for square)."""
        key = name.strip().lower()
        if key == "power":
            return cls.SQUARE
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown scientific function: {name!r}") from None


class ErrorPolicy(Enum):
    """How the engine recovers from a calculator error."""

    PRESERVE = "preserve"  # abort, state unchanged
    RESET = "reset"  # clear the engine, then report
    LEGACY = "legacy"  # divide-by-zero clears, negative sqrt preserves


@dataclass
class EngineState:
    """Mutable input state owned by a CalculatorEngine."""

    current_operand: str = "0"
    previous_operand: str = ""
    pending_operation: Optional[Operation] = None
    should_reset_screen: bool = False


class CalculatorEngine:
    """Left-to-right calculator state machine.

    Completed computations are appended to ``history`` (any object with an
    ``append(entry)`` method).
    """

    def __init__(
        self,
        history=None,
        error_policy: ErrorPolicy = ErrorPolicy.PRESERVE,
        thousands_separator: str = ",",
    ):
        self.history = history
        self.error_policy = error_policy
        self.thousands_separator = thousands_separator
        self._state = EngineState()

    # --- State Access ---

    def snapshot(self) -> EngineState:
        """Return a copy of the current state."""
        return replace(self._state)

    @property
    def current_operand(self) -> str:
        return self._state.current_operand

    @property
    def previous_operand(self) -> str:
        return self._state.previous_operand

    @property
    def pending_operation(self) -> Optional[Operation]:
        return self._state.pending_operation

    @property
    def should_reset_screen(self) -> bool:
        return self._state.should_reset_screen

    # --- Input ---

    def clear(self):
        """Reset to the initial state."""
        self._state = EngineState()

    def delete_last_digit(self):
        """Drop the last character of the current operand."""
        current = self._state.current_operand
        if current == "0":
            return
        if len(current) == 1:
            self._state.current_operand = "0"
        else:
            self._state.current_operand = current[:-1]

    def append_digit(self, digit: str):
        """Append a digit or the decimal point to the current operand."""
        if len(digit) != 1 or digit not in DIGITS + DECIMAL_POINT:
            raise ValueError(f"Not a digit: {digit!r}")

        state = self._state
        if state.should_reset_screen:
            state.current_operand = ""
            state.should_reset_screen = False

        if digit == DECIMAL_POINT and DECIMAL_POINT in state.current_operand:
            return

        if state.current_operand == "0" and digit != DECIMAL_POINT:
            state.current_operand = digit
        else:
            state.current_operand += digit

    def choose_operation(self, operation: Operation):
        """Select the pending operation, evaluating any chained one first."""
        if self._state.current_operand == "":
            return
        if self._state.previous_operand != "":
            self.compute()

        state = self._state
        state.pending_operation = operation
        state.previous_operand = state.current_operand
        state.current_operand = ""

    def load_result(self, value: float):
        """Recall a previous result into the current operand."""
        self._state.current_operand = number_to_string(value)
        self._state.should_reset_screen = True

    # --- Evaluation ---

    def compute(self):
        """Apply the pending operation to the two operands."""
        state = self._state
        previous = parse_operand(state.previous_operand)
        current = parse_operand(state.current_operand)

        if current is None or previous is None or state.pending_operation is None:
            return

        operation = state.pending_operation
        if operation is Operation.ADD:
            computation = previous + current
        elif operation is Operation.SUBTRACT:
            computation = previous - current
        elif operation is Operation.MULTIPLY:
            computation = previous * current
        else:
            if current == 0:
                self._fail(DivisionByZeroError())
            computation = previous / current

        expression = (
            f"{state.previous_operand} {operation.symbol} {state.current_operand}"
        )
        self._record(expression, computation)

        state.current_operand = number_to_string(round_result(computation))
        state.pending_operation = None
        state.previous_operand = ""
        state.should_reset_screen = True

    def percentage(self):
        """Divide the current operand by 100."""
        current = parse_operand(self._state.current_operand)
        if current is None:
            return
        self._state.current_operand = number_to_string(round_result(current / 100))
        self._state.should_reset_screen = True

    def scientific_operation(self, function, name: Optional[str] = None):
        """Apply a scientific function (or constant) to the current operand.

        Args:
            function: A ScientificFunction or its name.
            name: Name recorded in the history expression. Defaults to the
                name that was passed in ("power"), else the function's own.
        """
        if not isinstance(function, ScientificFunction):
            name = name or function.strip().lower()
            function = ScientificFunction.parse(function)

        state = self._state
        current = parse_operand(state.current_operand)
        if current is None and not function.is_constant:
            return

        if function is ScientificFunction.SIN:
            result = _trigonometric(current, math.sin)
        elif function is ScientificFunction.COS:
            result = _trigonometric(current, math.cos)
        elif function is ScientificFunction.TAN:
            result = _trigonometric(current, math.tan)
        elif function is ScientificFunction.LOG:
            result = _logarithm(current, math.log10)
        elif function is ScientificFunction.LN:
            result = _logarithm(current, math.log)
        elif function is ScientificFunction.SQRT:
            if current < 0:
                self._fail(NegativeSquareRootError())
            result = math.sqrt(current)
        elif function is ScientificFunction.SQUARE:
            result = _square(current)
        elif function is ScientificFunction.PI:
            result = math.pi
        else:
            result = math.e

        expression = f"{name or function.value}({state.current_operand})"
        self._record(expression, result)

        state.current_operand = number_to_string(round_result(result))
        state.should_reset_screen = True

    # --- Display ---

    def format_for_display(self, text: str) -> str:
        """Format an operand using this engine's thousands separator."""
        return format_for_display(text, self.thousands_separator)

    def display_values(self) -> Tuple[str, str]:
        """Return (current, previous-with-operator) ready for rendering."""
        state = self._state
        current = self.format_for_display(state.current_operand)
        if state.pending_operation is None:
            return current, ""
        previous = self.format_for_display(state.previous_operand)
        return current, f"{previous} {state.pending_operation.symbol}"

    # --- Helpers ---

    def _record(self, expression: str, result: float):
        if self.history is not None:
            self.history.append(HistoryEntry.create(expression, result))

    def _fail(self, error: CalculatorError):
        """Apply the error policy, then raise."""
        if self.error_policy is ErrorPolicy.RESET:
            self.clear()
        elif self.error_policy is ErrorPolicy.LEGACY and isinstance(
            error, DivisionByZeroError
        ):
            self.clear()
        raise error


def _trigonometric(degrees: float, function) -> float:
    if not math.isfinite(degrees):
        return float("nan")
    return function(math.radians(degrees))


def _logarithm(value: float, log) -> float:
    if value > 0:
        return log(value)
    if value == 0:
        return float("-inf")
    return float("nan")


def _square(value: float) -> float:
    try:
        return math.pow(value, 2)
    except OverflowError:
        return float("inf")
