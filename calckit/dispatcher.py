"""Input dispatch for calckit.

Maps key presses and keypad buttons to explicit commands and applies them
to a CalculatorEngine:
- Keyboard bindings (digits, operators, Enter, Backspace, Escape, %)
- Keypad buttons of the basic and scientific layouts
- Token parsing for command-line input ("5+3", "sqrt", "=")
- Error notification and display refresh after every command
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Union

from .engine import (
    CalculatorEngine,
    CalculatorError,
    Operation,
    ScientificFunction,
)


class Action(Enum):
    """Everything the engine can be asked to do."""

    DIGIT = "digit"
    DECIMAL = "decimal"
    CLEAR = "clear"
    DELETE = "delete"
    EQUALS = "equals"
    OPERATION = "operation"
    PERCENTAGE = "percentage"
    SCIENTIFIC = "scientific"


@dataclass(frozen=True)
class Command:
    """An action plus its argument (digit, operation or function).

    ``label`` is the keypad name recorded in history when it differs from
    the function name ("power"). ``button`` marks a keypad button press,
    which plays the key sound; keyboard input does not.
    """

    action: Action
    argument: Optional[Union[str, Operation, ScientificFunction]] = None
    label: Optional[str] = field(default=None, compare=False)
    button: bool = field(default=False, compare=False)

    def __str__(self) -> str:
        if self.argument is None:
            return self.action.value
        if isinstance(self.argument, Enum):
            return f"{self.action.value}:{self.argument.value}"
        return f"{self.action.value}:{self.argument}"


def _digit_commands() -> Dict[str, Command]:
    return {d: Command(Action.DIGIT, d) for d in "0123456789"}


KEY_BINDINGS: Dict[str, Command] = {
    **_digit_commands(),
    ".": Command(Action.DECIMAL),
    "Enter": Command(Action.EQUALS),
    "=": Command(Action.EQUALS),
    "Backspace": Command(Action.DELETE),
    "Escape": Command(Action.CLEAR),
    "+": Command(Action.OPERATION, Operation.ADD),
    "-": Command(Action.OPERATION, Operation.SUBTRACT),
    "*": Command(Action.OPERATION, Operation.MULTIPLY),
    "/": Command(Action.OPERATION, Operation.DIVIDE),
    "%": Command(Action.PERCENTAGE),
}

BASIC_BUTTONS: Dict[str, Command] = {
    "clear": Command(Action.CLEAR),
    "delete": Command(Action.DELETE),
    "decimal": Command(Action.DECIMAL),
    "equals": Command(Action.EQUALS),
    "add": Command(Action.OPERATION, Operation.ADD),
    "subtract": Command(Action.OPERATION, Operation.SUBTRACT),
    "multiply": Command(Action.OPERATION, Operation.MULTIPLY),
    "divide": Command(Action.OPERATION, Operation.DIVIDE),
    "percentage": Command(Action.PERCENTAGE),
}

SCIENTIFIC_BUTTONS: Dict[str, Command] = {
    "sin": Command(Action.SCIENTIFIC, ScientificFunction.SIN),
    "cos": Command(Action.SCIENTIFIC, ScientificFunction.COS),
    "tan": Command(Action.SCIENTIFIC, ScientificFunction.TAN),
    "log": Command(Action.SCIENTIFIC, ScientificFunction.LOG),
    "ln": Command(Action.SCIENTIFIC, ScientificFunction.LN),
    "sqrt": Command(Action.SCIENTIFIC, ScientificFunction.SQRT),
    "power": Command(Action.SCIENTIFIC, ScientificFunction.SQUARE, label="power"),
    "pi": Command(Action.SCIENTIFIC, ScientificFunction.PI),
    "e": Command(Action.SCIENTIFIC, ScientificFunction.E),
}

BUTTON_ACTIONS: Dict[str, Command] = {**BASIC_BUTTONS, **SCIENTIFIC_BUTTONS}

# Extra spellings accepted on the command line.
TOKEN_ALIASES: Dict[str, Command] = {
    "square": Command(Action.SCIENTIFIC, ScientificFunction.SQUARE),
    "enter": Command(Action.EQUALS),
    "backspace": Command(Action.DELETE),
    "del": Command(Action.DELETE),
    "escape": Command(Action.CLEAR),
    "esc": Command(Action.CLEAR),
    "c": Command(Action.CLEAR),
    "ac": Command(Action.CLEAR),
    "x": Command(Action.OPERATION, Operation.MULTIPLY),
    "×": Command(Action.OPERATION, Operation.MULTIPLY),
    "÷": Command(Action.OPERATION, Operation.DIVIDE),
    "−": Command(Action.OPERATION, Operation.SUBTRACT),
}


def parse_tokens(tokens: Iterable[str]) -> List[Command]:
    """Turn command-line tokens into commands.

    A token is a button name ("sqrt", "clear"), an alias ("x", "esc") or a
    run of key characters ("12.5+3=") that is split into single keys.
    Button names and single digits count as keypad button presses.

    Raises:
        ValueError: If a token contains an unknown key.
    """
    digit_buttons = _digit_commands()
    commands = []
    for token in tokens:
        token = token.strip()
        if not token:
            continue

        lowered = token.lower()
        if lowered in BUTTON_ACTIONS:
            commands.append(replace(BUTTON_ACTIONS[lowered], button=True))
            continue
        if token in digit_buttons:
            commands.append(replace(digit_buttons[token], button=True))
            continue
        if lowered in TOKEN_ALIASES:
            commands.append(TOKEN_ALIASES[lowered])
            continue
        if token in KEY_BINDINGS:
            commands.append(KEY_BINDINGS[token])
            continue

        for char in token:
            command = KEY_BINDINGS.get(char) or TOKEN_ALIASES.get(char)
            if command is None:
                raise ValueError(f"Unknown key {char!r} in {token!r}")
            commands.append(command)

    return commands


class InputDispatcher:
    """Applies commands to an engine and refreshes the display.

    Args:
        engine: The engine commands are applied to.
        renderer: Optional object with ``render(current, previous)`` and
            ``notify_error(message)``.
        on_button: Optional callable run before every command marked as a
            keypad button press (key sounds).
    """

    def __init__(
        self,
        engine: CalculatorEngine,
        renderer=None,
        on_button: Optional[Callable[[], None]] = None,
    ):
        self.engine = engine
        self.renderer = renderer
        self.on_button = on_button
        self.last_error: Optional[CalculatorError] = None

    def dispatch(self, command: Command) -> bool:
        """Apply one command.

        Calculator errors are reported to the renderer rather than raised.

        Returns:
            True if the command completed, False if it reported an error.
        """
        self.last_error = None
        if command.button and self.on_button is not None:
            self.on_button()
        try:
            self._apply(command)
        except CalculatorError as e:
            self.last_error = e
            if self.renderer is not None:
                self.renderer.notify_error(str(e))

        self.refresh()
        return self.last_error is None

    def dispatch_all(self, commands: Iterable[Command]) -> List[CalculatorError]:
        """Apply commands in order, collecting reported errors."""
        errors = []
        for command in commands:
            if not self.dispatch(command):
                errors.append(self.last_error)
        return errors

    def press_key(self, key: str) -> bool:
        """Handle a key press; unrecognized keys are ignored.

        Returns:
            True if the key is bound to a command.
        """
        command = KEY_BINDINGS.get(key)
        if command is None:
            return False
        self.dispatch(command)
        return True

    def press_button(self, name: str) -> bool:
        """Handle a keypad button (a digit or an action name).

        Returns:
            True if the button exists.
        """
        command = BUTTON_ACTIONS.get(name) or _digit_commands().get(name)
        if command is None:
            return False
        self.dispatch(replace(command, button=True))
        return True

    def refresh(self):
        """Push the current display values to the renderer."""
        if self.renderer is not None:
            self.renderer.render(*self.engine.display_values())

    def _apply(self, command: Command):
        engine = self.engine
        action = command.action

        if action is Action.DIGIT:
            engine.append_digit(command.argument)
        elif action is Action.DECIMAL:
            engine.append_digit(".")
        elif action is Action.CLEAR:
            engine.clear()
        elif action is Action.DELETE:
            engine.delete_last_digit()
        elif action is Action.EQUALS:
            engine.compute()
        elif action is Action.OPERATION:
            engine.choose_operation(command.argument)
        elif action is Action.PERCENTAGE:
            engine.percentage()
        elif action is Action.SCIENTIFIC:
            engine.scientific_operation(command.argument, name=command.label)
        else:
            raise ValueError(f"Unsupported action: {action}")
