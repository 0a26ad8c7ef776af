"""Terminal rendering for calckit.

Draws the calculator with rich:
- The two-line display (previous operand with operator, current operand)
- The history panel
- The basic and scientific keypads
- Error notifications and key clicks
"""

from dataclasses import dataclass
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .history import HistoryEntry


console = Console()


@dataclass(frozen=True)
class Theme:
    """Styles for one colour theme."""

    name: str
    display: str
    previous: str
    border: str
    button: str
    operator: str


THEMES = {
    "dark": Theme(
        name="dark",
        display="bold white on grey11",
        previous="grey62 on grey11",
        border="blue",
        button="white",
        operator="bold cyan",
    ),
    "light": Theme(
        name="light",
        display="bold black on grey93",
        previous="grey42 on grey93",
        border="magenta",
        button="black",
        operator="bold magenta",
    ),
}

BASIC_KEYPAD = [
    ["C", "DEL", "%", "÷"],
    ["7", "8", "9", "×"],
    ["4", "5", "6", "−"],
    ["1", "2", "3", "+"],
    ["0", ".", "="],
]

SCIENTIFIC_KEYPAD = [
    ["sin", "cos", "tan", "log"],
    ["ln", "sqrt", "power", "pi"],
    ["e", "C", "DEL", "="],
]

OPERATOR_LABELS = {"÷", "×", "−", "+", "=", "%"}


class DisplayRenderer:
    """Renders calculator output to a rich console."""

    def __init__(
        self, theme: str = "dark", out: Optional[Console] = None, echo: bool = True
    ):
        self.console = out or console
        self.theme = THEMES.get(theme, THEMES["dark"])
        self.echo = echo
        self.last_frame = ("0", "")

    def set_theme(self, theme: str):
        self.theme = THEMES.get(theme, THEMES["dark"])

    def render(self, current: str, previous: str):
        """Receive already formatted operands, drawing them when echoing."""
        self.last_frame = (current, previous)
        if self.echo:
            self.show()

    def show(self):
        """Draw the most recent display frame."""
        current, previous = self.last_frame

        body = Text(justify="right")
        body.append(f"{previous or ' '}\n", style=self.theme.previous)
        body.append(current or " ", style=self.theme.display)

        self.console.print(
            Panel(body, border_style=self.theme.border, width=36, title="calckit")
        )

    def notify_error(self, message: str):
        """Interruptive error notification."""
        self.console.print(
            Panel(
                f"[bold red]{message}[/bold red]",
                title="Error",
                border_style="red",
                width=36,
            )
        )

    def click(self):
        """Key click."""
        self.console.bell()

    def render_history(self, entries: List[HistoryEntry], title: str = "History"):
        """Draw history entries, most recent first."""
        if not entries:
            self.console.print("[dim]No calculations yet[/dim]")
            return

        table = Table(title=title, border_style=self.theme.border)
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Expression", style=self.theme.button)
        table.add_column("Result", style=self.theme.operator, justify="right")
        table.add_column("When", style="dim")

        for i, entry in enumerate(entries, 1):
            table.add_row(str(i), entry.expression, f"= {entry.result_text}", entry.timestamp)

        self.console.print(table)

    def render_keypad(self, mode: str = "basic"):
        """Draw the keypad layout for a mode."""
        layout = SCIENTIFIC_KEYPAD if mode == "scientific" else BASIC_KEYPAD

        table = Table(
            title=f"{mode.capitalize()} keypad",
            show_header=False,
            border_style=self.theme.border,
        )
        for _ in range(max(len(row) for row in layout)):
            table.add_column(justify="center", width=6)

        for row in layout:
            cells = []
            for label in row:
                style = self.theme.operator if label in OPERATOR_LABELS else self.theme.button
                cells.append(f"[{style}]{label}[/{style}]")
            table.add_row(*cells)

        self.console.print(table)
