"""Calculator session: the engine wired to its collaborators.

Builds, for one project directory:
- KeyValueStore persistence and the HistoryStore on top of it
- Preferences (theme, keypad mode, sound)
- The CalculatorEngine configured from CalcConfig
- The DisplayRenderer and InputDispatcher
"""

from typing import Iterable, List, Optional

from rich.console import Console

from .config import CalcConfig, load_config
from .dispatcher import InputDispatcher, parse_tokens
from .display import DisplayRenderer
from .engine import CalculatorEngine, CalculatorError
from .history import HistoryEntry, HistoryStore
from .preferences import Preferences
from .storage import KeyValueStore


class CalculatorSession:
    """One calculator with persistent history and preferences."""

    def __init__(
        self,
        project_path: str = ".",
        config: Optional[CalcConfig] = None,
        out: Optional[Console] = None,
        echo: bool = True,
    ):
        self.project_path = project_path
        self.config = config or load_config(project_path)
        self.store = KeyValueStore(project_path)
        self.preferences = Preferences(self.store)
        self.history = HistoryStore(self.store, capacity=self.config.history_capacity)
        self.engine = CalculatorEngine(
            history=self.history,
            error_policy=self.config.error_policy,
            thousands_separator=self.config.thousands_separator,
        )
        self.renderer = DisplayRenderer(
            theme=self.preferences.theme, out=out, echo=echo
        )
        self.dispatcher = InputDispatcher(
            self.engine, renderer=self.renderer, on_button=self._play_sound
        )

    # --- Input ---

    def press_key(self, key: str) -> bool:
        return self.dispatcher.press_key(key)

    def press_button(self, name: str) -> bool:
        return self.dispatcher.press_button(name)

    def feed(self, tokens: Iterable[str]) -> List[CalculatorError]:
        """Parse and apply command-line tokens, returning reported errors.

        Raises:
            ValueError: If a token is not a known key or button.
        """
        return self.dispatcher.dispatch_all(parse_tokens(tokens))

    def display(self):
        """Current (current, previous-with-operator) display values."""
        return self.engine.display_values()

    # --- History ---

    def recent_history(
        self, count: Optional[int] = None, term: Optional[str] = None
    ) -> List[HistoryEntry]:
        """Most recent entries, optionally only those matching ``term``."""
        if count is None:
            count = self.config.history_shown
        if count <= 0:
            return []
        entries = self.history.search(term) if term else self.history.get_last(count)
        return entries[:count]

    def load_from_history(self, index: int) -> Optional[HistoryEntry]:
        """Recall entry ``index`` (0 = most recent) into the display."""
        entry = self.history.get_by_index(index)
        if entry is None:
            return None
        self._play_sound()
        self.engine.load_result(entry.result)
        self.dispatcher.refresh()
        return entry

    def clear_history(self):
        self.history.clear()

    # --- Preferences ---

    def toggle_theme(self, theme: Optional[str] = None) -> str:
        self._play_sound()
        if theme is None:
            theme = self.preferences.toggle_theme()
        else:
            self.preferences.set_theme(theme)
        self.renderer.set_theme(theme)
        return theme

    def toggle_mode(self, mode: Optional[str] = None) -> str:
        self._play_sound()
        if mode is None:
            return self.preferences.toggle_mode()
        return self.preferences.set_mode(mode)

    def toggle_sound(self, enabled: Optional[bool] = None) -> bool:
        return self.preferences.set_sound(enabled)

    def _play_sound(self):
        if self.preferences.sound_enabled:
            self.renderer.click()


def get_session(
    project_path: str = ".", out: Optional[Console] = None, echo: bool = True
) -> CalculatorSession:
    """Get a calculator session for a project path."""
    return CalculatorSession(project_path, out=out, echo=echo)
