"""User preferences: theme, keypad mode and key sounds.

Each preference is persisted under its own key of the key-value store.
"""

from typing import Optional

from .storage import KeyValueStore


THEME_KEY = "calculatorTheme"
MODE_KEY = "calculatorMode"
SOUND_KEY = "calculatorSound"

THEMES = ("dark", "light")
MODES = ("basic", "scientific")


class Preferences:
    """Theme, keypad mode and sound toggles."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    # --- Theme ---

    @property
    def theme(self) -> str:
        value = self.store.get(THEME_KEY, "dark")
        return value if value in THEMES else "dark"

    def set_theme(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme!r}")
        self.store.set(THEME_KEY, theme)
        return theme

    def toggle_theme(self) -> str:
        return self.set_theme("light" if self.theme == "dark" else "dark")

    # --- Mode ---

    @property
    def mode(self) -> str:
        value = self.store.get(MODE_KEY, "basic")
        return value if value in MODES else "basic"

    @property
    def is_scientific(self) -> bool:
        return self.mode == "scientific"

    def set_mode(self, mode: str) -> str:
        if mode not in MODES:
            raise ValueError(f"Unknown mode: {mode!r}")
        self.store.set(MODE_KEY, mode)
        return mode

    def toggle_mode(self) -> str:
        return self.set_mode("basic" if self.is_scientific else "scientific")

    # --- Sound ---

    @property
    def sound_enabled(self) -> bool:
        return bool(self.store.get(SOUND_KEY, True))

    def set_sound(self, enabled: Optional[bool] = None) -> bool:
        """Set sound on/off; None toggles."""
        if enabled is None:
            enabled = not self.sound_enabled
        self.store.set(SOUND_KEY, bool(enabled))
        return bool(enabled)
