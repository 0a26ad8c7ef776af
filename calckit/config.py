"""Configuration for calckit.

Settings live in ``.calckit/config.json`` (or ``.calckit/config.toml``):
- History capacity, how many entries to show, clear confirmation
- Thousands separator used on the display
- Error recovery policy
"""

import json
from dataclasses import dataclass, asdict
from pathlib import Path

import toml

from .engine import ErrorPolicy
from .history import DEFAULT_CAPACITY
from .storage import DATA_DIR


CONFIG_JSON = "config.json"
CONFIG_TOML = "config.toml"


@dataclass
class CalcConfig:
    """Calculator configuration options."""

    history_capacity: int = DEFAULT_CAPACITY
    history_shown: int = 10
    confirm_clear_history: bool = True
    thousands_separator: str = ","
    error_policy: ErrorPolicy = ErrorPolicy.PRESERVE

    def __post_init__(self):
        if not isinstance(self.error_policy, ErrorPolicy):
            try:
                self.error_policy = ErrorPolicy(self.error_policy)
            except ValueError:
                choices = ", ".join(p.value for p in ErrorPolicy)
                raise ValueError(
                    f"Unknown error policy {self.error_policy!r} (expected one of: {choices})"
                ) from None
        if self.history_capacity <= 0:
            raise ValueError("history.capacity must be a positive integer")
        if self.history_shown < 0:
            raise ValueError("history.shown must not be negative")

    def to_dict(self) -> dict:
        """Nested form, as written to config.json."""
        return {
            "history": {
                "capacity": self.history_capacity,
                "shown": self.history_shown,
                "confirm_clear": self.confirm_clear_history,
            },
            "display": {"thousands_separator": self.thousands_separator},
            "errors": {"policy": self.error_policy.value},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CalcConfig":
        """Build from the nested form.

        Raises:
            ValueError: If a section is not a table or a value has the wrong type.
        """
        history = _section(data, "history")
        display = _section(data, "display")
        errors = _section(data, "errors")
        defaults = asdict(cls())
        return cls(
            history_capacity=_integer(
                history, "capacity", defaults["history_capacity"]
            ),
            history_shown=_integer(history, "shown", defaults["history_shown"]),
            confirm_clear_history=bool(
                history.get("confirm_clear", defaults["confirm_clear_history"])
            ),
            thousands_separator=str(
                display.get("thousands_separator", defaults["thousands_separator"])
            ),
            error_policy=errors.get("policy", ErrorPolicy.PRESERVE.value),
        )


def _section(data: dict, name: str) -> dict:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ValueError(f"[{name}] must be a table, got {type(section).__name__}")
    return section


def _integer(section: dict, key: str, default: int) -> int:
    value = section.get(key, default)
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be an integer, got {value!r}") from None


def config_paths(project_path: str):
    """Return the (toml, json) config file locations."""
    data_dir = Path(project_path) / DATA_DIR
    return data_dir / CONFIG_TOML, data_dir / CONFIG_JSON


def load_config(project_path: str) -> CalcConfig:
    """Load configuration from the project's data directory.

    ``config.toml`` wins over ``config.json`` when both exist. Unreadable
    files fall back to defaults; readable files with invalid values raise
    ValueError.

    Args:
        project_path: Path to project root.

    Returns:
        CalcConfig with settings from the config file or defaults.
    """
    toml_file, json_file = config_paths(project_path)

    data = None
    if toml_file.exists():
        try:
            data = toml.load(toml_file)
        except (toml.TomlDecodeError, IOError):
            pass
    elif json_file.exists():
        try:
            with open(json_file) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError):
            pass

    if not isinstance(data, dict):
        return CalcConfig()
    return CalcConfig.from_dict(data)


def save_config(project_path: str, config: CalcConfig) -> Path:
    """Write configuration as config.json and return its path."""
    _, json_file = config_paths(project_path)
    json_file.parent.mkdir(parents=True, exist_ok=True)
    with open(json_file, "w") as f:
        json.dump(config.to_dict(), f, indent=2)
    return json_file
