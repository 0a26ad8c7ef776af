"""Durable key-value storage for calckit.

A single JSON document under ``.calckit/storage.json`` holds everything that
must survive between runs (history, theme, keypad mode, sound).
"""

import json
from pathlib import Path
from typing import Any, List, Optional

from rich.console import Console


console = Console()

DATA_DIR = ".calckit"
STORAGE_FILE = "storage.json"


class KeyValueStore:
    """JSON-file backed key-value store."""

    def __init__(self, project_path: str):
        """Initialize with project path."""
        self.project_path = Path(project_path).resolve()
        self.storage_file = self.project_path / DATA_DIR / STORAGE_FILE
        self._data: Optional[dict] = None

    def _load(self) -> dict:
        """Load the document, caching it."""
        if self._data is not None:
            return self._data

        if not self.storage_file.exists():
            self._data = {}
            return self._data

        try:
            with open(self.storage_file) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            console.print(
                f"[yellow]Warning: ignoring unreadable {self.storage_file}: {e}[/yellow]"
            )
            data = {}

        self._data = data if isinstance(data, dict) else {}
        return self._data

    def _save(self):
        """Write the document back."""
        if self._data is None:
            return

        self.storage_file.parent.mkdir(parents=True, exist_ok=True)

        with open(self.storage_file, "w") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)

    # --- Public Methods ---

    def get(self, key: str, default: Any = None) -> Any:
        """Get a stored value."""
        return self._load().get(key, default)

    def set(self, key: str, value: Any):
        """Store a value."""
        self._load()[key] = value
        self._save()

    def remove(self, key: str):
        """Remove a key if present."""
        data = self._load()
        if key in data:
            del data[key]
            self._save()

    def keys(self) -> List[str]:
        """List stored keys."""
        return sorted(self._load().keys())

    def __contains__(self, key: str) -> bool:
        return key in self._load()


def get_store(project_path: str = ".") -> KeyValueStore:
    """Get a key-value store instance."""
    return KeyValueStore(project_path)
