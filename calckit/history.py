"""Calculation history for calckit.

Keeps completed computations most-recent-first in a bounded log:
- Append evicts the oldest entry beyond capacity
- Optional persistence through the key-value store
- Lookup, search and recall support for the history panel
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from .numeric import number_to_string, round_result
from .storage import KeyValueStore


HISTORY_KEY = "calculatorHistory"
DEFAULT_CAPACITY = 50


@dataclass(frozen=True)
class HistoryEntry:
    """A completed computation."""

    expression: str
    result: float
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "expression": self.expression,
            "result": self.result,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryEntry":
        """Build from stored data; a missing or unreadable result becomes NaN."""
        try:
            result = float(data.get("result"))
        except (TypeError, ValueError):
            result = float("nan")
        return cls(
            expression=data.get("expression", ""),
            result=result,
            timestamp=data.get("timestamp", ""),
        )

    @classmethod
    def create(cls, expression: str, result: float) -> "HistoryEntry":
        """Build an entry with a rounded result, stamped with local time."""
        return cls(
            expression=expression,
            result=round_result(result),
            timestamp=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        )

    @property
    def result_text(self) -> str:
        return number_to_string(self.result)

    def __str__(self) -> str:
        return f"{self.expression} = {self.result_text}"


class HistoryLog:
    """In-memory bounded history, most recent first."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError(f"History capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries: List[HistoryEntry] = []

    def load(self) -> List[HistoryEntry]:
        """Return all entries, most recent first."""
        return list(self._entries)

    def append(self, entry: HistoryEntry) -> None:
        """Insert an entry at the front, evicting the oldest beyond capacity."""
        self._entries.insert(0, entry)
        if len(self._entries) > self.capacity:
            del self._entries[self.capacity:]
        self._changed()

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()
        self._changed()

    def get_last(self, count: int = 10) -> List[HistoryEntry]:
        """Get the N most recent entries."""
        if count <= 0:
            return []
        return self._entries[:count]

    def get_by_index(self, index: int) -> Optional[HistoryEntry]:
        """Get an entry by position (0 = most recent)."""
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def search(self, term: str) -> List[HistoryEntry]:
        """Entries whose expression contains term."""
        return [e for e in self._entries if term in e.expression]

    @property
    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _changed(self) -> None:
        """Hook for subclasses that persist the log."""


class HistoryStore(HistoryLog):
    """History persisted under a fixed key of a KeyValueStore."""

    def __init__(self, store: KeyValueStore, capacity: int = DEFAULT_CAPACITY):
        super().__init__(capacity)
        self.store = store
        raw = store.get(HISTORY_KEY) or []
        self._entries = [
            HistoryEntry.from_dict(item) for item in raw if isinstance(item, dict)
        ][:capacity]

    def _changed(self) -> None:
        if self._entries:
            self.store.set(HISTORY_KEY, [e.to_dict() for e in self._entries])
        else:
            self.store.remove(HISTORY_KEY)
