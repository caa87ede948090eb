"""Generation history tracking."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List

DEFAULT_HISTORY_LIMIT = 18


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """A past result and the request that produced it."""

    image: str
    prompt: str
    mode: str  # generate or edit
    created_at: float


class GenerationHistory:
    """Bounded, most-recent-first list of results kept for the session.

    Entries are only ever dropped from the tail when the limit is exceeded;
    selecting an entry does not move it.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self.limit = limit
        self._entries: Deque[HistoryEntry] = deque(maxlen=limit)

    def prepend(self, entry: HistoryEntry) -> None:
        """Insert at the front, evicting the oldest entry once full."""
        self._entries.appendleft(entry)

    def select(self, entry: HistoryEntry) -> HistoryEntry:
        """Return the entry to restore as the displayed result."""
        return entry

    def get(self, index: int) -> HistoryEntry:
        """Return the entry at a display position (0 is newest)."""
        if index < 0 or index >= len(self._entries):
            raise IndexError(f"No history entry at position {index}")
        return self._entries[index]

    def is_empty(self) -> bool:
        return not self._entries

    def entries(self) -> List[HistoryEntry]:
        """Return a snapshot of the entries, newest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))
