"""Command history with Up/Down recall."""

from typing import List, Optional, Tuple


class HistoryManager:
    """Ordered list of submitted lines plus a recall cursor.

    ``cursor == len(entries)`` means the live (uncommitted) line is shown;
    any lower value points at a past entry.
    """

    def __init__(self) -> None:
        self._entries: List[str] = []
        self._cursor = 0

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._entries)

    def latest(self) -> Optional[str]:
        """Return the most recently committed line, if any."""
        return self._entries[-1] if self._entries else None

    def commit(self, line: str) -> None:
        """Record a submitted line and move the cursor back to the live line.

        Re-submitting the entry currently being recalled does not duplicate
        it. Submitting from the live position always appends.
        """
        at_live = self._cursor == len(self._entries)
        if at_live or self._entries[self._cursor] != line:
            self._entries.append(line)
        self._cursor = len(self._entries)

    def navigate(self, direction: int) -> str:
        """Move the cursor and return the entry now under it.

        Args:
            direction: -1 for older, +1 for newer

        Returns:
            The recalled entry, or "" when the cursor is back at the live line
        """
        self._cursor = max(0, min(self._cursor + direction, len(self._entries)))
        if self._cursor == len(self._entries):
            return ""
        return self._entries[self._cursor]
