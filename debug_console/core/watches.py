"""Named watch expressions re-evaluated on every rendered frame."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from .output import format_value

LOGGER = logging.getLogger(__name__)

# Display text for a watch whose evaluator raised during a frame
WATCH_ERROR_TEXT = "<error>"


class WatchResult(Enum):
    """Outcome of a watch registration or removal."""

    ADDED = "added"
    REMOVED = "removed"
    DUPLICATE_NAME = "duplicate name"
    NOT_FOUND = "not found"
    NOT_CALLABLE = "not callable"

    @property
    def ok(self) -> bool:
        return self in (WatchResult.ADDED, WatchResult.REMOVED)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class WatchEntry:
    """A watch expression: a unique name and a zero-argument evaluator."""

    name: str
    evaluator: Callable[[], Any]

    def render(self) -> str:
        """Evaluate and format the current value, or the error sentinel."""
        try:
            return format_value(self.evaluator())
        except (Exception, SystemExit):
            LOGGER.debug(f"Watch {self.name!r} failed to evaluate", exc_info=True)
            return WATCH_ERROR_TEXT


class WatchRegistry:
    """Ordered registry of watch expressions. Insertion order is render order."""

    def __init__(self) -> None:
        self._entries: List[WatchEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return self.get(name) is not None

    def get(self, name: object) -> Optional[WatchEntry]:
        for entry in self._entries:
            if entry.name == name:
                return entry
        return None

    def names(self) -> List[str]:
        return [entry.name for entry in self._entries]

    def watch(self, name: str, evaluator: Callable[[], Any]) -> WatchResult:
        """Register a new watch at the end of the render order.

        Returns:
            ADDED, DUPLICATE_NAME if the name is taken or NOT_CALLABLE if
            the evaluator cannot be called (registry unchanged in both cases)
        """
        if name in self:
            return WatchResult.DUPLICATE_NAME
        if not callable(evaluator):
            return WatchResult.NOT_CALLABLE
        self._entries.append(WatchEntry(name=name, evaluator=evaluator))
        LOGGER.debug(f"Watch added: {name}")
        return WatchResult.ADDED

    def unwatch(self, name: str) -> WatchResult:
        """Remove a watch, preserving the order of the others.

        Returns:
            REMOVED, or NOT_FOUND if no watch has that name (registry unchanged)
        """
        entry = self.get(name)
        if entry is None:
            return WatchResult.NOT_FOUND
        self._entries.remove(entry)
        LOGGER.debug(f"Watch removed: {name}")
        return WatchResult.REMOVED

    def clear(self) -> None:
        self._entries.clear()

    def render_frame(self) -> List[Tuple[str, str]]:
        """Evaluate every watch for the current frame.

        A failing evaluator shows WATCH_ERROR_TEXT; the remaining watches are
        still evaluated.
        """
        return [(entry.name, entry.render()) for entry in self._entries]
