"""Host command line that hands keystrokes to the console while capturing."""

from typing import Optional, TYPE_CHECKING

from textual import events
from textual.widgets import Input

if TYPE_CHECKING:
    from ..core.session import ConsoleSession


class ConsoleInput(Input):
    """Single-line input that doubles as the console's line editor.

    Outside capture mode it behaves like a plain Input (Enter submits a host
    command). While the session is capturing, keys the session recognises
    are consumed before Input's own handling and bindings see them.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session: Optional["ConsoleSession"] = None

    # LineEditor capability

    def get_text(self) -> str:
        return self.value

    def set_text(self, text: str) -> None:
        self.value = text

    def get_caret(self) -> int:
        return self.cursor_position

    def set_caret(self, caret: int) -> None:
        self.cursor_position = max(0, min(caret, len(self.value)))

    async def _on_key(self, event: events.Key) -> None:
        """Consume keys the session handles; Input's own handler runs otherwise."""
        if self.session is not None and self.session.handle_key(event.key):
            event.stop()
            event.prevent_default()
