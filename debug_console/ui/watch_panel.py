"""Overlay panel that draws the watch values of the current frame."""

from typing import Iterable, Tuple

from rich.text import Text
from textual.widgets import Static


class WatchPanel(Static):
    """Draws (name, value) pairs in order at a fixed anchor.

    The anchor is applied as a CSS offset; ``line_spacing`` blank lines
    separate consecutive entries.
    """

    DEFAULT_CSS = """
    WatchPanel {
        layer: overlay;
        dock: top;
        width: auto;
        height: auto;
        max-width: 60;
        padding: 0 1;
        background: $panel 80%;
    }

    WatchPanel.-empty {
        display: none;
    }
    """

    def __init__(
        self,
        offset: Tuple[int, int] = (2, 1),
        line_spacing: int = 0,
        **kwargs,
    ):
        super().__init__("", **kwargs)
        self.anchor = offset
        self.line_spacing = line_spacing
        self.add_class("-empty")

    def on_mount(self) -> None:
        x, y = self.anchor
        self.styles.offset = (x, y)

    def render_lines(self, pairs: Iterable[Tuple[str, str]]) -> Text:
        """Build the panel text for one frame."""
        text = Text()
        gap = "\n" * (self.line_spacing + 1)
        for index, (name, value) in enumerate(pairs):
            if index:
                text.append(gap)
            text.append(f"{name}: ", style="bold")
            text.append(value)
        return text

    def update_frame(self, pairs: Iterable[Tuple[str, str]]) -> None:
        """Redraw the panel with this frame's watch values."""
        pairs = list(pairs)
        self.set_class(not pairs, "-empty")
        self.update(self.render_lines(pairs))
