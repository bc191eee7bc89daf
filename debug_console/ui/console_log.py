"""Host log sink that writes console records into a RichLog widget."""

from typing import Dict, List, Optional

from rich.text import Text
from textual.widgets import RichLog

from ..core.output import OutputRecord, OutputStyle
from .theme import DEFAULT_OUTPUT_STYLES


class ConsoleLogSink:
    """Displays output records in a RichLog and keeps a plain-text transcript.

    The transcript backs the copy-to-clipboard action and is bounded by
    ``max_records``.
    """

    def __init__(self, max_records: int = 1000):
        self.widget: Optional[RichLog] = None
        self.styles: Dict[OutputStyle, str] = dict(DEFAULT_OUTPUT_STYLES)
        self.max_records = max_records
        self.records: List[OutputRecord] = []

    def attach(self, widget: RichLog) -> None:
        """Start writing to ``widget``, replaying records logged before it existed."""
        self.widget = widget
        for record in self.records:
            self._write(record)

    def log(self, text: str, style: OutputStyle = OutputStyle.NORMAL) -> None:
        record = OutputRecord(text=text, style=style)
        self.records.append(record)
        if len(self.records) > self.max_records:
            del self.records[0]
        if self.widget is not None:
            self._write(record)

    def _write(self, record: OutputRecord) -> None:
        self.widget.write(Text(record.text, style=self.styles.get(record.style, "")))

    def clear(self) -> None:
        self.records.clear()
        if self.widget is not None:
            self.widget.clear()

    def transcript(self) -> str:
        """All retained records as plain text, one per line."""
        return "\n".join(record.text for record in self.records)
