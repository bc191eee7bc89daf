"""Output records, value formatting and the line-buffering output sink."""

import io
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Protocol

LOGGER = logging.getLogger(__name__)


class OutputStyle(Enum):
    """Presentation style of a console output line."""

    NORMAL = "normal"  # Evaluation results and captured stdout
    ECHO = "echo"  # The submitted line, repeated back
    ERROR = "error"  # Evaluation failures and stderr
    INFO = "info"  # Welcome text, completion listings, hints


@dataclass(frozen=True)
class OutputRecord:
    """One line of console output. Consumed immediately by the log sink."""

    text: str
    style: OutputStyle = OutputStyle.NORMAL


class LogSink(Protocol):
    """Host capability that displays console output lines."""

    def log(self, text: str, style: OutputStyle = OutputStyle.NORMAL) -> None:
        ...


_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
}


def quote_string(value: str) -> str:
    """Render a string as a double-quoted literal that parses back to itself."""
    escaped = "".join(_STRING_ESCAPES.get(char, char) for char in value)
    return f'"{escaped}"'


def format_value(value: Any) -> str:
    """Format an evaluation result for display.

    Args:
        value: Result of an evaluation or a watch evaluator

    Returns:
        "null" for None, a quoted literal for strings, str() for anything else
    """
    if value is None:
        return "null"
    if isinstance(value, str):
        return quote_string(value)
    return str(value)


class OutputSink(io.TextIOBase):
    """Text stream that emits one log record per completed line.

    Characters accumulate until a newline arrives; the pending text (without
    the newline) is then sent to the log sink with this stream's style. While
    ``intercept`` is set every write is dropped, but text already buffered
    stays in place and is completed by later writes.
    """

    def __init__(self, sink: LogSink, style: OutputStyle = OutputStyle.NORMAL):
        super().__init__()
        self.sink = sink
        self.style = style
        self.intercept = False
        self._buffer: List[str] = []

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:
        if self.intercept:
            return len(text)

        for char in text:
            if char == "\n":
                self._emit()
            else:
                self._buffer.append(char)
        return len(text)

    def _emit(self) -> None:
        line = "".join(self._buffer)
        self._buffer.clear()
        self.sink.log(line, self.style)

    @property
    def pending(self) -> str:
        """Text received since the last newline."""
        return "".join(self._buffer)
