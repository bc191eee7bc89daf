"""Interactive console session: capture mode, key dispatch and evaluation."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from .completion import CompletionEngine
from .evaluation import (
    EvaluationEngine,
    EvaluationError,
    UnresolvedExpression,
    error_message,
)
from .history import HistoryManager
from .output import LogSink, OutputStyle, format_value
from .watches import WatchRegistry, WatchResult

LOGGER = logging.getLogger(__name__)

DEFAULT_PROMPT = "py> "
DEFAULT_WELCOME = (
    "Welcome to the Python interactive prompt. "
    "Ctrl-C to clear line and Ctrl-D to exit."
)
DEFAULT_REPEAT_PREFIX = "eval "


class LineEditor(Protocol):
    """Host capability giving access to the single-line edit buffer."""

    def get_text(self) -> str:
        ...

    def set_text(self, text: str) -> None:
        ...

    def get_caret(self) -> int:
        ...

    def set_caret(self, caret: int) -> None:
        ...


@dataclass(frozen=True)
class ConsoleKeys:
    """Key names (Textual notation) the session reacts to while capturing."""

    commit: str = "enter"
    cancel: str = "ctrl+c"
    exit: str = "ctrl+d"
    history_previous: str = "up"
    history_next: str = "down"
    complete: str = "tab"


class ConsoleSession:
    """Owns capture mode and routes keystrokes and lines through the console.

    While capturing, keys from the host line editor are classified by
    ``handle_key``: commit, cancel, exit, history recall and completion are
    handled here, everything else is left to the host's default editing.
    """

    def __init__(
        self,
        editor: LineEditor,
        engine: EvaluationEngine,
        sink: LogSink,
        history: Optional[HistoryManager] = None,
        watches: Optional[WatchRegistry] = None,
        keys: Optional[ConsoleKeys] = None,
        prompt: str = DEFAULT_PROMPT,
        welcome: str = DEFAULT_WELCOME,
        repeat_prefix: str = DEFAULT_REPEAT_PREFIX,
        history_source: Optional[Callable[[], Optional[str]]] = None,
        on_cancel: Optional[Callable[[], None]] = None,
    ):
        """Initialize the session.

        Args:
            editor: Host line editor the session reads and writes while capturing
            engine: Evaluation engine for submitted lines and completions
            sink: Host log sink for echo, result, error and info records
            history: Command history (a fresh one by default)
            watches: Watch registry exposed through the ``watch`` helpers
            keys: Key names for the console actions
            prompt: Prompt shown while capturing
            welcome: Message logged each time capture starts
            repeat_prefix: Host command prefix stripped by the repeat-last shorthand
            history_source: Returns the host's most recent command line, if any
            on_cancel: Called after the cancel combination clears the line
        """
        self.editor = editor
        self.engine = engine
        self.sink = sink
        self.history = history if history is not None else HistoryManager()
        self.watches = watches if watches is not None else WatchRegistry()
        self.completion = CompletionEngine(engine, sink)
        self.keys = keys or ConsoleKeys()
        self.prompt = prompt
        self.welcome = welcome
        self.repeat_prefix = repeat_prefix
        self.history_source = history_source
        self.on_cancel = on_cancel

        self.capturing = False
        self.saved_line = ""

    # Capture mode

    def start_capture(self) -> None:
        """Enter capture mode, restoring the line left behind on exit."""
        self.capturing = True
        self.set_text(self.saved_line)
        self.sink.log(self.welcome, OutputStyle.INFO)
        LOGGER.debug("Console capture started")

    def stop_capture(self) -> None:
        """Leave capture mode, keeping the current line for next time."""
        self.saved_line = self.pop_text()
        self.capturing = False
        LOGGER.debug("Console capture stopped")

    def resolve_prompt(self, default: str) -> str:
        """Prompt the host should draw this frame."""
        return self.prompt if self.capturing else default

    # Line editor access

    def pop_text(self) -> str:
        """Return the whole buffer and leave it empty."""
        text = self.editor.get_text()
        self.editor.set_text("")
        self.editor.set_caret(0)
        return text

    def set_text(self, text: str) -> None:
        """Replace the buffer and put the caret at its end."""
        self.editor.set_text(text)
        self.editor.set_caret(len(text))

    # Key handling

    def handle_key(self, key: str) -> bool:
        """Handle a keystroke from the host.

        Returns:
            True if the console consumed the key, False to let the host
            apply its default handling
        """
        if not self.capturing:
            return False

        keys = self.keys
        if key == keys.commit:
            self.commit()
        elif key == keys.cancel:
            self.pop_text()
            self.handle_cancel()
        elif key == keys.exit:
            self.stop_capture()
        elif key == keys.history_previous:
            self.set_text(self.history.navigate(-1))
        elif key == keys.history_next:
            self.set_text(self.history.navigate(1))
        elif key == keys.complete:
            self.complete()
        else:
            return False
        return True

    def commit(self) -> None:
        """Evaluate the buffer and record it in the history."""
        line = self.pop_text()
        try:
            self.handle_line(line)
        finally:
            self.history.commit(line)

    def handle_cancel(self) -> None:
        if self.on_cancel is not None:
            self.on_cancel()

    def complete(self) -> None:
        """Expand the text left of the caret, keeping the text after it."""
        text = self.editor.get_text()
        caret = self.editor.get_caret()
        prefix, suffix = text[:caret], text[caret:]

        expanded = self.completion.expand(prefix)
        self.editor.set_text(expanded + suffix)
        self.editor.set_caret(len(expanded))

    # Evaluation

    def handle_line(self, line: str) -> None:
        """Echo, evaluate and print the result of one line."""
        self.sink.log(line, OutputStyle.ECHO)
        try:
            value = self.engine.evaluate(line)
        except UnresolvedExpression:
            return
        except EvaluationError as e:
            self.sink.log(str(e), OutputStyle.ERROR)
            return
        try:
            text = format_value(value)
        except (Exception, SystemExit) as e:
            LOGGER.debug(f"Formatting the result of {line!r} failed", exc_info=True)
            self.sink.log(error_message(e), OutputStyle.ERROR)
            return
        self.sink.log(text, OutputStyle.NORMAL)

    def evaluate_immediate(self, text: str = "") -> None:
        """Evaluate a line outside capture mode.

        With no text, the previous host command is reused when it starts
        with ``repeat_prefix`` (e.g. ``eval 1 + 1``).
        """
        line = text.strip()
        if not line:
            line = self._repeat_line() or ""
        if not line:
            self.sink.log("Nothing to repeat", OutputStyle.INFO)
            return
        self.handle_line(line)

    def _repeat_line(self) -> Optional[str]:
        if self.history_source is None:
            return None
        previous = self.history_source()
        if not previous or not previous.startswith(self.repeat_prefix):
            return None
        return previous[len(self.repeat_prefix):].strip() or None

    # Helpers available to evaluated code

    def install_bindings(self) -> None:
        """Expose ``log``, ``watch`` and ``unwatch`` to evaluated code.

        The watch helpers report failures through the log and return None,
        so a call typed at the prompt prints its outcome once.
        """

        def watch(name: str, evaluator: Callable[[], Any]) -> None:
            self.watch(name, evaluator)

        def unwatch(name: str) -> None:
            self.unwatch(name)

        self.engine.bind("log", self.log)
        self.engine.bind("watch", watch)
        self.engine.bind("unwatch", unwatch)

    def log(self, *values: Any) -> None:
        """Print values the way evaluation results are printed, space-joined."""
        self.sink.log(" ".join(format_value(value) for value in values), OutputStyle.NORMAL)

    def watch(self, name: str, evaluator: Callable[[], Any]) -> WatchResult:
        result = self.watches.watch(name, evaluator)
        if not result.ok:
            self.sink.log(f"Cannot watch {name!r}: {result}", OutputStyle.ERROR)
        return result

    def unwatch(self, name: str) -> WatchResult:
        result = self.watches.unwatch(name)
        if not result.ok:
            self.sink.log(f"Cannot unwatch {name!r}: {result}", OutputStyle.ERROR)
        return result
