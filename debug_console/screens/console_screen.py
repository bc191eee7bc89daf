"""Main console screen: log, host command line and watch overlay."""

import logging
from typing import Optional

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Footer, Header, Input, Label, RichLog

from ..core.output import OutputStyle
from ..ui.console_input import ConsoleInput
from ..ui.watch_panel import WatchPanel

LOGGER = logging.getLogger(__name__)

# Prompt of the host command line when the console is not capturing
HOST_PROMPT = ">"


class ConsoleScreen(Screen):
    """Screen hosting the command line, the console log and the watch panel.

    A frame timer redraws the watch panel and the prompt; everything else
    reacts to key events on the command line.
    """

    CSS = """
    ConsoleScreen {
        layout: vertical;
        layers: base overlay;
    }

    #console-log {
        height: 1fr;
        width: 100%;
        border: solid $border;
        border-title-align: center;
        background: $surface;
        padding: 0 1;
    }

    #prompt-bar {
        height: auto;
        width: 100%;
    }

    #prompt {
        width: auto;
        height: 3;
        content-align: left middle;
        padding: 0 0 0 1;
        color: $accent;
        text-style: bold;
    }

    #console-input {
        width: 1fr;
    }
    """

    def __init__(self):
        """Initialize the console screen."""
        super().__init__()
        self.console_log: Optional[RichLog] = None
        self.watch_panel: Optional[WatchPanel] = None
        self.prompt_label: Optional[Label] = None
        self.frame_timer: Optional[Timer] = None

    def compose(self) -> ComposeResult:
        """Create child widgets for the console screen."""
        settings = self.app.settings

        yield Header()

        log = RichLog(id="console-log", wrap=True, markup=False)
        log.border_title = "Debug Console"
        yield log

        yield WatchPanel(
            offset=settings.watch_offset,
            line_spacing=settings.watch_line_spacing,
            id="watch-panel",
        )

        with Horizontal(id="prompt-bar"):
            yield Label(HOST_PROMPT, id="prompt")
            yield self.app.editor

        yield Footer()

    def on_mount(self) -> None:
        """Attach the log sink and start the frame timer."""
        self.console_log = self.query_one("#console-log", RichLog)
        self.watch_panel = self.query_one("#watch-panel", WatchPanel)
        self.prompt_label = self.query_one("#prompt", Label)

        self.app.log_sink.attach(self.console_log)
        self.app.editor.session = self.app.session

        self.frame_timer = self.set_interval(
            1 / self.app.settings.frame_rate, self.render_frame
        )
        self.render_frame()
        self.app.editor.focus()

    def render_frame(self) -> None:
        """Per-frame hook: prompt override and watch values."""
        session = self.app.session
        self.prompt_label.update(session.resolve_prompt(HOST_PROMPT))
        self.watch_panel.update_frame(session.watches.render_frame())

    @on(Input.Submitted, "#console-input")
    def on_command_submitted(self, event: Input.Submitted) -> None:
        """Run a host command line when Enter is pressed outside capture mode."""
        line = event.value
        event.input.clear()
        if not line.strip():
            return

        self.app.log_sink.log(f"{HOST_PROMPT} {line}", OutputStyle.NORMAL)
        self.app.host_commands.run(line)
