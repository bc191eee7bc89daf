"""Main application module: a Textual host with an embedded Python console."""

import logging
from typing import Any, Dict, Optional

import pyperclip
from dotenv import load_dotenv
from textual.app import App
from textual.binding import Binding

from .commands import HostCommandRegistry
from .config.settings_manager import (
    ConsoleSettings,
    get_theme_setting,
    load_console_settings,
    set_settings,
)
from .core.evaluation import PythonEvaluator
from .core.output import OutputSink, OutputStyle
from .core.session import ConsoleSession
from .core.watches import WatchRegistry
from .screens.console_screen import ConsoleScreen
from .ui.console_input import ConsoleInput
from .ui.console_log import ConsoleLogSink
from .ui.theme import get_output_styles, get_themes

LOGGER = logging.getLogger(__name__)


def get_console_commands_provider():
    """Lazy load the console command provider.

    Returns:
        ConsoleCommandProvider class
    """
    from .commands import ConsoleCommandProvider

    return ConsoleCommandProvider


class DebugConsoleApp(App):
    """Host application with a command line and an embedded Python console."""

    BINDINGS = [
        Binding("ctrl+l", "clear_console", "Clear"),
        Binding("ctrl+y", "copy_log", "Copy Log"),
        Binding("f2", "start_console", "Python"),
        Binding("f3", "toggle_dark", "Toggle Dark Mode"),
    ]

    # Extend Textual's default commands with the console providers
    COMMANDS = App.COMMANDS | {get_console_commands_provider}

    TITLE = "Debug Console"
    SUB_TITLE = "Interactive Python inside the running app"

    def __init__(
        self,
        settings: Optional[ConsoleSettings] = None,
        namespace: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the application.

        Args:
            settings: Console settings (loaded from config.json if omitted)
            namespace: Extra names made available to evaluated code
        """
        super().__init__()

        # DEBUG_CONSOLE_HOME may come from a .env file
        load_dotenv()

        for theme in get_themes().values():
            self.register_theme(theme)
        self.theme = get_theme_setting()

        self.settings = settings or load_console_settings()
        self.log_sink = ConsoleLogSink()
        self.log_sink.styles = get_output_styles(self.current_theme)
        self.editor = ConsoleInput(placeholder="Type 'help' for commands", id="console-input")
        self.watches = WatchRegistry()
        self.host_commands = HostCommandRegistry(self.log_sink)

        self.stdout_sink = OutputSink(self.log_sink)
        self.stderr_sink = OutputSink(self.log_sink, OutputStyle.ERROR)
        self.evaluator = PythonEvaluator(
            namespace={"app": self, **(namespace or {})},
            stdout=self.stdout_sink,
            stderr=self.stderr_sink,
        )

        self.session = ConsoleSession(
            editor=self.editor,
            engine=self.evaluator,
            sink=self.log_sink,
            watches=self.watches,
            prompt=self.settings.prompt,
            welcome=self.settings.welcome,
            repeat_prefix=self.settings.repeat_prefix,
            history_source=self.host_commands.latest,
        )
        self.session.install_bindings()
        self._register_host_commands()

    @property
    def theme(self) -> str:
        """Get current theme."""
        return super().theme

    @theme.setter
    def theme(self, value: str) -> None:
        """Set theme and persist to settings.

        Theme changes from any source (command palette, key binding) are
        saved to the settings file and restyle the console output.
        """
        App.theme.__set__(self, value)
        if hasattr(self, "log_sink"):
            self.log_sink.styles = get_output_styles(self.current_theme)
        set_settings({"theme": value})

    def _register_host_commands(self) -> None:
        """Register the host's built-in command line commands."""
        commands = self.host_commands

        @commands.command("help", "List host commands and console keys")
        def show_help(args: str) -> None:
            for command in commands.all():
                self.log_sink.log(f"  {command.name:<6} {command.help}", OutputStyle.INFO)
            keys = self.session.keys
            self.log_sink.log(
                f"  In a session: {keys.commit} evaluate, {keys.cancel} clear line, "
                f"{keys.exit} exit, {keys.history_previous}/{keys.history_next} history, "
                f"{keys.complete} complete",
                OutputStyle.INFO,
            )

        @commands.command("clear", "Clear the console log")
        def clear(args: str) -> None:
            self.action_clear_console()

        @commands.command("cs", "Start the interactive Python session")
        def start_session(args: str) -> None:
            self.session.start_capture()

        @commands.command("eval", "Evaluate one Python expression (empty: repeat last)")
        def evaluate(args: str) -> None:
            self.session.evaluate_immediate(args)

    def on_mount(self) -> None:
        """Run the startup lines and show the console screen."""
        self.evaluator.setup(self.settings.startup)
        self.push_screen(ConsoleScreen())
        self.log_sink.log(
            "Type 'cs' to start a Python session or 'help' for commands.",
            OutputStyle.INFO,
        )

    def action_start_console(self) -> None:
        """Start capturing the command line for Python."""
        if not self.session.capturing:
            self.session.start_capture()
        self.editor.focus()

    def action_clear_console(self) -> None:
        """Clear the console log."""
        self.log_sink.clear()

    def action_copy_log(self) -> None:
        """Copy the console log to the clipboard."""
        if not self.log_sink.records:
            self.notify("Nothing to copy", title="Info", severity="information")
            return

        try:
            pyperclip.copy(self.log_sink.transcript())
            self.notify(
                f"Copied {len(self.log_sink.records)} lines to clipboard",
                title="Success",
            )
        except pyperclip.PyperclipException as e:
            self.notify(f"Failed to copy: {e}", title="Error", severity="error")

    def action_toggle_dark(self) -> None:
        """Toggle dark mode (theme property setter handles persistence)."""
        self.theme = "console-dark" if self.theme == "console-light" else "console-light"
