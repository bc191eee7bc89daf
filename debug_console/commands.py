"""Host command console and command palette providers.

The host understands a handful of named commands typed into its command
line (``help``, ``clear``, ``cs``, ``eval``). The same actions are offered
through the Textual command palette, alongside Textual's defaults.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from textual.command import Hit, Hits, Provider

from .core.output import LogSink, OutputStyle

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class HostCommand:
    """A named host command. The handler receives the raw argument text."""

    name: str
    help: str
    handler: Callable[[str], None]


class HostCommandRegistry:
    """Parses and runs host command lines and remembers what was run."""

    def __init__(self, sink: LogSink):
        self.sink = sink
        self._commands: Dict[str, HostCommand] = {}
        self._history: List[str] = []

    def command(self, name: str, help: str):
        """Decorator registering a function as a host command."""

        def decorator(handler: Callable[[str], None]) -> Callable[[str], None]:
            self.register(HostCommand(name=name, help=help, handler=handler))
            return handler

        return decorator

    def register(self, command: HostCommand) -> None:
        if command.name in self._commands:
            raise ValueError(f"Command already registered: {command.name}")
        self._commands[command.name] = command

    def get(self, name: str) -> Optional[HostCommand]:
        return self._commands.get(name)

    def all(self) -> List[HostCommand]:
        return sorted(self._commands.values(), key=lambda command: command.name)

    @property
    def history(self) -> List[str]:
        return list(self._history)

    def latest(self) -> Optional[str]:
        """Most recently run command line, if any."""
        return self._history[-1] if self._history else None

    def run(self, line: str) -> bool:
        """Run one command line.

        Args:
            line: Command name optionally followed by a space and arguments

        Returns:
            True if a command was found and ran without raising
        """
        line = line.strip()
        if not line:
            return False

        name, _, args = line.partition(" ")
        command = self._commands.get(name.lower())
        try:
            if command is None:
                self.sink.log(f"Unknown command '{name}'. Type 'help' for a list.", OutputStyle.ERROR)
                return False
            try:
                command.handler(args.strip())
            except Exception as e:
                LOGGER.exception(f"Host command {name!r} failed")
                self.sink.log(f"Command '{name}' failed: {e}", OutputStyle.ERROR)
                return False
            return True
        finally:
            # Recorded after running so handlers see the previous line as latest()
            self._history.append(line)


class ConsoleCommandProvider(Provider):
    """Command provider for debug console actions.

    Provides commands for:
    - Starting the Python session
    - Clearing the console log
    - Copying the console log
    """

    def _commands(self):
        return [
            (
                "Start Python Session",
                "Capture the command line for interactive Python",
                self._run_start_session,
            ),
            ("Clear Console", "Clear the console log", self._run_clear_console),
            (
                "Copy Console Log",
                "Copy the console log to the clipboard",
                self._run_copy_log,
            ),
        ]

    async def discover(self) -> Hits:
        """Provide default commands when palette first opens (empty query).

        Yields:
            All console commands for discoverability
        """
        for name, help_text, callback in self._commands():
            yield Hit(1, name, callback, help=help_text)

    async def search(self, query: str) -> Hits:
        """Search for console commands matching the query.

        Args:
            query: The search query from command palette

        Yields:
            Command hits matching the query, scored by relevance
        """
        matcher = self.matcher(query)

        for name, help_text, callback in self._commands():
            score = matcher.match(name)
            if score > 0:
                yield Hit(
                    score,
                    matcher.highlight(name),
                    callback,
                    help=help_text,
                )

    def _run_start_session(self) -> None:
        """Run the start_console action."""
        self.app.action_start_console()

    def _run_clear_console(self) -> None:
        """Run the clear_console action."""
        self.app.action_clear_console()

    def _run_copy_log(self) -> None:
        """Run the copy_log action."""
        self.app.action_copy_log()
