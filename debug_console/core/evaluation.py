"""Evaluation engine capability and its Python implementation."""

import builtins
import logging
import re
import rlcompleter
from contextlib import ExitStack, redirect_stderr, redirect_stdout
from typing import Any, Dict, Iterable, Optional, Protocol, Set, Tuple

from .output import OutputSink

LOGGER = logging.getLogger(__name__)

# Message of the benign outcome: the input ran but produced no value
UNRESOLVED_MESSAGE = "The expression failed to resolve"

# Filename shown in tracebacks and syntax errors for console input
CONSOLE_FILENAME = "<console>"

# Trailing dotted identifier, e.g. "os.pa" in "print(os.pa"
_TOKEN_PATTERN = re.compile(r"[A-Za-z_][\w.]*$")

Completions = Tuple[Set[str], str]


class ConsoleError(Exception):
    """Base class for debug console errors."""


class EvaluationError(ConsoleError):
    """A submitted line failed to compile or raised while running."""


class UnresolvedExpression(EvaluationError):
    """The line was valid but produced no value (a statement, not an expression)."""

    def __init__(self, message: str = UNRESOLVED_MESSAGE):
        super().__init__(message)


class EvaluationEngine(Protocol):
    """Capability used by the console to run code and complete names."""

    def evaluate(self, line: str) -> Any:
        """Return the value of ``line`` or raise EvaluationError."""

    def completions(self, prefix: str) -> Optional[Completions]:
        """Return (candidate suffixes, token prefix), or None if nothing applies."""

    def bind(self, name: str, value: Any) -> None:
        """Expose ``value`` to evaluated code under ``name``."""


def error_message(exc: BaseException) -> str:
    """Return the user-facing message of an exception, never an empty string."""
    return str(exc) or type(exc).__name__


class PythonEvaluator:
    """Evaluates single lines of Python in a persistent namespace.

    Expressions are compiled in ``eval`` mode and their value returned.
    Anything else (assignments, imports, definitions) is executed as a
    statement and reported as UnresolvedExpression. Output written by the
    evaluated code goes to the given stdout/stderr sinks.
    """

    def __init__(
        self,
        namespace: Optional[Dict[str, Any]] = None,
        stdout: Optional[OutputSink] = None,
        stderr: Optional[OutputSink] = None,
    ):
        """Initialize the evaluator.

        Args:
            namespace: Initial globals for evaluated code (host objects etc.)
            stdout: Sink receiving ``print`` output of evaluated code
            stderr: Sink receiving stderr output of evaluated code
        """
        self.namespace: Dict[str, Any] = {"__name__": "__console__", "__builtins__": builtins}
        if namespace:
            self.namespace.update(namespace)
        self.stdout = stdout
        self.stderr = stderr

    def bind(self, name: str, value: Any) -> None:
        self.namespace[name] = value

    def setup(self, lines: Iterable[str]) -> None:
        """Run startup lines with all output intercepted.

        Lines that fail are logged and skipped.
        """
        sinks = [sink for sink in (self.stdout, self.stderr) if sink is not None]
        for sink in sinks:
            sink.intercept = True
        try:
            for line in lines:
                try:
                    self.evaluate(line)
                except UnresolvedExpression:
                    pass
                except EvaluationError as e:
                    LOGGER.warning(f"Startup line {line!r} failed: {e}")
        finally:
            for sink in sinks:
                sink.intercept = False

    def evaluate(self, line: str) -> Any:
        line = line.strip()
        try:
            code = compile(line, CONSOLE_FILENAME, "eval")
        except SyntaxError:
            code = None

        if code is not None:
            return self._run(eval, code)

        try:
            code = compile(line, CONSOLE_FILENAME, "exec")
        except SyntaxError as e:
            raise EvaluationError(error_message(e)) from e

        self._run(exec, code)
        raise UnresolvedExpression()

    def _run(self, runner, code) -> Any:
        with ExitStack() as stack:
            if self.stdout is not None:
                stack.enter_context(redirect_stdout(self.stdout))
            if self.stderr is not None:
                stack.enter_context(redirect_stderr(self.stderr))
            try:
                return runner(code, self.namespace)
            except SystemExit as e:
                raise EvaluationError(f"SystemExit({e.code!r}) ignored by the console") from e
            except Exception as e:
                raise EvaluationError(error_message(e)) from e

    def completions(self, prefix: str) -> Optional[Completions]:
        match = _TOKEN_PATTERN.search(prefix)
        if match is None:
            return None

        token = match.group(0)
        completer = rlcompleter.Completer(self.namespace)
        matches: Set[str] = set()
        state = 0
        while True:
            try:
                candidate = completer.complete(token, state)
            except Exception:
                # Attribute lookups on the object before the dot can raise
                LOGGER.debug(f"Completion of {token!r} failed", exc_info=True)
                break
            if candidate is None:
                break
            matches.add(candidate)
            state += 1

        return {candidate[len(token):] for candidate in matches}, token
