"""Console core: session state machine, history, completion, watches, output."""

from .completion import CompletionEngine, common_prefix
from .evaluation import (
    ConsoleError,
    EvaluationEngine,
    EvaluationError,
    PythonEvaluator,
    UnresolvedExpression,
)
from .history import HistoryManager
from .output import LogSink, OutputRecord, OutputSink, OutputStyle, format_value
from .session import ConsoleKeys, ConsoleSession, LineEditor
from .watches import WATCH_ERROR_TEXT, WatchEntry, WatchRegistry, WatchResult

__all__ = [
    "CompletionEngine",
    "common_prefix",
    "ConsoleError",
    "EvaluationEngine",
    "EvaluationError",
    "PythonEvaluator",
    "UnresolvedExpression",
    "HistoryManager",
    "LogSink",
    "OutputRecord",
    "OutputSink",
    "OutputStyle",
    "format_value",
    "ConsoleKeys",
    "ConsoleSession",
    "LineEditor",
    "WATCH_ERROR_TEXT",
    "WatchEntry",
    "WatchRegistry",
    "WatchResult",
]
