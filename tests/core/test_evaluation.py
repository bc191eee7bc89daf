"""Tests for the Python evaluation engine."""

import logging
from unittest.mock import Mock

import pytest

from debug_console.core.evaluation import (
    UNRESOLVED_MESSAGE,
    EvaluationError,
    PythonEvaluator,
    UnresolvedExpression,
    error_message,
)
from debug_console.core.output import OutputSink, OutputStyle


@pytest.fixture
def log_sink():
    return Mock()


@pytest.fixture
def evaluator(log_sink):
    return PythonEvaluator(
        stdout=OutputSink(log_sink),
        stderr=OutputSink(log_sink, OutputStyle.ERROR),
    )


class TestEvaluate:
    """Test PythonEvaluator.evaluate."""

    def test_expression_returns_value(self, evaluator):
        assert evaluator.evaluate("1 + 1") == 2

    def test_surrounding_whitespace_is_ignored(self, evaluator):
        assert evaluator.evaluate("   2 * 3  ") == 6

    def test_statement_is_unresolved(self, evaluator):
        """Test statements run but report that no value resolved."""
        with pytest.raises(UnresolvedExpression) as exc_info:
            evaluator.evaluate("x = 5")

        assert str(exc_info.value) == UNRESOLVED_MESSAGE
        assert evaluator.evaluate("x") == 5

    def test_unresolved_is_an_evaluation_error(self):
        assert issubclass(UnresolvedExpression, EvaluationError)

    def test_definitions_persist(self, evaluator):
        """Test functions defined on one line are usable on the next."""
        with pytest.raises(UnresolvedExpression):
            evaluator.evaluate("def double(n): return n * 2")

        assert evaluator.evaluate("double(21)") == 42

    def test_syntax_error(self, evaluator):
        """Test invalid code raises a plain EvaluationError."""
        with pytest.raises(EvaluationError) as exc_info:
            evaluator.evaluate("1 +")

        assert not isinstance(exc_info.value, UnresolvedExpression)
        assert str(exc_info.value)

    def test_runtime_error_message(self, evaluator):
        """Test the message of the raised exception is kept."""
        with pytest.raises(EvaluationError, match="division by zero") as exc_info:
            evaluator.evaluate("1 / 0")

        assert isinstance(exc_info.value.__cause__, ZeroDivisionError)

    def test_runtime_error_in_statement(self, evaluator):
        with pytest.raises(EvaluationError, match="nope"):
            evaluator.evaluate("raise ValueError('nope')")

    def test_system_exit_is_contained(self, evaluator):
        """Test exit() in evaluated code cannot stop the host."""
        with pytest.raises(EvaluationError, match="SystemExit"):
            evaluator.evaluate("raise SystemExit(3)")

    def test_print_goes_to_stdout_sink(self, evaluator, log_sink):
        """Test output of evaluated code is captured line by line."""
        assert evaluator.evaluate("print('hi')") is None

        log_sink.log.assert_called_once_with("hi", OutputStyle.NORMAL)

    def test_stderr_goes_to_error_sink(self, evaluator, log_sink):
        with pytest.raises(UnresolvedExpression):
            evaluator.evaluate("import sys; sys.stderr.write('warn\\n')")

        log_sink.log.assert_called_once_with("warn", OutputStyle.ERROR)

    def test_initial_namespace(self):
        host = object()
        evaluator = PythonEvaluator(namespace={"host": host})

        assert evaluator.evaluate("host") is host

    def test_bind(self, evaluator):
        evaluator.bind("answer", 42)

        assert evaluator.evaluate("answer") == 42


class TestErrorMessage:
    """Test error_message."""

    def test_uses_message(self):
        assert error_message(ValueError("bad value")) == "bad value"

    def test_falls_back_to_type_name(self):
        assert error_message(KeyboardInterrupt()) == "KeyboardInterrupt"


class TestSetup:
    """Test PythonEvaluator.setup."""

    def test_runs_lines_silently(self, evaluator, log_sink):
        """Test startup output is intercepted."""
        evaluator.setup(["import math", "print('noise')", "math.pi"])

        assert evaluator.evaluate("math.floor(math.pi)") == 3
        log_sink.log.assert_not_called()
        assert evaluator.stdout.intercept is False
        assert evaluator.stderr.intercept is False

    def test_failing_line_is_skipped(self, evaluator, log_sink, caplog):
        """Test a broken startup line is logged and the rest still runs."""
        with caplog.at_level(logging.WARNING):
            evaluator.setup(["1 / 0", "y = 2"])

        assert evaluator.evaluate("y") == 2
        assert "1 / 0" in caplog.text
        log_sink.log.assert_not_called()


class TestCompletions:
    """Test PythonEvaluator.completions."""

    def test_global_names(self, evaluator):
        """Test names in the namespace complete as suffixes of the token."""
        evaluator.bind("watch_me", 1)

        candidates, token = evaluator.completions("x = watch_")

        assert token == "watch_"
        assert "me" in candidates

    def test_attribute_names(self, evaluator):
        """Test dotted names complete attributes."""
        evaluator.setup(["import os"])

        candidates, token = evaluator.completions("os.pat")

        assert token == "os.pat"
        assert "h" in candidates

    def test_callables_get_parenthesis(self, evaluator):
        evaluator.bind("frobnicate", lambda: None)

        candidates, _ = evaluator.completions("frobn")

        assert len(candidates) == 1
        assert next(iter(candidates)).startswith("icate(")

    def test_no_token(self, evaluator):
        """Test a prefix ending in whitespace or punctuation has no completions."""
        assert evaluator.completions("1 + ") is None
        assert evaluator.completions("") is None

    def test_unknown_name(self, evaluator):
        candidates, token = evaluator.completions("zzz_not_defined")

        assert candidates == set()
        assert token == "zzz_not_defined"
