"""Tests for the command history."""

import random

from debug_console.core.history import HistoryManager


class TestCommit:
    """Test HistoryManager.commit."""

    def test_commit_from_live_position_always_appends(self):
        """Test the same line submitted twice from the live line is kept twice."""
        history = HistoryManager()

        history.commit("x = 1")
        history.commit("x = 1")

        assert history.entries == ("x = 1", "x = 1")
        assert history.cursor == 2

    def test_resubmitting_recalled_entry_does_not_duplicate(self):
        """Test submitting an unchanged recalled entry keeps history as is."""
        history = HistoryManager()
        history.commit("a")
        history.commit("b")

        assert history.navigate(-1) == "b"
        history.commit("b")

        assert history.entries == ("a", "b")
        assert history.cursor == 2

    def test_resubmitting_older_recalled_entry_does_not_duplicate(self):
        """Test the check compares against the entry under the cursor."""
        history = HistoryManager()
        history.commit("a")
        history.commit("b")

        history.navigate(-1)
        history.navigate(-1)
        history.commit("a")

        assert history.entries == ("a", "b")
        assert history.cursor == 2

    def test_editing_recalled_entry_appends(self):
        """Test a changed line is appended even when recalled from history."""
        history = HistoryManager()
        history.commit("a")

        history.navigate(-1)
        history.commit("a + 1")

        assert history.entries == ("a", "a + 1")
        assert history.cursor == 2

    def test_latest(self):
        """Test latest returns the last committed line."""
        history = HistoryManager()
        assert history.latest() is None

        history.commit("first")
        history.commit("second")
        assert history.latest() == "second"


class TestNavigate:
    """Test HistoryManager.navigate."""

    def test_navigate_empty_history(self):
        """Test navigating without entries stays on the live line."""
        history = HistoryManager()

        assert history.navigate(-1) == ""
        assert history.cursor == 0
        assert history.navigate(1) == ""
        assert history.cursor == 0

    def test_previous_clamps_at_oldest(self):
        """Test going back past the first entry stays at cursor 0."""
        history = HistoryManager()
        history.commit("a")
        history.commit("b")

        assert history.navigate(-1) == "b"
        assert history.navigate(-1) == "a"
        assert history.cursor == 0
        assert history.navigate(-1) == "a"
        assert history.cursor == 0

    def test_next_clamps_at_live_line(self):
        """Test going forward past the end returns the empty sentinel."""
        history = HistoryManager()
        history.commit("a")

        assert history.navigate(1) == ""
        assert history.cursor == 1

        history.navigate(-1)
        assert history.navigate(1) == ""
        assert history.navigate(1) == ""
        assert history.cursor == 1

    def test_cursor_invariant_holds_for_any_sequence(self):
        """Test 0 <= cursor <= len(entries) after random operations."""
        rng = random.Random(1234)
        history = HistoryManager()

        for _ in range(500):
            if rng.random() < 0.3:
                history.commit(rng.choice(["a", "b", "c"]))
            else:
                history.navigate(rng.choice([-1, 1]))
            assert 0 <= history.cursor <= len(history)
