"""End-to-end tests driving the console through the running app."""

from unittest.mock import Mock

import pytest

from debug_console.app import DebugConsoleApp
from debug_console.config.settings_manager import ConsoleSettings
from debug_console.core.output import OutputStyle
from debug_console.screens.console_screen import HOST_PROMPT, ConsoleScreen
from debug_console.ui.watch_panel import WatchPanel


def texts(app, style=None):
    return [r.text for r in app.log_sink.records if style is None or r.style == style]


@pytest.fixture
async def running():
    """Run the app and yield (app, pilot)."""
    app = DebugConsoleApp(settings=ConsoleSettings(startup=["import math"]))
    async with app.run_test() as pilot:
        await pilot.pause()
        yield app, pilot


async def submit(pilot, line):
    """Type a whole line into the command line and press Enter."""
    pilot.app.editor.value = line
    pilot.app.editor.cursor_position = len(line)
    await pilot.press("enter")
    await pilot.pause()


class TestHostCommandLine:
    """Test the command line outside capture mode."""

    async def test_console_screen_shown(self, running):
        app, pilot = running

        assert isinstance(app.screen, ConsoleScreen)
        assert app.focused is app.editor

    async def test_host_command_runs(self, running):
        app, pilot = running

        await submit(pilot, "eval 6 * 7")

        assert f"{HOST_PROMPT} eval 6 * 7" in texts(app)
        assert "42" in texts(app, OutputStyle.NORMAL)
        assert app.editor.value == ""

    async def test_unknown_command(self, running):
        app, pilot = running

        await submit(pilot, "bogus")

        assert any("Unknown command 'bogus'" in t for t in texts(app, OutputStyle.ERROR))

    async def test_startup_lines_ran(self, running):
        app, pilot = running

        await submit(pilot, "eval math.floor(2.5)")

        assert "2" in texts(app, OutputStyle.NORMAL)


class TestCaptureMode:
    """Test the Python session driven by keystrokes."""

    async def test_full_session(self, running):
        """Test start, evaluate, recall and exit."""
        app, pilot = running
        session = app.session

        await submit(pilot, "cs")
        assert session.capturing is True
        assert app.session.welcome in texts(app, OutputStyle.INFO)

        await submit(pilot, "1 + 1")
        assert texts(app)[-2:] == ["1 + 1", "2"]
        assert session.history.entries == ("1 + 1",)
        # Enter was consumed, so no host command ran
        assert f"{HOST_PROMPT} 1 + 1" not in texts(app)

        await pilot.press("up")
        assert app.editor.value == "1 + 1"

        await pilot.press("down")
        assert app.editor.value == ""

        app.editor.value = "left behind"
        await pilot.press("ctrl+d")
        await pilot.pause()
        assert session.capturing is False
        assert app.editor.value == ""

        await submit(pilot, "cs")
        assert app.editor.value == "left behind"

    async def test_prompt_follows_capture(self, running):
        app, pilot = running
        screen = app.screen

        label = screen.prompt_label
        screen.prompt_label = Mock()

        await submit(pilot, "cs")
        screen.render_frame()
        screen.prompt_label.update.assert_called_with(app.settings.prompt)

        await pilot.press("ctrl+d")
        screen.render_frame()
        screen.prompt_label.update.assert_called_with(HOST_PROMPT)

        screen.prompt_label = label

    async def test_tab_completes(self, running):
        app, pilot = running

        await submit(pilot, "cs")
        await submit(pilot, "value_one = 1")
        app.editor.value = "value_o"
        app.editor.cursor_position = len("value_o")
        await pilot.press("tab")

        assert app.editor.value == "value_one"
        assert app.focused is app.editor

    async def test_watch_panel_shows_watches(self, running):
        app, pilot = running
        panel = app.screen.query_one(WatchPanel)

        await submit(pilot, "eval watch('answer', lambda: 42)")
        app.screen.render_frame()

        assert not panel.has_class("-empty")
        assert panel.render_lines(app.watches.render_frame()).plain == "answer: 42"

        await submit(pilot, "eval unwatch('answer')")
        app.screen.render_frame()

        assert panel.has_class("-empty")
