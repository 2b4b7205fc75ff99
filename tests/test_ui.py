"""
Tests for the Chat Client UI

Tests for the Textual-based user interface and how it drives the editor.
"""

import pytest

from chat_tui.editor import InputEditor, InputMode, KeyEvent
from chat_tui.termination import Interrupted, Terminator
from chat_tui.ui.app import (
    CURSOR_MARK,
    ChatApp,
    render_input_line,
)


class TestUIComponentsCanBeImported:
    """Tests to verify UI components can be imported and created."""

    def test_chat_app_can_be_imported(self):
        """Test that ChatApp can be imported."""
        assert ChatApp is not None

    def test_ui_package_exports_chat_app(self):
        """Test that UI package exports ChatApp."""
        from chat_tui.ui import ChatApp as ImportedChatApp

        assert ImportedChatApp is ChatApp


class TestChatAppInitialization:
    """Tests for ChatApp initialization."""

    def test_chat_app_initial_state(self):
        """Test ChatApp initial state."""
        app = ChatApp()
        assert app.client is None
        assert app.timer == 0
        assert app.editor.mode is InputMode.NORMAL
        assert isinstance(app.terminator, Terminator)

    def test_chat_app_uses_given_terminator(self):
        """Test that the editor quits through the supplied terminator."""
        terminator = Terminator()
        app = ChatApp(terminator=terminator)

        app.editor.handle_key_event(KeyEvent.char("q"))

        assert terminator.reason is Interrupted.USER_INT

    def test_chat_app_has_css(self):
        """Test that ChatApp has CSS defined."""
        assert len(ChatApp.CSS) > 0


class TestRenderInputLine:
    """Tests for drawing the input line from editor state."""

    def test_normal_mode_has_no_cursor(self):
        """Test that NORMAL mode shows the buffer without a cursor."""
        editor = InputEditor()
        assert render_input_line(editor) == "> "

    def test_cursor_mark_follows_cursor(self):
        """Test that the cursor mark sits at the character offset."""
        editor = InputEditor()
        for key in [KeyEvent.char(c) for c in "eab👋"]:
            editor.handle_key_event(key)
        editor.handle_key_event(KeyEvent(key="left"))

        assert render_input_line(editor) == f"> ab{CURSOR_MARK}👋"


class TestChatAppRunning:
    """Tests that drive a running app offline."""

    @pytest.mark.asyncio
    async def test_typing_and_quitting(self):
        """Test key presses reach the editor and 'q' exits the app."""
        app = ChatApp()
        async with app.run_test() as pilot:
            await pilot.press("e", "h", "i")
            assert app.editor.mode is InputMode.EDITING
            assert app.editor.buffer == "hi"

            await app._apply_key(KeyEvent(key="enter"))
            assert app.editor.submitted_lines == ["hi"]
            assert app.editor.buffer == ""

            await app._apply_key(KeyEvent(key="escape"))
            await app._apply_key(KeyEvent.char("q"))
            await pilot.pause()

        assert app.return_value is Interrupted.USER_INT
