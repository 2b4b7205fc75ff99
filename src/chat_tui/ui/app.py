"""
Chat Application UI

Terminal user interface for the chat client, built using the Textual
framework. The app is the renderer for the InputEditor: it turns Textual
key events into editor key events, applies them, and redraws the input
line, the mode hint, and the transcript from the editor's state.
"""

import asyncio
import logging
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Header, Log, Static

from chat_comms import QuitCommand, RoomParticipationEvent, UserMessageEvent

from ..chat_client import ChatClient
from ..editor import QUIT_CHORD, InputEditor, InputMode, KeyEvent
from ..termination import Interrupted, Terminator

logger = logging.getLogger(__name__)

# Interval between UI ticks, in seconds
TICK_RATE = 0.25

CURSOR_MARK = "▏"

MODE_HINTS = {
    InputMode.NORMAL: "Press e to start editing, q to exit.",
    InputMode.EDITING: "Press Esc to stop editing, Enter to send the message.",
}


def to_key_event(event: events.Key) -> KeyEvent:
    """
    Translate a Textual key event into an editor key event.

    Textual only reports key presses, so every event is a press.
    """
    character = event.character if event.is_printable else None
    return KeyEvent(key=event.key, character=character)


def render_input_line(editor: InputEditor) -> str:
    """Render the input buffer, with a cursor mark while editing."""
    if editor.mode is InputMode.EDITING:
        return (
            "> "
            + editor.buffer[: editor.cursor]
            + CURSOR_MARK
            + editor.buffer[editor.cursor :]
        )
    return "> " + editor.buffer


class ChatApp(App):
    """Main chat application."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #transcript {
        height: 1fr;
        border: solid $primary;
    }

    #input-line {
        height: 3;
        padding: 1;
        border: solid $secondary;
    }

    #input-line.editing {
        border: solid $warning;
    }

    #mode-hint {
        height: 1;
        padding: 0 1;
        text-style: italic;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit_chord", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        client: Optional[ChatClient] = None,
        terminator: Optional[Terminator] = None,
    ) -> None:
        """
        Initialize the chat application.

        Args:
            client: Connected chat client, or None to run offline
            terminator: Shared shutdown channel, created if omitted
        """
        super().__init__()
        self.client = client
        self.terminator = terminator or Terminator()
        self.editor = InputEditor(on_quit=self.terminator.terminate)
        self.timer = 0
        self._editor_lock = asyncio.Lock()
        self._quit_sent = False

    def compose(self) -> ComposeResult:
        """Compose the main application layout."""
        yield Header()
        transcript = Log(id="transcript")
        transcript.can_focus = False
        yield transcript
        yield Static("", id="input-line", markup=False)
        yield Static("", id="mode-hint", markup=False)

    def on_mount(self) -> None:
        """Handle application mount."""
        self.title = "Chat"
        if self.client:
            self.sub_title = self.client.current_room or ""
            self.client.set_on_user_message(self._on_user_message)
            self.client.set_on_room_participation(self._on_room_participation)
            self.run_worker(self._receive_events(), exclusive=False)

        self.set_interval(TICK_RATE, self._on_tick)
        self.run_worker(self._wait_for_termination(), exclusive=False)
        self._render_editor()

    async def on_key(self, event: events.Key) -> None:
        """Feed each key press through the editor, then redraw it."""
        event.stop()
        event.prevent_default()
        await self._apply_key(to_key_event(event))

    async def action_quit_chord(self) -> None:
        """Route Ctrl+C through the editor instead of Textual's default."""
        await self._apply_key(KeyEvent(key=QUIT_CHORD))

    async def _apply_key(self, key_event: KeyEvent) -> None:
        async with self._editor_lock:
            line = self.editor.handle_key_event(key_event)
            self._render_editor()

        if line is not None:
            await self._submit_line(line)

    async def _on_tick(self) -> None:
        async with self._editor_lock:
            self.timer += 1

    def _render_editor(self) -> None:
        """Draw the input line and mode hint from the editor state."""
        input_line = self.query_one("#input-line", Static)
        input_line.update(render_input_line(self.editor))
        input_line.set_class(self.editor.mode is InputMode.EDITING, "editing")
        mode_hint = self.query_one("#mode-hint", Static)
        mode_hint.update(MODE_HINTS[self.editor.mode])

    def _write_transcript(self, text: str) -> None:
        self.query_one("#transcript", Log).write_line(text)

    async def _submit_line(self, line: str) -> None:
        """Send a submitted line, or echo it locally when offline."""
        if not self.client:
            self._write_transcript(f"you: {line}")
            return

        try:
            command = await self.client.submit_line(line)
        except ConnectionError as e:
            logger.error("Failed to send line: %s", e)
            self._write_transcript(f"! {e}")
            return

        if command is None:
            self._write_transcript(f"! could not send: {line!r}")
        elif isinstance(command, QuitCommand):
            self._quit_sent = True
            self.terminator.terminate(Interrupted.USER_INT)
        self.sub_title = self.client.current_room or ""

    async def _receive_events(self) -> None:
        try:
            await self.client.receive_events()
        except ConnectionError as e:
            logger.error("Receive loop stopped: %s", e)
        self._write_transcript("! disconnected from server")

    async def _wait_for_termination(self) -> None:
        interrupted = await self.terminator.subscribe().get()
        logger.info("Shutting down: %s", interrupted.value)

        if self.client and self.client.is_connected:
            if not self._quit_sent:
                try:
                    await self.client.quit()
                except ConnectionError as e:
                    logger.warning("Could not send quit: %s", e)
            await self.client.disconnect()

        self.exit(interrupted)

    def _on_user_message(self, event: UserMessageEvent) -> None:
        """Callback when a chat line is delivered."""
        self.call_later(
            self._write_transcript,
            f"[{event.room}] {event.username}: {event.content}",
        )

    def _on_room_participation(self, event: RoomParticipationEvent) -> None:
        """Callback when a member joins or leaves a room."""
        self.call_later(
            self._write_transcript,
            f"* {event.username} {event.status.value} {event.room}",
        )
