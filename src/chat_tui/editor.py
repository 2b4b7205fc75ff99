"""
Input Editor

A single-line text editor driven by discrete key events. The editor is a
small state machine with two modes:

    NORMAL   'e' starts editing, 'q' or Ctrl+C requests shutdown
    EDITING  printable keys insert at the cursor, Backspace/Left/Right
             edit and move, Enter submits the line, Escape returns to NORMAL

All cursor positions count code points, so a multi-byte character such as
an accented letter or an emoji is always one unit for movement and deletion.

The editor performs no I/O. The two externally observable outputs are the
submitted line (returned from handle_key_event) and the quit request.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .termination import Interrupted

logger = logging.getLogger(__name__)

# Key names, following Textual's naming
KEY_ENTER = "enter"
KEY_BACKSPACE = "backspace"
KEY_LEFT = "left"
KEY_RIGHT = "right"
KEY_ESCAPE = "escape"

EDIT_KEY = "e"
QUIT_KEY = "q"
QUIT_CHORD = "ctrl+c"


class InputMode(Enum):
    """Whether keystrokes are commands or text input."""

    NORMAL = "normal"
    EDITING = "editing"


class KeyEventKind(Enum):
    """Press/release discriminator reported by the keystroke source."""

    PRESS = "press"
    RELEASE = "release"
    REPEAT = "repeat"


@dataclass(frozen=True)
class KeyEvent:
    """
    One discrete keystroke.

    Attributes:
        key: Key name ("enter", "left", "ctrl+c", ...) or the character
        character: The character the key produces, if any
        kind: Whether the key was pressed or released
    """

    key: str
    character: Optional[str] = None
    kind: KeyEventKind = KeyEventKind.PRESS

    @classmethod
    def char(
        cls, character: str, kind: KeyEventKind = KeyEventKind.PRESS
    ) -> "KeyEvent":
        """Build the event for a character key."""
        return cls(key=character, character=character, kind=kind)

    @property
    def is_printable(self) -> bool:
        """Check if the key produces exactly one printable character."""
        return (
            self.character is not None
            and len(self.character) == 1
            and self.character.isprintable()
        )


class InputEditor:
    """
    Editable input line with mode switching and submission history.

    Attributes:
        mode: Current input mode, NORMAL initially
        buffer: Text being edited
        cursor: Insertion point, 0 <= cursor <= len(buffer)
        submitted_lines: Every line submitted so far, oldest first
        quit_requested: True once the user asked to quit
    """

    def __init__(
        self, on_quit: Optional[Callable[[Interrupted], None]] = None
    ) -> None:
        """
        Initialize the editor.

        Args:
            on_quit: How a quit request is signaled to the host, usually
                     Terminator.terminate. Without it the request is only
                     recorded in quit_requested.
        """
        self._on_quit = on_quit
        self.mode = InputMode.NORMAL
        self.buffer = ""
        self.cursor = 0
        self.submitted_lines: List[str] = []
        self.quit_requested = False

    def handle_key_event(self, event: KeyEvent) -> Optional[str]:
        """
        Apply one keystroke.

        NORMAL mode reacts to presses and releases alike; EDITING mode only
        reacts to presses so terminals that report both do not double-fire.

        Args:
            event: The keystroke to apply

        Returns:
            The submitted line when the key was Enter in EDITING mode,
            otherwise None.
        """
        if self.mode is InputMode.NORMAL:
            if event.character == EDIT_KEY:
                self.mode = InputMode.EDITING
            elif event.character == QUIT_KEY or event.key == QUIT_CHORD:
                self.request_quit()
            return None

        if event.kind is not KeyEventKind.PRESS:
            return None

        if event.key == KEY_ENTER:
            return self.submit_message()
        if event.key == KEY_BACKSPACE:
            self.delete_char()
        elif event.key == KEY_LEFT:
            self.move_cursor_left()
        elif event.key == KEY_RIGHT:
            self.move_cursor_right()
        elif event.key == KEY_ESCAPE:
            self.mode = InputMode.NORMAL
        elif event.is_printable:
            self.enter_char(event.character)
        return None

    def move_cursor_left(self) -> None:
        self.cursor = self.clamp_cursor(self.cursor - 1)

    def move_cursor_right(self) -> None:
        self.cursor = self.clamp_cursor(self.cursor + 1)

    def enter_char(self, new_char: str) -> None:
        """Insert one character at the cursor and move past it."""
        self.buffer = (
            self.buffer[: self.cursor] + new_char + self.buffer[self.cursor :]
        )
        self.move_cursor_right()

    def delete_char(self) -> None:
        """Delete the character left of the cursor, if there is one."""
        if self.cursor == 0:
            return
        self.buffer = (
            self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
        )
        self.move_cursor_left()

    def clamp_cursor(self, new_cursor_pos: int) -> int:
        return max(0, min(new_cursor_pos, len(self.buffer)))

    def reset_cursor(self) -> None:
        self.cursor = 0

    def submit_message(self) -> str:
        """
        Move the buffer into the history and clear it.

        Empty lines are submitted as-is; validating them is up to the
        caller that turns the line into a command.

        Returns:
            The submitted line
        """
        line = self.buffer
        self.submitted_lines.append(line)
        self.buffer = ""
        self.reset_cursor()
        logger.debug("Submitted line of %d characters", len(line))
        return line

    def request_quit(self) -> None:
        """Record a quit request and signal it to the host."""
        self.quit_requested = True
        if self._on_quit is not None:
            self._on_quit(Interrupted.USER_INT)
