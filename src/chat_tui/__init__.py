"""
Chat TUI Package

This package provides the client-side half of the chat application: the
InputEditor state machine that turns keystrokes into lines, the
ChatClient that lifts those lines into protocol commands and sends them
over a WebSocket, and the Textual user interface that hosts both.
"""

from .chat_client import ChatClient
from .editor import InputEditor, InputMode, KeyEvent, KeyEventKind
from .service import ClientService
from .termination import Interrupted, Terminator

__all__ = [
    # Service classes
    "ClientService",
    "ChatClient",
    # Editor
    "InputEditor",
    "InputMode",
    "KeyEvent",
    "KeyEventKind",
    # Termination
    "Interrupted",
    "Terminator",
]
