"""
Command Schema Definitions

Commands are messages originated by the client to express user intent.
"""

from dataclasses import dataclass
from typing import Union

from .base import BaseMessage, wire_field


@dataclass(frozen=True)
class LoginCommand(BaseMessage):
    """
    Identify the session.

    Attributes:
        username: Name the user wants to be known by
    """

    message_type = "login"

    username: str = wire_field("u")


@dataclass(frozen=True)
class JoinRoomCommand(BaseMessage):
    """
    Subscribe to a room.

    Attributes:
        room: Name of the room to join
    """

    message_type = "join_room"

    room: str = wire_field("r")


@dataclass(frozen=True)
class LeaveRoomCommand(BaseMessage):
    """
    Unsubscribe from a room.

    Attributes:
        room: Name of the room to leave
    """

    message_type = "leave_room"

    room: str = wire_field("r")


@dataclass(frozen=True)
class SendMessageCommand(BaseMessage):
    """
    Publish a chat line to a room.

    Attributes:
        room: Name of the target room
        content: The message text
    """

    message_type = "send_message"

    room: str = wire_field("r")
    content: str = wire_field("c")


@dataclass(frozen=True)
class QuitCommand(BaseMessage):
    """End the session. Carries no fields."""

    message_type = "quit"


Command = Union[
    LoginCommand,
    JoinRoomCommand,
    LeaveRoomCommand,
    SendMessageCommand,
    QuitCommand,
]

COMMAND_TYPES = {
    cls.message_type: cls
    for cls in (
        LoginCommand,
        JoinRoomCommand,
        LeaveRoomCommand,
        SendMessageCommand,
        QuitCommand,
    )
}
