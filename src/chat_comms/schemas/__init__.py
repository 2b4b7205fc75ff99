"""
Schemas Package

This package contains the message schemas shared by the client and the
server. Schemas are organized by direction: commands (client to server)
and events (server to client).

The base class (BaseMessage) maps dataclass fields onto their short wire
keys so each variant only declares its tag and fields.
"""

from .base import TAG_KEY, BaseMessage, parse_object, wire_field
from .command import (
    COMMAND_TYPES,
    Command,
    JoinRoomCommand,
    LeaveRoomCommand,
    LoginCommand,
    QuitCommand,
    SendMessageCommand,
)
from .event import (
    EVENT_TYPES,
    Event,
    RoomParticipationEvent,
    RoomParticipationStatus,
    UserMessageEvent,
)

__all__ = [
    # Base classes
    "TAG_KEY",
    "BaseMessage",
    "parse_object",
    "wire_field",
    # Command schemas
    "COMMAND_TYPES",
    "Command",
    "LoginCommand",
    "JoinRoomCommand",
    "LeaveRoomCommand",
    "SendMessageCommand",
    "QuitCommand",
    # Event schemas
    "EVENT_TYPES",
    "Event",
    "RoomParticipationEvent",
    "RoomParticipationStatus",
    "UserMessageEvent",
]
