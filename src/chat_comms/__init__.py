"""
Comms Package

This package provides the wire protocol shared by the chat client and
server: the closed set of Command and Event variants and the compact
codec that carries them.
"""

from .errors import DecodeError, MissingField, TypeMismatch, UnknownTag
from .protocol import (
    MESSAGE_TYPES,
    Message,
    decode,
    decode_command,
    decode_event,
    encode,
)
from .schemas import (
    BaseMessage,
    Command,
    Event,
    JoinRoomCommand,
    LeaveRoomCommand,
    LoginCommand,
    QuitCommand,
    RoomParticipationEvent,
    RoomParticipationStatus,
    SendMessageCommand,
    UserMessageEvent,
)

__all__ = [
    # Codec
    "MESSAGE_TYPES",
    "Message",
    "encode",
    "decode",
    "decode_command",
    "decode_event",
    # Errors
    "DecodeError",
    "UnknownTag",
    "MissingField",
    "TypeMismatch",
    # Schemas
    "BaseMessage",
    "Command",
    "Event",
    "LoginCommand",
    "JoinRoomCommand",
    "LeaveRoomCommand",
    "SendMessageCommand",
    "QuitCommand",
    "RoomParticipationEvent",
    "RoomParticipationStatus",
    "UserMessageEvent",
]
