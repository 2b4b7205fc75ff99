"""
Event Schema Definitions

Events are messages originated by the server to report a state change
that the client displays.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .base import BaseMessage, wire_field


class RoomParticipationStatus(Enum):
    """Membership change carried by a room participation event."""

    JOINED = "joined"
    LEFT = "left"


@dataclass(frozen=True)
class RoomParticipationEvent(BaseMessage):
    """
    A user joined or left a room.

    Attributes:
        room: Name of the room
        username: The user whose membership changed
        status: Whether the user joined or left
    """

    message_type = "room_participation"

    room: str = wire_field("r")
    username: str = wire_field("u")
    status: RoomParticipationStatus = wire_field("s")


@dataclass(frozen=True)
class UserMessageEvent(BaseMessage):
    """
    A chat line delivered to a room.

    Attributes:
        room: Name of the room
        username: Username of the sender
        content: The message text
    """

    message_type = "user_message"

    room: str = wire_field("r")
    username: str = wire_field("u")
    content: str = wire_field("c")


Event = Union[RoomParticipationEvent, UserMessageEvent]

EVENT_TYPES = {
    cls.message_type: cls
    for cls in (RoomParticipationEvent, UserMessageEvent)
}
