"""
Wire Protocol Codec

This module turns command and event values into wire bytes and back.
Encoding is total and deterministic; decoding is partial and reports
failures through the DecodeError hierarchy.

Framing is the transport's job: `decode` expects the bytes of exactly one
complete message.

Usage:
    data = encode(SendMessageCommand(room="lobby", content="hi"))
    event = decode_event(frame)
"""

from typing import Any, Dict, Type, Union

from .errors import TypeMismatch, UnknownTag, MissingField
from .schemas import (
    COMMAND_TYPES,
    EVENT_TYPES,
    TAG_KEY,
    BaseMessage,
    Command,
    Event,
    parse_object,
)

Message = Union[Command, Event]

MESSAGE_TYPES: Dict[str, Type[BaseMessage]] = {**COMMAND_TYPES, **EVENT_TYPES}


def encode(message: Message) -> bytes:
    """
    Encode a command or event as compact UTF-8 JSON.

    Args:
        message: Any command or event value

    Returns:
        The wire bytes, tag first and fields in declaration order.
    """
    return message.to_json().encode("utf-8")


def decode(data: Union[bytes, str]) -> Message:
    """
    Decode one message of either direction.

    Args:
        data: Bytes (or text) of one complete message

    Raises:
        UnknownTag: If the tag names no command or event
        MissingField: If the tag or a variant field is absent
        TypeMismatch: If the payload or a field has the wrong type
    """
    return _decode_with(MESSAGE_TYPES, data)


def decode_command(data: Union[bytes, str]) -> Command:
    """
    Decode one client command. Event tags are rejected as unknown.

    Args:
        data: Bytes (or text) of one complete message
    """
    return _decode_with(COMMAND_TYPES, data)


def decode_event(data: Union[bytes, str]) -> Event:
    """
    Decode one server event. Command tags are rejected as unknown.

    Args:
        data: Bytes (or text) of one complete message
    """
    return _decode_with(EVENT_TYPES, data)


def _decode_with(
    registry: Dict[str, Type[BaseMessage]], data: Union[bytes, str]
) -> Any:
    obj = parse_object(data)

    if TAG_KEY not in obj:
        raise MissingField(TAG_KEY)

    tag = obj[TAG_KEY]
    if not isinstance(tag, str):
        raise TypeMismatch(TAG_KEY, "string", tag)

    message_cls = registry.get(tag)
    if message_cls is None:
        raise UnknownTag(tag)

    return message_cls.from_dict(obj)
