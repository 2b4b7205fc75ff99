"""
Base Schema Classes

This module provides the base class shared by every command and event
variant, with the serialization and deserialization methods that map
dataclass fields onto their short wire keys.

Wire Format:
    Every message is a single compact JSON object. The discriminator key
    "t" comes first, followed by the variant's fields in declaration order:
    {"t":"send_message","r":"lobby","c":"hello"}
"""

import json
from dataclasses import field, fields
from enum import Enum
from typing import Any, ClassVar, Dict, TypeVar, Union

from ..errors import MissingField, TypeMismatch

T = TypeVar("T", bound="BaseMessage")

# Discriminator key identifying the variant of a message
TAG_KEY = "t"


def wire_field(key: str) -> Any:
    """
    Declare a dataclass field together with its short wire key.

    Args:
        key: The key used for this field in the encoded object
    """
    return field(metadata={"key": key})


def parse_object(data: Union[bytes, str]) -> Dict[str, Any]:
    """
    Parse one complete message into a JSON object.

    Args:
        data: Raw message as received from the transport

    Returns:
        The decoded JSON object.

    Raises:
        TypeMismatch: If the payload is not UTF-8 JSON or is not an object
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError:
            raise TypeMismatch(None, "UTF-8 text", data)

    try:
        obj = json.loads(data)
    except (TypeError, RecursionError, json.JSONDecodeError):
        raise TypeMismatch(None, "JSON object", data)

    if not isinstance(obj, dict):
        raise TypeMismatch(None, "JSON object", obj)
    return obj


class BaseMessage:
    """
    Base class for command and event schemas.

    Subclasses are frozen dataclasses that set `message_type` to their
    wire tag and declare each field with `wire_field()`.
    """

    message_type: ClassVar[str]

    def __post_init__(self) -> None:
        """
        Reject text fields that are not valid Unicode.

        Raises:
            ValueError: If a text field holds a lone surrogate
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, str) and not _is_unicode_text(value):
                raise ValueError(
                    f"Field {f.name!r} is not valid Unicode text"
                )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary with the tag first and one entry per field.
        """
        result: Dict[str, Any] = {TAG_KEY: self.message_type}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            result[f.metadata["key"]] = value
        return result

    def to_json(self) -> str:
        """
        Convert to compact JSON string.

        Returns:
            JSON text without whitespace, with non-ASCII characters kept.
        """
        return json.dumps(
            self.to_dict(), separators=(",", ":"), ensure_ascii=False
        )

    @classmethod
    def from_dict(cls: type[T], data: Dict[str, Any]) -> T:
        """
        Create instance from a decoded JSON object.

        Keys may appear in any order and unknown keys are ignored.

        Args:
            data: Dictionary keyed by wire keys

        Raises:
            MissingField: If a declared field is absent
            TypeMismatch: If a value has the wrong type
        """
        kwargs = {}
        for f in fields(cls):
            key = f.metadata["key"]
            if key not in data:
                raise MissingField(key, cls.message_type)
            kwargs[f.name] = _coerce(key, f.type, data[key])
        return cls(**kwargs)

    @classmethod
    def from_json(cls: type[T], data: Union[bytes, str]) -> T:
        """
        Create instance from JSON text or bytes.

        Args:
            data: Encoded message
        """
        return cls.from_dict(parse_object(data))


def _coerce(key: str, declared: Any, value: Any) -> Any:
    """Interpret a raw JSON value as the declared field type."""
    if isinstance(declared, type) and issubclass(declared, Enum):
        if not isinstance(value, str):
            raise TypeMismatch(key, declared.__name__, value)
        try:
            return declared(value)
        except ValueError:
            raise TypeMismatch(key, declared.__name__, value)

    if not isinstance(value, str):
        raise TypeMismatch(key, "string", value)

    # Lone surrogates from \ud800-style escapes are not Unicode scalar values
    if not _is_unicode_text(value):
        raise TypeMismatch(key, "Unicode text", value)
    return value


def _is_unicode_text(value: str) -> bool:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
