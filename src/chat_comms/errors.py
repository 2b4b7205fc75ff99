"""
Decode Errors

The codec reports exactly three kinds of decode failure. All of them derive
from DecodeError, which is a ValueError, so callers at the transport
boundary can discard a malformed frame with a single except clause.
"""

from typing import Any, Optional


class DecodeError(ValueError):
    """Base class for all wire decode failures."""


class UnknownTag(DecodeError):
    """
    The discriminator does not name any known variant.

    Attributes:
        tag: The discriminator value that was received
    """

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Unknown message tag: {tag!r}")


class MissingField(DecodeError):
    """
    A field required by the resolved variant is absent.

    Attributes:
        field: Wire key of the missing field
        tag: Tag of the variant being decoded, if one was resolved
    """

    def __init__(self, field: str, tag: Optional[str] = None):
        self.field = field
        self.tag = tag
        where = f" for {tag!r}" if tag else ""
        super().__init__(f"Missing field {field!r}{where}")


class TypeMismatch(DecodeError):
    """
    A value cannot be interpreted as its declared type.

    Attributes:
        field: Wire key of the offending field (None for the whole payload)
        expected: Human-readable name of the expected type
        value: The value that was received
    """

    def __init__(self, field: Optional[str], expected: str, value: Any = None):
        self.field = field
        self.expected = expected
        self.value = value
        target = f"field {field!r}" if field else "payload"
        super().__init__(
            f"Expected {expected} for {target}, got {type(value).__name__}"
        )
