"""
Validation Utilities

Contains utility functions for validating user input before it is turned
into a command.
"""

from typing import Optional, Tuple

# Message validation constants
MAX_MESSAGE_LENGTH = 5000


def validate_message_content(content: str) -> Tuple[bool, Optional[str]]:
    """
    Validate message content.

    Args:
        content: The message content to validate

    Returns:
        tuple: (is_valid, error_message)
            - is_valid: True if content is valid, False otherwise
            - error_message: Error message if invalid, None if valid
    """
    if not content.strip():
        return False, "Message content cannot be empty"

    if len(content) > MAX_MESSAGE_LENGTH:
        return (
            False,
            f"Message content too long (max {MAX_MESSAGE_LENGTH} characters)",
        )

    return True, None


def validate_room_name(room: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a room name given to /join or /leave.

    Args:
        room: The room name to validate

    Returns:
        tuple: (is_valid, error_message)
    """
    if not room:
        return False, "Room name cannot be empty"

    if any(ch.isspace() for ch in room):
        return False, "Room name cannot contain whitespace"

    return True, None
