"""
Tests for the Wire Protocol Codec

Tests for encoding and decoding of commands and events, including the
byte-exact wire format and every decode failure kind.
"""

import json

import pytest

from chat_comms import (
    DecodeError,
    JoinRoomCommand,
    LeaveRoomCommand,
    LoginCommand,
    MissingField,
    QuitCommand,
    RoomParticipationEvent,
    RoomParticipationStatus,
    SendMessageCommand,
    TypeMismatch,
    UnknownTag,
    UserMessageEvent,
    decode,
    decode_command,
    decode_event,
    encode,
)


WIRE_EXAMPLES = [
    (LoginCommand(username="test"), b'{"t":"login","u":"test"}'),
    (JoinRoomCommand(room="test"), b'{"t":"join_room","r":"test"}'),
    (LeaveRoomCommand(room="test"), b'{"t":"leave_room","r":"test"}'),
    (
        SendMessageCommand(room="test", content="test"),
        b'{"t":"send_message","r":"test","c":"test"}',
    ),
    (QuitCommand(), b'{"t":"quit"}'),
    (
        RoomParticipationEvent(
            room="test",
            username="test",
            status=RoomParticipationStatus.JOINED,
        ),
        b'{"t":"room_participation","r":"test","u":"test","s":"joined"}',
    ),
    (
        RoomParticipationEvent(
            room="test",
            username="test",
            status=RoomParticipationStatus.LEFT,
        ),
        b'{"t":"room_participation","r":"test","u":"test","s":"left"}',
    ),
    (
        UserMessageEvent(room="test", username="test", content="test"),
        b'{"t":"user_message","r":"test","u":"test","c":"test"}',
    ),
]


class TestEncoding:
    """Tests for the encode direction."""

    @pytest.mark.parametrize("message,expected", WIRE_EXAMPLES)
    def test_encode_is_byte_exact(self, message, expected):
        """Test that each variant encodes to its exact wire form."""
        assert encode(message) == expected

    @pytest.mark.parametrize("message,expected", WIRE_EXAMPLES)
    def test_decode_reproduces_value(self, message, expected):
        """Test that decoding the wire form gives back an equal value."""
        assert decode(expected) == message
        assert decode(encode(message)) == message

    def test_encode_keeps_non_ascii_verbatim(self):
        """Test that non-ASCII text is emitted as UTF-8, not escaped."""
        command = SendMessageCommand(room="café", content="héllo 👋")
        data = encode(command)
        assert data == '{"t":"send_message","r":"café","c":"héllo 👋"}'.encode(
            "utf-8"
        )
        assert decode(data) == command

    @pytest.mark.parametrize("text", ["𝄞", "👋🏽", "日本語", "a\U0010ffffb"])
    def test_non_bmp_text_round_trips(self, text):
        """Test that characters outside the BMP survive a round trip."""
        event = UserMessageEvent(room=text, username=text, content=text)
        assert decode(encode(event)) == event

    def test_lone_surrogate_cannot_be_constructed(self):
        """Test that values encode cannot represent are never built."""
        with pytest.raises(ValueError):
            SendMessageCommand(room="r", content="\ud83d")

    def test_encode_escapes_quotes_and_newlines(self):
        """Test that content needing JSON escapes survives a round trip."""
        command = SendMessageCommand(room="r", content='say "hi"\nbye\\')
        assert decode(encode(command)) == command

    def test_to_dict_has_tag_first(self):
        """Test that the tag is the first key of the encoded object."""
        data = UserMessageEvent(room="a", username="b", content="c").to_dict()
        assert list(data) == ["t", "r", "u", "c"]

    def test_messages_are_immutable(self):
        """Test that message values cannot be modified after creation."""
        command = LoginCommand(username="alice")
        with pytest.raises(Exception):
            command.username = "mallory"


class TestDecoding:
    """Tests for the decode direction."""

    def test_decode_accepts_any_key_order(self):
        """Test that field order does not matter when decoding."""
        event = decode(b'{"c":"hi","u":"bob","r":"lobby","t":"user_message"}')
        assert event == UserMessageEvent(room="lobby", username="bob", content="hi")

    def test_decode_accepts_text(self):
        """Test that decode accepts str as well as bytes."""
        assert decode('{"t":"quit"}') == QuitCommand()

    def test_decode_ignores_unknown_keys(self):
        """Test that extra keys are ignored."""
        command = decode(b'{"t":"login","u":"alice","x":1}')
        assert command == LoginCommand(username="alice")

    def test_decode_command_and_event_are_separate(self):
        """Test that each restricted decoder rejects the other union."""
        with pytest.raises(UnknownTag):
            decode_command(b'{"t":"user_message","r":"a","u":"b","c":"c"}')
        with pytest.raises(UnknownTag):
            decode_event(b'{"t":"quit"}')

    def test_decode_event_status(self):
        """Test that status tokens decode to the enum."""
        event = decode_event(
            b'{"t":"room_participation","r":"a","u":"b","s":"left"}'
        )
        assert event.status is RoomParticipationStatus.LEFT


class TestDecodeErrors:
    """Tests for decode failure kinds."""

    def test_unknown_tag(self):
        """Test that an unknown discriminator fails with UnknownTag."""
        with pytest.raises(UnknownTag) as exc_info:
            decode(b'{"t":"bogus"}')
        assert exc_info.value.tag == "bogus"

    def test_missing_tag(self):
        """Test that a missing discriminator is a missing field."""
        with pytest.raises(MissingField) as exc_info:
            decode(b'{"u":"alice"}')
        assert exc_info.value.field == "t"

    def test_missing_variant_field(self):
        """Test that a missing variant field fails with MissingField."""
        with pytest.raises(MissingField) as exc_info:
            decode(b'{"t":"send_message","r":"lobby"}')
        assert exc_info.value.field == "c"
        assert exc_info.value.tag == "send_message"

    @pytest.mark.parametrize(
        "payload",
        [
            b'{"t":"login","u":42}',
            b'{"t":"login","u":null}',
            b'{"t":"join_room","r":["a"]}',
            b'{"t":"room_participation","r":"a","u":"b","s":"kicked"}',
            b'{"t":"room_participation","r":"a","u":"b","s":1}',
            b'{"t":7}',
        ],
    )
    def test_type_mismatch(self, payload):
        """Test that wrongly typed values fail with TypeMismatch."""
        with pytest.raises(TypeMismatch):
            decode(payload)

    @pytest.mark.parametrize(
        "payload",
        [
            b"not json",
            b"[1, 2]",
            b'"quit"',
            b"\xff\xfe",
            b"",
        ],
    )
    def test_malformed_payload(self, payload):
        """Test that non-object payloads fail with TypeMismatch."""
        with pytest.raises(TypeMismatch):
            decode(payload)

    def test_deeply_nested_payload(self):
        """Test that nesting past the parser's depth is a TypeMismatch."""
        with pytest.raises(TypeMismatch):
            decode(b"[" * 100000)

    @pytest.mark.parametrize(
        "payload",
        [
            b'{"t":"login","u":"\\ud800"}',
            b'{"t":"send_message","r":"r","c":"a\\udfffb"}',
        ],
    )
    def test_lone_surrogate_is_type_mismatch(self, payload):
        """Test that text which is not valid Unicode is rejected."""
        with pytest.raises(TypeMismatch):
            decode(payload)

    def test_surrogate_pair_escape_decodes(self):
        """Test that an escaped surrogate pair decodes to one character."""
        command = decode(b'{"t":"login","u":"\\ud83d\\udc4b"}')
        assert command == LoginCommand(username="👋")

    def test_decode_errors_are_value_errors(self):
        """Test that all decode failures share one base class."""
        assert issubclass(UnknownTag, DecodeError)
        assert issubclass(MissingField, DecodeError)
        assert issubclass(TypeMismatch, DecodeError)
        assert issubclass(DecodeError, ValueError)


class TestSchemaHelpers:
    """Tests for the per-class serialization helpers."""

    def test_to_json_is_compact(self):
        """Test that to_json produces no whitespace."""
        text = JoinRoomCommand(room="lobby").to_json()
        assert text == '{"t":"join_room","r":"lobby"}'
        assert json.loads(text) == {"t": "join_room", "r": "lobby"}

    def test_from_json(self):
        """Test that a variant class can decode its own payload."""
        event = UserMessageEvent.from_json(
            '{"t":"user_message","r":"a","u":"b","c":"c"}'
        )
        assert event == UserMessageEvent(room="a", username="b", content="c")
