"""
Chat Client

This module provides a ChatClient class that extends the base ClientService
with session state: the logged-in username, the rooms the user is in, and a
bounded transcript of received lines per room. It also lifts lines
submitted from the input editor into protocol commands.

Line Syntax:
    /join <room>     join a room and make it current
    /leave [room]    leave a room (the current one by default)
    /quit            end the session
    anything else    send as a message to the current room

Usage:
    client = ChatClient("ws://localhost:8080")
    await client.connect()
    await client.start_session("alice", "general")
    await client.submit_line("hello")
"""

import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Set

from chat_comms import (
    Command,
    Event,
    JoinRoomCommand,
    LeaveRoomCommand,
    QuitCommand,
    RoomParticipationEvent,
    RoomParticipationStatus,
    SendMessageCommand,
    UserMessageEvent,
)

from .service import ClientService
from .validation import validate_message_content, validate_room_name

logger = logging.getLogger(__name__)

# Maximum number of received lines kept per room
DEFAULT_MAX_TRANSCRIPT = 500

COMMAND_PREFIX = "/"


class ChatClient(ClientService):
    """
    Chat client with session and room tracking.

    Attributes:
        username: Username sent with the login command
        current_room: Room that plain lines are sent to
        joined_rooms: Rooms this client has joined
        members: Known members per room, from participation events
        transcripts: Received user messages per room, oldest first
    """

    def __init__(
        self,
        server_url: str,
        websocket_factory: Optional[Callable] = None,
        max_transcript: int = DEFAULT_MAX_TRANSCRIPT,
    ):
        """
        Initialize the chat client.

        Args:
            server_url: WebSocket URL of the chat server
            websocket_factory: Optional factory for creating WebSocket
                             connections (for dependency injection/testing)
            max_transcript: Maximum number of lines kept per room
        """
        super().__init__(server_url, websocket_factory)

        self.username: Optional[str] = None
        self.current_room: Optional[str] = None
        self.joined_rooms: Set[str] = set()
        self.members: Dict[str, Set[str]] = {}
        self.transcripts: Dict[str, Deque[UserMessageEvent]] = {}
        self._max_transcript = max_transcript

        # Callbacks for UI integration
        self._on_user_message: Optional[
            Callable[[UserMessageEvent], None]
        ] = None
        self._on_room_participation: Optional[
            Callable[[RoomParticipationEvent], None]
        ] = None

        self.set_event_handler(self._dispatch_event)

    def set_on_user_message(
        self, callback: Callable[[UserMessageEvent], None]
    ) -> None:
        """
        Register callback for delivered chat lines.

        Args:
            callback: Function that receives each UserMessageEvent
        """
        self._on_user_message = callback

    def set_on_room_participation(
        self, callback: Callable[[RoomParticipationEvent], None]
    ) -> None:
        """
        Register callback for membership changes.

        Args:
            callback: Function that receives each RoomParticipationEvent
        """
        self._on_room_participation = callback

    async def start_session(
        self, username: str, room: Optional[str] = None
    ) -> None:
        """
        Log in and optionally join a first room.

        Args:
            username: Name to log in with
            room: Room to join right away
        """
        self.username = username
        await self.login(username)
        if room:
            await self.send_command(JoinRoomCommand(room=room))
            self._mark_joined(room)

    def parse_line(self, line: str) -> Optional[Command]:
        """
        Turn a submitted editor line into a command.

        Args:
            line: The line as submitted

        Returns:
            The command to send, or None if the line is rejected
        """
        if line.startswith(COMMAND_PREFIX):
            return self._parse_slash_command(line)

        if self.current_room is None:
            logger.warning("Cannot send message: no current room")
            return None

        is_valid, error = validate_message_content(line)
        if not is_valid:
            logger.warning("Rejected message: %s", error)
            return None

        return SendMessageCommand(room=self.current_room, content=line)

    async def submit_line(self, line: str) -> Optional[Command]:
        """
        Parse a submitted line and send the resulting command.

        Args:
            line: The line as submitted from the editor

        Returns:
            The command that was sent, or None if the line was rejected
        """
        command = self.parse_line(line)
        if command is None:
            return None

        await self.send_command(command)

        if isinstance(command, JoinRoomCommand):
            self._mark_joined(command.room)
        elif isinstance(command, LeaveRoomCommand):
            self._mark_left(command.room)
        return command

    def get_transcript(
        self, room: Optional[str] = None
    ) -> List[UserMessageEvent]:
        """
        Get the received lines of a room.

        Args:
            room: Room name, or None for the current room
        """
        target_room = room or self.current_room
        if not target_room:
            return []
        return list(self.transcripts.get(target_room, ()))

    def _parse_slash_command(self, line: str) -> Optional[Command]:
        name, _, argument = line[len(COMMAND_PREFIX) :].partition(" ")
        argument = argument.strip()

        if name == "quit":
            return QuitCommand()

        if name == "join":
            is_valid, error = validate_room_name(argument)
            if not is_valid:
                logger.warning("Rejected /join: %s", error)
                return None
            return JoinRoomCommand(room=argument)

        if name == "leave":
            room = argument or self.current_room
            if not room:
                logger.warning("Rejected /leave: no room given")
                return None
            is_valid, error = validate_room_name(room)
            if not is_valid:
                logger.warning("Rejected /leave: %s", error)
                return None
            return LeaveRoomCommand(room=room)

        logger.warning("Unknown command: /%s", name)
        return None

    def _mark_joined(self, room: str) -> None:
        self.joined_rooms.add(room)
        self.current_room = room
        if room not in self.transcripts:
            self.transcripts[room] = deque(maxlen=self._max_transcript)
        logger.info("Current room set to: %s", room)

    def _mark_left(self, room: str) -> None:
        self.joined_rooms.discard(room)
        self.members.pop(room, None)
        if self.current_room == room:
            self.current_room = next(iter(sorted(self.joined_rooms)), None)
        logger.info("Left room: %s", room)

    def _dispatch_event(self, event: Event) -> None:
        if isinstance(event, UserMessageEvent):
            self._handle_user_message(event)
        elif isinstance(event, RoomParticipationEvent):
            self._handle_room_participation(event)

    def _handle_user_message(self, event: UserMessageEvent) -> None:
        transcript = self.transcripts.setdefault(
            event.room, deque(maxlen=self._max_transcript)
        )
        transcript.append(event)

        if self._on_user_message:
            self._on_user_message(event)

    def _handle_room_participation(
        self, event: RoomParticipationEvent
    ) -> None:
        members = self.members.setdefault(event.room, set())
        if event.status is RoomParticipationStatus.JOINED:
            members.add(event.username)
        else:
            members.discard(event.username)

        logger.info(
            "Member %s %s room %s",
            event.username,
            event.status.value,
            event.room,
        )

        if self._on_room_participation:
            self._on_room_participation(event)
