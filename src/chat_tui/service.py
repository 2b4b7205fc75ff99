"""
Client Service for the Chat Protocol

This module provides the client service class that carries encoded
commands to the chat server over a WebSocket connection and decodes the
events it sends back.

Architecture:
    - Uses WebSocket for real-time bidirectional communication
    - Supports dependency injection for the network layer (for testability)
    - Every frame is exactly one encoded message; framing is left to
      the WebSocket layer
    - Malformed inbound frames are logged and discarded, never fatal
"""

import logging
from typing import Any, Callable, Optional

import websockets

from chat_comms import (
    Command,
    DecodeError,
    Event,
    JoinRoomCommand,
    LeaveRoomCommand,
    LoginCommand,
    QuitCommand,
    SendMessageCommand,
    decode_event,
    encode,
)

logger = logging.getLogger(__name__)


class ClientService:
    """
    Client service for talking to a chat server.

    Attributes:
        server_url: WebSocket URL of the server (e.g., ws://localhost:8080)
        websocket: Active WebSocket connection (None if not connected)
        dropped_frames: Number of inbound frames discarded as malformed
    """

    def __init__(
        self,
        server_url: str,
        websocket_factory: Optional[Callable] = None,
    ):
        """
        Initialize the client service.

        Args:
            server_url: WebSocket URL of the server
            websocket_factory: Optional factory for creating WebSocket
                             connections (for dependency injection/testing)
        """
        self.server_url = server_url
        self.websocket: Optional[Any] = None
        self._websocket_factory = websocket_factory or websockets.connect
        self._event_handler: Optional[Callable[[Event], None]] = None
        self._connected = False
        self.dropped_frames = 0

        logger.info(f"ClientService initialized for server: {server_url}")

    async def connect(self) -> None:
        """
        Establish WebSocket connection to the server.

        Raises:
            ConnectionError: If connection fails
        """
        try:
            logger.info(f"Connecting to {self.server_url}...")
            self.websocket = await self._websocket_factory(self.server_url)
            self._connected = True
            logger.info("Successfully connected to chat server")
        except (OSError, websockets.exceptions.WebSocketException) as e:
            logger.error(f"Failed to connect to server: {e}")
            raise ConnectionError(
                f"Could not connect to {self.server_url}: {e}"
            ) from e

    async def disconnect(self) -> None:
        """Close the WebSocket connection."""
        if self.websocket:
            await self.websocket.close()
            self.websocket = None
            self._connected = False
            logger.info("Disconnected from chat server")

    @property
    def is_connected(self) -> bool:
        """Check if currently connected to a server."""
        return self._connected and self.websocket is not None

    def set_event_handler(self, handler: Callable[[Event], None]) -> None:
        """
        Register a callback for decoded inbound events.

        Args:
            handler: Callback function that receives each Event
        """
        self._event_handler = handler

    async def send_command(self, command: Command) -> None:
        """
        Encode a command and send it as one text frame.

        Args:
            command: The command to send

        Raises:
            ConnectionError: If not connected to a server
        """
        if not self.is_connected:
            raise ConnectionError("Not connected to a chat server")

        data = encode(command)
        logger.debug(f"Sending frame: {data}")
        await self.websocket.send(data.decode("utf-8"))

    async def login(self, username: str) -> None:
        """Identify this session with a username."""
        logger.info(f"Logging in as '{username}'")
        await self.send_command(LoginCommand(username=username))

    async def join_room(self, room: str) -> None:
        """Subscribe to a room."""
        logger.info(f"Joining room '{room}'")
        await self.send_command(JoinRoomCommand(room=room))

    async def leave_room(self, room: str) -> None:
        """Unsubscribe from a room."""
        logger.info(f"Leaving room '{room}'")
        await self.send_command(LeaveRoomCommand(room=room))

    async def send_message(self, room: str, content: str) -> None:
        """
        Publish a chat line to a room.

        This is a fire-and-forget operation; the server echoes delivered
        lines back as user_message events.
        """
        logger.info(f"Sending message to room '{room}'")
        await self.send_command(SendMessageCommand(room=room, content=content))

    async def quit(self) -> None:
        """Tell the server the session is ending."""
        logger.info("Sending quit")
        await self.send_command(QuitCommand())

    def handle_frame(self, frame: Any) -> Optional[Event]:
        """
        Decode one inbound frame and dispatch it.

        Args:
            frame: Text or bytes of one complete message

        Returns:
            The decoded Event, or None if the frame was discarded
        """
        try:
            event = decode_event(frame)
        except DecodeError as e:
            self.dropped_frames += 1
            logger.warning(f"Discarding malformed frame: {e}")
            return None

        logger.debug(f"Received event: {event}")
        if self._event_handler:
            self._event_handler(event)
        return event

    async def receive_events(self) -> None:
        """
        Receive and dispatch events until the connection closes.

        Raises:
            ConnectionError: If not connected to a server
        """
        if not self.is_connected:
            raise ConnectionError("Not connected to a chat server")

        logger.info("Starting event receive loop")

        try:
            async for frame in self.websocket:
                self.handle_frame(frame)
        except websockets.exceptions.ConnectionClosed:
            logger.warning("Connection closed by server")
        finally:
            self._connected = False

    def _set_test_mode(self, mock_websocket: object = None) -> None:
        """
        Set the service in test mode with a mock connection.

        Args:
            mock_websocket: Required mock websocket object with send/close

        Raises:
            ValueError: If mock_websocket is not provided
        """
        if mock_websocket is None:
            raise ValueError("_set_test_mode requires a mock_websocket object")
        self._connected = True
        self.websocket = mock_websocket
