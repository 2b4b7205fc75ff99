#!/usr/bin/env python3
"""
Chat Client Application

Client application for connecting to a chat server. Provides a
terminal-based user interface using the Textual framework.

Configuration comes from command-line options, which default to these
environment variables:
    CHAT_SERVER_URL   WebSocket URL of the server (ws://localhost:8080)
    CHAT_USERNAME     Username to log in with
    CHAT_ROOM         Room to join on startup (general)
    CHAT_LOG_FILE     Log file path (chat_tui.log)
    CHAT_LOG_LEVEL    Log level name (WARNING)

Usage:
    chat-tui --username alice
    chat-tui --offline
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from .chat_client import ChatClient
from .termination import Interrupted, Terminator

logger = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "ws://localhost:8080"
DEFAULT_ROOM = "general"
DEFAULT_LOG_FILE = "chat_tui.log"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line options, with defaults from the environment."""
    parser = argparse.ArgumentParser(description="Terminal chat client")
    parser.add_argument(
        "--server-url",
        default=os.environ.get("CHAT_SERVER_URL", DEFAULT_SERVER_URL),
        help="WebSocket URL of the chat server",
    )
    parser.add_argument(
        "--username",
        default=os.environ.get("CHAT_USERNAME"),
        help="Username to log in with",
    )
    parser.add_argument(
        "--room",
        default=os.environ.get("CHAT_ROOM", DEFAULT_ROOM),
        help="Room to join on startup",
    )
    parser.add_argument(
        "--log-file",
        default=os.environ.get("CHAT_LOG_FILE", DEFAULT_LOG_FILE),
        help="File to write logs to",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("CHAT_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Run the editor without connecting to a server",
    )

    args = parser.parse_args(argv)
    args.log_level = args.log_level.upper()
    if args.log_level not in LOG_LEVELS:
        parser.error(
            f"invalid log level {args.log_level!r} "
            f"(choose from {', '.join(LOG_LEVELS)})"
        )
    if not args.offline and not args.username:
        parser.error(
            "--username (or CHAT_USERNAME) is required unless --offline"
        )
    return args


def configure_logging(log_file: str, level: str) -> None:
    """Log to a file so output does not interfere with the UI."""
    logging.basicConfig(
        level=logging.getLevelName(level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.FileHandler(log_file, mode="a")],
    )


async def run_client(args: argparse.Namespace) -> Optional[Interrupted]:
    """
    Connect (unless offline) and run the UI until it terminates.

    Returns:
        The reason the client stopped

    Raises:
        ConnectionError: If the server cannot be reached
    """
    from .ui import ChatApp

    terminator = Terminator()
    terminator.install_signal_handlers(asyncio.get_running_loop())

    client = None
    if not args.offline:
        client = ChatClient(args.server_url)
        await client.connect()
        await client.start_session(args.username, args.room)

    app = ChatApp(client=client, terminator=terminator)
    return await app.run_async()


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the chat client."""
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)
    logger.info("Starting chat client...")

    try:
        interrupted = asyncio.run(run_client(args))
    except ConnectionError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nExiting...")
        sys.exit(0)

    logger.info("Chat client stopped: %s", interrupted)


if __name__ == "__main__":
    main()
