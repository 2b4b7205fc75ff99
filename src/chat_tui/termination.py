"""
Termination Signaling

A Terminator broadcasts a single shutdown reason to every part of the
client that subscribed to it: the UI loop, the receive loop, and anything
else that must stop when the user quits or the process is interrupted.
"""

import asyncio
import logging
import signal
from enum import Enum
from typing import List

logger = logging.getLogger(__name__)


class Interrupted(Enum):
    """Reason the client is shutting down."""

    OS_SIG_INT = "os_sig_int"
    USER_INT = "user_int"


class Terminator:
    """
    Broadcast channel for shutdown requests.

    Attributes:
        reason: The first reason received, or None while still running
    """

    def __init__(self) -> None:
        self._subscribers: List[asyncio.Queue] = []
        self.reason = None

    def subscribe(self) -> asyncio.Queue:
        """
        Register a new listener.

        A listener that subscribes after termination receives the
        recorded reason immediately.

        Returns:
            Queue that will receive each broadcast Interrupted value
        """
        queue: asyncio.Queue = asyncio.Queue()
        if self.reason is not None:
            queue.put_nowait(self.reason)
        self._subscribers.append(queue)
        return queue

    def terminate(self, interrupted: Interrupted) -> None:
        """
        Broadcast a shutdown reason to all subscribers.

        Args:
            interrupted: Why the client is stopping
        """
        logger.info("Termination requested: %s", interrupted.value)
        if self.reason is None:
            self.reason = interrupted
        for queue in self._subscribers:
            queue.put_nowait(interrupted)

    @property
    def is_terminated(self) -> bool:
        """Check if a shutdown reason has been broadcast."""
        return self.reason is not None

    def install_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """
        Route SIGINT and SIGTERM to terminate(Interrupted.OS_SIG_INT).

        Platforms without loop signal handlers (Windows) are skipped.

        Args:
            loop: The running event loop
        """
        for signum in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(
                    signum, self.terminate, Interrupted.OS_SIG_INT
                )
            except (NotImplementedError, RuntimeError, ValueError):
                logger.debug("Signal handler for %s not supported", signum)
