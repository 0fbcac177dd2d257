# Area: Hub
# PRD: docs/protocol.md
"""
stlucia._hub.channel — Player transport
=======================================

A channel is the hub's two one-directional byte streams to one player:
the player's inbox (hub → player) and outbox (player → hub).

Reading a reply is the hub's only suspension point. ``PipeChannel``
waits for data with a bounded poll interval so that a cancellation
event set by the SIGINT handler is noticed even while a player is
silent. The wait itself has no timeout: a slow but well-behaved player
may take as long as it likes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
import logging
import os
import selectors
import threading

from .._shared.codec import MAX_MESSAGE_LENGTH
from ..errors import HubInterruptedError, InvalidMessageError

logger = logging.getLogger("stlucia.hub.channel")

ENCODING = "ascii"
READ_CHUNK = 256


class PlayerChannel(ABC):
    """Line-oriented link between the hub and one player."""

    @abstractmethod
    def send(self, line: str) -> bool:
        """
        Write one line to the player's inbox.

        Returns:
            False if the player's inbox is closed, True otherwise
        """

    @abstractmethod
    def read_byte(self) -> Optional[str]:
        """Read a single character, or None at end-of-stream."""

    @abstractmethod
    def read_line(self) -> Optional[str]:
        """
        Read one line from the player's outbox.

        Returns:
            The line with its terminator, a final unterminated line,
            or None at end-of-stream

        Raises:
            InvalidMessageError: If the line is longer than MAX_MESSAGE_LENGTH
            HubInterruptedError: If the hub is cancelled while waiting
        """

    def close(self) -> None:
        """Release the channel's streams."""


class PipeChannel(PlayerChannel):
    """
    Channel over a pair of OS pipes.

    Args:
        inbox: Writable binary stream to the player's standard input
        outbox: Readable binary stream from the player's standard output
        cancel_event: Set by the signal handler to abort a blocked read
        poll_interval: Seconds between checks of ``cancel_event``
    """

    def __init__(
        self,
        inbox,
        outbox,
        cancel_event: Optional[threading.Event] = None,
        poll_interval: float = 0.1,
    ):
        self.inbox = inbox
        self.outbox = outbox
        self.cancel_event = cancel_event
        self.poll_interval = poll_interval
        self._buffer = b""
        self._eof = False
        self._selector = selectors.DefaultSelector()
        self._selector.register(outbox.fileno(), selectors.EVENT_READ)

    # ── Writing ──────────────────────────────────────────────

    def send(self, line: str) -> bool:
        try:
            self.inbox.write(line.encode(ENCODING))
            self.inbox.flush()
        except (BrokenPipeError, ValueError) as e:
            # The player has gone; its next read reports the quit
            logger.warning(f"Could not send {line.strip()!r}: {e}")
            return False
        return True

    # ── Reading ──────────────────────────────────────────────

    def _check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise HubInterruptedError("Interrupted while waiting for a player")

    def _fill(self) -> bool:
        """Wait for data and append it to the buffer; False at end-of-stream."""
        if self._eof:
            return False
        while True:
            self._check_cancelled()
            if self._selector.select(timeout=self.poll_interval):
                break
        chunk = os.read(self.outbox.fileno(), READ_CHUNK)
        if not chunk:
            self._eof = True
            return False
        self._buffer += chunk
        return True

    def read_byte(self) -> Optional[str]:
        while not self._buffer:
            if not self._fill():
                return None
        byte, self._buffer = self._buffer[:1], self._buffer[1:]
        return byte.decode(ENCODING, errors="replace")

    def read_line(self) -> Optional[str]:
        while b"\n" not in self._buffer:
            if len(self._buffer) > MAX_MESSAGE_LENGTH:
                raise InvalidMessageError(
                    f"Line longer than {MAX_MESSAGE_LENGTH} characters",
                    raw_line=self._buffer.decode(ENCODING, errors="replace"),
                )
            if not self._fill():
                if not self._buffer:
                    return None
                line, self._buffer = self._buffer, b""
                return line.decode(ENCODING, errors="replace")
        line, _, self._buffer = self._buffer.partition(b"\n")
        if len(line) > MAX_MESSAGE_LENGTH:
            raise InvalidMessageError(
                f"Line longer than {MAX_MESSAGE_LENGTH} characters",
                raw_line=line.decode(ENCODING, errors="replace"),
            )
        return line.decode(ENCODING, errors="replace") + "\n"

    def close(self) -> None:
        self._selector.close()
        for stream in (self.inbox, self.outbox):
            try:
                stream.close()
            except BrokenPipeError:
                pass
