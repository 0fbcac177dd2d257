# Area: Shared
# PRD: docs/protocol.md
"""
stlucia._shared.protocol_logger — Protocol message logging
==========================================================

Traces every protocol line the hub sends and receives, with the
turn number, the player and the reply the hub expects next.
"""

from __future__ import annotations
import sys
from datetime import datetime
from typing import Optional, TextIO

# ══════════════════════════════════════════════════════════════
# ANSI COLOR CODES
# ══════════════════════════════════════════════════════════════

GREEN = "\033[32m"         # Sent lines
ORANGE = "\033[38;5;208m"  # Received lines
RESET = "\033[0m"

# ══════════════════════════════════════════════════════════════
# COMMAND → EXPECTED REPLY
# ══════════════════════════════════════════════════════════════

EXPECTED_RESPONSES = {
    "turn": "keepall | reroll",
    "rerolled": "keepall | reroll",
    "stay?": "stay | go",
    "rolled": "None",
    "points": "None",
    "attacks": "None",
    "eliminated": "None",
    "claim": "None",
    "winner": "None (terminal)",
    "shutdown": "None (terminal)",
    "keepall": "Broadcast rolled",
    "reroll": "rerolled",
    "stay": "Continue turn",
    "go": "claim",
}


def _command_of(line: str) -> str:
    return line.rstrip("\n").split(" ", 1)[0]


class ProtocolLogger:
    """Logger for protocol lines exchanged with players."""

    def __init__(self, stream: Optional[TextIO] = None, enabled: bool = True):
        self.stream = stream
        self.enabled = enabled
        self._turn_number = 0

    def set_turn(self, turn_number: int) -> None:
        """Set current turn number for logging context."""
        self._turn_number = turn_number

    def _out(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stdout

    def _now(self) -> str:
        return datetime.now().strftime("%H:%M:%S:%f")[:-3]

    def log_sent(self, label: str, line: str) -> None:
        """Log a line sent to a player."""
        if not self.enabled:
            return
        text = line.rstrip("\n")
        expected = EXPECTED_RESPONSES.get(_command_of(line), "Unknown")
        print(
            f"{GREEN}{self._now()} | TURN: {self._turn_number:4} | SENT     | "
            f"to   {label} | {text:40} | EXPECTED-RESPONSE: {expected}{RESET}",
            file=self._out(),
        )

    def log_received(self, label: str, line: str) -> None:
        """Log a line received from a player."""
        if not self.enabled:
            return
        text = line.rstrip("\n")
        expected = EXPECTED_RESPONSES.get(_command_of(line), "Unknown")
        print(
            f"{ORANGE}{self._now()} | TURN: {self._turn_number:4} | RECEIVED | "
            f"from {label} | {text:40} | EXPECTED-RESPONSE: {expected}{RESET}",
            file=self._out(),
        )


# Global singleton instance
_protocol_logger: Optional[ProtocolLogger] = None


def get_protocol_logger() -> ProtocolLogger:
    """Get or create the global protocol logger instance (disabled by default)."""
    global _protocol_logger
    if _protocol_logger is None:
        _protocol_logger = ProtocolLogger(enabled=False)
    return _protocol_logger
