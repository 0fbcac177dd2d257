# Area: Shared
# PRD: docs/protocol.md
"""
stlucia._shared.logging_formatters — Log record formatting
==========================================================

The terminal side shows game narration and warnings, coloured only on
a real terminal, since the hub's narration is usually piped. The file
side writes one JSON object per record, tagged with the player label
when the record concerns one player.

While protocol tracing is on, the terminal shows wire lines only
(printed by the ProtocolLogger); narration still reaches the log file.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

_protocol_mode_enabled = False


class TerminalFilter(logging.Filter):
    """
    Decide which records reach the terminal.

    Dropped: everything while protocol tracing is on, and records
    flagged ``file_only`` (the structured fatal-error block, which would
    otherwise break the one-line diagnostic rule).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if _protocol_mode_enabled:
            return False
        return not getattr(record, "file_only", False)


class TerminalFormatter(logging.Formatter):
    """Narration line, with the level coloured when ``use_color`` is set."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, fmt=None, datefmt=None, use_color: bool = True):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color:
            return super().format(record)
        # Colour a copy; the file handler sees the same record
        colored = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelname, self.RESET)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


class JSONFormatter(logging.Formatter):
    """One JSON object per line for the log file."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        player = getattr(record, "player", None)
        if player is not None:
            entry["player"] = player
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


# ── Protocol tracing switch ──────────────────────────────────

def enable_protocol_mode() -> None:
    """Hide narration from the terminal while wire lines are traced."""
    global _protocol_mode_enabled
    _protocol_mode_enabled = True


def disable_protocol_mode() -> None:
    global _protocol_mode_enabled
    _protocol_mode_enabled = False


def is_protocol_mode_enabled() -> bool:
    return _protocol_mode_enabled
