# Area: Shared
# PRD: docs/protocol.md
"""
stlucia._shared.logging_config — Structured logging setup
=========================================================

Configures dual logging: terminal (coloured on a tty) + file (JSON).
Provides the fatal-error reporting used by both the hub and players.
Protocol logging mode suppresses standard logs on the terminal.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional, TextIO

from .logging_formatters import JSONFormatter, TerminalFilter, TerminalFormatter

if TYPE_CHECKING:
    from ..errors import StLuciaError

# Package logger
logger = logging.getLogger("stlucia")


def _is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def setup_logging(
    log_file_path: Optional[str] = None,
    level: int = logging.INFO,
    logger_name: str = "stlucia",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str, optional
        Path to a JSON log file. No file handler when None.
    level : int
        Logging level. Defaults to INFO.
    logger_name : str
        Logger to configure. Defaults to the package logger.
    stream : TextIO, optional
        Terminal stream. Defaults to stderr, since a player's stdout
        is its protocol pipe.
    """
    pkg_logger = logging.getLogger(logger_name)
    pkg_logger.setLevel(level)

    # Remove existing handlers
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()

    # Terminal handler with colors
    terminal_stream = stream or sys.stderr
    terminal_handler = logging.StreamHandler(terminal_stream)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
        use_color=_is_tty(terminal_stream),
    ))
    terminal_handler.addFilter(TerminalFilter())
    pkg_logger.addHandler(terminal_handler)

    # File handler with JSON
    if log_file_path:
        try:
            log_path = Path(log_file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            pkg_logger.addHandler(file_handler)
        except OSError as e:
            pkg_logger.warning(f"Could not create log file: {e}")

    # Prevent propagation to root logger
    pkg_logger.propagate = False
    return pkg_logger


def log_fatal_error(error: "StLuciaError") -> None:
    """
    Report a fatal error.

    Prints the error's one-line diagnostic on stderr (bypassing the
    logger for exact formatting) and writes the structured error block
    to the log file only.
    """
    if logger.handlers:
        logger.error(
            error.format_error_log(),
            extra={"file_only": True, "player": error.player_label},
        )
    if error.diagnostic:
        print(error.diagnostic, file=sys.stderr)
