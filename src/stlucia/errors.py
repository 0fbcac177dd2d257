"""
stlucia.errors — Custom exception classes
=========================================

Defines the exception hierarchy for the hub and the player client.
Every fatal condition maps to one exception class, and each class knows
its process exit code and the single diagnostic line printed on exit.
Each exception stores its context for structured logging.
"""

from __future__ import annotations
from enum import IntEnum
from typing import Any, Dict, Optional

from .error_formatter import format_error_block


class ExitCode(IntEnum):
    """Hub process exit codes."""
    SUCCESS = 0
    INVALID_ARGUMENTS = 1
    INVALID_SCORE = 2
    OPEN_ERROR = 3
    INVALID_FILE = 4
    PIPING_FAILURE = 5
    PLAYER_QUIT = 6
    INVALID_MESSAGE = 7
    INVALID_REQUEST = 8
    SIGINT_ACTION = 9


class PlayerExitCode(IntEnum):
    """Player process exit codes."""
    SUCCESS = 0
    INVALID_ARGUMENT_COUNT = 1
    INVALID_PLAYER_COUNT = 2
    INVALID_ID = 3
    PIPING_FAILURE = 4
    INVALID_MESSAGE = 5
    INVALID_DECISION = 6


class StLuciaError(Exception):
    """Base exception for all St Lucia package errors."""

    exit_code: int = 1
    diagnostic: str = ""

    def __init__(
        self,
        detail: str = "",
        player_label: Optional[str] = None,
        raw_line: Optional[str] = None,
    ):
        self.detail = detail
        self.player_label = player_label
        self.raw_line = raw_line
        super().__init__(detail or self.diagnostic)

    def context(self) -> Dict[str, Any]:
        return {
            "player": self.player_label,
            "raw_line": self.raw_line,
        }

    def format_error_log(self) -> str:
        return format_error_block(
            error_type=self.__class__.__name__,
            exit_code=int(self.exit_code),
            diagnostic=self.diagnostic,
            detail=self.detail,
            context=self.context(),
        )


# ══════════════════════════════════════════════════════════════
# HUB: CONFIGURATION ERRORS
# ══════════════════════════════════════════════════════════════

class InvalidArgumentsError(StLuciaError):
    """Wrong number of command line arguments."""
    exit_code = ExitCode.INVALID_ARGUMENTS
    diagnostic = "Usage: stlucia rollfile winscore prog1 prog2 [prog3 ...]"


class InvalidScoreError(StLuciaError):
    """Score limit is not a positive integer."""
    exit_code = ExitCode.INVALID_SCORE
    diagnostic = "Invalid score"


class RollFileOpenError(StLuciaError):
    """Roll file cannot be opened for reading."""
    exit_code = ExitCode.OPEN_ERROR
    diagnostic = "Unable to access rollfile"


class InvalidRollFileError(StLuciaError):
    """Roll file is empty or holds an illegal character."""
    exit_code = ExitCode.INVALID_FILE
    diagnostic = "Error reading rolls"


# ══════════════════════════════════════════════════════════════
# HUB: ORCHESTRATION AND PROTOCOL ERRORS
# ══════════════════════════════════════════════════════════════

class PipingFailureError(StLuciaError):
    """A player could not be started, piped to, or failed the handshake."""
    exit_code = ExitCode.PIPING_FAILURE
    diagnostic = "Unable to start subprocess"


class PlayerQuitError(StLuciaError):
    """A player closed its output stream while a reply was expected."""
    exit_code = ExitCode.PLAYER_QUIT
    diagnostic = "Player quit"


class InvalidMessageError(StLuciaError):
    """A player sent a malformed line (field count, length or charset)."""
    exit_code = ExitCode.INVALID_MESSAGE
    diagnostic = "Invalid message received from player"


class InvalidRequestError(StLuciaError):
    """A player sent a well-formed line that breaks a game rule."""
    exit_code = ExitCode.INVALID_REQUEST
    diagnostic = "Invalid request by player"


class HubInterruptedError(StLuciaError):
    """The hub received SIGINT."""
    exit_code = ExitCode.SIGINT_ACTION
    diagnostic = "SIGINT caught"


# ══════════════════════════════════════════════════════════════
# PLAYER CLIENT ERRORS
# ══════════════════════════════════════════════════════════════

class PlayerClientError(StLuciaError):
    """Base exception for fatal conditions inside a player process."""


class PlayerArgumentCountError(PlayerClientError):
    exit_code = PlayerExitCode.INVALID_ARGUMENT_COUNT
    diagnostic = "Usage: player number_of_players my_id"


class PlayerCountError(PlayerClientError):
    exit_code = PlayerExitCode.INVALID_PLAYER_COUNT
    diagnostic = "Invalid player count"


class PlayerIdError(PlayerClientError):
    exit_code = PlayerExitCode.INVALID_ID
    diagnostic = "Invalid player ID"


class HubLostError(PlayerClientError):
    """The hub closed the player's input stream."""
    exit_code = PlayerExitCode.PIPING_FAILURE
    diagnostic = "Unexpectedly lost contact with StLucia"


class BadHubMessageError(PlayerClientError):
    """The hub sent a line outside the protocol."""
    exit_code = PlayerExitCode.INVALID_MESSAGE
    diagnostic = "Bad message from StLucia"


class StrategyDecisionError(PlayerClientError):
    """The strategy chose to reroll dice the player does not hold."""
    exit_code = PlayerExitCode.INVALID_DECISION
    diagnostic = "Invalid decision by strategy"
