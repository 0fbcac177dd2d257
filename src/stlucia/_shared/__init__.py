# Area: Shared
# PRD: docs/protocol.md
"""
Shared building blocks used by both the hub and the player client.

This package contains:
- Dice sets and the line codec
- Protocol vocabulary and message builders
- The participant model and health rules
- Logging configuration
"""

from .dice import DiceSet, FACES, DICE_SET_SIZE, is_valid_dice_string
from .codec import parse, render, MAX_COMMANDS, MAX_MESSAGE_LENGTH
from .models import (
    Participant,
    PlayerStatus,
    STARTING_HEALTH,
    heal,
    damage,
    players_remaining,
)
from .logging_config import setup_logging, log_fatal_error
from .logging_formatters import (
    enable_protocol_mode,
    disable_protocol_mode,
    is_protocol_mode_enabled,
)
from .protocol_logger import get_protocol_logger, ProtocolLogger

__all__ = [
    "DiceSet",
    "FACES",
    "DICE_SET_SIZE",
    "is_valid_dice_string",
    "parse",
    "render",
    "MAX_COMMANDS",
    "MAX_MESSAGE_LENGTH",
    "Participant",
    "PlayerStatus",
    "STARTING_HEALTH",
    "heal",
    "damage",
    "players_remaining",
    "setup_logging",
    "log_fatal_error",
    "enable_protocol_mode",
    "disable_protocol_mode",
    "is_protocol_mode_enabled",
    "get_protocol_logger",
    "ProtocolLogger",
]
