# Area: Hub
# PRD: docs/protocol.md
"""
Internal hub machinery.

This package contains:
- The roll source and the game state
- Player transport channels and the process orchestrator
- The turn state machine and the Turn Coordinator
"""

from .roll_file import RollFile
from .state import GameState, HubPlayer
from .channel import PlayerChannel, PipeChannel
from .orchestrator import ProcessOrchestrator
from .enums import TurnPhase, TurnEvent
from .state_machine import TurnStateMachine, TRANSITIONS
from .coordinator import TurnCoordinator, score_dice, convert_tokens

__all__ = [
    "RollFile",
    "GameState",
    "HubPlayer",
    "PlayerChannel",
    "PipeChannel",
    "ProcessOrchestrator",
    "TurnPhase",
    "TurnEvent",
    "TurnStateMachine",
    "TRANSITIONS",
    "TurnCoordinator",
    "score_dice",
    "convert_tokens",
]
