# Area: Shared
# PRD: docs/protocol.md
"""
stlucia._shared.models — Participant model
==========================================

Per-participant game record and the health rules that both sides of
the protocol apply: the hub to its authoritative copy, each player to
its shadow copy.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .protocol import get_player_label

STARTING_HEALTH = 10


class PlayerStatus(Enum):
    """Connection/elimination status of a participant."""
    UNCONNECTED = "unconnected"   # Not yet piped to / handshake pending
    REMAINING = "remaining"       # In the game
    ELIMINATED = "eliminated"     # Out of the game, never revived


@dataclass
class Participant:
    """One participant's game record."""
    number: int
    health: int = STARTING_HEALTH
    points: int = 0
    tokens: int = 0
    status: PlayerStatus = PlayerStatus.UNCONNECTED

    @property
    def label(self) -> str:
        return get_player_label(self.number)

    @property
    def is_eliminated(self) -> bool:
        return self.status == PlayerStatus.ELIMINATED

    @property
    def is_remaining(self) -> bool:
        return self.status == PlayerStatus.REMAINING


def heal(participant: Participant, amount: int,
         player_in_st_lucia: Optional[int]) -> int:
    """
    Heal a participant, capped at STARTING_HEALTH.

    The St Lucia holder cannot heal.

    Returns:
        The health actually recovered
    """
    if amount <= 0 or participant.number == player_in_st_lucia:
        return 0
    recovered = min(amount, STARTING_HEALTH - participant.health)
    participant.health += recovered
    return recovered


def damage(participant: Participant, amount: int) -> int:
    """
    Damage a participant. Health never drops below zero.

    Returns:
        The health actually lost
    """
    lost = min(amount, participant.health)
    participant.health -= lost
    return lost


def players_remaining(participants: Sequence[Participant]) -> int:
    """Count participants that are not eliminated."""
    return sum(1 for p in participants if not p.is_eliminated)
