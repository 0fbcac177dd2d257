# Area: Shared
# PRD: docs/protocol.md
"""
stlucia._shared.protocol — Protocol vocabulary and message builders
===================================================================

Names every message of the hub/player protocol and builds outgoing
lines. All lines are space-delimited and newline-terminated.
"""

from __future__ import annotations

from typing import Union

from .codec import render
from .dice import DiceSet

# Handshake byte a player writes before any message
HANDSHAKE = "!"

# Hub → player
TURN = "turn"
REROLLED = "rerolled"
ROLLED = "rolled"
POINTS = "points"
ATTACKS = "attacks"
ELIMINATED = "eliminated"
CLAIM = "claim"
STAY_QUERY = "stay?"
WINNER = "winner"
SHUTDOWN = "shutdown"

# Player → hub
KEEPALL = "keepall"
REROLL = "reroll"
STAY = "stay"
GO = "go"

# Attack directions
ATTACK_IN = "in"
ATTACK_OUT = "out"

HUB_MESSAGES = frozenset({
    TURN, REROLLED, ROLLED, POINTS, ATTACKS,
    ELIMINATED, CLAIM, STAY_QUERY, WINNER, SHUTDOWN,
})

# Player labels
FIRST_PLAYER_LETTER = "A"
LABEL_LENGTH = 1
MIN_PLAYERS = 2
MAX_PLAYERS = 26


def get_player_label(player_number: int) -> str:
    """Return the label of a player index (0 → 'A')."""
    return chr(ord(FIRST_PLAYER_LETTER) + player_number)


def get_player_number(label: str) -> int:
    """Return the index of a player label ('A' → 0)."""
    return ord(label) - ord(FIRST_PLAYER_LETTER)


Dice = Union[DiceSet, str]


# ══════════════════════════════════════════════════════════════
# HUB → PLAYER
# ══════════════════════════════════════════════════════════════

def build_turn(dice: Dice) -> str:
    return render(TURN, dice)


def build_rerolled(dice: Dice) -> str:
    return render(REROLLED, dice)


def build_rolled(label: str, dice: Dice) -> str:
    return render(ROLLED, label, dice)


def build_points(label: str, gained: int) -> str:
    return render(POINTS, label, gained)


def build_attacks(label: str, damage: int, direction: str) -> str:
    return render(ATTACKS, label, damage, direction)


def build_eliminated(label: str) -> str:
    return render(ELIMINATED, label)


def build_claim(label: str) -> str:
    return render(CLAIM, label)


def build_stay_query() -> str:
    return render(STAY_QUERY)


def build_winner(label: str) -> str:
    return render(WINNER, label)


def build_shutdown() -> str:
    return render(SHUTDOWN)


# ══════════════════════════════════════════════════════════════
# PLAYER → HUB
# ══════════════════════════════════════════════════════════════

def build_keepall() -> str:
    return render(KEEPALL)


def build_reroll(dice: Dice) -> str:
    return render(REROLL, dice)


def build_stay() -> str:
    return render(STAY)


def build_go() -> str:
    return render(GO)
