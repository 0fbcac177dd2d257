# Area: Player
# PRD: docs/protocol.md
"""
stlucia._player.incoming_validator — Hub message format validation
==================================================================

Validates the fields of a line received from the hub before the player
acts on it. Returns a list of error strings (empty list = valid
message). Unlike the hub's validation, unknown commands are errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from .._shared import protocol
from .._shared.dice import DICE_SET_SIZE, is_valid_dice_string


# ══════════════════════════════════════════════════════════════
# MESSAGE RULE DEFINITIONS
# ══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class MessageRule:
    """Defines the field layout of one hub message kind."""

    field_count: int
    label_index: Optional[int] = None
    dice_index: Optional[int] = None
    digit_index: Optional[int] = None
    # Highest value allowed at digit_index
    digit_max: int = 9
    direction_index: Optional[int] = None


_MESSAGE_RULES: Dict[str, MessageRule] = {
    protocol.TURN: MessageRule(field_count=2, dice_index=1),
    protocol.REROLLED: MessageRule(field_count=2, dice_index=1),
    protocol.ROLLED: MessageRule(field_count=3, label_index=1, dice_index=2),
    protocol.POINTS: MessageRule(field_count=3, label_index=1, digit_index=2),
    protocol.ATTACKS: MessageRule(
        field_count=4, label_index=1, digit_index=2,
        digit_max=DICE_SET_SIZE, direction_index=3,
    ),
    protocol.ELIMINATED: MessageRule(field_count=2, label_index=1),
    protocol.CLAIM: MessageRule(field_count=2, label_index=1),
    protocol.STAY_QUERY: MessageRule(field_count=1),
    protocol.WINNER: MessageRule(field_count=2, label_index=1),
    protocol.SHUTDOWN: MessageRule(field_count=1),
}

_DIRECTIONS = (protocol.ATTACK_IN, protocol.ATTACK_OUT)


# ══════════════════════════════════════════════════════════════
# FIELD CHECKS
# ══════════════════════════════════════════════════════════════


def is_valid_label(label: str, number_of_players: int) -> bool:
    """Check a label is one letter between A and the last player's letter."""
    if len(label) != protocol.LABEL_LENGTH:
        return False
    number = protocol.get_player_number(label)
    return 0 <= number < number_of_players


def _check_fields(rule: MessageRule, fields: List[str],
                  number_of_players: int) -> List[str]:
    errors: List[str] = []

    if rule.label_index is not None:
        label = fields[rule.label_index]
        if not is_valid_label(label, number_of_players):
            errors.append(f"Invalid player label: {label!r}")

    if rule.dice_index is not None:
        dice = fields[rule.dice_index]
        if len(dice) != DICE_SET_SIZE or not is_valid_dice_string(dice):
            errors.append(f"Invalid dice: {dice!r}")

    if rule.digit_index is not None:
        value = fields[rule.digit_index]
        if len(value) != 1 or not value.isdigit() or int(value) > rule.digit_max:
            errors.append(f"Invalid value: {value!r}")

    if rule.direction_index is not None:
        direction = fields[rule.direction_index]
        if direction not in _DIRECTIONS:
            errors.append(f"Invalid attack direction: {direction!r}")

    return errors


# ══════════════════════════════════════════════════════════════
# PUBLIC API
# ══════════════════════════════════════════════════════════════


def validate_hub_message(fields: List[str], number_of_players: int) -> List[str]:
    """
    Validate a parsed line received from the hub.

    Parameters
    ----------
    fields : List[str]
        The line split into fields; the first is the command.
    number_of_players : int
        Participant count, bounding the legal labels.

    Returns
    -------
    List[str]
        List of validation error strings. Empty if the message is valid.
    """
    command = fields[0] if fields else ""
    if command not in protocol.HUB_MESSAGES:
        return [f"Unknown message: {command!r}"]
    rule = _MESSAGE_RULES[command]

    if len(fields) != rule.field_count:
        return [
            f"'{command}' takes {rule.field_count} field(s), got {len(fields)}"
        ]

    return _check_fields(rule, fields, number_of_players)
