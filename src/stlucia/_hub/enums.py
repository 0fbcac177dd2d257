# Area: Hub
# PRD: docs/protocol.md
"""
stlucia._hub.enums — Turn State Machine Enums
=============================================

Defines the phases and events of one participant's turn as driven by
the Turn Coordinator.
"""

from enum import Enum


class TurnPhase(Enum):
    """
    Phases of the turn state machine.

    Phase transitions:
    IDLE -> ROLL (on TURN_START)
    ROLL -> REROLL_NEGOTIATION (on DICE_OFFERED)
    REROLL_NEGOTIATION -> REROLL_NEGOTIATION (on REROLLED)
    REROLL_NEGOTIATION -> HEAL (on DICE_KEPT)
    HEAL -> ATTACK (on HEALED)
    ATTACK -> STAY_NEGOTIATION (on STAY_QUERIED)
    ATTACK -> SCORE (on ATTACK_RESOLVED)
    STAY_NEGOTIATION -> SCORE (on STAY_ANSWERED)
    SCORE -> ELIMINATION (on SCORED)
    ELIMINATION -> WIN_CHECK (on SWEPT)
    WIN_CHECK -> IDLE (on TURN_PASSED)
    WIN_CHECK -> TERMINAL (on GAME_WON)
    """
    IDLE = "IDLE"
    ROLL = "ROLL"
    REROLL_NEGOTIATION = "REROLL_NEGOTIATION"
    HEAL = "HEAL"
    ATTACK = "ATTACK"
    STAY_NEGOTIATION = "STAY_NEGOTIATION"
    SCORE = "SCORE"
    ELIMINATION = "ELIMINATION"
    WIN_CHECK = "WIN_CHECK"
    TERMINAL = "TERMINAL"


class TurnEvent(Enum):
    """
    Events that trigger phase transitions.

    Events are triggered by:
    - TURN_START: the coordinator picks the active participant
    - DICE_OFFERED: ``turn <dice>`` sent to the active participant
    - REROLLED: a ``reroll`` request was served with ``rerolled <dice>``
    - DICE_KEPT: ``keepall`` received
    - HEALED: healing applied
    - STAY_QUERIED: ``stay?`` sent to the St Lucia holder
    - ATTACK_RESOLVED: attack finished without a stay query
    - STAY_ANSWERED: holder replied ``stay`` or ``go``
    - SCORED: points applied
    - SWEPT: elimination sweep done
    - TURN_PASSED: nobody won, next participant's turn
    - GAME_WON: winner announced
    """
    TURN_START = "TURN_START"
    DICE_OFFERED = "DICE_OFFERED"
    REROLLED = "REROLLED"
    DICE_KEPT = "DICE_KEPT"
    HEALED = "HEALED"
    STAY_QUERIED = "STAY_QUERIED"
    ATTACK_RESOLVED = "ATTACK_RESOLVED"
    STAY_ANSWERED = "STAY_ANSWERED"
    SCORED = "SCORED"
    SWEPT = "SWEPT"
    TURN_PASSED = "TURN_PASSED"
    GAME_WON = "GAME_WON"
