# Area: Hub
# PRD: docs/protocol.md
"""
stlucia._hub.state_machine — Turn State Machine
===============================================

Tracks which phase of a turn the coordinator is in and rejects any
step taken out of order.
"""

import logging

from .enums import TurnPhase, TurnEvent

logger = logging.getLogger("stlucia.hub.state_machine")


# Valid phase transitions: {current_phase: {event: next_phase}}
TRANSITIONS = {
    TurnPhase.IDLE: {
        TurnEvent.TURN_START: TurnPhase.ROLL,
    },
    TurnPhase.ROLL: {
        TurnEvent.DICE_OFFERED: TurnPhase.REROLL_NEGOTIATION,
    },
    TurnPhase.REROLL_NEGOTIATION: {
        TurnEvent.REROLLED: TurnPhase.REROLL_NEGOTIATION,
        TurnEvent.DICE_KEPT: TurnPhase.HEAL,
    },
    TurnPhase.HEAL: {
        TurnEvent.HEALED: TurnPhase.ATTACK,
    },
    TurnPhase.ATTACK: {
        TurnEvent.STAY_QUERIED: TurnPhase.STAY_NEGOTIATION,
        TurnEvent.ATTACK_RESOLVED: TurnPhase.SCORE,
    },
    TurnPhase.STAY_NEGOTIATION: {
        TurnEvent.STAY_ANSWERED: TurnPhase.SCORE,
    },
    TurnPhase.SCORE: {
        TurnEvent.SCORED: TurnPhase.ELIMINATION,
    },
    TurnPhase.ELIMINATION: {
        TurnEvent.SWEPT: TurnPhase.WIN_CHECK,
    },
    TurnPhase.WIN_CHECK: {
        TurnEvent.TURN_PASSED: TurnPhase.IDLE,
        TurnEvent.GAME_WON: TurnPhase.TERMINAL,
    },
    TurnPhase.TERMINAL: {},
}


class TurnStateMachine:
    """
    State machine for the phases of a turn.

    Attributes:
        current_phase: The phase the coordinator is in
        turns_started: Number of turns started since the last reset
    """

    def __init__(self):
        """Initialize state machine in IDLE."""
        self.current_phase = TurnPhase.IDLE
        self.turns_started = 0

    def can_transition(self, event: TurnEvent) -> bool:
        """
        Check if a transition is valid from the current phase.

        Args:
            event: The event to check

        Returns:
            True if the transition is valid, False otherwise
        """
        return event in TRANSITIONS.get(self.current_phase, {})

    def transition(self, event: TurnEvent) -> TurnPhase:
        """
        Execute a phase transition.

        Args:
            event: The event triggering the transition

        Returns:
            The new phase after transition

        Raises:
            ValueError: If the transition is not valid
        """
        if not self.can_transition(event):
            raise ValueError(
                f"Invalid transition: {event.value} from {self.current_phase.value}"
            )
        next_phase = TRANSITIONS[self.current_phase][event]
        logger.debug(f"Phase: {self.current_phase.value} → {next_phase.value}")
        if event == TurnEvent.TURN_START:
            self.turns_started += 1
        self.current_phase = next_phase
        return next_phase

    @property
    def is_terminal(self) -> bool:
        return self.current_phase == TurnPhase.TERMINAL

    def reset(self) -> None:
        """Reset state machine to IDLE."""
        self.current_phase = TurnPhase.IDLE
        self.turns_started = 0
