# Area: Hub Tests
# PRD: docs/protocol.md
"""Tests for the Turn State Machine."""

import pytest

from stlucia._hub.enums import TurnEvent, TurnPhase
from stlucia._hub.state_machine import TRANSITIONS, TurnStateMachine


class TestTurnStateMachineBase:
    """Tests for basic state machine functionality."""

    def test_initial_phase_is_idle(self):
        sm = TurnStateMachine()
        assert sm.current_phase == TurnPhase.IDLE
        assert sm.turns_started == 0

    def test_can_transition(self):
        sm = TurnStateMachine()
        assert sm.can_transition(TurnEvent.TURN_START) is True
        assert sm.can_transition(TurnEvent.DICE_KEPT) is False

    def test_transition_raises_on_invalid(self):
        sm = TurnStateMachine()
        with pytest.raises(ValueError):
            sm.transition(TurnEvent.HEALED)

    def test_terminal_has_no_exits(self):
        assert TRANSITIONS[TurnPhase.TERMINAL] == {}

    def test_every_phase_listed(self):
        assert set(TRANSITIONS) == set(TurnPhase)


class TestTurnStateMachineTransitions:
    """Tests for whole turns."""

    def _to_attack(self, sm):
        sm.transition(TurnEvent.TURN_START)
        sm.transition(TurnEvent.DICE_OFFERED)
        sm.transition(TurnEvent.REROLLED)
        sm.transition(TurnEvent.REROLLED)
        sm.transition(TurnEvent.DICE_KEPT)
        sm.transition(TurnEvent.HEALED)
        assert sm.current_phase == TurnPhase.ATTACK

    def test_turn_without_stay_query(self):
        sm = TurnStateMachine()
        self._to_attack(sm)
        sm.transition(TurnEvent.ATTACK_RESOLVED)
        sm.transition(TurnEvent.SCORED)
        sm.transition(TurnEvent.SWEPT)
        sm.transition(TurnEvent.TURN_PASSED)
        assert sm.current_phase == TurnPhase.IDLE
        assert sm.turns_started == 1

    def test_turn_with_stay_query_and_win(self):
        sm = TurnStateMachine()
        self._to_attack(sm)
        assert sm.transition(TurnEvent.STAY_QUERIED) == TurnPhase.STAY_NEGOTIATION
        sm.transition(TurnEvent.STAY_ANSWERED)
        sm.transition(TurnEvent.SCORED)
        sm.transition(TurnEvent.SWEPT)
        sm.transition(TurnEvent.GAME_WON)
        assert sm.is_terminal

    def test_no_scoring_before_attack(self):
        sm = TurnStateMachine()
        self._to_attack(sm)
        with pytest.raises(ValueError):
            sm.transition(TurnEvent.SWEPT)

    def test_reset(self):
        sm = TurnStateMachine()
        self._to_attack(sm)
        sm.reset()
        assert sm.current_phase == TurnPhase.IDLE
        assert sm.turns_started == 0
