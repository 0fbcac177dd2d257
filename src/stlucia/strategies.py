# Area: Player Strategies
# PRD: docs/protocol.md
"""
stlucia.strategies — Built-in player strategies
===============================================

Four ready-to-use strategies, each launchable as its own program:

    stlucia-eait N L    # EAIT: chase number sets, flee when hurt
    stlucia-habs N L    # HABS: hold steady, attack only when hurt
    stlucia-hass N L    # HASS: go for the kill, never leave
    stlucia-mabs N L    # MABS: attack, always leave when asked

or through the module form ``python -m stlucia.player <name> N L``.
"""

from typing import Dict, Type

from ._shared.dice import ATTACK_FACE, DiceSet, HEAL_FACE, POINTS_FACE
from .strategy import PlayerStrategy, PlayerView

NUMBER_FACES = ("1", "2", "3")


def _reroll_all(rerolls: DiceSet, view: PlayerView, *faces: str) -> None:
    """Add every die of the given faces in the latest dice to ``rerolls``."""
    for face in faces:
        rerolls.add(face, view.latest_dice.count(face))


class EAITStrategy(PlayerStrategy):
    """Rerolls incomplete number sets, attacks and points; retreats when hurt."""

    name = "eait"

    SET_SIZE = 3
    REROLL_HEALTH_THRESHOLD = 5
    RETREAT_HEALTH_THRESHOLD = 5

    def choose_reroll(self, view: PlayerView) -> DiceSet:
        rerolls = DiceSet()
        for face in NUMBER_FACES:
            if view.latest_dice.count(face) < self.SET_SIZE:
                _reroll_all(rerolls, view, face)
        if view.my_health > self.REROLL_HEALTH_THRESHOLD:
            _reroll_all(rerolls, view, HEAL_FACE)
        _reroll_all(rerolls, view, ATTACK_FACE, POINTS_FACE)
        return rerolls

    def choose_retreat(self, view: PlayerView) -> bool:
        return view.my_health < self.RETREAT_HEALTH_THRESHOLD


class HABSStrategy(PlayerStrategy):
    """Keeps almost everything; throws attacks away when its health is low."""

    name = "habs"

    REROLL_HEALTH_THRESHOLD = 5
    RETREAT_HEALTH_THRESHOLD = 4
    # With this many left, leaving just hands the other player St Lucia
    HOLD_REMAINING_PLAYERS = 2

    def choose_reroll(self, view: PlayerView) -> DiceSet:
        rerolls = DiceSet()
        if view.my_health < self.REROLL_HEALTH_THRESHOLD:
            _reroll_all(rerolls, view, ATTACK_FACE)
        return rerolls

    def choose_retreat(self, view: PlayerView) -> bool:
        if view.players_remaining == self.HOLD_REMAINING_PLAYERS:
            return False
        return view.my_health < self.RETREAT_HEALTH_THRESHOLD


class HASSStrategy(PlayerStrategy):
    """Hunts the St Lucia holder and never gives up the territory."""

    name = "hass"

    def choose_reroll(self, view: PlayerView) -> DiceSet:
        rerolls = DiceSet()
        if view.in_st_lucia:
            _reroll_all(rerolls, view, ATTACK_FACE)
        else:
            _reroll_all(rerolls, view, POINTS_FACE)
            holder_health = view.holder_health
            lethal = holder_health is not None \
                and view.latest_dice.attacks >= holder_health
            if not lethal:
                _reroll_all(rerolls, view, ATTACK_FACE)
        _reroll_all(rerolls, view, *NUMBER_FACES, HEAL_FACE)
        return rerolls

    def choose_retreat(self, view: PlayerView) -> bool:
        return False


class MABSStrategy(PlayerStrategy):
    """Attacks from outside, heals from inside, always leaves when asked."""

    name = "mabs"

    def choose_reroll(self, view: PlayerView) -> DiceSet:
        rerolls = DiceSet()
        if view.in_st_lucia:
            _reroll_all(rerolls, view, HEAL_FACE)
        else:
            _reroll_all(rerolls, view, ATTACK_FACE)
        _reroll_all(rerolls, view, "1", "2", POINTS_FACE)
        return rerolls

    def choose_retreat(self, view: PlayerView) -> bool:
        return True


STRATEGIES: Dict[str, Type[PlayerStrategy]] = {
    cls.name: cls
    for cls in (EAITStrategy, HABSStrategy, HASSStrategy, MABSStrategy)
}


def get_strategy(name: str) -> PlayerStrategy:
    """
    Instantiate a built-in strategy by name.

    Raises:
        KeyError: If no strategy has that name
    """
    return STRATEGIES[name]()
