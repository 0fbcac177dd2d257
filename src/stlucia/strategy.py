# Area: Player Strategies
# PRD: docs/protocol.md
"""
stlucia.strategy — The 2 decisions a player strategy makes
==========================================================

Subclass PlayerStrategy and implement the 2 methods. The player client
calls them at the right time based on incoming hub messages; a
strategy never sees protocol lines, pipes or validation.

    import sys

    from stlucia import DiceSet, PlayerStrategy, run_player

    class Cautious(PlayerStrategy):
        def choose_reroll(self, view):
            return DiceSet()            # always keep

        def choose_retreat(self, view):
            return view.my_health < 6

    sys.exit(run_player(Cautious()))
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ._shared.dice import DiceSet


@dataclass
class PlayerView:
    """
    What a strategy may look at when deciding.

    Attributes:
        my_number: This player's index (0 for label 'A')
        latest_dice: The dice being decided on (a copy)
        health: Shadow health of every participant, by index
        player_in_st_lucia: Index of the St Lucia holder, None when empty
        players_remaining: Participants not yet eliminated
        number_of_rerolls: Rerolls already taken this turn
    """
    my_number: int
    latest_dice: DiceSet
    health: List[int]
    player_in_st_lucia: Optional[int]
    players_remaining: int
    number_of_rerolls: int = 0

    @property
    def my_health(self) -> int:
        return self.health[self.my_number]

    @property
    def in_st_lucia(self) -> bool:
        return self.player_in_st_lucia == self.my_number

    @property
    def holder_health(self) -> Optional[int]:
        if self.player_in_st_lucia is None:
            return None
        return self.health[self.player_in_st_lucia]


class PlayerStrategy(ABC):
    """
    Abstract base class for a St Lucia player strategy.

    Subclass this and implement both methods. Each receives a fresh
    PlayerView; the client applies the game's rules (reroll limit,
    healing, shadow state) around the answers.
    """

    # Short name used to select the strategy on the command line
    name: str = ""

    # ──────────────────────────────────────────────────────────────
    # DECISION 1: Which dice to reroll
    # ──────────────────────────────────────────────────────────────
    @abstractmethod
    def choose_reroll(self, view: PlayerView) -> DiceSet:
        """
        Called on ``turn`` and on ``rerolled`` while rerolls remain.

        Parameters
        ----------
        view : PlayerView
            The current dice in ``view.latest_dice`` and the player's
            picture of the table.

        Returns
        -------
        DiceSet
            The dice to throw again, a sub-multiset of the latest dice.
            An empty set keeps every die and ends the turn's rolling.

        Example
        -------
        >>> def choose_reroll(self, view):
        ...     rerolls = DiceSet()
        ...     rerolls.add("P", view.latest_dice.points)
        ...     return rerolls
        """
        ...

    # ──────────────────────────────────────────────────────────────
    # DECISION 2: Leave St Lucia after being attacked
    # ──────────────────────────────────────────────────────────────
    @abstractmethod
    def choose_retreat(self, view: PlayerView) -> bool:
        """
        Called on ``stay?``, sent only to the St Lucia holder after an
        inward attack it survived.

        Returns
        -------
        bool
            True to give up St Lucia (``go``), False to hold it (``stay``).
        """
        ...
