# Area: Hub
# PRD: docs/protocol.md
"""
stlucia._hub.state — Game state and player registry
===================================================

The hub's authoritative state: one record per player (with its
process and channel) and the game-wide fields such as the St Lucia
holder and whose turn it is. Only the Turn Coordinator mutates it once
the game has started.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Optional
import logging
import subprocess

from .._shared.dice import DiceSet
from .._shared.models import Participant
from .._shared.protocol import get_player_label
from .channel import PlayerChannel
from .roll_file import RollFile

logger = logging.getLogger("stlucia.hub.state")


@dataclass
class HubPlayer(Participant):
    """A participant as the hub sees it: game record plus transport."""
    program: str = ""
    process: Optional[subprocess.Popen] = None
    channel: Optional[PlayerChannel] = None


@dataclass
class GameState:
    """
    Full state of one game.

    Attributes:
        score_limit: Points needed to win
        roll_file: The shared roll source
        players: Player registry, indexed by player number
        player_in_st_lucia: Index of the St Lucia holder, None when empty
        current_player_number: Whose turn it is
        number_of_rerolls: Rerolls served during the current turn
        latest_dice: The active player's dice this turn
    """
    score_limit: int
    roll_file: RollFile
    players: List[HubPlayer] = field(default_factory=list)
    player_in_st_lucia: Optional[int] = None
    current_player_number: int = 0
    number_of_rerolls: int = 0
    latest_dice: DiceSet = field(default_factory=DiceSet)

    @classmethod
    def create(cls, score_limit: int, roll_file: RollFile,
               programs: List[str]) -> "GameState":
        """Allocate one Unconnected player per program."""
        players = [HubPlayer(number=i, program=prog) for i, prog in enumerate(programs)]
        return cls(score_limit=score_limit, roll_file=roll_file, players=players)

    @property
    def number_of_players(self) -> int:
        return len(self.players)

    @property
    def st_lucia_holder(self) -> Optional[HubPlayer]:
        if self.player_in_st_lucia is None:
            return None
        return self.players[self.player_in_st_lucia]

    def player_by_label(self, label: str) -> HubPlayer:
        for player in self.players:
            if player.label == label:
                return player
        raise KeyError(label)

    def remaining_players(self) -> Iterator[HubPlayer]:
        return (p for p in self.players if p.is_remaining)

    def is_last_remaining(self, player_number: int) -> bool:
        return all(
            p.is_eliminated for p in self.players if p.number != player_number
        )

    def next_player_number(self, player_number: int) -> int:
        """
        Return the next non-eliminated player after ``player_number``.

        Raises:
            ValueError: If every other player is eliminated
        """
        for step in range(1, self.number_of_players + 1):
            candidate = (player_number + step) % self.number_of_players
            if not self.players[candidate].is_eliminated:
                return candidate
        raise ValueError("No player left to take a turn")

    def describe(self) -> str:
        holder = get_player_label(self.player_in_st_lucia) \
            if self.player_in_st_lucia is not None else "-"
        scores = ", ".join(
            f"{p.label}:{p.health}hp/{p.points}pt" for p in self.players
        )
        return f"St Lucia: {holder} | {scores}"
