# Area: Player
# PRD: docs/protocol.md
"""
stlucia.player — Player client
==============================

The program side of the hub protocol. A PlayerClient reads hub lines
from standard input, checks each one, keeps a shadow copy of the table
(health, St Lucia holder, who is out) and asks its PlayerStrategy
whenever a decision is due. Replies go to standard output.

Usage:
    stlucia-mabs number_of_players my_id
    python -m stlucia.player mabs number_of_players my_id

Environment:
    STLUCIA_PLAYER_LOG_LEVEL   terminal log level (default WARNING)
    STLUCIA_PLAYER_LOG_FILE    JSON log file
"""

from __future__ import annotations

import logging
import os
import signal
import sys
from typing import Callable, Dict, List, Optional, TextIO

from ._shared import protocol
from ._shared.codec import parse
from ._shared.dice import DiceSet
from ._shared.logging_config import log_fatal_error, setup_logging
from ._shared.models import Participant, PlayerStatus, damage, heal, players_remaining
from ._player.incoming_validator import is_valid_label, validate_hub_message
from .errors import (
    BadHubMessageError,
    HubLostError,
    InvalidMessageError,
    PlayerArgumentCountError,
    PlayerClientError,
    PlayerCountError,
    PlayerExitCode,
    PlayerIdError,
    StrategyDecisionError,
)
from .strategies import STRATEGIES
from .strategy import PlayerStrategy, PlayerView

logger = logging.getLogger("stlucia.player")

# Rerolls a player takes at most in one turn
ALLOWED_REROLLS = 2


class PlayerClient:
    """
    Plays one game over a pair of text streams.

    Args:
        number_of_players: Participant count from the launch arguments
        my_number: This player's index (0 for label 'A')
        strategy: Makes the reroll and retreat decisions
        stdin: Stream of hub lines. Defaults to sys.stdin
        stdout: Stream for replies. Defaults to sys.stdout
    """

    def __init__(
        self,
        number_of_players: int,
        my_number: int,
        strategy: PlayerStrategy,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.number_of_players = number_of_players
        self.my_number = my_number
        self.strategy = strategy
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

        self.players = [Participant(number=i, status=PlayerStatus.REMAINING)
                        for i in range(number_of_players)]
        self.player_in_st_lucia: Optional[int] = None
        self.number_of_rerolls = 0
        self.latest_dice = DiceSet()
        self._finished = False

        self._handlers: Dict[str, Callable[[List[str]], None]] = {
            protocol.TURN: self._on_turn,
            protocol.REROLLED: self._on_rerolled,
            protocol.ROLLED: self._on_rolled,
            protocol.POINTS: self._on_points,
            protocol.ATTACKS: self._on_attacks,
            protocol.ELIMINATED: self._on_eliminated,
            protocol.CLAIM: self._on_claim,
            protocol.STAY_QUERY: self._on_stay_query,
            protocol.WINNER: self._on_game_over,
            protocol.SHUTDOWN: self._on_game_over,
        }

    @property
    def me(self) -> Participant:
        return self.players[self.my_number]

    # ── Main loop ─────────────────────────────────────────────

    def run(self) -> None:
        """
        Handshake, then answer hub lines until the game ends.

        Raises:
            HubLostError: The hub closed this player's input or output
            BadHubMessageError: The hub sent a line outside the protocol
        """
        self._write(protocol.HANDSHAKE)
        while not self._finished:
            line = self.stdin.readline()
            if not line:
                raise HubLostError("End of input from hub")
            self.handle_line(line)

    def handle_line(self, line: str) -> None:
        """Validate one hub line and act on it."""
        logger.info(f"From StLucia: {line.rstrip()}")
        try:
            fields = parse(line)
        except InvalidMessageError as e:
            raise BadHubMessageError(e.detail, raw_line=line) from e

        errors = validate_hub_message(fields, self.number_of_players)
        if errors:
            raise BadHubMessageError("; ".join(errors), raw_line=line)
        self._handlers[fields[0]](fields)

    def _write(self, text: str) -> None:
        try:
            self.stdout.write(text)
            self.stdout.flush()
        except BrokenPipeError as e:
            raise HubLostError("Hub closed its input") from e

    def _view(self) -> PlayerView:
        return PlayerView(
            my_number=self.my_number,
            latest_dice=self.latest_dice.copy(),
            health=[p.health for p in self.players],
            player_in_st_lucia=self.player_in_st_lucia,
            players_remaining=players_remaining(self.players),
            number_of_rerolls=self.number_of_rerolls,
        )

    # ── Own turn ──────────────────────────────────────────────

    def _on_turn(self, fields: List[str]) -> None:
        self.number_of_rerolls = 0
        self._decide_dice(fields[1])

    def _on_rerolled(self, fields: List[str]) -> None:
        self.number_of_rerolls += 1
        self._decide_dice(fields[1])

    def _decide_dice(self, dice: str) -> None:
        self.latest_dice = DiceSet.from_string(dice)
        if self.number_of_rerolls >= ALLOWED_REROLLS:
            self._keep_dice()
            return

        rerolls = self.strategy.choose_reroll(self._view())
        if not self.latest_dice.contains(rerolls):
            raise StrategyDecisionError(
                f"{type(self.strategy).__name__} chose {rerolls}, "
                f"not in {self.latest_dice}"
            )
        if rerolls.is_empty():
            self._keep_dice()
        else:
            self._write(protocol.build_reroll(rerolls))

    def _keep_dice(self) -> None:
        self._write(protocol.build_keepall())
        heal(self.me, self.latest_dice.hearts, self.player_in_st_lucia)

    def _on_stay_query(self, fields: List[str]) -> None:
        if self.strategy.choose_retreat(self._view()):
            self._write(protocol.build_go())
        else:
            self._write(protocol.build_stay())

    # ── Other players ─────────────────────────────────────────

    def _on_rolled(self, fields: List[str]) -> None:
        player = self.players[protocol.get_player_number(fields[1])]
        hearts = DiceSet.from_string(fields[2]).hearts
        heal(player, hearts, self.player_in_st_lucia)

    def _on_points(self, fields: List[str]) -> None:
        player = self.players[protocol.get_player_number(fields[1])]
        player.points += int(fields[2])

    def _on_attacks(self, fields: List[str]) -> None:
        amount = int(fields[2])
        if fields[3] == protocol.ATTACK_IN:
            if self.player_in_st_lucia is not None:
                damage(self.players[self.player_in_st_lucia], amount)
            return
        for player in self.players:
            if player.number != self.player_in_st_lucia:
                damage(player, amount)

    def _on_claim(self, fields: List[str]) -> None:
        self.player_in_st_lucia = protocol.get_player_number(fields[1])

    def _on_eliminated(self, fields: List[str]) -> None:
        number = protocol.get_player_number(fields[1])
        self.players[number].status = PlayerStatus.ELIMINATED
        if number == self.my_number:
            logger.info("Eliminated")
            self._finished = True

    def _on_game_over(self, fields: List[str]) -> None:
        self._finished = True


# ══════════════════════════════════════════════════════════════
# ENTRY POINTS
# ══════════════════════════════════════════════════════════════


def parse_player_args(args: List[str]) -> tuple:
    """
    Check the two launch arguments.

    Returns:
        (number_of_players, my_number)

    Raises:
        PlayerArgumentCountError: Not exactly two arguments
        PlayerCountError: Count is not an integer in 2..26
        PlayerIdError: Label is not a letter from A to the last player
    """
    if len(args) != 2:
        raise PlayerArgumentCountError(f"{len(args)} argument(s) given")
    count_text, label = args

    if not (count_text.isascii() and count_text.isdigit()):
        raise PlayerCountError(f"Player count {count_text!r}")
    number_of_players = int(count_text)
    if not protocol.MIN_PLAYERS <= number_of_players <= protocol.MAX_PLAYERS:
        raise PlayerCountError(f"Player count {number_of_players}")

    if not is_valid_label(label, number_of_players):
        raise PlayerIdError(f"Player ID {label!r}")
    return number_of_players, protocol.get_player_number(label)


def _configure_logging() -> None:
    level_name = os.environ.get("STLUCIA_PLAYER_LOG_LEVEL", "WARNING").upper()
    setup_logging(
        log_file_path=os.environ.get("STLUCIA_PLAYER_LOG_FILE"),
        level=getattr(logging, level_name, logging.WARNING),
        stream=sys.stderr,
    )


def run_player(strategy: PlayerStrategy, argv: Optional[List[str]] = None) -> int:
    """
    Run a player process with ``strategy``.

    Args:
        strategy: The decisions to play with
        argv: Launch arguments (count, label). Defaults to sys.argv[1:]

    Returns:
        The player exit code
    """
    # The hub handles Ctrl+C for the whole game
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    args = sys.argv[1:] if argv is None else argv
    _configure_logging()

    try:
        number_of_players, my_number = parse_player_args(args)
        PlayerClient(number_of_players, my_number, strategy).run()
    except PlayerClientError as e:
        log_fatal_error(e)
        return int(e.exit_code)
    return int(PlayerExitCode.SUCCESS)


def main(argv: Optional[List[str]] = None) -> int:
    """Module entry point: ``python -m stlucia.player <strategy> N L``."""
    args = sys.argv[1:] if argv is None else argv
    if not args or args[0] not in STRATEGIES:
        error = PlayerArgumentCountError(
            f"Expected a strategy ({', '.join(STRATEGIES)}) as first argument"
        )
        print(error.diagnostic, file=sys.stderr)
        return int(error.exit_code)
    return run_player(STRATEGIES[args[0]](), args[1:])


def main_eait() -> int:
    return run_player(STRATEGIES["eait"]())


def main_habs() -> int:
    return run_player(STRATEGIES["habs"]())


def main_hass() -> int:
    return run_player(STRATEGIES["hass"]())


def main_mabs() -> int:
    return run_player(STRATEGIES["mabs"]())


if __name__ == "__main__":
    sys.exit(main())
