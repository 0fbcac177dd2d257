# Area: Hub
# PRD: docs/protocol.md
"""
stlucia._hub.coordinator — Turn Coordinator
===========================================

The authoritative game loop. Runs one participant's turn at a time:

    roll → reroll negotiation → heal → attack (→ stay query)
         → score → elimination sweep → win check

then passes the turn to the next participant still in the game.

Every request to a player is answered before anything else happens;
there is never more than one outstanding request. A malformed or
illegal reply, or a player closing its output, ends the whole game by
raising the matching StLuciaError.
"""

from __future__ import annotations

from typing import List, Optional
import logging

from .._shared import protocol
from .._shared.codec import parse
from .._shared.dice import DICE_SET_SIZE, DiceSet, is_valid_dice_string
from .._shared.models import PlayerStatus, damage, heal
from .._shared.protocol_logger import ProtocolLogger, get_protocol_logger
from ..errors import InvalidMessageError, InvalidRequestError, PlayerQuitError
from .enums import TurnEvent
from .state import GameState, HubPlayer
from .state_machine import TurnStateMachine

logger = logging.getLogger("stlucia.hub.coordinator")

# Scoring rules
ST_LUCIA_HOLDING_POINTS = 2
CLAIM_POINTS = 1
TOKENS_POINTS_THRESHOLD = 10
DICE_POINTS_THRESHOLD = 2
# Points per number face beyond the threshold: count - penalty
DICE_POINT_PENALTIES = {"1": 2, "2": 1, "3": 0}


def score_dice(dice: DiceSet) -> int:
    """Points earned by the number faces of a final roll."""
    points = 0
    for face, penalty in DICE_POINT_PENALTIES.items():
        count = dice.count(face)
        if count > DICE_POINTS_THRESHOLD:
            points += count - penalty
    return points


def convert_tokens(tokens: int) -> tuple:
    """Split a token pool into (points earned, tokens left over)."""
    return divmod(tokens, TOKENS_POINTS_THRESHOLD)


class TurnCoordinator:
    """
    Runs the game on a GameState whose players are all connected.

    Args:
        game: The game state; mutated only by this coordinator
        protocol_logger: Traces wire traffic when enabled
        max_rerolls: Optional hub-side cap on rerolls per turn. None
            leaves the limit to the players themselves
    """

    def __init__(
        self,
        game: GameState,
        protocol_logger: Optional[ProtocolLogger] = None,
        max_rerolls: Optional[int] = None,
    ):
        self.game = game
        self.protocol_logger = protocol_logger or get_protocol_logger()
        self.max_rerolls = max_rerolls
        self.state_machine = TurnStateMachine()
        self.winner: Optional[HubPlayer] = None

    # ══════════════════════════════════════════════════════════
    # GAME LOOP
    # ══════════════════════════════════════════════════════════

    def run_game(self) -> HubPlayer:
        """Play turns until somebody wins. Returns the winner."""
        active = self.game.current_player_number
        while True:
            if self.play_turn(active):
                return self.winner
            active = self.game.next_player_number(active)

    def play_turn(self, active: int) -> bool:
        """
        Play one full turn for player number ``active``.

        Returns:
            True if the game is over after this turn
        """
        game = self.game
        player = game.players[active]
        game.current_player_number = active
        game.number_of_rerolls = 0
        self.state_machine.transition(TurnEvent.TURN_START)
        self.protocol_logger.set_turn(self.state_machine.turns_started)

        starting_points = player.points
        if game.player_in_st_lucia == active:
            player.points += ST_LUCIA_HOLDING_POINTS

        game.latest_dice = game.roll_file.draw_set(DICE_SET_SIZE)
        self._negotiate_dice(player)
        self._apply_healing(player)
        self.attack(player)
        self._gain_points(player, starting_points)
        self.update_eliminated_players()
        return self.check_game_over(player)

    # ══════════════════════════════════════════════════════════
    # MESSAGING
    # ══════════════════════════════════════════════════════════

    def _send(self, player: HubPlayer, line: str) -> None:
        self.protocol_logger.log_sent(player.label, line)
        player.channel.send(line)

    def alert_remaining_players(self, line: str,
                                skip: Optional[HubPlayer] = None) -> None:
        """Send a line to every Remaining player, optionally skipping one."""
        for player in self.game.players:
            if not player.is_remaining or player is skip:
                continue
            if player.channel is None:
                continue
            self._send(player, line)

    def _receive(self, player: HubPlayer) -> List[str]:
        """Block for one reply line from ``player`` and split it into fields."""
        try:
            line = player.channel.read_line()
        except InvalidMessageError as e:
            e.player_label = player.label
            raise
        if line is None:
            raise PlayerQuitError(
                f"Player {player.label} closed its output",
                player_label=player.label,
            )
        self.protocol_logger.log_received(player.label, line)
        try:
            return parse(line)
        except InvalidMessageError as e:
            e.player_label = player.label
            raise

    # ══════════════════════════════════════════════════════════
    # ROLL AND REROLL NEGOTIATION
    # ══════════════════════════════════════════════════════════

    def _negotiate_dice(self, player: HubPlayer) -> None:
        self._send(player, protocol.build_turn(self.game.latest_dice))
        self.state_machine.transition(TurnEvent.DICE_OFFERED)

        while not self.keep_dice_response(player):
            self.state_machine.transition(TurnEvent.REROLLED)
        self.state_machine.transition(TurnEvent.DICE_KEPT)

        dice = str(self.game.latest_dice)
        logger.info(f"Player {player.label} rolled {dice}")
        self.alert_remaining_players(protocol.build_rolled(player.label, dice), skip=player)

    def keep_dice_response(self, player: HubPlayer) -> bool:
        """
        Wait for the active player's answer to its dice.

        Returns:
            True on ``keepall``; False after serving a ``reroll``

        Raises:
            InvalidMessageError: Malformed reply or bad reroll subset
            InvalidRequestError: ``stay``/``go`` during a turn, or a
                reroll beyond the hub-side cap
            PlayerQuitError: The player closed its output
        """
        fields = self._receive(player)
        command = fields[0]

        if command == protocol.KEEPALL and len(fields) == 1:
            return True
        if command == protocol.REROLL and len(fields) == 2:
            self._reroll(player, fields[1])
            return False
        if command in (protocol.STAY, protocol.GO) and len(fields) == 1:
            raise InvalidRequestError(
                f"'{command}' sent during a turn", player_label=player.label,
                raw_line=" ".join(fields),
            )
        raise InvalidMessageError(
            "Expected keepall or reroll", player_label=player.label,
            raw_line=" ".join(fields),
        )

    def _reroll(self, player: HubPlayer, subset: str) -> None:
        game = self.game
        raw = f"{protocol.REROLL} {subset}"
        if not subset or len(subset) > DICE_SET_SIZE or not is_valid_dice_string(subset):
            raise InvalidMessageError(
                "Reroll subset must be 1-6 legal dice", player_label=player.label,
                raw_line=raw,
            )
        rerolled = DiceSet.from_string(subset)
        if not game.latest_dice.contains(rerolled):
            raise InvalidMessageError(
                f"Reroll subset {subset} not in {game.latest_dice}",
                player_label=player.label, raw_line=raw,
            )
        if self.max_rerolls is not None and game.number_of_rerolls >= self.max_rerolls:
            raise InvalidRequestError(
                f"More than {self.max_rerolls} rerolls this turn",
                player_label=player.label, raw_line=raw,
            )

        game.latest_dice.subtract(rerolled)
        game.latest_dice.merge(game.roll_file.draw_set(rerolled.total))
        if game.latest_dice.total != DICE_SET_SIZE:
            raise InvalidRequestError(
                f"Reroll left {game.latest_dice.total} dice",
                player_label=player.label, raw_line=raw,
            )
        game.number_of_rerolls += 1
        self._send(player, protocol.build_rerolled(game.latest_dice))

    # ══════════════════════════════════════════════════════════
    # HEALING
    # ══════════════════════════════════════════════════════════

    def _apply_healing(self, player: HubPlayer) -> None:
        recovered = heal(player, self.game.latest_dice.hearts, self.game.player_in_st_lucia)
        if recovered:
            logger.info(
                f"Player {player.label} healed {recovered}, health is now {player.health}"
            )
        self.state_machine.transition(TurnEvent.HEALED)

    def _damage(self, target: HubPlayer, amount: int) -> None:
        lost = damage(target, amount)
        logger.info(
            f"Player {target.label} took {lost} damage, health is now {target.health}"
        )

    # ══════════════════════════════════════════════════════════
    # ST LUCIA
    # ══════════════════════════════════════════════════════════

    def claim_st_lucia(self, player: HubPlayer) -> None:
        """Make ``player`` the St Lucia holder, award the claim point, announce it."""
        self.game.player_in_st_lucia = player.number
        player.points += CLAIM_POINTS
        logger.info(f"Player {player.label} claimed StLucia")
        self.alert_remaining_players(protocol.build_claim(player.label))

    def attack(self, player: HubPlayer) -> None:
        """Resolve the active player's ``A`` dice against St Lucia."""
        game = self.game
        attacks = game.latest_dice.attacks

        if attacks == 0:
            pass
        elif game.player_in_st_lucia is None:
            self.claim_st_lucia(player)
        elif game.player_in_st_lucia == player.number:
            for other in game.players:
                if other is player or other.is_eliminated:
                    continue
                self._damage(other, attacks)
            self.alert_remaining_players(
                protocol.build_attacks(player.label, attacks, protocol.ATTACK_OUT)
            )
        else:
            holder = game.st_lucia_holder
            self._damage(holder, attacks)
            self.alert_remaining_players(
                protocol.build_attacks(player.label, attacks, protocol.ATTACK_IN)
            )
            if holder.health <= 0:
                # A dead holder has no say
                self.claim_st_lucia(player)
            else:
                self._send(holder, protocol.build_stay_query())
                self.state_machine.transition(TurnEvent.STAY_QUERIED)
                self.receive_stay_reply(player, holder)
                self.state_machine.transition(TurnEvent.STAY_ANSWERED)
                return

        self.state_machine.transition(TurnEvent.ATTACK_RESOLVED)

    def receive_stay_reply(self, attacker: HubPlayer, holder: HubPlayer) -> None:
        """
        Wait for the holder's answer to ``stay?``.

        Raises:
            InvalidRequestError: ``keepall`` or a well-formed ``reroll``
            InvalidMessageError: Anything else that is not stay/go
            PlayerQuitError: The holder closed its output
        """
        fields = self._receive(holder)
        command = fields[0]
        raw = " ".join(fields)

        if command == protocol.STAY and len(fields) == 1:
            logger.info(f"Player {holder.label} stays in StLucia")
        elif command == protocol.GO and len(fields) == 1:
            self.claim_st_lucia(attacker)
        elif command == protocol.KEEPALL and len(fields) == 1:
            raise InvalidRequestError(
                "keepall sent to a stay query", player_label=holder.label, raw_line=raw,
            )
        elif command == protocol.REROLL and len(fields) == 2 and fields[1] \
                and len(fields[1]) <= DICE_SET_SIZE and is_valid_dice_string(fields[1]):
            raise InvalidRequestError(
                "reroll sent to a stay query", player_label=holder.label, raw_line=raw,
            )
        else:
            raise InvalidMessageError(
                "Expected stay or go", player_label=holder.label, raw_line=raw,
            )

    # ══════════════════════════════════════════════════════════
    # SCORING, ELIMINATION, WIN
    # ══════════════════════════════════════════════════════════

    def _gain_points(self, player: HubPlayer, starting_points: int) -> None:
        dice = self.game.latest_dice
        player.tokens += dice.points
        earned, player.tokens = convert_tokens(player.tokens)
        player.points += earned
        player.points += score_dice(dice)

        gained = player.points - starting_points
        if gained > 0:
            logger.info(
                f"Player {player.label} scored {gained} for a total of {player.points}"
            )
            self.alert_remaining_players(protocol.build_points(player.label, gained))
        self.state_machine.transition(TurnEvent.SCORED)

    def update_eliminated_players(self) -> List[HubPlayer]:
        """
        Eliminate every player whose health has run out.

        Each player is announced and eliminated exactly once.

        Returns:
            The players eliminated by this sweep
        """
        eliminated = []
        for player in self.game.players:
            if player.is_eliminated or player.health > 0:
                continue
            logger.info(f"Player {player.label} eliminated")
            self.alert_remaining_players(protocol.build_eliminated(player.label))
            player.status = PlayerStatus.ELIMINATED
            eliminated.append(player)
        self.state_machine.transition(TurnEvent.SWEPT)
        return eliminated

    def check_game_over(self, player: HubPlayer) -> bool:
        """
        Decide whether ``player`` has won.

        A player wins when nobody else is left, or when its points
        reach the score limit. On a win the winner is announced and
        every player is eliminated.
        """
        game = self.game
        if not (game.is_last_remaining(player.number) or player.points >= game.score_limit):
            self.state_machine.transition(TurnEvent.TURN_PASSED)
            return False

        logger.info(f"Player {player.label} wins")
        self.alert_remaining_players(protocol.build_winner(player.label))
        for other in game.players:
            other.status = PlayerStatus.ELIMINATED
        self.winner = player
        self.state_machine.transition(TurnEvent.GAME_WON)
        return True
