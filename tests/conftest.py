# Area: Hub Tests
# PRD: docs/protocol.md
"""Shared fixtures: scripted in-memory player channels and game builders."""

import logging
from typing import List, Optional

import pytest

from stlucia._hub.channel import PlayerChannel
from stlucia._hub.coordinator import TurnCoordinator
from stlucia._hub.roll_file import RollFile
from stlucia._hub.state import GameState
from stlucia._shared.logging_formatters import disable_protocol_mode
from stlucia._shared.models import PlayerStatus
from stlucia._shared.protocol_logger import ProtocolLogger, get_protocol_logger


class ScriptedChannel(PlayerChannel):
    """
    Channel that records every line sent and replays scripted replies.

    A reply of None (or running out of replies) reads as end-of-stream.
    """

    def __init__(self, replies: Optional[List[Optional[str]]] = None):
        self.replies = list(replies or [])
        self.sent: List[str] = []
        self.closed = False

    def send(self, line: str) -> bool:
        self.sent.append(line)
        return True

    def read_byte(self) -> Optional[str]:
        return "!"

    def read_line(self) -> Optional[str]:
        if not self.replies:
            return None
        reply = self.replies.pop(0)
        if reply is None:
            return None
        return reply if reply.endswith("\n") else reply + "\n"

    def close(self) -> None:
        self.closed = True


def make_game(rolls: str, number_of_players: int = 2,
              score_limit: int = 15) -> GameState:
    """Build a game whose players are all connected to scripted channels."""
    programs = [f"player{i}" for i in range(number_of_players)]
    game = GameState.create(score_limit, RollFile(rolls), programs)
    for player in game.players:
        player.status = PlayerStatus.REMAINING
        player.channel = ScriptedChannel()
    return game


def script(game: GameState, label: str, *replies: Optional[str]) -> ScriptedChannel:
    """Queue replies for the player with ``label``; returns its channel."""
    channel = game.player_by_label(label).channel
    channel.replies.extend(replies)
    return channel


def sent_to(game: GameState, label: str) -> List[str]:
    """Lines the hub sent to ``label``, without terminators."""
    return [line.rstrip("\n") for line in game.player_by_label(label).channel.sent]


@pytest.fixture
def quiet_protocol_logger():
    return ProtocolLogger(enabled=False)


@pytest.fixture
def coordinator_for(quiet_protocol_logger):
    """Factory fixture: build a coordinator around a game."""
    def _build(game: GameState, max_rerolls: Optional[int] = None) -> TurnCoordinator:
        return TurnCoordinator(
            game, protocol_logger=quiet_protocol_logger, max_rerolls=max_rerolls,
        )
    return _build


@pytest.fixture(autouse=True)
def reset_package_logging():
    """Drop handlers bound to captured streams and switch tracing back off."""
    yield
    pkg_logger = logging.getLogger("stlucia")
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()
    disable_protocol_mode()
    get_protocol_logger().enabled = False
