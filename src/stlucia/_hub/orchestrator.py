# Area: Hub
# PRD: docs/protocol.md
"""Orchestrator — starts player processes, wires pipes, shuts them down."""
from __future__ import annotations

import logging
import signal
import subprocess
import threading
from typing import List, Optional

from .._shared.models import PlayerStatus
from .._shared.protocol import HANDSHAKE, build_shutdown
from .._shared.protocol_logger import ProtocolLogger, get_protocol_logger
from ..errors import PipingFailureError
from .channel import PipeChannel
from .state import GameState, HubPlayer

logger = logging.getLogger("stlucia.hub.orchestrator")

DEFAULT_REAP_TIMEOUT = 2.0


class ProcessOrchestrator:
    """
    Owns every player process for the lifetime of a game.

    Use as a context manager: leaving the block, normally or through an
    exception, broadcasts ``shutdown`` to the remaining players, reaps
    every spawned child with a bounded wait and closes all pipes.

        with ProcessOrchestrator(game) as orchestrator:
            orchestrator.start_all()
            ...
    """

    def __init__(
        self,
        game: GameState,
        reap_timeout: float = DEFAULT_REAP_TIMEOUT,
        cancel_event: Optional[threading.Event] = None,
        poll_interval: float = 0.1,
        protocol_logger: Optional[ProtocolLogger] = None,
    ):
        self.game = game
        self.reap_timeout = reap_timeout
        self.cancel_event = cancel_event
        self.poll_interval = poll_interval
        self.protocol_logger = protocol_logger or get_protocol_logger()
        self._spawned: List[HubPlayer] = []

    def __enter__(self) -> "ProcessOrchestrator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
        return False

    # ── Start-up ─────────────────────────────────────────────

    def start_all(self) -> None:
        """Start every player in order; the first failure is fatal."""
        for player in self.game.players:
            self.start_player(player)

    def start_player(self, player: HubPlayer) -> None:
        """
        Spawn one player and wait for its handshake byte.

        Raises:
            PipingFailureError: If the program cannot be started or does
                not answer with the handshake byte
        """
        argv = [player.program, str(self.game.number_of_players), player.label]
        try:
            process = subprocess.Popen(
                argv,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                bufsize=0,
            )
        except OSError as e:
            raise PipingFailureError(
                f"Could not start {player.program}: {e}",
                player_label=player.label,
            ) from e

        player.process = process
        player.channel = PipeChannel(
            process.stdin, process.stdout,
            cancel_event=self.cancel_event,
            poll_interval=self.poll_interval,
        )
        self._spawned.append(player)
        logger.debug(f"Started player {player.label}: {' '.join(argv)} (pid {process.pid})")

        handshake = player.channel.read_byte()
        if handshake != HANDSHAKE:
            raise PipingFailureError(
                f"Bad handshake from {player.program}: {handshake!r}",
                player_label=player.label,
            )
        player.status = PlayerStatus.REMAINING
        logger.info(f"Player {player.label} connected ({player.program})")

    # ── Shutdown ─────────────────────────────────────────────

    def shutdown(self) -> None:
        """Broadcast shutdown, reap every spawned child, close pipes."""
        line = build_shutdown()
        for player in self.game.remaining_players():
            if player.channel is None:
                continue
            self.protocol_logger.log_sent(player.label, line)
            player.channel.send(line)

        for player in self._spawned:
            self._reap(player)
            player.channel.close()
        self._spawned = []

    def _reap(self, player: HubPlayer) -> None:
        process = player.process
        try:
            status = process.wait(timeout=self.reap_timeout)
        except subprocess.TimeoutExpired:
            logger.warning(
                f"Player {player.label} did not exit within "
                f"{self.reap_timeout}s, killing it"
            )
            process.kill()
            status = process.wait()

        if status > 0:
            logger.warning(f"Player {player.label} exited with status {status}")
        elif status < 0:
            try:
                name = signal.Signals(-status).name
            except ValueError:
                name = str(-status)
            logger.warning(f"Player {player.label} terminated due to signal {name}")
