# Area: Hub
# PRD: docs/protocol.md
"""
stlucia.hub — Hub runner
========================

The StLuciaHub is what the ``stlucia`` command instantiates and calls
.run() on. It loads the roll file, starts every player, hands the game
to the Turn Coordinator and always shuts the players down again, on
success and on every fatal error.
"""

from __future__ import annotations
import logging
import signal
import sys
import threading
from typing import Optional

from ._config import HubConfig
from ._hub.coordinator import TurnCoordinator
from ._hub.orchestrator import ProcessOrchestrator
from ._hub.roll_file import RollFile
from ._hub.state import GameState
from ._shared.logging_config import log_fatal_error, setup_logging
from ._shared.logging_formatters import disable_protocol_mode, enable_protocol_mode
from ._shared.protocol_logger import get_protocol_logger
from .errors import ExitCode, HubInterruptedError, StLuciaError

logger = logging.getLogger("stlucia.hub")


class StLuciaHub:
    """
    Runs one game to completion.

    Usage
    -----
        from stlucia import HubConfig, StLuciaHub

        config = HubConfig(
            roll_file="rolls.txt",
            score_limit=15,
            programs=["stlucia-eait", "stlucia-mabs"],
        )
        exit_code = StLuciaHub(config).run()
    """

    def __init__(self, config: HubConfig):
        self.config = config
        self.cancel_event = threading.Event()
        self.game: Optional[GameState] = None
        self.coordinator: Optional[TurnCoordinator] = None

    # ── Main entry ────────────────────────────────────────────

    def run(self) -> int:
        """
        Play the game. Blocks until there is a winner or a fatal error.

        Returns:
            The hub exit code (0 on a normal finish)
        """
        setup_logging(log_file_path=self.config.log_file, stream=sys.stdout)
        protocol_logger = get_protocol_logger()
        protocol_logger.enabled = self.config.trace
        if self.config.trace:
            enable_protocol_mode()

        # SIGINT only flags the run; the blocked read notices and unwinds
        def _signal_handler(sig, frame):
            self.cancel_event.set()
        previous_handler = signal.signal(signal.SIGINT, _signal_handler)

        error: Optional[StLuciaError] = None
        try:
            self._play()
        except StLuciaError as e:
            error = e
        finally:
            signal.signal(signal.SIGINT, previous_handler)
            if self.config.trace:
                disable_protocol_mode()

        # A signal caught after the last read (final broadcasts, reaping)
        # still ends the run with the interrupt exit code
        if self.cancel_event.is_set() and not isinstance(error, HubInterruptedError):
            error = HubInterruptedError("Interrupted after the last player read")

        if error is not None:
            log_fatal_error(error)
            return int(error.exit_code)
        return int(ExitCode.SUCCESS)

    def _play(self) -> None:
        config = self.config
        roll_file = RollFile.load(config.roll_file)
        self.game = GameState.create(config.score_limit, roll_file, config.programs)

        logger.info("=" * 60)
        logger.info("  St Lucia Hub — Starting")
        logger.info(f"  Rolls:    {config.roll_file} ({len(roll_file)} dice)")
        logger.info(f"  Target:   {config.score_limit} points")
        for player in self.game.players:
            logger.info(f"  Player {player.label}: {player.program}")
        logger.info("=" * 60)

        with ProcessOrchestrator(
            self.game,
            reap_timeout=config.reap_timeout,
            cancel_event=self.cancel_event,
            poll_interval=config.poll_interval,
        ) as orchestrator:
            orchestrator.start_all()
            self.coordinator = TurnCoordinator(self.game, max_rerolls=config.max_rerolls)
            winner = self.coordinator.run_game()
            logger.info(f"Game over: {self.game.describe()}")
            logger.info(f"Winner is Player {winner.label}")
