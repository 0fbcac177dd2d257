# Area: Hub Tests
# PRD: docs/protocol.md
"""Tests for stlucia._hub.orchestrator — starting and reaping players."""

import stat
import textwrap

import pytest

from stlucia._hub.orchestrator import ProcessOrchestrator
from stlucia._hub.roll_file import RollFile
from stlucia._hub.state import GameState
from stlucia._shared.models import PlayerStatus
from stlucia.errors import PipingFailureError


def write_player(directory, name, body):
    """Write an executable sh player script and return its path."""
    path = directory / name
    path.write_text("#!/bin/sh\n" + textwrap.dedent(body))
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return str(path)


POLITE = """\
    printf '!'
    while read line; do
      [ "$line" = shutdown ] && exit 0
    done
    exit 3
    """


def _game(*programs):
    return GameState.create(5, RollFile("111111"), list(programs))


class TestStartup:
    """Tests for spawning and handshakes."""

    def test_start_all_connects_players(self, tmp_path):
        polite = write_player(tmp_path, "polite.sh", POLITE)
        game = _game(polite, polite)

        with ProcessOrchestrator(game, reap_timeout=5) as orchestrator:
            orchestrator.start_all()
            assert [p.status for p in game.players] == [PlayerStatus.REMAINING] * 2

        assert [p.process.returncode for p in game.players] == [0, 0]

    def test_players_get_count_and_label(self, tmp_path):
        out = tmp_path / "args.txt"
        recorder = write_player(tmp_path, "recorder.sh", f"""\
            echo "$#" "$1" "$2" >> {out}
            printf '!'
            while read line; do
              [ "$line" = shutdown ] && exit 0
            done
            """)
        game = _game(recorder, recorder, recorder)

        with ProcessOrchestrator(game, reap_timeout=5) as orchestrator:
            orchestrator.start_all()

        assert out.read_text().splitlines() == ["2 3 A", "2 3 B", "2 3 C"]

    def test_bad_handshake(self, tmp_path):
        rude = write_player(tmp_path, "rude.sh", "printf 'x'\nsleep 5\n")
        game = _game(rude, rude)

        with pytest.raises(PipingFailureError) as exc_info:
            with ProcessOrchestrator(game, reap_timeout=0.2) as orchestrator:
                orchestrator.start_all()

        assert exc_info.value.exit_code == 5
        # Only the first player was ever started, and it has been reaped
        assert game.players[0].process.returncode is not None
        assert game.players[1].process is None

    def test_no_handshake_before_exit(self, tmp_path):
        silent = write_player(tmp_path, "silent.sh", "exit 0\n")
        game = _game(silent, silent)

        with pytest.raises(PipingFailureError):
            with ProcessOrchestrator(game) as orchestrator:
                orchestrator.start_all()

    def test_missing_program(self, tmp_path):
        game = _game(str(tmp_path / "nope"), str(tmp_path / "nope"))

        with pytest.raises(PipingFailureError):
            with ProcessOrchestrator(game) as orchestrator:
                orchestrator.start_all()


class TestShutdown:
    """Tests for the bounded reap."""

    def test_stubborn_player_is_killed(self, tmp_path):
        polite = write_player(tmp_path, "polite.sh", POLITE)
        stubborn = write_player(tmp_path, "stubborn.sh", """\
            trap '' TERM
            printf '!'
            exec sleep 30
            """)
        game = _game(polite, stubborn)

        with ProcessOrchestrator(game, reap_timeout=0.2) as orchestrator:
            orchestrator.start_all()

        assert game.players[0].process.returncode == 0
        assert game.players[1].process.returncode < 0

    def test_shutdown_skips_eliminated(self, tmp_path):
        out = tmp_path / "seen.txt"
        logger_player = write_player(tmp_path, "logger.sh", f"""\
            printf '!'
            while read line; do
              echo "$2 $line" >> {out}
              [ "$line" = shutdown ] && exit 0
            done
            """)
        game = _game(logger_player, logger_player)

        with ProcessOrchestrator(game, reap_timeout=0.5) as orchestrator:
            orchestrator.start_all()
            game.players[0].status = PlayerStatus.ELIMINATED

        assert out.read_text().splitlines() == ["B shutdown"]
        assert game.players[0].process.returncode is not None

    def test_channels_closed(self, tmp_path):
        polite = write_player(tmp_path, "polite.sh", POLITE)
        game = _game(polite, polite)

        with ProcessOrchestrator(game) as orchestrator:
            orchestrator.start_all()

        assert all(p.channel.outbox.closed for p in game.players)
