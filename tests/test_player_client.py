# Area: Player Tests
# PRD: docs/protocol.md
"""Tests for stlucia.player — the player client and its entry points."""

import io
from unittest.mock import patch

import pytest

from stlucia.errors import (
    BadHubMessageError,
    HubLostError,
    PlayerArgumentCountError,
    PlayerCountError,
    PlayerIdError,
    StrategyDecisionError,
)
from stlucia.player import PlayerClient, main, parse_player_args, run_player
from stlucia._shared.dice import DiceSet
from stlucia.strategies import HASSStrategy, MABSStrategy


def _run(lines, strategy=None, number_of_players=2, my_number=0):
    """Run a client over scripted hub lines; return (client, output)."""
    stdin = io.StringIO("".join(line + "\n" for line in lines))
    stdout = io.StringIO()
    client = PlayerClient(
        number_of_players, my_number, strategy or MABSStrategy(),
        stdin=stdin, stdout=stdout,
    )
    client.run()
    return client, stdout.getvalue()


class TestHandshakeAndExit:
    """Tests for start-up and the terminal messages."""

    def test_handshake_then_shutdown(self):
        _, output = _run(["shutdown"])
        assert output == "!"

    def test_winner_ends_game(self):
        client, _ = _run(["winner B"])
        assert client._finished

    def test_own_elimination_ends_game(self):
        client, _ = _run(["eliminated A"])
        assert client.me.is_eliminated

    def test_other_elimination_continues(self):
        client, _ = _run(["eliminated B", "shutdown"])
        assert client.players[1].is_eliminated
        assert not client.me.is_eliminated

    def test_end_of_input_is_lost_hub(self):
        with pytest.raises(HubLostError) as exc_info:
            _run(["claim B"])
        assert exc_info.value.exit_code == 4

    @pytest.mark.parametrize("line", ["bogus", "turn 1234", "claim C", "", "a b c d e f"])
    def test_bad_message(self, line):
        with pytest.raises(BadHubMessageError) as exc_info:
            _run([line, "shutdown"])
        assert exc_info.value.exit_code == 5


class TestOwnTurn:
    """Tests for turn / rerolled handling."""

    def test_reroll_request(self):
        """MABS outside St Lucia rerolls A's and 1, 2, P."""
        _, output = _run(["turn 1123AA", "shutdown"])
        assert output == "!reroll 112AA\n"

    def test_at_most_two_rerolls(self):
        _, output = _run([
            "turn 1123AA", "rerolled 1123AA", "rerolled 1123AA", "shutdown",
        ])
        assert output == "!reroll 112AA\nreroll 112AA\nkeepall\n"

    def test_turn_resets_reroll_count(self):
        client, output = _run([
            "turn 1123AA", "rerolled 1123AA", "turn 1123AA", "shutdown",
        ])
        assert client.number_of_rerolls == 0
        assert output.endswith("reroll 112AA\n")

    def test_nothing_to_reroll_keeps_and_heals(self):
        client, output = _run(["attacks B 4 out", "turn 333HHH", "shutdown"])
        assert output == "!keepall\n"
        assert client.me.health == 9

    def test_reroll_must_come_from_latest_dice(self):
        class Greedy(MABSStrategy):
            def choose_reroll(self, view):
                return DiceSet.from_string("PPPPPPP")

        with pytest.raises(StrategyDecisionError):
            _run(["turn 1123AA", "shutdown"], strategy=Greedy())


class TestStayQuery:
    """Tests for stay? answers."""

    def test_retreat_answers_go(self):
        _, output = _run(["claim A", "stay?", "shutdown"], strategy=MABSStrategy())
        assert output == "!go\n"

    def test_hold_answers_stay(self):
        _, output = _run(["claim A", "stay?", "shutdown"], strategy=HASSStrategy())
        assert output == "!stay\n"


class TestShadowState:
    """Tests for the client's copy of the table."""

    def test_claim_sets_holder(self):
        client, _ = _run(["claim B", "shutdown"])
        assert client.player_in_st_lucia == 1

    def test_inward_attack_damages_holder(self):
        client, _ = _run(["claim B", "attacks A 3 in", "shutdown"])
        assert [p.health for p in client.players] == [10, 7]

    def test_inward_attack_without_holder_is_ignored(self):
        client, _ = _run(["attacks A 3 in", "shutdown"])
        assert [p.health for p in client.players] == [10, 10]

    def test_outward_attack_spares_holder(self):
        client, _ = _run(
            ["claim A", "attacks A 4 out", "shutdown"], number_of_players=3,
        )
        assert [p.health for p in client.players] == [10, 6, 6]

    def test_rolled_heals_other_player(self):
        client, _ = _run(["attacks A 5 out", "rolled B HH1123", "shutdown"])
        assert client.players[1].health == 7

    def test_rolled_does_not_heal_holder(self):
        client, _ = _run([
            "attacks A 5 out", "claim B", "rolled B HH1123", "shutdown",
        ])
        assert client.players[1].health == 5

    def test_points_tracked(self):
        client, _ = _run(["points B 3", "points B 2", "shutdown"])
        assert client.players[1].points == 5


class TestLaunchArguments:
    """Tests for parse_player_args()."""

    def test_valid(self):
        assert parse_player_args(["4", "C"]) == (4, 2)

    @pytest.mark.parametrize("args", [[], ["2"], ["2", "A", "x"]])
    def test_argument_count(self, args):
        with pytest.raises(PlayerArgumentCountError):
            parse_player_args(args)

    @pytest.mark.parametrize("count", ["1", "27", "x", "2.5", "-2", ""])
    def test_player_count(self, count):
        with pytest.raises(PlayerCountError):
            parse_player_args([count, "A"])

    @pytest.mark.parametrize("label", ["C", "AB", "a", ""])
    def test_player_id(self, label):
        with pytest.raises(PlayerIdError):
            parse_player_args(["2", label])


class TestEntryPoints:
    """Tests for run_player() and main()."""

    @patch("stlucia.player.signal.signal")
    def test_usage_error_exit_code(self, mock_signal, capsys):
        assert run_player(MABSStrategy(), []) == 1
        assert capsys.readouterr().err.strip().endswith("Usage: player number_of_players my_id")

    @patch("stlucia.player.signal.signal")
    def test_invalid_count_exit_code(self, mock_signal, capsys):
        assert run_player(MABSStrategy(), ["30", "A"]) == 2
        assert "Invalid player count" in capsys.readouterr().err

    @patch("stlucia.player.signal.signal")
    def test_main_runs_named_strategy(self, mock_signal, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("shutdown\n"))
        assert main(["hass", "2", "B"]) == 0
        assert capsys.readouterr().out == "!"

    @patch("stlucia.player.signal.signal")
    def test_bad_strategy_decision_exit_code(self, mock_signal, monkeypatch, capsys):
        class Careless(MABSStrategy):
            def choose_reroll(self, view):
                return DiceSet.from_string("PPPPPP")

        monkeypatch.setattr("sys.stdin", io.StringIO("turn 111111\nshutdown\n"))
        assert run_player(Careless(), ["2", "A"]) == 6
        captured = capsys.readouterr()
        assert captured.out == "!"
        assert captured.err == "Invalid decision by strategy\n"

    def test_main_unknown_strategy(self, capsys):
        assert main(["nope", "2", "A"]) == 1
        assert capsys.readouterr().err == "Usage: player number_of_players my_id\n"
