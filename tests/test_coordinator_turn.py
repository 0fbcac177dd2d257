# Area: Hub Tests
# PRD: docs/protocol.md
"""Tests for the Turn Coordinator: rolling, rerolls, healing and scoring."""

from conftest import make_game, script, sent_to

from stlucia._hub.coordinator import convert_tokens, score_dice
from stlucia._hub.enums import TurnPhase
from stlucia._shared.dice import DiceSet
from stlucia._shared.models import PlayerStatus


class TestScoringRules:
    """Tests for the pure scoring helpers."""

    def test_two_of_a_kind_scores_nothing(self):
        assert score_dice(DiceSet.from_string("112233")) == 0

    def test_number_sets(self):
        assert score_dice(DiceSet.from_string("111HAP")) == 1
        assert score_dice(DiceSet.from_string("222HAP")) == 2
        assert score_dice(DiceSet.from_string("333HAP")) == 3

    def test_extra_dice_in_a_set(self):
        assert score_dice(DiceSet.from_string("111111")) == 4
        assert score_dice(DiceSet.from_string("333333")) == 6
        assert score_dice(DiceSet.from_string("111222")) == 3

    def test_token_conversion(self):
        assert convert_tokens(9) == (0, 9)
        assert convert_tokens(10) == (1, 0)
        assert convert_tokens(23) == (2, 3)


class TestRollAndKeep:
    """Tests for a turn kept on the first roll."""

    def test_turn_and_rolled_broadcast(self, coordinator_for):
        game = make_game("112233")
        script(game, "A", "keepall")
        coordinator = coordinator_for(game)

        assert coordinator.play_turn(0) is False

        assert sent_to(game, "A") == ["turn 112233"]
        assert sent_to(game, "B") == ["rolled A 112233"]
        assert coordinator.state_machine.current_phase == TurnPhase.IDLE

    def test_rolled_skips_eliminated_players(self, coordinator_for):
        game = make_game("112233", number_of_players=3)
        game.players[1].health = 0
        game.players[1].status = PlayerStatus.ELIMINATED
        script(game, "A", "keepall")

        coordinator_for(game).play_turn(0)

        assert sent_to(game, "B") == []
        assert sent_to(game, "C") == ["rolled A 112233"]

    def test_next_player_skips_eliminated(self):
        game = make_game("112233", number_of_players=3)
        game.players[1].status = PlayerStatus.ELIMINATED
        assert game.next_player_number(0) == 2
        assert game.next_player_number(2) == 0


class TestRerollNegotiation:
    """Tests for reroll requests."""

    def test_reroll_replaces_exactly_the_subset(self, coordinator_for):
        game = make_game("111222AAAPPP")
        script(game, "A", "reroll 222", "keepall")

        coordinator_for(game).play_turn(0)

        assert sent_to(game, "A")[:2] == ["turn 111222", "rerolled 111AAA"]
        assert sent_to(game, "B")[0] == "rolled A 111AAA"
        assert game.number_of_rerolls == 1

    def test_reroll_subset_in_any_order(self, coordinator_for):
        game = make_game("1122HHPPPPPP")
        script(game, "A", "reroll H21", "keepall")

        coordinator_for(game).play_turn(0)

        assert sent_to(game, "A")[1] == "rerolled 12HPPP"

    def test_unlimited_rerolls_by_default(self, coordinator_for):
        game = make_game("111111")
        script(game, "A", *(["reroll 1"] * 5), "keepall")

        coordinator_for(game).play_turn(0)

        assert game.number_of_rerolls == 5
        assert len([line for line in sent_to(game, "A") if line.startswith("rerolled")]) == 5

    def test_reroll_count_resets_each_turn(self, coordinator_for):
        game = make_game("112233")
        script(game, "A", "reroll 1", "keepall")
        script(game, "B", "keepall")
        coordinator = coordinator_for(game)

        coordinator.play_turn(0)
        coordinator.play_turn(1)

        assert game.number_of_rerolls == 0


class TestHealing:
    """Tests for healing on H dice."""

    def test_heals_one_per_heart(self, coordinator_for):
        game = make_game("HH1123")
        game.players[0].health = 5
        script(game, "A", "keepall")

        coordinator_for(game).play_turn(0)

        assert game.players[0].health == 7

    def test_healing_capped_at_ten(self, coordinator_for):
        game = make_game("HHHHH1")
        game.players[0].health = 8
        script(game, "A", "keepall")

        coordinator_for(game).play_turn(0)

        assert game.players[0].health == 10

    def test_holder_does_not_heal(self, coordinator_for):
        game = make_game("HHH112")
        game.player_in_st_lucia = 0
        game.players[0].health = 5
        script(game, "A", "keepall")

        coordinator_for(game).play_turn(0)

        assert game.players[0].health == 5


class TestScoring:
    """Tests for points, tokens and the points broadcast."""

    def test_number_set_points_broadcast(self, coordinator_for):
        game = make_game("111222")
        script(game, "A", "keepall")

        coordinator_for(game).play_turn(0)

        assert game.players[0].points == 3
        assert sent_to(game, "A")[-1] == "points A 3"
        assert sent_to(game, "B")[-1] == "points A 3"

    def test_no_points_no_broadcast(self, coordinator_for):
        game = make_game("112233")
        script(game, "A", "keepall")

        coordinator_for(game).play_turn(0)

        assert not any(line.startswith("points") for line in sent_to(game, "B"))

    def test_tokens_carry_over_and_convert(self, coordinator_for):
        game = make_game("PPPP12")
        game.players[0].tokens = 8
        script(game, "A", "keepall")

        coordinator_for(game).play_turn(0)

        assert game.players[0].tokens == 2
        assert game.players[0].points == 1
        assert sent_to(game, "B")[-1] == "points A 1"

    def test_holding_bonus_counts_in_gain(self, coordinator_for):
        """The holder gets +2 at turn start; the broadcast gain includes it."""
        game = make_game("111123")
        game.player_in_st_lucia = 0
        script(game, "A", "keepall")

        coordinator_for(game).play_turn(0)

        assert game.players[0].points == 4
        assert sent_to(game, "B")[-1] == "points A 4"
