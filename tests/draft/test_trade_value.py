"""
Tests for the draft pick value chart and trade helpers.
"""

import pytest

from front_office.draft import trade_value
from front_office.draft.trade_value import (
    PICK_VALUES,
    calculate_move_up_cost,
    calculate_picks_to_move_up,
    calculate_total_pick_value,
    evaluate_trade,
    find_balancing_picks,
    format_pick,
    get_ordinal_suffix,
    get_overall_pick,
    get_pick_description,
    get_pick_value,
    get_round_and_pick,
    suggest_counter_offer,
)


class TestPickValues:
    """Test the value chart."""

    @pytest.mark.parametrize("pick,value", [
        (1, 3000), (2, 2600), (10, 1300), (20, 850), (32, 590), (33, 580),
        (52, 380), (64, 270), (65, 265), (96, 116), (100, 100), (128, 44),
        (200, 13.6), (256, 2.4), (262, 1.2), (263, 1),
    ])
    def test_chart_values(self, pick, value):
        assert get_pick_value(pick) == pytest.approx(value)

    def test_chart_covers_every_slot(self):
        assert sorted(PICK_VALUES) == list(range(1, 264))

    def test_chart_never_increases(self):
        values = [PICK_VALUES[pick] for pick in range(1, 264)]
        assert all(earlier >= later for earlier, later in zip(values, values[1:]))

    def test_slots_outside_chart_are_worthless(self):
        assert get_pick_value(0) == 0
        assert get_pick_value(264) == 0

    def test_package_total(self):
        assert calculate_total_pick_value([20, 52, 100]) == 1330
        assert calculate_total_pick_value([]) == 0


class TestEvaluateTrade:
    """Test fairness and winner determination."""

    def test_close_trade_is_fair(self):
        evaluation = evaluate_trade([1], [2])

        assert evaluation.team1_value == 3000
        assert evaluation.team2_value == 2600
        assert evaluation.difference == 400
        assert evaluation.percentage_diff == pytest.approx(400 / 3000)
        assert evaluation.is_fair
        assert evaluation.winner == "team1"

    def test_lopsided_trade_is_unfair(self):
        evaluation = evaluate_trade([1], [32])

        assert not evaluation.is_fair
        assert evaluation.winner == "team1"

    def test_team2_winner(self):
        assert evaluate_trade([32], [1]).winner == "team2"

    @pytest.mark.parametrize("package1,package2", [
        ([1], [32]),
        ([1], [2]),
        ([10], [20, 52]),
        ([33, 64], [40]),
        ([5, 100, 200], [6, 101, 201]),
        ([96], [96]),
        ([], [263]),
        ([17, 81], [12]),
    ])
    def test_swapping_sides_mirrors_evaluation(self, package1, package2):
        forward = evaluate_trade(package1, package2)
        reverse = evaluate_trade(package2, package1)

        mirrored = {"team1": "team2", "team2": "team1", "even": "even"}
        assert reverse.winner == mirrored[forward.winner]
        assert reverse.difference == pytest.approx(-forward.difference)
        assert reverse.percentage_diff == pytest.approx(forward.percentage_diff)
        assert reverse.is_fair == forward.is_fair

    def test_even_trade(self):
        evaluation = evaluate_trade([5], [5])

        assert evaluation.winner == "even"
        assert evaluation.percentage_diff == 0
        assert evaluation.is_fair

    def test_empty_packages(self):
        evaluation = evaluate_trade([], [])
        assert evaluation.is_fair
        assert evaluation.winner == "even"

    def test_custom_tolerance(self):
        assert not evaluate_trade([1], [2], tolerance=0.1).is_fair


class TestBalancing:
    """Test greedy balancing and counter suggestions."""

    def test_balancing_picks_highest_first(self):
        # 1700-point deficit: 850 + 380 + 100 still leaves it short
        assert find_balancing_picks([1], [10], [20, 52, 100]) == [20, 52, 100]

    def test_balancing_stops_once_covered(self):
        assert find_balancing_picks([10], [20], [64, 33, 100]) == [33]

    def test_balancing_skips_picks_already_offered(self):
        assert find_balancing_picks([10], [20], [20, 64]) == [64]

    def test_no_balancing_when_not_behind(self):
        assert find_balancing_picks([10], [1], [20]) == []

    def test_fair_trade_has_no_counter(self):
        assert suggest_counter_offer([1], [2], [1], [2, 40]) is None

    def test_counter_asks_team2_to_add(self):
        suggestion = suggest_counter_offer([1], [32], [1], [32, 33, 64])

        assert suggestion.team == "team2"
        assert suggestion.picks_to_add == [33, 64]
        assert suggestion.new_evaluation.team2_value == 1440

    def test_counter_asks_team1_to_add(self):
        suggestion = suggest_counter_offer([32], [1], [32, 2, 40], [1])

        assert suggestion.team == "team1"
        assert suggestion.picks_to_add == [2]
        assert suggestion.new_evaluation.is_fair


class TestPickConversions:
    """Test round/pick conversions and display."""

    def test_round_trip_for_every_pick(self):
        for overall in range(1, 257):
            round_and_pick = get_round_and_pick(overall)
            assert get_overall_pick(round_and_pick.round, round_and_pick.pick) == overall

    def test_round_boundaries(self):
        assert get_round_and_pick(32) == (1, 32)
        assert get_round_and_pick(33) == (2, 1)
        assert get_round_and_pick(224).round == 7

    def test_invalid_pick(self):
        with pytest.raises(ValueError):
            get_round_and_pick(0)

    def test_format_pick(self):
        assert format_pick(5) == "1.05"
        assert format_pick(45) == "2.13"

    @pytest.mark.parametrize("number,suffix", [
        (1, "st"), (2, "nd"), (3, "rd"), (4, "th"), (11, "th"), (12, "th"),
        (13, "th"), (21, "st"), (22, "nd"), (101, "st"), (111, "th"),
    ])
    def test_ordinal_suffix(self, number, suffix):
        assert get_ordinal_suffix(number) == suffix

    def test_pick_description(self):
        assert get_pick_description(15) == "Round 1, Pick 15 (15th overall)"
        assert get_pick_description(33) == "Round 2, Pick 1 (33rd overall)"

    def test_module_exported_from_package(self):
        assert trade_value.get_pick_value is get_pick_value


class TestMovingUp:
    """Test the cost of trading up."""

    def test_move_up_cost(self):
        assert calculate_move_up_cost(20, 10) == 450

    def test_no_cost_when_not_moving_up(self):
        assert calculate_move_up_cost(10, 20) == 0
        assert calculate_move_up_cost(10, 10) == 0

    def test_package_uses_cheapest_picks_first(self):
        assert calculate_picks_to_move_up(20, 10, [33, 52, 64]) == [20, 64, 52]

    def test_insufficient_picks(self):
        assert calculate_picks_to_move_up(32, 1, [200, 250]) == []

    def test_not_moving_up(self):
        assert calculate_picks_to_move_up(10, 20, [33]) == []
