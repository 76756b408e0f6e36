"""
Tests for TeamNeedsAnalyzer.
"""

import pytest

from front_office.models import Player, RosterStatus
from front_office.offseason import TeamNeedsAnalyzer


@pytest.fixture
def analyzer(league):
    return TeamNeedsAnalyzer(league)


class TestPositionNeeds:
    """Test the list of needs."""

    def test_empty_roster_needs_everything(self, analyzer):
        assert analyzer.get_position_needs(1) == list(TeamNeedsAnalyzer.POSITION_MINIMUMS)

    def test_covered_position_is_not_a_need(self, analyzer, league, roster):
        roster(league, 1, "QB", [82, 74], first_player_id=1)
        roster(league, 1, "C", [71], first_player_id=3)

        needs = analyzer.get_position_needs(1)

        assert "QB" not in needs
        assert "C" not in needs
        assert "WR" in needs

    def test_weak_position_is_a_need(self, analyzer, league, roster):
        roster(league, 1, "QB", [68, 66, 65], first_player_id=1)

        assert "QB" in analyzer.get_position_needs(1)

    def test_other_teams_and_free_agents_ignored(self, analyzer, league, roster):
        roster(league, 2, "C", [90], first_player_id=1)
        league.create_player(Player(player_id=2, position="C", age=28, overall_rating=90))

        assert "C" in analyzer.get_position_needs(1)

    def test_inactive_players_ignored(self, analyzer, league):
        league.create_player(Player(
            player_id=1, position="C", age=28, overall_rating=90,
            current_team_id=1, roster_status=RosterStatus.INJURED_RESERVE,
        ))

        assert analyzer.evaluate_position_need(1, "C") == TeamNeedsAnalyzer.NEED_BELOW_MINIMUM


class TestPositionNeedLevel:
    """Test need levels for one position."""

    @pytest.mark.parametrize("ratings,level", [
        ([90], 0.9),            # below the 2-QB minimum
        ([68, 70], 0.7),        # average 69
        ([72, 74], 0.5),        # average 73
        ([75, 75], 0.3),
        ([88, 84, 60], 0.3),    # average 77.3
    ])
    def test_quarterback_levels(self, analyzer, league, roster, ratings, level):
        roster(league, 1, "QB", ratings, first_player_id=1)

        assert analyzer.evaluate_position_need(1, "QB") == pytest.approx(level)

    def test_unlisted_position_uses_default_minimum(self, analyzer, league, roster):
        roster(league, 1, "K", [80], first_player_id=1)
        assert analyzer.evaluate_position_need(1, "K") == pytest.approx(0.9)

        roster(league, 1, "K", [78], first_player_id=2)
        assert analyzer.evaluate_position_need(1, "K") == pytest.approx(0.3)

    def test_missing_position_is_thin(self, analyzer):
        assert analyzer.evaluate_position_need(1, "LB") == pytest.approx(0.9)
