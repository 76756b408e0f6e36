"""
Tests for DraftService class preparation, draft order and pick execution.
"""

import pytest

from front_office.draft import ProspectGenerator
from front_office.exceptions import ConstraintError, NotFoundError
from front_office.models import DraftProspect, RosterStatus
from front_office.services import DraftService


TEAM_ORDER = [3, 1, 4, 2]


@pytest.fixture
def service(league, settings):
    return DraftService(league, settings)


@pytest.fixture
def draft(service, league):
    """2025 order for four teams plus three prospects."""
    service.create_draft_order(2025, TEAM_ORDER)
    league.add_prospects([
        _prospect(1, "QB", 84),
        _prospect(2, "EDGE", 80),
        _prospect(3, "CB", 72),
    ])
    return service


def _prospect(prospect_id, position, scouted, draft_year=2025):
    return DraftProspect(
        prospect_id=prospect_id, draft_year=draft_year, first_name="Draft", last_name=f"Pick{prospect_id}",
        position=position, age=21, true_overall_rating=scouted + 2, scouted_overall_rating=scouted,
        draft_grade="2nd-3rd Round", projected_round=2, college="Georgia",
    )


@pytest.mark.slow
class TestPrepareDraftClass:

    def test_generates_class(self, service, league, rng):
        summary = service.prepare_draft_class(2025, ProspectGenerator(rng))

        assert summary == {"draft_year": 2025, "total_prospects": 280, "already_existed": False}
        assert len(league.get_available_prospects(2025)) == 280

    def test_existing_class_is_kept(self, service, league, rng):
        service.prepare_draft_class(2025, ProspectGenerator(rng))
        first_ids = [p.prospect_id for p in league.get_available_prospects(2025)]

        summary = service.prepare_draft_class(2025, ProspectGenerator(rng), first_prospect_id=5000)

        assert summary["already_existed"]
        assert summary["total_prospects"] == 280
        assert [p.prospect_id for p in league.get_available_prospects(2025)] == first_ids


class TestDraftOrder:

    def test_one_pick_per_team_per_round(self, service, settings):
        picks = service.create_draft_order(2025, TEAM_ORDER)

        assert len(picks) == settings.draft_rounds * len(TEAM_ORDER)
        assert [p.overall_pick for p in picks] == list(range(1, len(picks) + 1))

    def test_round_order_repeats(self, service):
        picks = service.create_draft_order(2025, TEAM_ORDER)

        assert [p.current_team_id for p in picks[:8]] == TEAM_ORDER * 2
        second_round_first = picks[4]
        assert (second_round_first.round, second_round_first.pick_number) == (2, 1)
        assert second_round_first.overall_pick == 5
        assert second_round_first.original_team_id == 3

    def test_next_pick(self, service):
        service.create_draft_order(2025, TEAM_ORDER)

        next_pick = service.get_next_pick(2025)

        assert next_pick.overall_pick == 1
        assert next_pick.current_team_id == 3

    def test_no_picks(self, service):
        assert service.get_next_pick(2030) is None


class TestExecutePick:

    def test_pick_creates_rookie(self, draft, league):
        selection = draft.execute_pick(2025, 1, prospect_id=2, team_id=3, time_on_clock=145)

        assert selection.team_id == 3
        assert selection.round == 1
        assert selection.prospect_id == 2
        assert selection.time_on_clock == 145

        rookie = league.get_player(selection.player_id)
        assert rookie.current_team_id == 3
        assert rookie.roster_status == RosterStatus.ACTIVE
        assert rookie.position == "EDGE"
        # Rookies carry the true rating
        assert rookie.overall_rating == 82
        assert rookie.draft_year == 2025

    def test_pick_marks_everything_used(self, draft, league):
        draft.execute_pick(2025, 1, prospect_id=2)

        prospect = league.get_prospect(2)
        assert prospect.is_drafted
        assert prospect.drafted_by_team_id == 3
        assert prospect.drafted_overall == 1

        assert [p.prospect_id for p in league.get_available_prospects(2025)] == [1, 3]
        assert draft.get_next_pick(2025).overall_pick == 2
        assert [s.prospect_id for s in league.get_selections(2025)] == [2]

        logged = league.get_transactions(team_id=3)[-1]
        assert logged["transaction_type"] == "draft_selection"
        assert logged["details"]["overall_pick"] == 1

    def test_used_pick(self, draft):
        draft.execute_pick(2025, 1, prospect_id=1)

        with pytest.raises(ConstraintError):
            draft.execute_pick(2025, 1, prospect_id=2)

    def test_pick_owned_by_another_team(self, draft, league):
        with pytest.raises(ConstraintError):
            draft.execute_pick(2025, 1, prospect_id=1, team_id=1)

        assert not league.get_prospect(1).is_drafted

    def test_missing_pick(self, draft):
        with pytest.raises(NotFoundError):
            draft.execute_pick(2025, 999, prospect_id=1)

    def test_missing_prospect(self, draft):
        with pytest.raises(NotFoundError):
            draft.execute_pick(2025, 1, prospect_id=404)

    def test_prospect_from_another_class(self, draft, league):
        league.add_prospects([_prospect(50, "S", 75, draft_year=2026)])

        with pytest.raises(ConstraintError):
            draft.execute_pick(2025, 1, prospect_id=50)

    def test_prospect_already_drafted(self, draft, league):
        draft.execute_pick(2025, 1, prospect_id=1)
        players_before = len(league.get_players())

        with pytest.raises(ConstraintError):
            draft.execute_pick(2025, 2, prospect_id=1)

        assert draft.get_next_pick(2025).overall_pick == 2
        assert len(league.get_players()) == players_before
        assert len(league.get_selections(2025)) == 1
