"""
Tests for DraftAI scoring, selection and the AI pick loop.
"""

import pytest

from front_office.models import (
    DevelopmentTrait,
    DraftProspect,
    DraftStrategy,
    Intangibles,
    ProspectEvaluation,
    ScoutedProspect,
)
from front_office.offseason import DraftAI, TeamNeedsAnalyzer
from front_office.services import DraftService


TEAM_ORDER = [3, 1, 4, 2]


def _make_ai(store, rng, settings):
    draft_service = DraftService(store, settings)
    return DraftAI(store, TeamNeedsAnalyzer(store), draft_service, rng, settings)


@pytest.fixture
def draft_ai(league, rng, settings):
    return _make_ai(league, rng, settings)


def _scouted(prospect_id, position, rating, trait=DevelopmentTrait.NORMAL, intangibles=None):
    return ScoutedProspect(
        prospect_id=prospect_id,
        name=f"Prospect {prospect_id}",
        position=position,
        scouted_overall_rating=rating,
        draft_grade="2nd-3rd Round",
        projected_round=2,
        development_trait=trait,
        intangibles=intangibles or Intangibles(),
    )


def _prospect(prospect_id, position, scouted, true_rating=None):
    return DraftProspect(
        prospect_id=prospect_id, draft_year=2025, first_name="Board", last_name=f"Name{prospect_id}",
        position=position, age=22, true_overall_rating=true_rating or scouted, scouted_overall_rating=scouted,
        draft_grade="2nd-3rd Round", projected_round=2,
    )


def _evaluation(prospect_id, score):
    return ProspectEvaluation(
        prospect_id=prospect_id, score=score, is_bpa=False, is_need=False,
        name=f"Prospect {prospect_id}", position="WR", overall_rating=70,
    )


QB_NEED = DraftStrategy(team_id=2, bpa_weight=0.5, position_needs=["QB"],
                        preferred_traits=list(DraftAI.PREFERRED_TRAITS))


class TestStrategy:

    def test_bpa_weight_range(self, draft_ai):
        for _ in range(50):
            strategy = draft_ai.get_team_draft_strategy(2)
            assert 0.35 <= strategy.bpa_weight <= 0.65

    def test_fixed_roll_gives_even_weight(self, league, settings, fixed_rng):
        ai = _make_ai(league, fixed_rng([0.5]), settings)
        strategy = ai.get_team_draft_strategy(2)

        assert strategy.bpa_weight == pytest.approx(0.5)
        assert strategy.team_id == 2
        # An empty roster needs every position
        assert "QB" in strategy.position_needs


class TestEvaluateProspects:

    def test_scores(self, draft_ai):
        prospects = [
            _scouted(1, "QB", 80),
            _scouted(2, "WR", 82, trait=DevelopmentTrait.QUICK),
            _scouted(3, "CB", 78, intangibles=Intangibles(
                work_ethic=4, injury_risk=4, character_grade=4, football_iq=4)),
        ]

        evaluations = draft_ai.evaluate_prospects(prospects, QB_NEED)

        # 80 + 5 BPA + 7.5 need, 82 + 5 BPA + 5 trait, 78 + 8 intangibles - 5 injury
        assert [e.prospect_id for e in evaluations] == [1, 2, 3]
        assert [e.score for e in evaluations] == pytest.approx([92.5, 92.0, 81.0])
        assert evaluations[0].is_need and evaluations[0].is_bpa
        assert not evaluations[2].is_bpa

    def test_bpa_window(self, draft_ai):
        evaluations = draft_ai.evaluate_prospects(
            [_scouted(1, "S", 85), _scouted(2, "S", 82), _scouted(3, "S", 81)], QB_NEED
        )

        assert {e.prospect_id: e.is_bpa for e in evaluations} == {1: True, 2: True, 3: False}

    def test_no_prospects(self, draft_ai):
        assert draft_ai.evaluate_prospects([], QB_NEED) == []

    def test_candidate_pool_hides_true_rating(self, draft_ai, league):
        league.add_prospects([_prospect(1, "QB", 80, true_rating=90)])

        pool = draft_ai.get_candidate_pool(2025)

        assert len(pool) == 1
        assert isinstance(pool[0], ScoutedProspect)
        assert pool[0].scouted_overall_rating == 80
        assert not hasattr(pool[0], "true_overall_rating")


class TestSelectProspect:

    @pytest.mark.parametrize("roll,chosen", [(0.1, 1), (0.69, 1), (0.7, 2), (0.85, 2), (0.9, 3), (0.99, 3)])
    def test_selection_odds(self, league, settings, roll, chosen, fixed_rng):
        ai = _make_ai(league, fixed_rng([roll]), settings)
        evaluations = [_evaluation(1, 90), _evaluation(2, 85), _evaluation(3, 80), _evaluation(4, 75)]

        assert ai.select_prospect(evaluations).prospect_id == chosen

    def test_falls_back_to_top_choice(self, league, settings, fixed_rng):
        ai = _make_ai(league, fixed_rng([0.95]), settings)

        assert ai.select_prospect([_evaluation(1, 90), _evaluation(2, 85)]).prospect_id == 1
        assert ai.select_prospect([_evaluation(1, 90)]).prospect_id == 1

    def test_nothing_to_select(self, draft_ai):
        assert draft_ai.select_prospect([]) is None

    def test_make_pick_without_prospects(self, draft_ai):
        assert draft_ai.make_pick(2, 2025) is None


@pytest.mark.integration
class TestProcessAIPicks:
    """Test the pick loop against a stored draft."""

    @pytest.fixture
    def draft(self, draft_ai, league):
        draft_ai.draft_service.create_draft_order(2025, TEAM_ORDER)
        league.add_prospects([_prospect(i, "WR", 60 + i) for i in range(1, 11)])
        return draft_ai

    def test_stops_when_user_on_clock(self, draft, league):
        selections = draft.process_ai_picks(2025, user_team_id=1)

        assert [s.overall_pick for s in selections] == [1]
        assert selections[0].team_id == 3
        assert draft.draft_service.get_next_pick(2025).current_team_id == 1

    def test_resumes_after_user_pick(self, draft, league):
        draft.process_ai_picks(2025, user_team_id=1)
        user_choice = league.get_available_prospects(2025, limit=1)[0]
        draft.draft_service.execute_pick(2025, 2, user_choice.prospect_id, team_id=1)

        selections = draft.process_ai_picks(2025, user_team_id=1)

        assert [s.overall_pick for s in selections] == [3, 4, 5]
        assert [s.team_id for s in selections] == [4, 2, 3]
        assert all(120 <= s.time_on_clock <= 299 for s in selections)

    def test_user_team_from_settings(self, draft, settings):
        assert settings.user_team_id == 1

        selections = draft.process_ai_picks(2025)

        assert len(selections) == 1

    def test_stops_when_prospects_run_out(self, draft, league):
        selections = draft.process_ai_picks(2025, user_team_id=99)

        assert len(selections) == 10
        assert league.get_available_prospects(2025) == []
        assert draft.draft_service.get_next_pick(2025).overall_pick == 11

        drafted = {s.prospect_id for s in selections}
        assert drafted == set(range(1, 11))

    def test_every_selection_becomes_a_player(self, draft, league):
        selections = draft.process_ai_picks(2025, user_team_id=99)

        for selection in selections:
            assert league.get_player(selection.player_id).current_team_id == selection.team_id


class TestDraftBoards:

    def test_boards_for_ai_teams_only(self, draft_ai, league):
        league.add_prospects([_prospect(i, "OT", 60 + i) for i in range(1, 6)])

        boards = draft_ai.build_draft_boards(2025, user_team_id=1, board_size=3)

        assert sorted(boards) == [2, 3, 4]
        for team_id, entries in boards.items():
            assert [e.rank for e in entries] == [1, 2, 3]
            assert league.get_draft_board(team_id) == entries
        assert league.get_draft_board(1) == []
