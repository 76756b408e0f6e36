"""
Draft AI

Makes draft picks for AI-controlled teams.

Each team blends best-player-available with positional need using a
per-team BPA weight (0.35-0.65). Selection takes the top-scored prospect 70%
of the time, the second 20% and the third 10%, so the AI is not perfectly
predictable. The AI only ever sees scouted ratings.
"""

import logging
from typing import Dict, List, Optional

from front_office.config import DraftConstants, LeagueSettings
from front_office.database import LeagueStore
from front_office.models import (
    DevelopmentTrait,
    DraftBoardEntry,
    DraftSelection,
    DraftStrategy,
    ProspectEvaluation,
    ScoutedProspect,
)
from front_office.random_source import RandomSource
from front_office.services import DraftService
from .team_needs_analyzer import TeamNeedsAnalyzer


class DraftAI:
    """
    AI drafting for every team except the user's.

    Example:
        >>> ai = DraftAI(store, TeamNeedsAnalyzer(store), DraftService(store), rng)
        >>> selections = ai.process_ai_picks(2025)
        >>> # stops when the user's team is on the clock
    """

    PREFERRED_TRAITS = [DevelopmentTrait.QUICK, DevelopmentTrait.ELITE, DevelopmentTrait.STAR]
    BPA_RANGE_POINTS = 3

    BPA_BONUS = 10
    NEED_BONUS = 15
    TRAIT_BONUS = 5
    WORK_ETHIC_BONUS = 3
    CHARACTER_BONUS = 2
    FOOTBALL_IQ_BONUS = 3
    INJURY_PENALTY = 5
    INTANGIBLE_THRESHOLD = 4

    # Cumulative selection odds for the top three prospects
    TOP_CHOICE_ODDS = 0.7
    SECOND_CHOICE_ODDS = 0.9

    def __init__(
        self,
        store: LeagueStore,
        needs_analyzer: TeamNeedsAnalyzer,
        draft_service: DraftService,
        rng: Optional[RandomSource] = None,
        settings: Optional[LeagueSettings] = None
    ):
        self.store = store
        self.needs_analyzer = needs_analyzer
        self.draft_service = draft_service
        self.rng = rng or RandomSource()
        self.settings = settings or draft_service.settings
        self.logger = logging.getLogger(__name__)

    # ========================================================================
    # STRATEGY AND EVALUATION
    # ========================================================================

    def get_team_draft_strategy(self, team_id: int) -> DraftStrategy:
        """Team needs plus a randomized BPA weight in [0.35, 0.65]."""
        bpa_weight = 0.5 + (self.rng.random() - 0.5) * 0.3

        return DraftStrategy(
            team_id=team_id,
            bpa_weight=bpa_weight,
            position_needs=self.needs_analyzer.get_position_needs(team_id),
            preferred_traits=list(self.PREFERRED_TRAITS),
        )

    def get_candidate_pool(self, draft_year: int, limit: int = DraftConstants.AI_CANDIDATE_POOL) -> List[ScoutedProspect]:
        """Best available prospects by scouted rating, scouted view only."""
        return [p.scouted_view() for p in self.store.get_available_prospects(draft_year, limit=limit)]

    def evaluate_prospects(
        self,
        prospects: List[ScoutedProspect],
        strategy: DraftStrategy
    ) -> List[ProspectEvaluation]:
        """
        Score prospects for one team.

        score = rating
                + 10 x bpa_weight         (within 3 points of the best available)
                + 15 x (1 - bpa_weight)   (need position)
                + 5                       (preferred development trait)
                + 3 / 2 / 3               (work ethic / character / football IQ >= 4)
                - 5                       (injury risk >= 4)

        Returns:
            Evaluations sorted best first
        """
        if not prospects:
            return []

        bpa_rating = max(p.scouted_overall_rating for p in prospects)
        evaluations = []

        for prospect in prospects:
            rating = prospect.scouted_overall_rating
            is_bpa = rating >= bpa_rating - self.BPA_RANGE_POINTS
            is_need = prospect.position in strategy.position_needs

            score = float(rating)
            if is_bpa:
                score += self.BPA_BONUS * strategy.bpa_weight
            if is_need:
                score += self.NEED_BONUS * (1 - strategy.bpa_weight)
            if prospect.development_trait in strategy.preferred_traits:
                score += self.TRAIT_BONUS

            intangibles = prospect.intangibles
            if intangibles.work_ethic >= self.INTANGIBLE_THRESHOLD:
                score += self.WORK_ETHIC_BONUS
            if intangibles.character_grade >= self.INTANGIBLE_THRESHOLD:
                score += self.CHARACTER_BONUS
            if intangibles.football_iq >= self.INTANGIBLE_THRESHOLD:
                score += self.FOOTBALL_IQ_BONUS
            if intangibles.injury_risk >= self.INTANGIBLE_THRESHOLD:
                score -= self.INJURY_PENALTY

            evaluations.append(ProspectEvaluation(
                prospect_id=prospect.prospect_id,
                score=score,
                is_bpa=is_bpa,
                is_need=is_need,
                name=prospect.name,
                position=prospect.position,
                overall_rating=rating,
            ))

        return sorted(evaluations, key=lambda e: e.score, reverse=True)

    def select_prospect(self, evaluations: List[ProspectEvaluation]) -> Optional[ProspectEvaluation]:
        """Top choice 70%, second 20%, third 10% (falls back to the top choice)."""
        if not evaluations:
            return None

        top = evaluations[:3]
        roll = self.rng.random()

        if roll < self.TOP_CHOICE_ODDS:
            return top[0]
        if roll < self.SECOND_CHOICE_ODDS and len(top) > 1:
            return top[1]
        if len(top) > 2:
            return top[2]
        return top[0]

    # ========================================================================
    # PICKING
    # ========================================================================

    def make_pick(self, team_id: int, draft_year: int) -> Optional[int]:
        """
        Choose a prospect for a team without persisting anything.

        Returns:
            Prospect id, or None when no prospects remain
        """
        pool = self.get_candidate_pool(draft_year)
        if not pool:
            return None

        strategy = self.get_team_draft_strategy(team_id)
        selected = self.select_prospect(self.evaluate_prospects(pool, strategy))
        return selected.prospect_id if selected else None

    def process_ai_picks(self, draft_year: int, user_team_id: Optional[int] = None) -> List[DraftSelection]:
        """
        Make AI picks in order until the user is on the clock.

        Stops when the next unused pick belongs to the user's team, the picks
        run out, or no prospects remain. Each pick is committed on its own,
        so an interrupted run can simply be called again.

        Returns:
            Selections made by this call
        """
        if user_team_id is None:
            user_team_id = self.settings.user_team_id

        selections: List[DraftSelection] = []

        while True:
            next_pick = self.draft_service.get_next_pick(draft_year)

            if next_pick is None:
                self.logger.info(f"{draft_year} draft is complete")
                break

            if next_pick.current_team_id == user_team_id:
                self.logger.info(f"User is on the clock at pick {next_pick.overall_pick}")
                break

            prospect_id = self.make_pick(next_pick.current_team_id, draft_year)
            if prospect_id is None:
                self.logger.info("No prospects available")
                break

            selections.append(self.draft_service.execute_pick(
                draft_year,
                next_pick.overall_pick,
                prospect_id,
                team_id=next_pick.current_team_id,
                time_on_clock=self.rng.randint(120, 299),
            ))

        return selections

    def build_draft_boards(
        self,
        draft_year: int,
        user_team_id: Optional[int] = None,
        board_size: int = DraftConstants.AI_BOARD_SIZE
    ) -> Dict[int, List[DraftBoardEntry]]:
        """
        Rank the whole class for every AI team and save each team's top entries.

        Returns:
            Board entries by team id
        """
        if user_team_id is None:
            user_team_id = self.settings.user_team_id

        prospects = [p.scouted_view() for p in self.store.get_available_prospects(draft_year)]
        boards: Dict[int, List[DraftBoardEntry]] = {}

        for team in self.store.get_teams():
            if team.team_id == user_team_id:
                continue

            strategy = self.get_team_draft_strategy(team.team_id)
            evaluations = self.evaluate_prospects(prospects, strategy)[:board_size]
            entries = [
                DraftBoardEntry(
                    team_id=team.team_id,
                    prospect_id=evaluation.prospect_id,
                    rank=rank,
                    is_need_position=evaluation.is_need,
                )
                for rank, evaluation in enumerate(evaluations, start=1)
            ]
            self.store.save_draft_board(team.team_id, entries)
            boards[team.team_id] = entries

        self.logger.info(f"Initialized draft boards for {len(boards)} AI teams")
        return boards
