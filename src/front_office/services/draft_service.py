"""
Draft Service

Draft class preparation, pick order creation and pick execution.

Every pick, whether made by the user or by DraftAI, goes through
``execute_pick`` so the pick row, the prospect's drafted flag, the new player
and the selection log are written in one transaction.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

from front_office.config import LeagueSettings
from front_office.database import LeagueStore
from front_office.draft import ProspectGenerator
from front_office.exceptions import ConstraintError, NotFoundError
from front_office.models import DraftPick, DraftSelection


class DraftService:
    """
    Service for running a draft against a LeagueStore.

    Uses dependency injection: the store and settings are passed in.
    """

    DEFAULT_TIME_ON_CLOCK = 300

    def __init__(self, store: LeagueStore, settings: Optional[LeagueSettings] = None):
        self.store = store
        self.settings = settings or LeagueSettings.create_default_2025()
        self.logger = logging.getLogger(__name__)

    def prepare_draft_class(
        self,
        draft_year: int,
        generator: ProspectGenerator,
        size: int = ProspectGenerator.DEFAULT_CLASS_SIZE,
        first_prospect_id: int = 1
    ) -> Dict[str, Any]:
        """
        Generate and store a draft class unless one already exists.

        Returns:
            Dict with draft_year, total_prospects and already_existed
        """
        if self.store.get_available_prospects(draft_year, limit=1) or self.store.get_selections(draft_year):
            self.logger.warning(f"Draft class for {draft_year} already exists, skipping generation")
            return {
                "draft_year": draft_year,
                "total_prospects": len(self.store.get_available_prospects(draft_year)),
                "already_existed": True,
            }

        prospects = generator.generate_draft_class(draft_year, size, first_prospect_id)
        self.store.add_prospects(prospects)

        self.logger.info(f"Draft class generated: {len(prospects)} prospects for {draft_year}")

        return {
            "draft_year": draft_year,
            "total_prospects": len(prospects),
            "already_existed": False,
        }

    def create_draft_order(self, draft_year: int, team_order: List[int]) -> List[DraftPick]:
        """
        Create one pick per team per round in the given order.

        Args:
            draft_year: Draft year
            team_order: Team ids in first-round order (worst record first)

        Returns:
            Created picks ordered by overall pick
        """
        picks = []
        with self.store.transaction():
            for round_number in range(1, self.settings.draft_rounds + 1):
                for index, team_id in enumerate(team_order):
                    picks.append(self.store.create_draft_pick(DraftPick(
                        draft_year=draft_year,
                        round=round_number,
                        pick_number=index + 1,
                        overall_pick=(round_number - 1) * len(team_order) + index + 1,
                        original_team_id=team_id,
                        current_team_id=team_id,
                    )))

        self.logger.info(f"Created {len(picks)} picks for the {draft_year} draft")
        return picks

    def get_next_pick(self, draft_year: int) -> Optional[DraftPick]:
        """Lowest unused pick, None when the draft is complete."""
        remaining = self.store.get_draft_picks(draft_year, unused_only=True)
        return remaining[0] if remaining else None

    def execute_pick(
        self,
        draft_year: int,
        overall_pick: int,
        prospect_id: int,
        team_id: Optional[int] = None,
        time_on_clock: int = DEFAULT_TIME_ON_CLOCK
    ) -> DraftSelection:
        """
        Use a pick on a prospect.

        Args:
            draft_year: Draft year
            overall_pick: Pick being used
            prospect_id: Prospect being selected
            team_id: Team making the pick; when given it must own the pick
            time_on_clock: Seconds used, recorded in the draft log

        Returns:
            The recorded DraftSelection (with the new player's id)

        Raises:
            NotFoundError: If the pick or prospect does not exist
            ConstraintError: If the pick is used, owned by another team, or
                the prospect is already drafted or from another class
        """
        pick = next(
            (p for p in self.store.get_draft_picks(draft_year) if p.overall_pick == overall_pick),
            None,
        )
        if pick is None:
            raise NotFoundError(
                f"No pick {overall_pick} in the {draft_year} draft",
                {"draft_year": draft_year, "overall_pick": overall_pick},
            )
        if pick.is_used:
            raise ConstraintError(
                f"Pick {overall_pick} has already been used",
                {"draft_year": draft_year, "overall_pick": overall_pick},
            )
        if team_id is not None and pick.current_team_id != team_id:
            raise ConstraintError(
                f"Pick {overall_pick} belongs to team {pick.current_team_id}",
                {"overall_pick": overall_pick, "team_id": team_id},
            )

        prospect = self.store.get_prospect(prospect_id)
        if prospect.draft_year != draft_year:
            raise ConstraintError(
                f"Prospect {prospect_id} is in the {prospect.draft_year} class",
                {"prospect_id": prospect_id, "draft_year": draft_year},
            )

        with self.store.transaction():
            drafted = prospect.mark_drafted(
                pick.current_team_id, pick.round, pick.pick_number, pick.overall_pick
            )
            self.store.update_prospect(drafted)

            player = self.store.create_player(drafted.to_player(0))

            self.store.update_draft_pick(replace(pick, is_used=True, player_selected_id=prospect_id))

            selection = DraftSelection(
                draft_year=draft_year,
                round=pick.round,
                pick_number=pick.pick_number,
                overall_pick=pick.overall_pick,
                team_id=pick.current_team_id,
                prospect_id=prospect_id,
                player_id=player.player_id,
                time_on_clock=time_on_clock,
            )
            self.store.record_selection(selection)
            self.store.record_transaction(
                "draft_selection",
                pick.current_team_id,
                player.player_id,
                {"draft_year": draft_year, "overall_pick": pick.overall_pick, "prospect_id": prospect_id},
            )

        self.logger.info(
            f"Pick {pick.overall_pick}: Team {pick.current_team_id} selects "
            f"{drafted.name} ({drafted.position})"
        )

        return selection
