"""
Team Needs Analyzer

Identifies positional weaknesses from roster counts and average ratings.
Used by the draft and free agency AI.
"""

import logging
from typing import Dict, List

from front_office.database import LeagueStore


class TeamNeedsAnalyzer:
    """
    Analyzes a team's active roster position by position.

    A position is a need when the team carries fewer players than the
    position minimum or their average rating is below 70. Positions with no
    players are treated as averaging 60.
    """

    POSITION_MINIMUMS: Dict[str, int] = {
        'QB': 2,
        'RB': 3,
        'WR': 5,
        'TE': 3,
        'OT': 2,
        'OG': 2,
        'C': 1,
        'EDGE': 3,
        'DT': 3,
        'LB': 4,
        'CB': 4,
        'S': 3,
    }
    DEFAULT_MINIMUM = 2
    MISSING_AVERAGE_RATING = 60
    QUALITY_THRESHOLD = 70
    UPGRADE_THRESHOLD = 75

    # Need levels (0-1)
    NEED_BELOW_MINIMUM = 0.9
    NEED_LOW_QUALITY = 0.7
    NEED_AVERAGE_QUALITY = 0.5
    NEED_UPGRADE_ONLY = 0.3

    def __init__(self, store: LeagueStore):
        self.store = store
        self.logger = logging.getLogger(__name__)

    def _count_and_average(self, team_id: int, position: str):
        summary = self.store.get_position_summary(team_id, position)
        avg_rating = summary.avg_rating if summary.avg_rating is not None else self.MISSING_AVERAGE_RATING
        return summary.count, avg_rating

    def get_position_needs(self, team_id: int) -> List[str]:
        """
        Positions where the team is thin or weak.

        Returns:
            Position abbreviations in POSITION_MINIMUMS order
        """
        needs = []
        for position, minimum in self.POSITION_MINIMUMS.items():
            count, avg_rating = self._count_and_average(team_id, position)
            if count < minimum or avg_rating < self.QUALITY_THRESHOLD:
                needs.append(position)

        self.logger.debug(f"Team {team_id} needs: {needs}")
        return needs

    def evaluate_position_need(self, team_id: int, position: str) -> float:
        """
        How much a team needs a player at one position.

        Returns:
            0.9 below the minimum, 0.7 if the average is under 70, 0.5 if
            under 75, else 0.3
        """
        count, avg_rating = self._count_and_average(team_id, position)
        minimum = self.POSITION_MINIMUMS.get(position, self.DEFAULT_MINIMUM)

        if count < minimum:
            return self.NEED_BELOW_MINIMUM
        if avg_rating < self.QUALITY_THRESHOLD:
            return self.NEED_LOW_QUALITY
        if avg_rating < self.UPGRADE_THRESHOLD:
            return self.NEED_AVERAGE_QUALITY
        return self.NEED_UPGRADE_ONLY
