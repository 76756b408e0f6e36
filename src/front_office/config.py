"""
League configuration for the Front Office engine.

Provides:
- CapConstants: NFL salary cap rule constants (2025 CBA values)
- DraftConstants: draft structure constants
- LeagueSettings: per-save settings dataclass passed to engines and services

Usage:
    from front_office.config import LeagueSettings

    settings = LeagueSettings.create_default_2025()
    minimum = settings.get_minimum_salary(accrued_seasons=4)
"""

from dataclasses import dataclass, field
from typing import Dict, Any


class CapConstants:
    """
    Salary cap rule constants.

    All money values are whole dollars.
    """

    SALARY_CAP_2025 = 279_200_000
    """League-wide salary cap for the 2025 league year ($279.2M)"""

    SALARY_FLOOR_PERCENTAGE = 0.89
    """Cash spending floor as a share of the cap"""

    MAX_PRORATION_YEARS = 5
    """Signing bonuses never prorate over more than 5 seasons"""

    OFFSEASON_CAP_COUNT = 51
    """Top-51 rule: only the 51 largest cap hits count in the offseason"""

    REGULAR_SEASON_CAP_COUNT = 53
    """Full active roster counts during the season"""

    MIN_CONTRACT_YEARS = 1
    MAX_CONTRACT_YEARS = 7
    MIN_TOTAL_VALUE = 1_000_000

    MINIMUM_SALARIES = {
        0: 750_000,
        1: 870_000,
        2: 940_000,
        3: 1_000_000,
        4: 1_092_500,
        5: 1_092_500,
        6: 1_092_500,
        7: 1_250_000,
        8: 1_250_000,
        9: 1_250_000,
        10: 1_500_000,
    }
    """Minimum base salary keyed by accrued seasons (10 = 10+)"""


class DraftConstants:
    """Draft structure constants."""

    DRAFT_ROUNDS = 7
    PICKS_PER_ROUND = 32
    TOTAL_PICK_SLOTS = 263  # 7 x 32 regular picks plus compensatory selections
    AI_BOARD_SIZE = 250
    AI_CANDIDATE_POOL = 100


@dataclass
class LeagueSettings:
    """
    League-level settings for one save.

    Attributes:
        season: Current league year
        salary_cap: Cap limit in dollars
        salary_floor_pct: Cash floor share of the cap
        is_offseason: Whether top-51 accounting applies
        offseason_cap_count: Contracts counted in the offseason
        regular_season_cap_count: Contracts counted in season
        max_proration_years: Proration divisor ceiling
        min_contract_years: Shortest allowed contract
        max_contract_years: Longest allowed contract
        min_total_value: Smallest allowed total contract value
        minimum_salaries: Minimum base salary by accrued seasons
        draft_rounds: Rounds in the draft
        picks_per_round: Picks per round
        user_team_id: Team controlled by the human player
    """

    season: int = 2025
    salary_cap: int = CapConstants.SALARY_CAP_2025
    salary_floor_pct: float = CapConstants.SALARY_FLOOR_PERCENTAGE
    is_offseason: bool = True
    offseason_cap_count: int = CapConstants.OFFSEASON_CAP_COUNT
    regular_season_cap_count: int = CapConstants.REGULAR_SEASON_CAP_COUNT
    max_proration_years: int = CapConstants.MAX_PRORATION_YEARS
    min_contract_years: int = CapConstants.MIN_CONTRACT_YEARS
    max_contract_years: int = CapConstants.MAX_CONTRACT_YEARS
    min_total_value: int = CapConstants.MIN_TOTAL_VALUE
    minimum_salaries: Dict[int, int] = field(
        default_factory=lambda: dict(CapConstants.MINIMUM_SALARIES)
    )
    draft_rounds: int = DraftConstants.DRAFT_ROUNDS
    picks_per_round: int = DraftConstants.PICKS_PER_ROUND
    user_team_id: int = 1

    def __post_init__(self):
        """Validate settings."""
        if self.salary_cap <= 0:
            raise ValueError(f"salary_cap must be positive, got {self.salary_cap}")
        if self.max_proration_years < 1:
            raise ValueError("max_proration_years must be at least 1")
        if not 1 <= self.min_contract_years <= self.max_contract_years:
            raise ValueError(
                f"Invalid contract year bounds: {self.min_contract_years}-{self.max_contract_years}"
            )
        if not self.minimum_salaries:
            raise ValueError("minimum_salaries table cannot be empty")

    @property
    def cap_count(self) -> int:
        """Number of contracts that count against the cap right now."""
        if self.is_offseason:
            return self.offseason_cap_count
        return self.regular_season_cap_count

    @property
    def salary_floor(self) -> int:
        """Cash floor in dollars."""
        return int(self.salary_cap * self.salary_floor_pct)

    def get_minimum_salary(self, accrued_seasons: int) -> int:
        """
        Minimum base salary for a player's experience level.

        Accrued seasons above the top bucket use the top bucket.
        """
        top_bucket = max(self.minimum_salaries)
        bucket = max(0, min(accrued_seasons, top_bucket))
        return self.minimum_salaries.get(bucket, self.minimum_salaries[top_bucket])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "season": self.season,
            "salary_cap": self.salary_cap,
            "salary_floor_pct": self.salary_floor_pct,
            "is_offseason": self.is_offseason,
            "offseason_cap_count": self.offseason_cap_count,
            "regular_season_cap_count": self.regular_season_cap_count,
            "max_proration_years": self.max_proration_years,
            "min_contract_years": self.min_contract_years,
            "max_contract_years": self.max_contract_years,
            "min_total_value": self.min_total_value,
            "minimum_salaries": {str(k): v for k, v in self.minimum_salaries.items()},
            "draft_rounds": self.draft_rounds,
            "picks_per_round": self.picks_per_round,
            "user_team_id": self.user_team_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LeagueSettings":
        """Create from dictionary (JSON keys for the salary table are strings)."""
        minimum_salaries = data.get("minimum_salaries")
        if minimum_salaries is not None:
            minimum_salaries = {int(k): int(v) for k, v in minimum_salaries.items()}
        else:
            minimum_salaries = dict(CapConstants.MINIMUM_SALARIES)

        return cls(
            season=data.get("season", 2025),
            salary_cap=data.get("salary_cap", CapConstants.SALARY_CAP_2025),
            salary_floor_pct=data.get("salary_floor_pct", CapConstants.SALARY_FLOOR_PERCENTAGE),
            is_offseason=data.get("is_offseason", True),
            offseason_cap_count=data.get("offseason_cap_count", CapConstants.OFFSEASON_CAP_COUNT),
            regular_season_cap_count=data.get(
                "regular_season_cap_count", CapConstants.REGULAR_SEASON_CAP_COUNT
            ),
            max_proration_years=data.get("max_proration_years", CapConstants.MAX_PRORATION_YEARS),
            min_contract_years=data.get("min_contract_years", CapConstants.MIN_CONTRACT_YEARS),
            max_contract_years=data.get("max_contract_years", CapConstants.MAX_CONTRACT_YEARS),
            min_total_value=data.get("min_total_value", CapConstants.MIN_TOTAL_VALUE),
            minimum_salaries=minimum_salaries,
            draft_rounds=data.get("draft_rounds", DraftConstants.DRAFT_ROUNDS),
            picks_per_round=data.get("picks_per_round", DraftConstants.PICKS_PER_ROUND),
            user_team_id=data.get("user_team_id", 1),
        )

    @classmethod
    def create_default_2025(cls) -> "LeagueSettings":
        """Factory for the 2025 league year in the offseason."""
        return cls(season=2025, is_offseason=True)

    @classmethod
    def create_regular_season_2025(cls) -> "LeagueSettings":
        """Factory for the 2025 regular season (53-man accounting)."""
        return cls(season=2025, is_offseason=False)
