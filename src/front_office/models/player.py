"""
Player and team records.

Players and teams are owned by the roster subsystem of the embedding
application; the engine only reads them and returns updated copies.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Any, Optional


class RosterStatus(Enum):
    """Roster status of a player."""
    ACTIVE = "Active"
    FREE_AGENT = "Free Agent"
    PRACTICE_SQUAD = "Practice Squad"
    INJURED_RESERVE = "Injured Reserve"
    RELEASED = "Released"


@dataclass
class Player:
    """
    A rostered player or free agent.

    Attributes:
        player_id: Unique player id
        position: Position abbreviation (QB, EDGE, OT, ...)
        age: Age in years
        overall_rating: Overall rating (40-99)
        accrued_seasons: Seasons credited toward free agency / minimum salary
        current_team_id: Team id, None for unsigned free agents
        roster_status: Current roster status
        first_name: First name
        last_name: Last name
        work_ethic: Intangible 1-5
        injury_risk: Intangible 1-5
        position_ratings: Attribute ratings (speed, strength, ...)
    """

    player_id: int
    position: str
    age: int
    overall_rating: int
    accrued_seasons: int = 0
    current_team_id: Optional[int] = None
    roster_status: RosterStatus = RosterStatus.FREE_AGENT
    first_name: str = ""
    last_name: str = ""
    work_ethic: int = 3
    injury_risk: int = 3
    position_ratings: Dict[str, int] = field(default_factory=dict)
    college: Optional[str] = None
    draft_year: Optional[int] = None
    draft_round: Optional[int] = None
    draft_pick: Optional[int] = None

    def __post_init__(self):
        if not self.position:
            raise ValueError("position must be a non-empty string")
        if self.age <= 0:
            raise ValueError(f"age must be positive, got {self.age}")
        if not 0 <= self.overall_rating <= 100:
            raise ValueError(f"overall_rating must be 0-100, got {self.overall_rating}")
        if self.accrued_seasons < 0:
            raise ValueError(f"accrued_seasons cannot be negative, got {self.accrued_seasons}")
        if isinstance(self.roster_status, str):
            self.roster_status = RosterStatus(self.roster_status)

    @property
    def name(self) -> str:
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or f"Player #{self.player_id}"

    @property
    def is_free_agent(self) -> bool:
        return self.roster_status == RosterStatus.FREE_AGENT

    def sign_with(self, team_id: int) -> "Player":
        """Copy of this player assigned to a team's active roster."""
        return replace(self, current_team_id=team_id, roster_status=RosterStatus.ACTIVE)

    def release(self) -> "Player":
        """Copy of this player released into free agency."""
        return replace(self, current_team_id=None, roster_status=RosterStatus.FREE_AGENT)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "position": self.position,
            "age": self.age,
            "overall_rating": self.overall_rating,
            "accrued_seasons": self.accrued_seasons,
            "current_team_id": self.current_team_id,
            "roster_status": self.roster_status.value,
            "work_ethic": self.work_ethic,
            "injury_risk": self.injury_risk,
            "position_ratings": dict(self.position_ratings),
            "college": self.college,
            "draft_year": self.draft_year,
            "draft_round": self.draft_round,
            "draft_pick": self.draft_pick,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        return cls(
            player_id=data["player_id"],
            position=data["position"],
            age=data["age"],
            overall_rating=data["overall_rating"],
            accrued_seasons=data.get("accrued_seasons", 0),
            current_team_id=data.get("current_team_id"),
            roster_status=RosterStatus(data.get("roster_status", RosterStatus.FREE_AGENT.value)),
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            work_ethic=data.get("work_ethic", 3),
            injury_risk=data.get("injury_risk", 3),
            position_ratings={k: int(v) for k, v in (data.get("position_ratings") or {}).items()},
            college=data.get("college"),
            draft_year=data.get("draft_year"),
            draft_round=data.get("draft_round"),
            draft_pick=data.get("draft_pick"),
        )


@dataclass
class Team:
    """
    A franchise and its running cap room.

    ``current_cap_space`` is the constraint checked before any offer is
    accepted; it must never go negative in a consistent save.
    """

    team_id: int
    name: str
    current_cap_space: int
    abbreviation: str = ""
    rollover_cap: int = 0

    def __post_init__(self):
        if self.current_cap_space < 0:
            raise ValueError(
                f"Team {self.team_id} cap space cannot be negative, got {self.current_cap_space}"
            )

    def can_afford(self, cap_hit: int) -> bool:
        return cap_hit <= self.current_cap_space

    def with_cap_space(self, cap_space: int) -> "Team":
        return replace(self, current_cap_space=cap_space)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team_id": self.team_id,
            "name": self.name,
            "abbreviation": self.abbreviation,
            "current_cap_space": self.current_cap_space,
            "rollover_cap": self.rollover_cap,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        return cls(
            team_id=data["team_id"],
            name=data["name"],
            current_cap_space=data["current_cap_space"],
            abbreviation=data.get("abbreviation", ""),
            rollover_cap=data.get("rollover_cap", 0),
        )


@dataclass(frozen=True)
class PositionSummary:
    """Active roster count and average rating at one position."""

    count: int
    avg_rating: Optional[float] = None
