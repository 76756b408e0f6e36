"""
Draft records: prospects, picks, selections, AI strategy/evaluation rows and
trade evaluation results.

A prospect's true rating stays hidden until it is drafted. Everything the AI
reads goes through ``DraftProspect.scouted_view()``.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Any, List, Optional

from front_office.exceptions import ConstraintError
from .player import Player, RosterStatus


class DevelopmentTrait(Enum):
    """Prospect development speed."""
    SLOW = "Slow"
    NORMAL = "Normal"
    QUICK = "Quick"
    ELITE = "Elite"
    STAR = "Star"


@dataclass(frozen=True)
class CombineMetrics:
    """Combine measurements. Missing drills are None."""

    forty_yard: Optional[float] = None
    bench_press: Optional[int] = None
    vertical_jump: Optional[float] = None
    broad_jump: Optional[int] = None
    three_cone: Optional[float] = None
    twenty_yard_shuttle: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "forty_yard": self.forty_yard,
            "bench_press": self.bench_press,
            "vertical_jump": self.vertical_jump,
            "broad_jump": self.broad_jump,
            "three_cone": self.three_cone,
            "twenty_yard_shuttle": self.twenty_yard_shuttle,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CombineMetrics":
        data = data or {}
        return cls(
            forty_yard=data.get("forty_yard"),
            bench_press=data.get("bench_press"),
            vertical_jump=data.get("vertical_jump"),
            broad_jump=data.get("broad_jump"),
            three_cone=data.get("three_cone"),
            twenty_yard_shuttle=data.get("twenty_yard_shuttle"),
        )


@dataclass(frozen=True)
class Intangibles:
    """Intangible grades, each on a 1-5 scale."""

    work_ethic: int = 3
    injury_risk: int = 3
    character_grade: int = 3
    football_iq: int = 3

    def __post_init__(self):
        for name in ("work_ethic", "injury_risk", "character_grade", "football_iq"):
            value = getattr(self, name)
            if not 1 <= value <= 5:
                raise ValueError(f"{name} must be 1-5, got {value}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "work_ethic": self.work_ethic,
            "injury_risk": self.injury_risk,
            "character_grade": self.character_grade,
            "football_iq": self.football_iq,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Intangibles":
        data = data or {}
        return cls(
            work_ethic=data.get("work_ethic", 3),
            injury_risk=data.get("injury_risk", 3),
            character_grade=data.get("character_grade", 3),
            football_iq=data.get("football_iq", 3),
        )


@dataclass(frozen=True)
class ScoutedProspect:
    """What teams can see of a prospect before the draft."""

    prospect_id: int
    name: str
    position: str
    scouted_overall_rating: int
    draft_grade: str
    projected_round: int
    development_trait: DevelopmentTrait
    intangibles: Intangibles


@dataclass
class DraftProspect:
    """
    A draft-eligible college player.

    ``true_overall_rating`` is hidden; ``scouted_overall_rating`` is the
    noisy estimate teams work from.
    """

    prospect_id: int
    draft_year: int
    first_name: str
    last_name: str
    position: str
    age: int
    true_overall_rating: int
    scouted_overall_rating: int
    draft_grade: str
    projected_round: int
    college: str = ""
    height_inches: int = 0
    weight: int = 0
    combine: CombineMetrics = field(default_factory=CombineMetrics)
    intangibles: Intangibles = field(default_factory=Intangibles)
    development_trait: DevelopmentTrait = DevelopmentTrait.NORMAL
    nfl_comparison: Optional[str] = None
    is_drafted: bool = False
    drafted_by_team_id: Optional[int] = None
    drafted_round: Optional[int] = None
    drafted_pick: Optional[int] = None
    drafted_overall: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.development_trait, str):
            self.development_trait = DevelopmentTrait(self.development_trait)
        if not 1 <= self.projected_round <= 7:
            raise ValueError(f"projected_round must be 1-7, got {self.projected_round}")

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def scouted_view(self) -> ScoutedProspect:
        """Pre-draft view with the true rating withheld."""
        return ScoutedProspect(
            prospect_id=self.prospect_id,
            name=self.name,
            position=self.position,
            scouted_overall_rating=self.scouted_overall_rating,
            draft_grade=self.draft_grade,
            projected_round=self.projected_round,
            development_trait=self.development_trait,
            intangibles=self.intangibles,
        )

    def mark_drafted(self, team_id: int, round_number: int, pick_number: int, overall_pick: int) -> "DraftProspect":
        """
        Copy of this prospect flagged as drafted.

        Raises:
            ConstraintError: If the prospect was already drafted
        """
        if self.is_drafted:
            raise ConstraintError(
                f"Prospect {self.prospect_id} was already drafted",
                context_dict={
                    "prospect_id": self.prospect_id,
                    "drafted_by_team_id": self.drafted_by_team_id,
                    "drafted_overall": self.drafted_overall,
                },
            )
        return replace(
            self,
            is_drafted=True,
            drafted_by_team_id=team_id,
            drafted_round=round_number,
            drafted_pick=pick_number,
            drafted_overall=overall_pick,
        )

    def to_player(self, player_id: int) -> Player:
        """
        Rookie player record for a drafted prospect.

        The player is created with the true rating.
        """
        if not self.is_drafted or self.drafted_by_team_id is None:
            raise ConstraintError(
                f"Prospect {self.prospect_id} must be drafted before becoming a player",
                context_dict={"prospect_id": self.prospect_id},
            )
        return Player(
            player_id=player_id,
            first_name=self.first_name,
            last_name=self.last_name,
            position=self.position,
            age=self.age,
            overall_rating=self.true_overall_rating,
            accrued_seasons=0,
            current_team_id=self.drafted_by_team_id,
            roster_status=RosterStatus.ACTIVE,
            work_ethic=self.intangibles.work_ethic,
            injury_risk=self.intangibles.injury_risk,
            college=self.college or None,
            draft_year=self.draft_year,
            draft_round=self.drafted_round,
            draft_pick=self.drafted_overall,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prospect_id": self.prospect_id,
            "draft_year": self.draft_year,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "position": self.position,
            "college": self.college,
            "height_inches": self.height_inches,
            "weight": self.weight,
            "age": self.age,
            "true_overall_rating": self.true_overall_rating,
            "scouted_overall_rating": self.scouted_overall_rating,
            "draft_grade": self.draft_grade,
            "projected_round": self.projected_round,
            "combine": self.combine.to_dict(),
            "intangibles": self.intangibles.to_dict(),
            "development_trait": self.development_trait.value,
            "nfl_comparison": self.nfl_comparison,
            "is_drafted": self.is_drafted,
            "drafted_by_team_id": self.drafted_by_team_id,
            "drafted_round": self.drafted_round,
            "drafted_pick": self.drafted_pick,
            "drafted_overall": self.drafted_overall,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DraftProspect":
        return cls(
            prospect_id=data["prospect_id"],
            draft_year=data["draft_year"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            position=data["position"],
            age=data["age"],
            true_overall_rating=data["true_overall_rating"],
            scouted_overall_rating=data["scouted_overall_rating"],
            draft_grade=data["draft_grade"],
            projected_round=data["projected_round"],
            college=data.get("college", ""),
            height_inches=data.get("height_inches", 0),
            weight=data.get("weight", 0),
            combine=CombineMetrics.from_dict(data.get("combine")),
            intangibles=Intangibles.from_dict(data.get("intangibles")),
            development_trait=DevelopmentTrait(data.get("development_trait", "Normal")),
            nfl_comparison=data.get("nfl_comparison"),
            is_drafted=bool(data.get("is_drafted", False)),
            drafted_by_team_id=data.get("drafted_by_team_id"),
            drafted_round=data.get("drafted_round"),
            drafted_pick=data.get("drafted_pick"),
            drafted_overall=data.get("drafted_overall"),
        )


@dataclass
class DraftPick:
    """One pick slot in a draft."""

    draft_year: int
    round: int
    pick_number: int
    overall_pick: int
    original_team_id: int
    current_team_id: int
    pick_id: Optional[int] = None
    is_used: bool = False
    player_selected_id: Optional[int] = None

    def __post_init__(self):
        if self.round < 1:
            raise ValueError(f"round must be >= 1, got {self.round}")
        if self.overall_pick < 1:
            raise ValueError(f"overall_pick must be >= 1, got {self.overall_pick}")


@dataclass(frozen=True)
class DraftSelection:
    """Record of a completed pick."""

    draft_year: int
    round: int
    pick_number: int
    overall_pick: int
    team_id: int
    prospect_id: int
    player_id: Optional[int] = None
    time_on_clock: int = 300


@dataclass(frozen=True)
class DraftStrategy:
    """A team's drafting tendencies for one pick."""

    team_id: int
    bpa_weight: float
    position_needs: List[str]
    preferred_traits: List[DevelopmentTrait]


@dataclass(frozen=True)
class ProspectEvaluation:
    """One prospect scored for one team."""

    prospect_id: int
    score: float
    is_bpa: bool
    is_need: bool
    name: str
    position: str
    overall_rating: int


@dataclass(frozen=True)
class DraftBoardEntry:
    """A ranked row on a team's draft board."""

    team_id: int
    prospect_id: int
    rank: int
    is_need_position: bool


@dataclass(frozen=True)
class TradeEvaluation:
    """Fairness verdict for a pick-for-pick trade."""

    team1_value: float
    team2_value: float
    difference: float
    percentage_diff: float
    is_fair: bool
    winner: str  # "team1", "team2" or "even"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team1_value": self.team1_value,
            "team2_value": self.team2_value,
            "difference": self.difference,
            "percentage_diff": self.percentage_diff,
            "is_fair": self.is_fair,
            "winner": self.winner,
        }


@dataclass(frozen=True)
class CounterSuggestion:
    """Picks one side should add to make a trade fair."""

    team: str  # side that adds picks: "team1" or "team2"
    picks_to_add: List[int]
    new_evaluation: TradeEvaluation
