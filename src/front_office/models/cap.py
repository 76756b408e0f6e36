"""
Cap calculation result records.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List


@dataclass(frozen=True)
class CapHit:
    """One season's cap charge for a contract."""

    year: int
    base_salary: int
    roster_bonus: int
    workout_bonus: int
    prorated_bonus: int
    restructure_proration: int = 0

    @property
    def total_cap_hit(self) -> int:
        return (
            self.base_salary
            + self.roster_bonus
            + self.workout_bonus
            + self.prorated_bonus
            + self.restructure_proration
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "base_salary": self.base_salary,
            "roster_bonus": self.roster_bonus,
            "workout_bonus": self.workout_bonus,
            "prorated_bonus": self.prorated_bonus,
            "restructure_proration": self.restructure_proration,
            "total_cap_hit": self.total_cap_hit,
        }


@dataclass(frozen=True)
class DeadMoneyResult:
    """Cap consequences of releasing a player."""

    current_year_dead_money: int
    next_year_dead_money: int
    cap_savings: int

    @property
    def total_dead_money(self) -> int:
        return self.current_year_dead_money + self.next_year_dead_money

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_year_dead_money": self.current_year_dead_money,
            "next_year_dead_money": self.next_year_dead_money,
            "cap_savings": self.cap_savings,
        }


@dataclass(frozen=True)
class RestructureResult:
    """
    Cap effect of converting base salary into prorated bonus.

    ``future_cap_hits`` lists the cap hits of the seasons after the current
    one that fall inside the new proration window, in season order.
    """

    year: int
    amount: int
    new_base_salary: int
    new_cap_hit: int
    previous_cap_hit: int
    annual_proration: int
    proration_years: int
    future_cap_hits: List[int] = field(default_factory=list)

    @property
    def cap_savings(self) -> int:
        return self.previous_cap_hit - self.new_cap_hit

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "amount": self.amount,
            "new_base_salary": self.new_base_salary,
            "new_cap_hit": self.new_cap_hit,
            "previous_cap_hit": self.previous_cap_hit,
            "annual_proration": self.annual_proration,
            "proration_years": self.proration_years,
            "future_cap_hits": list(self.future_cap_hits),
            "cap_savings": self.cap_savings,
        }


@dataclass(frozen=True)
class TeamCapSpace:
    """Team cap usage under top-N accounting."""

    team_id: int
    season: int
    used_cap_space: int
    available_cap_space: int
    total_cap: int
    top_players_count: int

    @property
    def is_compliant(self) -> bool:
        return self.available_cap_space >= 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team_id": self.team_id,
            "season": self.season,
            "used_cap_space": self.used_cap_space,
            "available_cap_space": self.available_cap_space,
            "total_cap": self.total_cap,
            "top_players_count": self.top_players_count,
        }
