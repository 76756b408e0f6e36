"""
Contract records.

ContractOffer is the transient shape passed through negotiation; Contract is
the persisted result of an accepted offer, with a per-season breakdown.
Years in ``annual_breakdown`` are league seasons (e.g. 2025), not indexes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional

from front_office.exceptions import NotFoundError
from .money import round_half_up


class ContractStructure(Enum):
    """How non-bonus money is spread across contract years."""
    EVEN = "even"
    FRONTLOADED = "frontloaded"
    BACKLOADED = "backloaded"


class ContractType(Enum):
    """Contract classification."""
    ROOKIE = "Rookie"
    VETERAN = "Veteran"
    FRANCHISE_TAG = "Franchise Tag"
    EXTENSION = "Extension"


@dataclass
class ContractOffer:
    """
    A proposed contract.

    Construction does not enforce the offer invariants; run it through
    ``PlayerValuationEngine.validate_contract`` to get the itemized errors.
    """

    years: int
    total_value: int
    guaranteed_money: int
    signing_bonus: int
    structure: ContractStructure = ContractStructure.EVEN

    def __post_init__(self):
        if isinstance(self.structure, str):
            self.structure = ContractStructure(self.structure)

    @property
    def apy(self) -> int:
        """Average per year, rounded half-up."""
        if self.years <= 0:
            return 0
        return round_half_up(self.total_value / self.years)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "years": self.years,
            "total_value": self.total_value,
            "guaranteed_money": self.guaranteed_money,
            "signing_bonus": self.signing_bonus,
            "structure": self.structure.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContractOffer":
        for key in ("years", "total_value", "guaranteed_money", "signing_bonus"):
            if key not in data:
                raise ValueError(f"ContractOffer missing required field '{key}'")
        return cls(
            years=int(data["years"]),
            total_value=int(data["total_value"]),
            guaranteed_money=int(data["guaranteed_money"]),
            signing_bonus=int(data["signing_bonus"]),
            structure=ContractStructure(data.get("structure", ContractStructure.EVEN.value)),
        )


@dataclass(frozen=True)
class ContractYear:
    """
    One season slice of a contract.

    ``restructure_proration`` is the cap charge this season carries from
    base salary converted to bonus by earlier restructures.
    """

    year: int
    base_salary: int
    roster_bonus: int = 0
    workout_bonus: int = 0
    guarantees: int = 0
    restructure_proration: int = 0

    def __post_init__(self):
        for name in ("base_salary", "roster_bonus", "workout_bonus", "guarantees", "restructure_proration"):
            if getattr(self, name) < 0:
                raise ValueError(f"ContractYear {self.year}: {name} cannot be negative")

    @property
    def cash_components(self) -> int:
        """Base salary plus roster and workout bonuses (no proration)."""
        return self.base_salary + self.roster_bonus + self.workout_bonus

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "base_salary": self.base_salary,
            "roster_bonus": self.roster_bonus,
            "workout_bonus": self.workout_bonus,
            "guarantees": self.guarantees,
            "restructure_proration": self.restructure_proration,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContractYear":
        if "year" not in data or "base_salary" not in data:
            raise ValueError("ContractYear requires 'year' and 'base_salary'")
        return cls(
            year=int(data["year"]),
            base_salary=int(data["base_salary"]),
            roster_bonus=int(data.get("roster_bonus", 0)),
            workout_bonus=int(data.get("workout_bonus", 0)),
            guarantees=int(data.get("guarantees", 0)),
            restructure_proration=int(data.get("restructure_proration", 0)),
        )


@dataclass
class Contract:
    """
    A signed player contract.

    Attributes:
        contract_id: Store-assigned id (None until persisted)
        player_id: Player under contract
        team_id: Team holding the contract
        total_years: Length at signing
        current_year: Current league season of the contract
        years_remaining: Seasons left, including the current one
        total_value: Total value at signing
        signing_bonus_total: Signing bonus at signing
        signing_bonus_remaining: Bonus not yet charged to the cap
        annual_breakdown: Per-season salary slices
        guaranteed_money_remaining: Guarantees still owed
        guaranteed_at_signing: Guarantees at signing
        contract_type: Contract classification
        is_active: False once released or expired
        has_void_years: Whether void years were added
        void_year: Season the contract voids, if any
        signed_date: ISO date of signing
    """

    player_id: int
    team_id: int
    total_years: int
    current_year: int
    years_remaining: int
    total_value: int
    signing_bonus_total: int
    signing_bonus_remaining: int
    annual_breakdown: List[ContractYear] = field(default_factory=list)
    guaranteed_money_remaining: int = 0
    guaranteed_at_signing: int = 0
    contract_id: Optional[int] = None
    contract_type: ContractType = ContractType.VETERAN
    is_active: bool = True
    has_void_years: bool = False
    void_year: Optional[int] = None
    signed_date: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.contract_type, str):
            self.contract_type = ContractType(self.contract_type)
        self._validate_years()
        self._validate_money()

    def _validate_years(self):
        if self.total_years <= 0:
            raise ValueError(f"total_years must be positive, got {self.total_years}")
        if not 0 <= self.years_remaining <= self.total_years:
            raise ValueError(
                f"years_remaining must be 0-{self.total_years}, got {self.years_remaining}"
            )
        seasons = [year.year for year in self.annual_breakdown]
        if len(seasons) != len(set(seasons)):
            raise ValueError(f"Duplicate seasons in annual_breakdown: {seasons}")

    def _validate_money(self):
        if self.signing_bonus_total < 0 or self.signing_bonus_remaining < 0:
            raise ValueError("Signing bonus amounts cannot be negative")
        if self.signing_bonus_remaining > self.signing_bonus_total:
            raise ValueError(
                f"signing_bonus_remaining ({self.signing_bonus_remaining}) exceeds "
                f"signing_bonus_total ({self.signing_bonus_total})"
            )

    @property
    def apy(self) -> int:
        return round_half_up(self.total_value / self.total_years)

    @property
    def seasons(self) -> List[int]:
        return sorted(year.year for year in self.annual_breakdown)

    @property
    def final_season(self) -> int:
        return self.current_year + self.years_remaining - 1

    def get_year(self, year: int) -> ContractYear:
        """
        Breakdown for one season.

        Raises:
            NotFoundError: If the contract has no entry for ``year``
        """
        for contract_year in self.annual_breakdown:
            if contract_year.year == year:
                return contract_year
        raise NotFoundError(
            f"No data for year {year} in contract",
            context_dict={"contract_id": self.contract_id, "year": year},
        )

    def has_year(self, year: int) -> bool:
        return any(contract_year.year == year for contract_year in self.annual_breakdown)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contract_id": self.contract_id,
            "player_id": self.player_id,
            "team_id": self.team_id,
            "total_years": self.total_years,
            "current_year": self.current_year,
            "years_remaining": self.years_remaining,
            "total_value": self.total_value,
            "signing_bonus_total": self.signing_bonus_total,
            "signing_bonus_remaining": self.signing_bonus_remaining,
            "annual_breakdown": [year.to_dict() for year in self.annual_breakdown],
            "guaranteed_money_remaining": self.guaranteed_money_remaining,
            "guaranteed_at_signing": self.guaranteed_at_signing,
            "contract_type": self.contract_type.value,
            "is_active": self.is_active,
            "has_void_years": self.has_void_years,
            "void_year": self.void_year,
            "signed_date": self.signed_date,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Contract":
        breakdown = data.get("annual_breakdown") or []
        if not isinstance(breakdown, list):
            raise ValueError("annual_breakdown must be a list of contract years")

        return cls(
            contract_id=data.get("contract_id"),
            player_id=data["player_id"],
            team_id=data["team_id"],
            total_years=data["total_years"],
            current_year=data["current_year"],
            years_remaining=data["years_remaining"],
            total_value=data.get("total_value", 0),
            signing_bonus_total=data.get("signing_bonus_total", 0),
            signing_bonus_remaining=data.get("signing_bonus_remaining", 0),
            annual_breakdown=[ContractYear.from_dict(year) for year in breakdown],
            guaranteed_money_remaining=data.get("guaranteed_money_remaining", 0),
            guaranteed_at_signing=data.get("guaranteed_at_signing", 0),
            contract_type=ContractType(data.get("contract_type", ContractType.VETERAN.value)),
            is_active=bool(data.get("is_active", True)),
            has_void_years=bool(data.get("has_void_years", False)),
            void_year=data.get("void_year"),
            signed_date=data.get("signed_date"),
        )
