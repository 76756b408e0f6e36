"""
Salary Cap Calculator

Core mathematical operations for NFL salary cap calculations including:
- Per-season cap hits (signing bonus proration, 5-year max rule)
- Dead money on release, with June 1 designation splits
- Base salary restructures
- Team cap space (top-51 offseason / 53-man regular season)

All amounts are whole dollars. Proration always floors.
"""

import logging
from typing import Dict, List, Optional

from front_office.config import LeagueSettings
from front_office.exceptions import ConstraintError, RestructureLimitError, ValidationError
from front_office.models import (
    CapHit,
    Contract,
    DeadMoneyResult,
    RestructureResult,
    TeamCapSpace,
)


class CapCalculator:
    """
    Core salary cap calculation engine.

    Provides pure calculations over Contract records. The only method that
    reads outside state is ``calculate_team_cap_space``, which takes the
    league store as an explicit argument.

    Key Rules:
    - Maximum 5-year proration for signing bonuses
    - Top-51 rule during offseason
    - 53-man roster during regular season
    - Restructures may not push base salary below the league minimum
    """

    def __init__(self, settings: Optional[LeagueSettings] = None):
        """
        Initialize Cap Calculator.

        Args:
            settings: League settings (cap limit, proration limit, minimum salaries)
        """
        self.settings = settings or LeagueSettings.create_default_2025()
        self.logger = logging.getLogger(__name__)

    # ========================================================================
    # BONUS PRORATION CALCULATIONS
    # ========================================================================

    def calculate_signing_bonus_proration(
        self,
        signing_bonus: int,
        contract_years: int
    ) -> int:
        """
        Calculate annual proration amount for signing bonus.

        NFL Rule: Signing bonuses are prorated over the life of the contract
        with a MAXIMUM of 5 years, regardless of contract length.

        Args:
            signing_bonus: Total signing bonus amount
            contract_years: Number of contract years

        Returns:
            Annual proration amount

        Examples:
            - 4-year, $20M bonus → $5M/year ($20M / 4 years)
            - 6-year, $15M bonus → $3M/year ($15M / 5 years, NOT 6!)
        """
        if contract_years <= 0:
            raise ValueError("Contract years must be positive")

        if signing_bonus <= 0:
            return 0

        proration_years = min(contract_years, self.settings.max_proration_years)

        return signing_bonus // proration_years

    def get_contract_proration(self, contract: Contract) -> int:
        """Per-season proration of a contract's signing bonus."""
        return self.calculate_signing_bonus_proration(
            contract.signing_bonus_total,
            contract.total_years
        )

    # ========================================================================
    # CAP HIT CALCULATIONS
    # ========================================================================

    def calculate_cap_hit(self, contract: Contract, year: int) -> CapHit:
        """
        Calculate a contract's cap hit for one season.

        The signing bonus proration is the same for every season while any
        bonus remains unamortized, and zero after. It is not capped per
        season against the remaining bonus.

        Args:
            contract: Contract to evaluate
            year: League season

        Returns:
            CapHit breakdown

        Raises:
            NotFoundError: If the contract has no entry for ``year``
        """
        year_data = contract.get_year(year)

        prorated_bonus = 0
        if contract.signing_bonus_remaining > 0:
            prorated_bonus = self.get_contract_proration(contract)

        return CapHit(
            year=year,
            base_salary=year_data.base_salary,
            roster_bonus=year_data.roster_bonus,
            workout_bonus=year_data.workout_bonus,
            prorated_bonus=prorated_bonus,
            restructure_proration=year_data.restructure_proration,
        )

    def calculate_contract_cap_hits(self, contract: Contract) -> Dict[int, int]:
        """Total cap hit for every season in the contract's breakdown."""
        return {
            year: self.calculate_cap_hit(contract, year).total_cap_hit
            for year in contract.seasons
        }

    # ========================================================================
    # DEAD MONEY CALCULATIONS
    # ========================================================================

    def calculate_dead_money(
        self,
        contract: Contract,
        current_year: int,
        is_june1_cut: bool = False
    ) -> DeadMoneyResult:
        """
        Calculate dead money from releasing a player.

        Dead money consists of:
        1. Remaining signing bonus proration (per-year proration × years remaining)
        2. Remaining restructure proration
        3. Current season guarantees

        Args:
            contract: Contract being terminated
            current_year: Season of the release
            is_june1_cut: Whether using June 1 designation

        Returns:
            DeadMoneyResult

        Notes:
            - Without June 1: All dead money hits the current season
            - With June 1: Current season takes one year of proration plus
              guarantees, the rest lands in the next season
            - Cap savings = current season base + roster + workout - guarantees

        Raises:
            NotFoundError: If the contract has no entry for ``current_year``
        """
        year_data = contract.get_year(current_year)

        proration_per_year = self.get_contract_proration(contract)
        remaining_bonus_total = proration_per_year * contract.years_remaining

        remaining_restructure = sum(
            contract_year.restructure_proration
            for contract_year in contract.annual_breakdown
            if contract_year.year >= current_year
        )

        guaranteed_remaining = year_data.guarantees
        cap_savings = year_data.cash_components - guaranteed_remaining

        if is_june1_cut:
            current_year_dead_money = (
                proration_per_year
                + year_data.restructure_proration
                + guaranteed_remaining
            )
            next_year_dead_money = (
                (remaining_bonus_total - proration_per_year)
                + (remaining_restructure - year_data.restructure_proration)
            )
        else:
            current_year_dead_money = (
                remaining_bonus_total
                + remaining_restructure
                + guaranteed_remaining
            )
            next_year_dead_money = 0

        self.logger.debug(
            f"Dead money for contract {contract.contract_id} in {current_year} "
            f"(june1={is_june1_cut}): current={current_year_dead_money:,} "
            f"next={next_year_dead_money:,} savings={cap_savings:,}"
        )

        return DeadMoneyResult(
            current_year_dead_money=current_year_dead_money,
            next_year_dead_money=next_year_dead_money,
            cap_savings=cap_savings,
        )

    # ========================================================================
    # CONTRACT RESTRUCTURE CALCULATIONS
    # ========================================================================

    def get_minimum_salary(self, accrued_seasons: int) -> int:
        """League minimum base salary for a player's accrued seasons (10+ capped)."""
        return self.settings.get_minimum_salary(accrued_seasons)

    def calculate_max_restructure(
        self,
        contract: Contract,
        current_year: int,
        accrued_seasons: int
    ) -> int:
        """Largest amount that can be converted without going under the minimum."""
        year_data = contract.get_year(current_year)
        return max(0, year_data.base_salary - self.get_minimum_salary(accrued_seasons))

    def calculate_restructure(
        self,
        contract: Contract,
        current_year: int,
        amount_to_restructure: int,
        accrued_seasons: int
    ) -> RestructureResult:
        """
        Calculate cap impact of converting base salary to prorated bonus.

        Args:
            contract: Contract to restructure
            current_year: Season being restructured
            amount_to_restructure: Base salary to convert
            accrued_seasons: Player's accrued seasons (minimum salary bucket)

        Returns:
            RestructureResult

        Formula:
            - annual_proration = amount // min(years_remaining, 5)
            - new cap hit = current cap hit - amount + annual_proration
            - each later season inside the proration window gains annual_proration

        Example:
            Convert $3M of an $8M base with 3 years left:
            - New proration: $3M / 3 = $1M/year
            - Base salary: $8M → $5M
            - Current season cap hit falls by $2M net, later seasons rise $1M

        Raises:
            ValidationError: If the amount is not positive
            RestructureLimitError: If the amount would drop base salary below the
                minimum; a ConstraintError that is also a ValidationError
            ConstraintError: If the contract has no remaining years
            NotFoundError: If the contract has no entry for ``current_year``
        """
        if amount_to_restructure <= 0:
            raise ValidationError(
                "Restructure amount must be positive",
                context_dict={"contract_id": contract.contract_id, "amount": amount_to_restructure},
            )

        year_data = contract.get_year(current_year)

        minimum_salary = self.get_minimum_salary(accrued_seasons)
        max_restructure = year_data.base_salary - minimum_salary

        if amount_to_restructure > max_restructure:
            raise RestructureLimitError(
                f"Cannot restructure more than {max(0, max_restructure):,}. "
                f"Must leave minimum base salary of {minimum_salary:,}.",
                context_dict={
                    "contract_id": contract.contract_id,
                    "year": current_year,
                    "amount": amount_to_restructure,
                    "max_restructure": max_restructure,
                },
            )

        if contract.years_remaining <= 0:
            raise ConstraintError(
                "Contract has no remaining years to restructure",
                context_dict={"contract_id": contract.contract_id},
            )

        proration_years = min(contract.years_remaining, self.settings.max_proration_years)
        annual_proration = amount_to_restructure // proration_years

        previous_cap_hit = self.calculate_cap_hit(contract, current_year).total_cap_hit
        new_cap_hit = previous_cap_hit - amount_to_restructure + annual_proration

        future_cap_hits: List[int] = []
        for offset in range(1, proration_years):
            future_year = current_year + offset
            if contract.has_year(future_year):
                future_hit = self.calculate_cap_hit(contract, future_year).total_cap_hit
                future_cap_hits.append(future_hit + annual_proration)

        self.logger.debug(
            f"Restructure of {amount_to_restructure:,} on contract {contract.contract_id} "
            f"in {current_year}: cap hit {previous_cap_hit:,} -> {new_cap_hit:,}, "
            f"{annual_proration:,}/yr over {proration_years} years"
        )

        return RestructureResult(
            year=current_year,
            amount=amount_to_restructure,
            new_base_salary=year_data.base_salary - amount_to_restructure,
            new_cap_hit=new_cap_hit,
            previous_cap_hit=previous_cap_hit,
            annual_proration=annual_proration,
            proration_years=proration_years,
            future_cap_hits=future_cap_hits,
        )

    # ========================================================================
    # CORE CAP SPACE CALCULATIONS
    # ========================================================================

    def calculate_top_n_total(self, cap_hits: List[int], count: int) -> int:
        """Sum of the ``count`` largest cap hits."""
        return sum(sorted(cap_hits, reverse=True)[:count])

    def calculate_team_cap_space(
        self,
        team_id: int,
        season: int,
        store,
        is_offseason: Optional[bool] = None
    ) -> TeamCapSpace:
        """
        Calculate team's cap usage under top-N accounting.

        Args:
            team_id: Team ID
            season: League season
            store: LeagueStore providing the team's active contracts
            is_offseason: Top-51 when True, 53-man when False,
                settings default when None

        Returns:
            TeamCapSpace (available space can be negative if over the cap)
        """
        if is_offseason is None:
            is_offseason = self.settings.is_offseason
        count = (
            self.settings.offseason_cap_count if is_offseason
            else self.settings.regular_season_cap_count
        )

        cap_hits = []
        for contract in store.get_active_contracts(team_id=team_id):
            if contract.has_year(season):
                cap_hits.append(self.calculate_cap_hit(contract, season).total_cap_hit)

        counted = sorted(cap_hits, reverse=True)[:count]
        used_cap_space = sum(counted)
        total_cap = self.settings.salary_cap

        return TeamCapSpace(
            team_id=team_id,
            season=season,
            used_cap_space=used_cap_space,
            available_cap_space=total_cap - used_cap_space,
            total_cap=total_cap,
            top_players_count=len(counted),
        )

    def validate_transaction(self, available_cap_space: int, cap_impact: int) -> bool:
        """Whether a team with ``available_cap_space`` can absorb ``cap_impact``."""
        return cap_impact <= available_cap_space
