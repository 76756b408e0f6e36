"""
Contract Builder

Turns accepted offers into Contract records and applies the yearly
lifecycle changes: aging, restructures and releases.

Every method returns a new Contract; inputs are never mutated.
"""

import logging
from dataclasses import replace
from datetime import date
from typing import List, Optional

from front_office.contract_valuation import PlayerValuationEngine
from front_office.exceptions import ConstraintError
from front_office.models import (
    Contract,
    ContractOffer,
    ContractType,
    ContractYear,
    RestructureResult,
)
from .cap_calculator import CapCalculator


class ContractBuilder:
    """
    Builds and ages player contracts.

    Supports:
    - Creating a contract from an accepted ContractOffer
    - Advancing a contract one league year
    - Applying a calculated restructure
    - Releasing (deactivating) a contract
    """

    def __init__(
        self,
        valuation_engine: Optional[PlayerValuationEngine] = None,
        cap_calculator: Optional[CapCalculator] = None
    ):
        """
        Initialize Contract Builder.

        Args:
            valuation_engine: Supplies salary structures and offer validation
            cap_calculator: Supplies proration amounts
        """
        self.valuation_engine = valuation_engine or PlayerValuationEngine()
        self.calculator = cap_calculator or CapCalculator(self.valuation_engine.settings)
        self.logger = logging.getLogger(__name__)

    # ========================================================================
    # CONTRACT CREATION
    # ========================================================================

    def build(
        self,
        offer: ContractOffer,
        player_id: int,
        team_id: int,
        start_year: int,
        contract_type: ContractType = ContractType.VETERAN,
        signed_date: Optional[str] = None
    ) -> Contract:
        """
        Create a contract from an accepted offer.

        Args:
            offer: Accepted offer (must pass validation)
            player_id: Player ID
            team_id: Team ID
            start_year: First league season of the contract
            contract_type: Contract classification
            signed_date: ISO signing date (defaults to today)

        Returns:
            New, unsaved Contract (contract_id is None)

        Raises:
            ValidationError: If the offer breaks contract rules

        Guarantees beyond the signing bonus are assigned to base salaries
        year by year, earliest first, until the guaranteed amount is used up.
        """
        self.valuation_engine.ensure_valid_offer(offer)

        salaries = self.valuation_engine.generate_contract_structure(
            offer.total_value,
            offer.years,
            offer.guaranteed_money,
            offer.signing_bonus,
            offer.structure,
        )
        guarantees = self._allocate_guarantees(
            salaries, offer.guaranteed_money - offer.signing_bonus
        )

        breakdown = [
            ContractYear(
                year=start_year + index,
                base_salary=salary,
                guarantees=guaranteed,
            )
            for index, (salary, guaranteed) in enumerate(zip(salaries, guarantees))
        ]

        contract = Contract(
            player_id=player_id,
            team_id=team_id,
            total_years=offer.years,
            current_year=start_year,
            years_remaining=offer.years,
            total_value=offer.total_value,
            signing_bonus_total=offer.signing_bonus,
            signing_bonus_remaining=offer.signing_bonus,
            annual_breakdown=breakdown,
            guaranteed_money_remaining=offer.guaranteed_money,
            guaranteed_at_signing=offer.guaranteed_money,
            contract_type=contract_type,
            signed_date=signed_date or date.today().isoformat(),
        )

        self.logger.debug(
            f"Built {offer.years}-year contract for player {player_id} with team {team_id}: "
            f"total={offer.total_value:,} guaranteed={offer.guaranteed_money:,}"
        )

        return contract

    def _allocate_guarantees(self, salaries: List[int], guaranteed_salary: int) -> List[int]:
        remaining = max(0, guaranteed_salary)
        guarantees = []
        for salary in salaries:
            guaranteed = min(salary, remaining)
            guarantees.append(guaranteed)
            remaining -= guaranteed
        return guarantees

    # ========================================================================
    # CONTRACT LIFECYCLE
    # ========================================================================

    def advance_contract_year(self, contract: Contract) -> Contract:
        """
        Age a contract by one league year.

        - years_remaining decreases by one
        - signing_bonus_remaining decreases by one year of proration (floor 0)
        - guarantees for the finished season are paid off
        - the contract deactivates when no years remain

        Raises:
            ConstraintError: If the contract is not active
        """
        if not contract.is_active:
            raise ConstraintError(
                f"Contract {contract.contract_id} is not active",
                context_dict={"contract_id": contract.contract_id},
            )

        proration = self.calculator.get_contract_proration(contract)
        bonus_remaining = max(0, contract.signing_bonus_remaining - proration)

        paid_guarantees = 0
        if contract.has_year(contract.current_year):
            paid_guarantees = contract.get_year(contract.current_year).guarantees
        if contract.years_remaining == contract.total_years:
            # Bonus is paid at signing
            paid_guarantees += contract.signing_bonus_total

        years_remaining = contract.years_remaining - 1

        return replace(
            contract,
            current_year=contract.current_year + 1,
            years_remaining=years_remaining,
            signing_bonus_remaining=bonus_remaining,
            guaranteed_money_remaining=max(0, contract.guaranteed_money_remaining - paid_guarantees),
            is_active=years_remaining > 0,
            annual_breakdown=list(contract.annual_breakdown),
        )

    def apply_restructure(self, contract: Contract, restructure: RestructureResult) -> Contract:
        """
        Apply a calculated restructure.

        Lowers the restructured season's base salary and adds the new annual
        proration to every season in the proration window.
        """
        window_end = restructure.year + restructure.proration_years - 1

        breakdown = []
        for contract_year in contract.annual_breakdown:
            if contract_year.year == restructure.year:
                contract_year = replace(
                    contract_year,
                    base_salary=restructure.new_base_salary,
                    guarantees=min(contract_year.guarantees, restructure.new_base_salary),
                )
            if restructure.year <= contract_year.year <= window_end:
                contract_year = replace(
                    contract_year,
                    restructure_proration=contract_year.restructure_proration + restructure.annual_proration,
                )
            breakdown.append(contract_year)

        return replace(contract, annual_breakdown=breakdown)

    def release_contract(self, contract: Contract) -> Contract:
        """Deactivated copy of a contract."""
        return replace(contract, is_active=False, annual_breakdown=list(contract.annual_breakdown))
