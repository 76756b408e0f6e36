"""
Tests for ContractBuilder: contract creation, yearly aging, restructures
and releases.
"""

import pytest

from front_office.exceptions import ConstraintError, ValidationError
from front_office.models import ContractOffer, ContractStructure, ContractType


@pytest.fixture
def even_offer():
    """4 years, $40M, $20M guaranteed including an $8M signing bonus."""
    return ContractOffer(
        years=4,
        total_value=40_000_000,
        guaranteed_money=20_000_000,
        signing_bonus=8_000_000,
    )


class TestBuild:
    """Test contract creation from accepted offers."""

    def test_even_breakdown(self, contract_builder, even_offer):
        contract = contract_builder.build(even_offer, player_id=7, team_id=2, start_year=2025,
                                          signed_date="2025-03-12")

        assert contract.contract_id is None
        assert contract.seasons == [2025, 2026, 2027, 2028]
        assert [year.base_salary for year in contract.annual_breakdown] == [8_000_000] * 4
        assert contract.total_years == 4
        assert contract.years_remaining == 4
        assert contract.signing_bonus_remaining == 8_000_000
        assert contract.signed_date == "2025-03-12"

    def test_guarantees_allocated_earliest_first(self, contract_builder, even_offer):
        contract = contract_builder.build(even_offer, player_id=7, team_id=2, start_year=2025)

        # $12M of salary guarantees beyond the bonus
        assert [year.guarantees for year in contract.annual_breakdown] == [8_000_000, 4_000_000, 0, 0]
        assert contract.guaranteed_at_signing == 20_000_000
        assert contract.guaranteed_money_remaining == 20_000_000

    def test_year1_cap_hit_matches_valuation(self, contract_builder, cap_calculator, valuation_engine, even_offer):
        contract = contract_builder.build(even_offer, player_id=7, team_id=2, start_year=2025)

        cap_hit = cap_calculator.calculate_cap_hit(contract, 2025).total_cap_hit

        assert cap_hit == 10_000_000
        assert cap_hit == valuation_engine.calculate_offer_year1_cap_hit(even_offer)

    def test_structured_offer(self, contract_builder):
        offer = ContractOffer(years=3, total_value=30_000_000, guaranteed_money=10_000_000,
                              signing_bonus=3_000_000, structure=ContractStructure.BACKLOADED)

        contract = contract_builder.build(offer, player_id=1, team_id=1, start_year=2026,
                                          contract_type=ContractType.EXTENSION)

        salaries = [year.base_salary for year in contract.annual_breakdown]
        assert salaries == sorted(salaries)
        assert sum(salaries) + contract.signing_bonus_total == 30_000_000
        assert contract.contract_type == ContractType.EXTENSION

    def test_invalid_offer_rejected(self, contract_builder):
        offer = ContractOffer(years=3, total_value=10_000_000, guaranteed_money=12_000_000, signing_bonus=0)

        with pytest.raises(ValidationError) as exc_info:
            contract_builder.build(offer, player_id=1, team_id=1, start_year=2025)

        assert exc_info.value.errors


class TestAdvanceContractYear:
    """Test yearly contract aging."""

    def test_first_advance(self, contract_builder, even_offer):
        contract = contract_builder.build(even_offer, player_id=7, team_id=2, start_year=2025)

        advanced = contract_builder.advance_contract_year(contract)

        assert advanced.current_year == 2026
        assert advanced.years_remaining == 3
        assert advanced.signing_bonus_remaining == 6_000_000
        # Bonus and 2025 salary guarantees paid
        assert advanced.guaranteed_money_remaining == 4_000_000
        assert advanced.is_active
        assert contract.current_year == 2025

    def test_contract_expires_after_final_year(self, contract_builder, even_offer):
        contract = contract_builder.build(even_offer, player_id=7, team_id=2, start_year=2025)

        for _ in range(4):
            contract = contract_builder.advance_contract_year(contract)

        assert contract.years_remaining == 0
        assert not contract.is_active
        assert contract.signing_bonus_remaining == 0
        assert contract.guaranteed_money_remaining == 0

    def test_inactive_contract_cannot_advance(self, contract_builder, make_contract):
        released = contract_builder.release_contract(make_contract([1_000_000, 1_000_000]))

        with pytest.raises(ConstraintError):
            contract_builder.advance_contract_year(released)


class TestApplyRestructure:
    """Test applying a calculated restructure to a contract."""

    def test_restructure_rewrites_breakdown(self, contract_builder, cap_calculator, restructure_contract):
        result = cap_calculator.calculate_restructure(restructure_contract, 2026, 3_000_000, 5)

        restructured = contract_builder.apply_restructure(restructure_contract, result)

        assert restructured.get_year(2026).base_salary == 5_000_000
        assert [restructured.get_year(y).restructure_proration for y in (2025, 2026, 2027, 2028)] == [
            0, 1_000_000, 1_000_000, 1_000_000
        ]
        assert restructured.signing_bonus_total == restructure_contract.signing_bonus_total

    def test_cap_hits_after_restructure_match_result(self, contract_builder, cap_calculator, restructure_contract):
        result = cap_calculator.calculate_restructure(restructure_contract, 2026, 3_000_000, 5)
        restructured = contract_builder.apply_restructure(restructure_contract, result)

        hits = cap_calculator.calculate_contract_cap_hits(restructured)

        assert hits[2025] == 8_500_000
        assert hits[2026] == result.new_cap_hit == 8_500_000
        assert [hits[2027], hits[2028]] == result.future_cap_hits

    def test_dead_money_includes_restructure_proration(self, contract_builder, cap_calculator, restructure_contract):
        result = cap_calculator.calculate_restructure(restructure_contract, 2026, 3_000_000, 5)
        restructured = contract_builder.apply_restructure(restructure_contract, result)

        dead_money = cap_calculator.calculate_dead_money(restructured, 2026)

        # 3 × $2.5M signing bonus + 3 × $1M restructure proration
        assert dead_money.current_year_dead_money == 10_500_000

    def test_guarantees_capped_at_new_base(self, contract_builder, cap_calculator, make_contract):
        contract = make_contract([8_000_000, 8_000_000], guarantees=[8_000_000, 0])
        result = cap_calculator.calculate_restructure(contract, 2025, 3_000_000, 2)

        restructured = contract_builder.apply_restructure(contract, result)

        assert restructured.get_year(2025).guarantees == 5_000_000


class TestRelease:

    def test_release_deactivates_copy(self, contract_builder, make_contract):
        contract = make_contract([1_000_000])

        released = contract_builder.release_contract(contract)

        assert not released.is_active
        assert contract.is_active
