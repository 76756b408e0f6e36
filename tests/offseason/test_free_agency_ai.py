"""
Tests for FreeAgencyAI bidding, escalation and the signing sweep.
"""

import pytest

from front_office.models import (
    ContractOffer,
    ContractStructure,
    FreeAgentOffer,
    NegotiationPriority,
    OfferStatus,
    Player,
    PlayerDemands,
    RosterStatus,
    Team,
)
from front_office.offseason import FreeAgencyAI, TeamNeedsAnalyzer
from front_office.services import FreeAgencyService


DEMANDS = PlayerDemands(apy=10_000_000, years=4, guaranteed=16_000_000, priority=NegotiationPriority.MONEY)


def _make_ai(store, rng, settings, valuation_engine, negotiation_engine, cap_calculator, contract_builder):
    service = FreeAgencyService(
        store, settings, valuation_engine, negotiation_engine, cap_calculator, contract_builder
    )
    return FreeAgencyAI(store, valuation_engine, TeamNeedsAnalyzer(store), service, rng, settings)


@pytest.fixture
def ai_factory(league, settings, valuation_engine, negotiation_engine, cap_calculator, contract_builder):
    """Build a FreeAgencyAI over the league with a given random source."""
    def _build(rng):
        return _make_ai(league, rng, settings, valuation_engine, negotiation_engine,
                        cap_calculator, contract_builder)
    return _build


@pytest.fixture
def free_agency_ai(ai_factory, rng):
    return ai_factory(rng)


def _ai_offer(store, team_id, total_value, guaranteed_money, player_id=10, years=4):
    return store.create_offer(FreeAgentOffer(
        player_id=player_id,
        team_id=team_id,
        offer=ContractOffer(years=years, total_value=total_value, guaranteed_money=guaranteed_money,
                            signing_bonus=guaranteed_money // 2),
    ))


class TestBidders:

    @pytest.mark.parametrize("rating,low,high", [(92, 5, 7), (86, 3, 5), (81, 2, 3), (76, 1, 2)])
    def test_bidder_counts(self, free_agency_ai, rating, low, high):
        for _ in range(20):
            assert low <= free_agency_ai.determine_number_of_bidders(rating) <= high

    def test_low_rated_players_draw_at_most_one(self, ai_factory, fixed_rng):
        assert ai_factory(fixed_rng([0.3])).determine_number_of_bidders(72) == 1
        assert ai_factory(fixed_rng([0.7])).determine_number_of_bidders(72) == 0

    def test_interested_teams_must_afford_asking_apy(self, ai_factory, fixed_rng):
        ai = ai_factory(fixed_rng([0.0]))
        teams = [
            Team(team_id=1, name="Team 1", current_cap_space=50_000_000),
            Team(team_id=2, name="Team 2", current_cap_space=5_000_000),
            Team(team_id=3, name="Team 3", current_cap_space=50_000_000),
            Team(team_id=4, name="Team 4", current_cap_space=50_000_000),
        ]
        player = Player(player_id=10, position="WR", age=27, overall_rating=85)

        interested = ai.select_interested_teams(teams, player, 2, DEMANDS)

        assert [team.team_id for team in interested] == [1, 3]

    def test_uninterested_slots_filled_at_random(self, ai_factory, fixed_rng):
        ai = ai_factory(fixed_rng([0.99]))
        teams = [Team(team_id=i, name=f"Team {i}", current_cap_space=50_000_000) for i in range(1, 6)]
        player = Player(player_id=10, position="WR", age=27, overall_rating=85)

        interested = ai.select_interested_teams(teams, player, 3, DEMANDS)

        assert len(interested) == 3
        assert len({team.team_id for team in interested}) == 3


class TestTeamOffer:

    def test_offer_terms(self, ai_factory, fixed_rng):
        ai = ai_factory(fixed_rng([0.5]))
        team = Team(team_id=2, name="Team 2", current_cap_space=50_000_000)

        offer = ai.generate_team_offer(team, DEMANDS)

        # 95% of asking, 50% guaranteed, 40% of guarantees as bonus
        assert offer == ContractOffer(
            years=4,
            total_value=38_000_000,
            guaranteed_money=19_000_000,
            signing_bonus=7_600_000,
            structure=ContractStructure.EVEN,
        )

    def test_offer_must_fit_cap_space(self, ai_factory, fixed_rng):
        ai = ai_factory(fixed_rng([0.5]))
        # Year-1 cap hit is $7.6M base + $1.9M proration
        assert ai.generate_team_offer(Team(team_id=2, name="Team 2", current_cap_space=9_500_000), DEMANDS)
        assert ai.generate_team_offer(Team(team_id=2, name="Team 2", current_cap_space=9_499_999), DEMANDS) is None

    @pytest.mark.parametrize("roll,structure", [
        (0.1, ContractStructure.FRONTLOADED),
        (0.3, ContractStructure.BACKLOADED),
        (0.6, ContractStructure.EVEN),
    ])
    def test_contract_structure(self, ai_factory, roll, structure, fixed_rng):
        assert ai_factory(fixed_rng([roll])).select_contract_structure() == structure


@pytest.mark.integration
class TestGenerateOffers:
    """Test market-wide offer generation."""

    @pytest.fixture
    def market(self, league):
        league.create_player(Player(player_id=10, position="QB", age=27, overall_rating=92))
        league.create_player(Player(player_id=11, position="WR", age=30, overall_rating=60))
        league.create_player(Player(player_id=12, position="CB", age=26, overall_rating=88,
                                    current_team_id=2, roster_status=RosterStatus.ACTIVE))
        return league

    def test_offers_from_ai_teams(self, free_agency_ai, market, valuation_engine):
        offers = free_agency_ai.generate_ai_offers(user_team_id=1)

        assert {record.player_id for record in offers} == {10}
        assert sorted(record.team_id for record in offers) == [2, 3, 4]

        for record in offers:
            assert record.offer_id is not None
            assert record.status == OfferStatus.PENDING
            assert not record.is_user_offer
            is_valid, _ = valuation_engine.validate_contract(
                record.offer.total_value, record.offer.years,
                record.offer.guaranteed_money, record.offer.signing_bonus,
            )
            assert is_valid
            assert valuation_engine.calculate_offer_year1_cap_hit(record.offer) <= 100_000_000

    def test_rerun_skips_players_with_ai_offers(self, free_agency_ai, market):
        first = free_agency_ai.generate_ai_offers(user_team_id=1)
        second = free_agency_ai.generate_ai_offers(user_team_id=1)

        assert first
        assert second == []
        assert len(market.get_offers(player_id=10)) == len(first)

    def test_user_offers_do_not_block_ai(self, free_agency_ai, market):
        market.create_offer(FreeAgentOffer(
            player_id=10, team_id=1, is_user_offer=True,
            offer=ContractOffer(years=4, total_value=100_000_000, guaranteed_money=50_000_000,
                                signing_bonus=20_000_000),
        ))

        offers = free_agency_ai.generate_ai_offers(user_team_id=1)

        assert len(offers) == 3


class TestEscalation:

    @pytest.fixture
    def bidding(self, league):
        league.create_player(Player(player_id=10, position="WR", age=27, overall_rating=85))
        _ai_offer(league, 2, 60_000_000, 30_000_000)
        top = _ai_offer(league, 3, 80_000_000, 40_000_000)
        league.create_offer(FreeAgentOffer(
            player_id=10, team_id=1, is_user_offer=True,
            offer=ContractOffer(years=4, total_value=100_000_000, guaranteed_money=50_000_000,
                                signing_bonus=20_000_000),
        ))
        return top

    def test_top_ai_offer_raised(self, ai_factory, league, bidding, fixed_rng):
        ai = ai_factory(fixed_rng([0.1, 0.5]))

        raised = ai.update_ai_offers(10)

        # 1.05 + 0.5 x 0.05 = 7.5% raise
        assert raised.offer_id == bidding.offer_id
        assert raised.offer.total_value == 86_000_000
        assert raised.offer.guaranteed_money == 43_000_000
        assert raised.negotiation_round == 2

        stored = [r for r in league.get_offers(player_id=10) if r.offer_id == bidding.offer_id][0]
        assert stored.offer.total_value == 86_000_000

    def test_no_raise_most_of_the_time(self, ai_factory, league, bidding, fixed_rng):
        assert ai_factory(fixed_rng([0.5])).update_ai_offers(10) is None

        stored = [r for r in league.get_offers(player_id=10) if r.offer_id == bidding.offer_id][0]
        assert stored.offer.total_value == 80_000_000

    def test_raise_must_fit_cap_space(self, ai_factory, league, bidding, fixed_rng):
        league.update_team_cap_space(3, 1_000_000)

        assert ai_factory(fixed_rng([0.1, 0.5])).update_ai_offers(10) is None

    def test_no_ai_offers(self, ai_factory, league, fixed_rng):
        league.create_player(Player(player_id=20, position="S", age=25, overall_rating=75))

        assert ai_factory(fixed_rng([0.1])).update_ai_offers(20) is None


class TestSigningSweep:

    @pytest.fixture
    def asking(self, league, valuation_engine):
        player = league.create_player(Player(player_id=10, position="WR", age=27, overall_rating=85))
        return valuation_engine.calculate_player_value(player)

    def _offer_at(self, league, demands, ratio, team_id=2):
        total_value = int(demands.apy * ratio) * demands.years
        guaranteed_money = total_value * 2 // 5
        return _ai_offer(league, team_id, total_value, guaranteed_money, years=demands.years)

    def test_offer_at_asking_signs(self, ai_factory, league, asking, fixed_rng):
        record = self._offer_at(league, asking, 1.0)

        signed = ai_factory(fixed_rng([0.1])).process_ai_signings()

        assert len(signed) == 1
        assert signed[0].team_id == 2
        assert league.get_player(10).current_team_id == 2
        stored = league.get_offers(player_id=10)
        assert [r.status for r in stored if r.offer_id == record.offer_id] == [OfferStatus.ACCEPTED]

    def test_signing_is_a_coin_flip(self, ai_factory, league, asking, fixed_rng):
        self._offer_at(league, asking, 1.0)

        assert ai_factory(fixed_rng([0.5])).process_ai_signings() == []
        assert league.get_player(10).is_free_agent

    def test_low_offer_never_signs(self, ai_factory, league, asking, fixed_rng):
        self._offer_at(league, asking, 0.8)

        assert ai_factory(fixed_rng([0.0])).process_ai_signings() == []

    def test_one_signing_per_player(self, ai_factory, league, asking, fixed_rng):
        self._offer_at(league, asking, 1.0, team_id=2)
        self._offer_at(league, asking, 1.0, team_id=3)

        signed = ai_factory(fixed_rng([0.1])).process_ai_signings()

        assert len(signed) == 1
        assert league.get_offers(player_id=10, status=OfferStatus.PENDING) == []

    def test_unaffordable_signing_is_skipped(self, ai_factory, league, asking, fixed_rng):
        self._offer_at(league, asking, 1.0)
        league.update_team_cap_space(2, 0)

        assert ai_factory(fixed_rng([0.1])).process_ai_signings() == []
        assert league.get_player(10).is_free_agent
