"""
Tests for NegotiationSession round and state tracking.
"""

import pytest

from front_office.exceptions import ConstraintError
from front_office.models import (
    ContractOffer,
    NegotiationPriority,
    NegotiationState,
    Player,
    PlayerDemands,
)
from front_office.negotiation import NegotiationSession


@pytest.fixture
def session(negotiation_engine):
    player = Player(player_id=10, position="WR", age=27, overall_rating=85)
    demands = PlayerDemands(apy=20_000_000, years=4, guaranteed=48_000_000, priority=NegotiationPriority.MONEY)
    return NegotiationSession(player, team_id=3, demands=demands, engine=negotiation_engine)


# $17.4M APY (65) and $41.5M guaranteed (70): 73.5 before round bonuses
STUBBORN_OFFER = ContractOffer(years=4, total_value=69_600_000, guaranteed_money=41_500_000,
                               signing_bonus=20_000_000)

FULL_OFFER = ContractOffer(years=4, total_value=80_000_000, guaranteed_money=48_000_000,
                           signing_bonus=20_000_000)


class TestNegotiationSession:
    """Test multi-round negotiation flow."""

    def test_initial_state(self, session):
        assert session.state == NegotiationState.OFFERED
        assert session.negotiation_round == 1
        assert not session.is_complete
        assert session.last_evaluation is None
        assert session.pending_counter_offer is None

    def test_accept_in_first_round(self, session):
        evaluation = session.submit(FULL_OFFER)

        assert evaluation.accepted
        assert session.state == NegotiationState.ACCEPTED
        assert session.is_complete
        assert session.negotiation_round == 1

    def test_three_rounds_then_decline(self, session):
        first = session.submit(STUBBORN_OFFER)
        assert first.score == pytest.approx(73.5)
        assert session.state == NegotiationState.COUNTERED
        assert session.pending_counter_offer is first.counter_offer

        second = session.submit(STUBBORN_OFFER)
        assert second.score == pytest.approx(78.5)
        assert session.state == NegotiationState.COUNTERED
        assert session.negotiation_round == 3

        third = session.submit(STUBBORN_OFFER)
        assert third.score == pytest.approx(83.5)
        assert session.state == NegotiationState.DECLINED
        assert third.reason == "APY too low"
        assert session.pending_counter_offer is None

        assert len(session.offers) == 3
        assert len(session.evaluations) == 3

    def test_improved_offer_after_counter(self, session):
        session.submit(STUBBORN_OFFER)

        evaluation = session.submit(FULL_OFFER)

        assert evaluation.accepted
        assert session.state == NegotiationState.ACCEPTED

    def test_terminal_session_rejects_offers(self, session):
        for _ in range(3):
            session.submit(STUBBORN_OFFER)

        with pytest.raises(ConstraintError):
            session.submit(FULL_OFFER)

        assert len(session.offers) == 3

    def test_context_carries_previous_offers(self, session):
        session.submit(STUBBORN_OFFER)

        context = session.build_context()

        assert context.negotiation_round == 2
        assert context.previous_offers == [STUBBORN_OFFER]
        assert context.player_name == "Player #10"
