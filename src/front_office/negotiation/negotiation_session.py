"""
Negotiation Session

Tracks one player/team negotiation across rounds:

    OFFERED → ACCEPTED | COUNTERED | DECLINED
    COUNTERED → (next offer) → ACCEPTED | COUNTERED | DECLINED

ACCEPTED and DECLINED are terminal. The engine never counters in the final
round, so a session ends after at most three offers.
"""

import logging
from typing import List, Optional

from front_office.exceptions import ConstraintError
from front_office.models import (
    ContractOffer,
    NegotiationContext,
    NegotiationDecision,
    NegotiationState,
    OfferEvaluation,
    Player,
    PlayerDemands,
)
from .negotiation_engine import NegotiationEngine


class NegotiationSession:
    """
    Multi-round negotiation between one team and one free agent.

    Attributes:
        player: Player being negotiated with
        team_id: Team making offers
        demands: Player's demands for the whole session
        state: Current NegotiationState
        negotiation_round: Round of the next (or last) offer
        offers: Every offer submitted, in order
        evaluations: Engine result for each offer
    """

    _DECISION_STATES = {
        NegotiationDecision.ACCEPT: NegotiationState.ACCEPTED,
        NegotiationDecision.COUNTER: NegotiationState.COUNTERED,
        NegotiationDecision.DECLINE: NegotiationState.DECLINED,
    }

    def __init__(
        self,
        player: Player,
        team_id: int,
        demands: PlayerDemands,
        engine: Optional[NegotiationEngine] = None,
        competing_offers: Optional[List[ContractOffer]] = None
    ):
        self.player = player
        self.team_id = team_id
        self.demands = demands
        self.engine = engine or NegotiationEngine()
        self.competing_offers = list(competing_offers or [])
        self.state = NegotiationState.OFFERED
        self.negotiation_round = 1
        self.offers: List[ContractOffer] = []
        self.evaluations: List[OfferEvaluation] = []
        self.logger = logging.getLogger(__name__)

    @property
    def is_complete(self) -> bool:
        return self.state.is_terminal

    @property
    def last_evaluation(self) -> Optional[OfferEvaluation]:
        return self.evaluations[-1] if self.evaluations else None

    @property
    def pending_counter_offer(self) -> Optional[ContractOffer]:
        """The player's latest counter, while the session is waiting on the team."""
        if self.state == NegotiationState.COUNTERED and self.last_evaluation:
            return self.last_evaluation.counter_offer
        return None

    def build_context(self) -> NegotiationContext:
        return NegotiationContext(
            player_id=self.player.player_id,
            player_name=self.player.name,
            position=self.player.position,
            overall_rating=self.player.overall_rating,
            age=self.player.age,
            demands=self.demands,
            competing_offers=list(self.competing_offers),
            negotiation_round=self.negotiation_round,
            previous_offers=list(self.offers),
        )

    def submit(self, offer: ContractOffer) -> OfferEvaluation:
        """
        Submit the team's next offer.

        Raises:
            ConstraintError: If the session already ended
        """
        if self.state.is_terminal:
            raise ConstraintError(
                f"Negotiation with player {self.player.player_id} already {self.state.value}",
                context_dict={
                    "player_id": self.player.player_id,
                    "team_id": self.team_id,
                    "state": self.state.value,
                },
            )

        evaluation = self.engine.evaluate_offer(self.build_context(), offer)

        self.offers.append(offer)
        self.evaluations.append(evaluation)
        self.state = self._DECISION_STATES[evaluation.decision]

        self.logger.info(
            f"Negotiation player={self.player.player_id} team={self.team_id} "
            f"round {self.negotiation_round}: {self.state.value} (score {evaluation.score:.1f})"
        )

        if self.state == NegotiationState.COUNTERED:
            self.negotiation_round += 1

        return evaluation
