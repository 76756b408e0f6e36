"""
Contract Negotiation Engine

Scores a team's offer against a player's demands and any competing offers,
and decides whether the player accepts, counters or declines.
"""

import logging
from typing import List, Optional

from front_office.models import (
    ContractOffer,
    NegotiationContext,
    NegotiationDecision,
    NegotiationPriority,
    OfferEvaluation,
    PlayerDemands,
    round_half_up,
)
from front_office.random_source import RandomSource


class NegotiationEngine:
    """
    Player-side negotiation logic.

    Score flow:
        1. Component scores (0-100) for APY, years and guaranteed money
        2. Weighted by the player's priority
        3. -15 / +10 against the best competing offer
        4. +5 per negotiation round after the first
        5. >= 90 accept, >= 70 counter (rounds 1-2 only), else decline

    Usage:
        engine = NegotiationEngine(rng=RandomSource(seed=1))
        evaluation = engine.evaluate_offer(context, offer)
        if evaluation.decision == NegotiationDecision.COUNTER:
            next_offer = evaluation.counter_offer
    """

    MAX_ROUNDS = 3
    ACCEPT_THRESHOLD = 90
    COUNTER_THRESHOLD = 70

    # (minimum ratio, score), checked top-down
    APY_SCORE_TIERS = [
        (1.1, 100),  # 10% over asking
        (1.0, 95),   # Meets asking
        (0.95, 85),
        (0.9, 75),
        (0.85, 65),
        (0.8, 50),
        (0.75, 35),
        (0.7, 20),
    ]
    APY_SCORE_FLOOR = 10

    GUARANTEED_SCORE_TIERS = [
        (1.0, 100),
        (0.95, 90),
        (0.9, 80),
        (0.85, 70),
        (0.8, 60),
        (0.75, 50),
        (0.7, 40),
    ]
    GUARANTEED_SCORE_FLOOR = 30

    # Score by absolute difference in years
    YEARS_SCORES = {0: 100, 1: 80, 2: 60, 3: 40}
    YEARS_SCORE_FLOOR = 20

    # (apy, guaranteed, years) weights
    PRIORITY_WEIGHTS = {
        NegotiationPriority.MONEY: (0.5, 0.3, 0.2),
        NegotiationPriority.YEARS: (0.3, 0.2, 0.5),
        NegotiationPriority.WINNING: (0.4, 0.3, 0.3),
        NegotiationPriority.HOMETOWN: (0.4, 0.3, 0.3),
    }

    COMPETITION_THRESHOLD = 10
    COMPETITION_PENALTY = 15
    COMPETITION_BONUS = 10
    ROUND_FLEXIBILITY_BONUS = 5
    COUNTER_FLEXIBILITY_PER_ROUND = 0.15

    ACCEPT_MESSAGES = [
        "We have a deal! I'm excited to join your team and help bring a championship to the city.",
        "This is exactly what I was looking for. Let's get to work!",
        "I'm ready to sign on the dotted line. Can't wait to get started.",
        "This offer shows you value what I bring to the table. I'm in.",
        "Perfect! Let's make this official and get to training camp.",
    ]

    REASON_APY = "APY too low"
    REASON_GUARANTEED = "Not enough guaranteed money"
    REASON_YEARS = "Contract length doesn't match expectations"

    def __init__(self, rng: Optional[RandomSource] = None):
        """
        Initialize negotiation engine.

        Args:
            rng: Random source for counter-offer bonuses and message choice
        """
        self.rng = rng or RandomSource()
        self.logger = logging.getLogger(__name__)

    # ========================================================================
    # OFFER EVALUATION
    # ========================================================================

    def evaluate_offer(self, context: NegotiationContext, offer: ContractOffer) -> OfferEvaluation:
        """
        Evaluate a contract offer from a team.

        Args:
            context: Player, demands, competing offers and current round
            offer: The team's offer

        Returns:
            OfferEvaluation with score, decision, message and either a
            counter offer (COUNTER) or the main issue (DECLINE)
        """
        demands = context.demands

        apy_score = self.calculate_apy_score(offer, demands)
        years_score = self.calculate_years_score(offer, demands)
        guaranteed_score = self.calculate_guaranteed_score(offer, demands)

        # TODO: weight WINNING by the offering team's record and HOMETOWN by
        # whether the offer comes from the player's current team once the
        # context carries those fields
        apy_weight, guaranteed_weight, years_weight = self.PRIORITY_WEIGHTS[demands.priority]
        total_score = (
            apy_score * apy_weight
            + guaranteed_score * guaranteed_weight
            + years_score * years_weight
        )

        if context.competing_offers:
            best_competing = self.find_best_competing_offer(context.competing_offers, demands)
            competition_score = self.compare_offers(offer, best_competing)

            if competition_score < -self.COMPETITION_THRESHOLD:
                total_score -= self.COMPETITION_PENALTY
            elif competition_score > self.COMPETITION_THRESHOLD:
                total_score += self.COMPETITION_BONUS

        if context.negotiation_round > 1:
            total_score += (context.negotiation_round - 1) * self.ROUND_FLEXIBILITY_BONUS

        if total_score >= self.ACCEPT_THRESHOLD:
            decision = NegotiationDecision.ACCEPT
            evaluation = OfferEvaluation(
                score=total_score,
                decision=decision,
                message=self.rng.choice(self.ACCEPT_MESSAGES),
            )
        elif total_score >= self.COUNTER_THRESHOLD and context.negotiation_round < self.MAX_ROUNDS:
            decision = NegotiationDecision.COUNTER
            evaluation = OfferEvaluation(
                score=total_score,
                decision=decision,
                message=self.generate_counter_message(total_score),
                counter_offer=self.generate_counter_offer(context, offer),
            )
        else:
            decision = NegotiationDecision.DECLINE
            evaluation = OfferEvaluation(
                score=total_score,
                decision=decision,
                message=self.generate_decline_message(total_score),
                reason=self.identify_main_issue(apy_score, years_score, guaranteed_score),
            )

        evaluation.apy_score = apy_score
        evaluation.years_score = years_score
        evaluation.guaranteed_score = guaranteed_score

        self.logger.debug(
            f"Player {context.player_id} round {context.negotiation_round}: "
            f"apy={apy_score} years={years_score} guaranteed={guaranteed_score} "
            f"total={total_score:.1f} -> {decision.value}"
        )

        return evaluation

    # ========================================================================
    # COMPONENT SCORES
    # ========================================================================

    def calculate_apy(self, total_value: int, years: int) -> int:
        if years <= 0:
            return 0
        return round_half_up(total_value / years)

    def calculate_apy_score(self, offer: ContractOffer, demands: PlayerDemands) -> int:
        """How the offered APY compares to the demand (0-100)."""
        if demands.apy <= 0:
            return self.APY_SCORE_TIERS[0][1]
        ratio = self.calculate_apy(offer.total_value, offer.years) / demands.apy
        return self._score_ratio(ratio, self.APY_SCORE_TIERS, self.APY_SCORE_FLOOR)

    def calculate_years_score(self, offer: ContractOffer, demands: PlayerDemands) -> int:
        """How close the length is to the demand (0-100)."""
        diff = abs(offer.years - demands.years)
        return self.YEARS_SCORES.get(diff, self.YEARS_SCORE_FLOOR)

    def calculate_guaranteed_score(self, offer: ContractOffer, demands: PlayerDemands) -> int:
        """How the guaranteed money compares to the demand (0-100)."""
        if demands.guaranteed <= 0:
            return self.GUARANTEED_SCORE_TIERS[0][1]
        ratio = offer.guaranteed_money / demands.guaranteed
        return self._score_ratio(ratio, self.GUARANTEED_SCORE_TIERS, self.GUARANTEED_SCORE_FLOOR)

    def _score_ratio(self, ratio: float, tiers, floor: int) -> int:
        for min_ratio, score in tiers:
            if ratio >= min_ratio:
                return score
        return floor

    # ========================================================================
    # COMPETING OFFERS
    # ========================================================================

    def find_best_competing_offer(
        self,
        offers: List[ContractOffer],
        demands: PlayerDemands
    ) -> ContractOffer:
        """Rival offer with the highest 60/40 APY/guaranteed score (first wins ties)."""
        best_offer = offers[0]
        best_score = 0.0

        for offer in offers:
            score = (
                self.calculate_apy_score(offer, demands) * 0.6
                + self.calculate_guaranteed_score(offer, demands) * 0.4
            )
            if score > best_score:
                best_score = score
                best_offer = offer

        return best_offer

    def compare_offers(self, offer: ContractOffer, other: ContractOffer) -> float:
        """
        Competitiveness of ``offer`` against ``other``.

        Positive when ``offer`` is better. APY differences carry most of the
        weight; total value and guarantees are scaled down to comparable size.
        """
        apy_diff = (
            self.calculate_apy(offer.total_value, offer.years)
            - self.calculate_apy(other.total_value, other.years)
        )
        total_value_diff = offer.total_value - other.total_value
        guaranteed_diff = offer.guaranteed_money - other.guaranteed_money

        return apy_diff * 0.4 + total_value_diff * 0.0000003 + guaranteed_diff * 0.0000003

    # ========================================================================
    # COUNTER OFFERS AND MESSAGES
    # ========================================================================

    def generate_counter_offer(
        self,
        context: NegotiationContext,
        current_offer: ContractOffer
    ) -> ContractOffer:
        """
        Player's counter offer.

        Moves ``0.15 × round`` of the way from the demands toward the current
        offer on APY, years and guaranteed share. Signing bonus is 40-50% of
        the countered guarantees.
        """
        demands = context.demands
        flexibility = context.negotiation_round * self.COUNTER_FLEXIBILITY_PER_ROUND

        current_apy = self.calculate_apy(current_offer.total_value, current_offer.years)
        target_apy = demands.apy - (demands.apy - current_apy) * flexibility

        counter_years = round_half_up(
            demands.years - (demands.years - current_offer.years) * flexibility
        )
        counter_years = max(1, min(7, counter_years))

        counter_total_value = round_half_up(target_apy * counter_years)

        current_guaranteed_pct = (
            current_offer.guaranteed_money / current_offer.total_value
            if current_offer.total_value > 0 else 0.0
        )
        demanded_total = demands.apy * demands.years
        target_guaranteed_pct = demands.guaranteed / demanded_total if demanded_total > 0 else 0.0
        counter_guaranteed_pct = (
            target_guaranteed_pct
            - (target_guaranteed_pct - current_guaranteed_pct) * flexibility
        )
        counter_guaranteed = round_half_up(counter_total_value * counter_guaranteed_pct)

        signing_bonus_pct = 0.4 + self.rng.random() * 0.1
        counter_signing_bonus = round_half_up(counter_guaranteed * signing_bonus_pct)

        return ContractOffer(
            years=counter_years,
            total_value=counter_total_value,
            guaranteed_money=counter_guaranteed,
            signing_bonus=counter_signing_bonus,
            structure=current_offer.structure,
        )

    def identify_main_issue(self, apy_score: int, years_score: int, guaranteed_score: int) -> str:
        """Lowest-scoring dimension; ties go APY, then guaranteed, then years."""
        lowest = min(apy_score, years_score, guaranteed_score)

        if lowest == apy_score:
            return self.REASON_APY
        if lowest == guaranteed_score:
            return self.REASON_GUARANTEED
        return self.REASON_YEARS

    def generate_counter_message(self, score: float) -> str:
        if score >= 80:
            return "We're getting close. I've put together a counter-offer that I think works for both sides."
        if score >= 70:
            return "I appreciate the offer, but we need to bridge the gap a bit. Here's what I'm thinking..."
        return "We're still pretty far apart. Let me show you what it would take to get this done."

    def generate_decline_message(self, score: float) -> str:
        if score < 50:
            return (
                "This offer doesn't reflect my value to the team. "
                "I think we're too far apart to continue negotiations."
            )
        return "I appreciate your interest, but I've decided to explore other options. Good luck this season."
