"""
Free Agency AI

Generates competing offers from AI teams and simulates a live market:

- Bidder count by rating tier (elite players draw 5-7 teams)
- Interested teams weighted by positional need
- Offers at 85-105% of market value, 40-60% guaranteed
- Occasional top-bid escalation (30% chance, +5-10%)
- Periodic signing sweep (offers at 95%+ of asking sign 20% of the time)

Cap space is a hard constraint: no offer is generated or escalated past a
team's available space.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from front_office.config import LeagueSettings
from front_office.contract_valuation import PlayerValuationEngine
from front_office.database import LeagueStore
from front_office.exceptions import ConstraintError
from front_office.models import (
    Contract,
    ContractOffer,
    ContractStructure,
    FreeAgentOffer,
    OfferStatus,
    Player,
    PlayerDemands,
    Team,
    round_half_up,
)
from front_office.random_source import RandomSource
from front_office.services import FreeAgencyService
from .team_needs_analyzer import TeamNeedsAnalyzer


class FreeAgencyAI:
    """
    AI bidding for every team except the user's.

    Example:
        >>> ai = FreeAgencyAI(store, valuation, TeamNeedsAnalyzer(store), service, rng)
        >>> offers = ai.generate_ai_offers()
        >>> signed = ai.process_ai_signings()
    """

    RATING_FLOOR = 70
    MAX_PLAYERS = 100

    MIN_OFFER_PCT = 0.85
    OFFER_PCT_RANGE = 0.2
    MIN_GUARANTEED_PCT = 0.4
    GUARANTEED_PCT_RANGE = 0.2
    MIN_BONUS_PCT = 0.3
    BONUS_PCT_RANGE = 0.2

    ESCALATION_CHANCE = 0.3
    MIN_ESCALATION = 1.05
    ESCALATION_RANGE = 0.05

    SIGNING_APY_RATIO = 0.95
    SIGNING_CHANCE = 0.2
    SIGNING_SWEEP_LIMIT = 20

    def __init__(
        self,
        store: LeagueStore,
        valuation_engine: PlayerValuationEngine,
        needs_analyzer: TeamNeedsAnalyzer,
        free_agency_service: FreeAgencyService,
        rng: Optional[RandomSource] = None,
        settings: Optional[LeagueSettings] = None
    ):
        self.store = store
        self.valuation = valuation_engine
        self.needs_analyzer = needs_analyzer
        self.free_agency_service = free_agency_service
        self.rng = rng or RandomSource()
        self.settings = settings or valuation_engine.settings
        self.logger = logging.getLogger(__name__)

    # ========================================================================
    # BIDDERS
    # ========================================================================

    def determine_number_of_bidders(self, rating: int) -> int:
        if rating >= 90:
            return 5 + self.rng.randint(0, 2)
        if rating >= 85:
            return 3 + self.rng.randint(0, 2)
        if rating >= 80:
            return 2 + self.rng.randint(0, 1)
        if rating >= 75:
            return 1 + self.rng.randint(0, 1)
        return 1 if self.rng.random() < 0.5 else 0

    def select_interested_teams(
        self,
        teams: List[Team],
        player: Player,
        num_teams: int,
        demands: PlayerDemands
    ) -> List[Team]:
        """
        Teams that will bid on a player.

        Only teams with cap space of at least the player's asking APY are
        considered. Each is interested with probability need x 0.7 + rand x 0.3;
        if too few are, random affordable teams fill the remaining slots.
        """
        affordable = [team for team in teams if team.current_cap_space >= demands.apy]
        interested: List[Team] = []

        for team in affordable:
            if len(interested) >= num_teams:
                break
            need = self.needs_analyzer.evaluate_position_need(team.team_id, player.position)
            interest_probability = need * 0.7 + self.rng.random() * 0.3
            if self.rng.random() < interest_probability:
                interested.append(team)

        remaining = [team for team in affordable if team not in interested]
        self.rng.shuffle(remaining)
        interested.extend(remaining[:max(0, num_teams - len(interested))])

        return interested

    # ========================================================================
    # OFFERS
    # ========================================================================

    def select_contract_structure(self) -> ContractStructure:
        roll = self.rng.random()
        if roll < 0.2:
            return ContractStructure.FRONTLOADED
        if roll < 0.4:
            return ContractStructure.BACKLOADED
        return ContractStructure.EVEN

    def generate_team_offer(self, team: Team, demands: PlayerDemands) -> Optional[ContractOffer]:
        """
        One team's offer for a player.

        Returns:
            ContractOffer, or None when the offer breaks contract rules or its
            year-1 cap hit exceeds the team's cap space
        """
        offer_pct = self.MIN_OFFER_PCT + self.rng.random() * self.OFFER_PCT_RANGE
        years = demands.years
        total_value = round_half_up(demands.apy * years * offer_pct)
        guaranteed_pct = self.MIN_GUARANTEED_PCT + self.rng.random() * self.GUARANTEED_PCT_RANGE
        guaranteed_money = round_half_up(total_value * guaranteed_pct)
        signing_bonus = round_half_up(
            guaranteed_money * (self.MIN_BONUS_PCT + self.rng.random() * self.BONUS_PCT_RANGE)
        )

        offer = ContractOffer(
            years=years,
            total_value=total_value,
            guaranteed_money=guaranteed_money,
            signing_bonus=signing_bonus,
            structure=self.select_contract_structure(),
        )

        is_valid, _ = self.valuation.validate_contract(total_value, years, guaranteed_money, signing_bonus)
        if not is_valid:
            return None

        if self.valuation.calculate_offer_year1_cap_hit(offer) > team.current_cap_space:
            return None

        return offer

    def generate_ai_offers(
        self,
        max_offers: int = MAX_PLAYERS,
        user_team_id: Optional[int] = None
    ) -> List[FreeAgentOffer]:
        """
        Generate AI offers for the top free agents.

        Considers free agents rated 70+, best first, up to ``max_offers``
        players. Players who already hold a pending AI offer are skipped, so a
        rerun only fills in players an earlier run did not reach.

        Returns:
            Offers stored by this call
        """
        if user_team_id is None:
            user_team_id = self.settings.user_team_id

        free_agents = self.store.get_free_agents(min_rating=self.RATING_FLOOR, limit=max_offers)
        teams = [team for team in self.store.get_teams() if team.team_id != user_team_id]
        self.rng.shuffle(teams)

        self.logger.info(f"Generating AI offers for {len(free_agents)} free agents...")

        created: List[FreeAgentOffer] = []
        for player in free_agents:
            pending = self.store.get_offers(player_id=player.player_id, status=OfferStatus.PENDING)
            if any(not record.is_user_offer for record in pending):
                continue

            demands = self.valuation.calculate_player_value(player)
            num_bidders = self.determine_number_of_bidders(player.overall_rating)

            for team in self.select_interested_teams(teams, player, num_bidders, demands):
                offer = self.generate_team_offer(team, demands)
                if offer is None:
                    continue
                created.append(self.store.create_offer(FreeAgentOffer(
                    player_id=player.player_id,
                    team_id=team.team_id,
                    offer=offer,
                )))

        self.logger.info(f"AI offer generation complete: {len(created)} offers")
        return created

    def update_ai_offers(self, player_id: int) -> Optional[FreeAgentOffer]:
        """
        Maybe raise the top AI bid for a player.

        With 30% probability the highest pending AI offer grows by 5-10% in
        total value and guaranteed money, unless the raise would not fit the
        team's cap space.

        Returns:
            The raised offer, or None when nothing changed
        """
        ai_offers = sorted(
            (record for record in self.store.get_offers(player_id=player_id, status=OfferStatus.PENDING)
             if not record.is_user_offer),
            key=lambda record: record.offer.total_value,
            reverse=True,
        )
        if not ai_offers or self.rng.random() >= self.ESCALATION_CHANCE:
            return None

        top = ai_offers[0]
        increase = self.MIN_ESCALATION + self.rng.random() * self.ESCALATION_RANGE
        raised_terms = replace(
            top.offer,
            total_value=round_half_up(top.offer.total_value * increase),
            guaranteed_money=round_half_up(top.offer.guaranteed_money * increase),
        )

        team = self.store.get_team(top.team_id)
        if self.valuation.calculate_offer_year1_cap_hit(raised_terms) > team.current_cap_space:
            self.logger.debug(f"Team {top.team_id} cannot afford to raise its offer for player {player_id}")
            return None

        raised = replace(top, offer=raised_terms, negotiation_round=top.negotiation_round + 1)
        self.store.update_offer(raised)

        self.logger.info(f"AI team {top.team_id} increased offer for player {player_id}")
        return raised

    # ========================================================================
    # SIGNINGS
    # ========================================================================

    def process_ai_signings(self, limit: int = SIGNING_SWEEP_LIMIT) -> List[Contract]:
        """
        Let some free agents accept pending AI offers.

        Looks at up to ``limit`` random pending AI offers. An offer whose APY
        is at least 95% of the player's asking APY is accepted with 20%
        probability. Each signing is committed on its own.

        Returns:
            Contracts signed by this call
        """
        candidates = [
            record for record in self.store.get_offers(status=OfferStatus.PENDING)
            if not record.is_user_offer
        ]
        self.rng.shuffle(candidates)

        signed: List[Contract] = []
        for record in candidates[:limit]:
            player = self.store.get_player(record.player_id)
            if not player.is_free_agent:
                continue

            current = next(
                (r for r in self.store.get_offers(player_id=record.player_id, status=OfferStatus.PENDING)
                 if r.offer_id == record.offer_id),
                None,
            )
            if current is None:
                continue

            demands = self.valuation.calculate_player_value(player)
            apy_ratio = current.offer.apy / demands.apy if demands.apy > 0 else 0.0

            if apy_ratio >= self.SIGNING_APY_RATIO and self.rng.random() < self.SIGNING_CHANCE:
                try:
                    signed.append(self.free_agency_service.sign_player(
                        current.player_id, current.team_id, current.offer, current
                    ))
                except ConstraintError as e:
                    self.logger.warning(f"AI signing of player {current.player_id} skipped: {e.message}")

        self.logger.info(f"AI signing sweep complete: {len(signed)} signings")
        return signed
