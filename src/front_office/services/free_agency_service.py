"""
Free Agency Service

Submits a team's offer to a free agent and, when the player accepts, signs
the player in one transaction:

1. Contract created from the accepted offer
2. Team cap space reduced by the year-1 cap hit
3. Player moved to the team's active roster
4. Offer recorded as accepted, competing pending offers withdrawn
5. Signing logged

If any step fails nothing is written.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional

from front_office.config import LeagueSettings
from front_office.contract_valuation import PlayerValuationEngine
from front_office.database import LeagueStore
from front_office.exceptions import ConstraintError
from front_office.models import (
    Contract,
    ContractOffer,
    ContractType,
    FreeAgentOffer,
    NegotiationContext,
    NegotiationDecision,
    OfferEvaluation,
    OfferStatus,
    Player,
    PlayerDemands,
)
from front_office.negotiation import NegotiationEngine
from front_office.salary_cap import CapCalculator, ContractBuilder


@dataclass
class OfferOutcome:
    """Result of submitting an offer."""

    evaluation: OfferEvaluation
    offer_record: FreeAgentOffer
    contract: Optional[Contract] = None

    @property
    def signed(self) -> bool:
        return self.contract is not None


class FreeAgencyService:
    """
    Service for negotiating with and signing free agents.

    Uses dependency injection for the store and every engine.
    """

    def __init__(
        self,
        store: LeagueStore,
        settings: Optional[LeagueSettings] = None,
        valuation_engine: Optional[PlayerValuationEngine] = None,
        negotiation_engine: Optional[NegotiationEngine] = None,
        cap_calculator: Optional[CapCalculator] = None,
        builder: Optional[ContractBuilder] = None
    ):
        self.store = store
        self.settings = settings or LeagueSettings.create_default_2025()
        self.valuation = valuation_engine or PlayerValuationEngine(self.settings)
        self.negotiation = negotiation_engine or NegotiationEngine()
        self.calculator = cap_calculator or CapCalculator(self.settings)
        self.builder = builder or ContractBuilder(self.valuation, self.calculator)
        self.logger = logging.getLogger(__name__)

    def get_player_demands(self, player_id: int) -> PlayerDemands:
        return self.valuation.calculate_player_value(self.store.get_player(player_id))

    def get_competing_offers(self, player_id: int, team_id: int) -> List[ContractOffer]:
        """Pending offers from every other team, best total value first."""
        offers = [
            record.offer
            for record in self.store.get_offers(player_id=player_id, status=OfferStatus.PENDING)
            if record.team_id != team_id
        ]
        return sorted(offers, key=lambda offer: offer.total_value, reverse=True)

    def _require_free_agent(self, player: Player) -> None:
        if not player.is_free_agent:
            raise ConstraintError(
                f"Player {player.player_id} is not a free agent",
                {"player_id": player.player_id, "roster_status": player.roster_status.value},
            )

    def _require_open_negotiation(self, player_id: int, team_id: int, prior_offers: List[FreeAgentOffer]) -> None:
        """A declined negotiation or one that used every round takes no more offers."""
        declined = any(record.status == OfferStatus.DECLINED for record in prior_offers)
        if declined or len(prior_offers) >= self.negotiation.MAX_ROUNDS:
            raise ConstraintError(
                f"Player {player_id} is no longer negotiating with team {team_id}",
                {"player_id": player_id, "team_id": team_id, "offers_made": len(prior_offers)},
            )

    # ========================================================================
    # OFFERS
    # ========================================================================

    def submit_offer(
        self,
        player_id: int,
        team_id: int,
        offer: ContractOffer,
        demands: Optional[PlayerDemands] = None,
        is_user_offer: bool = True
    ) -> OfferOutcome:
        """
        Evaluate a team's offer and sign the player on acceptance.

        The negotiation round is one more than the number of offers this team
        already made to the player. A counter stores the offer as rejected; a
        decline stores it as declined and ends talks with that team.

        Args:
            player_id: Free agent
            team_id: Offering team
            offer: Contract terms
            demands: Demands to negotiate against (computed when None)
            is_user_offer: Whether the human team made the offer

        Returns:
            OfferOutcome with the evaluation, the stored offer and the
            contract when signed

        Raises:
            ValidationError: If the offer breaks contract rules
            ConstraintError: If the player is not a free agent, the team
                already was declined or used every round, or the team cannot
                fit the year-1 cap hit
        """
        self.valuation.ensure_valid_offer(offer)

        player = self.store.get_player(player_id)
        self._require_free_agent(player)

        prior_offers = self.store.get_offers(player_id=player_id, team_id=team_id)
        self._require_open_negotiation(player_id, team_id, prior_offers)

        team = self.store.get_team(team_id)
        year1_cap_hit = self.valuation.calculate_offer_year1_cap_hit(offer)
        if year1_cap_hit > team.current_cap_space:
            raise ConstraintError(
                f"Team {team_id} cannot fit a year-1 cap hit of {year1_cap_hit:,}",
                {"team_id": team_id, "cap_hit": year1_cap_hit, "cap_space": team.current_cap_space},
            )

        demands = demands or self.valuation.calculate_player_value(player)
        negotiation_round = len(prior_offers) + 1

        context = NegotiationContext(
            player_id=player.player_id,
            player_name=player.name,
            position=player.position,
            overall_rating=player.overall_rating,
            age=player.age,
            demands=demands,
            competing_offers=self.get_competing_offers(player_id, team_id),
            negotiation_round=negotiation_round,
        )
        evaluation = self.negotiation.evaluate_offer(context, offer)

        offer_record = FreeAgentOffer(
            player_id=player_id,
            team_id=team_id,
            offer=offer,
            negotiation_round=negotiation_round,
            is_user_offer=is_user_offer,
        )

        if evaluation.accepted:
            contract = self.sign_player(player_id, team_id, offer, offer_record)
            accepted_record = self.store.get_offers(
                player_id=player_id, team_id=team_id, status=OfferStatus.ACCEPTED
            )[-1]
            return OfferOutcome(evaluation=evaluation, offer_record=accepted_record, contract=contract)

        status = OfferStatus.DECLINED if evaluation.decision == NegotiationDecision.DECLINE else OfferStatus.REJECTED
        offer_record = self.store.create_offer(replace(offer_record, status=status))

        self.logger.info(
            f"Player {player_id} {evaluation.decision.value}s team {team_id} offer "
            f"(round {negotiation_round}, score {evaluation.score:.1f})"
        )

        return OfferOutcome(evaluation=evaluation, offer_record=offer_record)

    # ========================================================================
    # SIGNING
    # ========================================================================

    def sign_player(
        self,
        player_id: int,
        team_id: int,
        offer: ContractOffer,
        offer_record: Optional[FreeAgentOffer] = None,
        season: Optional[int] = None
    ) -> Contract:
        """
        Sign a free agent to an accepted offer.

        Args:
            player_id: Free agent
            team_id: Signing team
            offer: Accepted terms
            offer_record: Stored offer being accepted; a new accepted record is
                created when None or unsaved
            season: First contract season (settings season when None)

        Returns:
            The stored contract

        Raises:
            ConstraintError: If the player is not a free agent or the team
                cannot fit the year-1 cap hit
        """
        season = season if season is not None else self.settings.season

        try:
            with self.store.transaction():
                player = self.store.get_player(player_id)
                self._require_free_agent(player)
                team = self.store.get_team(team_id)

                contract = self.builder.build(offer, player_id, team_id, season, ContractType.VETERAN)
                year1_cap_hit = self.calculator.calculate_cap_hit(contract, season).total_cap_hit
                if year1_cap_hit > team.current_cap_space:
                    raise ConstraintError(
                        f"Team {team_id} cannot fit a year-1 cap hit of {year1_cap_hit:,}",
                        {"team_id": team_id, "cap_hit": year1_cap_hit, "cap_space": team.current_cap_space},
                    )

                stored = self.store.create_contract(contract)
                self.store.update_team_cap_space(team_id, team.current_cap_space - year1_cap_hit)
                self.store.update_player(player.sign_with(team_id))

                if offer_record is not None and offer_record.offer_id is not None:
                    accepted_id = offer_record.offer_id
                    self.store.update_offer(replace(offer_record, status=OfferStatus.ACCEPTED))
                else:
                    record = offer_record or FreeAgentOffer(player_id=player_id, team_id=team_id, offer=offer)
                    accepted_id = self.store.create_offer(replace(record, status=OfferStatus.ACCEPTED)).offer_id

                for other in self.store.get_offers(player_id=player_id, status=OfferStatus.PENDING):
                    if other.offer_id != accepted_id:
                        self.store.update_offer(replace(other, status=OfferStatus.WITHDRAWN))

                self.store.record_transaction(
                    "signing",
                    team_id,
                    player_id,
                    {
                        "contract_id": stored.contract_id,
                        "years": offer.years,
                        "total_value": offer.total_value,
                        "year1_cap_hit": year1_cap_hit,
                    },
                )
        except ConstraintError:
            self.logger.error(f"Signing player {player_id} with team {team_id} rejected")
            raise

        self.logger.info(
            f"Player {player_id} signed with team {team_id}: {offer.years} years, "
            f"{offer.total_value:,} total, year-1 cap hit {year1_cap_hit:,}"
        )

        return stored
