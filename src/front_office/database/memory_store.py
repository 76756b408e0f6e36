"""
In-Memory League Store

Dictionary-backed LeagueStore for tests and embedding. Transactions take a
deep-copy snapshot on entry and restore it if the block raises.
"""

import copy
import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Dict, Iterator, List, Optional

from front_office.exceptions import ConstraintError, NotFoundError
from front_office.models import (
    Contract,
    DraftBoardEntry,
    DraftPick,
    DraftProspect,
    DraftSelection,
    FreeAgentOffer,
    OfferStatus,
    Player,
    PositionSummary,
    RosterStatus,
    Team,
)
from .league_store import LeagueStore


class InMemoryLeagueStore(LeagueStore):
    """LeagueStore keeping every record in process memory."""

    def __init__(self):
        self.players: Dict[int, Player] = {}
        self.teams: Dict[int, Team] = {}
        self.contracts: Dict[int, Contract] = {}
        self.offers: Dict[int, FreeAgentOffer] = {}
        self.draft_picks: Dict[int, DraftPick] = {}
        self.prospects: Dict[int, DraftProspect] = {}
        self.selections: List[DraftSelection] = []
        self.draft_boards: Dict[int, List[DraftBoardEntry]] = {}
        self.transactions: List[Dict[str, Any]] = []
        self._next_ids = {"player": 1, "contract": 1, "offer": 1, "pick": 1}
        self._depth = 0
        self.logger = logging.getLogger(__name__)

    # ========================================================================
    # TRANSACTIONS
    # ========================================================================

    _STATE_FIELDS = (
        "players", "teams", "contracts", "offers", "draft_picks", "prospects",
        "selections", "draft_boards", "transactions", "_next_ids",
    )

    @contextmanager
    def transaction(self) -> Iterator["InMemoryLeagueStore"]:
        # Only the outermost block snapshots; inner blocks join it.
        if self._depth > 0:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            return

        snapshot = {name: copy.deepcopy(getattr(self, name)) for name in self._STATE_FIELDS}
        self._depth = 1
        try:
            yield self
        except Exception:
            for name, value in snapshot.items():
                setattr(self, name, value)
            self.logger.warning("Transaction rolled back, store restored from snapshot")
            raise
        finally:
            self._depth = 0

    def _next_id(self, kind: str) -> int:
        next_id = self._next_ids[kind]
        self._next_ids[kind] += 1
        return next_id

    # ========================================================================
    # PLAYERS
    # ========================================================================

    def get_player(self, player_id: int) -> Player:
        try:
            return self.players[player_id]
        except KeyError:
            raise NotFoundError(f"Player {player_id} not found", {"player_id": player_id}) from None

    def get_players(
        self,
        team_id: Optional[int] = None,
        roster_status: Optional[RosterStatus] = None
    ) -> List[Player]:
        players = [
            player for player in self.players.values()
            if (team_id is None or player.current_team_id == team_id)
            and (roster_status is None or player.roster_status == roster_status)
        ]
        return sorted(players, key=lambda p: p.player_id)

    def create_player(self, player: Player) -> Player:
        if player.player_id <= 0:
            player = replace(player, player_id=self._next_id("player"))
        elif player.player_id in self.players:
            raise ConstraintError(f"Player {player.player_id} already exists", {"player_id": player.player_id})
        self._next_ids["player"] = max(self._next_ids["player"], player.player_id + 1)
        self.players[player.player_id] = player
        return player

    def update_player(self, player: Player) -> None:
        self.get_player(player.player_id)
        self.players[player.player_id] = player

    def get_free_agents(self, min_rating: int = 0, limit: Optional[int] = None) -> List[Player]:
        free_agents = sorted(
            (p for p in self.players.values()
             if p.roster_status == RosterStatus.FREE_AGENT and p.overall_rating >= min_rating),
            key=lambda p: (-p.overall_rating, p.player_id),
        )
        return free_agents[:limit] if limit is not None else free_agents

    def get_position_summary(self, team_id: int, position: str) -> PositionSummary:
        ratings = [
            p.overall_rating for p in self.players.values()
            if p.current_team_id == team_id
            and p.position == position
            and p.roster_status == RosterStatus.ACTIVE
        ]
        if not ratings:
            return PositionSummary(count=0, avg_rating=None)
        return PositionSummary(count=len(ratings), avg_rating=sum(ratings) / len(ratings))

    # ========================================================================
    # TEAMS
    # ========================================================================

    def get_team(self, team_id: int) -> Team:
        try:
            return self.teams[team_id]
        except KeyError:
            raise NotFoundError(f"Team {team_id} not found", {"team_id": team_id}) from None

    def get_teams(self) -> List[Team]:
        return [self.teams[team_id] for team_id in sorted(self.teams)]

    def create_team(self, team: Team) -> Team:
        if team.team_id in self.teams:
            raise ConstraintError(f"Team {team.team_id} already exists", {"team_id": team.team_id})
        self.teams[team.team_id] = team
        return team

    def update_team_cap_space(self, team_id: int, cap_space: int) -> None:
        if cap_space < 0:
            raise ConstraintError(
                f"Team {team_id} cap space cannot go negative",
                {"team_id": team_id, "cap_space": cap_space},
            )
        self.teams[team_id] = self.get_team(team_id).with_cap_space(cap_space)

    # ========================================================================
    # CONTRACTS
    # ========================================================================

    def get_active_contracts(self, team_id: Optional[int] = None) -> List[Contract]:
        return [
            contract for _, contract in sorted(self.contracts.items())
            if contract.is_active and (team_id is None or contract.team_id == team_id)
        ]

    def get_active_contract(self, player_id: int) -> Optional[Contract]:
        for contract in self.contracts.values():
            if contract.is_active and contract.player_id == player_id:
                return contract
        return None

    def get_contract(self, contract_id: int) -> Contract:
        try:
            return self.contracts[contract_id]
        except KeyError:
            raise NotFoundError(f"Contract {contract_id} not found", {"contract_id": contract_id}) from None

    def create_contract(self, contract: Contract) -> Contract:
        if contract.is_active and self.get_active_contract(contract.player_id) is not None:
            raise ConstraintError(
                f"Player {contract.player_id} already has an active contract",
                {"player_id": contract.player_id},
            )
        stored = Contract.from_dict({**contract.to_dict(), "contract_id": self._next_id("contract")})
        self.contracts[stored.contract_id] = stored
        return stored

    def update_contract(self, contract: Contract) -> None:
        self.get_contract(contract.contract_id)
        self.contracts[contract.contract_id] = contract

    # ========================================================================
    # FREE AGENT OFFERS
    # ========================================================================

    def create_offer(self, offer: FreeAgentOffer) -> FreeAgentOffer:
        stored = FreeAgentOffer.from_dict({**offer.to_dict(), "offer_id": self._next_id("offer")})
        self.offers[stored.offer_id] = stored
        return stored

    def update_offer(self, offer: FreeAgentOffer) -> None:
        if offer.offer_id not in self.offers:
            raise NotFoundError(f"Offer {offer.offer_id} not found", {"offer_id": offer.offer_id})
        self.offers[offer.offer_id] = offer

    def get_offers(
        self,
        player_id: Optional[int] = None,
        team_id: Optional[int] = None,
        status: Optional[OfferStatus] = None
    ) -> List[FreeAgentOffer]:
        return [
            offer for _, offer in sorted(self.offers.items())
            if (player_id is None or offer.player_id == player_id)
            and (team_id is None or offer.team_id == team_id)
            and (status is None or offer.status == status)
        ]

    # ========================================================================
    # DRAFT
    # ========================================================================

    def create_draft_pick(self, pick: DraftPick) -> DraftPick:
        stored = replace(pick, pick_id=self._next_id("pick"))
        self.draft_picks[stored.pick_id] = stored
        return stored

    def get_draft_picks(self, draft_year: int, unused_only: bool = False) -> List[DraftPick]:
        picks = [
            pick for pick in self.draft_picks.values()
            if pick.draft_year == draft_year and not (unused_only and pick.is_used)
        ]
        return sorted(picks, key=lambda p: p.overall_pick)

    def update_draft_pick(self, pick: DraftPick) -> None:
        if pick.pick_id not in self.draft_picks:
            raise NotFoundError(f"Draft pick {pick.pick_id} not found", {"pick_id": pick.pick_id})
        self.draft_picks[pick.pick_id] = pick

    def add_prospects(self, prospects: List[DraftProspect]) -> None:
        for prospect in prospects:
            if prospect.prospect_id in self.prospects:
                raise ConstraintError(
                    f"Prospect {prospect.prospect_id} already exists",
                    {"prospect_id": prospect.prospect_id},
                )
            self.prospects[prospect.prospect_id] = prospect

    def get_prospect(self, prospect_id: int) -> DraftProspect:
        try:
            return self.prospects[prospect_id]
        except KeyError:
            raise NotFoundError(f"Prospect {prospect_id} not found", {"prospect_id": prospect_id}) from None

    def get_available_prospects(self, draft_year: int, limit: Optional[int] = None) -> List[DraftProspect]:
        available = sorted(
            (p for p in self.prospects.values() if p.draft_year == draft_year and not p.is_drafted),
            key=lambda p: (-p.scouted_overall_rating, p.prospect_id),
        )
        return available[:limit] if limit is not None else available

    def update_prospect(self, prospect: DraftProspect) -> None:
        self.get_prospect(prospect.prospect_id)
        self.prospects[prospect.prospect_id] = prospect

    def record_selection(self, selection: DraftSelection) -> None:
        self.selections.append(selection)

    def get_selections(self, draft_year: int) -> List[DraftSelection]:
        return sorted(
            (s for s in self.selections if s.draft_year == draft_year),
            key=lambda s: s.overall_pick,
        )

    def save_draft_board(self, team_id: int, entries: List[DraftBoardEntry]) -> None:
        self.draft_boards[team_id] = list(entries)

    def get_draft_board(self, team_id: int) -> List[DraftBoardEntry]:
        return sorted(self.draft_boards.get(team_id, []), key=lambda e: e.rank)

    # ========================================================================
    # TRANSACTION LOG
    # ========================================================================

    def record_transaction(
        self,
        transaction_type: str,
        team_id: Optional[int],
        player_id: Optional[int],
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.transactions.append({
            "transaction_type": transaction_type,
            "team_id": team_id,
            "player_id": player_id,
            "details": dict(details or {}),
        })

    def get_transactions(self, team_id: Optional[int] = None) -> List[Dict[str, Any]]:
        return [t for t in self.transactions if team_id is None or t["team_id"] == team_id]
