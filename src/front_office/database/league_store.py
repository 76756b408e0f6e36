"""
League Store

Abstract persistence collaborator for the front office. Services and AI
modules receive a store handle explicitly; nothing in the package opens a
global connection.

Every multi-step write goes through ``transaction()``:

    with store.transaction():
        store.create_contract(contract)
        store.update_team_cap_space(team_id, new_space)
        store.update_player(player.sign_with(team_id))

Either every write inside the block persists or none does.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, Dict, List, Optional

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


class LeagueStore(ABC):
    """
    Storage interface for players, teams, contracts, offers and the draft.

    Lookups of a single record raise ``NotFoundError`` when the record is
    missing. List queries return empty lists.
    """

    # ========================================================================
    # TRANSACTIONS
    # ========================================================================

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """Context manager that commits on success and rolls back on exception."""

    # ========================================================================
    # PLAYERS
    # ========================================================================

    @abstractmethod
    def get_player(self, player_id: int) -> Player:
        """Player by id."""

    @abstractmethod
    def get_players(
        self,
        team_id: Optional[int] = None,
        roster_status: Optional[RosterStatus] = None
    ) -> List[Player]:
        """Players filtered by team and/or roster status, ordered by id."""

    @abstractmethod
    def create_player(self, player: Player) -> Player:
        """
        Insert a player.

        A ``player_id`` of 0 or less asks the store to assign the next id.

        Returns:
            The stored player (with its assigned id)
        """

    @abstractmethod
    def update_player(self, player: Player) -> None:
        """Replace a stored player."""

    @abstractmethod
    def get_free_agents(self, min_rating: int = 0, limit: Optional[int] = None) -> List[Player]:
        """Free agents rated at least ``min_rating``, best first."""

    @abstractmethod
    def get_position_summary(self, team_id: int, position: str) -> PositionSummary:
        """Count and average rating of a team's active players at a position."""

    # ========================================================================
    # TEAMS
    # ========================================================================

    @abstractmethod
    def get_team(self, team_id: int) -> Team:
        """Team by id."""

    @abstractmethod
    def get_teams(self) -> List[Team]:
        """All teams ordered by id."""

    @abstractmethod
    def create_team(self, team: Team) -> Team:
        """Insert a team."""

    @abstractmethod
    def update_team_cap_space(self, team_id: int, cap_space: int) -> None:
        """Set a team's current cap space."""

    # ========================================================================
    # CONTRACTS
    # ========================================================================

    @abstractmethod
    def get_active_contracts(self, team_id: Optional[int] = None) -> List[Contract]:
        """Active contracts, optionally for one team."""

    @abstractmethod
    def get_active_contract(self, player_id: int) -> Optional[Contract]:
        """A player's active contract, None if unsigned."""

    @abstractmethod
    def get_contract(self, contract_id: int) -> Contract:
        """Contract by id."""

    @abstractmethod
    def create_contract(self, contract: Contract) -> Contract:
        """
        Insert a contract and assign its id.

        Raises:
            ConstraintError: If the player already has an active contract
        """

    @abstractmethod
    def update_contract(self, contract: Contract) -> None:
        """Replace a stored contract."""

    # ========================================================================
    # FREE AGENT OFFERS
    # ========================================================================

    @abstractmethod
    def create_offer(self, offer: FreeAgentOffer) -> FreeAgentOffer:
        """Insert an offer and assign its id."""

    @abstractmethod
    def update_offer(self, offer: FreeAgentOffer) -> None:
        """Replace a stored offer."""

    @abstractmethod
    def get_offers(
        self,
        player_id: Optional[int] = None,
        team_id: Optional[int] = None,
        status: Optional[OfferStatus] = None
    ) -> List[FreeAgentOffer]:
        """Offers filtered by player, team and status, ordered by id."""

    # ========================================================================
    # DRAFT
    # ========================================================================

    @abstractmethod
    def create_draft_pick(self, pick: DraftPick) -> DraftPick:
        """Insert a draft pick and assign its id."""

    @abstractmethod
    def get_draft_picks(self, draft_year: int, unused_only: bool = False) -> List[DraftPick]:
        """Picks of a draft ordered by overall pick."""

    @abstractmethod
    def update_draft_pick(self, pick: DraftPick) -> None:
        """Replace a stored pick."""

    @abstractmethod
    def add_prospects(self, prospects: List[DraftProspect]) -> None:
        """Insert a draft class."""

    @abstractmethod
    def get_prospect(self, prospect_id: int) -> DraftProspect:
        """Prospect by id."""

    @abstractmethod
    def get_available_prospects(self, draft_year: int, limit: Optional[int] = None) -> List[DraftProspect]:
        """Undrafted prospects, best scouted rating first."""

    @abstractmethod
    def update_prospect(self, prospect: DraftProspect) -> None:
        """Replace a stored prospect."""

    @abstractmethod
    def record_selection(self, selection: DraftSelection) -> None:
        """Append a completed pick to the draft log."""

    @abstractmethod
    def get_selections(self, draft_year: int) -> List[DraftSelection]:
        """Completed picks ordered by overall pick."""

    @abstractmethod
    def save_draft_board(self, team_id: int, entries: List[DraftBoardEntry]) -> None:
        """Replace a team's draft board."""

    @abstractmethod
    def get_draft_board(self, team_id: int) -> List[DraftBoardEntry]:
        """A team's draft board ordered by rank."""

    # ========================================================================
    # TRANSACTION LOG
    # ========================================================================

    @abstractmethod
    def record_transaction(
        self,
        transaction_type: str,
        team_id: Optional[int],
        player_id: Optional[int],
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Append a league transaction (signing, release, restructure, ...)."""

    @abstractmethod
    def get_transactions(self, team_id: Optional[int] = None) -> List[Dict[str, Any]]:
        """Recorded league transactions in insertion order."""
