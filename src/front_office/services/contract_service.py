"""
Contract Service

Roster-side contract operations: releasing players, restructuring and rolling
contracts into the next league year. Each operation computes its numbers with
the CapCalculator first and then persists everything in one transaction.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional

from front_office.config import LeagueSettings
from front_office.database import LeagueStore
from front_office.exceptions import ConstraintError, NotFoundError
from front_office.contract_valuation import PlayerValuationEngine
from front_office.models import Contract, DeadMoneyResult, RestructureResult, TeamCapSpace
from front_office.salary_cap import CapCalculator, ContractBuilder


class ContractService:
    """
    Service for cuts, restructures and league-year rollover.

    Team cap space is kept as a running figure on the team: signings subtract
    the year-1 cap hit, cuts add back the cap hit less current-year dead money,
    restructures add back the cap savings.
    """

    def __init__(
        self,
        store: LeagueStore,
        settings: Optional[LeagueSettings] = None,
        cap_calculator: Optional[CapCalculator] = None,
        builder: Optional[ContractBuilder] = None
    ):
        self.store = store
        self.settings = settings or LeagueSettings.create_default_2025()
        self.calculator = cap_calculator or CapCalculator(self.settings)
        self.builder = builder or ContractBuilder(PlayerValuationEngine(self.settings), self.calculator)
        self.logger = logging.getLogger(__name__)

    def _require_active_contract(self, player_id: int) -> Contract:
        contract = self.store.get_active_contract(player_id)
        if contract is None:
            raise NotFoundError(f"Player {player_id} has no active contract", {"player_id": player_id})
        return contract

    # ========================================================================
    # RELEASE
    # ========================================================================

    def cut_player(
        self,
        player_id: int,
        is_june1_cut: bool = False,
        season: Optional[int] = None
    ) -> DeadMoneyResult:
        """
        Release a player and charge dead money.

        Returns:
            DeadMoneyResult for the release

        Raises:
            NotFoundError: If the player has no active contract for the season
            ConstraintError: If the dead money exceeds the team's cap room
        """
        season = season if season is not None else self.settings.season
        contract = self._require_active_contract(player_id)

        dead_money = self.calculator.calculate_dead_money(contract, season, is_june1_cut)
        cap_hit = self.calculator.calculate_cap_hit(contract, season).total_cap_hit

        team = self.store.get_team(contract.team_id)
        new_cap_space = team.current_cap_space + cap_hit - dead_money.current_year_dead_money
        if new_cap_space < 0:
            raise ConstraintError(
                f"Releasing player {player_id} would put team {team.team_id} over the cap",
                {
                    "player_id": player_id,
                    "team_id": team.team_id,
                    "dead_money": dead_money.current_year_dead_money,
                    "cap_space": team.current_cap_space,
                },
            )

        with self.store.transaction():
            self.store.update_contract(self.builder.release_contract(contract))
            self.store.update_player(self.store.get_player(player_id).release())
            self.store.update_team_cap_space(team.team_id, new_cap_space)
            self.store.record_transaction(
                "release",
                team.team_id,
                player_id,
                {"season": season, "june1": is_june1_cut, **dead_money.to_dict()},
            )

        self.logger.info(
            f"Released player {player_id} from team {team.team_id}: "
            f"dead money {dead_money.total_dead_money:,}, cap space now {new_cap_space:,}"
        )

        return dead_money

    # ========================================================================
    # RESTRUCTURE
    # ========================================================================

    def restructure_contract(
        self,
        player_id: int,
        amount: int,
        season: Optional[int] = None
    ) -> RestructureResult:
        """
        Convert base salary to prorated bonus.

        Raises:
            ValidationError: If the amount is not positive
            RestructureLimitError: If the amount would drop base salary below the
                minimum (catchable as ConstraintError or ValidationError)
            NotFoundError: If the player has no active contract for the season
        """
        season = season if season is not None else self.settings.season
        contract = self._require_active_contract(player_id)
        player = self.store.get_player(player_id)

        result = self.calculator.calculate_restructure(contract, season, amount, player.accrued_seasons)
        restructured = self.builder.apply_restructure(contract, result)

        team = self.store.get_team(contract.team_id)

        with self.store.transaction():
            self.store.update_contract(restructured)
            self.store.update_team_cap_space(team.team_id, team.current_cap_space + result.cap_savings)
            self.store.record_transaction("restructure", team.team_id, player_id, result.to_dict())

        self.logger.info(
            f"Restructured {amount:,} for player {player_id}: "
            f"cap hit {result.previous_cap_hit:,} -> {result.new_cap_hit:,}"
        )

        return result

    # ========================================================================
    # LEAGUE YEAR
    # ========================================================================

    def advance_league_year(self) -> Dict[str, List[int]]:
        """
        Age every active contract by one year.

        Every player under contract gains an accrued season. Players whose
        contracts expire become free agents.

        Returns:
            Dict with ``advanced`` and ``expired`` player id lists
        """
        advanced: List[int] = []
        expired: List[int] = []

        with self.store.transaction():
            for contract in self.store.get_active_contracts():
                aged = self.builder.advance_contract_year(contract)
                self.store.update_contract(aged)

                player = self.store.get_player(contract.player_id)
                player = replace(player, accrued_seasons=player.accrued_seasons + 1)
                if aged.is_active:
                    advanced.append(player.player_id)
                else:
                    player = player.release()
                    expired.append(player.player_id)
                self.store.update_player(player)

        self.logger.info(
            f"League year advanced: {len(advanced)} contracts continue, {len(expired)} expired"
        )

        return {"advanced": advanced, "expired": expired}

    def sync_team_cap_space(self, team_id: int, season: Optional[int] = None) -> TeamCapSpace:
        """
        Reset a team's running cap space from its contracts (top-N accounting).

        Negative available space is stored as 0.
        """
        season = season if season is not None else self.settings.season
        cap_space = self.calculator.calculate_team_cap_space(team_id, season, self.store)
        self.store.update_team_cap_space(team_id, max(0, cap_space.available_cap_space))
        return cap_space

    def get_roster_cap_hits(self, team_id: int, season: Optional[int] = None) -> Dict[int, int]:
        """Season cap hit per rostered player with a contract."""
        season = season if season is not None else self.settings.season
        return {
            contract.player_id: self.calculator.calculate_cap_hit(contract, season).total_cap_hit
            for contract in self.store.get_active_contracts(team_id=team_id)
            if contract.has_year(season)
        }
