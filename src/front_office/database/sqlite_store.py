"""
SQLite League Store

LeagueStore backed by a single sqlite3 connection. The schema is created on
open. Contract years live in a child table; combine metrics, intangibles and
position ratings are stored as JSON text and re-validated through the model
``from_dict`` constructors when read back.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from front_office.exceptions import ConstraintError, NotFoundError
from front_office.models import (
    Contract,
    ContractOffer,
    ContractYear,
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
from .transaction_context import TransactionContext, TransactionMode


SCHEMA = '''
    CREATE TABLE IF NOT EXISTS teams (
        team_id INTEGER PRIMARY KEY,
        name TEXT NOT NULL,
        abbreviation TEXT NOT NULL DEFAULT '',
        current_cap_space INTEGER NOT NULL CHECK (current_cap_space >= 0),
        rollover_cap INTEGER NOT NULL DEFAULT 0
    );

    CREATE TABLE IF NOT EXISTS players (
        player_id INTEGER PRIMARY KEY,
        first_name TEXT NOT NULL DEFAULT '',
        last_name TEXT NOT NULL DEFAULT '',
        position TEXT NOT NULL,
        age INTEGER NOT NULL,
        overall_rating INTEGER NOT NULL,
        accrued_seasons INTEGER NOT NULL DEFAULT 0,
        current_team_id INTEGER,
        roster_status TEXT NOT NULL,
        work_ethic INTEGER NOT NULL DEFAULT 3,
        injury_risk INTEGER NOT NULL DEFAULT 3,
        position_ratings TEXT NOT NULL DEFAULT '{}',
        college TEXT,
        draft_year INTEGER,
        draft_round INTEGER,
        draft_pick INTEGER
    );
    CREATE INDEX IF NOT EXISTS idx_players_team ON players(current_team_id, position);
    CREATE INDEX IF NOT EXISTS idx_players_status ON players(roster_status, overall_rating);

    CREATE TABLE IF NOT EXISTS contracts (
        contract_id INTEGER PRIMARY KEY AUTOINCREMENT,
        player_id INTEGER NOT NULL,
        team_id INTEGER NOT NULL,
        total_years INTEGER NOT NULL,
        current_year INTEGER NOT NULL,
        years_remaining INTEGER NOT NULL,
        total_value INTEGER NOT NULL,
        signing_bonus_total INTEGER NOT NULL,
        signing_bonus_remaining INTEGER NOT NULL,
        guaranteed_money_remaining INTEGER NOT NULL,
        guaranteed_at_signing INTEGER NOT NULL,
        contract_type TEXT NOT NULL,
        is_active INTEGER NOT NULL,
        has_void_years INTEGER NOT NULL DEFAULT 0,
        void_year INTEGER,
        signed_date TEXT
    );
    CREATE UNIQUE INDEX IF NOT EXISTS idx_contracts_one_active
        ON contracts(player_id) WHERE is_active = 1;
    CREATE INDEX IF NOT EXISTS idx_contracts_team ON contracts(team_id, is_active);

    CREATE TABLE IF NOT EXISTS contract_years (
        contract_id INTEGER NOT NULL REFERENCES contracts(contract_id) ON DELETE CASCADE,
        year INTEGER NOT NULL,
        base_salary INTEGER NOT NULL,
        roster_bonus INTEGER NOT NULL DEFAULT 0,
        workout_bonus INTEGER NOT NULL DEFAULT 0,
        guarantees INTEGER NOT NULL DEFAULT 0,
        restructure_proration INTEGER NOT NULL DEFAULT 0,
        PRIMARY KEY (contract_id, year)
    );

    CREATE TABLE IF NOT EXISTS free_agent_offers (
        offer_id INTEGER PRIMARY KEY AUTOINCREMENT,
        player_id INTEGER NOT NULL,
        team_id INTEGER NOT NULL,
        years INTEGER NOT NULL,
        total_value INTEGER NOT NULL,
        guaranteed_money INTEGER NOT NULL,
        signing_bonus INTEGER NOT NULL,
        structure TEXT NOT NULL,
        status TEXT NOT NULL,
        negotiation_round INTEGER NOT NULL DEFAULT 1,
        is_user_offer INTEGER NOT NULL DEFAULT 0
    );
    CREATE INDEX IF NOT EXISTS idx_offers_player ON free_agent_offers(player_id, status);

    CREATE TABLE IF NOT EXISTS draft_picks (
        pick_id INTEGER PRIMARY KEY AUTOINCREMENT,
        draft_year INTEGER NOT NULL,
        round INTEGER NOT NULL,
        pick_number INTEGER NOT NULL,
        overall_pick INTEGER NOT NULL,
        original_team_id INTEGER NOT NULL,
        current_team_id INTEGER NOT NULL,
        is_used INTEGER NOT NULL DEFAULT 0,
        player_selected_id INTEGER,
        UNIQUE (draft_year, overall_pick)
    );

    CREATE TABLE IF NOT EXISTS draft_prospects (
        prospect_id INTEGER PRIMARY KEY,
        draft_year INTEGER NOT NULL,
        first_name TEXT NOT NULL,
        last_name TEXT NOT NULL,
        position TEXT NOT NULL,
        college TEXT NOT NULL DEFAULT '',
        height_inches INTEGER NOT NULL DEFAULT 0,
        weight INTEGER NOT NULL DEFAULT 0,
        age INTEGER NOT NULL,
        true_overall_rating INTEGER NOT NULL,
        scouted_overall_rating INTEGER NOT NULL,
        draft_grade TEXT NOT NULL,
        projected_round INTEGER NOT NULL,
        combine TEXT NOT NULL DEFAULT '{}',
        intangibles TEXT NOT NULL DEFAULT '{}',
        development_trait TEXT NOT NULL,
        nfl_comparison TEXT,
        is_drafted INTEGER NOT NULL DEFAULT 0,
        drafted_by_team_id INTEGER,
        drafted_round INTEGER,
        drafted_pick INTEGER,
        drafted_overall INTEGER
    );
    CREATE INDEX IF NOT EXISTS idx_prospects_available
        ON draft_prospects(draft_year, is_drafted, scouted_overall_rating);

    CREATE TABLE IF NOT EXISTS draft_selections (
        draft_year INTEGER NOT NULL,
        round INTEGER NOT NULL,
        pick_number INTEGER NOT NULL,
        overall_pick INTEGER NOT NULL,
        team_id INTEGER NOT NULL,
        prospect_id INTEGER NOT NULL,
        player_id INTEGER,
        time_on_clock INTEGER NOT NULL DEFAULT 300,
        PRIMARY KEY (draft_year, overall_pick)
    );

    CREATE TABLE IF NOT EXISTS draft_boards (
        team_id INTEGER NOT NULL,
        prospect_id INTEGER NOT NULL,
        rank INTEGER NOT NULL,
        is_need_position INTEGER NOT NULL DEFAULT 0,
        PRIMARY KEY (team_id, prospect_id)
    );

    CREATE TABLE IF NOT EXISTS transactions (
        transaction_id INTEGER PRIMARY KEY AUTOINCREMENT,
        transaction_type TEXT NOT NULL,
        team_id INTEGER,
        player_id INTEGER,
        details TEXT NOT NULL DEFAULT '{}',
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );
'''


class SQLiteLeagueStore(LeagueStore):
    """
    LeagueStore on a SQLite database file (or ``":memory:"``).

    The connection runs in autocommit mode; ``transaction()`` wraps writes in
    BEGIN IMMEDIATE ... COMMIT, nested blocks become savepoints.
    """

    def __init__(self, db_path: str = ":memory:", transaction_mode: TransactionMode = "IMMEDIATE"):
        self.db_path = db_path
        self.transaction_mode = transaction_mode
        self.logger = logging.getLogger(__name__)

        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        self.connection = sqlite3.connect(db_path, isolation_level=None)
        self.connection.row_factory = sqlite3.Row
        self.connection.execute("PRAGMA foreign_keys=ON")
        self.initialize_schema()

    def initialize_schema(self) -> None:
        self.connection.executescript(SCHEMA)
        self.logger.info(f"League store schema ready at {self.db_path}")

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> "SQLiteLeagueStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    def transaction(self) -> TransactionContext:
        return TransactionContext(self.connection, mode=self.transaction_mode)

    def _query(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        return self.connection.execute(sql, params).fetchall()

    def _query_one(self, sql: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        return self.connection.execute(sql, params).fetchone()

    # ========================================================================
    # ROW CONVERSION
    # ========================================================================

    @staticmethod
    def _row_to_player(row: sqlite3.Row) -> Player:
        data = dict(row)
        data["position_ratings"] = json.loads(data["position_ratings"] or "{}")
        return Player.from_dict(data)

    @staticmethod
    def _row_to_team(row: sqlite3.Row) -> Team:
        return Team.from_dict(dict(row))

    def _row_to_contract(self, row: sqlite3.Row) -> Contract:
        data = dict(row)
        data["annual_breakdown"] = [
            dict(year_row) for year_row in self._query(
                "SELECT * FROM contract_years WHERE contract_id = ? ORDER BY year",
                (data["contract_id"],),
            )
        ]
        return Contract.from_dict(data)

    @staticmethod
    def _row_to_offer(row: sqlite3.Row) -> FreeAgentOffer:
        data = dict(row)
        return FreeAgentOffer.from_dict({
            "offer_id": data["offer_id"],
            "player_id": data["player_id"],
            "team_id": data["team_id"],
            "offer": {
                "years": data["years"],
                "total_value": data["total_value"],
                "guaranteed_money": data["guaranteed_money"],
                "signing_bonus": data["signing_bonus"],
                "structure": data["structure"],
            },
            "status": data["status"],
            "negotiation_round": data["negotiation_round"],
            "is_user_offer": data["is_user_offer"],
        })

    @staticmethod
    def _row_to_pick(row: sqlite3.Row) -> DraftPick:
        data = dict(row)
        data["is_used"] = bool(data["is_used"])
        return DraftPick(**data)

    @staticmethod
    def _row_to_prospect(row: sqlite3.Row) -> DraftProspect:
        data = dict(row)
        data["combine"] = json.loads(data["combine"] or "{}")
        data["intangibles"] = json.loads(data["intangibles"] or "{}")
        return DraftProspect.from_dict(data)

    # ========================================================================
    # PLAYERS
    # ========================================================================

    _PLAYER_COLUMNS = (
        "first_name", "last_name", "position", "age", "overall_rating", "accrued_seasons",
        "current_team_id", "roster_status", "work_ethic", "injury_risk", "position_ratings",
        "college", "draft_year", "draft_round", "draft_pick",
    )

    def _player_values(self, player: Player) -> tuple:
        data = player.to_dict()
        data["position_ratings"] = json.dumps(data["position_ratings"], sort_keys=True)
        return tuple(data[column] for column in self._PLAYER_COLUMNS)

    def get_player(self, player_id: int) -> Player:
        row = self._query_one("SELECT * FROM players WHERE player_id = ?", (player_id,))
        if row is None:
            raise NotFoundError(f"Player {player_id} not found", {"player_id": player_id})
        return self._row_to_player(row)

    def get_players(
        self,
        team_id: Optional[int] = None,
        roster_status: Optional[RosterStatus] = None
    ) -> List[Player]:
        sql = "SELECT * FROM players WHERE 1 = 1"
        params: List[Any] = []
        if team_id is not None:
            sql += " AND current_team_id = ?"
            params.append(team_id)
        if roster_status is not None:
            sql += " AND roster_status = ?"
            params.append(roster_status.value)
        sql += " ORDER BY player_id"
        return [self._row_to_player(row) for row in self._query(sql, tuple(params))]

    def create_player(self, player: Player) -> Player:
        columns = ", ".join(self._PLAYER_COLUMNS)
        placeholders = ", ".join("?" for _ in self._PLAYER_COLUMNS)
        player_id = player.player_id if player.player_id > 0 else None
        try:
            cursor = self.connection.execute(
                f"INSERT INTO players (player_id, {columns}) VALUES (?, {placeholders})",
                (player_id,) + self._player_values(player),
            )
        except sqlite3.IntegrityError as e:
            raise ConstraintError(
                f"Player {player.player_id} already exists", {"player_id": player.player_id}
            ) from e
        return self.get_player(cursor.lastrowid)

    def update_player(self, player: Player) -> None:
        assignments = ", ".join(f"{column} = ?" for column in self._PLAYER_COLUMNS)
        cursor = self.connection.execute(
            f"UPDATE players SET {assignments} WHERE player_id = ?",
            self._player_values(player) + (player.player_id,),
        )
        if cursor.rowcount == 0:
            raise NotFoundError(f"Player {player.player_id} not found", {"player_id": player.player_id})

    def get_free_agents(self, min_rating: int = 0, limit: Optional[int] = None) -> List[Player]:
        sql = (
            "SELECT * FROM players WHERE roster_status = ? AND overall_rating >= ? "
            "ORDER BY overall_rating DESC, player_id"
        )
        params: tuple = (RosterStatus.FREE_AGENT.value, min_rating)
        if limit is not None:
            sql += " LIMIT ?"
            params += (limit,)
        return [self._row_to_player(row) for row in self._query(sql, params)]

    def get_position_summary(self, team_id: int, position: str) -> PositionSummary:
        row = self._query_one(
            "SELECT COUNT(*) AS count, AVG(overall_rating) AS avg_rating FROM players "
            "WHERE current_team_id = ? AND position = ? AND roster_status = ?",
            (team_id, position, RosterStatus.ACTIVE.value),
        )
        return PositionSummary(count=row["count"], avg_rating=row["avg_rating"])

    # ========================================================================
    # TEAMS
    # ========================================================================

    def get_team(self, team_id: int) -> Team:
        row = self._query_one("SELECT * FROM teams WHERE team_id = ?", (team_id,))
        if row is None:
            raise NotFoundError(f"Team {team_id} not found", {"team_id": team_id})
        return self._row_to_team(row)

    def get_teams(self) -> List[Team]:
        return [self._row_to_team(row) for row in self._query("SELECT * FROM teams ORDER BY team_id")]

    def create_team(self, team: Team) -> Team:
        try:
            self.connection.execute(
                "INSERT INTO teams (team_id, name, abbreviation, current_cap_space, rollover_cap) "
                "VALUES (?, ?, ?, ?, ?)",
                (team.team_id, team.name, team.abbreviation, team.current_cap_space, team.rollover_cap),
            )
        except sqlite3.IntegrityError as e:
            raise ConstraintError(f"Team {team.team_id} already exists", {"team_id": team.team_id}) from e
        return team

    def update_team_cap_space(self, team_id: int, cap_space: int) -> None:
        if cap_space < 0:
            raise ConstraintError(
                f"Team {team_id} cap space cannot go negative",
                {"team_id": team_id, "cap_space": cap_space},
            )
        cursor = self.connection.execute(
            "UPDATE teams SET current_cap_space = ? WHERE team_id = ?", (cap_space, team_id)
        )
        if cursor.rowcount == 0:
            raise NotFoundError(f"Team {team_id} not found", {"team_id": team_id})

    # ========================================================================
    # CONTRACTS
    # ========================================================================

    _CONTRACT_COLUMNS = (
        "player_id", "team_id", "total_years", "current_year", "years_remaining", "total_value",
        "signing_bonus_total", "signing_bonus_remaining", "guaranteed_money_remaining",
        "guaranteed_at_signing", "contract_type", "is_active", "has_void_years", "void_year",
        "signed_date",
    )

    def _contract_values(self, contract: Contract) -> tuple:
        data = contract.to_dict()
        data["is_active"] = int(data["is_active"])
        data["has_void_years"] = int(data["has_void_years"])
        return tuple(data[column] for column in self._CONTRACT_COLUMNS)

    def _insert_contract_years(self, contract_id: int, years: List[ContractYear]) -> None:
        self.connection.executemany(
            "INSERT INTO contract_years (contract_id, year, base_salary, roster_bonus, workout_bonus, "
            "guarantees, restructure_proration) VALUES (?, ?, ?, ?, ?, ?, ?)",
            [
                (contract_id, y.year, y.base_salary, y.roster_bonus, y.workout_bonus,
                 y.guarantees, y.restructure_proration)
                for y in years
            ],
        )

    def get_active_contracts(self, team_id: Optional[int] = None) -> List[Contract]:
        if team_id is None:
            rows = self._query("SELECT * FROM contracts WHERE is_active = 1 ORDER BY contract_id")
        else:
            rows = self._query(
                "SELECT * FROM contracts WHERE is_active = 1 AND team_id = ? ORDER BY contract_id",
                (team_id,),
            )
        return [self._row_to_contract(row) for row in rows]

    def get_active_contract(self, player_id: int) -> Optional[Contract]:
        row = self._query_one("SELECT * FROM contracts WHERE is_active = 1 AND player_id = ?", (player_id,))
        return self._row_to_contract(row) if row is not None else None

    def get_contract(self, contract_id: int) -> Contract:
        row = self._query_one("SELECT * FROM contracts WHERE contract_id = ?", (contract_id,))
        if row is None:
            raise NotFoundError(f"Contract {contract_id} not found", {"contract_id": contract_id})
        return self._row_to_contract(row)

    def create_contract(self, contract: Contract) -> Contract:
        columns = ", ".join(self._CONTRACT_COLUMNS)
        placeholders = ", ".join("?" for _ in self._CONTRACT_COLUMNS)
        with self.transaction():
            try:
                cursor = self.connection.execute(
                    f"INSERT INTO contracts ({columns}) VALUES ({placeholders})",
                    self._contract_values(contract),
                )
            except sqlite3.IntegrityError as e:
                raise ConstraintError(
                    f"Player {contract.player_id} already has an active contract",
                    {"player_id": contract.player_id},
                ) from e
            self._insert_contract_years(cursor.lastrowid, contract.annual_breakdown)
        return self.get_contract(cursor.lastrowid)

    def update_contract(self, contract: Contract) -> None:
        assignments = ", ".join(f"{column} = ?" for column in self._CONTRACT_COLUMNS)
        with self.transaction():
            cursor = self.connection.execute(
                f"UPDATE contracts SET {assignments} WHERE contract_id = ?",
                self._contract_values(contract) + (contract.contract_id,),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(
                    f"Contract {contract.contract_id} not found", {"contract_id": contract.contract_id}
                )
            self.connection.execute("DELETE FROM contract_years WHERE contract_id = ?", (contract.contract_id,))
            self._insert_contract_years(contract.contract_id, contract.annual_breakdown)

    # ========================================================================
    # FREE AGENT OFFERS
    # ========================================================================

    @staticmethod
    def _offer_values(offer: FreeAgentOffer) -> tuple:
        terms: ContractOffer = offer.offer
        return (
            offer.player_id, offer.team_id, terms.years, terms.total_value, terms.guaranteed_money,
            terms.signing_bonus, terms.structure.value, offer.status.value, offer.negotiation_round,
            int(offer.is_user_offer),
        )

    def create_offer(self, offer: FreeAgentOffer) -> FreeAgentOffer:
        cursor = self.connection.execute(
            "INSERT INTO free_agent_offers (player_id, team_id, years, total_value, guaranteed_money, "
            "signing_bonus, structure, status, negotiation_round, is_user_offer) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            self._offer_values(offer),
        )
        row = self._query_one("SELECT * FROM free_agent_offers WHERE offer_id = ?", (cursor.lastrowid,))
        return self._row_to_offer(row)

    def update_offer(self, offer: FreeAgentOffer) -> None:
        cursor = self.connection.execute(
            "UPDATE free_agent_offers SET player_id = ?, team_id = ?, years = ?, total_value = ?, "
            "guaranteed_money = ?, signing_bonus = ?, structure = ?, status = ?, negotiation_round = ?, "
            "is_user_offer = ? WHERE offer_id = ?",
            self._offer_values(offer) + (offer.offer_id,),
        )
        if cursor.rowcount == 0:
            raise NotFoundError(f"Offer {offer.offer_id} not found", {"offer_id": offer.offer_id})

    def get_offers(
        self,
        player_id: Optional[int] = None,
        team_id: Optional[int] = None,
        status: Optional[OfferStatus] = None
    ) -> List[FreeAgentOffer]:
        sql = "SELECT * FROM free_agent_offers WHERE 1 = 1"
        params: List[Any] = []
        if player_id is not None:
            sql += " AND player_id = ?"
            params.append(player_id)
        if team_id is not None:
            sql += " AND team_id = ?"
            params.append(team_id)
        if status is not None:
            sql += " AND status = ?"
            params.append(status.value)
        sql += " ORDER BY offer_id"
        return [self._row_to_offer(row) for row in self._query(sql, tuple(params))]

    # ========================================================================
    # DRAFT
    # ========================================================================

    def create_draft_pick(self, pick: DraftPick) -> DraftPick:
        try:
            cursor = self.connection.execute(
                "INSERT INTO draft_picks (draft_year, round, pick_number, overall_pick, original_team_id, "
                "current_team_id, is_used, player_selected_id) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (pick.draft_year, pick.round, pick.pick_number, pick.overall_pick, pick.original_team_id,
                 pick.current_team_id, int(pick.is_used), pick.player_selected_id),
            )
        except sqlite3.IntegrityError as e:
            raise ConstraintError(
                f"Pick {pick.overall_pick} of the {pick.draft_year} draft already exists",
                {"draft_year": pick.draft_year, "overall_pick": pick.overall_pick},
            ) from e
        row = self._query_one("SELECT * FROM draft_picks WHERE pick_id = ?", (cursor.lastrowid,))
        return self._row_to_pick(row)

    def get_draft_picks(self, draft_year: int, unused_only: bool = False) -> List[DraftPick]:
        sql = "SELECT * FROM draft_picks WHERE draft_year = ?"
        if unused_only:
            sql += " AND is_used = 0"
        sql += " ORDER BY overall_pick"
        return [self._row_to_pick(row) for row in self._query(sql, (draft_year,))]

    def update_draft_pick(self, pick: DraftPick) -> None:
        cursor = self.connection.execute(
            "UPDATE draft_picks SET current_team_id = ?, is_used = ?, player_selected_id = ? WHERE pick_id = ?",
            (pick.current_team_id, int(pick.is_used), pick.player_selected_id, pick.pick_id),
        )
        if cursor.rowcount == 0:
            raise NotFoundError(f"Draft pick {pick.pick_id} not found", {"pick_id": pick.pick_id})

    _PROSPECT_COLUMNS = (
        "prospect_id", "draft_year", "first_name", "last_name", "position", "college",
        "height_inches", "weight", "age", "true_overall_rating", "scouted_overall_rating",
        "draft_grade", "projected_round", "combine", "intangibles", "development_trait",
        "nfl_comparison", "is_drafted", "drafted_by_team_id", "drafted_round", "drafted_pick",
        "drafted_overall",
    )

    def _prospect_values(self, prospect: DraftProspect) -> tuple:
        data = prospect.to_dict()
        data["combine"] = json.dumps(data["combine"])
        data["intangibles"] = json.dumps(data["intangibles"])
        data["is_drafted"] = int(data["is_drafted"])
        return tuple(data[column] for column in self._PROSPECT_COLUMNS)

    def add_prospects(self, prospects: List[DraftProspect]) -> None:
        columns = ", ".join(self._PROSPECT_COLUMNS)
        placeholders = ", ".join("?" for _ in self._PROSPECT_COLUMNS)
        with self.transaction():
            try:
                self.connection.executemany(
                    f"INSERT INTO draft_prospects ({columns}) VALUES ({placeholders})",
                    [self._prospect_values(prospect) for prospect in prospects],
                )
            except sqlite3.IntegrityError as e:
                raise ConstraintError("Draft class contains an existing prospect id") from e
        self.logger.info(f"Stored {len(prospects)} draft prospects")

    def get_prospect(self, prospect_id: int) -> DraftProspect:
        row = self._query_one("SELECT * FROM draft_prospects WHERE prospect_id = ?", (prospect_id,))
        if row is None:
            raise NotFoundError(f"Prospect {prospect_id} not found", {"prospect_id": prospect_id})
        return self._row_to_prospect(row)

    def get_available_prospects(self, draft_year: int, limit: Optional[int] = None) -> List[DraftProspect]:
        sql = (
            "SELECT * FROM draft_prospects WHERE draft_year = ? AND is_drafted = 0 "
            "ORDER BY scouted_overall_rating DESC, prospect_id"
        )
        params: tuple = (draft_year,)
        if limit is not None:
            sql += " LIMIT ?"
            params += (limit,)
        return [self._row_to_prospect(row) for row in self._query(sql, params)]

    def update_prospect(self, prospect: DraftProspect) -> None:
        columns = self._PROSPECT_COLUMNS[1:]
        assignments = ", ".join(f"{column} = ?" for column in columns)
        cursor = self.connection.execute(
            f"UPDATE draft_prospects SET {assignments} WHERE prospect_id = ?",
            self._prospect_values(prospect)[1:] + (prospect.prospect_id,),
        )
        if cursor.rowcount == 0:
            raise NotFoundError(f"Prospect {prospect.prospect_id} not found", {"prospect_id": prospect.prospect_id})

    def record_selection(self, selection: DraftSelection) -> None:
        self.connection.execute(
            "INSERT INTO draft_selections (draft_year, round, pick_number, overall_pick, team_id, "
            "prospect_id, player_id, time_on_clock) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (selection.draft_year, selection.round, selection.pick_number, selection.overall_pick,
             selection.team_id, selection.prospect_id, selection.player_id, selection.time_on_clock),
        )

    def get_selections(self, draft_year: int) -> List[DraftSelection]:
        rows = self._query(
            "SELECT * FROM draft_selections WHERE draft_year = ? ORDER BY overall_pick", (draft_year,)
        )
        return [DraftSelection(**dict(row)) for row in rows]

    def save_draft_board(self, team_id: int, entries: List[DraftBoardEntry]) -> None:
        with self.transaction():
            self.connection.execute("DELETE FROM draft_boards WHERE team_id = ?", (team_id,))
            self.connection.executemany(
                "INSERT INTO draft_boards (team_id, prospect_id, rank, is_need_position) VALUES (?, ?, ?, ?)",
                [(team_id, e.prospect_id, e.rank, int(e.is_need_position)) for e in entries],
            )

    def get_draft_board(self, team_id: int) -> List[DraftBoardEntry]:
        rows = self._query("SELECT * FROM draft_boards WHERE team_id = ? ORDER BY rank", (team_id,))
        return [
            DraftBoardEntry(
                team_id=row["team_id"],
                prospect_id=row["prospect_id"],
                rank=row["rank"],
                is_need_position=bool(row["is_need_position"]),
            )
            for row in rows
        ]

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
        self.connection.execute(
            "INSERT INTO transactions (transaction_type, team_id, player_id, details) VALUES (?, ?, ?, ?)",
            (transaction_type, team_id, player_id, json.dumps(details or {}, sort_keys=True)),
        )

    def get_transactions(self, team_id: Optional[int] = None) -> List[Dict[str, Any]]:
        if team_id is None:
            rows = self._query("SELECT * FROM transactions ORDER BY transaction_id")
        else:
            rows = self._query(
                "SELECT * FROM transactions WHERE team_id = ? ORDER BY transaction_id", (team_id,)
            )
        return [
            {
                "transaction_type": row["transaction_type"],
                "team_id": row["team_id"],
                "player_id": row["player_id"],
                "details": json.loads(row["details"]),
            }
            for row in rows
        ]
