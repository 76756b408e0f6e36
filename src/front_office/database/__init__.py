"""
League storage.

Usage:
    from front_office.database import InMemoryLeagueStore, SQLiteLeagueStore

    store = SQLiteLeagueStore("data/league.db")
    with store.transaction():
        store.update_team_cap_space(1, 25_000_000)
"""

from .league_store import LeagueStore
from .memory_store import InMemoryLeagueStore
from .sqlite_store import SQLiteLeagueStore
from .transaction_context import TransactionContext, TransactionState

__all__ = [
    "LeagueStore",
    "InMemoryLeagueStore",
    "SQLiteLeagueStore",
    "TransactionContext",
    "TransactionState",
]
