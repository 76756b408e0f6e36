"""
Transaction Context

Atomic multi-statement writes for the SQLite league store.

Usage:
    with TransactionContext(conn, mode="IMMEDIATE"):
        conn.execute("INSERT INTO contracts ...")
        conn.execute("UPDATE teams SET current_cap_space = ? ...")
        # COMMIT on success, ROLLBACK on exception

    Entering a context while a transaction is already open creates a
    SAVEPOINT instead, so service calls compose:

    with TransactionContext(conn):
        with TransactionContext(conn):   # SAVEPOINT fo_savepoint_1
            ...
"""

import itertools
import logging
import sqlite3
from enum import Enum
from typing import Literal, Optional


class TransactionState(Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


TransactionMode = Literal["DEFERRED", "IMMEDIATE", "EXCLUSIVE"]
BEGIN_MODES = ("DEFERRED", "IMMEDIATE", "EXCLUSIVE")


class TransactionContext:
    """
    Context manager for one atomic unit of league writes.

    The connection must be in autocommit mode (``isolation_level=None``) so
    BEGIN/COMMIT are issued only here.

    Attributes:
        connection: SQLite connection
        mode: BEGIN mode for top-level transactions
        state: Current TransactionState
        savepoint_name: Savepoint used when nested, else None
    """

    _savepoint_ids = itertools.count(1)

    def __init__(self, connection: sqlite3.Connection, mode: TransactionMode = "DEFERRED"):
        if not isinstance(connection, sqlite3.Connection):
            raise TypeError(f"TransactionContext needs a sqlite3.Connection, not {type(connection).__name__}")
        if mode not in BEGIN_MODES:
            raise ValueError(f"Unknown BEGIN mode {mode!r}; expected one of {', '.join(BEGIN_MODES)}")

        self.connection = connection
        self.mode = mode
        self.state = TransactionState.INACTIVE
        self.savepoint_name: Optional[str] = None
        self.logger = logging.getLogger(__name__)

    @property
    def is_nested(self) -> bool:
        return self.savepoint_name is not None

    def _require_active(self, action: str) -> None:
        if self.state is not TransactionState.ACTIVE:
            raise RuntimeError(f"Cannot {action} a {self.state.value} transaction")

    def __enter__(self) -> "TransactionContext":
        if self.connection.in_transaction:
            self.savepoint_name = f"fo_savepoint_{next(self._savepoint_ids)}"
            statement = f"SAVEPOINT {self.savepoint_name}"
        else:
            statement = f"BEGIN {self.mode}"

        try:
            self.connection.execute(statement)
        except sqlite3.OperationalError as e:
            self.logger.error(f"{statement} failed: {e}")
            raise

        self.logger.debug(statement)
        self.state = TransactionState.ACTIVE
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        # Already finished by an explicit commit() or rollback()
        if self.state is not TransactionState.ACTIVE:
            return False

        if exc_type is None:
            self.commit()
        else:
            self.logger.warning(f"Discarding league writes after {exc_type.__name__}: {exc_val}")
            self.rollback()
        return False

    def commit(self) -> None:
        """Make the writes permanent (or fold them into the outer transaction)."""
        self._require_active("commit")

        self.connection.execute(f"RELEASE {self.savepoint_name}" if self.is_nested else "COMMIT")
        self.state = TransactionState.COMMITTED

    def rollback(self) -> None:
        """Discard every write made inside this context."""
        self._require_active("roll back")

        if self.is_nested:
            # ROLLBACK TO leaves the savepoint on the stack
            self.connection.execute(f"ROLLBACK TO {self.savepoint_name}")
            self.connection.execute(f"RELEASE {self.savepoint_name}")
        else:
            self.connection.execute("ROLLBACK")
        self.state = TransactionState.ROLLED_BACK

    def __repr__(self) -> str:
        savepoint = f", savepoint={self.savepoint_name}" if self.is_nested else ""
        return f"TransactionContext(mode={self.mode}, state={self.state.value}{savepoint})"
