"""
SQLite database gateway and simple migration system.

``Database`` is built from an explicit ``Settings`` object and hands out
short-lived ``DbSession`` objects, one connection each, through the
``session()`` and ``transaction()`` context managers.  Sessions run
parameterized statements and return rows, scalars, row counts or new
row ids; they never interpret results.  Every ``sqlite3`` failure is
re-raised as ``StoreError`` (``ConstraintViolationError`` for integrity
failures) so callers do not depend on the driver's exception types.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional, Sequence

from .config import Settings
from .exceptions import ConstraintViolationError, StoreError


logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: base schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS Client (
            IdClient INTEGER PRIMARY KEY AUTOINCREMENT,
            FirstName TEXT NOT NULL,
            LastName TEXT NOT NULL,
            Email TEXT NOT NULL,
            Telephone TEXT,
            Pesel TEXT
        );

        CREATE TABLE IF NOT EXISTS Trip (
            IdTrip INTEGER PRIMARY KEY AUTOINCREMENT,
            Name TEXT NOT NULL,
            Description TEXT,
            DateFrom TEXT NOT NULL,
            DateTo TEXT NOT NULL,
            MaxPeople INTEGER NOT NULL CHECK (MaxPeople > 0)
        );

        CREATE TABLE IF NOT EXISTS Country (
            IdCountry INTEGER PRIMARY KEY AUTOINCREMENT,
            Name TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS Country_Trip (
            IdCountry INTEGER NOT NULL,
            IdTrip INTEGER NOT NULL,
            PRIMARY KEY (IdCountry, IdTrip),
            FOREIGN KEY(IdCountry) REFERENCES Country(IdCountry),
            FOREIGN KEY(IdTrip) REFERENCES Trip(IdTrip)
        );

        -- RegisteredAt and PaymentDate hold YYYYMMDD integers.
        CREATE TABLE IF NOT EXISTS Client_Trip (
            IdClient INTEGER NOT NULL,
            IdTrip INTEGER NOT NULL,
            RegisteredAt INTEGER NOT NULL,
            PaymentDate INTEGER,
            PRIMARY KEY (IdClient, IdTrip),
            FOREIGN KEY(IdClient) REFERENCES Client(IdClient),
            FOREIGN KEY(IdTrip) REFERENCES Trip(IdTrip)
        );
        """,
    ),
    # Migration 2: capacity enforcement and lookup index
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_client_trip_trip_id ON Client_Trip(IdTrip);

        -- Refuse any enrollment that would take a trip over MaxPeople.
        CREATE TRIGGER IF NOT EXISTS trg_client_trip_capacity
        BEFORE INSERT ON Client_Trip
        WHEN (SELECT COUNT(*) FROM Client_Trip WHERE IdTrip = NEW.IdTrip)
             >= (SELECT MaxPeople FROM Trip WHERE IdTrip = NEW.IdTrip)
        BEGIN
            SELECT RAISE(ABORT, 'trip capacity exceeded');
        END;
        """,
    ),
]


@contextmanager
def _translate_errors() -> Iterator[None]:
    try:
        yield
    except sqlite3.IntegrityError as exc:
        raise ConstraintViolationError(str(exc)) from exc
    except sqlite3.Error as exc:
        logger.error("Database error: %s", exc)
        raise StoreError(str(exc)) from exc


class DbSession:
    """Thin wrapper over one open connection.

    Instances are only obtained from ``Database.session()`` or
    ``Database.transaction()``; they must not outlive the ``with`` block.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        with _translate_errors():
            return self._conn.execute(sql, tuple(params)).fetchall()

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        with _translate_errors():
            return self._conn.execute(sql, tuple(params)).fetchone()

    def scalar(self, sql: str, params: Sequence[Any] = ()) -> Any:
        """Return the first column of the first row, or ``None`` if there is no row."""
        row = self.fetch_one(sql, params)
        return row[0] if row is not None else None

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a write statement and return the number of affected rows."""
        with _translate_errors():
            return self._conn.execute(sql, tuple(params)).rowcount

    def insert(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run an INSERT and return the id of the new row."""
        with _translate_errors():
            return self._conn.execute(sql, tuple(params)).lastrowid


class Database:
    """Connection factory and unit-of-work provider for the SQLite store."""

    def __init__(self, settings: Settings) -> None:
        self.path = self._resolve_path(settings.database_url)
        self.timeout = settings.database_timeout

    @staticmethod
    def _resolve_path(db_url: str) -> str:
        """Compute the path to the SQLite database file.

        Absolute paths are used directly; relative ones are resolved
        against the current working directory, never the installed
        package.  ``:memory:`` is refused because every session opens
        its own connection and would see an empty database.
        """
        if db_url.startswith("sqlite:///"):
            db_url = db_url[len("sqlite:///"):]
        if db_url == ":memory:":
            raise ValueError("In-memory SQLite databases are not supported; use a file path")
        if os.path.isabs(db_url):
            return db_url
        return str(Path(db_url).resolve())

    def connect(self) -> sqlite3.Connection:
        """Open a new connection in autocommit mode.

        Transactions are opened explicitly by ``session()`` and
        ``transaction()``.  Rows are returned as ``sqlite3.Row`` objects
        so columns can be read by name.
        """
        with _translate_errors():
            conn = sqlite3.connect(self.path, timeout=self.timeout, isolation_level=None)
            conn.row_factory = sqlite3.Row
            # Foreign keys are off by default in SQLite and must be enabled per connection.
            conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def _unit_of_work(self, begin: str) -> Iterator[DbSession]:
        conn = self.connect()
        try:
            with _translate_errors():
                conn.execute(begin)
            try:
                yield DbSession(conn)
            except BaseException:
                conn.rollback()
                raise
            with _translate_errors():
                conn.commit()
        finally:
            conn.close()

    @contextmanager
    def session(self) -> Iterator[DbSession]:
        """Yield a session inside a deferred transaction.

        The transaction is committed when the block exits normally and
        rolled back on any exception.  The connection is always closed.
        """
        with self._unit_of_work("BEGIN") as session:
            yield session

    @contextmanager
    def transaction(self) -> Iterator[DbSession]:
        """Yield a session inside a ``BEGIN IMMEDIATE`` transaction.

        SQLite grants the write lock before the first statement runs, so
        concurrent ``transaction()`` blocks are serialized and any count
        read inside one cannot be made stale by another writer before
        the block commits.
        """
        with self._unit_of_work("BEGIN IMMEDIATE") as session:
            yield session

    def init_db(self) -> None:
        """Create the database file if needed and apply pending migrations."""
        conn = self.connect()
        try:
            with _translate_errors():
                conn.execute(
                    "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
                )
                row = conn.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
                current_version = row["version"] if row and row["version"] is not None else 0

                for version, sql in MIGRATIONS:
                    if version > current_version:
                        logger.info("Applying database migration %s to %s", version, self.path)
                        conn.executescript(sql)
                        conn.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                        current_version = version
        finally:
            conn.close()
