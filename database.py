"""
SQLite persistence layer for the data receiver.

Provides the single-table store behind the HTTP API. The store owns schema
creation and translates native sqlite3 errors into DuplicateId / StorageFailure
so nothing above it inspects raw driver errors.

Usage:
    # Standalone: create the table (if needed) and report its size
    python database.py

    # Programmatic
    from database import RecordStore
    store = RecordStore()
    store.initialize()
    store.insert(Record(id="abc", origin="web-app", mime_data="hello"))
"""

import os
import sqlite3
import sys
import threading
from pathlib import Path

sys.path.append(str(Path(__file__).parent))

from api.config import settings
from models import RECORD_COLUMNS, Record, RecordFilter, build_predicates
from utils import log

logger = log.setup_verbose_logging("receiver.store")


# ---------------------------------------------------------------------------
# Schema DDL
# ---------------------------------------------------------------------------

SCHEMA_SQL = f"""
CREATE TABLE IF NOT EXISTS {settings.TABLE_NAME} (
    id          TEXT UNIQUE,
    origin      TEXT,
    mime_data   TEXT,
    datetime    TEXT
);
"""


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class StoreError(Exception):
    """Base class for store failures surfaced to the API layer."""


class DuplicateId(StoreError):
    """A record with the same id already exists."""

    def __init__(self, record_id: str):
        super().__init__(f"Data with ID '{record_id}' already exists")
        self.record_id = record_id


class StorageFailure(StoreError):
    """Any other open/read/write/close failure of the underlying database."""


def _is_unique_violation(exc: sqlite3.Error) -> bool:
    return isinstance(exc, sqlite3.IntegrityError) and "UNIQUE constraint failed" in str(exc)


class RecordStore:
    """SQLite store for received records, shared by all request handlers."""

    def __init__(self, db_path: str = None):
        self.db_path = db_path or settings.DB_PATH
        self.conn = None
        # One connection is shared across worker threads; execute/commit/rollback
        # sequences must not interleave on it.
        self._lock = threading.RLock()

    @property
    def is_ready(self) -> bool:
        return self.conn is not None

    def initialize(self) -> None:
        """
        Open (creating if absent) the database file and ensure the table exists.

        Safe to call repeatedly. On failure the error is logged and the store is
        left without a connection; later operations raise StorageFailure.
        """
        with self._lock:
            if self.conn is not None:
                self._create_schema()
                return

            try:
                parent = os.path.dirname(self.db_path)
                if parent:
                    os.makedirs(parent, exist_ok=True)
                self.conn = sqlite3.connect(
                    self.db_path,
                    check_same_thread=False,
                    timeout=settings.DB_TIMEOUT,
                )
                self.conn.row_factory = sqlite3.Row
            except (sqlite3.Error, OSError) as e:
                logger.error(f"Error opening database {self.db_path}: {e}")
                self.conn = None
                return

            logger.info(f"Connected to the SQLite database: {self.db_path}")
            self._create_schema()

    def _create_schema(self):
        try:
            self.conn.executescript(SCHEMA_SQL)
            self.conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error creating table: {e}")
            self.shutdown()
            return
        logger.info(f'Table "{settings.TABLE_NAME}" created or already exists.')

    def _require_conn(self) -> sqlite3.Connection:
        if self.conn is None:
            raise StorageFailure(f"Database is not open: {self.db_path}")
        return self.conn

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def insert(self, record: Record) -> Record:
        """
        Persist a new record. Raises DuplicateId if the id is taken.

        Failures are not logged here; the caller reports the outcome.
        """
        sql = f"""
            INSERT INTO {settings.TABLE_NAME}
                ({", ".join(RECORD_COLUMNS)})
            VALUES (?, ?, ?, ?)
        """
        with self._lock:
            conn = self._require_conn()
            try:
                conn.execute(sql, record.as_row())
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                if _is_unique_violation(e):
                    raise DuplicateId(record.id) from e
                raise StorageFailure(str(e)) from e
        return record

    def query(self, filters: RecordFilter = None) -> list[Record]:
        """
        Return all records matching the filters (AND-combined).

        No ORDER BY is applied; callers must not rely on row order.
        """
        where, params = build_predicates(filters or RecordFilter())
        sql = f"SELECT {', '.join(RECORD_COLUMNS)} FROM {settings.TABLE_NAME}" + where
        with self._lock:
            conn = self._require_conn()
            try:
                rows = conn.execute(sql, params).fetchall()
            except sqlite3.Error as e:
                logger.error(f"Error fetching data: {e}")
                raise StorageFailure(str(e)) from e
        return [Record(**dict(r)) for r in rows]

    def count(self) -> int:
        with self._lock:
            conn = self._require_conn()
            try:
                return conn.execute(f"SELECT COUNT(*) FROM {settings.TABLE_NAME}").fetchone()[0]
            except sqlite3.Error as e:
                logger.error(f"Error counting rows: {e}")
                raise StorageFailure(str(e)) from e

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def shutdown(self) -> None:
        """Close the connection. Close errors are logged, never raised."""
        with self._lock:
            if self.conn is None:
                return
            try:
                self.conn.close()
            except sqlite3.Error as e:
                logger.error(f"Error closing database: {e}")
            else:
                logger.info("Database connection closed.")
            finally:
                self.conn = None


if __name__ == "__main__":
    store = RecordStore()
    store.initialize()
    if store.is_ready:
        log.ok(f"{store.db_path}: {store.count()} rows in {settings.TABLE_NAME}")
    else:
        log.err(f"Could not open {store.db_path}")
    store.shutdown()
