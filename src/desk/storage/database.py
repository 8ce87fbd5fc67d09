"""Async SQLite key/value store for locally persisted settings.

Holds records written by the administrative surface (such as the payment
configuration) as JSON text. The dashboard core only reads them.
"""

import json
import os
import time
from typing import Self

import aiosqlite

from desk.logging import get_logger

logger = get_logger(__name__)

SCHEMA_VERSION = 1

_CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY
);

CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at INTEGER NOT NULL
);
"""


class SettingsDatabase:
    """Async SQLite connection manager for keyed JSON records.

    Usage:
        async with SettingsDatabase("data/settings.db") as db:
            record = await db.get_record("adminBuySettings")
    """

    def __init__(self, db_path: str = "data/settings.db") -> None:
        self._db_path = db_path
        self._connection: aiosqlite.Connection | None = None

    @property
    def db(self) -> aiosqlite.Connection:
        """Access the raw aiosqlite connection.

        Raises RuntimeError if not connected.
        """
        if self._connection is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._connection

    async def connect(self) -> None:
        """Open the connection, configure pragmas, and create the schema."""
        db_dir = os.path.dirname(self._db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        self._connection = await aiosqlite.connect(self._db_path)
        await self._connection.execute("PRAGMA journal_mode=WAL")
        await self._connection.execute("PRAGMA synchronous=NORMAL")

        await self._connection.executescript(_CREATE_TABLES_SQL)
        cursor = await self._connection.execute("SELECT version FROM schema_version LIMIT 1")
        if await cursor.fetchone() is None:
            await self._connection.execute(
                "INSERT INTO schema_version (version) VALUES (?)",
                (SCHEMA_VERSION,),
            )
        await self._connection.commit()

        logger.info("settings_db_connected", db_path=self._db_path)

    async def close(self) -> None:
        """Close the database connection if open."""
        if self._connection is not None:
            await self._connection.close()
            self._connection = None
            logger.info("settings_db_closed", db_path=self._db_path)

    async def get_record(self, key: str) -> dict | None:
        """Return the decoded record stored under key, or None if absent.

        Raises:
            ValueError: the stored value is not a JSON object.
        """
        cursor = await self.db.execute("SELECT value FROM settings WHERE key = ?", (key,))
        row = await cursor.fetchone()
        if row is None:
            return None
        record = json.loads(row[0])
        if not isinstance(record, dict):
            raise ValueError(f"Settings record {key!r} is not an object")
        return record

    async def put_record(self, key: str, record: dict) -> None:
        """Insert or replace the record stored under key."""
        await self.db.execute(
            "INSERT OR REPLACE INTO settings (key, value, updated_at) VALUES (?, ?, ?)",
            (key, json.dumps(record), int(time.time())),
        )
        await self.db.commit()
        logger.debug("settings_record_saved", key=key)

    async def __aenter__(self) -> Self:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore[no-untyped-def]
        await self.close()
