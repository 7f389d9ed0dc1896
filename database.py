"""
A durable string key-value store using SQLite.
"""

import json
import logging
from typing import Protocol

import aiosqlite

from exceptions import PersistenceError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """
    The opaque durable store the note store is built on.
    Setters report success with a bool.
    """

    async def get_string_list(self, key: str) -> list[str]: ...

    async def set_string_list(self, key: str, values: list[str]) -> bool: ...

    async def get_string(self, key: str) -> str | None: ...

    async def set_string(self, key: str, value: str) -> bool: ...


class SQLiteKeyValueStore:
    """
    A KeyValueStore backed by a single SQLite table.
    String lists are stored as a JSON array under their key.

    Open it once at process start and close it at shutdown, or use it
    as an async context manager.
    """

    def __init__(self, filename: str = "notes.db"):
        self.db_name = filename
        self._db: aiosqlite.Connection | None = None

    async def open(self):
        """
        Connects and creates the kv table if it does not exist.
        """
        if self._db is not None:
            return
        try:
            self._db = await aiosqlite.connect(self.db_name)
            await self._db.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            await self._db.commit()
        except aiosqlite.Error as e:
            logger.error("Could not open store %s: %s", self.db_name, e)
            raise PersistenceError(f"Could not open store {self.db_name}") from e
        logger.info("Opened store %s", self.db_name)

    async def close(self):
        if self._db is None:
            return
        try:
            await self._db.commit()
            await self._db.close()
        except aiosqlite.Error as e:
            raise PersistenceError(f"Could not close store {self.db_name}") from e
        finally:
            self._db = None
        logger.info("Closed store %s", self.db_name)

    async def __aenter__(self):
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    @property
    def is_open(self) -> bool:
        return self._db is not None

    def _connection(self) -> aiosqlite.Connection:
        if self._db is None:
            raise PersistenceError("Store is not open")
        return self._db

    async def _read(self, key: str) -> str | None:
        db = self._connection()
        try:
            async with db.execute("SELECT value FROM kv WHERE key = ?", (key,)) as cursor:
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            logger.error("Read of %r failed: %s", key, e)
            raise PersistenceError(f"Could not read {key!r}") from e
        return row[0] if row else None

    async def _write(self, key: str, value: str) -> bool:
        db = self._connection()
        try:
            await db.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            await db.commit()
        except aiosqlite.Error as e:
            logger.error("Write of %r failed: %s", key, e)
            raise PersistenceError(f"Could not write {key!r}") from e
        return True

    async def get_string_list(self, key: str) -> list[str]:
        raw = await self._read(key)
        if raw is None:
            return []
        try:
            values = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Value under {key!r} is not a string list") from e
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise PersistenceError(f"Value under {key!r} is not a string list")
        return values

    async def set_string_list(self, key: str, values: list[str]) -> bool:
        return await self._write(key, json.dumps(list(values)))

    async def get_string(self, key: str) -> str | None:
        return await self._read(key)

    async def set_string(self, key: str, value: str) -> bool:
        return await self._write(key, value)
