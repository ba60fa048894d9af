# learn_circassian/adapters/persistence/sqlite_store.py
import asyncio
import os
import sqlite3
from pathlib import Path
from typing import List, Optional, Sequence

import aiosqlite
import structlog
from pydantic import ValidationError

from learn_circassian.core.domain.exceptions import DataIntegrityError, StoreUnavailableError
from learn_circassian.core.domain.models import Dictionary, WordRecord
from learn_circassian.core.ports.word_store import IWordStore

logger = structlog.get_logger()

_COUNT_SQL = "SELECT COUNT(*) AS total FROM words WHERE word LIKE ? ESCAPE '\\'"
_PAGE_SQL = "SELECT word FROM words WHERE word LIKE ? ESCAPE '\\' ORDER BY word LIMIT ? OFFSET ?"
_WORD_SQL = "SELECT word, entries FROM words WHERE word = ?"
_DICTIONARIES_SQL = "SELECT id, title, from_lang, to_lang FROM dictionaries WHERE id IN ({placeholders})"


class SqliteWordStore(IWordStore):
    """
    Read-only SQLite implementation of the word store.

    Owns a single aiosqlite connection, opened on the first query and kept
    until `close()`. The file is opened with `mode=ro`, so this process can
    never modify it.
    """

    def __init__(self, path: str):
        self._path = os.path.abspath(path)
        self._conn: Optional[aiosqlite.Connection] = None
        self._open_lock = asyncio.Lock()

    @property
    def path(self) -> str:
        return self._path

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def is_ready(self) -> bool:
        return os.path.exists(self._path)

    # --- Connection Lifecycle ---

    async def connection(self) -> aiosqlite.Connection:
        """Returns the shared connection, opening it on first use."""
        if self._conn is not None:
            return self._conn

        async with self._open_lock:
            # Another caller may have opened it while we waited
            if self._conn is None:
                self._conn = await self._open()
        return self._conn

    async def _open(self) -> aiosqlite.Connection:
        if not self.is_ready():
            logger.warning("store_open_failed", path=self._path, reason="missing")
            raise StoreUnavailableError(self._path)

        uri = f"{Path(self._path).as_uri()}?mode=ro"
        try:
            conn = await aiosqlite.connect(uri, uri=True)
        except sqlite3.Error as e:
            logger.error("store_open_failed", path=self._path, error=str(e))
            raise StoreUnavailableError(self._path, str(e)) from e

        conn.row_factory = aiosqlite.Row
        logger.info("store_opened", path=self._path)
        return conn

    async def close(self) -> None:
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        await conn.close()
        logger.info("store_closed", path=self._path)

    # --- Interface Implementation ---

    async def count_words(self, pattern: str) -> int:
        conn = await self.connection()
        async with conn.execute(_COUNT_SQL, (pattern,)) as cursor:
            row = await cursor.fetchone()
        return int(row["total"])

    async def find_words(self, pattern: str, limit: int, offset: int) -> List[str]:
        conn = await self.connection()
        async with conn.execute(_PAGE_SQL, (pattern, limit, offset)) as cursor:
            rows = await cursor.fetchall()
        return [row["word"] for row in rows]

    async def get_word(self, word: str) -> Optional[WordRecord]:
        conn = await self.connection()
        async with conn.execute(_WORD_SQL, (word,)) as cursor:
            row = await cursor.fetchone()

        if row is None:
            return None

        try:
            return WordRecord.model_validate(dict(row))
        except ValidationError as e:
            raise DataIntegrityError(word, f"unexpected row shape ({e.error_count()} errors)") from e

    async def get_dictionaries(self, ids: Sequence[int]) -> List[Dictionary]:
        if not ids:
            return []

        conn = await self.connection()
        sql = _DICTIONARIES_SQL.format(placeholders=", ".join("?" for _ in ids))
        async with conn.execute(sql, tuple(ids)) as cursor:
            rows = await cursor.fetchall()

        dictionaries = []
        for row in rows:
            try:
                dictionaries.append(Dictionary.model_validate(dict(row)))
            except ValidationError as e:
                raise DataIntegrityError(
                    f"dictionary:{row['id']}", f"unexpected row shape ({e.error_count()} errors)"
                ) from e
        return dictionaries

    async def health_check(self) -> bool:
        if not self.is_ready():
            return False
        conn = await self.connection()
        async with conn.execute("SELECT 1") as cursor:
            await cursor.fetchone()
        return True
