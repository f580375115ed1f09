"""Connection management shared by SQLite sinks."""

import asyncio
import sqlite3
import threading
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager

import aiosqlite

MEMORY_DB = ":memory:"


class AsyncConnectionManager:
    """Manages aiosqlite connections.

    For :memory: databases a single persistent connection is kept, since
    SQLite in-memory databases are connection-scoped.
    """

    def __init__(self, db_path: str, schema: str) -> None:
        self._db_path = db_path
        self._schema = schema
        self._initialized = False
        self._init_lock: asyncio.Lock | None = None
        self._persistent_conn: aiosqlite.Connection | None = None

    def _get_lock(self) -> asyncio.Lock:
        # Created lazily so the lock binds to the running loop
        if self._init_lock is None:
            self._init_lock = asyncio.Lock()
        return self._init_lock

    async def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        async with self._get_lock():
            if self._initialized:
                return
            if self._db_path == MEMORY_DB:
                self._persistent_conn = await aiosqlite.connect(MEMORY_DB)
                await self._persistent_conn.executescript(self._schema)
            else:
                async with aiosqlite.connect(self._db_path) as db:
                    await db.execute("PRAGMA journal_mode=WAL")
                    await db.executescript(self._schema)
            self._initialized = True

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield a connection; file-backed connections are closed afterwards."""
        await self._ensure_initialized()
        if self._db_path == MEMORY_DB:
            if self._persistent_conn is None:
                raise RuntimeError("Memory database connection not initialized")
            yield self._persistent_conn
            return
        db = await aiosqlite.connect(self._db_path)
        try:
            yield db
        finally:
            await db.close()

    async def close(self) -> None:
        """Close the persistent :memory: connection, if any."""
        if self._persistent_conn is not None:
            await self._persistent_conn.close()
            self._persistent_conn = None
            self._initialized = False


class SyncConnectionManager:
    """Manages sqlite3 connections for non-async callers.

    A :memory: database here is a separate instance from the one held by
    AsyncConnectionManager.
    """

    def __init__(self, db_path: str, schema: str) -> None:
        self._db_path = db_path
        self._schema = schema
        self._initialized = False
        self._lock = threading.Lock()
        self._persistent_conn: sqlite3.Connection | None = None

    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        with self._lock:
            if self._initialized:
                return
            if self._db_path == MEMORY_DB:
                self._persistent_conn = sqlite3.connect(MEMORY_DB)
                self._persistent_conn.executescript(self._schema)
            else:
                with sqlite3.connect(self._db_path) as db:
                    db.execute("PRAGMA journal_mode=WAL")
                    db.executescript(self._schema)
            self._initialized = True

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection; file-backed connections are closed afterwards."""
        self._ensure_initialized()
        if self._db_path == MEMORY_DB:
            if self._persistent_conn is None:
                raise RuntimeError("Sync memory database connection not initialized")
            yield self._persistent_conn
            return
        conn = sqlite3.connect(self._db_path)
        try:
            yield conn
        finally:
            conn.close()
