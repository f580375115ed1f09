"""SQLite emission sink used as a durable outbox for Graphite batches."""

from graphitecodec.adapters.storage.sqlite_base import (
    AsyncConnectionManager,
    SyncConnectionManager,
)
from graphitecodec.core.models import EmittedBatch, Event

_BATCHES_SCHEMA = """
CREATE TABLE IF NOT EXISTS batches (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp REAL NOT NULL,
    batch TEXT NOT NULL
);
"""

_INSERT_BATCH = """
INSERT INTO batches (timestamp, batch) VALUES (?, ?)
"""

_SELECT_PENDING = """
SELECT id, timestamp, batch FROM batches ORDER BY id ASC
"""

# Rows written after the SELECT get larger ids and stay pending
_DELETE_UP_TO = """
DELETE FROM batches WHERE id <= ?
"""

_COUNT_BATCHES = """
SELECT COUNT(*) FROM batches
"""


def _to_batches(rows: list) -> list[EmittedBatch]:
    return [EmittedBatch(timestamp=row[1], batch=row[2]) for row in rows]


class SQLiteBatchSink:
    """SQLite outbox implementing EventSinkPort.

    Persists emitted batches until a transport drains them, so batches
    survive a restart between emission and delivery. Uses aiosqlite for
    async access and WAL mode for file databases.

    Sync methods (write_sync, drain_sync) use the standard sqlite3 module.
    For file-based databases sync and async methods share the same file;
    for :memory: databases they do not share data.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._async_manager = AsyncConnectionManager(db_path, _BATCHES_SCHEMA)
        self._sync_manager = SyncConnectionManager(db_path, _BATCHES_SCHEMA)

    async def write(self, event: Event, batch: str) -> None:
        """Persist the batch encoded from event."""
        async with self._async_manager.connection() as db:
            await db.execute(_INSERT_BATCH, (event.timestamp, batch))
            await db.commit()

    async def drain(self) -> list[EmittedBatch]:
        """Remove and return every pending batch in emission order."""
        async with self._async_manager.connection() as db:
            async with db.execute(_SELECT_PENDING) as cursor:
                rows = list(await cursor.fetchall())
            if rows:
                await db.execute(_DELETE_UP_TO, (rows[-1][0],))
                await db.commit()
        return _to_batches(rows)

    async def count(self) -> int:
        """Return the number of batches waiting to be drained."""
        async with self._async_manager.connection() as db:
            async with db.execute(_COUNT_BATCHES) as cursor:
                row = await cursor.fetchone()
                return row[0] if row else 0

    async def close(self) -> None:
        """Close persistent connection (for :memory: databases)."""
        await self._async_manager.close()

    # --- Sync methods ---

    def write_sync(self, event: Event, batch: str) -> None:
        """Synchronous write for non-async contexts."""
        with self._sync_manager.connection() as conn:
            conn.execute(_INSERT_BATCH, (event.timestamp, batch))
            conn.commit()

    def drain_sync(self) -> list[EmittedBatch]:
        """Synchronous drain for non-async contexts."""
        with self._sync_manager.connection() as conn:
            rows = conn.execute(_SELECT_PENDING).fetchall()
            if rows:
                conn.execute(_DELETE_UP_TO, (rows[-1][0],))
                conn.commit()
        return _to_batches(rows)
