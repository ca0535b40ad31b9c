"""Relational database for ad-hoc queries issued through the sql tools."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import aiosqlite

from mcp_planner.utils.logging import get_logger

logger = get_logger(__name__)


class QueryDatabase:
    """
    Thin async wrapper over a SQLite connection that runs arbitrary SQL.

    Row-returning statements yield a list of dicts; anything else is committed
    and yields ``{"rowcount": ..., "lastrowid": ...}``.
    """

    def __init__(self, db_path: str | Path = "data/planner.db") -> None:
        self.db_path = Path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = await aiosqlite.connect(str(self.db_path))
        self._conn.row_factory = aiosqlite.Row

    async def close(self) -> None:
        if self._conn:
            await self._conn.close()
            self._conn = None

    async def __aenter__(self) -> "QueryDatabase":
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    @property
    def connected(self) -> bool:
        return self._conn is not None

    async def check(self) -> bool:
        """Round-trip a trivial query; False when not connected."""
        if self._conn is None:
            return False
        cursor = await self._conn.execute("SELECT 1")
        row = await cursor.fetchone()
        await cursor.close()
        return row is not None and row[0] == 1

    async def execute(self, query: str) -> list[dict[str, Any]] | dict[str, Any]:
        """Run a single statement. Database errors propagate to the caller."""
        if self._conn is None:
            raise RuntimeError("QueryDatabase not connected; use await db.connect() or async with db")
        cursor = await self._conn.execute(query)
        try:
            if cursor.description is not None:
                rows = await cursor.fetchall()
                logger.info("query_executed", rows=len(rows))
                return [dict(r) for r in rows]
            await self._conn.commit()
            logger.info("query_executed", rowcount=cursor.rowcount)
            return {"rowcount": cursor.rowcount, "lastrowid": cursor.lastrowid}
        finally:
            await cursor.close()
