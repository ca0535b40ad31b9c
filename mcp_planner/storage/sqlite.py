"""SQLite-backed PlanStore."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import aiosqlite

from mcp_planner.storage.base import PlanStore
from mcp_planner.storage.models import (
    NewUncertainty,
    Plan,
    PlanDetail,
    PlanStatus,
    Todo,
    TodoPriority,
    TodoStatus,
    Uncertainty,
)
from mcp_planner.utils.logging import get_logger

logger = get_logger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS plans (
    plan_id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'ACTIVE' CHECK(status IN ('ACTIVE', 'COMPLETED', 'ARCHIVED')),
    confident REAL NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE IF NOT EXISTS uncertainties (
    uncertainty_id INTEGER PRIMARY KEY AUTOINCREMENT,
    plan_id INTEGER NOT NULL REFERENCES plans(plan_id) ON DELETE CASCADE,
    description TEXT NOT NULL,
    confidence REAL NOT NULL,
    actions_to_resolve TEXT NOT NULL,
    actions_result TEXT
);
CREATE TABLE IF NOT EXISTS todos (
    todo_id INTEGER PRIMARY KEY AUTOINCREMENT,
    plan_id INTEGER NOT NULL REFERENCES plans(plan_id) ON DELETE CASCADE,
    description TEXT NOT NULL,
    priority TEXT NOT NULL CHECK(priority IN ('LOW', 'MEDIUM', 'HIGH')),
    status TEXT NOT NULL CHECK(status IN ('TODO', 'IN_PROGRESS', 'DONE', 'BLOCKED')),
    report TEXT
);
"""


class SQLitePlanStore(PlanStore):
    """
    Async SQLite persistence for plans, uncertainties and todos.

    Example:
        >>> async with SQLitePlanStore("data/planner.db") as store:
        ...     plan = await store.create_plan("Ship", "Ship it", 60, [])
    """

    def __init__(self, db_path: str | Path = "data/planner.db") -> None:
        self.db_path = Path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Create connection and initialize schema."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = await aiosqlite.connect(str(self.db_path))
        self._conn.row_factory = aiosqlite.Row
        await self._conn.execute("PRAGMA foreign_keys = ON")
        await self._conn.executescript(_SCHEMA)
        await self._conn.commit()
        logger.info("plan_store_connected", db_path=str(self.db_path))

    async def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    async def __aenter__(self) -> "SQLitePlanStore":
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _ensure_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError("SQLitePlanStore not connected; use await store.connect() or async with store")
        return self._conn

    async def _fetchone(self, sql: str, params: tuple[Any, ...]) -> aiosqlite.Row | None:
        conn = self._ensure_conn()
        cursor = await conn.execute(sql, params)
        row = await cursor.fetchone()
        await cursor.close()
        return row

    async def _fetchall(self, sql: str, params: tuple[Any, ...] = ()) -> list[aiosqlite.Row]:
        conn = self._ensure_conn()
        cursor = await conn.execute(sql, params)
        rows = await cursor.fetchall()
        await cursor.close()
        return list(rows)

    async def create_plan(
        self,
        name: str,
        description: str,
        confident: float,
        uncertainties: list[NewUncertainty],
    ) -> Plan:
        conn = self._ensure_conn()
        try:
            cursor = await conn.execute(
                "INSERT INTO plans (name, description, status, confident) VALUES (?, ?, ?, ?)",
                (name, description, PlanStatus.ACTIVE.value, confident),
            )
            plan_id = cursor.lastrowid
            await cursor.close()
            await conn.executemany(
                """INSERT INTO uncertainties (plan_id, description, confidence, actions_to_resolve)
                   VALUES (?, ?, ?, ?)""",
                [(plan_id, u.description, u.confidence, u.actions_to_resolve) for u in uncertainties],
            )
            await conn.commit()
        except Exception:
            await conn.rollback()
            logger.warning("plan_create_rolled_back", name=name)
            raise
        logger.info("plan_created", plan_id=plan_id, uncertainties=len(uncertainties))
        plan = await self._get_plan(plan_id)
        if plan is None:
            raise RuntimeError(f"Plan {plan_id} missing right after insert")
        return plan

    async def _get_plan(self, plan_id: int) -> Plan | None:
        row = await self._fetchone("SELECT * FROM plans WHERE plan_id = ?", (plan_id,))
        return Plan(**dict(row)) if row else None

    async def list_plans(self, status: PlanStatus | None = PlanStatus.ACTIVE) -> list[Plan]:
        if status is None:
            rows = await self._fetchall("SELECT * FROM plans ORDER BY plan_id")
        else:
            rows = await self._fetchall("SELECT * FROM plans WHERE status = ? ORDER BY plan_id", (status.value,))
        return [Plan(**dict(r)) for r in rows]

    async def get_plan_detail(self, plan_id: int) -> PlanDetail | None:
        plan = await self._get_plan(plan_id)
        if plan is None:
            return None
        uncertainties = await self._fetchall(
            "SELECT * FROM uncertainties WHERE plan_id = ? ORDER BY uncertainty_id", (plan_id,)
        )
        todos = await self._fetchall("SELECT * FROM todos WHERE plan_id = ? ORDER BY todo_id", (plan_id,))
        return PlanDetail(
            plan=plan,
            uncertainties=[Uncertainty(**dict(r)) for r in uncertainties],
            todos=[Todo(**dict(r)) for r in todos],
        )

    async def update_plan_description(self, plan_id: int, description: str) -> Plan | None:
        conn = self._ensure_conn()
        cursor = await conn.execute(
            "UPDATE plans SET description = ?, updated_at = CURRENT_TIMESTAMP WHERE plan_id = ?",
            (description, plan_id),
        )
        changed = cursor.rowcount
        await cursor.close()
        await conn.commit()
        if not changed:
            return None
        return await self._get_plan(plan_id)

    async def get_uncertainty(self, uncertainty_id: int) -> Uncertainty | None:
        row = await self._fetchone("SELECT * FROM uncertainties WHERE uncertainty_id = ?", (uncertainty_id,))
        return Uncertainty(**dict(row)) if row else None

    async def update_uncertainty(
        self,
        uncertainty_id: int,
        confidence: float,
        actions_result: str,
    ) -> Uncertainty | None:
        conn = self._ensure_conn()
        cursor = await conn.execute(
            "UPDATE uncertainties SET confidence = ?, actions_result = ? WHERE uncertainty_id = ?",
            (confidence, actions_result, uncertainty_id),
        )
        changed = cursor.rowcount
        await cursor.close()
        await conn.commit()
        if not changed:
            return None
        return await self.get_uncertainty(uncertainty_id)

    async def create_todo(
        self,
        plan_id: int,
        description: str,
        priority: TodoPriority,
        status: TodoStatus,
    ) -> Todo | None:
        if await self._get_plan(plan_id) is None:
            return None
        conn = self._ensure_conn()
        cursor = await conn.execute(
            "INSERT INTO todos (plan_id, description, priority, status) VALUES (?, ?, ?, ?)",
            (plan_id, description, priority.value, status.value),
        )
        todo_id = cursor.lastrowid
        await cursor.close()
        await conn.commit()
        logger.info("todo_created", plan_id=plan_id, todo_id=todo_id)
        return await self.get_todo(todo_id)

    async def get_todo(self, todo_id: int) -> Todo | None:
        row = await self._fetchone("SELECT * FROM todos WHERE todo_id = ?", (todo_id,))
        return Todo(**dict(row)) if row else None

    async def update_todo(self, todo_id: int, report: str, status: TodoStatus) -> Todo | None:
        conn = self._ensure_conn()
        cursor = await conn.execute(
            "UPDATE todos SET report = ?, status = ? WHERE todo_id = ?",
            (report, status.value, todo_id),
        )
        changed = cursor.rowcount
        await cursor.close()
        await conn.commit()
        if not changed:
            return None
        return await self.get_todo(todo_id)
