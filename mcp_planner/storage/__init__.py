"""Persistence: the PlanStore capability and its implementations."""

from mcp_planner.storage.base import PlanStore
from mcp_planner.storage.database import QueryDatabase
from mcp_planner.storage.memory import InMemoryPlanStore
from mcp_planner.storage.sqlite import SQLitePlanStore

__all__ = ["InMemoryPlanStore", "PlanStore", "QueryDatabase", "SQLitePlanStore"]
