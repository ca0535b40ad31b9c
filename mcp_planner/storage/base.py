"""Persistence capability used by the planning tools."""

from __future__ import annotations

from abc import ABC, abstractmethod

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


class PlanStore(ABC):
    """
    Create/read/update access to plans, uncertainties and todos.

    Reads and updates of an id that does not exist return None rather than
    raising: absence is a normal outcome for the tools.
    """

    @abstractmethod
    async def create_plan(
        self,
        name: str,
        description: str,
        confident: float,
        uncertainties: list[NewUncertainty],
    ) -> Plan:
        """Create an ACTIVE plan together with its uncertainties."""

    @abstractmethod
    async def list_plans(self, status: PlanStatus | None = PlanStatus.ACTIVE) -> list[Plan]:
        """Plans with the given status (all plans when status is None), oldest first."""

    @abstractmethod
    async def get_plan_detail(self, plan_id: int) -> PlanDetail | None:
        pass

    @abstractmethod
    async def update_plan_description(self, plan_id: int, description: str) -> Plan | None:
        pass

    @abstractmethod
    async def get_uncertainty(self, uncertainty_id: int) -> Uncertainty | None:
        pass

    @abstractmethod
    async def update_uncertainty(
        self,
        uncertainty_id: int,
        confidence: float,
        actions_result: str,
    ) -> Uncertainty | None:
        pass

    @abstractmethod
    async def create_todo(
        self,
        plan_id: int,
        description: str,
        priority: TodoPriority,
        status: TodoStatus,
    ) -> Todo | None:
        """Add a todo; None when the plan does not exist."""

    @abstractmethod
    async def get_todo(self, todo_id: int) -> Todo | None:
        pass

    @abstractmethod
    async def update_todo(self, todo_id: int, report: str, status: TodoStatus) -> Todo | None:
        pass
