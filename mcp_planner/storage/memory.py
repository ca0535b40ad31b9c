"""In-process PlanStore, used by tests and for running without a database."""

from __future__ import annotations

from datetime import datetime, timezone

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


class InMemoryPlanStore(PlanStore):
    """Dict-backed store with auto-incrementing ids starting at 1."""

    def __init__(self) -> None:
        self.plans: dict[int, Plan] = {}
        self.uncertainties: dict[int, Uncertainty] = {}
        self.todos: dict[int, Todo] = {}
        self._ids = {"plan": 0, "uncertainty": 0, "todo": 0}

    def _next_id(self, kind: str) -> int:
        self._ids[kind] += 1
        return self._ids[kind]

    async def create_plan(
        self,
        name: str,
        description: str,
        confident: float,
        uncertainties: list[NewUncertainty],
    ) -> Plan:
        now = datetime.now(timezone.utc)
        plan = Plan(
            plan_id=self._next_id("plan"),
            name=name,
            description=description,
            confident=confident,
            created_at=now,
            updated_at=now,
        )
        self.plans[plan.plan_id] = plan
        for item in uncertainties:
            uncertainty = Uncertainty(
                uncertainty_id=self._next_id("uncertainty"),
                plan_id=plan.plan_id,
                description=item.description,
                confidence=item.confidence,
                actions_to_resolve=item.actions_to_resolve,
            )
            self.uncertainties[uncertainty.uncertainty_id] = uncertainty
        return plan

    async def list_plans(self, status: PlanStatus | None = PlanStatus.ACTIVE) -> list[Plan]:
        return [p for p in self.plans.values() if status is None or p.status == status]

    async def get_plan_detail(self, plan_id: int) -> PlanDetail | None:
        plan = self.plans.get(plan_id)
        if plan is None:
            return None
        return PlanDetail(
            plan=plan,
            uncertainties=[u for u in self.uncertainties.values() if u.plan_id == plan_id],
            todos=[t for t in self.todos.values() if t.plan_id == plan_id],
        )

    async def update_plan_description(self, plan_id: int, description: str) -> Plan | None:
        plan = self.plans.get(plan_id)
        if plan is None:
            return None
        plan = plan.model_copy(update={"description": description, "updated_at": datetime.now(timezone.utc)})
        self.plans[plan_id] = plan
        return plan

    async def get_uncertainty(self, uncertainty_id: int) -> Uncertainty | None:
        return self.uncertainties.get(uncertainty_id)

    async def update_uncertainty(
        self,
        uncertainty_id: int,
        confidence: float,
        actions_result: str,
    ) -> Uncertainty | None:
        uncertainty = self.uncertainties.get(uncertainty_id)
        if uncertainty is None:
            return None
        uncertainty = uncertainty.model_copy(update={"confidence": confidence, "actions_result": actions_result})
        self.uncertainties[uncertainty_id] = uncertainty
        return uncertainty

    async def create_todo(
        self,
        plan_id: int,
        description: str,
        priority: TodoPriority,
        status: TodoStatus,
    ) -> Todo | None:
        if plan_id not in self.plans:
            return None
        todo = Todo(
            todo_id=self._next_id("todo"),
            plan_id=plan_id,
            description=description,
            priority=priority,
            status=status,
        )
        self.todos[todo.todo_id] = todo
        return todo

    async def get_todo(self, todo_id: int) -> Todo | None:
        return self.todos.get(todo_id)

    async def update_todo(self, todo_id: int, report: str, status: TodoStatus) -> Todo | None:
        todo = self.todos.get(todo_id)
        if todo is None:
            return None
        todo = todo.model_copy(update={"report": report, "status": status})
        self.todos[todo_id] = todo
        return todo
