"""Planning records: plans, their uncertainties and todos."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class PlanStatus(str, Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class TodoPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class TodoStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    BLOCKED = "BLOCKED"


class NewUncertainty(BaseModel):
    """Uncertainty data supplied when creating a plan."""

    description: str
    confidence: float = Field(ge=0, le=100)
    actions_to_resolve: str


class Uncertainty(BaseModel):
    uncertainty_id: int
    plan_id: int
    description: str
    confidence: float
    actions_to_resolve: str
    actions_result: str | None = None


class Todo(BaseModel):
    todo_id: int
    plan_id: int
    description: str
    priority: TodoPriority
    status: TodoStatus
    report: str | None = None


class Plan(BaseModel):
    plan_id: int
    name: str
    description: str
    status: PlanStatus = PlanStatus.ACTIVE
    confident: float
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PlanDetail(BaseModel):
    """A plan with its uncertainties and todos."""

    plan: Plan
    uncertainties: list[Uncertainty] = Field(default_factory=list)
    todos: list[Todo] = Field(default_factory=list)
