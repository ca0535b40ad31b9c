"""Planning tools: plans, their uncertainties and todos."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mcp_planner.storage.models import NewUncertainty, TodoPriority, TodoStatus
from mcp_planner.tools.base import ToolContext
from mcp_planner.tools.envelope import safe_tool
from mcp_planner.utils.formatting import readable
from mcp_planner.utils.logging import get_logger

logger = get_logger(__name__)


class ToolInput(BaseModel):
    """
    Arguments arrive camelCased on the wire (planId, uncertaintyId, ...).

    Numeric fields are strict: "42" or true for a number fails validation.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AskWulangInput(ToolInput):
    question: str = Field(description="The question to ask Wulang")


@safe_tool(
    name="ask_wulang",
    description="Ask Wulang a question about the user question",
    schema=AskWulangInput,
)
def ask_wulang(args: AskWulangInput, context: ToolContext) -> str:
    return (
        f"to accomplish the user question: {args.question}, you should do the following steps:\n"
        "1. Analyze the user question\n"
        "2. Create a plan using the tool: create_plan, make sure to include all the uncertainties in the plan\n"
        "3. Do research on the uncertainty using the tool: do_research_on_uncertainty\n"
        "4. Update the confidence of the uncertainty using the tool: update_uncertainty_confidence\n"
        "5. Improve the plan using the tool: improve_plan\n"
        "6. Add todo to the plan using the tool: add_todo_to_plan\n"
        "7. Do the todo using the tool: do_todo\n"
        "8. Report the todo using the tool: report_todo"
    )


class UncertaintyInput(ToolInput):
    description: str = Field(description="The detailed description of the uncertainty")
    uncertainty_confidence: float = Field(strict=True, ge=0, le=100, description="The confidence of the uncertainty 0-100%")
    actions_to_resolve: str = Field(description="The actions to take to resolve the uncertainty")


class CreatePlanInput(ToolInput):
    name: str = Field(description="The name of the plan")
    description: str = Field(description="The detailed description of the plan")
    confident: float = Field(strict=True, ge=0, le=100, description="The confidence of the plan 0-100%")
    uncertainties: list[UncertaintyInput] = Field(description="The uncertainties of the plan")


@safe_tool(name="create_plan", description="Create a plan", schema=CreatePlanInput)
async def create_plan(args: CreatePlanInput, context: ToolContext) -> str:
    plan = await context.require_store().create_plan(
        name=args.name,
        description=args.description,
        confident=args.confident,
        uncertainties=[
            NewUncertainty(
                description=u.description,
                confidence=u.uncertainty_confidence,
                actions_to_resolve=u.actions_to_resolve,
            )
            for u in args.uncertainties
        ],
    )
    return f"Plan created successfully: {plan.plan_id}"


@safe_tool(name="get_all_plans", description="Get all plans to get the plan ID", schema={})
async def get_all_plans(args: BaseModel, context: ToolContext) -> str:
    plans = await context.require_store().list_plans()
    if not plans:
        return "No active plans"
    return readable(plans)


class GetDetailedPlanInput(ToolInput):
    plan_id: int = Field(strict=True, description="The id of the plan")


@safe_tool(
    name="get_detailed_plan",
    description="Get a plan with detailed information with uncertainty list and todo list",
    schema=GetDetailedPlanInput,
)
async def get_detailed_plan(args: GetDetailedPlanInput, context: ToolContext) -> str:
    detail = await context.require_store().get_plan_detail(args.plan_id)
    if detail is None:
        return "Plan not found"
    return readable(detail)


class UpdateUncertaintyConfidenceInput(ToolInput):
    uncertainty_id: int = Field(strict=True, description="The id of the uncertainty")
    confidence: float = Field(strict=True, ge=0, le=100, description="The confidence of the uncertainty 0-100")
    actions_result: str = Field(description="The actions result")


@safe_tool(
    name="update_uncertainty_confidence",
    description="Update the confidence of a uncertainty after the research is done",
    schema=UpdateUncertaintyConfidenceInput,
)
async def update_uncertainty_confidence(args: UpdateUncertaintyConfidenceInput, context: ToolContext) -> str:
    uncertainty = await context.require_store().update_uncertainty(
        args.uncertainty_id,
        confidence=args.confidence,
        actions_result=args.actions_result,
    )
    if uncertainty is None:
        return "Uncertainty not found"
    return (
        f"Uncertainty updated successfully: {uncertainty.uncertainty_id}, "
        "the next step is to iterate until all uncertainties are resolved"
    )


class ResearchTool(str, Enum):
    GREP_SEARCH = "grep_search"
    LIST_DIR = "list_dir"
    FILE_SEARCH = "file_search"
    WEB_SEARCH = "web_search in reddit, stackoverflow, official document, etc."


class DoResearchOnUncertaintyInput(ToolInput):
    uncertainty_id: int = Field(strict=True, description="The id of the uncertainty")
    research_tool: list[ResearchTool] = Field(description="The tool to do research on the uncertainty")


@safe_tool(
    name="do_research_on_uncertainty",
    description="Do research on a uncertainty to update the confidence, you can use tools like grep to do research on the uncertainty",
    schema=DoResearchOnUncertaintyInput,
)
async def do_research_on_uncertainty(args: DoResearchOnUncertaintyInput, context: ToolContext) -> str:
    uncertainty = await context.require_store().get_uncertainty(args.uncertainty_id)
    if uncertainty is None:
        return "Uncertainty not found"
    tools = ", ".join(t.value for t in args.research_tool)
    return (
        f"Do research about the uncertainty: {uncertainty.description}\n"
        f"Please do deep research on the uncertainty and update the uncertainty confidence, use the tool: {tools}"
    )


class ImprovePlanInput(ToolInput):
    plan_id: int = Field(strict=True, description="The id of the plan")
    description: str = Field(description="The improved plan description after the uncertainty is resolved")


@safe_tool(
    name="improve_plan",
    description="Make sure the plan is improved after the uncertainty is resolved",
    schema=ImprovePlanInput,
)
async def improve_plan(args: ImprovePlanInput, context: ToolContext) -> str:
    plan = await context.require_store().update_plan_description(args.plan_id, args.description)
    if plan is None:
        return "Plan not found"
    return f"Plan updated successfully: {plan.plan_id}, the next step is to add todo to the plan"


class AddTodoToPlanInput(ToolInput):
    plan_id: int = Field(strict=True, description="The id of the plan")
    description: str = Field(description="The detailed description of the todo")
    priority: TodoPriority = Field(description="The priority of the todo")
    status: TodoStatus = Field(description="The status of the todo")


@safe_tool(
    name="add_todo_to_plan",
    description="Add a todo to a plan, the todo is a step to do the plan",
    schema=AddTodoToPlanInput,
)
async def add_todo_to_plan(args: AddTodoToPlanInput, context: ToolContext) -> str:
    todo = await context.require_store().create_todo(
        args.plan_id,
        description=args.description,
        priority=args.priority,
        status=args.status,
    )
    if todo is None:
        return "Plan not found"
    logger.debug("todo_added", plan_id=args.plan_id, todo_id=todo.todo_id)
    return f"Todo added successfully: {todo.todo_id}"


class DoTodoInput(ToolInput):
    todo_id: int = Field(strict=True, description="The id of the todo")
    status: TodoStatus = Field(default=TodoStatus.TODO, description="The status of the todo")


@safe_tool(name="do_todo", description="Do a todo", schema=DoTodoInput)
async def do_todo(args: DoTodoInput, context: ToolContext) -> str:
    todo = await context.require_store().get_todo(args.todo_id)
    if todo is None:
        return "Todo not found"
    return f"Please do the todo: {todo.description} sequentially"


class ReportTodoInput(ToolInput):
    todo_id: int = Field(strict=True, description="The id of the todo")
    status: TodoStatus = Field(default=TodoStatus.DONE, description="The status of the todo")
    report: str = Field(description="The report of the todo")


@safe_tool(name="report_todo", description="Report a todo with status and report", schema=ReportTodoInput)
async def report_todo(args: ReportTodoInput, context: ToolContext) -> str:
    todo = await context.require_store().update_todo(args.todo_id, report=args.report, status=args.status)
    if todo is None:
        return "Todo not found"
    return f"Todo reported successfully: {todo.todo_id}"


PLAN_TOOLS = [
    ask_wulang,
    create_plan,
    get_all_plans,
    get_detailed_plan,
    update_uncertainty_confidence,
    do_research_on_uncertainty,
    improve_plan,
    add_todo_to_plan,
    do_todo,
    report_todo,
]
