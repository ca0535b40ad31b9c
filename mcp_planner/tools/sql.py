"""Ad-hoc SQL tools against the configured query database."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from mcp_planner.tools.base import ToolContext, ToolResult, error_response, text_response
from mcp_planner.tools.envelope import safe_tool
from mcp_planner.utils.formatting import to_pretty_string


@safe_tool(name="sql_check_connection", description="Check the query database connection", schema={})
async def sql_check_connection(args: Any, context: ToolContext) -> ToolResult:
    if context.database is None or not await context.database.check():
        return error_response("Database connection failed", {"errorType": "ConnectionError"})
    return text_response("Database connection successful")


SQL_QUERY_SCHEMA = {
    "query": (str, Field(min_length=1, description="The SQL query to execute")),
}


@safe_tool(name="sql_query", description="Executes operations against the SQL database", schema=SQL_QUERY_SCHEMA)
async def sql_query(args: Any, context: ToolContext) -> str:
    result = await context.require_database().execute(args.query)
    return f"Query executed successfully\n\n{to_pretty_string(result)}"


SQL_TOOLS = [sql_check_connection, sql_query]
