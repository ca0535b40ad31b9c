"""Process wiring: config, logging, stores, registry and the stdio transport."""

from __future__ import annotations

import asyncio
import sys
from typing import Any

from dotenv import load_dotenv

from mcp_planner.mcp.adapter import MCPAdapter, serve_stdio
from mcp_planner.storage.database import QueryDatabase
from mcp_planner.storage.sqlite import SQLitePlanStore
from mcp_planner.tools.base import ToolContext
from mcp_planner.tools.plan import PLAN_TOOLS
from mcp_planner.tools.registry import ToolRegistry, register_tools
from mcp_planner.tools.sql import SQL_TOOLS
from mcp_planner.utils.config import load_config
from mcp_planner.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def build_registry() -> ToolRegistry:
    """Registry holding every built-in tool. Raises ConfigurationError on a bad declaration."""
    registry = ToolRegistry()
    register_tools(registry, PLAN_TOOLS)
    register_tools(registry, SQL_TOOLS)
    return registry


async def serve(config: dict[str, Any]) -> None:
    registry = build_registry()
    server_cfg = config.get("server", {})
    store_path = config.get("storage", {}).get("database_path", "data/planner.db")
    query_path = config.get("query_database", {}).get("path", store_path)

    async with SQLitePlanStore(store_path) as store, QueryDatabase(query_path) as database:

        def make_context(request_id: str | None) -> ToolContext:
            return ToolContext(request_id=request_id, store=store, database=database)

        adapter = MCPAdapter(
            registry,
            context_factory=make_context,
            server_name=server_cfg.get("name", "mcp-planner"),
            server_version=str(server_cfg.get("version", "0.0.1")),
        )
        logger.info("server_ready", tools=len(registry), store=store_path, query_database=query_path)
        await serve_stdio(adapter)


def main() -> None:
    """Console entry point."""
    load_dotenv()
    config = load_config()
    log_cfg = config.get("logging", {})
    setup_logging(level=log_cfg.get("level", "INFO"), json_logs=bool(log_cfg.get("json", False)), stream=sys.stderr)
    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logger.info("server_interrupted")
    except Exception as e:
        logger.exception("server_fatal", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
