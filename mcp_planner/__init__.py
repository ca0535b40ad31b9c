"""MCP planner: planning and SQL tools behind a validated tool envelope."""

__version__ = "0.0.1"
