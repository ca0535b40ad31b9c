"""Shared utilities."""

from mcp_planner.utils.config import load_config
from mcp_planner.utils.logging import get_logger, setup_logging

__all__ = ["get_logger", "load_config", "setup_logging"]
