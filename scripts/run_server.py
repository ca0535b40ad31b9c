"""Run the MCP planner server on stdio."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from mcp_planner.server import main

if __name__ == "__main__":
    main()
