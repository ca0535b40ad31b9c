"""Initialize the planner SQLite database and schema."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Add project root so mcp_planner is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from mcp_planner.storage.sqlite import SQLitePlanStore
from mcp_planner.utils.config import load_config


async def main() -> None:
    config = load_config()
    db_path = config.get("storage", {}).get("database_path", "data/planner.db")
    path = Path(db_path)
    async with SQLitePlanStore(db_path=path):
        print("Database initialized at", path.absolute())


if __name__ == "__main__":
    asyncio.run(main())
