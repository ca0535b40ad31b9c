"""Unit tests for the ad-hoc SQL tools."""

import json

import pytest

from mcp_planner.storage.database import QueryDatabase
from mcp_planner.tools.base import ToolContext
from mcp_planner.tools.sql import sql_check_connection, sql_query


@pytest.mark.asyncio
async def test_check_connection(tmp_path):
    async with QueryDatabase(tmp_path / "query.db") as db:
        ok = await sql_check_connection.handler({}, ToolContext(database=db))
        assert ok.is_error is False
        assert ok.text == "Database connection successful"

    missing = await sql_check_connection.handler({}, ToolContext())
    assert missing.is_error is True


@pytest.mark.asyncio
async def test_query_round_trip(tmp_path):
    async with QueryDatabase(tmp_path / "query.db") as db:
        ctx = ToolContext(database=db)
        created = await sql_query.handler({"query": "CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT)"}, ctx)
        assert created.is_error is False
        inserted = await sql_query.handler({"query": "INSERT INTO items (name) VALUES ('apple')"}, ctx)
        assert json.loads(inserted.text.split("\n\n", 1)[1])["rowcount"] == 1

        selected = await sql_query.handler({"query": "SELECT id, name FROM items"}, ctx)
        header, body = selected.text.split("\n\n", 1)
        assert header == "Query executed successfully"
        assert json.loads(body) == [{"id": 1, "name": "apple"}]


@pytest.mark.asyncio
async def test_query_is_required(tmp_path):
    result = await sql_query.handler({}, ToolContext())
    assert result.is_error is True
    assert "query" in result.text
    empty = await sql_query.handler({"query": ""}, ToolContext())
    assert empty.metadata["errorType"] == "ValidationError"


@pytest.mark.asyncio
async def test_database_error_is_an_execution_fault(tmp_path):
    async with QueryDatabase(tmp_path / "query.db") as db:
        result = await sql_query.handler({"query": "SELECT * FROM nowhere"}, ToolContext(database=db))
    assert result.is_error is True
    assert result.metadata["errorType"] == "OperationalError"
    assert "no such table" in result.text
