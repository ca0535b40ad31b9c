"""Unit tests for config loading and text formatting."""

import json

import pytest

from mcp_planner.storage.models import Plan, PlanStatus
from mcp_planner.utils.config import load_config, save_config
from mcp_planner.utils.formatting import JSONFormattingError, readable, to_compact_string, to_pretty_string


def test_defaults_when_file_missing(tmp_path, monkeypatch):
    monkeypatch.delenv("PLANNER_DATABASE_PATH", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    cfg = load_config(tmp_path / "missing.yaml")
    assert cfg["server"]["name"] == "mcp-planner"
    assert cfg["logging"]["level"] == "INFO"


def test_file_and_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "planner.yaml"
    save_config({"server": {"name": "custom"}, "logging": {"level": "DEBUG"}}, path)
    monkeypatch.setenv("PLANNER_DATABASE_PATH", "/tmp/other.db")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    cfg = load_config(path)
    assert cfg["server"]["name"] == "custom"
    assert cfg["server"]["version"] == "0.0.1"
    assert cfg["storage"]["database_path"] == "/tmp/other.db"
    assert cfg["logging"]["level"] == "WARNING"


def test_readable_renders_models():
    plan = Plan(plan_id=7, name="Trip", description="Go", confident=70, status=PlanStatus.ACTIVE)
    text = readable({"plan": plan})
    assert "plan_id: 7" in text
    assert "status: ACTIVE" in text


def test_compact_and_pretty():
    data = {"a": [1, 2]}
    assert to_compact_string(data) == '{"a":[1,2]}'
    assert json.loads(to_pretty_string(data)) == data


@pytest.mark.parametrize("value", [None, 3, "text"])
def test_rejects_scalars(value):
    with pytest.raises(JSONFormattingError):
        readable(value)
