"""
Skill registry and dispatcher tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from agent.skills.registry import BUILTIN_SKILLS_DIR, SkillDefinition, SkillNotFound, SkillRegistry
from adapters.local.direct_dispatcher import DirectDispatcher


@pytest.fixture
def skills():
    registry = SkillRegistry()
    registry.load_from_directory(BUILTIN_SKILLS_DIR)
    return registry


def _write_skill(root: Path, name: str, worker: str) -> None:
    skill_dir = root / name
    skill_dir.mkdir()
    (skill_dir / "skill.yaml").write_text(
        f"name: {name}\n"
        f"description: Test skill {name}\n"
        f"worker_module: {worker}\n"
        "parameters:\n"
        "  type: object\n"
        "  properties: {}\n"
    )


def test_ping_tool_definition(skills):
    tools = skills.get_tools()
    ping = next(t for t in tools if t.name == "ping")
    assert ping.input_schema["type"] == "object"
    assert "echo" in ping.input_schema["properties"]


def test_enabled_skills_filter(skills):
    assert skills.get_tools([]) == []
    assert [t.name for t in skills.get_tools(["ping", "not-installed"])] == ["ping"]


def test_load_from_directory_skips_non_skills(tmp_path):
    (tmp_path / "notes.txt").write_text("not a skill")
    (tmp_path / "empty").mkdir()
    _write_skill(tmp_path, "beta", "agent.skills.ping.worker")
    _write_skill(tmp_path, "alpha", "agent.skills.ping.worker")

    registry = SkillRegistry()
    registry.load_from_directory(tmp_path)

    assert registry.list_skill_names() == ["alpha", "beta"]
    assert registry.get_skill("alpha").worker_module == "agent.skills.ping.worker"


def test_missing_directory_is_ignored(tmp_path):
    registry = SkillRegistry()
    registry.load_from_directory(tmp_path / "nope")
    assert registry.list_skills() == []


def test_unknown_skill_worker(skills):
    with pytest.raises(SkillNotFound):
        skills.get_worker("weather")


# --- Dispatcher ---


async def test_dispatcher_runs_ping(skills):
    result = await DirectDispatcher(skills).execute("ping", {"echo": "hey"})

    assert result["success"] is True
    assert result["result"]["status"] == "ok"
    assert result["result"]["echo"] == "hey"


async def test_dispatcher_wraps_plain_results(tmp_path, monkeypatch):
    (tmp_path / "relay_plain_worker.py").write_text(
        "def execute(args):\n"
        "    return {\"answer\": 42}\n"
    )
    (tmp_path / "relay_async_worker.py").write_text(
        "async def execute(args):\n"
        "    return {\"success\": False, \"result\": \"no data\"}\n"
    )
    monkeypatch.syspath_prepend(str(tmp_path))

    registry = SkillRegistry()
    registry.register(SkillDefinition("plain", "Plain", {"type": "object"}, "relay_plain_worker"))
    registry.register(SkillDefinition("async", "Async", {"type": "object"}, "relay_async_worker"))
    dispatcher = DirectDispatcher(registry)

    assert await dispatcher.execute("plain", {}) == {"success": True, "result": {"answer": 42}}
    assert await dispatcher.execute("async", {}) == {"success": False, "result": "no data"}


async def test_worker_without_execute():
    registry = SkillRegistry()
    registry.register(SkillDefinition("json_dumps", "Serialize", {"type": "object"}, "json"))

    with pytest.raises(SkillNotFound):
        await DirectDispatcher(registry).execute("json_dumps", {})


async def test_dispatcher_unknown_skill_propagates(skills):
    with pytest.raises(SkillNotFound):
        await DirectDispatcher(skills).execute("weather", {})


def test_skill_yaml_requires_description(tmp_path):
    skill_dir = tmp_path / "broken"
    skill_dir.mkdir()
    (skill_dir / "skill.yaml").write_text("name: broken\n")

    with pytest.raises(ValueError, match="description"):
        SkillRegistry().load_from_directory(tmp_path)


def test_worker_module_defaults_to_builtin_path(tmp_path):
    skill_dir = tmp_path / "ping"
    skill_dir.mkdir()
    (skill_dir / "skill.yaml").write_text("name: ping\ndescription: >\n  Folded\n  text\n")

    registry = SkillRegistry()
    registry.load_from_directory(tmp_path)

    skill = registry.get_skill("ping")
    assert skill.worker_module == "agent.skills.ping.worker"
    assert skill.description == "Folded text"
    assert skill.parameters == {"type": "object", "properties": {}}
