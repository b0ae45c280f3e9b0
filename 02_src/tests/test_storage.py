"""Tests for AgentStore."""

from datetime import datetime, timedelta, timezone

import pytest

from receptionist.errors import PersistenceError
from receptionist.models import AgentFilter, SkillMeta, StoredAgent
from receptionist.registry import encode_skill_document
from receptionist.storage import AgentStore


def make_agent(name, skill_ids=("echo",), active=True, skill=None):
    now = datetime.now(timezone.utc)
    if skill is None:
        skill = encode_skill_document(name, [SkillMeta(id=s, name=s) for s in skill_ids])
    return StoredAgent(
        name=name,
        version="1.0",
        description=f"{name} agent",
        url=f"http://{name}.local",
        skill=skill,
        registered_at=now,
        last_heartbeat=now,
        active=active,
    )


class TestStoreInit:
    """Tests for AgentStore initialization."""

    async def test_init_creates_tables(self, store):
        """Test that init creates the agents table."""
        async with store._conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ) as cursor:
            tables = [row[0] for row in await cursor.fetchall()]
            assert "agents" in tables

    async def test_operations_require_init(self):
        """Test that using the store before init raises."""
        st = AgentStore(":memory:")
        with pytest.raises(RuntimeError):
            await st.find("anything")


class TestStoreSave:
    """Tests for save and find."""

    async def test_save_and_find(self, store):
        """Test saving an agent and reading it back."""
        saved = await store.save(make_agent("alpha"))
        assert saved.id is not None

        found = await store.find("alpha")
        assert found is not None
        assert found.name == "alpha"
        assert found.url == "http://alpha.local"
        assert found.active is True
        assert found.skill == saved.skill

    async def test_find_nonexistent(self, store):
        """Test finding an unknown agent returns None."""
        assert await store.find("ghost") is None

    async def test_save_upserts_and_keeps_id(self, store):
        """Test that saving the same name updates the row in place."""
        first = await store.save(make_agent("alpha"))

        updated = make_agent("alpha", skill_ids=("echo", "reverse"))
        updated.version = "2.0"
        second = await store.save(updated)

        assert second.id == first.id
        found = await store.find("alpha")
        assert found.version == "2.0"
        assert "reverse" in found.skill

    async def test_timestamps_round_trip(self, store):
        """Test that timestamps survive storage as aware datetimes."""
        agent = make_agent("alpha")
        agent.registered_at = datetime.now(timezone.utc) - timedelta(days=1)
        await store.save(agent)

        found = await store.find("alpha")
        assert found.registered_at == agent.registered_at
        assert found.registered_at.tzinfo is not None


class TestStoreSearch:
    """Tests for search with AgentFilter."""

    async def test_empty_filter_returns_all_active(self, store):
        """Test that an empty filter returns every active agent."""
        await store.save(make_agent("alpha"))
        await store.save(make_agent("beta"))
        await store.save(make_agent("sleepy", active=False))

        results = await store.search(AgentFilter())
        assert [r.name for r in results] == ["alpha", "beta"]

    async def test_results_in_registration_order(self, store):
        """Test that re-saving an agent keeps its position."""
        await store.save(make_agent("alpha"))
        await store.save(make_agent("beta"))
        await store.save(make_agent("alpha", skill_ids=("other",)))

        results = await store.search(AgentFilter())
        assert [r.name for r in results] == ["alpha", "beta"]

    async def test_skill_id_filter(self, store):
        """Test that a skill id filter narrows to advertising agents."""
        await store.save(make_agent("alpha", skill_ids=("translate",)))
        await store.save(make_agent("beta", skill_ids=("summarize",)))

        results = await store.search(AgentFilter(skill_id="summarize"))
        assert [r.name for r in results] == ["beta"]

    async def test_skill_id_filter_case_insensitive(self, store):
        """Test that the skill id filter ignores case."""
        await store.save(make_agent("alpha", skill_ids=("Translate",)))

        results = await store.search(AgentFilter(skill_id="tRANSLATE"))
        assert [r.name for r in results] == ["alpha"]

    async def test_blank_skill_id_behaves_as_empty_filter(self, store):
        """Test that a blank skill id does not filter."""
        await store.save(make_agent("alpha"))

        results = await store.search(AgentFilter(skill_id="   "))
        assert len(results) == 1

    async def test_malformed_document_excluded_by_id_filter_only(self, store):
        """Test that invalid JSON never matches an id filter but is listed otherwise."""
        await store.save(make_agent("broken", skill="{not json"))
        await store.save(make_agent("alpha", skill_ids=("echo",)))

        assert [r.name for r in await store.search(AgentFilter(skill_id="echo"))] == ["alpha"]
        assert [r.name for r in await store.search(AgentFilter())] == ["broken", "alpha"]


class TestStoreDelete:
    """Tests for delete_by_name and clear."""

    async def test_delete_by_name(self, store):
        """Test deleting an agent."""
        await store.save(make_agent("alpha"))
        await store.delete_by_name("alpha")
        assert await store.find("alpha") is None

    async def test_delete_missing_is_noop(self, store):
        """Test deleting an unknown agent does not raise."""
        await store.delete_by_name("ghost")

    async def test_clear(self, store):
        """Test clearing all agents."""
        await store.save(make_agent("alpha"))
        await store.save(make_agent("beta"))
        await store.clear()
        assert await store.search(AgentFilter()) == []


class TestStoreErrors:
    """Tests for error wrapping."""

    async def test_sqlite_errors_become_persistence_errors(self, store):
        """Test that driver errors are wrapped in PersistenceError."""
        await store._conn.execute("DROP TABLE agents")
        with pytest.raises(PersistenceError):
            await store.find("alpha")
