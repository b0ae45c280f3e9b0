"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest_asyncio.fixture
async def store():
    """Create in-memory agent store for testing."""
    from receptionist.storage import AgentStore

    st = AgentStore(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def registry(store):
    """Create CapabilityRegistry backed by the store."""
    from receptionist.registry import CapabilityRegistry

    return CapabilityRegistry(store)


@pytest.fixture
def engine(store):
    """Create MatchingEngine reading from the store."""
    from receptionist.matching import MatchingEngine

    return MatchingEngine(store)


class FakeTransport:
    """In-memory IAgentTransport recording every call."""

    def __init__(self):
        self.sent: list[tuple[str, object]] = []
        self.reply_text = "remote reply"
        self.error: Exception | None = None
        self.closed = False

    async def send_message(self, agent_url, request):
        from receptionist.models import Message, SendMessageResponse

        self.sent.append((agent_url, request))
        if self.error is not None:
            raise self.error
        message = request.params.message
        return SendMessageResponse(
            id=request.id,
            result=Message.agent_text(self.reply_text, message.context_id, message.task_id),
        )

    async def send_streaming_message(self, agent_url, request):
        self.sent.append((agent_url, request))
        if self.error is not None:
            raise self.error
        return []

    async def get_task(self, agent_url, request):
        raise NotImplementedError

    async def cancel_task(self, agent_url, request):
        raise NotImplementedError

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_transport():
    """Create fake transport."""
    return FakeTransport()


@pytest.fixture
def task_manager(registry, fake_transport):
    """Create TaskManager with registry and fake transport."""
    from receptionist.tasks import TaskManager

    return TaskManager(registry, fake_transport)


@pytest.fixture
def make_skill():
    """Factory for SkillMeta with sensible defaults."""
    from receptionist.models import SkillMeta

    def _make(skill_id, name=None, description="", tags=(), handler=None):
        return SkillMeta(
            id=skill_id,
            name=name or skill_id,
            description=description,
            tags=tuple(tags),
            handler=handler,
        )

    return _make

