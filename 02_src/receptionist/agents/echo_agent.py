"""Built-in echo agent with local skills for exercising the full flow."""

from ..config import resolve_public_url
from ..logging_config import get_logger
from ..models import AgentDescriptor, CallableSkillHandler, SkillMeta

logger = get_logger(__name__)


class EchoAgent:
    """Minimal agent: echoes text back and counts words."""

    name = "echo-agent"
    version = "1.0.0"
    description = "Built-in agent that echoes text and counts words"

    def __init__(self, url: str | None = None):
        self.url = resolve_public_url(url)

    async def echo(self, text: str) -> str:
        logger.info("EchoAgent echoing %d characters", len(text))
        return text

    def word_count(self, text: str) -> int:
        return len(text.split())

    def skills(self) -> list[SkillMeta]:
        return [
            SkillMeta(
                id="echo",
                name="Echo",
                description="Returns the input text unchanged",
                tags=("echo", "text", "utility"),
                examples=("hello world",),
                handler=CallableSkillHandler(self.echo),
            ),
            SkillMeta(
                id="word-count",
                name="Word Count",
                description="Counts the words of the input text",
                tags=("text", "analysis", "count"),
                examples=("how many words are here",),
                handler=CallableSkillHandler(self.word_count),
            ),
        ]

    def descriptor(self) -> AgentDescriptor:
        return AgentDescriptor(
            name=self.name,
            version=self.version,
            description=self.description,
            url=self.url,
            skills=self.skills(),
        )


def default_descriptors(url: str | None = None) -> list[AgentDescriptor]:
    """Agents registered when the application is given none."""
    return [EchoAgent(url).descriptor()]
