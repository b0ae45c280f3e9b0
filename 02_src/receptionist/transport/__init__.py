"""Transport module."""

from .client import A2AClient, IAgentTransport, StreamEvent
from .handler import RemoteSkillHandler

__all__ = ["A2AClient", "IAgentTransport", "RemoteSkillHandler", "StreamEvent"]
