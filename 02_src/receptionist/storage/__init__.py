"""Storage module."""

from .storage import AgentStore, IAgentStore

__all__ = ["AgentStore", "IAgentStore"]
