"""A2A capability broker: registry, skill matching and task lifecycle."""

from .app import Application, IApplication
from .discovery import IReceptionist, Receptionist
from .errors import (
    DeserializationError,
    HandlerExecutionError,
    PersistenceError,
    ReceptionistError,
    SkillNotFoundError,
    TaskNotFoundError,
    TransportError,
    ValidationError,
)
from .matching import IMatchingEngine, MatchingEngine
from .models import (
    AgentDescriptor,
    AgentRecord,
    CallableSkillHandler,
    ISkillHandler,
    MatchResult,
    SkillMeta,
    SkillQuery,
    Task,
    TaskState,
)
from .registry import CapabilityRegistry, ICapabilityRegistry
from .storage import AgentStore, IAgentStore
from .tasks import ITaskManager, TaskManager
from .transport import A2AClient, IAgentTransport, RemoteSkillHandler

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "AgentDescriptor",
    "AgentRecord",
    "SkillMeta",
    "SkillQuery",
    "MatchResult",
    "Task",
    "TaskState",
    "ISkillHandler",
    "CallableSkillHandler",
    # Components
    "IAgentStore",
    "AgentStore",
    "ICapabilityRegistry",
    "CapabilityRegistry",
    "IMatchingEngine",
    "MatchingEngine",
    "ITaskManager",
    "TaskManager",
    "IAgentTransport",
    "A2AClient",
    "RemoteSkillHandler",
    "IReceptionist",
    "Receptionist",
    # Errors
    "ReceptionistError",
    "ValidationError",
    "TaskNotFoundError",
    "SkillNotFoundError",
    "HandlerExecutionError",
    "PersistenceError",
    "TransportError",
    "DeserializationError",
]
