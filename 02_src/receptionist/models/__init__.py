"""Core data models for the receptionist."""

from .agents import (
    AgentDescriptor,
    AgentFilter,
    AgentRecord,
    AgentSkillDocument,
    CallableSkillHandler,
    ISkillHandler,
    SkillMeta,
    StoredAgent,
)
from .discovery import (
    AgentSkillDocumentView,
    BestAgentResponse,
    CapabilityDiscoveryResponse,
    CapabilityQuery,
    SkillEntry,
    SkillInvocationRequest,
    SkillInvocationResponse,
)
from .matching import MatchResult, SkillQuery
from .protocol import (
    AgentCard,
    CancelTaskRequest,
    GetTaskRequest,
    JSONRPCError,
    Message,
    MessageSendConfiguration,
    MessageSendParams,
    SendMessageRequest,
    SendMessageResponse,
    SendStreamingMessageRequest,
    Task,
    TaskQueryParams,
    TaskResponse,
    TaskState,
    TaskStatus,
    TaskStatusUpdateEvent,
    TextPart,
)

__all__ = [
    # Agents
    "AgentDescriptor",
    "AgentFilter",
    "AgentRecord",
    "AgentSkillDocument",
    "CallableSkillHandler",
    "ISkillHandler",
    "SkillMeta",
    "StoredAgent",
    # Matching
    "MatchResult",
    "SkillQuery",
    # Discovery
    "AgentSkillDocumentView",
    "BestAgentResponse",
    "CapabilityDiscoveryResponse",
    "CapabilityQuery",
    "SkillEntry",
    "SkillInvocationRequest",
    "SkillInvocationResponse",
    # Protocol
    "AgentCard",
    "CancelTaskRequest",
    "GetTaskRequest",
    "JSONRPCError",
    "Message",
    "MessageSendConfiguration",
    "MessageSendParams",
    "SendMessageRequest",
    "SendMessageResponse",
    "SendStreamingMessageRequest",
    "Task",
    "TaskQueryParams",
    "TaskResponse",
    "TaskState",
    "TaskStatus",
    "TaskStatusUpdateEvent",
    "TextPart",
]
