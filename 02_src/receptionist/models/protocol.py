"""A2A wire models: messages, tasks and JSON-RPC envelopes.

Field names follow the A2A camelCase convention on the wire (``contextId``,
``taskId``...) through pydantic aliases; Python code uses snake_case.
Task snapshots are frozen: every lifecycle transition produces a new
instance via ``model_copy``.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

JSONRPC_VERSION = "2.0"

INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
TASK_NOT_FOUND = -32001


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class A2AModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TextPart(A2AModel):
    kind: Literal["text"] = "text"
    text: str


class Message(A2AModel):
    """A single message exchanged between a client and an agent."""

    role: Literal["user", "agent"]
    parts: list[TextPart] = Field(default_factory=list)
    message_id: str = Field(default_factory=_new_id)
    context_id: str | None = None
    task_id: str | None = None
    metadata: dict[str, Any] | None = None
    kind: Literal["message"] = "message"

    def first_text(self) -> str:
        """Text of the first part, or an empty string."""
        return self.parts[0].text if self.parts else ""

    @classmethod
    def agent_text(cls, text: str, context_id: str | None, task_id: str | None) -> "Message":
        return cls(
            role="agent",
            parts=[TextPart(text=text)],
            context_id=context_id,
            task_id=task_id,
        )


class TaskState(str, Enum):
    """Task lifecycle states. WORKING is the only non-terminal state."""

    WORKING = "working"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELED = "canceled"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not TaskState.WORKING


class TaskStatus(A2AModel):
    model_config = ConfigDict(frozen=True)

    state: TaskState
    message: Message | None = None
    timestamp: datetime = Field(default_factory=_utcnow)


class Task(A2AModel):
    """Immutable snapshot of one task."""

    model_config = ConfigDict(frozen=True)

    id: str
    context_id: str
    status: TaskStatus
    history: list[TaskStatus | Message] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)
    kind: Literal["task"] = "task"

    @property
    def state(self) -> TaskState:
        return self.status.state


class TaskStatusUpdateEvent(A2AModel):
    task_id: str
    context_id: str
    status: TaskStatus
    final: bool
    kind: Literal["status-update"] = "status-update"


# JSON-RPC envelopes


class JSONRPCError(A2AModel):
    code: int
    message: str
    data: Any | None = None

    @classmethod
    def invalid_params(cls, message: str) -> "JSONRPCError":
        return cls(code=INVALID_PARAMS, message=message)

    @classmethod
    def internal(cls, message: str = "Error processing request") -> "JSONRPCError":
        return cls(code=INTERNAL_ERROR, message=message)

    @classmethod
    def task_not_found(cls) -> "JSONRPCError":
        return cls(code=TASK_NOT_FOUND, message="Task not found")


class MessageSendConfiguration(A2AModel):
    accepted_output_modes: list[str] = Field(default_factory=lambda: ["text/plain"])
    blocking: bool = True


class MessageSendParams(A2AModel):
    message: Message | None = None
    configuration: MessageSendConfiguration | None = None
    metadata: dict[str, Any] | None = None


class SendMessageRequest(A2AModel):
    jsonrpc: str = JSONRPC_VERSION
    id: str | int | None = Field(default_factory=_new_id)
    method: str = "message/send"
    params: MessageSendParams | None = None


class SendStreamingMessageRequest(SendMessageRequest):
    method: str = "message/stream"


class SendMessageResponse(A2AModel):
    jsonrpc: str = JSONRPC_VERSION
    id: str | int | None = None
    result: Message | Task | None = None
    error: JSONRPCError | None = None


class TaskQueryParams(A2AModel):
    id: str
    metadata: dict[str, Any] | None = None


class GetTaskRequest(A2AModel):
    jsonrpc: str = JSONRPC_VERSION
    id: str | int | None = Field(default_factory=_new_id)
    method: str = "tasks/get"
    params: TaskQueryParams


class CancelTaskRequest(GetTaskRequest):
    method: str = "tasks/cancel"


class TaskResponse(A2AModel):
    """Response envelope shared by tasks/get and tasks/cancel."""

    jsonrpc: str = JSONRPC_VERSION
    id: str | int | None = None
    result: Task | None = None
    error: JSONRPCError | None = None


# Agent card


class AgentSkill(A2AModel):
    id: str
    name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    examples: list[str] | None = None
    input_modes: list[str] | None = None
    output_modes: list[str] | None = None


class AgentCapabilities(A2AModel):
    streaming: bool = True
    push_notifications: bool = False
    state_transition_history: bool = True


class AgentProvider(A2AModel):
    organization: str
    url: str


class AgentCard(A2AModel):
    name: str
    version: str
    description: str
    url: str
    skills: list[AgentSkill] = Field(default_factory=list)
    default_input_modes: list[str] = Field(default_factory=lambda: ["text"])
    default_output_modes: list[str] = Field(default_factory=lambda: ["text"])
    capabilities: AgentCapabilities = Field(default_factory=AgentCapabilities)
    provider: AgentProvider | None = None
