"""Task lifecycle manager: creates tasks, dispatches skills, records outcomes.

Tasks are immutable snapshots. Every transition builds a new ``Task`` with
``model_copy`` and swaps it into the task map under a per-task lock, so
different tasks never contend and updates to one task are never lost.
Callers always receive deep copies, so editing a returned task's
history or metadata never reaches the stored snapshot.
"""

import asyncio
import inspect
import uuid
from typing import Any, AsyncIterator, Protocol

from ..errors import HandlerExecutionError, SkillNotFoundError, TaskNotFoundError, ValidationError
from ..logging_config import get_logger, log_context
from ..models import (
    AgentRecord,
    ISkillHandler,
    Message,
    MessageSendParams,
    SkillMeta,
    Task,
    TaskState,
    TaskStatus,
    TaskStatusUpdateEvent,
)
from ..registry import ICapabilityRegistry
from ..transport import IAgentTransport, RemoteSkillHandler, StreamEvent

logger = get_logger(__name__)

# REJECTED is terminal but not flagged final on status events
FINAL_EVENT_STATES = frozenset({TaskState.COMPLETED, TaskState.FAILED, TaskState.CANCELED})


class ITaskManager(Protocol):
    """Owns the task map and drives tasks through their lifecycle."""

    async def create_or_get(self, task_id: str | None = None, context_id: str | None = None) -> Task:
        """Existing task for task_id, or a new WORKING task."""
        ...

    async def dispatch(self, task: Task, skill_id: str | None, text: str) -> Task:
        """Invoke the skill and record COMPLETED, FAILED or REJECTED."""
        ...

    async def cancel(self, task_id: str) -> Task:
        """Move a known task to CANCELED. Raises TaskNotFoundError."""
        ...

    def get(self, task_id: str) -> Task | None:
        """Read-only lookup."""
        ...

    async def process_message(self, params: MessageSendParams | None) -> Task:
        """Handle an inbound send-message request."""
        ...

    def stream_message(self, params: MessageSendParams | None) -> AsyncIterator[StreamEvent]:
        """Handle an inbound streaming request: status event, then reply."""
        ...

    def status_update(self, task: Task) -> TaskStatusUpdateEvent:
        ...

    def response_message(self, task: Task) -> Message:
        ...


def stringify(output: Any) -> str:
    return "null" if output is None else str(output)


def _detached(task: Task) -> Task:
    return task.model_copy(deep=True)


class TaskManager:
    """In-memory task manager dispatching through the capability registry."""

    def __init__(self, registry: ICapabilityRegistry, transport: IAgentTransport | None = None):
        self._registry = registry
        self._transport = transport
        self._tasks: dict[str, Task] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, task_id: str) -> asyncio.Lock:
        return self._locks.setdefault(task_id, asyncio.Lock())

    async def create_or_get(self, task_id: str | None = None, context_id: str | None = None) -> Task:
        task_id = task_id or str(uuid.uuid4())
        async with self._lock_for(task_id):
            existing = self._tasks.get(task_id)
            if existing is not None:
                return _detached(existing)

            task = Task(
                id=task_id,
                context_id=context_id or str(uuid.uuid4()),
                status=TaskStatus(state=TaskState.WORKING),
            )
            self._tasks[task_id] = task

        logger.info("Created task %s (context %s)", task.id, task.context_id)
        return _detached(task)

    def get(self, task_id: str) -> Task | None:
        task = self._tasks.get(task_id)
        return _detached(task) if task is not None else None

    async def _transition(
        self,
        task: Task,
        state: TaskState,
        metadata: dict[str, Any] | None = None,
    ) -> Task:
        async with self._lock_for(task.id):
            current = self._tasks.get(task.id, task)
            updated = current.model_copy(
                update={
                    "status": TaskStatus(state=state),
                    "history": [*current.history, current.status],
                    "metadata": {**current.metadata, **(metadata or {})},
                }
            )
            self._tasks[task.id] = updated

        logger.info(
            "Task %s: %s -> %s",
            task.id,
            current.state.value,
            state.value,
            extra={"context": {"state": state.value}},
        )
        return _detached(updated)

    async def _record_message(self, task: Task, message: Message) -> Task:
        async with self._lock_for(task.id):
            current = self._tasks.get(task.id, task)
            updated = current.model_copy(update={"history": [*current.history, message]})
            self._tasks[task.id] = updated
        return _detached(updated)

    def _resolve_handler(self, agent: AgentRecord, skill: SkillMeta) -> ISkillHandler:
        if skill.handler is not None:
            return skill.handler
        if self._transport is None:
            raise RuntimeError(f"No transport configured for remote skill {skill.id}")
        return RemoteSkillHandler(self._transport, agent.url, skill.id)

    async def dispatch(self, task: Task, skill_id: str | None, text: str) -> Task:
        with log_context(task_id=task.id, context_id=task.context_id, skill_id=skill_id):
            return await self._dispatch(task, skill_id, text)

    async def _dispatch(self, task: Task, skill_id: str | None, text: str) -> Task:
        found = self._registry.find_skill(skill_id)
        if found is None:
            error = SkillNotFoundError(skill_id)
            logger.warning("Task %s rejected: %s", task.id, error.message)
            return await self._transition(task, TaskState.REJECTED, {"error": error.message})

        agent, skill = found
        logger.info("Dispatching task %s to %s/%s", task.id, agent.name, skill.id)
        try:
            handler = self._resolve_handler(agent, skill)
            output = handler.invoke(text)
            if inspect.isawaitable(output):
                output = await output
        except Exception as e:
            error = HandlerExecutionError(skill.id, e)
            logger.error("Skill %s failed for task %s: %s", skill.id, task.id, error.message, exc_info=True)
            return await self._transition(task, TaskState.FAILED, {"error": error.message})

        return await self._transition(task, TaskState.COMPLETED, {"result": stringify(output)})

    async def cancel(self, task_id: str) -> Task:
        """Cancel a task. Terminal tasks are overwritten too."""
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return await self._transition(task, TaskState.CANCELED)

    async def process_message(self, params: MessageSendParams | None) -> Task:
        if params is None or params.message is None:
            raise ValidationError("Message is required")

        message = params.message
        skill_id = (message.metadata or {}).get("skillId") or message.context_id
        task = await self.create_or_get(message.task_id, message.context_id)
        task = await self._record_message(task, message)
        return await self.dispatch(task, skill_id, message.first_text())

    async def stream_message(self, params: MessageSendParams | None) -> AsyncIterator[StreamEvent]:
        try:
            task = await self.process_message(params)
        except Exception as e:
            logger.error("Streaming request failed: %s", e, exc_info=True)
            failed = Task(
                id=str(uuid.uuid4()),
                context_id=str(uuid.uuid4()),
                status=TaskStatus(state=TaskState.FAILED),
                metadata={"error": f"Failed to process streaming request: {e}"},
            )
            yield self.status_update(failed)
            yield Message.agent_text(f"Error: {e}", failed.context_id, failed.id)
            return

        yield self.status_update(task)
        yield self.response_message(task)

    @staticmethod
    def status_update(task: Task) -> TaskStatusUpdateEvent:
        return TaskStatusUpdateEvent(
            task_id=task.id,
            context_id=task.context_id,
            status=task.status,
            final=task.state in FINAL_EVENT_STATES,
        )

    @staticmethod
    def response_message(task: Task) -> Message:
        """Agent reply for a task: error, else result, else a default."""
        text = "Task completed"
        if "result" in task.metadata:
            text = str(task.metadata["result"])
        if "error" in task.metadata:
            text = f"Error: {task.metadata['error']}"
        return Message.agent_text(text, task.context_id, task.id)
