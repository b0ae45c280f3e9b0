"""Receptionist: capability discovery and skill invocation for external callers."""

import uuid
from typing import Protocol

from ..errors import ReceptionistError
from ..logging_config import get_logger
from ..matching import IMatchingEngine
from ..models import (
    AgentSkillDocumentView,
    BestAgentResponse,
    CapabilityDiscoveryResponse,
    CapabilityQuery,
    Message,
    MessageSendConfiguration,
    MessageSendParams,
    SendMessageRequest,
    SkillInvocationRequest,
    SkillInvocationResponse,
    Task,
    TextPart,
)
from ..storage import IAgentStore
from ..transport import IAgentTransport

logger = get_logger(__name__)


class IReceptionist(Protocol):
    """Discovery surface over the matching engine."""

    async def discover_capabilities(self, query: CapabilityQuery) -> CapabilityDiscoveryResponse:
        ...

    async def find_best_agent(self, query: CapabilityQuery) -> BestAgentResponse:
        ...

    async def invoke_skill(self, request: SkillInvocationRequest) -> SkillInvocationResponse:
        ...

    async def discover_all_capabilities(self) -> CapabilityDiscoveryResponse:
        ...


def build_invocation_request(request: SkillInvocationRequest, agent_url: str) -> SendMessageRequest:
    """message/send request for invoking a skill on a discovered agent."""
    parts = [TextPart(text=line.strip()) for line in request.input or [] if line and line.strip()]
    if not parts:
        parts = [TextPart(text="")]

    metadata = dict(request.metadata or {})
    if request.skill_id is not None:
        metadata["skillId"] = request.skill_id
    metadata["agentName"] = request.agent_name
    metadata["agentUrl"] = agent_url

    message = Message(
        role="user",
        parts=parts,
        context_id=request.context_id or request.skill_id,
        task_id=str(uuid.uuid4()),
        metadata=metadata,
    )
    return SendMessageRequest(
        params=MessageSendParams(
            message=message,
            configuration=MessageSendConfiguration(accepted_output_modes=["text/plain"], blocking=True),
        )
    )


class Receptionist:
    """Composes the matching engine, the agent store and the transport."""

    def __init__(self, engine: IMatchingEngine, store: IAgentStore, transport: IAgentTransport):
        self._engine = engine
        self._store = store
        self._transport = transport

    async def discover_capabilities(self, query: CapabilityQuery) -> CapabilityDiscoveryResponse:
        try:
            documents = await self._engine.find_agents(query.to_skill_query())
        except ReceptionistError as e:
            logger.error("Capability discovery failed: %s", e.message)
            return CapabilityDiscoveryResponse(
                success=False, error_message="Failed to discover capabilities"
            )

        return CapabilityDiscoveryResponse(
            success=True,
            agent_count=len(documents),
            agents=[AgentSkillDocumentView.from_document(d) for d in documents],
        )

    async def find_best_agent(self, query: CapabilityQuery) -> BestAgentResponse:
        try:
            best = await self._engine.find_best_agent(query.to_skill_query())
        except ReceptionistError as e:
            logger.error("Best agent lookup failed: %s", e.message)
            best = None

        if best is None:
            return BestAgentResponse(success=False, error_message="No matching agent found")
        return BestAgentResponse(success=True, agent=AgentSkillDocumentView.from_document(best))

    async def invoke_skill(self, request: SkillInvocationRequest) -> SkillInvocationResponse:
        logger.info("Invoking skill '%s' on agent '%s'", request.skill_id, request.agent_name)

        try:
            agent = await self._store.find(request.agent_name)
        except ReceptionistError as e:
            logger.error("Agent lookup failed: %s", e.message)
            return SkillInvocationResponse(success=False, error_message="Skill invocation failed")

        if agent is None:
            return SkillInvocationResponse(
                success=False, error_message=f"Agent not found: {request.agent_name}"
            )

        message_request = build_invocation_request(request, agent.url)
        logger.info("Sending message to agent %s at %s", agent.name, agent.url)
        try:
            response = await self._transport.send_message(agent.url, message_request)
        except ReceptionistError as e:
            logger.error("Skill invocation on %s failed: %s", agent.name, e.message)
            return SkillInvocationResponse(success=False, error_message="Skill invocation failed")

        if response.error is not None:
            logger.error("Agent %s answered with error: %s", agent.name, response.error.message)
            return SkillInvocationResponse(success=False, error_message="Skill invocation failed")

        result = response.result
        if isinstance(result, Message):
            return SkillInvocationResponse(success=True, result=result, task_id=result.task_id)
        if isinstance(result, Task):
            return SkillInvocationResponse(success=True, task_id=result.id)
        return SkillInvocationResponse(success=True)

    async def discover_all_capabilities(self) -> CapabilityDiscoveryResponse:
        try:
            documents = await self._engine.discover_all()
        except ReceptionistError as e:
            logger.error("Capability listing failed: %s", e.message)
            return CapabilityDiscoveryResponse(
                success=False, error_message="Failed to discover capabilities"
            )

        return CapabilityDiscoveryResponse(
            success=True,
            agent_count=len(documents),
            agents=[AgentSkillDocumentView.from_document(d) for d in documents],
        )
