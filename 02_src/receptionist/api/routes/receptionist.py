"""Receptionist API routes: capability discovery and skill invocation."""

from fastapi import APIRouter

from ...app import IApplication
from ...models import (
    BestAgentResponse,
    CapabilityDiscoveryResponse,
    CapabilityQuery,
    SkillInvocationRequest,
    SkillInvocationResponse,
)


def create_receptionist_router(app: IApplication) -> APIRouter:
    """Create receptionist router."""
    router = APIRouter(prefix="/a2a/receptionist", tags=["receptionist"])

    @router.post(
        "/discover",
        response_model=CapabilityDiscoveryResponse,
        response_model_exclude_none=True,
    )
    async def discover_capabilities(query: CapabilityQuery) -> CapabilityDiscoveryResponse:
        """Discover agents by capability query."""
        return await app.receptionist.discover_capabilities(query)

    @router.post(
        "/find-best",
        response_model=BestAgentResponse,
        response_model_exclude_none=True,
    )
    async def find_best_agent(query: CapabilityQuery) -> BestAgentResponse:
        """Find the best agent for a capability."""
        return await app.receptionist.find_best_agent(query)

    @router.post(
        "/invoke",
        response_model=SkillInvocationResponse,
        response_model_exclude_none=True,
    )
    async def invoke_skill(request: SkillInvocationRequest) -> SkillInvocationResponse:
        """Invoke a skill on a discovered agent."""
        return await app.receptionist.invoke_skill(request)

    @router.get(
        "/capabilities",
        response_model=CapabilityDiscoveryResponse,
        response_model_exclude_none=True,
    )
    async def discover_all_capabilities() -> CapabilityDiscoveryResponse:
        """Discover all available capabilities."""
        return await app.receptionist.discover_all_capabilities()

    return router
