"""A2A transport: JSON-RPC over HTTP to remote agents, using httpx."""

import json
from typing import Protocol

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..config import DEFAULT_TRANSPORT_TIMEOUT
from ..errors import TransportError
from ..logging_config import get_logger
from ..models import (
    CancelTaskRequest,
    GetTaskRequest,
    Message,
    SendMessageRequest,
    SendMessageResponse,
    SendStreamingMessageRequest,
    TaskResponse,
    TaskStatusUpdateEvent,
)

logger = get_logger(__name__)

StreamEvent = TaskStatusUpdateEvent | Message


class IAgentTransport(Protocol):
    """Outbound calls to a remote agent's A2A endpoints."""

    async def send_message(self, agent_url: str, request: SendMessageRequest) -> SendMessageResponse:
        """Send a message and wait for the reply."""
        ...

    async def send_streaming_message(
        self, agent_url: str, request: SendStreamingMessageRequest
    ) -> list[StreamEvent]:
        """Send a message and collect the streamed events in order."""
        ...

    async def get_task(self, agent_url: str, request: GetTaskRequest) -> TaskResponse:
        ...

    async def cancel_task(self, agent_url: str, request: CancelTaskRequest) -> TaskResponse:
        ...

    async def aclose(self) -> None:
        ...


def _payload(request: BaseModel) -> dict:
    return request.model_dump(mode="json", by_alias=True, exclude_none=True)


def _endpoint(agent_url: str, path: str) -> str:
    return f"{agent_url.rstrip('/')}{path}"


def _parse_event(data: str) -> StreamEvent:
    raw = json.loads(data)
    if raw.get("kind") == "status-update":
        return TaskStatusUpdateEvent.model_validate(raw)
    return Message.model_validate(raw)


class A2AClient:
    """httpx-based IAgentTransport. No retries; every failure is one TransportError."""

    def __init__(
        self,
        timeout: float = DEFAULT_TRANSPORT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        self._timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _post(self, url: str, request: BaseModel) -> dict:
        logger.info("POST %s (%s)", url, getattr(request, "method", ""))
        try:
            response = await self._client.post(url, json=_payload(request))
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Agent call to %s failed with status %d", url, e.response.status_code)
            raise TransportError(
                f"Agent at {url} answered {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Agent call to %s failed: %s", url, e)
            raise TransportError(f"Agent call to {url} failed: {e}") from e

    async def send_message(self, agent_url: str, request: SendMessageRequest) -> SendMessageResponse:
        url = _endpoint(agent_url, "/agent/message")
        data = await self._post(url, request)
        try:
            return SendMessageResponse.model_validate(data)
        except PydanticValidationError as e:
            raise TransportError(f"Malformed response from {url}: {e}") from e

    async def send_streaming_message(
        self, agent_url: str, request: SendStreamingMessageRequest
    ) -> list[StreamEvent]:
        url = _endpoint(agent_url, "/agent/stream")
        logger.info("POST %s (stream)", url)

        events: list[StreamEvent] = []
        try:
            async with self._client.stream(
                "POST",
                url,
                json=_payload(request),
                headers={"Accept": "text/event-stream"},
            ) as response:
                response.raise_for_status()
                async for line in response.aiter_lines():
                    if not line.startswith("data:"):
                        continue
                    events.append(_parse_event(line[len("data:"):].strip()))
        except httpx.HTTPError as e:
            logger.error("Streaming call to %s failed: %s", url, e)
            raise TransportError(f"Streaming call to {url} failed: {e}") from e
        except ValueError as e:
            logger.error("Malformed event from %s: %s", url, e)
            raise TransportError(f"Malformed event from {url}: {e}") from e

        return events

    async def get_task(self, agent_url: str, request: GetTaskRequest) -> TaskResponse:
        url = _endpoint(agent_url, "/agent/tasks/get")
        data = await self._post(url, request)
        try:
            return TaskResponse.model_validate(data)
        except PydanticValidationError as e:
            raise TransportError(f"Malformed response from {url}: {e}") from e

    async def cancel_task(self, agent_url: str, request: CancelTaskRequest) -> TaskResponse:
        url = _endpoint(agent_url, "/agent/tasks/cancel")
        data = await self._post(url, request)
        try:
            return TaskResponse.model_validate(data)
        except PydanticValidationError as e:
            raise TransportError(f"Malformed response from {url}: {e}") from e
