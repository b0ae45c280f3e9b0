"""A2A agent API routes: JSON-RPC messaging, task queries and the agent card."""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response, StreamingResponse

from ...app import IApplication
from ...errors import TaskNotFoundError, ValidationError
from ...logging_config import get_logger
from ...models import (
    AgentCard,
    CancelTaskRequest,
    GetTaskRequest,
    JSONRPCError,
    SendMessageRequest,
    SendMessageResponse,
    SendStreamingMessageRequest,
    TaskResponse,
)
from ...registry import build_agent_card

logger = get_logger(__name__)

# Routes whose request bodies are JSON-RPC envelopes
JSONRPC_PATHS = frozenset({"/agent/message", "/agent/stream", "/agent/tasks/get", "/agent/tasks/cancel"})


def _request_id(body: Any) -> str | int | None:
    request_id = body.get("id") if isinstance(body, dict) else None
    if isinstance(request_id, bool) or not isinstance(request_id, (str, int)):
        return None
    return request_id


def _describe(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid params"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"Invalid params: {location}: {first.get('msg', 'invalid')}" if location else "Invalid params"


async def jsonrpc_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    """Answer malformed JSON-RPC bodies with -32602 instead of HTTP 422."""
    if request.url.path not in JSONRPC_PATHS:
        return await request_validation_exception_handler(request, exc)

    message = _describe(exc)
    logger.warning("Rejected malformed request on %s: %s", request.url.path, message)
    response = SendMessageResponse(id=_request_id(exc.body), error=JSONRPCError.invalid_params(message))
    return JSONResponse(content=response.model_dump(mode="json", by_alias=True, exclude_none=True))


def create_agent_router(app: IApplication) -> APIRouter:
    """Create A2A agent router."""
    router = APIRouter(prefix="/agent", tags=["agent"])

    @router.post(
        "/message",
        response_model=SendMessageResponse,
        response_model_exclude_none=True,
    )
    async def send_message(request: SendMessageRequest) -> SendMessageResponse:
        """Process a message and answer with the agent reply."""
        logger.info("Received message request %s", request.id)
        try:
            task = await app.task_manager.process_message(request.params)
        except ValidationError as e:
            return SendMessageResponse(id=request.id, error=JSONRPCError.invalid_params(e.message))
        except Exception:
            logger.error("Error processing message request %s", request.id, exc_info=True)
            return SendMessageResponse(id=request.id, error=JSONRPCError.internal())

        return SendMessageResponse(
            id=request.id,
            result=app.task_manager.response_message(task),
        )

    @router.post("/stream")
    async def send_streaming_message(request: SendStreamingMessageRequest) -> StreamingResponse:
        """Stream a status-update event followed by the agent reply."""

        async def event_source():
            async for event in app.task_manager.stream_message(request.params):
                yield f"data: {event.model_dump_json(by_alias=True, exclude_none=True)}\n\n"

        return StreamingResponse(event_source(), media_type="text/event-stream")

    @router.post(
        "/tasks/get",
        response_model=TaskResponse,
        response_model_exclude_none=True,
    )
    async def get_task(request: GetTaskRequest) -> TaskResponse:
        task = app.task_manager.get(request.params.id)
        if task is None:
            return TaskResponse(id=request.id, error=JSONRPCError.task_not_found())
        return TaskResponse(id=request.id, result=task)

    @router.post(
        "/tasks/cancel",
        response_model=TaskResponse,
        response_model_exclude_none=True,
    )
    async def cancel_task(request: CancelTaskRequest) -> TaskResponse:
        try:
            task = await app.task_manager.cancel(request.params.id)
        except TaskNotFoundError:
            return TaskResponse(id=request.id, error=JSONRPCError.task_not_found())
        return TaskResponse(id=request.id, result=task)

    @router.get("/card", response_model=AgentCard, response_model_exclude_none=True)
    async def get_agent_card() -> AgentCard:
        """Agent card built from the registry."""
        return build_agent_card(app.registry.all())

    return router
