"""FastAPI application setup."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from ..app import Application
from .routes import agent, receptionist

# Global application instance
_app: Application | None = None


def get_app() -> Application:
    """Get the global application instance."""
    global _app
    if not _app:
        _app = Application()
    return _app


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_fastapi_app(application: Application | None = None) -> FastAPI:
    """Create the API around an application (the global one by default).

    The application is started and stopped by the FastAPI lifespan.
    """
    application = application or get_app()

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        await application.start()
        yield
        await application.stop()

    fastapi_app = FastAPI(
        title="A2A Receptionist API",
        description="Capability registry, skill matching and task dispatch for A2A agents",
        version="0.1.0",
        lifespan=lifespan,
    )

    origins = _cors_origins()
    if origins:
        fastapi_app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    fastapi_app.add_exception_handler(RequestValidationError, agent.jsonrpc_validation_handler)
    fastapi_app.include_router(agent.create_agent_router(application))
    fastapi_app.include_router(receptionist.create_receptionist_router(application))

    @fastapi_app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "agents": len(application.registry.all())}

    return fastapi_app
