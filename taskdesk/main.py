"""FastAPI application entrypoint and router wiring."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import APIRouter, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware

from taskdesk.api.assistant import router as assistant_router
from taskdesk.api.deps import API_TOKEN_DEP
from taskdesk.api.tasks import router as tasks_router
from taskdesk.core.config import settings
from taskdesk.core.error_handling import install_error_handling
from taskdesk.core.logging import configure_logging, get_logger
from taskdesk.db.session import init_db
from taskdesk.schemas.health import HealthStatusResponse
from taskdesk.services.llm import TextGenerationClient

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

configure_logging()
logger = get_logger(__name__)
OPENAPI_TAGS = [
    {
        "name": "health",
        "description": (
            "Service liveness/readiness probes used by infrastructure and runtime checks."
        ),
    },
    {
        "name": "tasks",
        "description": (
            "Task CRUD, completion, and ordered listing. Every task is returned with "
            "its leverage, urgency, risk, friction, and composite score."
        ),
    },
    {
        "name": "assistant",
        "description": (
            "Language-model workflows: converting brain dumps into tasks and answering "
            "prioritization questions with the task list as context."
        ),
    },
]
HEALTH_OK_RESPONSES = {
    status.HTTP_200_OK: {
        "description": "Service is alive.",
        "content": {"application/json": {"example": {"ok": True}}},
    },
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize application resources before serving requests."""
    logger.info(
        "app.lifecycle.starting environment=%s db_auto_migrate=%s auth_enabled=%s",
        settings.environment,
        settings.db_auto_migrate,
        bool(settings.api_token.strip()),
    )
    await init_db()
    app.state.llm_client = TextGenerationClient.from_settings(settings)
    if not settings.anthropic_api_key:
        logger.warning("app.llm.unconfigured brain-dump and chat will return 502")
    logger.info("app.lifecycle.started")
    try:
        yield
    finally:
        logger.info("app.lifecycle.stopped")


app = FastAPI(
    title="TaskDesk API",
    version="0.1.0",
    lifespan=lifespan,
    openapi_tags=OPENAPI_TAGS,
)

origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
if origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("app.cors.enabled origins_count=%s", len(origins))
else:
    logger.info("app.cors.disabled")

install_error_handling(app)


@app.get(
    "/health",
    tags=["health"],
    response_model=HealthStatusResponse,
    summary="Health Check",
    responses=HEALTH_OK_RESPONSES,
)
def health() -> HealthStatusResponse:
    """Lightweight liveness probe endpoint."""
    return HealthStatusResponse(ok=True)


@app.get(
    "/healthz",
    tags=["health"],
    response_model=HealthStatusResponse,
    summary="Health Alias Check",
    responses=HEALTH_OK_RESPONSES,
)
def healthz() -> HealthStatusResponse:
    """Alias liveness probe endpoint for platform compatibility."""
    return HealthStatusResponse(ok=True)


@app.get(
    "/readyz",
    tags=["health"],
    response_model=HealthStatusResponse,
    summary="Readiness Check",
    responses=HEALTH_OK_RESPONSES,
)
def readyz() -> HealthStatusResponse:
    """Readiness probe endpoint for service orchestration checks."""
    return HealthStatusResponse(ok=True)


api_v1 = APIRouter(prefix="/api/v1", dependencies=[API_TOKEN_DEP])
api_v1.include_router(tasks_router)
api_v1.include_router(assistant_router)
app.include_router(api_v1)

logger.debug("app.routes.registered count=%s", len(app.routes))
