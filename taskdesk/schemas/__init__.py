"""Public schema exports shared across API route modules."""

from taskdesk.schemas.assistant import (
    BrainDumpDefaults,
    BrainDumpRequest,
    BrainDumpResponse,
    ChatRequest,
    ChatResponse,
)
from taskdesk.schemas.common import OkResponse
from taskdesk.schemas.errors import ErrorResponse
from taskdesk.schemas.health import HealthStatusResponse
from taskdesk.schemas.tasks import TaskCreate, TaskRead, TaskUpdate

__all__ = [
    "BrainDumpDefaults",
    "BrainDumpRequest",
    "BrainDumpResponse",
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HealthStatusResponse",
    "OkResponse",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
]
