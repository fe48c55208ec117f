"""Schemas for task create/update payloads and scored read models."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BeforeValidator, Field, field_validator
from sqlmodel import SQLModel

from taskdesk.models.tasks import (
    DEFAULT_BUCKET,
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    MAX_PRIORITY,
    MIN_PRIORITY,
    TASK_BUCKETS,
    TASK_STATUS_ALIASES,
    TASK_STATUSES,
)
from taskdesk.services.scoring import parse_due_date

RUNTIME_ANNOTATION_TYPES = (datetime,)


def validate_title(value: str) -> str:
    title = value.strip()
    if not title:
        msg = "title must be a non-empty string"
        raise ValueError(msg)
    return title


def normalize_status(value: str) -> str:
    status = value.strip().lower()
    status = TASK_STATUS_ALIASES.get(status, status)
    if status not in TASK_STATUSES:
        msg = f"status must be one of: {', '.join(TASK_STATUSES)}"
        raise ValueError(msg)
    return status


def normalize_bucket(value: str) -> str:
    bucket = value.strip().lower()
    if bucket not in TASK_BUCKETS:
        msg = f"bucket must be one of: {', '.join(TASK_BUCKETS)}"
        raise ValueError(msg)
    return bucket


def coerce_priority(value: object) -> object:
    """Clamp numeric priorities into range; leave other values for type validation."""
    if isinstance(value, bool):
        msg = "priority must be an integer"
        raise ValueError(msg)
    if isinstance(value, float):
        value = int(value)
    elif isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            msg = "priority must be an integer"
            raise ValueError(msg) from None
    if isinstance(value, int):
        return max(MIN_PRIORITY, min(MAX_PRIORITY, value))
    return value


def coerce_due_date(value: object) -> datetime | None:
    try:
        return parse_due_date(value)
    except ValueError:
        msg = "due_date must be an ISO 8601 date or timestamp"
        raise ValueError(msg) from None


TaskTitle = Annotated[str, AfterValidator(validate_title)]
TaskStatus = Annotated[str, AfterValidator(normalize_status)]
TaskBucket = Annotated[str, AfterValidator(normalize_bucket)]
TaskPriority = Annotated[int, BeforeValidator(coerce_priority)]
DueDate = Annotated[datetime | None, BeforeValidator(coerce_due_date)]


class TaskCreate(SQLModel):
    """Payload for creating a task; omitted fields take the documented defaults."""

    title: TaskTitle = Field(description="Short task title.", examples=["File quarterly taxes"])
    description: str = ""
    area: str = ""
    status: TaskStatus = Field(default=DEFAULT_STATUS, examples=list(TASK_STATUSES))
    bucket: TaskBucket = Field(default=DEFAULT_BUCKET, examples=list(TASK_BUCKETS))
    priority: TaskPriority = Field(default=DEFAULT_PRIORITY, description="1 = highest, 5 = lowest.")
    due_date: DueDate = None

    @field_validator("description", "area", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return "" if value is None else value


class TaskUpdate(SQLModel):
    """Partial update payload; only fields present in the request are applied."""

    title: TaskTitle | None = None
    description: str | None = None
    area: str | None = None
    status: TaskStatus | None = None
    bucket: TaskBucket | None = None
    priority: TaskPriority | None = None
    due_date: DueDate = None


class TaskRead(SQLModel):
    """Task payload returned by read endpoints, annotated with derived scores."""

    id: int
    title: str
    description: str
    area: str
    status: str
    bucket: str
    priority: int
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime

    leverage: int = Field(description="Inverse of priority, 1-5.")
    urgency: int = Field(description="Time pressure from due date or bucket, 1-5.")
    risk: int = Field(description="Cost of delay derived from urgency, 2-4.")
    friction: int = Field(description="Expected effort from the description, 1-3.")
    score: int = Field(description="leverage + urgency + risk - friction.")
