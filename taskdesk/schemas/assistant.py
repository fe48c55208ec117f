"""Schemas for brain-dump conversion and task-aware chat."""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, Field
from sqlmodel import SQLModel

from taskdesk.models.tasks import DEFAULT_BUCKET, DEFAULT_PRIORITY, DEFAULT_STATUS
from taskdesk.schemas.tasks import TaskBucket, TaskPriority, TaskRead, TaskStatus


def _require_text(value: str) -> str:
    if not value.strip():
        msg = "must be a non-empty string"
        raise ValueError(msg)
    return value


NonEmptyText = Annotated[str, AfterValidator(_require_text)]


class BrainDumpDefaults(SQLModel):
    """Values applied to drafts that omit a field."""

    bucket: TaskBucket = DEFAULT_BUCKET
    priority: TaskPriority = DEFAULT_PRIORITY
    area: str = ""
    status: TaskStatus = DEFAULT_STATUS


class BrainDumpRequest(SQLModel):
    """Free text to split into tasks, plus defaults for omitted fields."""

    text: NonEmptyText = Field(
        examples=["call the dentist, finish tax return by friday, tidy the garage someday"],
    )
    defaults: BrainDumpDefaults = Field(default_factory=BrainDumpDefaults)


class BrainDumpResponse(SQLModel):
    """Tasks created from a brain dump and the count of drafts skipped."""

    tasks: list[TaskRead] = Field(default_factory=list)
    skipped: int = Field(default=0, description="Drafts dropped for lacking a title.")


class ChatRequest(SQLModel):
    """Free-text question answered with the current task list as context."""

    prompt: NonEmptyText = Field(examples=["What should I do first this afternoon?"])


class ChatResponse(SQLModel):
    """Assistant reply text, returned unmodified."""

    reply: str
