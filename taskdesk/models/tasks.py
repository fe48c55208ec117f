"""Task model representing a personal work item."""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field, SQLModel

from taskdesk.core.time import utcnow

RUNTIME_ANNOTATION_TYPES = (datetime,)

TASK_STATUSES = ("todo", "doing", "scheduled", "done")
TASK_STATUS_ALIASES = {"open": "todo"}
DONE_STATUS = "done"

# Ordered by time horizon; list ordering uses this sequence as the bucket rank.
TASK_BUCKETS = ("today", "this_week", "later", "backlog")

DEFAULT_STATUS = "todo"
DEFAULT_BUCKET = "later"
DEFAULT_PRIORITY = 3
MIN_PRIORITY = 1
MAX_PRIORITY = 5


class Task(SQLModel, table=True):
    """Persisted task with scheduling hints; scores are derived, never stored."""

    __tablename__ = "tasks"  # pyright: ignore[reportAssignmentType]

    id: int | None = Field(default=None, primary_key=True)
    title: str
    description: str = Field(default="")
    area: str = Field(default="")
    status: str = Field(default=DEFAULT_STATUS, index=True)
    bucket: str = Field(default=DEFAULT_BUCKET, index=True)
    priority: int = Field(default=DEFAULT_PRIORITY)
    due_date: datetime | None = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
