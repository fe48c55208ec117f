"""Task CRUD over the `tasks` table, with score annotation for responses."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import case
from sqlmodel import col, select

from taskdesk.core.logging import get_logger
from taskdesk.core.time import utcnow
from taskdesk.models.tasks import DONE_STATUS, TASK_BUCKETS, Task
from taskdesk.schemas.tasks import TaskRead
from taskdesk.services.scoring import score_task

if TYPE_CHECKING:
    from datetime import datetime

    from sqlmodel.ext.asyncio.session import AsyncSession

    from taskdesk.schemas.tasks import TaskCreate, TaskUpdate

logger = get_logger(__name__)

# Fields that may not be cleared through a partial update.
REQUIRED_UPDATE_FIELDS = frozenset({"title", "status", "bucket", "priority"})


def _list_order_by() -> tuple[object, ...]:
    completed_last = case((col(Task.status) == DONE_STATUS, 1), else_=0)
    bucket_rank = case(
        {bucket: rank for rank, bucket in enumerate(TASK_BUCKETS)},
        value=col(Task.bucket),
        else_=len(TASK_BUCKETS) - 1,
    )
    due_date_missing = case((col(Task.due_date).is_(None), 1), else_=0)
    return (
        completed_last,
        bucket_rank,
        col(Task.priority).asc(),
        due_date_missing,
        col(Task.due_date).asc(),
        col(Task.created_at).desc(),
        col(Task.id).asc(),
    )


def to_task_read(task: Task, *, now: datetime | None = None) -> TaskRead:
    """Annotate a task with scores computed from its current fields."""
    scores = score_task(
        priority=task.priority,
        bucket=task.bucket,
        due_date=task.due_date,
        description=task.description,
        now=now,
    )
    return TaskRead.model_validate(
        {
            **task.model_dump(),
            "leverage": scores.leverage,
            "urgency": scores.urgency,
            "risk": scores.risk,
            "friction": scores.friction,
            "score": scores.score,
        },
    )


async def create_task(session: AsyncSession, payload: TaskCreate) -> Task:
    """Insert a task; both timestamps are set to the same instant."""
    now = utcnow()
    task = Task.model_validate(payload, update={"created_at": now, "updated_at": now})
    session.add(task)
    await session.commit()
    await session.refresh(task)
    logger.info("tasks.created id=%s bucket=%s priority=%s", task.id, task.bucket, task.priority)
    return task


async def list_tasks(session: AsyncSession) -> list[Task]:
    """Return all tasks: open before done, then bucket, priority, and due date."""
    statement = select(Task).order_by(*_list_order_by())
    return list((await session.exec(statement)).all())


async def get_task(session: AsyncSession, task_id: int) -> Task | None:
    return await session.get(Task, task_id)


async def update_task(session: AsyncSession, *, task: Task, payload: TaskUpdate) -> Task:
    """Apply the fields present in a partial update and refresh `updated_at`."""
    updates = payload.model_dump(exclude_unset=True)
    for field_name, value in updates.items():
        if value is None:
            if field_name in REQUIRED_UPDATE_FIELDS:
                continue
            if field_name in {"description", "area"}:
                value = ""
        setattr(task, field_name, value)
    task.updated_at = utcnow()
    session.add(task)
    await session.commit()
    await session.refresh(task)
    logger.info("tasks.updated id=%s fields=%s", task.id, ",".join(sorted(updates)))
    return task


async def complete_task(session: AsyncSession, task_id: int) -> Task | None:
    """Mark a task done; returns None when the id does not exist."""
    task = await get_task(session, task_id)
    if task is None:
        return None
    task.status = DONE_STATUS
    task.updated_at = utcnow()
    session.add(task)
    await session.commit()
    await session.refresh(task)
    logger.info("tasks.completed id=%s", task.id)
    return task


async def delete_task(session: AsyncSession, task_id: int) -> bool:
    """Delete a task; returns False when the id does not exist."""
    task = await get_task(session, task_id)
    if task is None:
        return False
    await session.delete(task)
    await session.commit()
    logger.info("tasks.deleted id=%s", task_id)
    return True
