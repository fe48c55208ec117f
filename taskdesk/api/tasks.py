"""Task CRUD endpoints; every response carries freshly computed scores."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, status

from taskdesk.api.deps import SESSION_DEP
from taskdesk.schemas.common import OkResponse
from taskdesk.schemas.errors import ErrorResponse
from taskdesk.schemas.tasks import TaskCreate, TaskRead, TaskUpdate
from taskdesk.services import tasks as task_service

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

    from taskdesk.models.tasks import Task

router = APIRouter(prefix="/tasks", tags=["tasks"])
TASK_NOT_FOUND = "Task not found"
NOT_FOUND_RESPONSES: dict[int | str, dict[str, object]] = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": TASK_NOT_FOUND},
}


async def _get_task_or_404(session: AsyncSession, task_id: int) -> Task:
    task = await task_service.get_task(session, task_id)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)
    return task


@router.get("", response_model=list[TaskRead])
async def list_tasks(session: AsyncSession = SESSION_DEP) -> list[TaskRead]:
    """List all tasks: open before done, then bucket, priority, and due date."""
    tasks = await task_service.list_tasks(session)
    return [task_service.to_task_read(task) for task in tasks]


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    session: AsyncSession = SESSION_DEP,
) -> TaskRead:
    """Create a task; omitted fields take their defaults."""
    task = await task_service.create_task(session, payload)
    return task_service.to_task_read(task)


@router.get("/{task_id}", response_model=TaskRead, responses=NOT_FOUND_RESPONSES)
async def get_task(task_id: int, session: AsyncSession = SESSION_DEP) -> TaskRead:
    """Get one task by id."""
    task = await _get_task_or_404(session, task_id)
    return task_service.to_task_read(task)


@router.patch("/{task_id}", response_model=TaskRead, responses=NOT_FOUND_RESPONSES)
async def update_task(
    task_id: int,
    payload: TaskUpdate,
    session: AsyncSession = SESSION_DEP,
) -> TaskRead:
    """Update the supplied fields of a task."""
    task = await _get_task_or_404(session, task_id)
    task = await task_service.update_task(session, task=task, payload=payload)
    return task_service.to_task_read(task)


@router.post("/{task_id}/complete", response_model=TaskRead, responses=NOT_FOUND_RESPONSES)
async def complete_task(task_id: int, session: AsyncSession = SESSION_DEP) -> TaskRead:
    """Mark a task done."""
    task = await task_service.complete_task(session, task_id)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)
    return task_service.to_task_read(task)


@router.delete("/{task_id}", response_model=OkResponse, responses=NOT_FOUND_RESPONSES)
async def delete_task(task_id: int, session: AsyncSession = SESSION_DEP) -> OkResponse:
    """Delete a task."""
    if not await task_service.delete_task(session, task_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)
    return OkResponse(ok=True)
