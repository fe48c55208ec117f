"""Answer prioritization questions with the scored task list as context."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from taskdesk.core.logging import get_logger
from taskdesk.services.tasks import list_tasks, to_task_read

if TYPE_CHECKING:
    from datetime import datetime

    from sqlmodel.ext.asyncio.session import AsyncSession

    from taskdesk.models.tasks import Task
    from taskdesk.services.llm import TextGenerationClient

logger = get_logger(__name__)

CHAT_SYSTEM_PROMPT = """You are a focused personal productivity assistant. You help one person decide what to work on, using their current task list.

Each task carries four sub-scores and a composite:
- leverage (1-5): impact if done; the inverse of priority (priority 1 is highest).
- urgency (1-5): time pressure from the due date, or from the bucket when there is none.
- risk (2-4): cost of delay, derived from urgency.
- friction (1-3): expected effort or annoyance from the description.
- score = leverage + urgency + risk - friction. Higher means do it sooner.

Ground every recommendation in the tasks below and refer to tasks by title. Tasks with status "done" are finished. If the list is empty, say so and help the person capture tasks."""

CONTEXT_FIELDS = (
    "id",
    "title",
    "description",
    "area",
    "status",
    "bucket",
    "priority",
    "due_date",
    "leverage",
    "urgency",
    "risk",
    "friction",
    "score",
)


def build_task_context(tasks: list[Task], *, now: datetime | None = None) -> str:
    """Serialize tasks with freshly computed scores for the model."""
    rows = [
        to_task_read(task, now=now).model_dump(mode="json", include=set(CONTEXT_FIELDS))
        for task in tasks
    ]
    return json.dumps({"tasks": rows}, indent=2)


def build_user_message(context: str, prompt: str) -> str:
    return f"Current tasks:\n\n{context}\n\nQuestion:\n{prompt}"


async def chat(session: AsyncSession, llm: TextGenerationClient, *, prompt: str) -> str:
    """Return the collaborator's reply to ``prompt`` unmodified."""
    tasks = await list_tasks(session)
    context = build_task_context(tasks)
    reply = await llm.complete_text(
        system=CHAT_SYSTEM_PROMPT,
        user=build_user_message(context, prompt),
    )
    logger.info("chat.completed tasks=%s reply_chars=%s", len(tasks), len(reply))
    return reply
