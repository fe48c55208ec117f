"""Brain-dump and chat endpoints backed by the text-generation collaborator."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, status

from taskdesk.api.deps import LLM_DEP, SESSION_DEP
from taskdesk.core.logging import get_logger
from taskdesk.schemas.assistant import (
    BrainDumpRequest,
    BrainDumpResponse,
    ChatRequest,
    ChatResponse,
)
from taskdesk.schemas.errors import ErrorResponse
from taskdesk.services.brain_dump import brain_dump
from taskdesk.services.chat import chat
from taskdesk.services.llm import LLMError
from taskdesk.services.tasks import to_task_read

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

    from taskdesk.services.llm import TextGenerationClient

router = APIRouter(tags=["assistant"])
logger = get_logger(__name__)

LLM_UNAVAILABLE_RESPONSES: dict[int | str, dict[str, object]] = {
    status.HTTP_502_BAD_GATEWAY: {
        "model": ErrorResponse,
        "description": "Text generation failed or returned unusable output.",
    },
}


def _llm_unavailable(operation: str, exc: LLMError) -> HTTPException:
    logger.error("llm.%s.failed error=%s", operation, exc, exc_info=exc)
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={"code": "llm_unavailable", "message": "Text generation failed."},
    )


@router.post(
    "/brain-dump",
    response_model=BrainDumpResponse,
    status_code=status.HTTP_201_CREATED,
    responses=LLM_UNAVAILABLE_RESPONSES,
)
async def convert_brain_dump(
    payload: BrainDumpRequest,
    session: AsyncSession = SESSION_DEP,
    llm: TextGenerationClient = LLM_DEP,
) -> BrainDumpResponse:
    """Split free text into tasks; drafts without a title are skipped."""
    try:
        result = await brain_dump(session, llm, text=payload.text, defaults=payload.defaults)
    except LLMError as exc:
        raise _llm_unavailable("brain_dump", exc) from exc
    return BrainDumpResponse(
        tasks=[to_task_read(task) for task in result.tasks],
        skipped=result.skipped,
    )


@router.post("/chat", response_model=ChatResponse, responses=LLM_UNAVAILABLE_RESPONSES)
async def chat_about_tasks(
    payload: ChatRequest,
    session: AsyncSession = SESSION_DEP,
    llm: TextGenerationClient = LLM_DEP,
) -> ChatResponse:
    """Answer a question using the current scored task list as context."""
    try:
        reply = await chat(session, llm, prompt=payload.prompt)
    except LLMError as exc:
        raise _llm_unavailable("chat", exc) from exc
    return ChatResponse(reply=reply)
