"""Structured error payload schemas used by API responses."""

from __future__ import annotations

from pydantic import Field
from sqlmodel import SQLModel


class ErrorResponse(SQLModel):
    """Error envelope returned by every failing request."""

    detail: str | dict[str, object] | list[object] = Field(
        description=(
            "Error payload. Clients should rely on `code` when present and fall "
            "back to `message` for display."
        ),
        examples=[
            "Task not found",
            {"code": "llm_unavailable", "message": "Text generation failed."},
        ],
    )
    request_id: str | None = Field(
        default=None,
        description="Request correlation identifier injected by middleware.",
    )
    path: str | None = Field(
        default=None,
        description="Attempted path, present when no route matched.",
    )
