"""Shared response payloads."""

from __future__ import annotations

from sqlmodel import SQLModel


class OkResponse(SQLModel):
    """Acknowledgement payload for operations without a resource body."""

    ok: bool = True
