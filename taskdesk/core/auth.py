"""Optional shared bearer-token auth for the task API."""

from __future__ import annotations

from hmac import compare_digest

from fastapi import HTTPException, Request, status

from taskdesk.core.config import settings


def _extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


def require_api_token(request: Request) -> None:
    """Reject the request unless it carries the configured API token.

    Auth is disabled when no token is configured.
    """
    expected = settings.api_token.strip()
    if not expected:
        return
    token = _extract_bearer_token(request.headers.get("Authorization"))
    if token is None or not compare_digest(token, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
