"""Reusable FastAPI dependencies for sessions, auth, and the LLM client.

The text-generation client is built once in the application lifespan and
kept on ``app.state``; routes receive it through ``get_llm_client`` so tests
can swap in a fake with ``dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status

from taskdesk.core.auth import require_api_token
from taskdesk.db.session import get_session
from taskdesk.services.llm import TextGenerationClient

SESSION_DEP = Depends(get_session)
API_TOKEN_DEP = Depends(require_api_token)


def get_llm_client(request: Request) -> TextGenerationClient:
    """Return the process-wide text-generation client."""
    client = getattr(request.app.state, "llm_client", None)
    if not isinstance(client, TextGenerationClient):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Text generation client is not initialized",
        )
    return client


LLM_DEP = Depends(get_llm_client)
