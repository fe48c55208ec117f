"""Text-generation collaborator backed by the Anthropic Messages API.

Every failure, whether configuration, transport, an empty reply, or
unparsable JSON, is raised as ``LLMError`` so routes can report it as an
upstream failure. There is no retry policy; the SDK's own retries are
disabled.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import anthropic

from taskdesk.core.logging import get_logger

if TYPE_CHECKING:
    from taskdesk.core.config import Settings

logger = get_logger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"


class LLMError(Exception):
    """Text generation failed or returned output that could not be used."""


def extract_json_object(text: str) -> Any:
    """Decode the outermost ``{...}`` or ``[...]`` block in a model reply.

    Whichever bracket opens first decides the shape.
    """
    starts = [index for index in (text.find("{"), text.find("[")) if index >= 0]
    try:
        if not starts:
            msg = "no JSON object or array in reply"
            raise ValueError(msg)
        start = min(starts)
        closer = "}" if text[start] == "{" else "]"
        end = text.rindex(closer) + 1
        return json.loads(text[start:end])
    except (ValueError, json.JSONDecodeError) as exc:
        msg = "Text generation returned malformed JSON"
        raise LLMError(msg) from exc


class TextGenerationClient:
    """Role-structured prompt in, text or decoded JSON out."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 1024,
        timeout_seconds: float = 60.0,
        client: Any = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._max_tokens = max_tokens
        self._timeout_seconds = timeout_seconds
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> TextGenerationClient:
        return cls(
            settings.anthropic_api_key or None,
            model=settings.llm_model,
            max_tokens=settings.llm_max_tokens,
            timeout_seconds=settings.llm_timeout_seconds,
        )

    @property
    def model(self) -> str:
        return self._model

    def _get_client(self) -> Any:
        """Lazily initialize the Anthropic client."""
        if self._client is None:
            if not self._api_key:
                msg = "Text generation is not configured (ANTHROPIC_API_KEY is not set)"
                raise LLMError(msg)
            self._client = anthropic.AsyncAnthropic(
                api_key=self._api_key,
                timeout=self._timeout_seconds,
                max_retries=0,
            )
        return self._client

    async def complete_text(self, *, system: str, user: str) -> str:
        """Send one system + user turn and return the reply text."""
        client = self._get_client()
        try:
            message = await client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=system,
                messages=[{"role": "user", "content": user}],
            )
        except anthropic.APIError as exc:
            logger.warning("llm.request.failed model=%s error=%s", self._model, type(exc).__name__)
            msg = f"Text generation request failed: {type(exc).__name__}"
            raise LLMError(msg) from exc

        text = "".join(
            getattr(block, "text", "")
            for block in (getattr(message, "content", None) or [])
            if getattr(block, "type", None) == "text"
        )
        if not text.strip():
            msg = "Text generation returned no text"
            raise LLMError(msg)
        logger.debug("llm.request.completed model=%s chars=%s", self._model, len(text))
        return text

    async def complete_json(self, *, system: str, user: str) -> Any:
        """Like ``complete_text`` but decodes the reply's JSON object."""
        text = await self.complete_text(system=system, user=user)
        return extract_json_object(text)
