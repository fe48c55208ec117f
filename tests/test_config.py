# ruff: noqa: INP001
"""Settings validation tests."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from taskdesk.core.config import Settings

TOKEN_ERROR = "API_TOKEN must be at least 32 characters and non-placeholder when set."


def test_empty_token_disables_auth() -> None:
    settings = Settings(_env_file=None, api_token="")
    assert settings.api_token == ""


@pytest.mark.parametrize("token", ["x" * 31, "change-me", "  replace-me  "])
def test_short_or_placeholder_token_is_rejected(token: str) -> None:
    with pytest.raises(ValidationError, match=TOKEN_ERROR):
        Settings(_env_file=None, api_token=token)


def test_real_token_is_accepted() -> None:
    token = "t" * 32
    assert Settings(_env_file=None, api_token=token).api_token == token


def test_dev_environment_auto_migrates_unless_disabled(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("DB_AUTO_MIGRATE", raising=False)

    assert Settings(_env_file=None, environment="dev").db_auto_migrate is True
    assert (
        Settings(_env_file=None, environment="dev", db_auto_migrate=False).db_auto_migrate
        is False
    )
    assert Settings(_env_file=None, environment="prod").db_auto_migrate is False


def test_log_format_is_restricted() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_format="xml")


def test_llm_limits_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, llm_max_tokens=0)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, llm_timeout_seconds=0)


@pytest.mark.parametrize(
    ("database_url", "expected"),
    [
        ("sqlite:///./tasks.db", "sqlite+aiosqlite:///./tasks.db"),
        ("postgresql://u:p@db/tasks", "postgresql+psycopg://u:p@db/tasks"),
        ("postgres://u:p@db/tasks", "postgresql+psycopg://u:p@db/tasks"),
        ("postgresql+asyncpg://u:p@db/tasks", "postgresql+asyncpg://u:p@db/tasks"),
        ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
    ],
)
def test_async_database_url_selects_async_driver(database_url: str, expected: str) -> None:
    assert Settings(_env_file=None, database_url=database_url).async_database_url == expected
