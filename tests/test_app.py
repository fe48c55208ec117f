# ruff: noqa: INP001
"""Application wiring: health probes, bearer-token auth, and route registration."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taskdesk.core import auth
from taskdesk.main import app

TOKEN = "k" * 40


@pytest.fixture
def client() -> TestClient:
    # No lifespan: these checks never touch the database or the LLM client.
    return TestClient(app, raise_server_exceptions=False)


@pytest.mark.parametrize("path", ["/health", "/healthz", "/readyz"])
def test_health_probes(client: TestClient, path: str) -> None:
    resp = client.get(path)

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_unknown_route_is_404_with_path(client: TestClient) -> None:
    resp = client.get("/api/v1/nothing-here")

    assert resp.status_code == 404
    assert resp.json()["path"] == "/api/v1/nothing-here"


def test_api_routes_are_registered_under_v1() -> None:
    paths = set(app.openapi()["paths"])

    assert {
        "/api/v1/tasks",
        "/api/v1/tasks/{task_id}",
        "/api/v1/tasks/{task_id}/complete",
        "/api/v1/brain-dump",
        "/api/v1/chat",
    } <= paths


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer wrong"}, {"Authorization": f"Basic {TOKEN}"}],
)
def test_configured_token_rejects_missing_or_wrong_credentials(
    client: TestClient,
    monkeypatch: pytest.MonkeyPatch,
    headers: dict[str, str],
) -> None:
    monkeypatch.setattr(auth.settings, "api_token", TOKEN)

    resp = client.get("/api/v1/tasks", headers=headers)

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Unauthorized"
    assert resp.headers["WWW-Authenticate"] == "Bearer"


def test_configured_token_admits_matching_bearer(
    client: TestClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(auth.settings, "api_token", TOKEN)

    resp = client.post(
        "/api/v1/chat",
        json={"prompt": "hi"},
        headers={"Authorization": f"Bearer {TOKEN}"},
    )

    # Past auth; the LLM client is only attached by the lifespan.
    assert resp.status_code == 503


def test_health_probes_ignore_configured_token(
    client: TestClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(auth.settings, "api_token", TOKEN)

    assert client.get("/healthz").status_code == 200
