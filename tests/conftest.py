"""Shared test fixtures: event payloads, request builders, and the HTTP test client."""

from collections.abc import AsyncGenerator, Callable
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request

from webhookd.dependencies import get_pipeline
from webhookd.main import app
from webhookd.services.pipeline import WebhookPipeline, build_pipeline

FIXTURES = Path(__file__).parent / "fixtures" / "events"

WEBHOOK_SECRET = "s33kret"


@pytest.fixture
def push_body() -> bytes:
    """Raw bytes of a GitHub sample push event for Codertocat/Hello-World."""
    return (FIXTURES / "push.json").read_bytes()


@pytest.fixture
def flights_body() -> bytes:
    """Raw bytes of a two-commit push to sfomuseum-data-flights-2020-05."""
    return (FIXTURES / "flights.json").read_bytes()


def build_request(
    method: str = "POST",
    headers: dict[str, str] | None = None,
    body: bytes = b"",
) -> Request:
    """Build a Starlette request whose body is delivered in a single message."""
    sent = False

    async def receive() -> dict:
        nonlocal sent
        if sent:
            return {"type": "http.disconnect"}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    scope = {
        "type": "http",
        "method": method,
        "path": "/webhooks/github",
        "query_string": b"",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ],
    }
    return Request(scope, receive)


@pytest.fixture
def make_request() -> Callable[..., Request]:
    return build_request


@pytest.fixture
def pipeline() -> WebhookPipeline:
    """Pipeline with the test secret and a plain commits transformation."""
    return build_pipeline(f"github://?secret={WEBHOOK_SECRET}", ["githubcommits://"])


@pytest.fixture
async def client(pipeline: WebhookPipeline) -> AsyncGenerator[AsyncClient, None]:
    """Yield an httpx AsyncClient with the pipeline dependency overridden."""
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
