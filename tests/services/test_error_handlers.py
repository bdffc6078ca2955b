"""Global error handlers — envelope, status mapping and log fields.

Tests:
    - A payload that fails its response model becomes 502 AI_RESPONSE_INVALID
    - Rate-limited AI errors carry a Retry-After header
    - A missing X-User-Id header is reported as a header field error
    - Domain error logs carry the caller and the request path
"""

import logging
from uuid import uuid4

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from aurora.api.error_handlers import register_error_handlers
from aurora.core.errors import AnthropicAPIError, ConflictError


class _Card(BaseModel):
    title: str
    subtitle: str | None = None


def _build_app() -> FastAPI:
    app = FastAPI()

    @app.get("/card", response_model=_Card)
    async def card():
        return {"title": "Walk", "subtitle": {"nested": True}}

    @app.get("/busy")
    async def busy():
        raise AnthropicAPIError("slow down", "rate_limit", retry_after_ms=1500)

    @app.get("/duplicate")
    async def duplicate():
        raise ConflictError("Category 'Gym' already exists")

    register_error_handlers(app)
    return app


@pytest.fixture
async def bare_client():
    async with AsyncClient(
        transport=ASGITransport(app=_build_app()), base_url="http://test",
    ) as c:
        yield c


async def test_unrenderable_payload_is_bad_gateway(bare_client):
    response = await bare_client.get("/card")
    assert response.status_code == 502
    assert response.json()["error"]["code"] == "AI_RESPONSE_INVALID"


async def test_rate_limit_sets_retry_after(bare_client):
    response = await bare_client.get("/busy")
    assert response.status_code == 503
    assert response.headers["Retry-After"] == "2"
    assert response.json()["error"]["context"]["retry_after_ms"] == 1500


async def test_domain_error_log_carries_caller(bare_client, caplog):
    caller = str(uuid4())
    with caplog.at_level(logging.WARNING, logger="aurora.api.error_handlers"):
        response = await bare_client.get("/duplicate", headers={"X-User-Id": caller})

    assert response.status_code == 409
    [record] = [r for r in caplog.records if r.name == "aurora.api.error_handlers"]
    assert record.user_id == caller
    assert record.path == "/duplicate"
    assert record.error_code == "CONFLICT"


async def test_missing_identity_header_is_a_field_error(client):
    response = await client.get("/api/v1/events")
    assert response.status_code == 400
    fields = [d["field"] for d in response.json()["error"]["details"]]
    assert fields == ["header.X-User-Id"]
