"""Resilient Anthropic client — retry, backoff and error mapping.

Tests:
    - Rate limits and transient 5xx errors are retried until max_retries
    - Timeouts and 4xx client errors fail immediately
    - complete() returns the concatenated text blocks
"""

from types import SimpleNamespace

import httpx
import pytest
from anthropic import (
    APITimeoutError, BadRequestError, InternalServerError, RateLimitError,
)

from aurora.core.errors import AnthropicAPIError
from aurora.infrastructure.anthropic_client import ResilientAnthropicClient, response_text
from tests.services.mock_anthropic import FakeMessages, _Block, _Message, text_message

REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _status_error(cls, code, headers=None):
    response = httpx.Response(code, headers=headers or {}, request=REQUEST)
    return cls(f"HTTP {code}", response=response, body=None)


def _client(outcomes, max_retries=2):
    client = ResilientAnthropicClient(
        api_key="sk-ant-test", max_retries=max_retries, base_delay_ms=0, max_delay_ms=0,
    )
    messages = FakeMessages(outcomes)
    client.client = SimpleNamespace(messages=messages)
    return client, messages


async def _complete(client):
    return await client.complete(model="m", max_tokens=10, system="s", prompt="hello")


async def test_complete_returns_text():
    client, messages = _client([text_message("  hi there ")])
    assert await _complete(client) == "hi there"
    assert messages.calls[0]["messages"] == [{"role": "user", "content": "hello"}]


async def test_rate_limit_retried():
    client, messages = _client([
        _status_error(RateLimitError, 429, {"retry-after": "0"}),
        text_message("ok"),
    ])
    assert await _complete(client) == "ok"
    assert len(messages.calls) == 2


async def test_rate_limit_gives_up_with_retry_after():
    client, _ = _client(
        [_status_error(RateLimitError, 429, {"retry-after": "2"})], max_retries=0,
    )
    with pytest.raises(AnthropicAPIError) as exc:
        await _complete(client)
    assert exc.value.api_error_type == "rate_limit"
    assert exc.value.context.retry_after_ms == 2000


async def test_server_errors_retried_then_mapped():
    client, messages = _client([_status_error(InternalServerError, 500)] * 3)
    with pytest.raises(AnthropicAPIError) as exc:
        await _complete(client)
    assert exc.value.api_error_type == "connection_error"
    assert len(messages.calls) == 3


async def test_timeout_is_not_retried():
    client, messages = _client([APITimeoutError(request=REQUEST)])
    with pytest.raises(AnthropicAPIError) as exc:
        await _complete(client)
    assert exc.value.api_error_type == "timeout"
    assert len(messages.calls) == 1


async def test_client_error_is_not_retried():
    client, messages = _client([_status_error(BadRequestError, 400)])
    with pytest.raises(AnthropicAPIError) as exc:
        await _complete(client)
    assert exc.value.api_error_type == "client_error"
    assert len(messages.calls) == 1


def test_response_text_skips_non_text_blocks():
    message = _Message([
        _Block(type="text", text="Hello "),
        _Block(type="tool_use", name="x"),
        _Block(type="text", text="world"),
    ])
    assert response_text(message) == "Hello world"
