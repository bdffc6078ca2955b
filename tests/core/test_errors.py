"""Error hierarchy — HTTP status mapping and the response envelope."""

from aurora.core.errors import (
    AIResponseError, AnthropicAPIError, AuroraError, ConflictError, ErrorContext,
    EventRejectedError, ForbiddenError, InvalidInputError, ResourceNotFoundError,
)


def test_status_codes_per_error_type():
    assert InvalidInputError("bad", "field").http_status == 400
    assert ForbiddenError("no").http_status == 403
    assert ResourceNotFoundError("Event", "x").http_status == 404
    assert ConflictError("dup").http_status == 409
    assert AIResponseError("empty").http_status == 502
    assert AnthropicAPIError("down", "timeout").http_status == 503


def test_all_errors_share_the_base_class():
    assert isinstance(ConflictError("dup"), AuroraError)


def test_envelope_carries_code_and_context():
    error = ResourceNotFoundError(
        "Event", "abc", context=ErrorContext(user_id="u1", operation="get_event"),
    )
    body = error.to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Event 'abc' not found"
    assert body["context"]["user_id"] == "u1"
    assert body["context"]["operation"] == "get_event"


def test_rejected_event_exposes_ai_severity_and_suggestions():
    body = EventRejectedError("Too late", "warning", ["Move it earlier"]).to_response()["error"]
    assert body["code"] == "EVENT_REJECTED"
    assert body["ai_severity"] == "warning"
    assert body["suggestions"] == ["Move it earlier"]


def test_anthropic_error_records_retry_after():
    error = AnthropicAPIError("slow down", "rate_limit", retry_after_ms=1500)
    assert error.context.retry_after_ms == 1500
    assert error.api_error_type == "rate_limit"
