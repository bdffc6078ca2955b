"""API Dependencies — caller identity, AI assistant and 404 helper shared by routes.

Invariants:
    - Every user-scoped route resolves the caller from the X-User-Id header (UUID)
    - A missing or malformed header is a request validation error (400)
    - One AIAssistant per process; tests replace it via app.dependency_overrides

Design Decisions:
    - Header identity instead of tokens: authentication lives in front of this
      service (ADR: auth is out of scope for the planner backend)
"""

from functools import lru_cache
from uuid import UUID

from fastapi import Header, HTTPException, status

from aurora.config import get_settings
from aurora.core.errors import ResourceNotFoundError
from aurora.infrastructure.anthropic_client import ResilientAnthropicClient
from aurora.services.ai_assistant import AIAssistant


async def get_current_user_id(
    x_user_id: UUID = Header(..., alias="X-User-Id"),
) -> UUID:
    return x_user_id


@lru_cache
def get_ai_assistant() -> AIAssistant:
    """Process-wide assistant built from settings; disabled when ai_enabled is False."""
    settings = get_settings()
    client = None
    if settings.ai_enabled:
        client = ResilientAnthropicClient(
            api_key=settings.anthropic_api_key,
            max_retries=settings.anthropic_max_retries,
            base_delay_ms=settings.anthropic_base_delay_ms,
            max_delay_ms=settings.anthropic_max_delay_ms,
            timeout_seconds=settings.anthropic_timeout_seconds,
        )
    return AIAssistant(client, model=settings.ai_model, max_tokens=settings.ai_max_tokens)


def not_found(resource_type: str, resource_id) -> HTTPException:
    """404 carrying the standard error envelope as detail."""
    return HTTPException(
        status.HTTP_404_NOT_FOUND,
        detail=ResourceNotFoundError(resource_type, str(resource_id)).to_response(),
    )
