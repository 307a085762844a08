"""Common dependencies for FastAPI routes."""
from functools import lru_cache
from typing import Optional

from fastapi import Request

from core.config import get_settings
from database import trips_collection
from providers import CompletionProvider, MongoTripStore, OpenAIProvider, TripStore
from services.rate_limiter import RateLimiter, resolve_client_key


def get_trip_store() -> TripStore:
    """Trip history backed by the trips collection."""
    return MongoTripStore(trips_collection)


@lru_cache()
def get_completion_provider() -> Optional[CompletionProvider]:
    """OpenAI provider, or None when no credential is configured."""
    settings = get_settings()
    if not settings.has_ai_credentials:
        return None
    return OpenAIProvider(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        timeout=settings.ai_timeout_seconds,
        temperature=settings.openai_temperature,
        max_tokens=settings.openai_max_tokens
    )


def get_suggestions_limiter(request: Request) -> RateLimiter:
    return request.app.state.suggestions_limiter


def get_search_limiter(request: Request) -> RateLimiter:
    return request.app.state.search_limiter


def get_client_key(request: Request) -> str:
    """Client identity used for rate limiting."""
    client_host = request.client.host if request.client else None
    return resolve_client_key(request.headers, client_host)
