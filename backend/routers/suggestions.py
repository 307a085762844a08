"""
Search assistant routes.

Both endpoints answer 200 with a (possibly empty) ``suggestions`` array;
source failures and rate limiting only shrink the list.
"""
from fastapi import APIRouter, Depends, Query
import logging
from typing import Optional

from core.config import get_settings
from core.dependencies import (
    get_client_key,
    get_completion_provider,
    get_search_limiter,
    get_suggestions_limiter,
    get_trip_store
)
from models import SuggestionsEnvelope
from providers import CompletionProvider, PromptStyle, TripStore
from services.rate_limiter import RateLimiter
from services.suggestions_service import SuggestionOptions, get_search_suggestions

logger = logging.getLogger(__name__)

router = APIRouter()


def suggestion_options() -> SuggestionOptions:
    settings = get_settings()
    return SuggestionOptions(
        gazetteer_limit=settings.gazetteer_limit,
        history_raw_limit=settings.history_raw_limit,
        history_limit=settings.history_limit,
        ai_max_suggestions=settings.ai_max_suggestions,
        response_limit=settings.response_limit,
        ai_timeout=settings.ai_timeout_seconds,
        history_timeout=settings.history_timeout_seconds,
        prompt_style=PromptStyle.JSON
    )


def search_options() -> SuggestionOptions:
    settings = get_settings()
    return SuggestionOptions(
        gazetteer_limit=settings.search_gazetteer_limit,
        ai_max_suggestions=settings.ai_max_suggestions,
        response_limit=settings.response_limit,
        ai_timeout=settings.ai_timeout_seconds,
        prompt_style=PromptStyle.LINES,
        include_history=False,
        min_query_length=2
    )


@router.get("/search-suggestions", response_model=SuggestionsEnvelope, response_model_exclude_none=True)
async def search_suggestions(
    q: str = Query(""),
    client_key: str = Depends(get_client_key),
    limiter: RateLimiter = Depends(get_suggestions_limiter),
    trip_store: TripStore = Depends(get_trip_store),
    provider: Optional[CompletionProvider] = Depends(get_completion_provider),
    options: SuggestionOptions = Depends(suggestion_options)
):
    """
    Ranked place and route suggestions blended from the gazetteer, trip
    history and the generative provider.
    """
    try:
        result = await get_search_suggestions(q, client_key, limiter, trip_store, provider, options)
    except Exception as e:
        logger.error(f"Search suggestions error: {e}", exc_info=True)
        return {"suggestions": []}
    return result.to_payload()


@router.get("/search", response_model=SuggestionsEnvelope, response_model_exclude_none=True)
async def quick_search(
    q: str = Query(""),
    client_key: str = Depends(get_client_key),
    limiter: RateLimiter = Depends(get_search_limiter),
    provider: Optional[CompletionProvider] = Depends(get_completion_provider),
    options: SuggestionOptions = Depends(search_options)
):
    """Destination search: gazetteer plus free-text provider suggestions."""
    try:
        result = await get_search_suggestions(q, client_key, limiter, None, provider, options)
    except Exception as e:
        logger.error(f"Search API error: {e}", exc_info=True)
        return {"suggestions": []}
    return result.to_payload()
