"""
Search Suggestions Service for EcoRoute

Blends three sources into one ranked list:
- Gazetteer: static US states and major cities (instant, always available)
- Trip history: routes other users already planned
- Generative provider: eco-friendly destinations and routes

DEGRADATION PRINCIPLE: no single source can fail the search.
- Each source is wrapped independently; a failure contributes an empty list
- History and AI run concurrently and are only attempted for queries of
  two or more characters that pass the rate limiter
- A rate-limited caller still gets gazetteer results
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, List, Optional

from models import Suggestion, SuggestionResponse
from providers.base import CompletionProvider, PromptStyle, TripStore
from services.aggregator import aggregate_suggestions
from services.ai_suggestions_service import get_ai_suggestions
from services.gazetteer import get_static_suggestions
from services.history_service import get_history_suggestions
from services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

MIN_REMOTE_QUERY_LENGTH = 2
MAX_QUERY_LENGTH = 200


@dataclass
class SuggestionOptions:
    """Per-endpoint limits and timeouts."""
    gazetteer_limit: int = 10
    history_raw_limit: int = 20
    history_limit: int = 10
    ai_max_suggestions: int = 8
    response_limit: int = 10
    ai_timeout: float = 8.0
    history_timeout: float = 3.0
    prompt_style: PromptStyle = PromptStyle.JSON
    include_history: bool = True
    min_query_length: int = 1


@dataclass
class SuggestionsResult:
    suggestions: List[SuggestionResponse] = field(default_factory=list)
    rate_limited: bool = False

    def to_payload(self) -> dict:
        payload = {
            "suggestions": [s.model_dump(mode="json", exclude_none=True) for s in self.suggestions]
        }
        if self.rate_limited:
            payload["rateLimited"] = True
        return payload


async def _collect(source: str, call: Awaitable[List[Suggestion]]) -> List[Suggestion]:
    """Await one source, turning any failure into an empty contribution."""
    try:
        return await call
    except Exception as e:
        logger.error(f"Suggestion source '{source}' failed: {e}", exc_info=True)
        return []


def _static_suggestions(query: str, limit: int) -> List[Suggestion]:
    try:
        return get_static_suggestions(query, limit)
    except Exception as e:
        logger.error(f"Gazetteer lookup failed: {e}", exc_info=True)
        return []


async def get_search_suggestions(
    query: str,
    client_key: str,
    limiter: RateLimiter,
    trip_store: Optional[TripStore],
    provider: Optional[CompletionProvider],
    options: SuggestionOptions = None
) -> SuggestionsResult:
    """
    Build the ranked suggestion list for ``query``.

    Never raises: every source degrades to an empty list and the worst case
    is an empty result.
    """
    options = options or SuggestionOptions()
    q = (query or "").strip()[:MAX_QUERY_LENGTH].strip()

    if len(q) < options.min_query_length:
        return SuggestionsResult()

    static_suggestions = _static_suggestions(q, options.gazetteer_limit)

    if len(q) < MIN_REMOTE_QUERY_LENGTH:
        return SuggestionsResult(
            suggestions=aggregate_suggestions(static_suggestions, options.response_limit)
        )

    if not limiter.admit(client_key):
        return SuggestionsResult(
            suggestions=aggregate_suggestions(static_suggestions, options.response_limit),
            rate_limited=True
        )

    async def no_history() -> List[Suggestion]:
        return []

    if options.include_history and trip_store is not None:
        history_call = get_history_suggestions(
            q, trip_store,
            raw_limit=options.history_raw_limit,
            limit=options.history_limit,
            timeout=options.history_timeout
        )
    else:
        history_call = no_history()

    ai_call = get_ai_suggestions(
        q, provider,
        style=options.prompt_style,
        max_items=options.ai_max_suggestions,
        timeout=options.ai_timeout
    )

    history_suggestions, ai_suggestions = await asyncio.gather(
        _collect("history", history_call),
        _collect("ai", ai_call)
    )

    logger.debug(
        f"Suggestions for '{q}': static={len(static_suggestions)} "
        f"history={len(history_suggestions)} ai={len(ai_suggestions)}"
    )

    # Fixed merge order keeps ranking independent of completion order
    candidates = static_suggestions + history_suggestions + ai_suggestions
    try:
        ranked = aggregate_suggestions(candidates, options.response_limit)
    except Exception as e:
        logger.error(f"Suggestion aggregation failed: {e}", exc_info=True)
        ranked = []

    return SuggestionsResult(suggestions=ranked)
