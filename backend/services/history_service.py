"""
Trip history suggestions.

Past trips are a strong signal: a route someone already planned is likely
to be planned again. Storage problems never fail the search; they only
remove this source from the merge.
"""
import asyncio
import logging
from typing import List

from models import Suggestion, SuggestionSource
from providers.base import TripStore
from services.relevance import (
    calculate_relevance_score,
    classify_suggestion,
    format_route_label,
    is_route,
    route_identity_key
)

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


async def get_history_suggestions(
    query: str,
    store: TripStore,
    raw_limit: int = 20,
    limit: int = 10,
    timeout: float = 3.0
) -> List[Suggestion]:
    """
    Distinct origin/destination pairs from trip history matching ``query``.

    ``raw_limit`` rows are fetched so that duplicates can be dropped and
    still leave up to ``limit`` results.
    """
    q = (query or "").strip()
    if len(q) < MIN_QUERY_LENGTH:
        return []

    try:
        trips = await asyncio.wait_for(
            store.find_matching_trips(q, limit=raw_limit),
            timeout=timeout
        )
    except asyncio.TimeoutError:
        logger.warning(f"Trip history query timed out after {timeout}s for '{q}'")
        return []
    except Exception as e:
        logger.error(f"Error fetching trip history suggestions: {e}")
        return []

    seen = set()
    suggestions = []

    for trip in trips:
        if not trip.origin.strip() and not trip.destination.strip():
            continue

        if is_route(trip.origin, trip.destination):
            origin, destination = trip.origin.strip(), trip.destination.strip()
            label = format_route_label(origin, destination)
        else:
            # single place (or origin == destination): same shape as gazetteer entries
            origin, destination = None, (trip.destination or trip.origin).strip()
            label = destination

        key = route_identity_key(origin, destination)
        if key in seen:
            continue
        seen.add(key)

        suggestions.append(Suggestion(
            id=f"db:{trip.id}",
            label=label,
            origin=origin,
            destination=destination,
            type=classify_suggestion(origin, destination),
            source=SuggestionSource.DATABASE,
            relevance_score=calculate_relevance_score(q, origin, destination),
        ))

        if len(suggestions) >= limit:
            break

    logger.debug(f"History matcher produced {len(suggestions)} suggestions for '{q}'")
    return suggestions
