"""
Merge, deduplicate and rank suggestions from all sources.

Pure functions only: the same candidate list always produces the same
response, whatever order the concurrent sources finished in.
"""
from typing import Dict, List, Tuple

from models import Suggestion, SuggestionResponse
from services.relevance import route_identity_key

RESPONSE_LIMIT = 10


def identity_key(suggestion: Suggestion) -> str:
    return route_identity_key(suggestion.origin, suggestion.destination, suggestion.label)


def _beats(candidate: Suggestion, current: Suggestion) -> bool:
    """Higher source priority wins, then higher score; otherwise keep the first seen."""
    if candidate.priority != current.priority:
        return candidate.priority > current.priority
    return candidate.relevance_score > current.relevance_score


def deduplicate_suggestions(candidates: List[Suggestion]) -> List[Tuple[int, Suggestion]]:
    """
    One winner per identity key, paired with the position of its key's first
    appearance so ranking ties stay stable.
    """
    winners: Dict[str, Tuple[int, Suggestion]] = {}

    for position, suggestion in enumerate(candidates):
        key = identity_key(suggestion)
        existing = winners.get(key)
        if existing is None:
            winners[key] = (position, suggestion)
        elif _beats(suggestion, existing[1]):
            winners[key] = (existing[0], suggestion)

    return list(winners.values())


def rank_suggestions(winners: List[Tuple[int, Suggestion]]) -> List[Suggestion]:
    """Score descending, then source priority descending, then first seen."""
    ordered = sorted(
        winners,
        key=lambda entry: (-entry[1].relevance_score, -entry[1].priority, entry[0])
    )
    return [suggestion for _, suggestion in ordered]


def to_response(suggestion: Suggestion) -> SuggestionResponse:
    """Strip ranking internals (source, relevance score)."""
    return SuggestionResponse(
        id=suggestion.id,
        label=suggestion.label,
        origin=suggestion.origin or None,
        destination=suggestion.destination or None,
        type=suggestion.type,
        description=suggestion.description or None,
    )


def aggregate_suggestions(
    candidates: List[Suggestion],
    limit: int = RESPONSE_LIMIT
) -> List[SuggestionResponse]:
    """Deduplicate, rank and truncate candidates into the response shape."""
    ranked = rank_suggestions(deduplicate_suggestions(candidates))
    return [to_response(s) for s in ranked[:max(0, limit)]]
