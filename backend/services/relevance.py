"""
Relevance scoring and route identity helpers shared by every suggestion source.

Score tiers (first match wins, evaluated top-down):
- 100: query equals origin or destination
- 80: query is a prefix of origin or destination
- 60: origin or destination contains the query
- 40: a query word is a prefix of an origin/destination word
- 20: fallback for candidates accepted by some other lookup
"""
from typing import Optional

from models import SuggestionType

EXACT_MATCH_SCORE = 100
PREFIX_MATCH_SCORE = 80
SUBSTRING_MATCH_SCORE = 60
WORD_PREFIX_MATCH_SCORE = 40
FALLBACK_SCORE = 20

ROUTE_ARROW = "→"


def _normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def calculate_relevance_score(
    query: str,
    origin: Optional[str] = None,
    destination: Optional[str] = None
) -> int:
    """Score how well a candidate's origin/destination matches the raw query."""
    q = _normalize(query)
    if not q:
        return FALLBACK_SCORE

    fields = [f for f in (_normalize(origin), _normalize(destination)) if f]

    if any(f == q for f in fields):
        return EXACT_MATCH_SCORE
    if any(f.startswith(q) for f in fields):
        return PREFIX_MATCH_SCORE
    if any(q in f for f in fields):
        return SUBSTRING_MATCH_SCORE

    query_words = q.split()
    field_words = [word for f in fields for word in f.split()]
    if any(fw.startswith(qw) for qw in query_words for fw in field_words):
        return WORD_PREFIX_MATCH_SCORE

    return FALLBACK_SCORE


def is_route(origin: Optional[str], destination: Optional[str]) -> bool:
    """Both ends present and different (case-insensitive, trimmed)."""
    o = _normalize(origin)
    d = _normalize(destination)
    return bool(o and d and o != d)


def classify_suggestion(
    origin: Optional[str],
    destination: Optional[str],
    declared_type: Optional[SuggestionType] = None
) -> SuggestionType:
    """
    Resolve the presentation type of a candidate.

    A declared place type (state/city) is kept. A declared route that does not
    have two distinct ends is downgraded to a destination.
    """
    if declared_type in (SuggestionType.STATE, SuggestionType.CITY):
        return declared_type
    if is_route(origin, destination):
        return SuggestionType.ROUTE
    return SuggestionType.DESTINATION


def route_identity_key(
    origin: Optional[str],
    destination: Optional[str],
    label: str = ""
) -> str:
    """Deduplication key: mode and description are deliberately ignored."""
    o = _normalize(origin)
    d = _normalize(destination)
    if o and d:
        return f"{o}{ROUTE_ARROW}{d}"
    return d or o or _normalize(label)


def format_route_label(origin: str, destination: str, mode: Optional[str] = None) -> str:
    label = f"{origin.strip()} {ROUTE_ARROW} {destination.strip()}"
    if mode and mode.strip():
        label += f" ({mode.strip()})"
    return label
