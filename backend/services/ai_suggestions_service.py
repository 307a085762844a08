"""
Generative suggestions for the search assistant.

The provider is asked either for a JSON document or for plain lines such as
"Seattle → Portland (train)". Whatever comes back is parsed into a small
tagged union (routes, destinations or a failure) and then converted into
``Suggestion`` objects. Nothing in here raises to the caller: a missing
credential yields a fixed fallback list and any provider or parse problem
yields an empty list.
"""
import asyncio
import json
import logging
import re
import uuid
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from models import Suggestion, SuggestionSource, SuggestionType
from providers.base import CompletionProvider, PromptStyle, ProviderError
from services.relevance import (
    calculate_relevance_score,
    classify_suggestion,
    format_route_label
)

logger = logging.getLogger(__name__)

MAX_AI_SUGGESTIONS = 8

ROUTE_LINE_PATTERN = re.compile(r"^(.+?)\s*(?:→|->)\s*(.+?)(?:\s*\((.+?)\))?$")
BULLET_PATTERN = re.compile(r"^\s*(?:[-*•]\s+|\d+[.)]\s*)")
TRAILING_NOTE_PATTERN = re.compile(r"\s*\(.*?\)$")
CODE_FENCE_PATTERN = re.compile(r"```(?:json)?\s*", re.IGNORECASE)

FALLBACK_DESTINATIONS = [("Boston", "train"), ("New York", "bus")]


JSON_PROMPT_TEMPLATE = """You are an expert eco-friendly travel planner. Analyze this search query: "{query}"

The query may be a place ("eco trips in California"), a route ("New York to Boston"),
a single city or state name, or a travel theme ("national parks", "green cities").

Suggest sustainable destinations (national parks, nature reserves, eco-lodges,
sustainable cities) and low-carbon routes that prefer train and bus over flights.
Use full, proper names and focus on US destinations unless international travel
is explicitly requested. Return 5-8 suggestions for place or theme queries and
3-5 for route queries.

Return a JSON object with this structure:
{{
  "suggestions": [
    {{
      "type": "destination" | "route",
      "name": "Display name, e.g. 'Yosemite National Park' or 'San Francisco → Yosemite (bus)'",
      "destination": "Destination place (required)",
      "origin": "Origin city (routes only)",
      "mode": "train, bus, car or flight (routes only)",
      "description": "One or two sentences on why this is a sustainable choice"
    }}
  ]
}}

Return ONLY valid JSON. No markdown, no code blocks."""


LINES_PROMPT_TEMPLATE = """Given the travel search query "{query}", suggest 5-8 popular travel destinations or eco-friendly routes that match.

Write one suggestion per line:
- a route as "Origin City → Destination City (mode)", where mode is train, bus, car or flight
- a destination as just its name

No numbering, no explanations, no other text."""


# ============ Parse results ============

@dataclass(frozen=True)
class ParsedRoute:
    origin: str
    destination: str
    mode: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class ParsedDestination:
    name: str
    destination: Optional[str] = None
    description: Optional[str] = None


ParsedItem = Union[ParsedRoute, ParsedDestination]


@dataclass(frozen=True)
class ParsedAsRoutes:
    """Items from a route-oriented payload (free-text lines or legacy ``routes``)."""
    items: List[ParsedItem] = field(default_factory=list)


@dataclass(frozen=True)
class ParsedAsDestinations:
    """Items from a destination-oriented payload (``suggestions`` or ``destinations``)."""
    items: List[ParsedItem] = field(default_factory=list)


@dataclass(frozen=True)
class ParseFailed:
    reason: str


ParseResult = Union[ParsedAsRoutes, ParsedAsDestinations, ParseFailed]


def build_prompt(query: str, style: PromptStyle = PromptStyle.JSON) -> str:
    template = JSON_PROMPT_TEMPLATE if style == PromptStyle.JSON else LINES_PROMPT_TEMPLATE
    return template.format(query=query.replace('"', "'"))


def _text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    text = str(value).strip()
    return text or None


def _item_from_fields(
    name: Optional[str],
    origin: Optional[str],
    destination: Optional[str],
    mode: Optional[str] = None,
    description: Optional[str] = None
) -> Optional[ParsedItem]:
    """Route when both ends are present and differ, otherwise a destination."""
    if classify_suggestion(origin, destination) == SuggestionType.ROUTE:
        return ParsedRoute(origin=origin, destination=destination, mode=mode, description=description)

    display = name or destination or origin
    if not display:
        return None
    return ParsedDestination(name=display, destination=destination or display, description=description)


# ============ Free text ============

def parse_line(line: str) -> Optional[ParsedItem]:
    """One line of free text: a route if it has an arrow, otherwise a place."""
    cleaned = BULLET_PATTERN.sub("", line).strip()
    if not cleaned:
        return None

    route_match = ROUTE_LINE_PATTERN.match(cleaned)
    if route_match:
        origin = route_match.group(1).strip()
        destination = route_match.group(2).strip()
        mode = (route_match.group(3) or "").strip() or None
        return _item_from_fields(None, origin or None, destination or None, mode)

    place = TRAILING_NOTE_PATTERN.sub("", cleaned).strip()
    if not place:
        return None
    return ParsedDestination(name=place, destination=place)


def parse_free_text(text: str) -> ParseResult:
    items = []
    for line in text.splitlines():
        if not line.strip():
            continue
        item = parse_line(line)
        if item is not None:
            items.append(item)

    if not items:
        return ParseFailed("no usable lines in completion")
    return ParsedAsRoutes(items=items)


# ============ JSON ============

def _parse_suggestion_item(raw: Any) -> Optional[ParsedItem]:
    if isinstance(raw, str):
        name = _text(raw)
        return ParsedDestination(name=name, destination=name) if name else None
    if not isinstance(raw, dict):
        return None

    name = _text(raw.get("name")) or _text(raw.get("label"))
    return _item_from_fields(
        name,
        _text(raw.get("origin")),
        _text(raw.get("destination")),
        _text(raw.get("mode")),
        _text(raw.get("description"))
    )


def _parse_legacy_route(raw: Any) -> Optional[ParsedItem]:
    if not isinstance(raw, dict):
        return None
    origin = _text(raw.get("origin"))
    destination = _text(raw.get("destination"))
    return _item_from_fields(
        destination or origin,
        origin,
        destination,
        _text(raw.get("mode")),
        _text(raw.get("description"))
    )


def _parse_legacy_destination(raw: Any) -> Optional[ParsedItem]:
    if isinstance(raw, str):
        return _parse_suggestion_item(raw)
    if not isinstance(raw, dict):
        return None
    name = _text(raw.get("name")) or _text(raw.get("destination"))
    if not name:
        return None
    return ParsedDestination(
        name=name,
        destination=_text(raw.get("destination")) or name,
        description=_text(raw.get("description"))
    )


def parse_json_payload(data: Any) -> ParseResult:
    """Map a decoded JSON document onto the parse union."""
    if isinstance(data, list):
        items = [i for i in map(_parse_suggestion_item, data) if i is not None]
        return ParsedAsDestinations(items=items)

    if not isinstance(data, dict):
        return ParseFailed(f"unexpected JSON top-level type {type(data).__name__}")

    if isinstance(data.get("suggestions"), list):
        items = [i for i in map(_parse_suggestion_item, data["suggestions"]) if i is not None]
        return ParsedAsDestinations(items=items)

    # Older prompt versions answered with separate arrays
    if isinstance(data.get("routes"), list):
        items = [i for i in map(_parse_legacy_route, data["routes"]) if i is not None]
        return ParsedAsRoutes(items=items)

    if isinstance(data.get("destinations"), list):
        items = [i for i in map(_parse_legacy_destination, data["destinations"]) if i is not None]
        return ParsedAsDestinations(items=items)

    return ParseFailed("JSON object has no suggestions, routes or destinations array")


def parse_completion(text: str) -> ParseResult:
    """
    Parse a raw completion that may be JSON (optionally fenced) or free text.

    Text that looks like JSON but does not decode is a failure rather than
    free text, so half a JSON document never turns into place names.
    """
    if not text or not text.strip():
        return ParseFailed("empty completion")

    cleaned = CODE_FENCE_PATTERN.sub("", text).replace("```", "").strip()
    if not cleaned:
        return ParseFailed("empty completion")

    if cleaned[0] in "{[":
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            return ParseFailed(f"malformed JSON: {e}")
        return parse_json_payload(data)

    return parse_free_text(cleaned)


# ============ Conversion ============

def _ai_id(idx: int) -> str:
    return f"ai:{idx}-{uuid.uuid4().hex[:9]}"


def route_to_suggestion(item: ParsedRoute, query: str, idx: int) -> Suggestion:
    return Suggestion(
        id=_ai_id(idx),
        label=format_route_label(item.origin, item.destination, item.mode),
        origin=item.origin,
        destination=item.destination,
        type=SuggestionType.ROUTE,
        source=SuggestionSource.AI,
        relevance_score=calculate_relevance_score(query, item.origin, item.destination),
        description=item.description or "Eco-friendly route",
    )


def destination_to_suggestion(item: ParsedDestination, query: str, idx: int) -> Suggestion:
    destination = item.destination or item.name
    return Suggestion(
        id=_ai_id(idx),
        label=item.name,
        destination=destination,
        type=SuggestionType.DESTINATION,
        source=SuggestionSource.AI,
        relevance_score=calculate_relevance_score(query, destination=destination),
        description=item.description or "Eco-friendly destination",
    )


def to_suggestions(result: ParseResult, query: str, max_items: int = MAX_AI_SUGGESTIONS) -> List[Suggestion]:
    if isinstance(result, ParseFailed):
        return []

    suggestions = []
    for idx, item in enumerate(result.items[:max_items]):
        convert = route_to_suggestion if isinstance(item, ParsedRoute) else destination_to_suggestion
        try:
            suggestions.append(convert(item, query, idx))
        except ValueError as e:
            logger.warning(f"Skipping malformed AI suggestion {item!r}: {e}")
    return suggestions


def get_fallback_suggestions(query: str) -> List[Suggestion]:
    """Deterministic suggestions used when no provider credential is configured."""
    q = query.strip()
    if not q:
        return []

    suggestions = []
    for idx, (destination, mode) in enumerate(FALLBACK_DESTINATIONS, start=1):
        item = _item_from_fields(None, q, destination, mode)
        if isinstance(item, ParsedRoute):
            suggestion = route_to_suggestion(item, q, idx)
        else:
            suggestion = destination_to_suggestion(item, q, idx)
        suggestions.append(suggestion.model_copy(update={"id": f"ai:fallback-{idx}"}))
    return suggestions


async def get_ai_suggestions(
    query: str,
    provider: Optional[CompletionProvider],
    style: PromptStyle = PromptStyle.JSON,
    max_items: int = MAX_AI_SUGGESTIONS,
    timeout: float = 8.0
) -> List[Suggestion]:
    """
    Ask the provider for suggestions and convert them.

    ``provider`` is None when no credential is configured, in which case
    the static fallback list is returned.
    """
    q = (query or "").strip()
    if not q:
        return []

    if provider is None:
        logger.info("No AI provider configured, using fallback suggestions")
        return get_fallback_suggestions(q)

    try:
        text = await asyncio.wait_for(provider.complete(build_prompt(q, style), style), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"{provider.name} suggestions timed out after {timeout}s")
        return []
    except ProviderError as e:
        if e.status_code == 429:
            logger.error(f"{provider.name} rate limit exceeded")
        elif e.status_code == 401:
            logger.error(f"{provider.name} authentication failed")
        else:
            logger.error(f"{provider.name} API error: {e.message}")
        return []
    except Exception as e:
        logger.error(f"Error fetching AI suggestions: {e}", exc_info=True)
        return []

    result = parse_completion(text)
    if isinstance(result, ParseFailed):
        logger.warning(f"Could not parse AI suggestions: {result.reason}")
        return []

    suggestions = to_suggestions(result, q, max_items)
    logger.debug(f"AI adapter produced {len(suggestions)} suggestions for '{q}'")
    return suggestions
