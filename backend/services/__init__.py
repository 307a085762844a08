"""Business services for EcoRoute application."""
from .relevance import (
    calculate_relevance_score,
    classify_suggestion,
    route_identity_key,
    format_route_label
)
from .gazetteer import filter_locations, get_static_suggestions
from .history_service import get_history_suggestions
from .ai_suggestions_service import get_ai_suggestions, parse_completion
from .aggregator import aggregate_suggestions
from .rate_limiter import RateLimiter, resolve_client_key
from .suggestions_service import SuggestionOptions, SuggestionsResult, get_search_suggestions
