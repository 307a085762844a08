"""
Static gazetteer of US states and major cities.

Used for instant, always-available suggestions while the slower sources
(trip history, generative provider) are still being queried.
"""
from dataclasses import dataclass
from typing import List

from models import Suggestion, SuggestionSource, SuggestionType
from services.relevance import calculate_relevance_score

# Curated entries rank slightly above what the generic scorer gives them
STATIC_SCORE_BOOST = 10

US_STATES = [
    "Alabama", "Alaska", "Arizona", "Arkansas", "California", "Colorado",
    "Connecticut", "Delaware", "Florida", "Georgia", "Hawaii", "Idaho",
    "Illinois", "Indiana", "Iowa", "Kansas", "Kentucky", "Louisiana",
    "Maine", "Maryland", "Massachusetts", "Michigan", "Minnesota", "Mississippi",
    "Missouri", "Montana", "Nebraska", "Nevada", "New Hampshire", "New Jersey",
    "New Mexico", "New York", "North Carolina", "North Dakota", "Ohio", "Oklahoma",
    "Oregon", "Pennsylvania", "Rhode Island", "South Carolina", "South Dakota",
    "Tennessee", "Texas", "Utah", "Vermont", "Virginia", "Washington",
    "West Virginia", "Wisconsin", "Wyoming",
]

MAJOR_CITIES = [
    "New York", "Los Angeles", "Chicago", "Houston", "Phoenix", "Philadelphia",
    "San Antonio", "San Diego", "Dallas", "San Jose", "Austin", "Jacksonville",
    "Fort Worth", "Columbus", "Charlotte", "San Francisco", "Indianapolis",
    "Seattle", "Denver", "Washington", "Boston", "El Paso", "Nashville",
    "Detroit", "Oklahoma City", "Portland", "Las Vegas", "Memphis", "Louisville",
    "Baltimore", "Milwaukee", "Albuquerque", "Tucson", "Fresno", "Sacramento",
    "Kansas City", "Mesa", "Atlanta", "Omaha", "Colorado Springs", "Raleigh",
    "Virginia Beach", "Miami", "Oakland", "Minneapolis", "Tulsa", "Cleveland",
    "Wichita", "Arlington", "Tampa", "New Orleans",
]


@dataclass(frozen=True)
class Location:
    id: str
    name: str
    type: SuggestionType


def get_all_locations() -> List[Location]:
    """All known places, states first."""
    states = [
        Location(id=f"state-{idx}", name=name, type=SuggestionType.STATE)
        for idx, name in enumerate(US_STATES)
    ]
    cities = [
        Location(id=f"city-{idx}", name=name, type=SuggestionType.CITY)
        for idx, name in enumerate(MAJOR_CITIES)
    ]
    return states + cities


ALL_LOCATIONS = get_all_locations()


def filter_locations(query: str, limit: int = 10) -> List[Location]:
    """
    Case-insensitive substring filter over the gazetteer.

    Exact matches first, then prefix matches, then the remaining substring
    matches; alphabetical within each tier.
    """
    q = (query or "").strip().lower()
    if not q or limit <= 0:
        return []

    def tier(location: Location) -> int:
        name = location.name.lower()
        if name == q:
            return 0
        if name.startswith(q):
            return 1
        return 2

    matches = [loc for loc in ALL_LOCATIONS if q in loc.name.lower()]
    # sorted() is stable, so equal names keep states ahead of cities
    matches = sorted(matches, key=lambda loc: (tier(loc), loc.name.lower()))
    return matches[:limit]


def get_static_suggestions(query: str, limit: int = 10) -> List[Suggestion]:
    """Gazetteer matches as static-source suggestions."""
    suggestions = []
    for location in filter_locations(query, limit):
        score = calculate_relevance_score(query, destination=location.name)
        suggestions.append(Suggestion(
            id=f"static-{location.id}",
            label=location.name,
            destination=location.name,
            type=location.type,
            source=SuggestionSource.STATIC,
            relevance_score=min(100, score + STATIC_SCORE_BOOST),
        ))
    return suggestions
