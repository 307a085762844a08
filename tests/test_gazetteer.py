"""
EcoRoute Tests - Static gazetteer
"""
from models import SuggestionSource, SuggestionType
from services.gazetteer import (
    ALL_LOCATIONS,
    MAJOR_CITIES,
    US_STATES,
    filter_locations,
    get_static_suggestions
)


class TestFilterLocations:
    """Substring matching and tier ordering"""

    def test_gazetteer_contents(self):
        assert len(US_STATES) == 50
        assert len(ALL_LOCATIONS) == len(US_STATES) + len(MAJOR_CITIES)

    def test_empty_query_returns_nothing(self):
        assert filter_locations("") == []
        assert filter_locations("   ") == []

    def test_prefix_matches_sorted_alphabetically(self):
        names = [loc.name for loc in filter_locations("san")]
        assert names == ["San Antonio", "San Diego", "San Francisco", "San Jose"]

    def test_exact_matches_come_first(self):
        results = filter_locations("washington")
        assert [loc.name for loc in results] == ["Washington", "Washington"]
        # states are listed ahead of cities for the same name
        assert [loc.type for loc in results] == [SuggestionType.STATE, SuggestionType.CITY]

    def test_prefix_before_substring(self):
        names = [loc.name for loc in filter_locations("new")]
        assert names[0].startswith("New")
        assert names == sorted(names, key=str.lower)

    def test_substring_only_matches(self):
        names = [loc.name for loc in filter_locations("ton")]
        assert names == ["Arlington", "Boston", "Houston", "San Antonio", "Washington", "Washington"]

    def test_exact_then_prefix_then_substring(self):
        names = [loc.name for loc in filter_locations("kansas")]
        # exact "Kansas", prefix "Kansas City", substring "Arkansas"
        assert names == ["Kansas", "Kansas City", "Arkansas"]

    def test_case_insensitive(self):
        assert [loc.name for loc in filter_locations("BOSTON")] == ["Boston"]

    def test_limit(self):
        assert len(filter_locations("a", limit=3)) == 3
        assert filter_locations("a", limit=0) == []


class TestStaticSuggestions:
    """Gazetteer entries as suggestions"""

    def test_calif_scenario(self):
        suggestions = get_static_suggestions("calif")
        assert len(suggestions) == 1
        california = suggestions[0]
        assert california.label == "California"
        assert california.type == SuggestionType.STATE
        assert california.source == SuggestionSource.STATIC
        # prefix match (80) plus the curated boost
        assert california.relevance_score == 90
        assert california.id.startswith("static-")

    def test_exact_match_score_is_capped(self):
        boston = get_static_suggestions("boston")[0]
        assert boston.relevance_score == 100

    def test_city_type(self):
        denver = get_static_suggestions("denver")[0]
        assert denver.type == SuggestionType.CITY
        assert denver.destination == "Denver"
        assert denver.origin is None
