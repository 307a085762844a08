"""Shared fixtures: in-memory collaborators and an API client wired to them."""
import pytest
from bson import ObjectId
from datetime import datetime, timezone
from fastapi.testclient import TestClient

from models import Suggestion, SuggestionSource, SuggestionType
from providers import InMemoryTripStore, MockCompletionProvider, PromptStyle


class FakeInsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class FakeCursor:
    """Just enough of a motor cursor for the trips routes and store."""

    def __init__(self, docs):
        self.docs = list(docs)
        self.sort_spec = None
        self.limit_value = None

    def sort(self, key, direction):
        self.sort_spec = (key, direction)
        epoch = datetime.min.replace(tzinfo=timezone.utc)
        self.docs.sort(key=lambda d: d.get(key) or epoch, reverse=direction < 0)
        return self

    def limit(self, n):
        self.limit_value = n
        self.docs = self.docs[:n]
        return self

    async def to_list(self, length):
        return self.docs[:length]


class FakeCollection:
    """In-memory stand-in for a motor collection."""

    def __init__(self, docs=None):
        self.docs = list(docs or [])
        self.last_filter = None
        self.last_projection = None
        self.last_cursor = None

    async def insert_one(self, doc):
        doc = dict(doc)
        doc.setdefault("_id", ObjectId())
        self.docs.append(doc)
        return FakeInsertResult(doc["_id"])

    def find(self, filter=None, projection=None):
        self.last_filter = filter
        self.last_projection = projection
        self.last_cursor = FakeCursor(self.docs)
        return self.last_cursor

    async def find_one(self, filter):
        for doc in self.docs:
            if all(doc.get(k) == v for k, v in filter.items()):
                return doc
        return None


JSON_COMPLETION = """{
  "suggestions": [
    {"type": "destination", "name": "Yosemite National Park", "destination": "Yosemite National Park",
     "description": "Iconic park with a sustainable shuttle system."},
    {"type": "route", "name": "San Francisco → Yosemite (bus)", "origin": "San Francisco",
     "destination": "Yosemite National Park", "mode": "bus",
     "description": "Low-carbon bus route."},
    {"type": "destination", "name": "California", "destination": "California"}
  ]
}"""

LINES_COMPLETION = """Seattle → Portland (train)
San Diego → Los Angeles (train)
Lake Tahoe"""


def make_suggestion(
    source=SuggestionSource.STATIC,
    score=50,
    origin=None,
    destination=None,
    label=None,
    type=None,
    id=None,
    description=None
):
    if type is None:
        if origin and destination and origin.lower() != destination.lower():
            type = SuggestionType.ROUTE
        else:
            type = SuggestionType.DESTINATION
    if label is None:
        label = f"{origin} → {destination}" if type == SuggestionType.ROUTE else (destination or origin)
    return Suggestion(
        id=id or f"{source.value}:{label}",
        label=label,
        origin=origin,
        destination=destination,
        type=type,
        source=source,
        relevance_score=score,
        description=description
    )


@pytest.fixture
def trip_store():
    store = InMemoryTripStore()
    store.add("Boston", "New York", datetime(2025, 1, 1, tzinfo=timezone.utc))
    store.add("Boston", "Chicago", datetime(2025, 2, 1, tzinfo=timezone.utc))
    store.add("Seattle", "Boston", datetime(2025, 3, 1, tzinfo=timezone.utc))
    return store


@pytest.fixture
def provider():
    return MockCompletionProvider(responses={
        PromptStyle.JSON: JSON_COMPLETION,
        PromptStyle.LINES: LINES_COMPLETION,
    })


@pytest.fixture
def trips_collection():
    return FakeCollection()


@pytest.fixture
def app(trip_store, provider, trips_collection):
    from server import create_app
    from core.dependencies import get_completion_provider, get_trip_store
    from routers.trips import get_trips_collection

    application = create_app()
    application.dependency_overrides[get_trip_store] = lambda: trip_store
    application.dependency_overrides[get_completion_provider] = lambda: provider
    application.dependency_overrides[get_trips_collection] = lambda: trips_collection
    return application


@pytest.fixture
def client(app):
    return TestClient(app)
