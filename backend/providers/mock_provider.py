"""
In-memory collaborators for development and tests.

``InMemoryTripStore`` mimics the trip store query semantics and
``MockCompletionProvider`` replays canned completions (or fails on demand).
"""
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional
import uuid

from models import TripRecord
from .base import CompletionProvider, PromptStyle, ProviderError, TripStore

logger = logging.getLogger(__name__)


class InMemoryTripStore(TripStore):
    """Trip store kept in a list; can be told to fail."""

    def __init__(self, trips: Optional[List[TripRecord]] = None, fail_with: Exception = None):
        self.trips: List[TripRecord] = list(trips or [])
        self.fail_with = fail_with
        self.calls = 0

    def add(self, origin: str, destination: str, created_at: datetime = None) -> TripRecord:
        trip = TripRecord(
            id=uuid.uuid4().hex,
            origin=origin,
            destination=destination,
            created_at=created_at or datetime.now(timezone.utc)
        )
        self.trips.append(trip)
        return trip

    async def find_matching_trips(self, substring: str, limit: int = 20) -> List[TripRecord]:
        self.calls += 1
        if self.fail_with is not None:
            raise self.fail_with

        q = substring.strip().lower()
        matches = [
            t for t in self.trips
            if q in t.origin.lower() or q in t.destination.lower()
        ]
        epoch = datetime.min.replace(tzinfo=timezone.utc)
        matches.sort(key=lambda t: t.created_at or epoch, reverse=True)
        return matches[:limit]


class MockCompletionProvider(CompletionProvider):
    """Returns a fixed response per prompt style, or raises ``fail_with``."""

    def __init__(
        self,
        responses: Optional[Dict[PromptStyle, str]] = None,
        fail_with: Exception = None
    ):
        self.responses = responses or {}
        self.fail_with = fail_with
        self.prompts: List[str] = []

    @property
    def name(self) -> str:
        return "MockProvider"

    async def complete(self, prompt: str, style: PromptStyle = PromptStyle.JSON) -> str:
        self.prompts.append(prompt)
        logger.info(f"[MOCK] Completion requested ({style.value})")
        if self.fail_with is not None:
            raise self.fail_with
        if style not in self.responses:
            raise ProviderError(f"No canned response for style '{style.value}'")
        return self.responses[style]
