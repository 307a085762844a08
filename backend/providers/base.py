"""
Collaborator interfaces consumed by the suggestion engine.

The engine never talks to MongoDB or OpenAI directly: it goes through a
trip store and a completion provider so either can be swapped (or faked in
tests) without touching the core.
"""
from abc import ABC, abstractmethod
from typing import List
from enum import Enum

from models import TripRecord


class PromptStyle(str, Enum):
    """Response format requested from the completion provider."""
    JSON = "json"
    LINES = "lines"


class ProviderError(Exception):
    """Raised by a completion provider when a call cannot produce text."""
    def __init__(self, message: str, status_code: int = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class TripStore(ABC):
    """Read access to persisted trip history."""

    @abstractmethod
    async def find_matching_trips(self, substring: str, limit: int = 20) -> List[TripRecord]:
        """
        Trips whose origin or destination contains ``substring``
        (case-insensitive), most recently created first.
        """
        pass


class CompletionProvider(ABC):
    """Generative text/JSON provider. One attempt per call, no retries."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logs."""
        pass

    @abstractmethod
    async def complete(self, prompt: str, style: PromptStyle = PromptStyle.JSON) -> str:
        """Return the raw completion text or raise."""
        pass
