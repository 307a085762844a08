"""Collaborator providers: trip store and generative completion."""
from .base import CompletionProvider, PromptStyle, ProviderError, TripStore
from .mock_provider import InMemoryTripStore, MockCompletionProvider
from .mongo_trip_store import MongoTripStore
from .openai_provider import OpenAIProvider

__all__ = [
    "CompletionProvider",
    "PromptStyle",
    "ProviderError",
    "TripStore",
    "InMemoryTripStore",
    "MockCompletionProvider",
    "MongoTripStore",
    "OpenAIProvider"
]
