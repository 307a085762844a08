from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum

class SuggestionType(str, Enum):
    STATE = "state"
    CITY = "city"
    ROUTE = "route"
    DESTINATION = "destination"

class SuggestionSource(str, Enum):
    STATIC = "static"
    DATABASE = "database"
    AI = "ai"

# Trust ordering used when two sources produce the same place or route
SOURCE_PRIORITY = {
    SuggestionSource.STATIC: 3,
    SuggestionSource.DATABASE: 2,
    SuggestionSource.AI: 1,
}

# Suggestion Models
class Suggestion(BaseModel):
    """Internal candidate produced by one of the suggestion sources."""
    model_config = ConfigDict(frozen=True)

    id: str
    label: str = Field(min_length=1)
    origin: Optional[str] = None
    destination: Optional[str] = None
    type: SuggestionType
    source: SuggestionSource
    relevance_score: int = Field(ge=0, le=100)
    description: Optional[str] = None

    @field_validator('label')
    def validate_label(cls, v):
        if not v.strip():
            raise ValueError('Suggestion label must not be blank')
        return v

    @model_validator(mode='after')
    def validate_route_shape(self):
        if self.type == SuggestionType.ROUTE:
            origin = (self.origin or "").strip().lower()
            destination = (self.destination or "").strip().lower()
            if not origin or not destination or origin == destination:
                raise ValueError('A route needs distinct origin and destination')
        return self

    @property
    def priority(self) -> int:
        return SOURCE_PRIORITY[self.source]

class SuggestionResponse(BaseModel):
    """Externally visible suggestion (internal ranking fields stripped)."""
    id: str
    label: str
    origin: Optional[str] = None
    destination: Optional[str] = None
    type: SuggestionType
    description: Optional[str] = None

class SuggestionsEnvelope(BaseModel):
    suggestions: List[SuggestionResponse] = []
    rateLimited: Optional[bool] = None

# Trip Models
class TripCreate(BaseModel):
    origin: str = Field(min_length=1, max_length=120)
    destination: str = Field(min_length=1, max_length=120)
    budget: int = Field(ge=0)
    date_start: datetime
    date_end: datetime

    @field_validator('origin', 'destination')
    def validate_place(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Place name must not be blank')
        return v

    @model_validator(mode='after')
    def validate_dates(self):
        if self.date_end < self.date_start:
            raise ValueError('date_end must not be before date_start')
        return self

class TripResponse(BaseModel):
    id: str
    origin: str
    destination: str
    budget: int
    date_start: datetime
    date_end: datetime
    created_at: datetime

class TripRecord(BaseModel):
    """Row shape returned by the trip store to the history matcher."""
    id: str
    origin: str
    destination: str
    created_at: Optional[datetime] = None
