"""Trip history routes."""
from fastapi import APIRouter, Depends, Query
from datetime import datetime, timezone
from typing import List
from bson import ObjectId
import logging

from core.exceptions import NotFoundError
from database import trips_collection
from models import TripCreate, TripResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def get_trips_collection():
    return trips_collection


def serialize_trip(trip: dict) -> dict:
    return {
        "id": str(trip["_id"]),
        "origin": trip["origin"],
        "destination": trip["destination"],
        "budget": trip["budget"],
        "date_start": trip["date_start"],
        "date_end": trip["date_end"],
        "created_at": trip["created_at"]
    }


@router.post("", response_model=TripResponse, status_code=201)
async def create_trip(trip_data: TripCreate, collection=Depends(get_trips_collection)):
    """Record a planned trip; it becomes searchable in suggestions."""
    trip_doc = {
        **trip_data.model_dump(),
        "created_at": datetime.now(timezone.utc)
    }

    result = await collection.insert_one(trip_doc)
    trip_doc["_id"] = result.inserted_id
    logger.info(f"Trip created: {trip_doc['origin']} -> {trip_doc['destination']}")

    return serialize_trip(trip_doc)


@router.get("", response_model=List[TripResponse])
async def list_trips(
    limit: int = Query(20, ge=1, le=100),
    collection=Depends(get_trips_collection)
):
    """Most recently created trips first."""
    trips = await collection.find({}).sort("created_at", -1).limit(limit).to_list(limit)
    return [serialize_trip(trip) for trip in trips]


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(trip_id: str, collection=Depends(get_trips_collection)):
    """Get a trip by id."""
    trip = await collection.find_one({"_id": ObjectId(trip_id)})
    if not trip:
        raise NotFoundError("Trip")
    return serialize_trip(trip)
