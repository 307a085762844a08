"""MongoDB-backed trip store (motor)."""
import logging
import re
from typing import List

from models import TripRecord
from .base import TripStore

logger = logging.getLogger(__name__)


class MongoTripStore(TripStore):
    """Trip history stored in the ``trips`` collection."""

    def __init__(self, collection):
        self.collection = collection

    async def find_matching_trips(self, substring: str, limit: int = 20) -> List[TripRecord]:
        pattern = {"$regex": re.escape(substring.strip()), "$options": "i"}
        cursor = self.collection.find(
            {"$or": [{"origin": pattern}, {"destination": pattern}]},
            {"origin": 1, "destination": 1, "created_at": 1}
        ).sort("created_at", -1).limit(limit)

        trips = await cursor.to_list(limit)
        logger.debug(f"Trip store matched {len(trips)} trips for '{substring}'")

        return [
            TripRecord(
                id=str(trip["_id"]),
                origin=trip.get("origin") or "",
                destination=trip.get("destination") or "",
                created_at=trip.get("created_at")
            )
            for trip in trips
        ]
