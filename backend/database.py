from motor.motor_asyncio import AsyncIOMotorClient
import logging

from core.config import settings

logger = logging.getLogger(__name__)

client = AsyncIOMotorClient(settings.mongo_url)
db = client[settings.db_name]

# Collections
trips_collection = db.trips

async def init_indexes():
    """Initialize database indexes"""
    await trips_collection.create_index([("created_at", -1)])
    await trips_collection.create_index([("origin", 1), ("destination", 1)])
    logger.info("Database indexes created successfully")
