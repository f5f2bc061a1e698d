import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from zokey.core.config import settings

logger = logging.getLogger(__name__)
mongo_client: AsyncIOMotorClient | None = None
mongo_db: AsyncIOMotorDatabase | None = None


async def connect_mongo():
    global mongo_client, mongo_db
    mongo_client = AsyncIOMotorClient(settings.MONGO_URL)
    mongo_db = mongo_client[settings.MONGO_DB_NAME]
    logger.info(f"Connected to MongoDB: {settings.MONGO_DB_NAME}")


async def ensure_indexes():
    """Create the cache, user and history indexes (idempotent)."""
    db = get_mongo_db()
    cache = db[settings.SEARCH_CACHE_COLLECTION]
    await cache.create_index([("query_hash", ASCENDING), ("region", ASCENDING)], unique=True)
    # Background purge of expired rows; reads still filter on expires_at
    await cache.create_index("expires_at", expireAfterSeconds=0)
    await db[settings.USERS_COLLECTION].create_index("device_id", unique=True)
    await db[settings.USERS_COLLECTION].create_index("id", unique=True)
    await db[settings.SEARCH_HISTORY_COLLECTION].create_index([("user_id", ASCENDING), ("created_at", ASCENDING)])
    logger.info("MongoDB indexes ensured")


async def close_mongo():
    global mongo_client
    if mongo_client:
        mongo_client.close()
        logger.info("MongoDB connection closed")


def get_mongo_db() -> AsyncIOMotorDatabase:
    if mongo_db is None:
        raise RuntimeError("MongoDB not connected. Ensure connect_mongo() was called.")
    return mongo_db
