import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from zokey.core.config import settings
from zokey.core.exceptions import UserNotFoundError
from zokey.data.categories import currency_for_region
from zokey.schemas.search import NormalizedQuery
from zokey.schemas.user import SubscriptionStatus, User

logger = logging.getLogger(__name__)


def _to_user(doc: dict[str, Any]) -> User:
    doc = dict(doc)
    doc.pop("_id", None)
    return User.model_validate(doc)


class UserService:
    """Device-scoped users, free-search quota, search history and analytics events"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.users = db[settings.USERS_COLLECTION]
        self.history = db[settings.SEARCH_HISTORY_COLLECTION]
        self.events = db[settings.ANALYTICS_COLLECTION]

    # ============================================================================
    # Users
    # ============================================================================

    async def register(self, device_id: str, region: str) -> User:
        """Create the user for a device, or refresh region/currency if it exists."""
        now = datetime.now(timezone.utc)
        doc = await self.users.find_one_and_update(
            {"device_id": device_id},
            {
                "$set": {"region": region, "currency": currency_for_region(region), "updated_at": now},
                "$setOnInsert": {
                    "id": str(uuid.uuid4()),
                    "device_id": device_id,
                    "free_searches_used": 0,
                    "free_searches_limit": settings.FREE_SEARCH_LIMIT,
                    "subscription_status": "none",
                    "subscription_expires_at": None,
                    "created_at": now,
                },
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        logger.info(f"Registered device {device_id} in {region}")
        return _to_user(doc)

    async def get_user(self, user_id: str) -> User:
        doc = await self.users.find_one({"id": user_id})
        if not doc:
            raise UserNotFoundError(user_id)
        return _to_user(doc)

    async def increment_search_count(self, user_id: str) -> User:
        doc = await self.users.find_one_and_update(
            {"id": user_id},
            {"$inc": {"free_searches_used": 1}, "$set": {"updated_at": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise UserNotFoundError(user_id)
        return _to_user(doc)

    async def update_subscription(
        self,
        user_id: str,
        status: SubscriptionStatus,
        expires_at: datetime | None = None,
    ) -> User:
        doc = await self.users.find_one_and_update(
            {"id": user_id},
            {
                "$set": {
                    "subscription_status": status,
                    "subscription_expires_at": expires_at,
                    "updated_at": datetime.now(timezone.utc),
                }
            },
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise UserNotFoundError(user_id)
        logger.info(f"Subscription for {user_id} set to {status}")
        return _to_user(doc)

    # ============================================================================
    # History & analytics
    # ============================================================================

    async def record_search(
        self,
        user_id: str,
        query: NormalizedQuery,
        query_hash: str,
        region: str,
        result_count: int,
    ) -> str:
        """Store a completed search; returns its id."""
        search_id = str(uuid.uuid4())
        await self.history.insert_one(
            {
                "id": search_id,
                "user_id": user_id,
                "category_id": query.category_path[0],
                "subcategory_id": query.category_path[-1],
                "query_hash": query_hash,
                "normalized_query": query.model_dump(mode="json"),
                "region": region,
                "result_count": result_count,
                "completed": True,
                "created_at": datetime.now(timezone.utc),
            }
        )
        return search_id

    async def track_event(self, user_id: str | None, event_type: str, event_data: dict[str, Any]) -> None:
        await self.events.insert_one(
            {
                "user_id": user_id,
                "event_type": event_type,
                "event_data": event_data,
                "created_at": datetime.now(timezone.utc),
            }
        )
