"""Search cache: stores (raw products, ranking) per (query hash, region) with a short TTL"""

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Protocol

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel, ValidationError
from pymongo.errors import PyMongoError

from zokey.core.config import settings
from zokey.core.exceptions import CacheUnavailableError
from zokey.core.mongo import get_mongo_db
from zokey.schemas.product import Product, RankingResult
from zokey.schemas.search import NormalizedQuery

logger = logging.getLogger(__name__)

FetchAndRank = Callable[[], Awaitable[tuple[list[Product], RankingResult]]]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CachedSearch(BaseModel):
    raw_results: list[Product]
    ranked_result: RankingResult


class SearchCacheStore(Protocol):
    async def get_cached_search(self, query_hash: str, region: str) -> CachedSearch | None: ...

    async def set_cached_search(
        self,
        query_hash: str,
        region: str,
        raw_results: list[Product],
        ranked_result: RankingResult,
        ttl_hours: float,
    ) -> None: ...

    async def purge_expired(self) -> int: ...


class InMemorySearchCache:
    """Process-local store used by tests and MOCK_MODE"""

    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self._store: dict[tuple[str, str], tuple[datetime, CachedSearch]] = {}
        self._lock = threading.Lock()
        self._clock = clock

    async def get_cached_search(self, query_hash: str, region: str) -> CachedSearch | None:
        with self._lock:
            entry = self._store.get((query_hash, region))
            if not entry:
                return None
            expires_at, payload = entry
            if expires_at <= self._clock():
                return None
            return payload

    async def set_cached_search(self, query_hash, region, raw_results, ranked_result, ttl_hours) -> None:
        expires_at = self._clock() + timedelta(hours=ttl_hours)
        payload = CachedSearch(raw_results=raw_results, ranked_result=ranked_result)
        with self._lock:
            self._store[(query_hash, region)] = (expires_at, payload)

    async def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [key for key, (expires_at, _) in self._store.items() if expires_at <= now]
            for key in expired:
                del self._store[key]
        return len(expired)


class MongoSearchCache:
    """MongoDB-backed store; expiry is checked on read, the TTL index reclaims space"""

    def __init__(self, db: AsyncIOMotorDatabase, timeout_seconds: float = settings.CACHE_TIMEOUT_SECONDS):
        self.collection = db[settings.SEARCH_CACHE_COLLECTION]
        self.timeout_seconds = timeout_seconds

    async def get_cached_search(self, query_hash: str, region: str) -> CachedSearch | None:
        try:
            doc = await asyncio.wait_for(
                self.collection.find_one(
                    {"query_hash": query_hash, "region": region, "expires_at": {"$gt": utcnow()}},
                    {"_id": 0, "raw_results": 1, "ranked_result": 1},
                ),
                timeout=self.timeout_seconds,
            )
        except (PyMongoError, asyncio.TimeoutError) as e:
            raise CacheUnavailableError("read", e) from e
        if not doc:
            return None
        try:
            return CachedSearch.model_validate(doc)
        except ValidationError as e:
            raise CacheUnavailableError("read", e) from e

    async def set_cached_search(self, query_hash, region, raw_results, ranked_result, ttl_hours) -> None:
        now = utcnow()
        update = {
            "$set": {
                "raw_results": [product.model_dump(mode="json") for product in raw_results],
                "ranked_result": ranked_result.model_dump(mode="json"),
                "expires_at": now + timedelta(hours=ttl_hours),
                "updated_at": now,
            },
            "$setOnInsert": {"created_at": now},
        }
        try:
            await asyncio.wait_for(
                self.collection.update_one({"query_hash": query_hash, "region": region}, update, upsert=True),
                timeout=self.timeout_seconds,
            )
        except (PyMongoError, asyncio.TimeoutError) as e:
            raise CacheUnavailableError("write", e) from e

    async def purge_expired(self) -> int:
        try:
            result = await asyncio.wait_for(
                self.collection.delete_many({"expires_at": {"$lte": utcnow()}}),
                timeout=self.timeout_seconds,
            )
        except (PyMongoError, asyncio.TimeoutError) as e:
            raise CacheUnavailableError("purge", e) from e
        return result.deleted_count


class SearchCacheGateway:
    """
    Read-through cache around the fetch + rank step.

    A store failure on read is treated as a miss and a failure on write is
    logged and dropped. Errors from ``fetch_and_rank`` propagate and nothing
    is stored for them.
    """

    def __init__(self, store: SearchCacheStore, ttl_hours: float = settings.CACHE_TTL_HOURS):
        self.store = store
        self.ttl_hours = ttl_hours

    async def get_or_compute(
        self,
        query: NormalizedQuery,
        query_hash: str,
        region: str,
        fetch_and_rank: FetchAndRank,
    ) -> tuple[list[Product], RankingResult, bool]:
        try:
            cached = await self.store.get_cached_search(query_hash, region)
        except CacheUnavailableError as e:
            logger.error(f"Cache read failed for {query_hash}/{region}, treating as miss: {e}")
            cached = None

        if cached is not None:
            logger.info(f"Cache hit: {query_hash}/{region}")
            return cached.raw_results, cached.ranked_result, True

        logger.info(f"Cache miss: {query_hash}/{region} keywords={query.keywords}")
        products, ranking = await fetch_and_rank()

        try:
            await self.store.set_cached_search(query_hash, region, products, ranking, self.ttl_hours)
        except CacheUnavailableError as e:
            logger.error(f"Cache write failed for {query_hash}/{region}: {e}")

        return products, ranking, False


@lru_cache
def get_search_cache_store() -> SearchCacheStore:
    """Mongo store normally, in-memory store in MOCK_MODE"""
    if settings.MOCK_MODE:
        logger.info("MOCK_MODE enabled, using in-memory search cache")
        return InMemorySearchCache()
    return MongoSearchCache(get_mongo_db())
