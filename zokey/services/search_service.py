"""Search service: normalize -> hash -> cache lookup -> (fetch -> rank -> store)"""

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import NamedTuple

from zokey.data.categories import CURRENCY_SYMBOLS, currency_for_region
from zokey.schemas.product import Product, RankingResult
from zokey.schemas.search import (
    BudgetRange,
    NormalizedQuery,
    RankingPreferences,
    RecommendationResponse,
    SearchAnswer,
    SearchCriteria,
)
from zokey.services.cache_service import SearchCacheGateway, get_search_cache_store
from zokey.services.product_service import ProductRetrievalAdapter, get_product_retrieval_adapter
from zokey.services.query_normalizer import QueryNormalizer, get_query_normalizer
from zokey.services.ranking_service import RankingService, get_ranking_service

logger = logging.getLogger(__name__)

DISCLAIMER = (
    "Prices and availability are subject to change. All purchases are made through Amazon. "
    "We earn a commission from qualifying purchases."
)


def _amount(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:.2f}"


class SearchOutcome(NamedTuple):
    query: NormalizedQuery
    query_hash: str
    response: RecommendationResponse


def format_budget(budget: BudgetRange, currency: str) -> str:
    symbol = CURRENCY_SYMBOLS.get(currency, "£")
    return f"{symbol}{_amount(budget.min)} - {symbol}{_amount(budget.max)}"


class SearchService:
    """
    Runs the recommendation pipeline.

    Collaborators are injected so tests can swap in fakes for the provider,
    the model ranker and the cache store.
    """

    def __init__(
        self,
        normalizer: QueryNormalizer,
        cache: SearchCacheGateway,
        retrieval: ProductRetrievalAdapter,
        ranking: RankingService,
    ):
        self.normalizer = normalizer
        self.cache = cache
        self.retrieval = retrieval
        self.ranking = ranking

    async def search(
        self,
        query: NormalizedQuery,
        query_hash: str,
        region: str,
        preferences: RankingPreferences,
    ) -> tuple[list[Product], RankingResult, bool]:
        """Cached fetch + rank for an already normalized query"""

        async def fetch_and_rank() -> tuple[list[Product], RankingResult]:
            products = await self.retrieval.fetch(query, region)
            ranking = await self.ranking.rank(products, preferences)
            return products, ranking

        return await self.cache.get_or_compute(query, query_hash, region, fetch_and_rank)

    async def recommend(self, subcategory_id: str, answers: list[SearchAnswer], region: str) -> SearchOutcome:
        """
        Full pipeline for a questionnaire submission.

        Raises:
            UnknownSubcategoryError: before any retrieval or ranking
            NoProductsFoundError: retrieval produced nothing
        """
        query = self.normalizer.normalize(subcategory_id, answers, region)
        query_hash = self.normalizer.hash_query(query, region)
        currency = currency_for_region(region)

        subcategory_name = self.normalizer.subcategory_name(subcategory_id, currency)
        priorities = self.normalizer.extract_priorities(answers)
        budget = self.normalizer.extract_budget(answers)
        preferences = RankingPreferences(
            subcategory_name=subcategory_name,
            answers=answers,
            priorities=priorities,
            budget=budget,
        )

        logger.info(f"Search {subcategory_id}/{region} hash={query_hash} keywords={query.keywords}")
        _, ranking, cache_hit = await self.search(query, query_hash, region, preferences)

        response = RecommendationResponse(
            products=ranking.ranked_products,
            summary=ranking.summary,
            search_criteria=SearchCriteria(
                category=self.normalizer.category_name(subcategory_id, currency),
                subcategory=subcategory_name,
                budget=format_budget(budget, currency),
                priorities=priorities,
            ),
            disclaimer=DISCLAIMER,
            cache_hit=cache_hit,
            timestamp=datetime.now(timezone.utc),
        )
        return SearchOutcome(query, query_hash, response)


@lru_cache
def get_search_service() -> SearchService:
    """Get cached search service instance"""
    return SearchService(
        normalizer=get_query_normalizer(),
        cache=SearchCacheGateway(get_search_cache_store()),
        retrieval=get_product_retrieval_adapter(),
        ranking=get_ranking_service(),
    )
