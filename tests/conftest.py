"""Shared fixtures and in-process fakes for the pipeline collaborators."""

import json
from types import SimpleNamespace

import pytest

from zokey.schemas.product import Product
from zokey.schemas.search import BudgetRange, RankingPreferences, SearchAnswer
from zokey.services.cache_service import InMemorySearchCache, SearchCacheGateway
from zokey.services.product_service import ProductRetrievalAdapter
from zokey.services.query_normalizer import QueryNormalizer
from zokey.services.ranking_service import RankingService
from zokey.services.search_service import SearchService


def make_product(asin: str, price: float = 100.0, **overrides) -> Product:
    data = {
        "asin": asin,
        "title": f"Product {asin} with a long descriptive title",
        "price": price,
        "currency": "GBP",
        "rating": 4.2,
        "review_count": 1200,
        "is_prime": True,
        "features": [f"{asin} feature"],
    }
    data.update(overrides)
    return Product(**data)


class FakeProvider:
    """Product provider returning canned products or raising a canned error"""

    def __init__(self, products=None, error: Exception | None = None):
        self.products = products or []
        self.error = error
        self.calls = []

    async def search(self, request, region):
        self.calls.append((request, region))
        if self.error:
            raise self.error
        return list(self.products)


class FakeCompletions:
    def __init__(self, content=None, error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


class FakeOpenAI:
    """Stands in for AsyncOpenAI; only chat.completions.create is used"""

    def __init__(self, content=None, error: Exception | None = None):
        self.completions = FakeCompletions(content, error)
        self.chat = SimpleNamespace(completions=self.completions)


class CountingRanking(RankingService):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = 0

    async def rank(self, products, preferences):
        self.calls += 1
        return await super().rank(products, preferences)


def model_response(entries, summary="Great picks for you.") -> str:
    return json.dumps({"rankedProducts": entries, "summary": summary})


@pytest.fixture
def normalizer():
    return QueryNormalizer()


@pytest.fixture
def laptop_answers():
    return [
        SearchAnswer(question_id="usage", value="work"),
        SearchAnswer(question_id="budget", value=BudgetRange(min=500, max=1500)),
        SearchAnswer(question_id="priorities", value=["performance", "battery"]),
    ]


@pytest.fixture
def preferences():
    return RankingPreferences(
        subcategory_name="Laptops",
        answers=[],
        priorities=["performance"],
        budget=BudgetRange(min=100, max=500),
    )


@pytest.fixture
def cache_store():
    return InMemorySearchCache()


@pytest.fixture
def provider():
    return FakeProvider(
        [
            make_product("B001", 899.0, rating=4.6, review_count=5400),
            make_product("B002", 1299.0, rating=4.4, review_count=800, is_prime=False),
            make_product("B003", 649.0, rating=4.1, review_count=2300),
            make_product("B004", 1999.0, rating=4.9, review_count=12000),
            make_product("B005", 450.0, rating=3.8, review_count=300),
            make_product("B006", 1100.0, rating=4.5, review_count=1500),
        ]
    )


@pytest.fixture
def ranking():
    return CountingRanking()


@pytest.fixture
def search_service(normalizer, cache_store, provider, ranking):
    return SearchService(
        normalizer=normalizer,
        cache=SearchCacheGateway(cache_store, ttl_hours=1),
        retrieval=ProductRetrievalAdapter(provider=provider),
        ranking=ranking,
    )
