"""Query normalizer: turns questionnaire answers into a canonical search query"""

import hashlib
import json
import logging
from collections.abc import Callable
from functools import lru_cache

from zokey.core.exceptions import UnknownSubcategoryError
from zokey.data.categories import currency_for_region, find_subcategory, get_catalog
from zokey.schemas.catalog import Category
from zokey.schemas.search import BudgetRange, NormalizedQuery, QueryFilters, SearchAnswer

logger = logging.getLogger(__name__)

# Questions whose answers describe the product and become search keywords
DESCRIPTIVE_QUESTIONS = frozenset(
    {"type", "style", "usage", "concern", "skintype", "age", "platform", "genre", "phone", "wireless", "size"}
)
SENTINELS = frozenset({"any", "no preference"})

# Stands for "no budget given"; never applied as a price filter
UNCONSTRAINED_BUDGET = BudgetRange(min=0, max=10000)

QUERY_HASH_LENGTH = 16


def _tokens(value: BudgetRange | list[str] | str | None) -> list[str]:
    if value is None or isinstance(value, BudgetRange):
        return []
    if isinstance(value, list):
        return [str(v) for v in value]
    return [value]


def _clean(token: str) -> str:
    return " ".join(token.split()).lower()


class QueryNormalizer:
    """Builds NormalizedQuery objects and their cache hashes.

    The catalog is injected as a ``currency -> categories`` callable so tests
    can substitute a small tree.
    """

    def __init__(self, catalog_for: Callable[[str], tuple[Category, ...]] = get_catalog):
        self.catalog_for = catalog_for

    def normalize(self, subcategory_id: str, answers: list[SearchAnswer], region: str = "UK") -> NormalizedQuery:
        """
        Map (subcategory, answers, region) to a canonical query.

        Raises:
            UnknownSubcategoryError: subcategory id is not in the catalog
        """
        resolved = find_subcategory(self.catalog_for(currency_for_region(region)), subcategory_id)
        if resolved is None:
            raise UnknownSubcategoryError(subcategory_id)
        category, subcategory = resolved

        keywords = [subcategory.name]
        brands: list[str] = []
        budget = self.extract_budget(answers)
        price_min = price_max = None
        if budget is not UNCONSTRAINED_BUDGET:
            price_min, price_max = budget.min, budget.max

        for answer in answers:
            question_id = answer.question_id
            value = answer.value

            if question_id == "brand":
                for token in _tokens(value):
                    if _clean(token) and _clean(token) not in SENTINELS:
                        brands.append(_clean(token))
                        keywords.append(token)
            elif question_id in ("budget", "priorities"):
                # Budget is read once above; priorities only steer ranking
                continue
            elif question_id in DESCRIPTIVE_QUESTIONS:
                keywords.extend(_tokens(value))
            elif isinstance(value, str):
                keywords.append(value)

        cleaned: list[str] = []
        for keyword in keywords:
            token = _clean(keyword)
            if token and token not in SENTINELS and token not in cleaned:
                cleaned.append(token)

        filters = QueryFilters(
            brand=sorted(set(brands)) or None,
            price_min=price_min,
            price_max=price_max,
        )
        return NormalizedQuery(keywords=cleaned, filters=filters, category_path=[category.id, subcategory.id])

    @staticmethod
    def hash_query(query: NormalizedQuery, region: str) -> str:
        """Short content digest of the query, used as the cache key"""
        payload = {
            "keywords": sorted(query.keywords),
            "filters": query.filters.model_dump(mode="json", exclude_none=True),
            "categoryPath": list(query.category_path),
            "region": region,
        }
        serialized = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
        return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:QUERY_HASH_LENGTH]

    @staticmethod
    def extract_priorities(answers: list[SearchAnswer]) -> list[str]:
        for answer in answers:
            if answer.question_id == "priorities":
                return _tokens(answer.value)
        return []

    @staticmethod
    def extract_budget(answers: list[SearchAnswer]) -> BudgetRange:
        """First budget answer's range, or UNCONSTRAINED_BUDGET when absent or malformed"""
        for answer in answers:
            if answer.question_id == "budget":
                if isinstance(answer.value, BudgetRange):
                    return answer.value
                logger.warning(f"Ignoring malformed budget answer: {answer.value!r}")
                break
        return UNCONSTRAINED_BUDGET

    def subcategory_name(self, subcategory_id: str, currency: str = "GBP") -> str:
        resolved = find_subcategory(self.catalog_for(currency), subcategory_id)
        if resolved is None:
            return subcategory_id
        return resolved[1].name

    def category_name(self, subcategory_id: str, currency: str = "GBP") -> str:
        resolved = find_subcategory(self.catalog_for(currency), subcategory_id)
        if resolved is None:
            return ""
        return resolved[0].name


@lru_cache
def get_query_normalizer() -> QueryNormalizer:
    """Get cached query normalizer instance"""
    return QueryNormalizer()
