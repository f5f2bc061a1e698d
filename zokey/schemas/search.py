from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from zokey.schemas.product import RankedProduct

SortOrder = Literal["relevance", "price_low", "price_high", "rating"]


class BudgetRange(BaseModel):
    min: float = Field(..., allow_inf_nan=False)
    max: float = Field(..., allow_inf_nan=False)


class SearchAnswer(BaseModel):
    """One questionnaire answer: a token, a list of tokens or a numeric range"""

    question_id: str = Field(..., min_length=1)
    value: BudgetRange | list[str] | str | None = None

    @field_validator("value", mode="before")
    @classmethod
    def tolerate_malformed_range(cls, value: Any) -> Any:
        # A range missing an end or holding non-numbers counts as no answer
        if isinstance(value, dict):
            try:
                return BudgetRange.model_validate(value)
            except ValidationError:
                return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class QueryFilters(BaseModel):
    model_config = ConfigDict(frozen=True)

    brand: list[str] | None = None
    price_min: float | None = None
    price_max: float | None = None
    sort_by: SortOrder | None = None


class NormalizedQuery(BaseModel):
    """Canonical, order-independent form of a questionnaire search"""

    model_config = ConfigDict(frozen=True)

    keywords: list[str]
    filters: QueryFilters = Field(default_factory=QueryFilters)
    category_path: list[str]


class RankingPreferences(BaseModel):
    subcategory_name: str
    answers: list[SearchAnswer] = Field(default_factory=list)
    priorities: list[str] = Field(default_factory=list)
    budget: BudgetRange


class SearchRequest(BaseModel):
    """Questionnaire search request"""

    subcategory_id: str = Field(..., min_length=1)
    answers: list[SearchAnswer] = Field(default_factory=list)


class SearchCriteria(BaseModel):
    category: str
    subcategory: str
    budget: str  # Formatted with currency symbol, e.g. "£500 - £1500"
    priorities: list[str]


class RecommendationResponse(BaseModel):
    """Response envelope for a completed search"""

    search_id: str | None = None
    products: list[RankedProduct]
    summary: str
    search_criteria: SearchCriteria
    disclaimer: str
    cache_hit: bool = False
    timestamp: datetime
