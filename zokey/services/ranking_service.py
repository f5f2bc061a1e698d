"""Ranking service: heuristic scoring with an optional OpenAI-backed ranker"""

import json
import logging
import math
from functools import lru_cache
from typing import Any, Protocol

from openai import AsyncOpenAI

from zokey.core.config import settings
from zokey.core.exceptions import MalformedProviderResponseError, UpstreamTransportError
from zokey.schemas.product import Product, RankedProduct, RankingResult
from zokey.schemas.search import BudgetRange, RankingPreferences, SearchAnswer

logger = logging.getLogger(__name__)

MAX_RANKED = 5
PROVIDER_NAME = "openai"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _fmt_rating(rating: float) -> str:
    return f"{rating:g}"


class Ranker(Protocol):
    async def rank(self, products: list[Product], preferences: RankingPreferences) -> RankingResult: ...


# ============================================================================
# Heuristic ranking
# ============================================================================


class HeuristicRanker:
    """
    Deterministic scorer, always available.

    score = budget fit (40 inside the range, 20 below it, 0 above)
          + rating * 10
          + min(review_count / 1000, 10)
          + 5 for Prime delivery
    """

    @staticmethod
    def score(product: Product, budget: BudgetRange) -> float:
        score = 0.0
        if budget.min <= product.price <= budget.max:
            score += 40
        elif product.price < budget.min:
            score += 20
        score += product.rating * 10
        score += min(product.review_count / 1000, 10)
        if product.is_prime:
            score += 5
        return score

    @staticmethod
    def explanation(product: Product, budget: BudgetRange, rank: int) -> str:
        price_status = (
            "within your budget" if product.price <= budget.max else "slightly above budget but worth considering"
        )
        rating = _fmt_rating(product.rating)
        reviews = f"{product.review_count:,}"
        if rank == 1:
            return (
                "This is our top recommendation because it perfectly balances quality and value. "
                f"With a {rating}-star rating from {reviews} reviews, it's {price_status} "
                "and highly regarded by customers."
            )
        if rank <= 3:
            return (
                f"A strong contender with {rating} stars and {reviews} reviews. "
                f"It's {price_status} and offers good performance for your needs."
            )
        return (
            "Worth considering as an alternative option. "
            f"Rated {rating} stars with {reviews} reviews, it provides good value {price_status}."
        )

    @staticmethod
    def pros(product: Product) -> list[str]:
        pros = []
        if product.rating >= 4.5:
            pros.append("Excellent customer ratings")
        elif product.rating >= 4.0:
            pros.append("Strong customer reviews")

        if product.review_count > 5000:
            pros.append("Very popular choice with many reviews")
        elif product.review_count > 1000:
            pros.append("Well-reviewed by many customers")

        if product.is_prime:
            pros.append("Prime delivery available")

        if product.original_price and product.original_price > product.price:
            discount = _round_half_up((1 - product.price / product.original_price) * 100)
            pros.append(f"Currently {discount}% off")

        if product.features:
            pros.append(product.features[0])
        return pros[:4]

    @staticmethod
    def cons(product: Product) -> list[str]:
        cons = []
        if product.rating < 4.0:
            cons.append("Mixed customer reviews")
        if not product.is_prime:
            cons.append("Not eligible for Prime delivery")
        if product.review_count < 500:
            cons.append("Limited customer feedback available")
        if not cons:
            cons.append("May have limited color/size options")
        return cons[:2]

    @staticmethod
    def summary(ranked: list[RankedProduct], subcategory_name: str) -> str:
        if not ranked:
            return f"We couldn't find a strong match for your {subcategory_name} preferences."
        short_title = " ".join(ranked[0].title.split(" ")[:4])
        return (
            f"Based on your preferences for {subcategory_name}, we recommend the {short_title} as the best match. "
            "It offers excellent value within your budget with strong ratings."
        )

    def rank_sync(self, products: list[Product], preferences: RankingPreferences) -> RankingResult:
        budget = preferences.budget
        # sorted() is stable, ties keep candidate order
        scored = sorted(
            ((product, self.score(product, budget)) for product in products),
            key=lambda item: item[1],
            reverse=True,
        )

        ranked = []
        for position, (product, score) in enumerate(scored[:MAX_RANKED], start=1):
            ranked.append(
                RankedProduct(
                    **product.model_dump(),
                    rank=position,
                    match_score=_round_half_up(score),
                    explanation=self.explanation(product, budget, position),
                    pros=self.pros(product),
                    cons=self.cons(product),
                )
            )
        return RankingResult(ranked_products=ranked, summary=self.summary(ranked, preferences.subcategory_name))


# ============================================================================
# Model-assisted ranking
# ============================================================================

SYSTEM_PROMPT = """You are an expert product recommendation assistant. Your task is to rank products based on user preferences and explain why each product is recommended.

IMPORTANT RULES:
1. You MUST only rank products from the provided list - never invent or suggest other products
2. You MUST use the exact prices and specifications provided - never make up prices or features
3. Your explanations should be helpful, honest, and based only on the product information provided
4. Consider the user's stated priorities when ranking
5. Always return valid JSON in the exact format specified

You will receive:
- A list of products with their details
- User preferences (budget, priorities, category)

You must return a JSON object with:
- rankedProducts: array of products ranked by relevance (best match first)
- summary: a brief 1-2 sentence summary of the recommendations"""


def format_products(products: list[Product]) -> str:
    blocks = []
    for i, p in enumerate(products, start=1):
        was = f" (was {p.original_price:.2f})" if p.original_price else ""
        blocks.append(
            f"{i}. ID: {p.asin}\n"
            f"   Title: {p.title}\n"
            f"   Price: {p.currency} {p.price:.2f}{was}\n"
            f"   Rating: {_fmt_rating(p.rating)}/5 ({p.review_count:,} reviews)\n"
            f"   Prime: {'Yes' if p.is_prime else 'No'}\n"
            f"   Features: {'; '.join(p.features[:3])}"
        )
    return "\n\n".join(blocks)


def format_answers(answers: list[SearchAnswer]) -> str:
    parts = []
    for answer in answers:
        if answer.question_id in ("budget", "priorities"):
            continue
        value = answer.value
        if value is None:
            continue
        if isinstance(value, BudgetRange):
            parts.append(f"{answer.question_id}: {value.min:g}-{value.max:g}")
        elif isinstance(value, list):
            parts.append(f"{answer.question_id}: {', '.join(value)}")
        else:
            parts.append(f"{answer.question_id}: {value}")
    return ", ".join(parts)


def build_user_prompt(products: list[Product], preferences: RankingPreferences) -> str:
    currency = products[0].currency if products else ""
    budget = preferences.budget
    return f"""Please rank these products for a user looking for: {preferences.subcategory_name}

USER PREFERENCES:
- Budget: {budget.min:g} to {budget.max:g} {currency}
- Priorities: {', '.join(preferences.priorities)}
- Additional preferences: {format_answers(preferences.answers)}

PRODUCTS TO RANK:
{format_products(products)}

Return EXACTLY this JSON structure:
{{
  "rankedProducts": [
    {{
      "id": "product ID from the list",
      "rank": 1,
      "matchScore": 0-100,
      "explanation": "2-3 sentences why this product matches user needs",
      "pros": ["pro 1", "pro 2", "pro 3"],
      "cons": ["con 1", "con 2"]
    }}
  ],
  "summary": "Brief summary of the recommendations"
}}

Rank the top {MAX_RANKED} products only. Return ONLY valid JSON, no other text."""


def _malformed(reason: str) -> MalformedProviderResponseError:
    return MalformedProviderResponseError(PROVIDER_NAME, reason)


def _string_list(entry: dict, key: str) -> list[str]:
    value = entry.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise _malformed(f"'{key}' must be a list of strings")
    return value


def parse_ranking(content: str | None, products: list[Product]) -> RankingResult:
    """
    Validate the model's JSON and merge it with the candidate products.

    Ranks are renumbered 1..k in the model's order and scores clamped to
    0..100. Any shape violation, including an id that is not a candidate,
    raises MalformedProviderResponseError.
    """
    if not content:
        raise _malformed("empty response")
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise _malformed(f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise _malformed("response is not an object")
    entries = data.get("rankedProducts")
    summary = data.get("summary")
    if not isinstance(entries, list) or not entries:
        raise _malformed("'rankedProducts' must be a non-empty list")
    if not isinstance(summary, str) or not summary.strip():
        raise _malformed("'summary' must be a non-empty string")

    by_id = {p.asin: p for p in products}
    validated: list[tuple[float, int, Product, dict[str, Any]]] = []
    seen: set[str] = set()
    for position, entry in enumerate(entries[:MAX_RANKED]):
        if not isinstance(entry, dict):
            raise _malformed("ranked entry is not an object")
        product_id = entry.get("id", entry.get("asin"))
        if not isinstance(product_id, str) or product_id not in by_id:
            raise _malformed(f"unknown product id {product_id!r}")
        if product_id in seen:
            raise _malformed(f"duplicate product id {product_id!r}")
        seen.add(product_id)

        rank = entry.get("rank")
        score = entry.get("matchScore")
        explanation = entry.get("explanation")
        if isinstance(rank, bool) or not isinstance(rank, (int, float)) or not math.isfinite(rank):
            raise _malformed(f"invalid rank for {product_id}")
        if isinstance(score, bool) or not isinstance(score, (int, float)) or not math.isfinite(score):
            raise _malformed(f"invalid matchScore for {product_id}")
        if not isinstance(explanation, str) or not explanation.strip():
            raise _malformed(f"missing explanation for {product_id}")

        validated.append(
            (
                float(rank),
                position,
                by_id[product_id],
                {
                    "match_score": min(max(float(score), 0.0), 100.0),
                    "explanation": explanation,
                    "pros": _string_list(entry, "pros"),
                    "cons": _string_list(entry, "cons"),
                },
            )
        )

    validated.sort(key=lambda item: (item[0], item[1]))
    ranked = [
        RankedProduct(**product.model_dump(), rank=new_rank, **fields)
        for new_rank, (_, _, product, fields) in enumerate(validated, start=1)
    ]
    return RankingResult(ranked_products=ranked, summary=summary)


class ModelRanker:
    """Ranks candidates with an OpenAI chat model in JSON mode"""

    def __init__(self, client: AsyncOpenAI, model: str = settings.RANKING_MODEL):
        self.client = client
        self.model = model

    async def rank(self, products: list[Product], preferences: RankingPreferences) -> RankingResult:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_user_prompt(products, preferences)},
                ],
                response_format={"type": "json_object"},
                temperature=settings.RANKING_TEMPERATURE,
                max_tokens=settings.RANKING_MAX_TOKENS,
            )
        except Exception as e:
            raise UpstreamTransportError(PROVIDER_NAME, e) from e

        if not response.choices:
            raise _malformed("no choices returned")
        return parse_ranking(response.choices[0].message.content, products)


class RankingService:
    """
    Ranks candidates, preferring the model ranker when one is configured.

    Any model failure falls back to the heuristic result for the same inputs;
    partial model output is never merged.
    """

    def __init__(self, model_ranker: Ranker | None = None, heuristic: HeuristicRanker | None = None):
        self.model_ranker = model_ranker
        self.heuristic = heuristic or HeuristicRanker()

    async def rank(self, products: list[Product], preferences: RankingPreferences) -> RankingResult:
        if self.model_ranker is None or not products:
            return self.heuristic.rank_sync(products, preferences)

        try:
            result = await self.model_ranker.rank(products, preferences)
            logger.info(f"Model ranked {len(result.ranked_products)} of {len(products)} products")
            return result
        except (UpstreamTransportError, MalformedProviderResponseError) as e:
            logger.warning(f"Model ranking failed, using heuristic ranking: {e}")
            return self.heuristic.rank_sync(products, preferences)


@lru_cache
def get_ranking_service() -> RankingService:
    """Get cached ranking service; heuristic only without an API key or in MOCK_MODE"""
    if settings.MOCK_MODE or not settings.OPENAI_API_KEY:
        return RankingService()
    client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY, timeout=settings.RANKING_TIMEOUT_SECONDS)
    return RankingService(model_ranker=ModelRanker(client))
