"""Product retrieval: Product Advertising API provider plus a synthetic fallback catalog"""

import hashlib
import hmac
import json
import logging
import math
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Protocol

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from zokey.core.config import settings
from zokey.core.exceptions import MalformedProviderResponseError, NoProductsFoundError, UpstreamTransportError
from zokey.data.synthetic_products import GENERIC_PRODUCTS, SYNTHETIC_TEMPLATES
from zokey.schemas.product import Product
from zokey.schemas.search import NormalizedQuery

logger = logging.getLogger(__name__)

PROVIDER_NAME = "product_api"
MIN_SYNTHETIC_RESULTS = 3


class MarketplaceRegion(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    host: str
    aws_region: str
    marketplace: str
    currency: str


REGIONS: dict[str, MarketplaceRegion] = {
    "UK": MarketplaceRegion(
        code="UK",
        host="webservices.amazon.co.uk",
        aws_region="eu-west-1",
        marketplace="www.amazon.co.uk",
        currency="GBP",
    ),
    "US": MarketplaceRegion(
        code="US",
        host="webservices.amazon.com",
        aws_region="us-east-1",
        marketplace="www.amazon.com",
        currency="USD",
    ),
}

# Path segment -> provider search index; first match along the category path wins
CATEGORY_SEARCH_INDEX = {
    "electronics": "Electronics",
    "phones": "Electronics",
    "laptops": "Computers",
    "tablets": "Computers",
    "headphones": "Electronics",
    "smartwatches": "Electronics",
    "home": "HomeAndKitchen",
    "vacuum": "HomeAndKitchen",
    "coffee": "HomeAndKitchen",
    "airfryer": "HomeAndKitchen",
    "beauty": "Beauty",
    "skincare": "Beauty",
    "haircare": "Beauty",
    "fitness": "SportingGoods",
    "homegym": "SportingGoods",
    "running": "Fashion",
    "toys": "ToysAndGames",
    "kidstoys": "ToysAndGames",
    "videogames": "VideoGames",
    "fashion": "Fashion",
    "watches": "Watches",
    "bags": "Fashion",
}

SORT_ORDERS = {"price_low": "Price:LowToHigh", "price_high": "Price:HighToLow"}

SEARCH_RESOURCES = [
    "Images.Primary.Large",
    "ItemInfo.Title",
    "ItemInfo.Features",
    "Offers.Listings.Price",
    "Offers.Listings.SavingBasis",
    "Offers.Listings.DeliveryInfo.IsPrimeEligible",
    "Offers.Listings.Availability.Message",
    "CustomerReviews.Count",
    "CustomerReviews.StarRating",
]


def get_region(region_code: str) -> MarketplaceRegion:
    """Region config; unknown codes resolve to UK"""
    return REGIONS.get(region_code, REGIONS["UK"])


def partner_tag(region_code: str) -> str:
    return settings.PRODUCT_API_PARTNER_TAG_US if region_code == "US" else settings.PRODUCT_API_PARTNER_TAG_UK


def affiliate_url(asin: str, region_code: str) -> str:
    return f"https://{get_region(region_code).marketplace}/dp/{asin}?tag={partner_tag(region_code)}"


def category_search_index(category_path: list[str]) -> str:
    for segment in category_path:
        if segment in CATEGORY_SEARCH_INDEX:
            return CATEGORY_SEARCH_INDEX[segment]
    return "All"


class ProviderSearchRequest(BaseModel):
    """Provider-neutral search request built from a NormalizedQuery"""

    keywords: str
    search_index: str = "All"
    price_min: float | None = None
    price_max: float | None = None
    brand: str | None = None
    sort_by: str | None = None
    item_count: int = 10


def build_search_request(query: NormalizedQuery, item_count: int = 10) -> ProviderSearchRequest:
    filters = query.filters
    return ProviderSearchRequest(
        keywords=" ".join(query.keywords),
        search_index=category_search_index(query.category_path),
        price_min=filters.price_min,
        price_max=filters.price_max,
        brand=filters.brand[0] if filters.brand else None,
        sort_by=SORT_ORDERS.get(filters.sort_by) if filters.sort_by else None,
        item_count=item_count,
    )


class ProductProvider(Protocol):
    async def search(self, request: ProviderSearchRequest, region: MarketplaceRegion) -> list[Product]: ...


# ============================================================================
# Product Advertising API
# ============================================================================


def _hmac(key: bytes, message: str) -> bytes:
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


def sign_request(
    headers: dict[str, str],
    path: str,
    body: str,
    access_key: str,
    secret_key: str,
    aws_region: str,
    amz_date: str,
    service: str = "ProductAdvertisingAPI",
) -> str:
    """AWS Signature Version 4 ``Authorization`` header for a JSON POST"""
    date_stamp = amz_date[:8]
    scope = f"{date_stamp}/{aws_region}/{service}/aws4_request"
    names = sorted(name.lower() for name in headers)
    lowered = {name.lower(): value.strip() for name, value in headers.items()}
    canonical_headers = "".join(f"{name}:{lowered[name]}\n" for name in names)
    signed_headers = ";".join(names)
    canonical_request = "\n".join(
        ["POST", path, "", canonical_headers, signed_headers, hashlib.sha256(body.encode("utf-8")).hexdigest()]
    )
    string_to_sign = "\n".join(
        ["AWS4-HMAC-SHA256", amz_date, scope, hashlib.sha256(canonical_request.encode("utf-8")).hexdigest()]
    )

    key = _hmac(f"AWS4{secret_key}".encode("utf-8"), date_stamp)
    for part in (aws_region, service, "aws4_request"):
        key = _hmac(key, part)
    signature = hmac.new(key, string_to_sign.encode("utf-8"), hashlib.sha256).hexdigest()
    return f"AWS4-HMAC-SHA256 Credential={access_key}/{scope}, SignedHeaders={signed_headers}, Signature={signature}"


def _number(value: Any, cast: type, default):
    try:
        return cast(value)
    except (TypeError, ValueError, OverflowError):
        return default


def _field(container: Any, *path: str) -> Any:
    """Walk nested objects, yielding None where a level is missing or not an object"""
    for key in path:
        if not isinstance(container, dict):
            return None
        container = container.get(key)
    return container


def parse_search_response(payload: Any, region: MarketplaceRegion) -> list[Product]:
    """
    Map a SearchItems response to Products. Items with an unexpected shape are skipped.

    Raises:
        MalformedProviderResponseError: payload is not the SearchItems shape
    """
    if not isinstance(payload, dict):
        raise MalformedProviderResponseError(PROVIDER_NAME, "response is not an object")
    search_result = payload.get("SearchResult")
    if search_result is None:
        return []
    if not isinstance(search_result, dict):
        raise MalformedProviderResponseError(PROVIDER_NAME, "SearchResult is not an object")
    items = search_result.get("Items") or []
    if not isinstance(items, list):
        raise MalformedProviderResponseError(PROVIDER_NAME, "SearchResult.Items is not a list")

    products = []
    for item in items:
        if not isinstance(item, dict) or not isinstance(item.get("ASIN"), str) or not item["ASIN"]:
            logger.warning(f"Skipping provider item without ASIN: {item!r}")
            continue
        asin = item["ASIN"]
        listings = _field(item, "Offers", "Listings")
        listing = listings[0] if isinstance(listings, list) and listings else {}
        features = _field(item, "ItemInfo", "Features", "DisplayValues")
        try:
            products.append(
                Product(
                    asin=asin,
                    title=_field(item, "ItemInfo", "Title", "DisplayValue") or "Unknown Product",
                    price=_number(_field(listing, "Price", "Amount"), float, 0.0),
                    currency=region.currency,
                    original_price=_number(_field(listing, "SavingBasis", "Amount"), float, None),
                    image_url=_field(item, "Images", "Primary", "Large", "URL") or "",
                    rating=_number(_field(item, "CustomerReviews", "StarRating", "Value"), float, 0.0),
                    review_count=_number(_field(item, "CustomerReviews", "Count", "Value"), int, 0),
                    product_url=item.get("DetailPageURL") or f"https://{region.marketplace}/dp/{asin}",
                    is_prime=bool(_field(listing, "DeliveryInfo", "IsPrimeEligible")),
                    availability=_field(listing, "Availability", "Message") or "Check Amazon",
                    features=features if isinstance(features, list) else [],
                )
            )
        except ValidationError as e:
            logger.warning(f"Skipping invalid provider item {asin}: {e}")
    return products


class ProductAdvertisingProvider:
    """Async client for the SearchItems operation"""

    operation = "SearchItems"

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        timeout_seconds: float = settings.PRODUCT_API_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.access_key = access_key
        self.secret_key = secret_key
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    def build_payload(self, request: ProviderSearchRequest, region: MarketplaceRegion) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "Keywords": request.keywords,
            "SearchIndex": request.search_index,
            "ItemCount": request.item_count,
            "Resources": SEARCH_RESOURCES,
            "PartnerTag": partner_tag(region.code),
            "PartnerType": "Associates",
            "Marketplace": region.marketplace,
        }
        # Prices go over the wire in minor units
        if request.price_min:
            payload["MinPrice"] = math.floor(request.price_min * 100)
        if request.price_max:
            payload["MaxPrice"] = math.floor(request.price_max * 100)
        if request.brand:
            payload["Brand"] = request.brand
        if request.sort_by:
            payload["SortBy"] = request.sort_by
        return payload

    async def search(self, request: ProviderSearchRequest, region: MarketplaceRegion) -> list[Product]:
        path = f"/paapi5/{self.operation.lower()}"
        body = json.dumps(self.build_payload(request, region))
        amz_date = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        headers = {
            "content-encoding": "amz-1.0",
            "content-type": "application/json; charset=utf-8",
            "host": region.host,
            "x-amz-date": amz_date,
            "x-amz-target": f"com.amazon.paapi5.v1.ProductAdvertisingAPIv1.{self.operation}",
        }
        headers["Authorization"] = sign_request(
            headers, path, body, self.access_key, self.secret_key, region.aws_region, amz_date
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self.transport) as client:
                resp = await client.post(f"https://{region.host}{path}", content=body, headers=headers)
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamTransportError(
                PROVIDER_NAME, f"HTTP {e.response.status_code}: {e.response.text[:500]}"
            ) from e
        except httpx.RequestError as e:
            raise UpstreamTransportError(PROVIDER_NAME, e) from e

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedProviderResponseError(PROVIDER_NAME, f"invalid JSON: {e}") from e
        return parse_search_response(data, region)


# ============================================================================
# Synthetic catalog
# ============================================================================


def _template_matches(template_keywords: tuple[str, ...], search_terms: list[str]) -> bool:
    return any(kw in term or term in kw for kw in template_keywords for term in search_terms)


def _synthetic_product(record: dict, region: MarketplaceRegion) -> Product:
    asin = record["asin"]
    return Product(
        asin=asin,
        title=record["title"],
        price=record["price"],
        currency=region.currency,
        original_price=record.get("original_price"),
        image_url=f"https://picsum.photos/seed/{asin}/500/500",
        rating=record["rating"],
        review_count=record["review_count"],
        product_url=affiliate_url(asin, region.code),
        is_prime=record.get("is_prime", True),
        availability=record.get("availability", "In Stock"),
        features=list(record["features"]),
    )


def synthetic_products(
    keywords: list[str],
    region_code: str = "UK",
    price_min: float | None = None,
    price_max: float | None = None,
    cap: int = 10,
) -> list[Product]:
    """
    Deterministic stand-in results for a keyword list.

    The first template sharing a keyword (substring match either way) supplies
    the products, otherwise the generic set. Results are price-filtered, then
    backfilled with unfiltered generic products when fewer than three remain.
    """
    region = get_region(region_code)
    search_terms = [keyword.lower() for keyword in keywords]

    records = GENERIC_PRODUCTS
    for template in SYNTHETIC_TEMPLATES:
        if _template_matches(template["keywords"], search_terms):
            records = template["products"]
            break

    products = [_synthetic_product(record, region) for record in records]
    if price_min is not None:
        products = [p for p in products if p.price >= price_min]
    if price_max is not None:
        products = [p for p in products if p.price <= price_max]

    if len(products) < MIN_SYNTHETIC_RESULTS:
        present = {p.asin for p in products}
        products.extend(_synthetic_product(r, region) for r in GENERIC_PRODUCTS if r["asin"] not in present)

    return products[:cap]


# ============================================================================
# Retrieval adapter
# ============================================================================


class ProductRetrievalAdapter:
    """
    Fetches candidates for a NormalizedQuery.

    Uses the provider when one is configured and falls back to the synthetic
    catalog on transport or protocol errors. Never caches.
    """

    def __init__(self, provider: ProductProvider | None = None, result_cap: int = settings.PRODUCT_RESULT_CAP):
        self.provider = provider
        self.result_cap = result_cap

    def _synthetic(self, query: NormalizedQuery, region_code: str) -> list[Product]:
        return synthetic_products(
            query.keywords,
            region_code,
            query.filters.price_min,
            query.filters.price_max,
            cap=self.result_cap,
        )

    async def fetch(self, query: NormalizedQuery, region_code: str) -> list[Product]:
        """
        Returns:
            1..result_cap products

        Raises:
            NoProductsFoundError: nothing matched the query
        """
        if self.provider is None:
            logger.info("No product provider configured, using synthetic catalog")
            products = self._synthetic(query, region_code)
        else:
            request = build_search_request(query, item_count=self.result_cap)
            try:
                products = await self.provider.search(request, get_region(region_code))
                logger.info(f"Provider returned {len(products)} products for '{request.keywords}'")
            except (UpstreamTransportError, MalformedProviderResponseError) as e:
                logger.warning(f"Product provider failed, falling back to synthetic catalog: {e}")
                products = self._synthetic(query, region_code)

        products = products[: self.result_cap]
        if not products:
            raise NoProductsFoundError(query.keywords)
        return products


@lru_cache
def get_product_retrieval_adapter() -> ProductRetrievalAdapter:
    """Get cached retrieval adapter; synthetic-only without credentials or in MOCK_MODE"""
    if settings.MOCK_MODE or not (settings.PRODUCT_API_ACCESS_KEY and settings.PRODUCT_API_SECRET_KEY):
        return ProductRetrievalAdapter(provider=None)
    return ProductRetrievalAdapter(
        provider=ProductAdvertisingProvider(settings.PRODUCT_API_ACCESS_KEY, settings.PRODUCT_API_SECRET_KEY)
    )
