import json

import httpx
import pytest

from zokey.core.exceptions import MalformedProviderResponseError, NoProductsFoundError, UpstreamTransportError
from zokey.schemas.search import NormalizedQuery, QueryFilters
from zokey.services.product_service import (
    REGIONS,
    ProductAdvertisingProvider,
    ProductRetrievalAdapter,
    ProviderSearchRequest,
    affiliate_url,
    build_search_request,
    category_search_index,
    get_region,
    parse_search_response,
    synthetic_products,
)

from conftest import FakeProvider, make_product


def laptop_query(price_min=500, price_max=1500) -> NormalizedQuery:
    return NormalizedQuery(
        keywords=["laptops", "work"],
        filters=QueryFilters(price_min=price_min, price_max=price_max),
        category_path=["electronics", "laptops"],
    )


def test_category_search_index():
    assert category_search_index(["electronics", "laptops"]) == "Electronics"
    assert category_search_index(["unknown", "laptops"]) == "Computers"
    assert category_search_index(["toys", "videogames"]) == "ToysAndGames"
    assert category_search_index(["nothing", "here"]) == "All"


def test_build_search_request():
    query = NormalizedQuery(
        keywords=["laptops", "dell", "work"],
        filters=QueryFilters(brand=["dell"], price_min=500, price_max=1500, sort_by="price_low"),
        category_path=["electronics", "laptops"],
    )
    request = build_search_request(query)

    assert request.keywords == "laptops dell work"
    assert request.search_index == "Electronics"
    assert request.brand == "dell"
    assert request.sort_by == "Price:LowToHigh"
    assert request.item_count == 10


def test_region_lookup_and_affiliate_url():
    assert get_region("US").currency == "USD"
    assert get_region("FR") == REGIONS["UK"]
    assert affiliate_url("B00TEST", "US") == "https://www.amazon.com/dp/B00TEST?tag=shopai-us-20"
    assert affiliate_url("B00TEST", "UK") == "https://www.amazon.co.uk/dp/B00TEST?tag=shopai-uk-20"


# ============================================================================
# Synthetic catalog
# ============================================================================


def test_synthetic_laptops_filtered_and_backfilled():
    products = synthetic_products(["laptops", "work"], "UK", 500, 1500)
    asins = [p.asin for p in products]

    assert asins[:2] == ["MOCK011", "MOCK014"]
    assert asins[2:] == ["DEFAULT001", "DEFAULT002", "DEFAULT003", "DEFAULT004", "DEFAULT005"]
    assert all(p.currency == "GBP" for p in products)


def test_synthetic_template_without_filter():
    products = synthetic_products(["coffee machines"], "US")

    assert [p.asin for p in products] == ["MOCK040", "MOCK041", "MOCK042", "MOCK043", "MOCK044"]
    first = products[0]
    assert first.currency == "USD"
    assert first.product_url == "https://www.amazon.com/dp/MOCK040?tag=shopai-us-20"
    assert first.image_url == "https://picsum.photos/seed/MOCK040/500/500"


def test_synthetic_match_is_bidirectional_substring():
    # "fryer" is contained in the query term, "air" is contained in a template keyword
    assert synthetic_products(["deep fryers"])[0].asin == "MOCK060"
    assert synthetic_products(["lap"])[0].asin == "MOCK010"


def test_synthetic_first_template_wins():
    # "phone" and "headphone" both match "headphones"; the phones template comes first
    assert synthetic_products(["headphones"])[0].asin == "MOCK001"


def test_synthetic_generic_when_no_template_matches():
    products = synthetic_products(["yoga mat"], "UK")
    assert [p.asin for p in products] == ["DEFAULT001", "DEFAULT002", "DEFAULT003", "DEFAULT004", "DEFAULT005"]
    assert products[2].is_prime is False


def test_synthetic_respects_cap():
    assert len(synthetic_products(["laptops"], "UK", 500, 1500, cap=4)) == 4


# ============================================================================
# Retrieval adapter
# ============================================================================


async def test_adapter_uses_provider():
    provider = FakeProvider([make_product("B1"), make_product("B2")])
    adapter = ProductRetrievalAdapter(provider=provider)

    products = await adapter.fetch(laptop_query(), "US")

    assert [p.asin for p in products] == ["B1", "B2"]
    request, region = provider.calls[0]
    assert request.search_index == "Electronics"
    assert request.price_min == 500
    assert region.code == "US"


async def test_adapter_falls_back_on_transport_error():
    provider = FakeProvider(error=UpstreamTransportError("product_api", "timed out"))
    adapter = ProductRetrievalAdapter(provider=provider)

    products = await adapter.fetch(laptop_query(), "UK")

    assert len(products) == 7
    assert products[0].asin == "MOCK011"


async def test_adapter_falls_back_on_malformed_response():
    provider = FakeProvider(error=MalformedProviderResponseError("product_api", "not json"))
    adapter = ProductRetrievalAdapter(provider=provider)

    products = await adapter.fetch(laptop_query(price_min=None, price_max=None), "UK")
    assert [p.asin for p in products] == ["MOCK010", "MOCK011", "MOCK012", "MOCK013", "MOCK014"]


async def test_adapter_without_provider_uses_synthetic():
    adapter = ProductRetrievalAdapter(provider=None)
    products = await adapter.fetch(laptop_query(), "UK")
    assert 1 <= len(products) <= 10


async def test_adapter_caps_provider_results():
    provider = FakeProvider([make_product(f"B{i}") for i in range(15)])
    adapter = ProductRetrievalAdapter(provider=provider, result_cap=10)

    assert len(await adapter.fetch(laptop_query(), "UK")) == 10


async def test_adapter_empty_provider_result_is_no_products():
    adapter = ProductRetrievalAdapter(provider=FakeProvider([]))

    with pytest.raises(NoProductsFoundError):
        await adapter.fetch(laptop_query(), "UK")


# ============================================================================
# Provider response parsing and transport
# ============================================================================

SEARCH_ITEMS_RESPONSE = {
    "SearchResult": {
        "Items": [
            {
                "ASIN": "B0CHX1W1XY",
                "DetailPageURL": "https://www.amazon.co.uk/dp/B0CHX1W1XY?tag=shopai-uk-20",
                "Images": {"Primary": {"Large": {"URL": "https://m.media-amazon.com/images/I/x.jpg"}}},
                "ItemInfo": {
                    "Title": {"DisplayValue": "Dell XPS 13"},
                    "Features": {"DisplayValues": ["13.4 inch display", "16GB RAM"]},
                },
                "Offers": {
                    "Listings": [
                        {
                            "Price": {"Amount": 999.0},
                            "SavingBasis": {"Amount": 1199.0},
                            "DeliveryInfo": {"IsPrimeEligible": True},
                            "Availability": {"Message": "In stock"},
                        }
                    ]
                },
                "CustomerReviews": {"StarRating": {"Value": "4.4"}, "Count": {"Value": "812"}},
            },
            {"ASIN": "B0BARE0001"},
            {"DetailPageURL": "no asin here"},
        ]
    }
}


def test_parse_search_response():
    products = parse_search_response(SEARCH_ITEMS_RESPONSE, REGIONS["UK"])

    assert len(products) == 2
    dell, bare = products
    assert dell.title == "Dell XPS 13"
    assert dell.price == 999.0
    assert dell.original_price == 1199.0
    assert dell.rating == 4.4
    assert dell.review_count == 812
    assert dell.is_prime is True
    assert dell.features == ["13.4 inch display", "16GB RAM"]

    assert bare.title == "Unknown Product"
    assert bare.price == 0
    assert bare.availability == "Check Amazon"
    assert bare.product_url == "https://www.amazon.co.uk/dp/B0BARE0001"
    assert bare.currency == "GBP"


def test_parse_empty_result_is_empty_list():
    assert parse_search_response({}, REGIONS["US"]) == []


def test_parse_rejects_wrong_shape():
    with pytest.raises(MalformedProviderResponseError):
        parse_search_response(["not", "an", "object"], REGIONS["UK"])
    with pytest.raises(MalformedProviderResponseError):
        parse_search_response({"SearchResult": {"Items": "nope"}}, REGIONS["UK"])


def test_build_payload_uses_minor_units():
    provider = ProductAdvertisingProvider("AKIA", "secret")
    request = ProviderSearchRequest(keywords="laptops", search_index="Computers", price_min=499.5, price_max=1500, brand="Dell")

    payload = provider.build_payload(request, REGIONS["US"])

    assert payload["MinPrice"] == 49950
    assert payload["MaxPrice"] == 150000
    assert payload["Brand"] == "Dell"
    assert payload["Marketplace"] == "www.amazon.com"
    assert payload["PartnerTag"] == "shopai-us-20"
    assert "SortBy" not in payload


async def test_provider_search_signs_and_parses():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=SEARCH_ITEMS_RESPONSE)

    provider = ProductAdvertisingProvider("AKIA", "secret", transport=httpx.MockTransport(handler))
    products = await provider.search(ProviderSearchRequest(keywords="dell laptop"), REGIONS["UK"])

    assert [p.asin for p in products] == ["B0CHX1W1XY", "B0BARE0001"]
    assert seen["url"] == "https://webservices.amazon.co.uk/paapi5/searchitems"
    assert seen["auth"].startswith("AWS4-HMAC-SHA256 Credential=AKIA/")
    assert "/eu-west-1/ProductAdvertisingAPI/aws4_request" in seen["auth"]
    assert seen["body"]["Keywords"] == "dell laptop"


async def test_provider_http_error_is_transport_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(429, text="TooManyRequests"))
    provider = ProductAdvertisingProvider("AKIA", "secret", transport=transport)

    with pytest.raises(UpstreamTransportError) as exc_info:
        await provider.search(ProviderSearchRequest(keywords="x"), REGIONS["UK"])
    assert "429" in exc_info.value.message


async def test_provider_network_error_is_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    provider = ProductAdvertisingProvider("AKIA", "secret", transport=httpx.MockTransport(handler))
    with pytest.raises(UpstreamTransportError):
        await provider.search(ProviderSearchRequest(keywords="x"), REGIONS["UK"])


async def test_provider_invalid_json_is_malformed():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>"))
    provider = ProductAdvertisingProvider("AKIA", "secret", transport=transport)

    with pytest.raises(MalformedProviderResponseError):
        await provider.search(ProviderSearchRequest(keywords="x"), REGIONS["UK"])


def test_parse_tolerates_odd_nested_shapes():
    payload = {
        "SearchResult": {
            "Items": [
                {
                    "ASIN": "B0ODD00001",
                    "Offers": {"Listings": {"x": 1}},
                    "ItemInfo": "not an object",
                    "Images": ["nope"],
                    "CustomerReviews": 4.5,
                },
                {"ASIN": "B0ODD00002", "Offers": {"Listings": []}, "ItemInfo": {"Title": {"DisplayValue": ["x"]}}},
                {"ASIN": 12345},
            ]
        }
    }

    products = parse_search_response(payload, REGIONS["UK"])

    assert [p.asin for p in products] == ["B0ODD00001"]
    odd = products[0]
    assert odd.title == "Unknown Product"
    assert odd.price == 0
    assert odd.rating == 0
    assert odd.image_url == ""


def test_parse_rejects_search_result_that_is_not_an_object():
    with pytest.raises(MalformedProviderResponseError):
        parse_search_response({"SearchResult": ["x"]}, REGIONS["UK"])


async def test_adapter_falls_back_when_search_result_has_wrong_shape():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"SearchResult": ["oops"]}))
    provider = ProductAdvertisingProvider("AKIA", "secret", transport=transport)
    adapter = ProductRetrievalAdapter(provider=provider)

    products = await adapter.fetch(laptop_query(price_min=None, price_max=None), "UK")

    assert [p.asin for p in products] == ["MOCK010", "MOCK011", "MOCK012", "MOCK013", "MOCK014"]


async def test_adapter_keeps_item_whose_listings_are_not_a_list():
    payload = {"SearchResult": {"Items": [{"ASIN": "B1", "Offers": {"Listings": {"x": 1}}}]}}
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=payload))
    adapter = ProductRetrievalAdapter(provider=ProductAdvertisingProvider("AKIA", "secret", transport=transport))

    products = await adapter.fetch(laptop_query(), "UK")

    assert [p.asin for p in products] == ["B1"]
    assert products[0].price == 0
