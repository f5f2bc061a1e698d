"""HTTP-level tests with the Mongo-backed services replaced by in-memory fakes."""

import uuid

import pytest
from fastapi.testclient import TestClient

import zokey.main as main
from zokey.core.exceptions import UserNotFoundError
from zokey.main import app
from zokey.routers.users import get_user_service
from zokey.schemas.user import User
from zokey.services.search_service import get_search_service

LAPTOP_SEARCH = {
    "subcategory_id": "laptops",
    "answers": [
        {"question_id": "usage", "value": "work"},
        {"question_id": "budget", "value": {"min": 500, "max": 1500}},
        {"question_id": "priorities", "value": ["performance", "battery"]},
    ],
}


class FakeUserService:
    def __init__(self):
        self.users: dict[str, User] = {}
        self.history = []
        self.events = []

    async def register(self, device_id, region):
        for user in self.users.values():
            if user.device_id == device_id:
                return user
        user = User(id=str(uuid.uuid4()), device_id=device_id, region=region, currency="USD" if region == "US" else "GBP")
        self.users[user.id] = user
        return user

    async def get_user(self, user_id):
        if user_id not in self.users:
            raise UserNotFoundError(user_id)
        return self.users[user_id]

    async def increment_search_count(self, user_id):
        user = self.users[user_id]
        self.users[user_id] = user.model_copy(update={"free_searches_used": user.free_searches_used + 1})
        return self.users[user_id]

    async def record_search(self, user_id, query, query_hash, region, result_count):
        search_id = f"search-{len(self.history) + 1}"
        self.history.append((search_id, user_id, query_hash, result_count))
        return search_id

    async def track_event(self, user_id, event_type, event_data):
        self.events.append((user_id, event_type, event_data))


@pytest.fixture
def users():
    return FakeUserService()


@pytest.fixture
def client(users, search_service):
    app.dependency_overrides[get_user_service] = lambda: users
    app.dependency_overrides[get_search_service] = lambda: search_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def register(client, device_id="device-1", region="UK") -> str:
    response = client.post("/api/v1/users/register", json={"device_id": device_id, "region": region})
    assert response.status_code == 200
    return response.json()["user_id"]


def test_health(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_categories_in_requested_currency(client):
    response = client.get("/api/v1/categories", params={"currency": "usd"})
    assert response.status_code == 200

    categories = response.json()
    assert len(categories) == 6
    laptops = next(s for s in categories[0]["subcategories"] if s["id"] == "laptops")
    budget = next(q for q in laptops["questions"] if q["id"] == "budget")
    assert budget["range_config"]["currency"] == "USD"


def test_subcategory_questions(client):
    response = client.get("/api/v1/categories/laptops/questions")
    assert response.status_code == 200
    data = response.json()
    assert data["subcategory_name"] == "Laptops"
    assert [q["id"] for q in data["questions"]] == ["brand", "budget", "priorities", "usage"]


def test_unknown_subcategory_questions(client):
    response = client.get("/api/v1/categories/does-not-exist/questions")
    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": {"code": "NOT_FOUND", "message": "Subcategory not found: does-not-exist"},
    }


def test_register_and_status(client):
    user_id = register(client)
    assert register(client) == user_id

    response = client.get(f"/api/v1/users/{user_id}/status")
    assert response.status_code == 200
    assert response.json()["free_searches_remaining"] == 3
    assert response.json()["can_search"] is True


def test_status_for_unknown_user(client):
    response = client.get("/api/v1/users/nobody/status")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


def test_search_returns_ranked_products(client, users):
    user_id = register(client)

    response = client.post("/api/v1/search", json=LAPTOP_SEARCH, headers={"X-User-Id": user_id})

    assert response.status_code == 200
    data = response.json()
    assert data["search_id"] == "search-1"
    assert 1 <= len(data["products"]) <= 5
    assert data["products"][0]["rank"] == 1
    assert data["search_criteria"]["budget"] == "£500 - £1500"
    assert users.users[user_id].free_searches_used == 1
    assert users.events[0][1] == "search_completed"


def test_search_quota_exhausted(client, users):
    user_id = register(client)
    for _ in range(3):
        assert client.post("/api/v1/search", json=LAPTOP_SEARCH, headers={"X-User-Id": user_id}).status_code == 200

    response = client.post("/api/v1/search", json=LAPTOP_SEARCH, headers={"X-User-Id": user_id})

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "LIMIT_REACHED"


def test_subscriber_does_not_consume_quota(client, users):
    user_id = register(client)
    users.users[user_id] = users.users[user_id].model_copy(update={"subscription_status": "active", "free_searches_used": 3})

    response = client.post("/api/v1/search", json=LAPTOP_SEARCH, headers={"X-User-Id": user_id})

    assert response.status_code == 200
    assert users.users[user_id].free_searches_used == 3


def test_search_unknown_subcategory(client):
    user_id = register(client)
    response = client.post(
        "/api/v1/search",
        json={"subcategory_id": "does-not-exist", "answers": []},
        headers={"X-User-Id": user_id},
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_search_requires_user_header(client):
    response = client.post("/api/v1/search", json=LAPTOP_SEARCH)
    assert response.status_code == 422


def test_search_with_partial_budget_is_unconstrained(client, provider):
    user_id = register(client)
    payload = {
        "subcategory_id": "laptops",
        "answers": [
            {"question_id": "usage", "value": "work"},
            {"question_id": "budget", "value": {"min": 500}},
        ],
    }

    response = client.post("/api/v1/search", json=payload, headers={"X-User-Id": user_id})

    assert response.status_code == 200
    assert response.json()["search_criteria"]["budget"] == "£0 - £10000"
    request, _ = provider.calls[0]
    assert request.price_min is None
    assert request.price_max is None


def test_startup_connects_mongo_even_in_mock_mode(monkeypatch):
    calls = []

    async def record(name):
        calls.append(name)

    monkeypatch.setattr(main.settings, "MOCK_MODE", True)
    monkeypatch.setattr(main, "connect_mongo", lambda: record("connect"))
    monkeypatch.setattr(main, "ensure_indexes", lambda: record("indexes"))
    monkeypatch.setattr(main, "close_mongo", lambda: record("close"))

    with TestClient(app) as client:
        assert client.get("/api/v1/health").json()["mock_mode"] is True

    assert calls == ["connect", "indexes", "close"]
