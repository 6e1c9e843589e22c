"""Tests for the HTTP endpoints."""

from aisleplan.config import Settings, get_settings
from aisleplan.main import app
from aisleplan.services.grocery_categories import GROCERY_CATEGORIES


def test_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_list_categories(client):
    response = client.get("/api/categories")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == len(GROCERY_CATEGORIES)
    assert {"key", "name", "icon", "color", "section", "items", "custom"} <= set(data[0])


def test_categories_by_section(client):
    response = client.get("/api/categories/sections")
    assert response.status_code == 200
    assert "Frozen" in response.json()


def test_category_order(client):
    response = client.get("/api/categories/order")
    assert response.status_code == 200
    assert response.json()[-1] == "Fresh Produce"


def test_get_category(client):
    response = client.get("/api/categories/Canned Tomatoes")
    assert response.status_code == 200
    assert response.json()["section"] == "Pantry"


def test_get_unknown_category(client):
    response = client.get("/api/categories/Nope")
    assert response.status_code == 404


def test_suggest_category(client):
    response = client.post("/api/categories/suggest", json={"name": "Tomato Paste"})
    assert response.status_code == 200
    data = response.json()
    assert data["category"] == "Canned Tomatoes"
    assert data["confidence"] == 0.95
    assert data["is_valid_category"] is True
    assert data["normalized"] == "tomato paste"
    assert data["rule"] == "tomato_paste"


def test_suggest_requires_name(client):
    response = client.post("/api/categories/suggest", json={})
    assert response.status_code == 422


def test_group_items(client):
    items = [
        {"name": "milk"},
        {"ingredient": "corn tortillas", "amount": "10"},
        {"name": "carrots", "category": "Produce", "inInventory": True},
    ]
    response = client.post("/api/categories/group", json={"items": items})
    assert response.status_code == 200
    data = response.json()
    assert data["total_items"] == 3
    assert data["total_categories"] == 3
    assert list(data["items_by_category"]) == ["Dairy", "Mexican Items", "Fresh Produce"]
    assert data["items_by_category"]["Fresh Produce"][0]["inInventory"] is True


def test_group_items_too_many(client):
    app.dependency_overrides[get_settings] = lambda: Settings(max_batch_items=1)
    response = client.post("/api/categories/group", json={"items": [{"name": "milk"}, {"name": "eggs"}]})
    assert response.status_code == 413


def test_list_store_layouts(client):
    response = client.get("/api/store-layouts")
    assert response.status_code == 200
    values = [option["value"] for option in response.json()]
    assert "walmart" in values
    assert values[-1] == "generic"


def test_resolve_store_layout(client):
    response = client.get("/api/store-layouts/resolve", params={"store_name": "Walmart #42"})
    assert response.status_code == 200
    assert response.json()["key"] == "walmart"

    response = client.get("/api/store-layouts/resolve", params={"store_chain": "Albertsons"})
    assert response.json()["key"] == "kroger"


def test_get_store_layout(client):
    assert client.get("/api/store-layouts/target").json()["name"] == "Target"
    assert client.get("/api/store-layouts/nope").status_code == 404


def test_apply_layout(client, walmart_items):
    response = client.post(
        "/api/store-layouts/apply",
        json={"items_by_category": walmart_items, "store_name": "Walmart"},
    )
    assert response.status_code == 200
    assert list(response.json()["items"]) == ["Canned Vegetables", "Dairy", "Fresh Vegetables"]


def test_shopping_route(client):
    payload = {
        "items_by_category": {"Dairy": [{"name": "milk"}], "Fresh Vegetables": [{"name": "carrot"}]},
        "store_name": "Walmart",
    }
    response = client.post("/api/store-layouts/route", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert [s["section"] for s in data["route"]] == ["Dairy", "Fresh Produce"]
    assert data["total_time"] == 7


def test_route_uses_default_store(client):
    app.dependency_overrides[get_settings] = lambda: Settings(default_store_name="Costco")
    response = client.post("/api/store-layouts/route", json={"items_by_category": {"Dairy": [{"name": "milk"}]}})
    assert response.json()["store_name"] == "Costco Warehouse"


def test_export_route(client):
    payload = {"items_by_category": {"Dairy": [{"name": "milk", "amount": "1 gal"}]}, "store_name": "Target"}
    response = client.post("/api/store-layouts/route/export", json=payload)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text.startswith("🛒 Food Safety Shopping Route - Target\n")
    assert "   • 1 gal milk\n" in response.text


def test_food_safety_check(client):
    payload = {"category_order": ["Fresh Fruits", "Frozen Meals", "Dairy", "Pasta"]}
    response = client.post("/api/store-layouts/food-safety", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["score"] == 70
    assert data["ordered"] == ["Pasta", "Dairy", "Frozen Meals", "Fresh Fruits"]
    assert len(data["recommendations"]) == 4
