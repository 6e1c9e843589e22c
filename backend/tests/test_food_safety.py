"""Tests for food safety helpers."""

import pytest

from aisleplan.services.food_safety import (
    DEFAULT_SECTION_NOTE,
    FOOD_SAFETY_TIPS,
    calculate_food_safety_score,
    get_food_safety_notes,
    get_food_safety_priority,
    get_food_safety_recommendations,
    get_temperature_requirements,
    sort_categories_by_food_safety,
)
from aisleplan.services.grocery_categories import get_default_category_order


@pytest.mark.parametrize("section_name, expected_start", [
    ("Pantry Staples", "Room temperature"),
    ("Pantry", "Room temperature"),
    ("Beverages & Snacks", "Most are shelf-stable"),
    ("Household & Personal Care", "Non-food"),
    ("Meat & Seafood", "🥩"),
    ("Seafood", "🐟"),
    ("Frozen Foods", "🧊"),
    ("Fresh Produce", "🥬"),
])
def test_food_safety_notes(section_name, expected_start):
    assert get_food_safety_notes(section_name).startswith(expected_start)


def test_food_safety_notes_default():
    assert get_food_safety_notes("Bakery") == DEFAULT_SECTION_NOTE
    assert get_food_safety_notes(None) == DEFAULT_SECTION_NOTE


@pytest.mark.parametrize("category, expected", [
    ("Canned Vegetables", 1),
    ("Other", 1),
    ("Dairy", 2),
    ("Fresh Seafood", 2),
    ("Frozen Meals", 3),
    ("Ice Cream", 3),
    ("Fresh Fruits", 4),
    ("Fresh Produce", 4),
    ("Unknown Thing", 1),
    (None, 1),
])
def test_food_safety_priority(category, expected):
    assert get_food_safety_priority(category) == expected


def test_sort_is_stable_and_returns_new_list():
    categories = ["Fresh Fruits", "Dairy", "Pasta", "Frozen Meals", "Cheese", "Soups"]
    result = sort_categories_by_food_safety(categories)

    assert result == ["Pasta", "Soups", "Dairy", "Cheese", "Frozen Meals", "Fresh Fruits"]
    assert categories[0] == "Fresh Fruits"


def test_default_order_is_already_sorted():
    order = get_default_category_order()
    assert sort_categories_by_food_safety(order) == order


def test_temperature_requirements():
    assert get_temperature_requirements("Fresh Seafood").urgency == "Critical"
    assert get_temperature_requirements("Fresh Poultry").urgency == "Very High"
    assert get_temperature_requirements("Frozen Pizza").temp == "0°F or below"
    assert get_temperature_requirements("Fresh Vegetables").storage == "Cool, Humid"
    assert get_temperature_requirements("Pasta").urgency == "Low"
    assert get_temperature_requirements("Unknown").temp == "Room temp"


def test_score_good_order():
    assert calculate_food_safety_score(["Pasta", "Dairy", "Frozen Meals", "Fresh Fruits"]) == 90


def test_score_bad_order():
    assert calculate_food_safety_score(["Fresh Fruits", "Frozen Meals", "Dairy", "Pasta"]) == 70


def test_score_penalizes_slow_seafood():
    assert calculate_food_safety_score(["Fresh Seafood"], {"Fresh Seafood": 20}) == 80
    assert calculate_food_safety_score(["Fresh Seafood"], {"Fresh Seafood": 5}) == 100


def test_score_is_clamped():
    order = ["Fresh Fruits", "Fresh Vegetables", "Fresh Produce"] * 10 + ["Pasta", "Soups"]
    assert calculate_food_safety_score(order) == 0
    assert calculate_food_safety_score([]) == 100


def test_recommendations_for_bad_order():
    order = ["Fresh Fruits", "Frozen Meals", "Dairy", "Pasta"]
    recommendations = get_food_safety_recommendations(order, 70)

    assert recommendations == [
        "🥬 Move produce to the end of your shopping trip",
        "🧊 Shop frozen foods closer to checkout time",
        "⏰ Keep cold items in cart for less than 30 minutes total",
        "🏠 Get home within 2 hours and refrigerate immediately",
    ]


def test_recommendations_low_score_and_early_dairy():
    recommendations = get_food_safety_recommendations(["Dairy", "Pasta", "Soups"], 50)

    assert recommendations[0].startswith("🛡️ Critical")
    assert "🥛 Shop dairy and meat after non-perishable items" in recommendations


def test_tips_present():
    assert len(FOOD_SAFETY_TIPS) == 6
