"""Tests for the grocery category registry."""

import pytest
from pydantic import ValidationError

from aisleplan.services.grocery_categories import (
    GROCERY_CATEGORIES,
    OTHER,
    UnknownCategoryError,
    create_custom_category,
    get_all_category_names,
    get_categories_by_section,
    get_category_info,
    get_default_category_order,
    is_valid_category,
    merge_with_custom_categories,
    normalize_category_name,
    validate_category_keys,
)


def test_registry_has_other_fallback():
    assert OTHER in GROCERY_CATEGORIES
    assert get_category_info(OTHER).key == OTHER


def test_default_order_covers_every_category_once():
    order = get_default_category_order()
    assert len(order) == len(set(order))
    assert set(order) == set(GROCERY_CATEGORIES)


def test_default_order_is_food_safety_order():
    order = get_default_category_order()
    assert order.index("Canned Vegetables") < order.index("Dairy")
    assert order.index("Dairy") < order.index("Frozen Meals")
    assert order.index("Frozen Meals") < order.index("Fresh Fruits")
    assert order[-3:] == ["Fresh Fruits", "Fresh Vegetables", "Fresh Produce"]


def test_categories_by_section():
    sections = get_categories_by_section()
    assert "International" in sections
    assert [c.key for c in sections["International"]] == ["Mexican Items", "Asian Items", "Indian Items"]
    assert sum(len(categories) for categories in sections.values()) == len(GROCERY_CATEGORIES)


def test_all_category_names():
    names = get_all_category_names()
    assert names == list(GROCERY_CATEGORIES)
    assert "Canned Tomatoes" in names


def test_get_category_info_unknown_falls_back():
    assert get_category_info("Nope").key == OTHER
    assert get_category_info(None).key == OTHER
    assert get_category_info("Dairy").icon == "🥛"


def test_is_valid_category():
    assert is_valid_category("Fresh Produce")
    assert not is_valid_category("fresh produce")
    assert not is_valid_category(None)


@pytest.mark.parametrize("raw, expected", [
    ("Dairy", "Dairy"),
    ("  dairy ", "Dairy"),
    ("Produce", "Fresh Produce"),
    ("Fish", "Fresh Seafood"),
    ("Canned/Jarred Tomatoes", "Canned Tomatoes"),
    ("Fresh/Frozen Beef", "Fresh Meat"),
    ("", OTHER),
    (None, OTHER),
    ("  Something Else ", "Something Else"),
])
def test_normalize_category_name(raw, expected):
    assert normalize_category_name(raw) == expected


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        GROCERY_CATEGORIES["New"] = create_custom_category("New")
    with pytest.raises(ValidationError):
        GROCERY_CATEGORIES["Dairy"].icon = "x"


def test_custom_categories_do_not_touch_registry():
    custom = create_custom_category("Hot Sauces", icon="🌶️")
    assert custom.custom is True
    assert custom.section == "Other"

    merged = merge_with_custom_categories({"Hot Sauces": custom})
    assert "Hot Sauces" in merged
    assert "Hot Sauces" not in GROCERY_CATEGORIES
    assert len(merged) == len(GROCERY_CATEGORIES) + 1


def test_merge_without_custom_categories():
    assert merge_with_custom_categories() == dict(GROCERY_CATEGORIES)


def test_validate_category_keys():
    validate_category_keys(["Dairy", OTHER], "test table")

    with pytest.raises(UnknownCategoryError, match="Not Real"):
        validate_category_keys(["Dairy", "Not Real"], "test table")


def test_unknown_category_error_is_value_error():
    assert issubclass(UnknownCategoryError, ValueError)
