"""
Categories Router - API endpoints for the grocery category registry.

Lookup of the static category registry plus item categorization for
shopping list and recipe ingredient names.
"""
from fastapi import APIRouter, Depends, HTTPException

from aisleplan.config import Settings, get_settings
from aisleplan.schemas.category import (
    GroceryCategory,
    CategorySuggestRequest,
    CategorySuggestResponse,
)
from aisleplan.schemas.shopping import GroupItemsRequest, GroupItemsResponse
from aisleplan.services.auto_categorizer import (
    explain_categorization,
    group_items_by_category,
    score_category_confidence,
)
from aisleplan.services.grocery_categories import (
    GROCERY_CATEGORIES,
    get_categories_by_section,
    get_default_category_order,
)

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[GroceryCategory])
def list_categories():
    """All registry categories in registry order."""
    return list(GROCERY_CATEGORIES.values())


@router.get("/sections", response_model=dict[str, list[GroceryCategory]])
def list_categories_by_section():
    return get_categories_by_section()


@router.get("/order", response_model=list[str])
def get_category_order():
    """Canonical food-safety shopping order."""
    return get_default_category_order()


@router.get("/{key}", response_model=GroceryCategory)
def get_category(key: str):
    category = GROCERY_CATEGORIES.get(key)
    if category is None:
        raise HTTPException(status_code=404, detail=f"Unknown category: {key}")
    return category


@router.post("/suggest", response_model=CategorySuggestResponse)
def suggest_category(request: CategorySuggestRequest):
    """
    Categorize a single item name.

    Returns the category with a confidence estimate plus the normalized text,
    core term and matching rule so the client can show why.
    """
    suggestion = score_category_confidence(request.name)
    explanation = explain_categorization(request.name)
    return CategorySuggestResponse(
        **suggestion.model_dump(),
        normalized=explanation["normalized"],
        core=explanation["core"],
        rule=explanation["rule"],
    )


@router.post("/group", response_model=GroupItemsResponse)
def group_items(request: GroupItemsRequest, settings: Settings = Depends(get_settings)):
    """Group shopping list items by category (existing category fields are kept when valid)."""
    if len(request.items) > settings.max_batch_items:
        raise HTTPException(
            status_code=413,
            detail=f"Too many items: {len(request.items)} (max {settings.max_batch_items})",
        )

    grouped = group_items_by_category(request.items)
    return GroupItemsResponse(
        items_by_category=grouped,
        total_items=len(request.items),
        total_categories=len(grouped),
    )
