from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ShoppingListItem(BaseModel):
    """A shopping list entry produced by recipe, receipt or manual entry.

    Only ``name``/``ingredient`` and ``category`` are read by the engine;
    anything else is carried through untouched.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = None
    ingredient: str | None = None
    category: str | None = None
    amount: str | float | None = None
    in_inventory: bool = Field(default=False, alias="inInventory")
    recipes: list[str] = Field(default_factory=list)


class GroupItemsRequest(BaseModel):
    items: list[ShoppingListItem]


class GroupItemsResponse(BaseModel):
    items_by_category: dict[str, list[ShoppingListItem]]
    total_items: int
    total_categories: int


class StoreRequest(BaseModel):
    items_by_category: dict[str, list[ShoppingListItem]] = Field(default_factory=dict)
    store_name: str | None = None
    store_chain: str = ""


class FoodSafetyRequest(BaseModel):
    category_order: list[str]
    time_estimates: dict[str, float] = Field(default_factory=dict)


class FoodSafetyResponse(BaseModel):
    score: int
    recommendations: list[str]
    ordered: list[str]


def item_label(item: Any) -> str:
    """Display name of an item that may be a dict or a model."""
    if isinstance(item, dict):
        return item.get("ingredient") or item.get("name") or ""
    return getattr(item, "ingredient", None) or getattr(item, "name", None) or ""


def item_field(item: Any, field: str) -> Any:
    if isinstance(item, dict):
        return item.get(field)
    return getattr(item, field, None)
