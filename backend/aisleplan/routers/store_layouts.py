"""
Store Layouts Router - API endpoints for store layouts and shopping routes.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from aisleplan.config import Settings, get_settings
from aisleplan.schemas.shopping import FoodSafetyRequest, FoodSafetyResponse, StoreRequest
from aisleplan.schemas.store_layout import AppliedLayout, LayoutOption, ShoppingRoute, StoreLayout
from aisleplan.services.food_safety import (
    calculate_food_safety_score,
    get_food_safety_recommendations,
    sort_categories_by_food_safety,
)
from aisleplan.services.store_layouts import (
    apply_store_layout,
    export_shopping_route,
    generate_shopping_route,
    get_available_store_layouts,
    get_store_layout_by_key,
    resolve_store_layout,
)

router = APIRouter(prefix="/store-layouts", tags=["store-layouts"])


def _store(request: StoreRequest, settings: Settings) -> tuple[str, str]:
    # Fall back to the configured home store when the client sends neither field
    if not request.store_name and not request.store_chain:
        return settings.default_store_name, settings.default_store_chain
    return request.store_name or "", request.store_chain or ""


@router.get("", response_model=list[LayoutOption])
def list_store_layouts():
    return get_available_store_layouts()


@router.get("/resolve", response_model=StoreLayout)
def resolve_layout(
    store_name: Optional[str] = Query(None, description="Store name, e.g. 'Walmart Supercenter #123'"),
    store_chain: str = Query("", description="Chain name if known"),
):
    """Layout that would be used for a store name/chain."""
    return resolve_store_layout(store_name, store_chain)


@router.get("/{key}", response_model=StoreLayout)
def get_store_layout(key: str):
    layout = get_store_layout_by_key(key)
    if layout is None:
        raise HTTPException(status_code=404, detail=f"Unknown store layout: {key}")
    return layout


@router.post("/apply", response_model=AppliedLayout)
def apply_layout(request: StoreRequest, settings: Settings = Depends(get_settings)):
    store_name, store_chain = _store(request, settings)
    return apply_store_layout(request.items_by_category, store_name, store_chain)


@router.post("/route", response_model=ShoppingRoute)
def shopping_route(request: StoreRequest, settings: Settings = Depends(get_settings)):
    """Section-by-section route with time estimates and food safety notes."""
    store_name, store_chain = _store(request, settings)
    return generate_shopping_route(request.items_by_category, store_name, store_chain)


@router.post("/route/export", response_class=PlainTextResponse)
def export_route(request: StoreRequest, settings: Settings = Depends(get_settings)):
    """Shopping route as shareable plain text."""
    store_name, store_chain = _store(request, settings)
    route = generate_shopping_route(request.items_by_category, store_name, store_chain)
    return export_shopping_route(route, route.store_name)


@router.post("/food-safety", response_model=FoodSafetyResponse)
def food_safety_check(request: FoodSafetyRequest):
    """
    Score a category visiting order for cold-chain safety.

    Also returns the suggested order (stable sort by food safety priority).
    """
    score = calculate_food_safety_score(request.category_order, request.time_estimates)
    return FoodSafetyResponse(
        score=score,
        recommendations=get_food_safety_recommendations(request.category_order, score),
        ordered=sort_categories_by_food_safety(request.category_order),
    )
