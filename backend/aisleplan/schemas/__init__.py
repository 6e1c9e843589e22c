from aisleplan.schemas.category import (
    GroceryCategory,
    CategorySuggestion,
    CategorySuggestRequest,
    CategorySuggestResponse,
)
from aisleplan.schemas.shopping import (
    ShoppingListItem,
    GroupItemsRequest,
    GroupItemsResponse,
    StoreRequest,
    FoodSafetyRequest,
    FoodSafetyResponse,
)
from aisleplan.schemas.store_layout import (
    StoreSection,
    StoreLayout,
    LayoutOption,
    AppliedLayout,
    RouteSection,
    ShoppingRoute,
    TemperatureRequirement,
)

__all__ = [
    "GroceryCategory", "CategorySuggestion", "CategorySuggestRequest", "CategorySuggestResponse",
    "ShoppingListItem", "GroupItemsRequest", "GroupItemsResponse", "StoreRequest",
    "FoodSafetyRequest", "FoodSafetyResponse",
    "StoreSection", "StoreLayout", "LayoutOption", "AppliedLayout",
    "RouteSection", "ShoppingRoute", "TemperatureRequirement",
]
