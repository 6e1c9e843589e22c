"""
Food Safety Service

Cold-chain helpers used by the route planner and the food-safety endpoint.
Shopping order rule of thumb: non-perishables -> refrigerated -> frozen ->
produce (last, on top of the cart).
"""
import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from aisleplan.schemas.store_layout import TemperatureRequirement
from aisleplan.services.grocery_categories import FOOD_SAFETY_TIERS, validate_category_keys

logger = logging.getLogger(__name__)

FOOD_SAFETY_REMINDER = (
    "🧊 Remember: Non-perishables first, frozen items minimize thaw time, produce last for best quality!"
)

FOOD_SAFETY_TIPS = (
    "🧊 Non-perishables first, frozen foods last",
    "🥛 Keep cold items together in cart",
    "🥬 Produce on top to prevent crushing",
    "⏰ Get home within 2 hours (1 hour if >90°F)",
    "🏠 Refrigerate/freeze immediately upon arrival",
    "🛒 Separate raw meat from ready-to-eat foods",
)

# Section-name keyword -> note. First keyword contained in the name wins.
SECTION_NOTES = (
    ("Pantry", "Room temperature items - safe to shop first"),
    ("Dry Goods", "Non-perishable - safe at room temperature"),
    ("Beverages", "Most are shelf-stable - shop early"),
    ("Snacks", "Packaged goods - no refrigeration needed"),
    ("Household", "Non-food items - no temperature concerns"),
    ("Other", "Check individual item requirements"),
    ("Dairy", "🥛 Keep cold - shop after dry goods, within 2 hours of home"),
    ("Meat", "🥩 Keep very cold - minimize time in cart, separate from other foods"),
    ("Seafood", "🐟 Highly perishable - buy ice if needed for long trips"),
    ("Frozen", "🧊 Minimize thaw time - shop last among cold items"),
    ("Produce", "🥬 Most fragile - place on top, shop last to prevent crushing"),
)
DEFAULT_SECTION_NOTE = "Handle according to temperature requirements"

# Tier name -> priority (1 = shop first)
TIER_PRIORITY: Mapping[str, int] = MappingProxyType({
    tier: index for index, (tier, _keys) in enumerate(FOOD_SAFETY_TIERS, start=1)
})

_CATEGORY_PRIORITY: Mapping[str, int] = MappingProxyType({
    key: TIER_PRIORITY[tier] for tier, keys in FOOD_SAFETY_TIERS for key in keys
})

NON_PERISHABLE_PRIORITY = TIER_PRIORITY["Non-perishable"]
FROZEN_PRIORITY = TIER_PRIORITY["Frozen"]
PRODUCE_PRIORITY = TIER_PRIORITY["Produce"]

_ROOM_TEMP = TemperatureRequirement(temp="Room temp", storage="Dry", urgency="Low")
_REFRIGERATED = TemperatureRequirement(temp="34-38°F", storage="Refrigerated", urgency="High")
_MEAT = TemperatureRequirement(temp="33-36°F", storage="Refrigerated", urgency="Very High")
_SEAFOOD = TemperatureRequirement(temp="33-36°F", storage="Refrigerated", urgency="Critical")
_FROZEN = TemperatureRequirement(temp="0°F or below", storage="Frozen", urgency="High")
_PRODUCE = TemperatureRequirement(temp="35-40°F", storage="Cool, Humid", urgency="Medium")

_TEMPERATURE_TABLE = {
    "Dairy": _REFRIGERATED,
    "Cheese": _REFRIGERATED,
    "Eggs": _REFRIGERATED,
    "Yogurt": _REFRIGERATED,
    "Refrigerated Items": _REFRIGERATED,
    "Fresh Meat": _MEAT,
    "Fresh Poultry": _MEAT,
    "Deli": _MEAT,
    "Fresh Seafood": _SEAFOOD,
    "Breads": _ROOM_TEMP,
    "Bakery": _ROOM_TEMP,
}
for _tier, _keys in FOOD_SAFETY_TIERS:
    if _tier == "Frozen":
        _TEMPERATURE_TABLE.update(dict.fromkeys(_keys, _FROZEN))
    elif _tier == "Produce":
        _TEMPERATURE_TABLE.update(dict.fromkeys(_keys, _PRODUCE))

TEMPERATURE_REQUIREMENTS: Mapping[str, TemperatureRequirement] = MappingProxyType(_TEMPERATURE_TABLE)

# Cold categories that shouldn't be picked up before the dry goods are done
COLD_CHAIN_CATEGORIES = ("Dairy", "Fresh Meat", "Fresh Poultry", "Fresh Seafood")

validate_category_keys(TEMPERATURE_REQUIREMENTS, "TEMPERATURE_REQUIREMENTS")
validate_category_keys(COLD_CHAIN_CATEGORIES, "COLD_CHAIN_CATEGORIES")

# Minutes assumed for a category with no time estimate
DEFAULT_CATEGORY_MINUTES = 2


def get_food_safety_notes(section_name: Optional[str]) -> str:
    """Handling note for a store section, matched on keywords in its name."""
    name = section_name or ""
    for keyword, note in SECTION_NOTES:
        if keyword in name:
            return note
    return DEFAULT_SECTION_NOTE


def get_food_safety_priority(category: Optional[str]) -> int:
    """1 = non-perishable ... 4 = produce. Unknown categories count as non-perishable."""
    return _CATEGORY_PRIORITY.get(category or "", NON_PERISHABLE_PRIORITY)


def sort_categories_by_food_safety(categories: Iterable[str]) -> list[str]:
    """Stable sort by priority; returns a new list."""
    return sorted(categories, key=get_food_safety_priority)


def get_temperature_requirements(category: Optional[str]) -> TemperatureRequirement:
    return TEMPERATURE_REQUIREMENTS.get(category or "", _ROOM_TEMP)


def calculate_food_safety_score(
    shopping_order: list[str],
    time_estimates: Optional[Mapping[str, float]] = None,
) -> int:
    """
    Score a category visiting order from 0 to 100.

    Points are lost when perishable categories sit in the cart too long
    (using cumulative minutes from time_estimates) and when a category is
    visited out of food-safety order.

    Args:
        shopping_order: Category keys in the order they will be visited
        time_estimates: Minutes per category; missing entries count as 2

    Returns:
        Integer score clamped to 0-100
    """
    estimates = time_estimates or {}
    count = len(shopping_order)
    score = 100
    elapsed = 0.0

    for index, category in enumerate(shopping_order):
        urgency = get_temperature_requirements(category).urgency
        priority = get_food_safety_priority(category)
        elapsed += estimates.get(category) or DEFAULT_CATEGORY_MINUTES

        if urgency == "Critical" and elapsed > 15:
            score -= 20
        elif urgency == "Very High" and elapsed > 20:
            score -= 15
        elif urgency == "High" and elapsed > 30:
            score -= 10

        if priority == PRODUCE_PRIORITY and index < count - 2:
            score -= 15
        elif priority == FROZEN_PRIORITY and index < count * 0.7:
            score -= 10
        elif priority == NON_PERISHABLE_PRIORITY and index > count * 0.4:
            score -= 5

    return max(0, min(100, score))


def _first_index(shopping_order: list[str], wanted) -> int:
    for index, category in enumerate(shopping_order):
        if wanted(category):
            return index
    return -1


def get_food_safety_recommendations(shopping_order: list[str], current_score: int) -> list[str]:
    recommendations = []
    count = len(shopping_order)

    if current_score < 70:
        recommendations.append("🛡️ Critical: Reorganize your shopping order for food safety")

    produce_index = _first_index(shopping_order, lambda c: get_food_safety_priority(c) == PRODUCE_PRIORITY)
    frozen_index = _first_index(shopping_order, lambda c: get_food_safety_priority(c) == FROZEN_PRIORITY)
    cold_index = _first_index(shopping_order, lambda c: c in COLD_CHAIN_CATEGORIES)

    if produce_index != -1 and produce_index < count - 2:
        recommendations.append("🥬 Move produce to the end of your shopping trip")
    if frozen_index != -1 and frozen_index < count * 0.7:
        recommendations.append("🧊 Shop frozen foods closer to checkout time")
    if cold_index != -1 and cold_index < count * 0.4:
        recommendations.append("🥛 Shop dairy and meat after non-perishable items")

    recommendations.append("⏰ Keep cold items in cart for less than 30 minutes total")
    recommendations.append("🏠 Get home within 2 hours and refrigerate immediately")
    return recommendations
