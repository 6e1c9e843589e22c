"""
Store Layout & Route Planner

Store-specific section orders for the common US chains plus a generic
fallback, and the helpers that turn a categorized shopping list into an
ordered walk through the store.

Every layout follows the cold-chain order: non-perishables, then
refrigerated, then frozen, with produce last so delicate items end up on
top of the cart.
"""
import logging
import math
from types import MappingProxyType
from typing import Any, Mapping, Optional

from aisleplan.config import get_settings
from aisleplan.schemas.shopping import item_field, item_label
from aisleplan.schemas.store_layout import (
    AppliedLayout,
    LayoutOption,
    RouteSection,
    ShoppingRoute,
    StoreLayout,
    StoreSection,
)
from aisleplan.services.food_safety import FOOD_SAFETY_REMINDER, get_food_safety_notes
from aisleplan.services.grocery_categories import (
    GROCERY_CATEGORIES,
    OTHER,
    UnknownCategoryError,
    get_default_category_order,
    validate_category_keys,
)

logger = logging.getLogger(__name__)

GENERIC_LAYOUT_KEY = "generic"

# Reusable category groups for building sections
CANNED_GOODS = ("Canned Vegetables", "Canned Fruits", "Canned Tomatoes", "Soups", "Beans & Legumes")
DRY_GOODS = ("Pasta", "Rice & Grains", "Baking Ingredients", "Cooking Oil")
SEASONINGS = ("Spices & Seasonings", "Sauces & Condiments", "Vinegar")
INTERNATIONAL = ("Mexican Items", "Asian Items", "Indian Items")
BREAKFAST = ("Cereal", "Breakfast Items")
BEVERAGES = ("Water", "Soft Drinks", "Juices", "Coffee & Tea")
SNACKS = ("Chips & Crackers", "Nuts & Seeds", "Candy", "Cookies & Sweets")
HOUSEHOLD = ("Cleaning Supplies", "Paper Products", "Laundry")
HEALTH_BEAUTY = ("Personal Care", "Health Items", "Baby Care")
DAIRY = ("Dairy", "Eggs", "Cheese", "Yogurt", "Refrigerated Items")
MEAT_SEAFOOD = ("Fresh Meat", "Fresh Poultry", "Fresh Seafood")
BAKERY = ("Breads", "Bakery")
FROZEN = (
    "Frozen Meals", "Frozen Meat", "Frozen Pizza", "Frozen Breakfast",
    "Ice Cream", "Frozen Vegetables", "Frozen Fruits",
)
PRODUCE = ("Fresh Produce", "Fresh Fruits", "Fresh Vegetables")

# Minutes per section: (base, per item). First keyword found in the section name wins.
SECTION_TIMING = (
    (("Produce",), 3, 0.75),
    (("Meat", "Seafood"), 3, 0.6),
    (("Frozen",), 2, 0.4),
)
DEFAULT_SECTION_TIMING = (2, 0.5)


def _section(name: str, emoji: str, *groups: tuple[str, ...]) -> StoreSection:
    return StoreSection(name=name, emoji=emoji, categories=tuple(key for group in groups for key in group))


def _layout(
    key: str,
    name: str,
    description: str,
    sections: list[StoreSection],
    tips: list[str],
    category_order: Optional[list[str]] = None,
) -> StoreLayout:
    if category_order is None:
        category_order = [category for section in sections for category in section.categories]
    return StoreLayout(
        key=key,
        name=name,
        description=description,
        category_order=tuple(category_order),
        sections=tuple(sections),
        tips=tuple(tips),
    )


_LAYOUTS = [
    _layout(
        "walmart", "Walmart Supercenter",
        "Food safety optimized layout - cold items last, produce final",
        [
            _section("Pantry Staples", "🥫", CANNED_GOODS),
            _section("Dry Goods", "🌾", DRY_GOODS),
            _section("Seasonings & Condiments", "🧂", SEASONINGS),
            _section("International Foods", "🌮", INTERNATIONAL),
            _section("Breakfast & Cereal", "🥣", BREAKFAST),
            _section("Beverages & Snacks", "🥤", BEVERAGES, SNACKS, ("Beer & Wine",)),
            _section("Household & Personal Care", "🧴", HOUSEHOLD, HEALTH_BEAUTY, ("Pet Food",)),
            _section("Other Items", "🛒", (OTHER,)),
            _section("Dairy", "🥛", DAIRY),
            _section("Meat & Seafood", "🥩", MEAT_SEAFOOD, ("Deli",)),
            _section("Bakery", "🍞", BAKERY),
            _section("Frozen Foods", "🧊", FROZEN),
            _section("Fresh Produce", "🥬", PRODUCE),
        ],
        [
            "Start with shelf-stable items in center aisles",
            "Hit dairy and meat sections after dry goods",
            "Frozen foods next - minimize thaw time",
            "End with produce - keeps delicate items on top",
            "Shop frozen and produce together to minimize time",
        ],
    ),
    _layout(
        "target", "Target",
        "Food safety first - cold items at end of trip",
        [
            _section("Pantry Essentials", "🥫", ("Pasta",), CANNED_GOODS, SEASONINGS, ("Baking Ingredients", "Cooking Oil")),
            _section("International", "🌮", INTERNATIONAL),
            _section("Beverages & Snacks", "🥤", BEVERAGES, SNACKS, BREAKFAST, ("Beer & Wine",)),
            _section("Home & Beauty", "🧴", HOUSEHOLD, HEALTH_BEAUTY, ("Pet Food",)),
            _section("Other", "🛒", (OTHER,)),
            _section("Dairy", "🥛", DAIRY),
            _section("Meat", "🥩", MEAT_SEAFOOD, ("Deli",)),
            _section("Bakery", "🍞", BAKERY),
            _section("Frozen", "🧊", FROZEN),
            _section("Fresh Market Produce", "🥬", PRODUCE),
        ],
        [
            "Begin with packaged goods in center aisles",
            "Target's grocery section is typically at back of store",
            "Grab dairy and meat after shelf-stable items",
            "Frozen section before checkout",
            "Fresh produce last - handle gently",
        ],
    ),
    _layout(
        "costco", "Costco Warehouse",
        "Bulk warehouse optimized for food safety and cart space",
        [
            _section("Bulk Pantry", "🥫", CANNED_GOODS, DRY_GOODS, SEASONINGS, INTERNATIONAL, BREAKFAST),
            _section("Beverages & Snacks", "🥤", BEVERAGES, SNACKS, ("Beer & Wine",)),
            _section("Other Bulk Items", "🛒", HOUSEHOLD, HEALTH_BEAUTY, ("Pet Food", OTHER)),
            _section("Dairy", "🥛", DAIRY),
            _section("Meat & Seafood", "🥩", MEAT_SEAFOOD, ("Deli",)),
            _section("Bakery", "🍞", BAKERY),
            _section("Frozen", "🧊", FROZEN),
            _section("Produce", "🥬", PRODUCE),
        ],
        [
            "Plan cart space for bulk dry goods first",
            "Heavy canned goods on bottom of cart",
            "Meat department has best selection mid-morning",
            "Frozen section near checkout - perfect timing",
            "Produce last - bulk quantities need gentle handling",
        ],
    ),
    _layout(
        "kroger", "Kroger",
        "Traditional grocery store with food safety perimeter shopping",
        [
            _section("Canned Goods", "🥫", CANNED_GOODS),
            _section("Pasta & Grains", "🍝", DRY_GOODS),
            _section("Condiments", "🧂", SEASONINGS, INTERNATIONAL),
            _section("Breakfast & Cereal", "🥣", BREAKFAST),
            _section("Beverages & Snacks", "🥤", BEVERAGES, SNACKS, ("Beer & Wine",)),
            _section("Other", "🛒", HOUSEHOLD, HEALTH_BEAUTY, ("Pet Food", OTHER)),
            _section("Dairy", "🥛", DAIRY),
            _section("Deli", "🥪", ("Deli",)),
            _section("Meat & Seafood", "🥩", MEAT_SEAFOOD),
            _section("Bakery", "🍞", BAKERY),
            _section("Frozen", "🧊", FROZEN),
            _section("Produce", "🥬", PRODUCE),
        ],
        [
            "Center aisles first for shelf-stable items",
            "Perimeter for fresh items - dairy, meat, then produce",
            "Frozen section typically at end of store",
            "Produce section at entrance - save for last despite location",
            "Use Kroger app for aisle-specific shopping lists",
        ],
    ),
    _layout(
        "hyvee", "Hy-Vee",
        "Midwest grocery chain with helpful smiles and food safety focus",
        [
            _section("Pantry", "🥫", CANNED_GOODS, DRY_GOODS, SEASONINGS, INTERNATIONAL, BREAKFAST),
            _section("Beverages & Snacks", "🥤", BEVERAGES, SNACKS, ("Beer & Wine",)),
            _section("Other", "🛒", HOUSEHOLD, HEALTH_BEAUTY, ("Pet Food", OTHER)),
            _section("Dairy", "🥛", DAIRY),
            _section("Meat", "🥩", MEAT_SEAFOOD, ("Deli",)),
            _section("Bakery", "🍞", BAKERY),
            _section("Frozen", "🧊", FROZEN),
            _section("Produce", "🥬", PRODUCE),
        ],
        [
            "Start with center aisle pantry items",
            "Hy-Vee brand offers great value on staples",
            "Fresh departments staffed with knowledgeable team",
            "Time frozen and produce sections together",
            "Check weekly ads for seasonal produce deals",
        ],
    ),
    _layout(
        "traderjoes", "Trader Joe's",
        "Compact store with unique products - optimized cold chain",
        [
            _section("Center Store", "🥫", ("Pasta",), CANNED_GOODS, SEASONINGS, INTERNATIONAL,
                     ("Rice & Grains", "Baking Ingredients", "Cooking Oil"), BREAKFAST),
            _section("Snacks & Beverages", "🍪", SNACKS, BEVERAGES, ("Beer & Wine",)),
            _section("Other", "🛒", HOUSEHOLD, HEALTH_BEAUTY, ("Pet Food", OTHER)),
            _section("Dairy", "🥛", DAIRY),
            _section("Meat", "🥩", MEAT_SEAFOOD, ("Deli",)),
            _section("Bread", "🍞", BAKERY),
            _section("Frozen", "🧊", FROZEN),
            _section("Produce", "🥬", PRODUCE),
        ],
        [
            "Small store = efficient shopping when done right",
            "Unique TJ items in center aisles first",
            "Excellent frozen section - don't miss signature items",
            "Produce quality is seasonal - end with careful selection",
            "Try samples before committing to new products",
        ],
    ),
    _layout(
        "samsclub", "Sam's Club",
        "Warehouse club with food safety bulk shopping strategy",
        [
            _section("Bulk Pantry", "🥫", CANNED_GOODS, DRY_GOODS, SEASONINGS, INTERNATIONAL, BREAKFAST),
            _section("Bulk Beverages & Snacks", "🥤", BEVERAGES, SNACKS, ("Beer & Wine",)),
            _section("Other Bulk Items", "🛒", HOUSEHOLD, HEALTH_BEAUTY, ("Pet Food", OTHER)),
            _section("Dairy", "🥛", DAIRY),
            _section("Meat & Poultry", "🥩", MEAT_SEAFOOD, ("Deli",)),
            _section("Bakery", "🍞", BAKERY),
            _section("Frozen", "🧊", FROZEN),
            _section("Produce", "🥬", PRODUCE),
        ],
        [
            "Bring membership card and plan for bulk quantities",
            "Heavy non-perishables first - use cart space wisely",
            "Consider splitting bulk fresh items with family/friends",
            "Frozen department excellent for large families",
            "Produce section - buy only what you'll use quickly",
        ],
    ),
    _layout(
        "wholefoods", "Whole Foods Market",
        "Organic and natural foods with premium cold chain management",
        [
            _section("Bulk & Grains", "🌾", ("Rice & Grains", "Pasta", "Nuts & Seeds", "Baking Ingredients")),
            _section("Pantry", "🥫", CANNED_GOODS, SEASONINGS, ("Cooking Oil",), INTERNATIONAL, BREAKFAST),
            _section("Beverages & Snacks", "🥤", BEVERAGES, ("Chips & Crackers", "Candy", "Cookies & Sweets", "Beer & Wine")),
            _section("Other", "🛒", HOUSEHOLD, HEALTH_BEAUTY, ("Pet Food", OTHER)),
            _section("Dairy", "🥛", ("Dairy", "Eggs", "Yogurt", "Refrigerated Items")),
            _section("Cheese", "🧀", ("Cheese",)),
            _section("Seafood", "🐟", ("Fresh Seafood",)),
            _section("Meat", "🥩", ("Fresh Meat", "Fresh Poultry", "Deli")),
            _section("Bakery", "🍞", BAKERY),
            _section("Frozen", "🧊", FROZEN),
            _section("Produce", "🥬", PRODUCE),
        ],
        [
            "Start with bulk bins and pantry items",
            "Premium cheese counter after dairy section",
            "Seafood department has fresh daily selections",
            "Organic frozen options are extensive",
            "Produce section showcases seasonal, local items - save for last",
        ],
    ),
    _layout(
        GENERIC_LAYOUT_KEY, "Standard Grocery Store",
        "Universal food safety layout for any store",
        [
            _section("Pantry", "🥫", CANNED_GOODS, DRY_GOODS, SEASONINGS, INTERNATIONAL, BREAKFAST),
            _section("Beverages & Snacks", "🥤", BEVERAGES, SNACKS, ("Beer & Wine",)),
            _section("Other", "🛒", HOUSEHOLD, HEALTH_BEAUTY, ("Pet Food", OTHER)),
            _section("Dairy", "🥛", DAIRY),
            _section("Meat", "🥩", MEAT_SEAFOOD, ("Deli",)),
            _section("Bakery", "🍞", BAKERY),
            _section("Frozen", "🧊", FROZEN),
            _section("Produce", "🥬", PRODUCE),
        ],
        [
            "Non-perishables first - center aisles typically",
            "Refrigerated items next - dairy and meat",
            "Frozen foods near end of shopping trip",
            "Produce last - most delicate items on top of cart",
            "Keep cold chain intact - minimize time outside refrigeration",
        ],
        category_order=get_default_category_order(),
    ),
]

STORE_LAYOUTS: Mapping[str, StoreLayout] = MappingProxyType({layout.key: layout for layout in _LAYOUTS})

# Lowercase substrings of "store name + chain" -> layout key. First hit wins.
CHAIN_IDENTIFIERS = (
    (("walmart",), "walmart"),
    (("target",), "target"),
    (("costco",), "costco"),
    (("kroger",), "kroger"),
    (("hy-vee", "hyvee"), "hyvee"),
    (("trader joe",), "traderjoes"),
    (("sam's club", "sams club"), "samsclub"),
    (("whole foods",), "wholefoods"),
    # Regional chains with a Kroger-style perimeter layout
    (("safeway", "albertsons"), "kroger"),
    (("meijer", "publix"), "kroger"),
    (("smith", "king soopers"), "kroger"),
)


def _validate_layouts() -> None:
    for layout in STORE_LAYOUTS.values():
        where = f"store layout '{layout.key}'"
        validate_category_keys(layout.category_order, where)

        section_keys = [category for section in layout.sections for category in section.categories]
        validate_category_keys(section_keys, where)
        repeated = sorted({key for key in section_keys if section_keys.count(key) > 1})
        if repeated:
            raise UnknownCategoryError(f"{where} puts categories in more than one section: {', '.join(repeated)}")

    generic = STORE_LAYOUTS[GENERIC_LAYOUT_KEY]
    uncovered = [key for key in GROCERY_CATEGORIES if key not in {c for s in generic.sections for c in s.categories}]
    if uncovered:
        raise UnknownCategoryError(f"generic layout has no section for: {', '.join(uncovered)}")

    for _identifiers, key in CHAIN_IDENTIFIERS:
        if key not in STORE_LAYOUTS:
            raise UnknownCategoryError(f"chain identifier points at unknown layout '{key}'")


_validate_layouts()


def resolve_store_layout(store_name: Optional[str], store_chain: Optional[str] = "") -> StoreLayout:
    """
    Pick the layout for a store from its name and/or chain.

    Matching is a case-insensitive substring search of "name chain", so
    either field alone is enough. Unknown stores get the generic layout.

    Examples:
        resolve_store_layout("Walmart Supercenter #123") -> walmart
        resolve_store_layout("", "Safeway")              -> kroger
        resolve_store_layout("Corner Market")            -> generic
    """
    search_text = f"{store_name or ''} {store_chain or ''}".lower()

    for identifiers, key in CHAIN_IDENTIFIERS:
        if any(identifier in search_text for identifier in identifiers):
            return STORE_LAYOUTS[key]

    return STORE_LAYOUTS[GENERIC_LAYOUT_KEY]


def detect_store_chain(store_name: Optional[str], store_chain: Optional[str] = "") -> Optional[StoreLayout]:
    """Like resolve_store_layout() but None when only the generic layout fits."""
    layout = resolve_store_layout(store_name, store_chain)
    return None if layout.key == GENERIC_LAYOUT_KEY else layout


def get_store_layout_by_key(key: str) -> Optional[StoreLayout]:
    return STORE_LAYOUTS.get(key)


def get_available_store_layouts() -> list[LayoutOption]:
    return [
        LayoutOption(value=key, label=layout.name, description=layout.description)
        for key, layout in STORE_LAYOUTS.items()
    ]


def apply_store_layout(
    items_by_category: Mapping[str, list[Any]],
    store_name: Optional[str],
    store_chain: Optional[str] = "",
) -> AppliedLayout:
    """
    Reorder a category -> items map into the store's category order.

    Categories the layout doesn't mention are appended in their original
    order, so no item is ever dropped. Item lists are copied, not reordered.
    """
    layout = resolve_store_layout(store_name, store_chain)
    logger.info("Applying %s layout to %d categories", layout.name, len(items_by_category))

    reordered: dict[str, list[Any]] = {}
    for category in layout.category_order:
        items = items_by_category.get(category)
        if items:
            reordered[category] = list(items)

    for category, items in items_by_category.items():
        if category not in reordered and items:
            reordered[category] = list(items)

    return AppliedLayout(items=reordered, layout=layout, sections=layout.sections, tips=layout.tips)


def estimate_section_time(section_name: str, item_count: int) -> int:
    """Minutes to shop a section: a base plus a per-item allowance, rounded up."""
    base, per_item = DEFAULT_SECTION_TIMING
    for keywords, section_base, section_per_item in SECTION_TIMING:
        if any(keyword in section_name for keyword in keywords):
            base, per_item = section_base, section_per_item
            break
    return max(base, base + math.ceil(item_count * per_item))


def generate_shopping_route(
    items_by_category: Mapping[str, list[Any]],
    store_name: Optional[str],
    store_chain: Optional[str] = "",
) -> ShoppingRoute:
    """
    Walk the store's sections in order and collect the items for each.

    Sections without items are skipped. Categories that no section of the
    resolved layout covers are not part of the route; use
    apply_store_layout() when every item must be listed.
    """
    layout = resolve_store_layout(store_name, store_chain)
    route: list[RouteSection] = []

    for section in layout.sections:
        present = [category for category in section.categories if items_by_category.get(category)]
        if not present:
            continue

        items = [item for category in present for item in items_by_category[category]]
        route.append(RouteSection(
            section=section.name,
            emoji=section.emoji,
            categories=present,
            item_count=len(items),
            items=items,
            estimated_time=estimate_section_time(section.name, len(items)),
            food_safety_notes=get_food_safety_notes(section.name),
        ))

    total_time = sum(section.estimated_time for section in route)
    logger.info("Generated %s route: %d sections, %d minutes", layout.name, len(route), total_time)

    return ShoppingRoute(
        route=route,
        total_time=total_time,
        total_sections=len(route),
        store_name=layout.name,
        tips=layout.tips,
        food_safety_reminder=FOOD_SAFETY_REMINDER,
    )


def _item_line(item: Any) -> str:
    amount = item_field(item, "amount")
    text = f"{amount if amount not in (None, '') else ''} {item_label(item)}".strip()
    return f"   • {text}\n"


def export_shopping_route(route: ShoppingRoute, store_name: str) -> str:
    """Plain-text version of a route for sharing (SMS, notes, email)."""
    settings = get_settings()
    full_listing_limit = settings.route_full_listing_limit
    sample_size = settings.route_sample_items

    text = f"🛒 Food Safety Shopping Route - {store_name}\n"
    text += f"⏱️ Estimated Time: {route.total_time} minutes\n"
    text += f"📍 {route.total_sections} sections to visit\n"
    text += "🧊 Order: Non-perishables → Cold items → Frozen → Produce\n\n"

    for index, section in enumerate(route.route, start=1):
        text += f"{index}. {section.emoji} {section.section} ({section.estimated_time} min)\n"
        text += f"   📦 {section.item_count} items\n"
        if section.food_safety_notes:
            text += f"   🛡️ {section.food_safety_notes}\n"

        if len(section.items) <= full_listing_limit:
            for item in section.items:
                text += _item_line(item)
        else:
            for item in section.items[:sample_size]:
                text += _item_line(item)
            text += f"   • ... and {len(section.items) - sample_size} more\n"
        text += "\n"

    if route.tips:
        text += "💡 Store Tips:\n"
        for tip in route.tips:
            text += f"• {tip}\n"
        text += "\n"

    text += "🛡️ Food Safety Reminders:\n"
    text += "• Keep cold items together in cart\n"
    text += "• Frozen foods last - minimize thaw time\n"
    text += "• Produce on top to prevent crushing\n"
    text += "• Get home within 2 hours (1 hour if >90°F)\n"
    text += "• Refrigerate/freeze immediately upon arrival\n"

    return text
