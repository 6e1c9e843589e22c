"""
Grocery Category Registry

Static knowledge base of grocery categories, organised the way a typical
supermarket groups its departments. Each category carries display metadata
(icon, color), a coarse store section and a handful of exemplar items that
the confidence scorer uses as a fuzzy-match corpus.

The registry is built once at import time and is read-only afterwards.
Category keys referenced anywhere else (classifier rules, store layouts,
food safety tables) are checked against it with validate_category_keys().
"""
import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from aisleplan.schemas.category import GroceryCategory

logger = logging.getLogger(__name__)

OTHER = "Other"


class UnknownCategoryError(ValueError):
    """Raised when a static table references a category key the registry doesn't define."""


# key -> (icon, color, section, exemplar items)
_CATEGORY_TABLE = {
    # FRESH DEPARTMENTS (Perimeter)
    "Fresh Produce": ("🥬", "#10b981", "Fresh", ["Fruits", "Vegetables", "Herbs", "Organic Produce", "Salad Kits", "Pre-cut Vegetables"]),
    "Fresh Fruits": ("🍎", "#ef4444", "Fresh", ["Apples", "Bananas", "Berries", "Citrus", "Melons", "Tropical Fruits"]),
    "Fresh Vegetables": ("🥕", "#f59e0b", "Fresh", ["Leafy Greens", "Root Vegetables", "Peppers", "Onions", "Tomatoes", "Squash"]),

    # MEAT & SEAFOOD
    "Fresh Meat": ("🥩", "#dc2626", "Fresh", ["Beef", "Pork", "Lamb", "Ground Meat", "Specialty Meats"]),
    "Fresh Poultry": ("🐔", "#f59e0b", "Fresh", ["Chicken", "Turkey", "Duck", "Cornish Hens"]),
    "Fresh Seafood": ("🐟", "#0ea5e9", "Fresh", ["Fish", "Shellfish", "Shrimp", "Crab", "Lobster", "Salmon"]),

    # DAIRY & REFRIGERATED
    "Dairy": ("🥛", "#3b82f6", "Refrigerated", ["Milk", "Cream", "Half & Half", "Buttermilk", "Non-dairy Milk"]),
    "Cheese": ("🧀", "#f59e0b", "Refrigerated", ["Cheddar", "Mozzarella", "Swiss", "Cream Cheese", "Specialty Cheese"]),
    "Eggs": ("🥚", "#fbbf24", "Refrigerated", ["Large Eggs", "Extra Large", "Organic", "Free Range", "Egg Whites"]),
    "Yogurt": ("🥛", "#8b5cf6", "Refrigerated", ["Greek Yogurt", "Regular Yogurt", "Plant-based Yogurt", "Yogurt Drinks"]),
    "Refrigerated Items": ("❄️", "#06b6d4", "Refrigerated", ["Dips", "Hummus", "Pre-made Salads", "Fresh Pasta", "Refrigerated Desserts"]),

    # DELI & BAKERY
    "Deli": ("🥪", "#8b5cf6", "Fresh", ["Sliced Meats", "Sliced Cheese", "Prepared Salads", "Hot Foods", "Sandwiches"]),
    "Bakery": ("🍞", "#d97706", "Fresh", ["Fresh Bread", "Pastries", "Cakes", "Cookies", "Donuts", "Bagels"]),
    "Breads": ("🥖", "#92400e", "Bakery", ["White Bread", "Wheat Bread", "Specialty Breads", "Tortillas", "English Muffins"]),

    # FROZEN FOODS
    "Frozen Vegetables": ("🥦", "#059669", "Frozen", ["Mixed Vegetables", "Broccoli", "Corn", "Peas", "Spinach", "Stir Fry Mixes"]),
    "Frozen Fruits": ("🍓", "#ec4899", "Frozen", ["Berries", "Tropical Fruits", "Smoothie Mixes", "Fruit Medleys"]),
    "Frozen Meals": ("🍽️", "#6366f1", "Frozen", ["TV Dinners", "Lean Cuisine", "Family Size Meals", "Organic Frozen Meals"]),
    "Frozen Meat": ("🧊", "#ef4444", "Frozen", ["Frozen Beef", "Frozen Chicken", "Frozen Fish", "Frozen Seafood"]),
    "Ice Cream": ("🍦", "#f472b6", "Frozen", ["Ice Cream", "Frozen Yogurt", "Sherbet", "Ice Cream Bars", "Novelties"]),
    "Frozen Pizza": ("🍕", "#f59e0b", "Frozen", ["Thin Crust", "Thick Crust", "Personal Size", "Gluten Free", "Organic"]),
    "Frozen Breakfast": ("🧇", "#fbbf24", "Frozen", ["Waffles", "Pancakes", "French Toast", "Breakfast Sandwiches", "Hash Browns"]),

    # DRY GOODS & PANTRY
    "Canned Vegetables": ("🥫", "#059669", "Pantry", ["Green Beans", "Corn", "Peas", "Carrots", "Mixed Vegetables", "Artichokes"]),
    "Canned Fruits": ("🍑", "#ef4444", "Pantry", ["Peaches", "Pears", "Pineapple", "Fruit Cocktail", "Applesauce", "Cranberry Sauce"]),
    "Canned Tomatoes": ("🍅", "#dc2626", "Pantry", ["Whole Tomatoes", "Diced Tomatoes", "Crushed Tomatoes", "Tomato Paste", "Tomato Sauce"]),
    "Soups": ("🍲", "#f59e0b", "Pantry", ["Canned Soup", "Dry Soup Mixes", "Broth", "Stock", "Bouillon", "Instant Soup"]),
    "Pasta": ("🍝", "#fbbf24", "Pantry", ["Spaghetti", "Penne", "Macaroni", "Lasagna", "Specialty Pasta", "Gluten Free Pasta"]),
    "Rice & Grains": ("🌾", "#92400e", "Pantry", ["White Rice", "Brown Rice", "Quinoa", "Barley", "Oats", "Couscous"]),
    "Beans & Legumes": ("🫘", "#7c2d12", "Pantry", ["Black Beans", "Kidney Beans", "Chickpeas", "Lentils", "Pinto Beans", "Navy Beans"]),

    # BAKING & COOKING
    "Baking Ingredients": ("🧁", "#ec4899", "Pantry", ["Flour", "Sugar", "Baking Powder", "Baking Soda", "Vanilla", "Food Coloring"]),
    "Cooking Oil": ("🫒", "#65a30d", "Pantry", ["Vegetable Oil", "Olive Oil", "Canola Oil", "Coconut Oil", "Cooking Spray"]),
    "Spices & Seasonings": ("🌶️", "#dc2626", "Pantry", ["Salt", "Pepper", "Garlic Powder", "Onion Powder", "Paprika", "Seasoning Blends"]),
    "Sauces & Condiments": ("🥫", "#7c2d12", "Pantry", ["Ketchup", "Mustard", "Mayo", "BBQ Sauce", "Hot Sauce", "Salad Dressing"]),
    "Vinegar": ("🍶", "#6b7280", "Pantry", ["White Vinegar", "Apple Cider Vinegar", "Balsamic Vinegar", "Rice Vinegar"]),

    # BREAKFAST & CEREAL
    "Cereal": ("🥣", "#f59e0b", "Pantry", ["Cold Cereal", "Granola", "Oatmeal", "Instant Oatmeal", "Breakfast Bars"]),
    "Breakfast Items": ("🥞", "#fbbf24", "Pantry", ["Pancake Mix", "Syrup", "Honey", "Jam", "Peanut Butter", "Coffee"]),

    # INTERNATIONAL
    "Mexican Items": ("🌮", "#16a34a", "International", ["Tortillas", "Salsa", "Masa Harina", "Corn Husks", "Enchilada Sauce", "Refried Beans"]),
    "Asian Items": ("🥢", "#b91c1c", "International", ["Soy Sauce", "Miso", "Udon", "Rice Noodles", "Tofu", "Kimchi", "Coconut Milk"]),
    "Indian Items": ("🍛", "#ea580c", "International", ["Garam Masala", "Ghee", "Paneer", "Curry Powder", "Chutney", "Papadums"]),

    # BEVERAGES
    "Water": ("💧", "#0ea5e9", "Beverages", ["Bottled Water", "Sparkling Water", "Flavored Water", "Sports Drinks"]),
    "Soft Drinks": ("🥤", "#ef4444", "Beverages", ["Soda", "Diet Soda", "Energy Drinks", "Juice Boxes", "Mixers"]),
    "Juices": ("🧃", "#f59e0b", "Beverages", ["Orange Juice", "Apple Juice", "Cranberry Juice", "Vegetable Juice", "Smoothies"]),
    "Coffee & Tea": ("☕", "#92400e", "Beverages", ["Ground Coffee", "Whole Bean Coffee", "Instant Coffee", "Tea Bags", "Loose Tea"]),
    "Beer & Wine": ("🍷", "#7c2d12", "Alcohol", ["Beer", "Wine", "Champagne", "Cooking Wine"]),

    # SNACKS & CANDY
    "Chips & Crackers": ("🍿", "#f59e0b", "Snacks", ["Potato Chips", "Tortilla Chips", "Crackers", "Pretzels", "Popcorn"]),
    "Nuts & Seeds": ("🥜", "#92400e", "Snacks", ["Peanuts", "Almonds", "Cashews", "Mixed Nuts", "Sunflower Seeds", "Trail Mix"]),
    "Candy": ("🍬", "#ec4899", "Snacks", ["Chocolate", "Gummy Candy", "Hard Candy", "Mints", "Gum"]),
    "Cookies & Sweets": ("🍪", "#f472b6", "Snacks", ["Cookies", "Crackers", "Granola Bars", "Fruit Snacks", "Cake Mixes"]),

    # HEALTH & BEAUTY
    "Personal Care": ("🧴", "#8b5cf6", "Health & Beauty", ["Shampoo", "Conditioner", "Body Wash", "Soap", "Deodorant", "Toothpaste"]),
    "Health Items": ("💊", "#ef4444", "Health & Beauty", ["Vitamins", "Pain Relief", "First Aid", "Thermometers", "Supplements"]),
    "Baby Care": ("👶", "#f472b6", "Health & Beauty", ["Diapers", "Baby Food", "Formula", "Baby Wipes", "Baby Lotion"]),

    # HOUSEHOLD & CLEANING
    "Cleaning Supplies": ("🧽", "#06b6d4", "Household", ["All-Purpose Cleaner", "Dish Soap", "Laundry Detergent", "Paper Towels", "Toilet Paper"]),
    "Paper Products": ("🧻", "#6b7280", "Household", ["Toilet Paper", "Paper Towels", "Napkins", "Facial Tissues", "Aluminum Foil"]),
    "Laundry": ("🧺", "#3b82f6", "Household", ["Detergent", "Fabric Softener", "Bleach", "Stain Remover", "Dryer Sheets"]),

    # PET SUPPLIES
    "Pet Food": ("🐕", "#92400e", "Pet", ["Dog Food", "Cat Food", "Pet Treats", "Pet Litter", "Pet Supplies"]),

    # MISC & OTHER
    OTHER: ("🛒", "#6b7280", "Other", ["Miscellaneous Items", "Hardware", "Auto", "Electronics", "Seasonal"]),
}

GROCERY_CATEGORIES: Mapping[str, GroceryCategory] = MappingProxyType({
    key: GroceryCategory(key=key, name=key, icon=icon, color=color, section=section, items=tuple(items))
    for key, (icon, color, section, items) in _CATEGORY_TABLE.items()
})

# Food-safety shopping order: shelf-stable -> refrigerated -> frozen -> fresh produce.
FOOD_SAFETY_TIERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Non-perishable", (
        "Canned Vegetables", "Canned Fruits", "Canned Tomatoes", "Beans & Legumes",
        "Pasta", "Rice & Grains", "Soups",
        "Baking Ingredients", "Cooking Oil", "Spices & Seasonings", "Sauces & Condiments", "Vinegar",
        "Mexican Items", "Asian Items", "Indian Items",
        "Cereal", "Breakfast Items", "Chips & Crackers", "Nuts & Seeds", "Candy", "Cookies & Sweets",
        "Water", "Soft Drinks", "Juices", "Coffee & Tea", "Beer & Wine",
        "Cleaning Supplies", "Paper Products", "Laundry", "Personal Care", "Health Items", "Baby Care",
        "Pet Food", OTHER,
    )),
    ("Refrigerated", (
        "Dairy", "Cheese", "Eggs", "Yogurt", "Refrigerated Items",
        "Fresh Meat", "Fresh Poultry", "Fresh Seafood",
        "Deli", "Breads", "Bakery",
    )),
    ("Frozen", (
        "Frozen Vegetables", "Frozen Fruits", "Frozen Meals", "Frozen Meat",
        "Frozen Pizza", "Frozen Breakfast", "Ice Cream",
    )),
    ("Produce", (
        "Fresh Fruits", "Fresh Vegetables", "Fresh Produce",
    )),
)

# Loose labels seen in older shopping lists and other apps -> registry keys
CATEGORY_ALIASES = {
    "produce": "Fresh Produce",
    "fruit": "Fresh Fruits",
    "fruits": "Fresh Fruits",
    "vegetables": "Fresh Vegetables",
    "veggies": "Fresh Vegetables",
    "meat": "Fresh Meat",
    "poultry": "Fresh Poultry",
    "seafood": "Fresh Seafood",
    "fish": "Fresh Seafood",
    "milk": "Dairy",
    "frozen": "Frozen Meals",
    "frozen items": "Frozen Meals",
    "frozen fruit": "Frozen Fruits",
    "bread": "Breads",
    "canned": "Canned Vegetables",
    "pantry": OTHER,
    "dry goods": OTHER,
    "grains": "Rice & Grains",
    "spices": "Spices & Seasonings",
    "seasonings": "Spices & Seasonings",
    "condiments": "Sauces & Condiments",
    "snacks": "Chips & Crackers",
    "beverages": "Soft Drinks",
    "baking & cooking ingredients": "Baking Ingredients",
    "canned/jarred vegetables": "Canned Vegetables",
    "canned/jarred tomatoes": "Canned Tomatoes",
    "canned/jarred sauces": "Sauces & Condiments",
    "canned/jarred meals": "Soups",
    "fresh/frozen beef": "Fresh Meat",
    "fresh/frozen poultry": "Fresh Poultry",
    "fresh/frozen fish & seafood": "Fresh Seafood",
}


def validate_category_keys(keys: Iterable[str], where: str) -> None:
    """Raise UnknownCategoryError if any key is missing from the registry."""
    unknown = [key for key in keys if key not in GROCERY_CATEGORIES]
    if unknown:
        raise UnknownCategoryError(f"{where} references unknown categories: {', '.join(unknown)}")


def get_default_category_order() -> list[str]:
    """Canonical food-safety shelf-visit order covering every category."""
    return [key for _, keys in FOOD_SAFETY_TIERS for key in keys]


def get_categories_by_section() -> dict[str, list[GroceryCategory]]:
    sections: dict[str, list[GroceryCategory]] = {}
    for category in GROCERY_CATEGORIES.values():
        sections.setdefault(category.section, []).append(category)
    return sections


def get_all_category_names() -> list[str]:
    return list(GROCERY_CATEGORIES)


def get_category_info(category_name: Optional[str]) -> GroceryCategory:
    return GROCERY_CATEGORIES.get(category_name or "", GROCERY_CATEGORIES[OTHER])


def is_valid_category(category_name: Optional[str]) -> bool:
    return category_name in GROCERY_CATEGORIES


def normalize_category_name(category_name: Optional[str]) -> str:
    """
    Map a loosely-written category label onto a registry key.

    Exact keys pass through, case differences and known aliases are mapped,
    empty input becomes 'Other'. Unknown labels are returned stripped so the
    caller can still group by them.
    """
    if not category_name or not isinstance(category_name, str):
        return OTHER

    normalized = category_name.strip()
    if not normalized:
        return OTHER
    if normalized in GROCERY_CATEGORIES:
        return normalized

    lowered = normalized.lower()
    for key in GROCERY_CATEGORIES:
        if key.lower() == lowered:
            return key

    return CATEGORY_ALIASES.get(lowered, normalized)


def create_custom_category(
    name: str,
    icon: str = "📦",
    color: str = "#6b7280",
    section: str = "Other",
) -> GroceryCategory:
    return GroceryCategory(key=name, name=name, icon=icon, color=color, section=section, custom=True)


def merge_with_custom_categories(
    custom_categories: Optional[Mapping[str, GroceryCategory]] = None,
) -> dict[str, GroceryCategory]:
    """Registry plus user-defined categories; custom entries override built-ins."""
    return {**GROCERY_CATEGORIES, **(custom_categories or {})}


def _validate_registry() -> None:
    if OTHER not in GROCERY_CATEGORIES:
        raise UnknownCategoryError("registry must define the 'Other' fallback category")

    order = get_default_category_order()
    validate_category_keys(order, "FOOD_SAFETY_TIERS")
    duplicates = sorted({key for key in order if order.count(key) > 1})
    if duplicates:
        raise UnknownCategoryError(f"FOOD_SAFETY_TIERS lists categories twice: {', '.join(duplicates)}")
    missing = [key for key in GROCERY_CATEGORIES if key not in order]
    if missing:
        raise UnknownCategoryError(f"FOOD_SAFETY_TIERS is missing categories: {', '.join(missing)}")

    validate_category_keys(CATEGORY_ALIASES.values(), "CATEGORY_ALIASES")


_validate_registry()
logger.debug("Loaded %d grocery categories", len(GROCERY_CATEGORIES))
