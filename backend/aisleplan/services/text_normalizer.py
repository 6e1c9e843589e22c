"""
Item Name Normalizer

Cleans free-text ingredient / shopping list names down to the words that
identify the product, e.g.

    "2 cups chopped fresh cilantro, finely minced" -> "cilantro"
    "1 (14 oz) can diced tomatoes"                 -> "diced tomatoes"

Pipeline order (each step works on the previous step's output):
    1. lowercase + trim
    2. parenthetical asides
    3. quantities (vulgar fractions, a/b fractions, decimals, integers)
    4. unit tokens
    5. size adjectives
    6. preparation / state adjectives, one group at a time
    7. punctuation, whitespace, dangling connectors

Quantities and units go before the adjective passes so numerals never sit
between an adjective and its word boundary.
"""
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

# Adjectives directly in front of these nouns are part of the product name
# ("diced tomatoes", "baked beans", "hot sauce", "hot dogs") and are kept.
PROTECTED_HEADS = ["tomatoes", "tomato", "beans", "bean", "sauces", "sauce", "dogs", "dog"]

PARENTHETICAL_PATTERN = re.compile(r"\([^()]*\)")

VULGAR_FRACTIONS = "½¼¾⅓⅔⅛⅜⅝⅞"

QUANTITY_PATTERNS = [
    re.compile(rf"\d*[{VULGAR_FRACTIONS}]"),       # "½", "1½"
    re.compile(r"\d+\s*/\s*\d+"),                  # "1/2", "3 / 4"
    re.compile(r"\d*\.\d+"),                       # "1.5", ".25"
    re.compile(r"\d+"),                            # "2"
]

UNIT_WORDS = [
    "fluid ounces", "fluid ounce", "fl oz", "fl. oz",
    "cups", "cup",
    "tablespoons", "tablespoon", "tbsps", "tbsp", "tbs",
    "teaspoons", "teaspoon", "tsps", "tsp",
    "pounds", "pound", "lbs", "lb",
    "ounces", "ounce", "oz",
    "milliliters", "milliliter", "millilitres", "millilitre", "ml",
    "liters", "liter", "litres", "litre", "l",
    "kilograms", "kilogram", "kg",
    "grams", "gram", "g",
    "pints", "pint", "pt",
    "quarts", "quart", "qt",
    "gallons", "gallon", "gal",
    "cloves", "clove",
    "heads", "head",
    "bunches", "bunch",
    "stalks", "stalk",
    "pieces", "piece",
    "slices", "slice",
    "strips", "strip",
    "cans", "can",
    "jars", "jar",
    "bottles", "bottle",
    "bags", "bag",
    "boxes", "box",
    "packages", "package", "pkgs", "pkg",
    "containers", "container",
]

SIZE_WORDS = [
    "extra large", "extra small", "x large", "small", "medium", "large",
    "jumbo", "mini", "tiny", "huge", "giant", "big",
]

# Stripped in this order; the group name is only used for debugging.
DESCRIPTOR_GROUPS = [
    ("freshness", [
        "freshly", "fresh", "frozen", "thawed", "dried", "dry", "canned", "tinned",
        "jarred", "bottled", "packaged", "refrigerated", "preserved",
    ]),
    ("cook_state", [
        "uncooked", "precooked", "pre cooked", "cooked", "raw", "baked", "roasted",
        "grilled", "toasted", "fried", "boiled", "steamed", "smoked", "sauteed",
        "braised", "blanched", "poached", "leftover",
    ]),
    ("cut_state", [
        "chopped", "diced", "minced", "sliced", "shredded", "grated", "cubed",
        "crushed", "ground", "julienned", "halved", "quartered", "torn", "mashed",
        "pureed", "cut",
    ]),
    ("degree", [
        "finely", "coarsely", "roughly", "thinly", "thickly", "lightly", "loosely",
        "firmly", "tightly", "packed", "heaping", "level", "generous", "scant",
        "about", "approximately",
    ]),
    ("temperature_texture", [
        "room temperature", "lukewarm", "beaten", "melted", "softened", "whipped",
        "crumbled", "chilled", "cold", "hot", "warm", "boiling", "firm", "soft",
    ]),
    ("purity_diet", [
        "all natural", "natural", "organic", "low fat", "reduced fat", "non fat",
        "nonfat", "fat free", "low sodium", "reduced sodium", "no salt added",
        "sugar free", "gluten free", "unsalted", "salted", "unsweetened",
        "sweetened", "lite", "light",
    ]),
    ("trim_state", [
        "unpeeled", "peeled", "deseeded", "seeded", "pitted", "cored", "stemmed",
        "deveined", "boneless", "skinless", "bone in", "skin on", "shelled",
        "trimmed", "rinsed", "drained", "washed",
    ]),
    ("ripeness_color", [
        "overripe", "underripe", "unripe", "ripe", "green", "red", "yellow", "purple",
    ]),
    ("optionality", [
        "to taste", "as needed", "if desired", "for garnish", "for serving",
        "for topping", "plus more", "or more", "optional", "divided",
        "pinches of", "pinch of", "pinches", "pinch", "dashes of", "dash of",
        "dashes", "dash", "splash of", "splash", "handful of", "handful",
        "sprigs of", "sprig of", "sprigs", "sprig", "a few",
    ]),
    ("marketing", [
        "extra virgin", "virgin", "premium", "gourmet", "homemade", "home made",
        "artisanal", "artisan", "store bought", "good quality", "high quality",
        "quality", "authentic", "classic", "traditional", "imported", "favorite",
    ]),
]

DANGLING_CONNECTORS = r"(?:and|or|of|to|with|for|into)"


def _phrase_alternation(phrases: list[str]) -> str:
    # Longest first so "extra large" wins over "large"
    ordered = sorted(phrases, key=len, reverse=True)
    return "|".join(re.escape(p).replace(r"\ ", r"[\s-]+") for p in ordered)


_PROTECTED_LOOKAHEAD = rf"(?![\s-]+(?:{_phrase_alternation(PROTECTED_HEADS)})\b)"

UNIT_PATTERN = re.compile(rf"\b(?:{_phrase_alternation(UNIT_WORDS)})\b\.?(?:\s+of\b)?")
SIZE_PATTERN = re.compile(rf"\b(?:{_phrase_alternation(SIZE_WORDS)})\b{_PROTECTED_LOOKAHEAD}")
DESCRIPTOR_PATTERNS = [
    (group, re.compile(rf"\b(?:{_phrase_alternation(words)})\b{_PROTECTED_LOOKAHEAD}"))
    for group, words in DESCRIPTOR_GROUPS
]
PUNCTUATION_PATTERN = re.compile(r"[^\w\s]|_")
WHITESPACE_PATTERN = re.compile(r"\s+")
CONNECTOR_PATTERN = re.compile(
    rf"^(?:{DANGLING_CONNECTORS}\s+)+|(?:\s+{DANGLING_CONNECTORS})+$|^{DANGLING_CONNECTORS}$"
)

# Checked in order by extract_core_term(); the first hit is the core term.
CORE_INGREDIENT_PATTERNS = [
    re.compile(r"\b(?:cherry |grape |roma |plum )?tomato(?:es)?\b"),
    re.compile(r"\b(?:green |red |yellow |white |sweet )?onions?\b"),
    re.compile(r"\b(?:bell |jalape[nñ]o |serrano |poblano |chipotle )?peppers?\b"),
    re.compile(r"\b(?:cream cheese|cheddar|mozzarella|parmesan|swiss|feta|ricotta|provolone|monterey jack|cheese)\b"),
    re.compile(r"\b(?:chicken|beef|pork|turkey|lamb|sausage|ham|salmon|shrimp|fish)\b"),
    re.compile(r"\b(?:garlic|ginger|flour|sugar|salt|honey|vinegar|oil)\b"),
    re.compile(r"\b(?:milk|cream|butter|yogurt)\b"),
    re.compile(r"\b(?:bread|tortillas?|pasta|rice|noodles?)\b"),
    re.compile(r"\b(?:beans?|lentils?|chickpeas?)\b"),
    re.compile(r"\bcorn ?husks?\b"),
    re.compile(r"\bolives?\b"),
    re.compile(r"\bpotato(?:es)?\b"),
    re.compile(r"\blettuce\b"),
    re.compile(r"\bbacon\b"),
]


def _strip_parentheticals(text: str) -> str:
    # Inner-most first so nested asides go too
    while True:
        stripped = PARENTHETICAL_PATTERN.sub(" ", text)
        if stripped == text:
            return text
        text = stripped


def _clean_once(text: str) -> str:
    text = text.lower().strip()
    text = _strip_parentheticals(text)

    for pattern in QUANTITY_PATTERNS:
        text = pattern.sub(" ", text)

    text = UNIT_PATTERN.sub(" ", text)
    text = SIZE_PATTERN.sub(" ", text)

    for _group, pattern in DESCRIPTOR_PATTERNS:
        text = pattern.sub(" ", text)

    text = PUNCTUATION_PATTERN.sub(" ", text)
    text = WHITESPACE_PATTERN.sub(" ", text).strip()
    return CONNECTOR_PATTERN.sub("", text).strip()


def normalize_item_name(raw_name: Any) -> str:
    """
    Reduce a raw item name to its identifying words.

    Returns "" for empty or non-string input. The cleanup is repeated until
    the text stops changing, so normalizing an already-normalized name is a
    no-op.
    """
    if not isinstance(raw_name, str) or not raw_name.strip():
        return ""

    text = _clean_once(raw_name)
    while True:
        cleaned = _clean_once(text)
        if cleaned == text:
            return text
        text = cleaned


def extract_core_term(raw_name: Any) -> str:
    """
    Pick the single most telling term from a raw item name.

    Examples:
        "3 chopped cherry tomatoes"   -> "cherry tomatoes"
        "boneless skinless chicken breasts" -> "chicken"
        "garam masala"                -> "garam"
    """
    normalized = normalize_item_name(raw_name)
    words = [word for word in normalized.split() if len(word) > 2]

    if len(words) >= 2:
        for pattern in CORE_INGREDIENT_PATTERNS:
            match = pattern.search(normalized)
            if match:
                return match.group(0)
        for word in words:
            if len(word) > 3:
                return word

    return normalized
