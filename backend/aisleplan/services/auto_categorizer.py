"""
Auto-Categorizer Service

Assigns a free-text ingredient / shopping list item to exactly one grocery
category from the registry.

Features:
- Ordered rule battery, first match wins (no scoring or voting)
- Every rule is a positive pattern set plus an explicit exclusion set, so
  "pepper but not black pepper" is two testable halves
- Each name is tried as normalized text, then its core term, then the raw
  lowercased text; the first candidate that any rule accepts decides
- Never fails: anything unmatched is 'Other'
"""
import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from aisleplan.schemas.category import CategorySuggestion
from aisleplan.schemas.shopping import item_field, item_label
from aisleplan.services.grocery_categories import (
    GROCERY_CATEGORIES,
    OTHER,
    is_valid_category,
    normalize_category_name,
    validate_category_keys,
)
from aisleplan.services.text_normalizer import extract_core_term, normalize_item_name

logger = logging.getLogger(__name__)

# Confidence heuristics for score_category_confidence()
EXACT_MATCH_CONFIDENCE = 0.95
PARTIAL_MATCH_BASE = 0.6
PARTIAL_MATCH_STEP = 0.1
PARTIAL_MATCH_CAP = 0.9
BASELINE_CONFIDENCE = 0.5


@dataclass(frozen=True)
class CategoryRule:
    name: str
    category: str
    patterns: tuple[re.Pattern, ...]
    exclude: tuple[re.Pattern, ...] = ()

    def matches(self, text: str) -> bool:
        if not any(pattern.search(text) for pattern in self.patterns):
            return False
        return not any(pattern.search(text) for pattern in self.exclude)


def _rule(name: str, category: str, patterns: list[str], exclude: Optional[list[str]] = None) -> CategoryRule:
    return CategoryRule(
        name=name,
        category=category,
        patterns=tuple(re.compile(p) for p in patterns),
        exclude=tuple(re.compile(p) for p in exclude or []),
    )


# Order is precedence. Distinctive / exclusion-heavy rules sit above the broad
# prefix rules so a generic vegetable word can't shadow them.
RULES: tuple[CategoryRule, ...] = (
    # International cuisine markers
    _rule("mexican", "Mexican Items", [
        r"\b(?:tortillas?|tostadas?|taco(?:s| shells?| seasoning)?|salsa(?: verde)?|masa(?: harina)?"
        r"|corn ?husks?|enchiladas?(?: sauce)?|refried beans|queso fresco|cotija|chipotles?|adobo"
        r"|mole|pico de gallo|tomatillos?)\b",
    ]),
    _rule("asian", "Asian Items", [
        r"\b(?:soy sauce|tamari|miso|udon|soba|ramen|rice noodles|glass noodles|bok choy|pak choi"
        r"|tofu|tempeh|kimchi|fish sauce|oyster sauce|hoisin(?: sauce)?|sriracha|sesame oil"
        r"|rice vinegar|rice wine|mirin|sake|nori|seaweed|wasabi|gochujang|gochugaru|panko"
        r"|wonton(?: wrappers)?|egg roll wrappers|spring roll wrappers|dashi|edamame|curry paste"
        r"|coconut milk|lemongrass|bean sprouts|water chestnuts|bamboo shoots|shiitake"
        r"|teriyaki(?: sauce)?|five spice|star anise|sambal(?: oelek)?)\b",
    ]),
    _rule("indian", "Indian Items", [
        r"\b(?:garam masala|masala|ghee|paneer|tikka|tandoori|chutney|papadums?|poppadoms?"
        r"|curry powder|fenugreek|asafoetida|tamarind)\b",
    ]),

    # Tomato products, before the fresh tomato rule
    _rule("tomato_paste", "Canned Tomatoes",
          [r"\b(?:tomato )?paste\b"],
          [r"\b(?:almond|anchovy|garlic|ginger|bean|chili|chile|sesame|wasabi)\s+paste\b"]),
    _rule("tomato_sauce", "Canned Tomatoes",
          [r"\b(?:tomato sauce|marinara|pizza sauce|pasta sauce|spaghetti sauce|sauce)\b"],
          [r"\b(?:hot|bbq|barbecue|worcestershire|cranberry|apple|chocolate|caramel|buffalo|tartar"
           r"|alfredo|cheese|steak|chili|chile|fish|oyster|soy|hoisin|teriyaki|enchilada|pesto"
           r"|hollandaise|cocktail|horseradish|wing|taco|duck|plum|peanut|mint|sriracha)\s+sauce\b"]),
    _rule("canned_tomatoes", "Canned Tomatoes", [
        r"\b(?:crushed|diced|whole|stewed|fire roasted|canned|peeled|sun dried|pureed)\s+tomato(?:es)?\b",
        r"\btomato (?:puree|passata)\b",
        r"\bpassata\b",
    ]),

    _rule("fresh_fruit", "Fresh Fruits",
          [r"^(?:apples?|bananas?|oranges?|lemons?|limes?|grapefruits?|grapes?"
           r"|(?:straw|blue|rasp|black|cran|goose|elder)?berr(?:y|ies)|melons?|cantaloupes?|honeydews?"
           r"|watermelons?|peach(?:es)?|pears?|plums?|cherr(?:y|ies)|kiwis?|mangos?|mangoes|pineapples?"
           r"|avocados?|coconuts?|papayas?|apricots?|nectarines?|clementines?|tangerines?|mandarins?"
           r"|pomegranates?|figs?|dates|persimmons?|guavas?|passion ?fruits?)\b"],
          [r"\btomato(?:es)?\b",
           r"\bpeppers?\b",
           r"(?<!lemon )(?<!lime )\bjuice\b",
           r"\b(?:sauce|vinegar|cider|jam|jelly|preserves|marmalade|pie|oil|milk|water|flakes|extract"
           r"|syrup|butter|chips|cake|yogh?urt|bread|muffins?|filling)\b"]),

    _rule("leafy_greens", "Fresh Produce",
          [r"\b(?:lettuce|romaine|iceberg|spinach|arugula|rocket|kale|chard|collard greens|collards"
           r"|mixed greens|spring mix|salad greens|watercress|endive|radicchio|escarole)\b"],
          [r"\b(?:dip|chips)\b"]),

    _rule("fresh_tomato", "Fresh Produce",
          [r"\btomato(?:es)?\b"],
          [r"\b(?:paste|sauce|soup|ketchup|juice|puree|passata|crushed|diced|stewed|canned"
           r"|sun dried|fire roasted)\b"]),

    _rule("fresh_vegetable", "Fresh Vegetables",
          [r"^(?:baby )?(?:onions?|scallions?|shallots?|leeks?|garlic|carrots?|celery|celeriac"
           r"|(?:bell |jalape[nñ]o |serrano |poblano |habanero |anaheim |chili |chile )?peppers?"
           r"|jalape[nñ]os?|serranos?|poblanos?|habaneros?|chil(?:i|e|ie)s|chil(?:i|e)"
           r"|broccoli(?:ni)?|cauliflower|cucumbers?|mushrooms?|cabbages?|zucchinis?|squash(?:es)?"
           r"|eggplants?|aubergines?|asparagus|green beans|string beans|sugar snap peas|snap peas"
           r"|snow peas|peas|corn|radish(?:es)?|beets?|beetroot|turnips?|parsnips?|rutabagas?"
           r"|artichokes?|okra|fennel|brussels sprouts|sweet potato(?:es)?|yams?|ginger|cilantro"
           r"|coriander leaves|parsley|basil|mint|dill|rosemary|thyme|sage|oregano|chives|tarragon"
           r"|herbs?)\b"],
          # Spice peppers are deliberately not handled here
          [r"^pepper$",
           r"\b(?:black|white|cayenne|lemon)\s+pepper\b",
           r"\bpepper\s+(?:flakes|jack)\b",
           r"\bpeppercorns?\b",
           r"\b(?:powder|salt|seasoning|flakes|starch|syrup|meal|chips|sauce|oil|paste|soup|dip"
           r"|extract|juice|bread|cake|ale)\b"]),

    _rule("dairy", "Dairy",
          [r"\b(?:milk|half (?:and )?half|cream|buttermilk|creamer|kefir)\b"],
          [r"\bcoconut\b",
           r"\b(?:ice|shaving|hand|face|body|sour cream and onion)\s+cream\b",
           r"\bcream (?:cheese|of|soda)\b",
           r"\bchocolate\b"]),

    _rule("butter", "Dairy",
          [r"\bbutter\b"],
          [r"\b(?:peanut|almond|cashew|sunflower|nut|seed|apple|pumpkin|cocoa|shea|body|cookie)\s+butter\b",
           r"\bbutter (?:beans?|lettuce|crackers?|cookies?)\b"]),

    _rule("cheese", "Cheese",
          [r"\b(?:cheeses?|cheddar|mozzarella|parmesan|parmigiano|pecorino|romano|swiss|provolone"
           r"|feta|ricotta|gouda|brie|camembert|monterey jack|pepper jack|colby|gruyere|mascarpone"
           r"|havarti|muenster|burrata|halloumi|manchego|asiago|fontina|gorgonzola|stilton|velveeta)\b"],
          [r"\bmac(?:aroni)? (?:and )?cheese\b",
           r"\bcheese (?:crackers?|puffs|curls)\b"]),

    _rule("bacon", "Fresh Meat",
          [r"\bbacon\b"],
          [r"\b(?:vegan|veggie|vegetarian|turkey|tempeh|plant based|bits)\b"]),

    _rule("beef", "Fresh Meat",
          [r"\b(?:beef|steaks?|sirloin|ribeye|rib eye|brisket|chuck|flank|tenderloin|filet mignon"
           r"|short ribs|prime rib|hamburger|roast beef|oxtail|veal)\b"],
          [r"\b(?:broth|stock|bouillon|jerky|flavou?r(?:ed)?|consomme|chicken|turkey|pork|salmon"
           r"|tuna|fish|tofu|sauce|seasoning|rub|marinade|buns?|rolls?|bread)\b"]),

    _rule("eggs", "Eggs",
          [r"\beggs?\b"],
          [r"\begg (?:rolls?|noodles?|nog|replacer|substitute)\b",
           r"\beaster eggs?\b"]),

    _rule("bread", "Breads",
          [r"\b(?:breads?|loaf|loaves|bagels?|buns?|rolls?|baguettes?|ciabatta|sourdough|brioche"
           r"|focaccia|pitas?|naan|flatbreads?|english muffins?|hoagies?|croissants?|breadcrumbs"
           r"|bread crumbs|crumpets?)\b"],
          [r"\b(?:egg|spring|cinnamon|sushi)\s+rolls?\b",
           r"\bbread (?:flour|machine)\b",
           r"\b(?:toilet|paper|foil|wrap|towels?)\b"]),

    _rule("cooking_oil", "Cooking Oil",
          [r"\boils?\b", r"\bcooking spray\b"],
          [r"\bin (?:olive )?oil\b",
           r"\boil packed\b",
           r"\b(?:essential|baby|massage|motor|fish|cod liver)\s+oils?\b"]),

    _rule("potato", "Fresh Vegetables",
          [r"\bpotato(?:es)?\b"],
          [r"\b(?:chips|crisps|flakes|starch|salad|bread|buns?|rolls?|soup|skins|tots)\b"]),

    _rule("olives", "Sauces & Condiments",
          [r"\bolives?\b"],
          [r"\bolive oil\b"]),

    # Broader departments
    _rule("deli", "Deli", [
        r"\b(?:deli|salami|pepperoni|prosciutto|pastrami|bologna|mortadella|capicola|lunch ?meat"
        r"|cold cuts|hot dogs?|rotisserie chicken)\b",
    ]),
    _rule("poultry", "Fresh Poultry",
          [r"\b(?:chicken|turkey|duck|poultry|cornish hens?|game hens?|quail|drumsticks?|wings?)\b"],
          [r"\b(?:broth|stock|bouillon|soup|seasoning|flavou?r(?:ed)?|nuggets)\b"]),
    _rule("seafood", "Fresh Seafood",
          [r"\b(?:fish|salmon|tuna|cod|tilapia|halibut|trout|mahi mahi|swordfish|catfish|haddock"
           r"|snapper|sea bass|shrimp|prawns?|crab|crabmeat|lobster|scallops?|oysters?|clams?"
           r"|mussels?|squid|calamari|octopus|anchov(?:y|ies)|sardines?|seafood|crawfish)\b"],
          [r"\bfish (?:sauce|oil|food|sticks)\b", r"\bgoldfish\b"]),
    _rule("other_meat", "Fresh Meat",
          [r"\b(?:pork|lamb|ham|sausages?|chorizo|pancetta|bratwurst|kielbasa|venison|bison"
           r"|ground meat|meatballs|ribs|chops?|mutton|goat)\b"],
          [r"\b(?:broth|stock|bouillon|seasoning|flavou?r(?:ed)?)\b"]),
    _rule("yogurt", "Yogurt", [r"\byogh?urts?\b"]),
    _rule("refrigerated", "Refrigerated Items", [
        r"\b(?:hummus|guacamole|tzatziki|pesto|dips?|fresh pasta|tortellini|ravioli|pie crust"
        r"|pizza dough|biscuit dough|cookie dough)\b",
    ]),
    _rule("ice_cream", "Ice Cream", [
        r"\b(?:ice cream|gelato|sherbet|sorbet|popsicles?|ice pops?|frozen yogh?urt)\b",
    ]),
    _rule("frozen_pizza", "Frozen Pizza",
          [r"\bpizzas?\b"],
          [r"\bpizza (?:sauce|dough|crust|stone|cheese|seasoning)\b"]),
    _rule("frozen_breakfast", "Frozen Breakfast", [
        r"\b(?:waffles?|hash browns?|tater tots|french toast sticks|breakfast burritos?)\b",
    ]),
    _rule("frozen_meals", "Frozen Meals", [
        r"\b(?:tv dinners?|frozen meals?|frozen dinners?|frozen entrees?|pot pies?|fish sticks"
        r"|chicken nuggets|nuggets)\b",
    ]),
    # Only the raw text still says "frozen"; normalization strips it, so a
    # named produce item ("frozen peas") is claimed by the fresh rules first
    _rule("frozen_vegetables", "Frozen Vegetables", [
        r"^frozen\s+(?:mixed vegetables|vegetables|veggies|stir fry)",
    ]),
    _rule("frozen_fruits", "Frozen Fruits", [
        r"^frozen\s+(?:mixed fruit|fruits?)",
    ]),
    _rule("baking", "Baking Ingredients", [
        r"\b(?:flour|sugar|baking powder|baking soda|bicarbonate|vanilla|yeast|cocoa|chocolate chips"
        r"|cornstarch|corn starch|cornmeal|corn syrup|powdered sugar|confectioners sugar|brown sugar"
        r"|molasses|extract|sprinkles|food coloring|gelatin|cream of tartar|shortening|baking mix)\b",
    ]),
    _rule("spices", "Spices & Seasonings", [
        r"\b(?:salt|paprika|cumin|cinnamon|nutmeg|turmeric|chil(?:i|e) powder|garlic powder"
        r"|onion powder|cayenne|allspice|cardamom|coriander|bay leaf|bay leaves|cloves|seasonings?"
        r"|spices?|herbes de provence|mustard seeds?|celery seeds?|fennel seeds?|caraway|saffron"
        r"|sumac|za ?atar|chil(?:i|e) flakes)\b",
    ]),
    _rule("pasta", "Pasta", [
        r"\b(?:pasta|spaghetti|penne|macaroni|linguine|fettuccine|fettuccini|noodles?|lasagna"
        r"|lasagne|rigatoni|orzo|fusilli|farfalle|ziti|rotini|angel hair|vermicelli|gnocchi"
        r"|elbows?)\b",
        r"\bmac (?:and )?cheese\b",
    ]),
    _rule("cereal", "Cereal", [
        r"\b(?:cereal|granola|oatmeal|muesli|cheerios|corn flakes|bran flakes)\b",
    ]),
    _rule("rice_grains", "Rice & Grains",
          [r"\b(?:rice|quinoa|barley|couscous|bulgur|farro|oats|millet|polenta|grits|arborio)\b"],
          [r"\brice (?:cakes?|krispies|paper)\b"]),
    _rule("beans", "Beans & Legumes",
          [r"\b(?:beans?|chickpeas?|garbanzos?|lentils?|split peas|black eyed peas|cannellini|pinto)\b"],
          [r"\b(?:coffee|vanilla|jelly)\s+beans?\b"]),
    _rule("soups", "Soups", [
        r"\b(?:soups?|broth|stock|bouillon|consomme|chowder)\b",
    ]),
    _rule("canned_fruits", "Canned Fruits", [
        r"\b(?:applesauce|apple sauce|cranberry sauce|fruit cocktail|pie filling)\b",
    ]),
    _rule("canned_vegetables", "Canned Vegetables", [
        r"\b(?:artichoke hearts|hearts of palm|pimentos?|roasted red peppers|sauerkraut|creamed corn)\b",
    ]),
    _rule("condiments", "Sauces & Condiments", [
        r"\b(?:ketchup|catsup|mustard|mayo|mayonnaise|relish|salad dressing|dressing|vinaigrette"
        r"|worcestershire|horseradish|pickles?|capers|tahini|sauces?)\b",
    ]),
    _rule("vinegar", "Vinegar", [r"\bvinegar\b"]),
    _rule("breakfast", "Breakfast Items",
          [r"\b(?:syrup|honey|jam|jelly|preserves|marmalade|peanut butter|almond butter|cashew butter"
           r"|sunflower butter|nut butter|nutella|pancake mix|waffle mix|pop tarts)\b"],
          [r"\bjelly beans\b"]),
    _rule("nuts_seeds", "Nuts & Seeds", [
        r"\b(?:nuts?|almonds?|walnuts?|pecans?|cashews?|peanuts?|pistachios?|hazelnuts?|macadamias?"
        r"|pine nuts|sunflower seeds|pumpkin seeds|pepitas|chia seeds?|flax ?seeds?|flaxseed"
        r"|sesame seeds|hemp seeds|trail mix|seeds)\b",
    ]),
    _rule("cookies_sweets", "Cookies & Sweets", [
        r"\b(?:cookies?|cake mix|brownie mix|granola bars?|fruit snacks|graham crackers|marshmallows?)\b",
    ]),
    _rule("bakery", "Bakery", [
        r"\b(?:cakes?|cupcakes?|pastry|pastries|donuts?|doughnuts?|muffins?|pies?|danish|scones?"
        r"|brownies|tarts?)\b",
    ]),
    _rule("juices", "Juices", [r"\bjuices?\b"]),
    _rule("water", "Water",
          [r"\b(?:water|sports drinks?|electrolyte drinks?)\b"],
          [r"\b(?:tonic|soda|rose)\s+water\b", r"\bwater (?:chestnuts?|crackers?)\b"]),
    _rule("soft_drinks", "Soft Drinks", [
        r"\b(?:sodas?|cola|coke|pepsi|sprite|ginger ale|root beer|tonic water|club soda|seltzer"
        r"|energy drinks?|lemonade|soft drinks?|drinks?)\b",
    ]),
    _rule("coffee_tea", "Coffee & Tea", [
        r"\b(?:coffee|espresso|teas?|matcha|chai|cold brew|k cups?)\b",
    ]),
    _rule("beer_wine", "Beer & Wine", [
        r"\b(?:beers?|wines?|champagne|prosecco|ale|lager|cider|sherry|vermouth|bourbon|vodka|rum"
        r"|whiskey|tequila|brandy|marsala)\b",
    ]),
    _rule("chips_crackers", "Chips & Crackers", [
        r"\b(?:chips|crisps|crackers?|pretzels?|popcorn|rice cakes?|saltines|goldfish)\b",
    ]),
    _rule("candy", "Candy", [
        r"\b(?:candy|candies|chocolates?|gummies|gummy bears|mints|gum|lollipops?|licorice"
        r"|caramels?|jelly beans|toffee)\b",
    ]),
    _rule("baby_care", "Baby Care", [
        r"\b(?:diapers?|baby food|baby wipes|baby formula|infant formula|formula|baby lotion"
        r"|baby shampoo|baby oil|pacifiers?)\b",
    ]),
    _rule("cleaning", "Cleaning Supplies", [
        r"\b(?:cleaners?|cleaning|dish soap|dish detergent|dishwasher|sponges?|scrubbers?"
        r"|disinfectant|wipes|trash|garbage bags|bin liners|windex|lysol|clorox|mop|broom)\b",
    ]),
    _rule("laundry", "Laundry", [
        r"\b(?:laundry|detergent|fabric softener|bleach|dryer sheets|stain remover|oxiclean)\b",
    ]),
    _rule("paper_products", "Paper Products", [
        r"\b(?:paper towels?|toilet paper|toilet tissue|napkins?|tissues?|aluminum foil|aluminium foil"
        r"|foil|plastic wrap|cling wrap|parchment paper|wax paper|paper plates?|paper cups?"
        r"|sandwich bags|zip ?lock bags|ziploc)\b",
    ]),
    _rule("personal_care", "Personal Care", [
        r"\b(?:shampoo|conditioner|body wash|soap|toothpaste|toothbrush(?:es)?|mouthwash|floss"
        r"|deodorant|lotion|razors?|shaving cream|sunscreen|lip balm|cotton swabs|tampons)\b",
    ]),
    _rule("health", "Health Items", [
        r"\b(?:vitamins?|supplements?|multivitamins?|ibuprofen|acetaminophen|tylenol|advil|aspirin"
        r"|allergy|antacids?|cough|medicine|bandages|band aids|first aid|thermometers?|fish oil"
        r"|probiotics?|melatonin|pain relief)\b",
    ]),
    _rule("pet_food", "Pet Food", [
        r"\b(?:dog food|cat food|pet food|kibble|cat litter|kitty litter|litter|dog treats"
        r"|cat treats|pet treats|fish food|bird seed|dogs?|cats?)\b",
    ]),
)

validate_category_keys((rule.category for rule in RULES), "auto_categorizer.RULES")


def match_rule(text: str) -> Optional[CategoryRule]:
    """Return the first rule that accepts text, or None."""
    if not text:
        return None
    for rule in RULES:
        if rule.matches(text):
            return rule
    return None


def _classify(raw_name: Any) -> tuple[str, Optional[CategoryRule], str, str]:
    if not isinstance(raw_name, str):
        if raw_name is not None:
            logger.warning("Invalid item name for categorization: %r", raw_name)
        return OTHER, None, "", ""

    normalized = normalize_item_name(raw_name)
    core = extract_core_term(raw_name)
    candidates = (normalized, core, raw_name.lower().strip())

    for candidate in candidates:
        rule = match_rule(candidate)
        if rule is not None:
            return rule.category, rule, normalized, core

    logger.debug("No category rule matched %r, falling back to %s", raw_name, OTHER)
    return OTHER, None, normalized, core


def categorize_item(raw_name: Any) -> str:
    """
    Categorize a raw ingredient / item name.

    Examples:
        "2 cups chopped fresh cilantro" -> "Fresh Vegetables"
        "Tomato Paste"                  -> "Canned Tomatoes"
        "3 chopped cherry tomatoes"     -> "Fresh Produce"
        "corn tortillas"                -> "Mexican Items"
        "xyzzy nonsense item"           -> "Other"
    """
    category, _rule_hit, _normalized, _core = _classify(raw_name)
    return category


def explain_categorization(raw_name: Any) -> dict:
    """Category plus the intermediate text and rule name, for debugging endpoints."""
    category, rule, normalized, core = _classify(raw_name)
    return {
        "category": category,
        "rule": rule.name if rule else None,
        "normalized": normalized,
        "core": core,
    }


def score_category_confidence(raw_name: Any) -> CategorySuggestion:
    """
    Categorize and attach a heuristic confidence.

    Confidence comes from the registry's exemplar items and never changes the
    category: exact (case-insensitive) exemplar match 0.95, substring overlap
    0.6-0.9 depending on how many exemplars overlap, otherwise 0.5.
    """
    category = categorize_item(raw_name)
    confidence = BASELINE_CONFIDENCE

    if isinstance(raw_name, str) and raw_name.strip():
        text = raw_name.lower().strip()
        exemplars = [item.lower() for cat in GROCERY_CATEGORIES.values() for item in cat.items]

        if text in exemplars:
            confidence = EXACT_MATCH_CONFIDENCE
        else:
            overlaps = sum(1 for item in exemplars if item in text or text in item)
            if overlaps:
                confidence = min(PARTIAL_MATCH_CAP, PARTIAL_MATCH_BASE + (overlaps - 1) * PARTIAL_MATCH_STEP)

    return CategorySuggestion(
        category=category,
        confidence=round(confidence, 2),
        is_valid_category=is_valid_category(category),
    )


def categorize_batch(names: Iterable[Any]) -> list[str]:
    """Categorize several names at once, keeping input order."""
    return [categorize_item(name) for name in names]


def group_items_by_category(items: Iterable[Any]) -> dict[str, list[Any]]:
    """
    Group shopping list items (dicts or models) by category.

    An item's own 'category' field wins when it maps to a registry key other
    than Other; otherwise its 'ingredient' / 'name' is categorized. Categories
    appear in the order they are first encountered and items are passed
    through as-is.
    """
    grouped: dict[str, list[Any]] = {}
    for item in items:
        category = item_field(item, "category")
        category = normalize_category_name(category) if category else None
        if not is_valid_category(category) or (category == OTHER and item_label(item)):
            category = categorize_item(item_label(item))
        grouped.setdefault(category, []).append(item)
    return grouped
