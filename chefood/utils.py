import json
import re
from typing import Any, Dict, List

# Base food -> variants that identify it more precisely
FOOD_PATTERNS: Dict[str, List[str]] = {
    # Proteins
    "chicken": ["breast", "thigh", "wing", "drumstick", "tender", "cutlet"],
    "beef": ["ground", "steak", "roast", "brisket", "chuck", "sirloin", "ribeye"],
    "pork": ["chop", "tenderloin", "shoulder", "belly", "loin", "ribs"],
    "fish": ["salmon", "tuna", "cod", "halibut", "tilapia", "mahi"],
    "turkey": ["breast", "ground", "thigh", "cutlet"],
    "lamb": ["chop", "leg", "shoulder", "rack"],
    "shrimp": ["jumbo", "large", "medium", "cooked", "raw"],
    # Vegetables
    "onion": ["yellow", "white", "red", "sweet", "green", "shallot"],
    "pepper": ["bell", "red", "green", "yellow", "jalapeño", "serrano", "poblano"],
    "tomato": ["cherry", "roma", "beefsteak", "plum", "grape", "heirloom"],
    "potato": ["russet", "yukon", "red", "sweet", "fingerling", "baby"],
    "carrot": ["baby", "large", "medium", "rainbow"],
    "mushroom": ["button", "cremini", "shiitake", "portobello", "oyster"],
    "lettuce": ["romaine", "iceberg", "butter", "arugula", "spinach"],
    # Herbs & spices
    "basil": ["fresh", "dried", "thai", "sweet"],
    "oregano": ["fresh", "dried", "mexican"],
    "parsley": ["fresh", "dried", "flat-leaf", "curly"],
    "cilantro": ["fresh", "leaves"],
    "thyme": ["fresh", "dried", "lemon"],
    "rosemary": ["fresh", "dried"],
    "sage": ["fresh", "dried"],
    # Dairy & cheese
    "cheese": ["cheddar", "mozzarella", "parmesan", "swiss", "feta", "goat", "cream", "cottage"],
    "milk": ["whole", "skim", "almond", "coconut", "oat", "soy"],
    "cream": ["heavy", "light", "sour", "whipping"],
    "yogurt": ["greek", "plain", "vanilla"],
    # Grains & starches
    "rice": ["white", "brown", "jasmine", "basmati", "arborio", "wild"],
    "pasta": ["spaghetti", "penne", "fusilli", "rigatoni", "linguine", "fettuccine"],
    "bread": ["white", "wheat", "sourdough", "rye", "pita", "naan"],
    "flour": ["all-purpose", "wheat", "almond", "coconut"],
    # Oils & vinegars
    "oil": ["olive", "vegetable", "canola", "coconut", "sesame", "avocado"],
    "vinegar": ["balsamic", "apple cider", "white wine", "red wine", "rice"],
    # Nuts & seeds
    "nuts": ["almonds", "walnuts", "pecans", "cashews", "pistachios"],
    "seeds": ["sesame", "sunflower", "pumpkin", "chia", "flax"],
}

CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    "protein": ["chicken", "beef", "pork", "fish", "turkey", "lamb", "shrimp"],
    "vegetable": ["onion", "pepper", "tomato", "potato", "carrot", "mushroom", "lettuce"],
    "herb": ["basil", "oregano", "parsley", "cilantro", "thyme", "rosemary"],
    "dairy": ["cheese", "milk", "cream", "yogurt"],
    "grain": ["rice", "pasta", "bread", "flour"],
}

IMPORTANT_DESCRIPTORS = {"boneless", "skinless", "ground", "whole", "half"}

# Applied in order; each removes one kind of noise from the lower-cased text
_CLEANUP_PATTERNS = [
    # leading quantity + unit: "2 cups", "200g", "3 cloves"
    re.compile(
        r"^(\d+\.?\d*\s*)?(cups?|cup|c\b|tsp|teaspoons?|tbsp|tablespoons?|oz|ounces?|lbs?|pounds?"
        r"|kg|kilograms?|g\b|grams?|ml|milliliters?|l\b|liters?|pint|pints|quart|quarts|gallon"
        r"|gallons|can|cans|package|packages|jar|jars|bottle|bottles|cloves?|pieces?|bunch"
        r"|bunches|head|heads)\s+"
    ),
    # bare leading numbers and fractions
    re.compile(r"^(\d+\.?\d*|½|⅓|⅔|¼|¾|⅛|⅜|⅝|⅞|\d+/\d+)\s+"),
    # weights in parentheses: "(170g)", "(2 lbs)"
    re.compile(r"\(\d+\.?\d*\s*(g|grams?|oz|ounces?|lbs?|pounds?|kg|ml|l)\)"),
    re.compile(r"\d+%"),
    re.compile(r"^(a|an|the|some|of|about|approximately)\s+"),
    re.compile(r"^(organic|free-range|grass-fed|wild-caught|extra|pure)\s+"),
    # sizes, except where they are part of the food's name
    re.compile(r"^(large|small|medium|big|tiny|jumbo|mini|baby|young)\s+(?!shrimp|eggs)"),
    re.compile(r"^(fresh|frozen|dried|canned|cooked|raw|uncooked)\s+"),
    # trailing preparation notes: ", finely chopped", ", to taste"
    re.compile(
        r",\s*(chopped|diced|sliced|minced|grated|shredded|cubed|julienned|crushed|pressed|peeled"
        r"|seeded|stemmed|trimmed|cleaned|washed|for serving|to taste|optional).*$"
    ),
    re.compile(r"\([^)]*\)"),
]

_FILLER_WORDS = {"and", "or", "with", "plus"}


def _raw_text(ingredient: Any) -> str:
    if isinstance(ingredient, str):
        return ingredient
    if isinstance(ingredient, dict):
        name = ingredient.get("item") or ingredient.get("name")
        if name:
            return name
        if ingredient.get("ingredient"):
            return ingredient["ingredient"]
        # Quantity without a name leaves nothing to extract
        if ingredient.get("amount") or ingredient.get("unit"):
            return ""
        return json.dumps(ingredient)
    if hasattr(ingredient, "model_dump"):
        return _raw_text(ingredient.model_dump(exclude_none=True))
    return ""


def extract_ingredient_name(ingredient: Any) -> str:
    """
    Pull the core ingredient name out of free text or a structured item.

    "2 cups jasmine rice" -> "jasmine rice", "1 lb ground beef" -> "ground beef".
    Returns "Ingredient" when nothing meaningful is left.
    """
    raw = _raw_text(ingredient)
    if not raw or not raw.strip():
        return "Ingredient"

    cleaned = raw.lower().strip()
    for pattern in _CLEANUP_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    cleaned = cleaned.strip()

    main_part = cleaned.split(",")[0].strip()
    if not main_part:
        return "Ingredient"

    words = [
        w for w in main_part.split()
        if len(w) > 1 and w not in _FILLER_WORDS and not w.isdigit()
    ]
    if not words:
        return "Ingredient"

    text = " ".join(words)
    for base, variants in FOOD_PATTERNS.items():
        variant = next((v for v in variants if v in text), None)
        if base in text:
            return f"{variant} {base}" if variant else base
        if variant:
            return f"{variant} {base}"

    if len(words) <= 2:
        return text
    if words[0] in IMPORTANT_DESCRIPTORS:
        return f"{words[0]} {words[-1]}"
    return " ".join(words[-2:])


def format_ingredient_display(ingredient: Any) -> str:
    return extract_ingredient_name(ingredient).capitalize()


def get_ingredient_category(ingredient: Any) -> str:
    name = extract_ingredient_name(ingredient).lower()
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(k in name for k in keywords):
            return category
    return "other"
