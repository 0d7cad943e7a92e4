from __future__ import annotations

import re

CATEGORIES: list[str] = [
    "Mexican",
    "New Mexican",
    "Italian",
    "Indian",
    "Asian",
    "BBQ",
    "American",
    "Baked Goods",
    "Desserts",
    "Soups & Stews",
    "Drinks",
    "Breakfast",
]

# ---------------------------------------------------------------------------
# Keyword mapping
# ---------------------------------------------------------------------------

_CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "Mexican": [
        "tamale", "tamal", "enchilada", "burrito", "taco", "salsa", "tortilla",
        "quesadilla", "mole", "tostada", "elote", "carnitas", "birria", "mexican",
    ],
    "New Mexican": [
        "green chile", "red chile", "hatch", "posole", "sopapilla", "biscochito",
        "carne adovada", "calabacitas", "frito pie", "new mexican",
    ],
    "Italian": [
        "pasta", "lasagna", "pizza", "ravioli", "gnocchi", "meatball", "risotto",
        "marinara", "pesto", "italian",
    ],
    "Indian": [
        "curry", "tikka", "masala", "samosa", "naan", "biryani", "dal", "dhal",
        "chutney", "paneer", "korma", "vindaloo", "lassi", "indian",
    ],
    "Asian": [
        "dumpling", "ramen", "sushi", "pho", "noodle", "teriyaki", "kimchi",
        "bao", "spring roll", "egg roll", "pad thai", "fried rice", "banh mi",
        "bibimbap", "asian", "chinese", "thai", "japanese", "korean", "vietnamese",
    ],
    "BBQ": [
        "bbq", "barbecue", "brisket", "rib", "smoked", "pulled pork", "burnt end",
    ],
    "American": [
        "burger", "cheeseburger", "mac and cheese", "fried chicken", "meatloaf",
        "sandwich", "hot dog", "pot pie", "coleslaw",
    ],
    "Baked Goods": [
        "bread", "sourdough", "biscuit", "bagel", "muffin", "scone", "focaccia",
        "croissant", "loaf", "pastry", "pastries", "baked",
    ],
    "Desserts": [
        "cookie", "cake", "pie", "brownie", "cupcake", "dessert", "fudge",
        "cheesecake", "flan", "candy", "churro", "tres leches", "sweet",
    ],
    "Soups & Stews": [
        "soup", "stew", "chili", "gumbo", "chowder", "broth", "pozole", "posole",
    ],
    "Drinks": [
        "lassi", "lemonade", "horchata", "agua fresca", "kombucha", "coffee",
        "tea", "juice", "smoothie", "drink",
    ],
    "Breakfast": [
        "breakfast", "pancake", "waffle", "granola", "quiche", "egg",
    ],
}

_CATEGORY_BY_NAME: dict[str, str] = {c.lower(): c for c in CATEGORIES}

_KEYWORD_PATTERNS: dict[str, list[re.Pattern[str]]] = {
    category: [
        re.compile(rf"\b{re.escape(keyword)}(?:s|es)?\b", re.IGNORECASE)
        for keyword in keywords
    ]
    for category, keywords in _CATEGORY_KEYWORDS.items()
}


def normalize_category(value: str | None) -> str | None:
    """Return the canonical spelling of a category name, or ``None``."""
    if not value:
        return None
    return _CATEGORY_BY_NAME.get(value.strip().lower())


def categorize(text: str | None) -> list[str]:
    """Infer categories from free text, strongest match first.

    A text naming a category outright ("desserts") ranks that category first.
    Otherwise categories are ordered by how many of their keywords appear,
    with ties kept in ``CATEGORIES`` order.
    """
    if not text or not text.strip():
        return []

    hits: dict[str, int] = {}
    exact = normalize_category(text)
    for category, patterns in _KEYWORD_PATTERNS.items():
        count = sum(1 for p in patterns if p.search(text))
        if count:
            hits[category] = count

    ranked = sorted(hits, key=lambda c: (-hits[c], CATEGORIES.index(c)))
    if exact:
        ranked = [exact] + [c for c in ranked if c != exact]
    return ranked
