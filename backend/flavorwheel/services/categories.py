"""Predefined wheel categories and free-form label matching."""
from typing import NamedTuple, Optional

UNCATEGORIZED = "Uncategorized"
DEFAULT_COLOR = "#B0B0B0"


class PredefinedCategory(NamedTuple):
    name: str
    display_order: int
    color_hex: str


FLAVOR_CATEGORIES = [
    PredefinedCategory("Fruit", 1, "#FF6B6B"),
    PredefinedCategory("Floral", 2, "#FF8E8E"),
    PredefinedCategory("Herbal", 3, "#4ECDC4"),
    PredefinedCategory("Spice", 4, "#FFD93D"),
    PredefinedCategory("Sweetness / Sugary / Confection", 5, "#95E77E"),
    PredefinedCategory("Earthy / Mineral", 6, "#8B7355"),
    PredefinedCategory("Vegetal / Green", 7, "#6BCF7F"),
    PredefinedCategory("Nutty / Grain / Cereal", 8, "#D4A574"),
    PredefinedCategory("Ferment / Funky", 9, "#B19CD9"),
    PredefinedCategory("Roasted / Toasted / Smoke", 10, "#8B4513"),
    PredefinedCategory("Chemical", 11, "#FF69B4"),
    PredefinedCategory("Animal / Must", 12, "#CD853F"),
    PredefinedCategory("Dairy / Fatty", 13, "#F0E68C"),
    PredefinedCategory("Wood / Resin", 14, "#654321"),
]

METAPHOR_CATEGORIES = [
    PredefinedCategory("Emotion", 1, "#FF6B9D"),
    PredefinedCategory("Texture", 2, "#C9E4CA"),
    PredefinedCategory("Color/Light", 3, "#FFD93D"),
    PredefinedCategory("Place", 4, "#6C5CE7"),
    PredefinedCategory("Temporal", 5, "#A8E6CF"),
    PredefinedCategory("Personality / Archetype", 6, "#FFB6C1"),
    PredefinedCategory("Shape", 7, "#87CEEB"),
    PredefinedCategory("Weight", 8, "#DDA0DD"),
    PredefinedCategory("Sound", 9, "#F0E68C"),
    PredefinedCategory("Movement", 10, "#98D8C8"),
]

# Last-resort keyword hints for labels that match no category by name
CATEGORY_KEYWORDS = {
    "Fruit": ["fruit", "berry", "citrus", "apple", "lemon", "orange"],
    "Floral": ["floral", "flower", "blossom", "rose", "lavender"],
    "Herbal": ["herbal", "herb", "mint", "basil", "oregano"],
    "Spice": ["spice", "spicy", "pepper", "cinnamon", "clove"],
    "Sweetness / Sugary / Confection": ["sweet", "sugar", "honey", "candy", "confection"],
    "Earthy / Mineral": ["earthy", "mineral", "soil", "stone", "dirt"],
    "Vegetal / Green": ["vegetal", "green", "grass", "vegetable", "leaf"],
    "Nutty / Grain / Cereal": ["nut", "nutty", "grain", "cereal", "oat"],
    "Ferment / Funky": ["ferment", "funky", "yeast", "barnyard"],
    "Roasted / Toasted / Smoke": ["roast", "toasted", "smoke", "burnt", "char"],
    "Chemical": ["chemical", "medicinal", "petroleum", "plastic"],
    "Animal / Must": ["animal", "must", "leather", "musky"],
    "Dairy / Fatty": ["dairy", "fat", "fatty", "cream", "butter"],
    "Wood / Resin": ["wood", "oak", "pine", "resin", "cedar"],
}

_COLORS = {
    category.name.lower(): category.color_hex
    for category in FLAVOR_CATEGORIES + METAPHOR_CATEGORIES
}


def categories_for_type(descriptor_type: str) -> list[PredefinedCategory]:
    """Catalog a descriptor of ``descriptor_type`` is snapped against."""
    if descriptor_type == "metaphor":
        return METAPHOR_CATEGORIES
    return FLAVOR_CATEGORIES


def closest_category(
    label: Optional[str],
    candidates: list[PredefinedCategory],
) -> Optional[PredefinedCategory]:
    """Match a free-form category label onto a predefined category.

    Tries an exact (case-insensitive) name match, then substring
    containment in either direction, then the keyword hints.

    Args:
        label: Category label as produced by an extractor
        candidates: Predefined categories to choose from

    Returns:
        The matching category, or None when nothing fits
    """
    if not label or not label.strip():
        return None
    wanted = label.strip().lower()

    for category in candidates:
        if category.name.lower() == wanted:
            return category

    for category in candidates:
        name = category.name.lower()
        if wanted in name or name in wanted:
            return category

    by_name = {category.name: category for category in candidates}
    for category_name, keywords in CATEGORY_KEYWORDS.items():
        if category_name in by_name and any(keyword in wanted for keyword in keywords):
            return by_name[category_name]

    return None


def color_for(category_name: Optional[str]) -> str:
    """Display color for a wheel category."""
    if not category_name:
        return DEFAULT_COLOR
    return _COLORS.get(category_name.lower(), DEFAULT_COLOR)
