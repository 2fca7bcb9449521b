"""Fixed taxonomy templates for categories the AI path cannot classify."""
from datetime import datetime

from flavorwheel.schemas.taxonomy import TaxonomyPayload

TEMPLATES = {
    "coffee": {
        "aroma_categories": ["Fruity", "Floral", "Nutty", "Chocolate", "Roasted", "Spice"],
        "flavor_categories": ["Sweet", "Sour", "Bitter", "Fruity", "Chocolate", "Caramel"],
        "typical_descriptors": [
            "citrus", "berry", "jasmine", "chocolate", "caramel", "almond",
            "brown sugar", "stone fruit", "honey", "toast",
        ],
        "texture_notes": ["silky", "syrupy", "juicy", "light bodied"],
    },
    "tea": {
        "aroma_categories": ["Floral", "Vegetal", "Fruity", "Roasted", "Earthy"],
        "flavor_categories": ["Sweet", "Bitter", "Umami", "Astringent", "Fruity"],
        "typical_descriptors": [
            "jasmine", "grass", "seaweed", "honey", "malt", "orchid",
            "peach", "smoke", "chestnut", "mineral",
        ],
        "texture_notes": ["brisk", "smooth", "astringent", "thin"],
    },
    "wine": {
        "aroma_categories": ["Fruity", "Floral", "Earthy", "Oak", "Spice", "Herbal"],
        "flavor_categories": ["Fruity", "Acidic", "Tannic", "Sweet", "Savory"],
        "typical_descriptors": [
            "black cherry", "plum", "blackcurrant", "citrus", "green apple",
            "vanilla", "oak", "leather", "pepper", "mineral", "rose",
        ],
        "texture_notes": ["dry", "tannic", "crisp", "full bodied", "velvety"],
    },
    "spirits": {
        "aroma_categories": ["Wood", "Smoke", "Fruity", "Spice", "Sweet", "Grain"],
        "flavor_categories": ["Sweet", "Spice", "Wood", "Fruity", "Smoke"],
        "typical_descriptors": [
            "vanilla", "oak", "caramel", "toffee", "peat", "dried fruit",
            "cinnamon", "orange peel", "honey", "leather",
        ],
        "texture_notes": ["oily", "warming", "smooth", "hot"],
    },
    "beer": {
        "aroma_categories": ["Hoppy", "Malty", "Fruity", "Yeast", "Roasted"],
        "flavor_categories": ["Bitter", "Malty", "Sweet", "Sour", "Roasted"],
        "typical_descriptors": [
            "citrus", "pine", "grapefruit", "bread", "caramel", "banana",
            "clove", "coffee", "chocolate", "biscuit",
        ],
        "texture_notes": ["crisp", "fizzy", "creamy", "dry"],
    },
    "chocolate": {
        "aroma_categories": ["Cocoa", "Fruity", "Nutty", "Roasted", "Floral"],
        "flavor_categories": ["Sweet", "Bitter", "Fruity", "Nutty", "Acidic"],
        "typical_descriptors": [
            "cocoa", "red fruit", "raisin", "almond", "hazelnut", "caramel",
            "vanilla", "coffee", "honey", "citrus",
        ],
        "texture_notes": ["smooth", "creamy", "waxy", "snappy"],
    },
    "cheese": {
        "aroma_categories": ["Lactic", "Nutty", "Earthy", "Animal", "Fruity"],
        "flavor_categories": ["Salty", "Savory", "Sweet", "Tangy", "Nutty"],
        "typical_descriptors": [
            "butter", "cream", "hazelnut", "mushroom", "grass", "barnyard",
            "caramel", "yogurt", "brothy", "crystal",
        ],
        "texture_notes": ["creamy", "crumbly", "firm", "supple"],
    },
    "other": {
        "aroma_categories": ["Fruity", "Floral", "Herbal", "Spice", "Earthy", "Sweet"],
        "flavor_categories": ["Sweet", "Sour", "Bitter", "Salty", "Umami"],
        "typical_descriptors": [
            "citrus", "berry", "floral", "herbal", "spice", "honey",
            "caramel", "nutty", "earthy", "smoky",
        ],
        "texture_notes": ["smooth", "creamy", "crisp", "dry"],
    },
}

# Checked in order; the first template with a keyword in the name wins
TEMPLATE_KEYWORDS = [
    ("coffee", ["coffee", "espresso", "latte", "cappuccino", "cold brew", "roast"]),
    ("tea", ["tea", "matcha", "oolong", "sencha", "chai", "puerh", "pu-erh", "rooibos"]),
    ("chocolate", ["chocolate", "cacao", "cocoa", "praline", "truffle"]),
    ("cheese", ["cheese", "cheddar", "brie", "gouda", "camembert", "parmesan", "roquefort"]),
    ("beer", ["beer", "ale", "lager", "stout", "porter", "ipa", "pilsner", "cider", "saison"]),
    ("spirits", [
        "whisky", "whiskey", "bourbon", "scotch", "rum", "gin", "vodka", "tequila",
        "mezcal", "brandy", "cognac", "armagnac", "liqueur", "spirit", "sake", "shochu",
    ]),
    ("wine", [
        "wine", "champagne", "prosecco", "cava", "port", "sherry", "riesling",
        "chardonnay", "pinot", "merlot", "cabernet", "syrah", "malbec", "rose",
    ]),
]


def match_template(category_name: str) -> str:
    """Pick the base template whose keywords appear in ``category_name``."""
    name = (category_name or "").lower()
    words = set(name.replace("-", " ").split())
    for template, keywords in TEMPLATE_KEYWORDS:
        for keyword in keywords:
            # Short keywords must match a whole word ("ale" in "pale ale", not "kale")
            if (len(keyword) <= 4 and keyword in words) or (len(keyword) > 4 and keyword in name):
                return template
    return "other"


def template_taxonomy(category_name: str) -> TaxonomyPayload:
    """Build a taxonomy payload from the fixed template for ``category_name``."""
    base_template = match_template(category_name)
    return TaxonomyPayload(
        base_template=base_template,
        generated_at=datetime.utcnow(),
        ai_model=None,
        **TEMPLATES[base_template],
    )
