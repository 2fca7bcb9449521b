"""Flavor lexicon for keyword extraction.

Each term maps to the descriptor type it is usually reported under plus a
predefined wheel category and a subcategory. Phrases of up to three words
are allowed; the extractor matches the longest phrase first.
"""
from typing import NamedTuple, Optional

from flavorwheel.models.descriptor import DescriptorType


class LexiconEntry(NamedTuple):
    type: DescriptorType
    category: str
    subcategory: Optional[str] = None


A = DescriptorType.AROMA
F = DescriptorType.FLAVOR
T = DescriptorType.TEXTURE
O = DescriptorType.OTHER

FRUIT = "Fruit"
FLORAL = "Floral"
HERBAL = "Herbal"
SPICE = "Spice"
SWEET = "Sweetness / Sugary / Confection"
EARTHY = "Earthy / Mineral"
VEGETAL = "Vegetal / Green"
NUTTY = "Nutty / Grain / Cereal"
FUNKY = "Ferment / Funky"
ROASTED = "Roasted / Toasted / Smoke"
CHEMICAL = "Chemical"
ANIMAL = "Animal / Must"
DAIRY = "Dairy / Fatty"
WOOD = "Wood / Resin"
MOUTHFEEL = "Mouthfeel"
TASTE = "Basic Taste"

LEXICON: dict[str, LexiconEntry] = {
    # Fruit
    "fruit": LexiconEntry(A, FRUIT),
    "citrus": LexiconEntry(A, FRUIT, "Citrus"),
    "lemon": LexiconEntry(A, FRUIT, "Citrus"),
    "lime": LexiconEntry(A, FRUIT, "Citrus"),
    "orange": LexiconEntry(A, FRUIT, "Citrus"),
    "grapefruit": LexiconEntry(A, FRUIT, "Citrus"),
    "bergamot": LexiconEntry(A, FRUIT, "Citrus"),
    "orange peel": LexiconEntry(A, FRUIT, "Citrus"),
    "berry": LexiconEntry(A, FRUIT, "Berry"),
    "strawberry": LexiconEntry(A, FRUIT, "Berry"),
    "raspberry": LexiconEntry(A, FRUIT, "Berry"),
    "blueberry": LexiconEntry(A, FRUIT, "Berry"),
    "blackberry": LexiconEntry(A, FRUIT, "Berry"),
    "blackcurrant": LexiconEntry(A, FRUIT, "Berry"),
    "cherry": LexiconEntry(A, FRUIT, "Stone Fruit"),
    "black cherry": LexiconEntry(A, FRUIT, "Stone Fruit"),
    "stone fruit": LexiconEntry(A, FRUIT, "Stone Fruit"),
    "peach": LexiconEntry(A, FRUIT, "Stone Fruit"),
    "apricot": LexiconEntry(A, FRUIT, "Stone Fruit"),
    "plum": LexiconEntry(A, FRUIT, "Stone Fruit"),
    "apple": LexiconEntry(A, FRUIT, "Orchard Fruit"),
    "green apple": LexiconEntry(A, FRUIT, "Orchard Fruit"),
    "pear": LexiconEntry(A, FRUIT, "Orchard Fruit"),
    "tropical fruit": LexiconEntry(A, FRUIT, "Tropical"),
    "pineapple": LexiconEntry(A, FRUIT, "Tropical"),
    "mango": LexiconEntry(A, FRUIT, "Tropical"),
    "banana": LexiconEntry(A, FRUIT, "Tropical"),
    "passion fruit": LexiconEntry(A, FRUIT, "Tropical"),
    "raisin": LexiconEntry(F, FRUIT, "Dried Fruit"),
    "fig": LexiconEntry(F, FRUIT, "Dried Fruit"),
    "date": LexiconEntry(F, FRUIT, "Dried Fruit"),
    "dried fruit": LexiconEntry(F, FRUIT, "Dried Fruit"),
    # Floral
    "floral": LexiconEntry(A, FLORAL),
    "flower": LexiconEntry(A, FLORAL),
    "jasmine": LexiconEntry(A, FLORAL, "Jasmine"),
    "rose": LexiconEntry(A, FLORAL, "Rose"),
    "lavender": LexiconEntry(A, FLORAL, "Lavender"),
    "violet": LexiconEntry(A, FLORAL),
    "orange blossom": LexiconEntry(A, FLORAL, "Blossom"),
    "elderflower": LexiconEntry(A, FLORAL, "Blossom"),
    "honeysuckle": LexiconEntry(A, FLORAL, "Blossom"),
    "hibiscus": LexiconEntry(A, FLORAL),
    # Herbal
    "herbal": LexiconEntry(A, HERBAL),
    "herb": LexiconEntry(A, HERBAL),
    "mint": LexiconEntry(A, HERBAL, "Mint"),
    "eucalyptus": LexiconEntry(A, HERBAL, "Mint"),
    "basil": LexiconEntry(A, HERBAL),
    "sage": LexiconEntry(A, HERBAL),
    "thyme": LexiconEntry(A, HERBAL),
    "rosemary": LexiconEntry(A, HERBAL),
    "oregano": LexiconEntry(A, HERBAL),
    "tobacco": LexiconEntry(A, HERBAL, "Tobacco"),
    # Spice
    "spice": LexiconEntry(A, SPICE),
    "pepper": LexiconEntry(A, SPICE, "Pepper"),
    "black pepper": LexiconEntry(A, SPICE, "Pepper"),
    "cinnamon": LexiconEntry(A, SPICE, "Baking Spice"),
    "clove": LexiconEntry(A, SPICE, "Baking Spice"),
    "nutmeg": LexiconEntry(A, SPICE, "Baking Spice"),
    "cardamom": LexiconEntry(A, SPICE, "Baking Spice"),
    "anise": LexiconEntry(A, SPICE, "Anise"),
    "licorice": LexiconEntry(F, SPICE, "Anise"),
    "ginger": LexiconEntry(F, SPICE),
    # Sweet
    "sweet": LexiconEntry(F, SWEET),
    "honey": LexiconEntry(F, SWEET, "Honey"),
    "caramel": LexiconEntry(F, SWEET, "Caramel"),
    "toffee": LexiconEntry(F, SWEET, "Caramel"),
    "butterscotch": LexiconEntry(F, SWEET, "Caramel"),
    "molasses": LexiconEntry(F, SWEET, "Caramel"),
    "brown sugar": LexiconEntry(F, SWEET, "Sugar"),
    "sugar": LexiconEntry(F, SWEET, "Sugar"),
    "maple": LexiconEntry(F, SWEET, "Syrup"),
    "vanilla": LexiconEntry(A, SWEET, "Vanilla"),
    "chocolate": LexiconEntry(F, SWEET, "Chocolate"),
    "dark chocolate": LexiconEntry(F, SWEET, "Chocolate"),
    "milk chocolate": LexiconEntry(F, SWEET, "Chocolate"),
    "cocoa": LexiconEntry(F, SWEET, "Chocolate"),
    "marshmallow": LexiconEntry(F, SWEET, "Candy"),
    "candy": LexiconEntry(F, SWEET, "Candy"),
    # Earthy
    "earth": LexiconEntry(A, EARTHY),
    "mineral": LexiconEntry(A, EARTHY, "Mineral"),
    "slate": LexiconEntry(A, EARTHY, "Mineral"),
    "flint": LexiconEntry(A, EARTHY, "Mineral"),
    "wet stone": LexiconEntry(A, EARTHY, "Mineral"),
    "soil": LexiconEntry(A, EARTHY),
    "mushroom": LexiconEntry(A, EARTHY, "Fungal"),
    "truffle": LexiconEntry(A, EARTHY, "Fungal"),
    # Vegetal
    "grass": LexiconEntry(A, VEGETAL, "Grass"),
    "hay": LexiconEntry(A, VEGETAL, "Grass"),
    "vegetal": LexiconEntry(A, VEGETAL),
    "green": LexiconEntry(A, VEGETAL),
    "green pepper": LexiconEntry(A, VEGETAL),
    "tomato": LexiconEntry(F, VEGETAL),
    "seaweed": LexiconEntry(F, VEGETAL, "Marine"),
    # Nutty
    "nut": LexiconEntry(F, NUTTY, "Nut"),
    "almond": LexiconEntry(F, NUTTY, "Nut"),
    "hazelnut": LexiconEntry(F, NUTTY, "Nut"),
    "walnut": LexiconEntry(F, NUTTY, "Nut"),
    "peanut": LexiconEntry(F, NUTTY, "Nut"),
    "grain": LexiconEntry(F, NUTTY, "Grain"),
    "malt": LexiconEntry(F, NUTTY, "Grain"),
    "bread": LexiconEntry(A, NUTTY, "Bakery"),
    "biscuit": LexiconEntry(A, NUTTY, "Bakery"),
    "cereal": LexiconEntry(F, NUTTY, "Grain"),
    "oat": LexiconEntry(F, NUTTY, "Grain"),
    # Ferment
    "yeast": LexiconEntry(A, FUNKY, "Yeast"),
    "funk": LexiconEntry(A, FUNKY),
    "barnyard": LexiconEntry(A, FUNKY),
    "vinegar": LexiconEntry(F, FUNKY, "Acetic"),
    "sourdough": LexiconEntry(A, FUNKY, "Yeast"),
    # Roasted
    "roast": LexiconEntry(A, ROASTED, "Roast"),
    "toast": LexiconEntry(A, ROASTED, "Toast"),
    "smoke": LexiconEntry(A, ROASTED, "Smoke"),
    "peat": LexiconEntry(A, ROASTED, "Smoke"),
    "char": LexiconEntry(A, ROASTED, "Smoke"),
    "coffee": LexiconEntry(F, ROASTED, "Roast"),
    "espresso": LexiconEntry(F, ROASTED, "Roast"),
    "burnt sugar": LexiconEntry(F, ROASTED, "Roast"),
    # Chemical
    "medicinal": LexiconEntry(O, CHEMICAL),
    "iodine": LexiconEntry(O, CHEMICAL),
    "petrol": LexiconEntry(O, CHEMICAL),
    "rubber": LexiconEntry(O, CHEMICAL),
    "solvent": LexiconEntry(O, CHEMICAL),
    # Animal
    "leather": LexiconEntry(A, ANIMAL, "Leather"),
    "musk": LexiconEntry(A, ANIMAL),
    "meat": LexiconEntry(F, ANIMAL),
    # Dairy
    "butter": LexiconEntry(F, DAIRY, "Butter"),
    "cream": LexiconEntry(F, DAIRY, "Cream"),
    "milk": LexiconEntry(F, DAIRY),
    "cheese": LexiconEntry(F, DAIRY),
    "yogurt": LexiconEntry(F, DAIRY),
    # Wood
    "wood": LexiconEntry(A, WOOD),
    "oak": LexiconEntry(A, WOOD, "Oak"),
    "cedar": LexiconEntry(A, WOOD, "Cedar"),
    "pine": LexiconEntry(A, WOOD, "Resin"),
    "resin": LexiconEntry(A, WOOD, "Resin"),
    "sandalwood": LexiconEntry(A, WOOD),
    # Basic tastes
    "sour": LexiconEntry(F, TASTE, "Sour"),
    "tart": LexiconEntry(F, TASTE, "Sour"),
    "acidic": LexiconEntry(F, TASTE, "Sour"),
    "bitter": LexiconEntry(F, TASTE, "Bitter"),
    "salt": LexiconEntry(F, TASTE, "Salty"),
    "umami": LexiconEntry(F, TASTE, "Umami"),
    "savory": LexiconEntry(F, TASTE, "Umami"),
    # Texture
    "creamy": LexiconEntry(T, MOUTHFEEL, "Body"),
    "smooth": LexiconEntry(T, MOUTHFEEL, "Body"),
    "silky": LexiconEntry(T, MOUTHFEEL, "Body"),
    "velvety": LexiconEntry(T, MOUTHFEEL, "Body"),
    "full bodied": LexiconEntry(T, MOUTHFEEL, "Body"),
    "light bodied": LexiconEntry(T, MOUTHFEEL, "Body"),
    "thin": LexiconEntry(T, MOUTHFEEL, "Body"),
    "juicy": LexiconEntry(T, MOUTHFEEL, "Body"),
    "oily": LexiconEntry(T, MOUTHFEEL, "Body"),
    "astringent": LexiconEntry(T, MOUTHFEEL, "Astringency"),
    "tannic": LexiconEntry(T, MOUTHFEEL, "Astringency"),
    "dry": LexiconEntry(T, MOUTHFEEL, "Astringency"),
    "chalky": LexiconEntry(T, MOUTHFEEL, "Astringency"),
    "crisp": LexiconEntry(T, MOUTHFEEL, "Structure"),
    "fizzy": LexiconEntry(T, MOUTHFEEL, "Carbonation"),
    "effervescent": LexiconEntry(T, MOUTHFEEL, "Carbonation"),
    "crunchy": LexiconEntry(T, MOUTHFEEL, "Structure"),
    "chewy": LexiconEntry(T, MOUTHFEEL, "Structure"),
}

# Adjectival and plural forms that suffix stripping cannot reduce
ALIASES: dict[str, str] = {
    "earthy": "earth",
    "smoky": "smoke",
    "smokey": "smoke",
    "spicy": "spice",
    "peaty": "peat",
    "roasted": "roast",
    "toasted": "toast",
    "toasty": "toast",
    "malty": "malt",
    "yeasty": "yeast",
    "funky": "funk",
    "musky": "musk",
    "woody": "wood",
    "oaky": "oak",
    "piney": "pine",
    "resinous": "resin",
    "salty": "salt",
    "buttery": "butter",
    "milky": "milk",
    "cheesy": "cheese",
    "meaty": "meat",
    "minty": "mint",
    "herby": "herb",
    "grassy": "grass",
    "flowery": "flower",
    "sugary": "sugar",
    "sweetness": "sweet",
    "bitterness": "bitter",
    "sourness": "sour",
    "acidity": "acidic",
    "minerality": "mineral",
    "peppery": "pepper",
    "honeyed": "honey",
    "caramelized": "caramel",
    "leathery": "leather",
    "bready": "bread",
    "cacao": "cocoa",
}

MAX_PHRASE_WORDS = max(len(term.split()) for term in LEXICON)

# Intensity modifiers on the 0-10 scale; deltas from the default of 5
DEFAULT_INTENSITY = 5
INTENSITY_MODIFIERS: dict[str, int] = {
    "slightly": -2,
    "hint": -2,
    "subtle": -2,
    "faint": -2,
    "light": -2,
    "mild": -2,
    "touch": -2,
    "very": 2,
    "strong": 2,
    "intense": 2,
    "bold": 2,
    "big": 2,
    "powerful": 2,
    "extremely": 4,
    "incredibly": 4,
    "overwhelming": 4,
}

NEGATIONS = frozenset({"no", "not", "without", "lacking", "never"})

# Words that end the modifier look-back window
CLAUSE_BREAKS = frozenset({"and", "but", "or", "yet", "then", "with"})
