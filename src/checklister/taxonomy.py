"""Category taxonomies used for ordering and rule-based categorization.

A taxonomy keeps two independent orders:

* ``categories`` is the display order used when grouping the checklist.
* ``rules`` is the scan order used by the fallback categorizer. The first rule
  with a matching keyword wins, so generic rules such as "frozen" sit ahead of
  the item-specific food rules.
"""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .exceptions import TaxonomyError
from .log import get_logger

logger = get_logger(__name__)


class CategoryRule(BaseModel):
    """Keywords that place an item into one category."""

    category: str
    keywords: list[str] = Field(default_factory=list)

    @field_validator("keywords")
    @classmethod
    def lowercase_keywords(cls, v: list[str]) -> list[str]:
        return [k.lower() for k in v if k.strip()]


class Taxonomy(BaseModel):
    """A named, versioned set of categories and keyword rules."""

    name: str
    version: int = 1
    sentinel: str
    categories: list[str]
    rules: list[CategoryRule] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_consistency(self) -> "Taxonomy":
        if self.sentinel not in self.categories:
            self.categories.append(self.sentinel)
        known = set(self.categories)
        for rule in self.rules:
            if rule.category not in known:
                raise ValueError(
                    f"Rule category '{rule.category}' is not part of taxonomy '{self.name}'"
                )
        return self

    def is_known(self, category: str) -> bool:
        """Whether a category name belongs to this taxonomy."""
        return category in self.categories

    def position(self, category: str) -> int | None:
        """Display position of a category, or None for custom categories."""
        try:
            return self.categories.index(category)
        except ValueError:
            return None


UAE_TAXONOMY = Taxonomy(
    name="uae",
    version=3,
    sentinel="Unrecognized",
    categories=[
        "Fresh Vegetables & Herbs",
        "Fresh Fruits",
        "Meat & Poultry",
        "Fish & Seafood",
        "Frozen Foods",
        "Dairy, Laban & Cheese",
        "Bakery & Khubz",
        "Oils, Ghee & Cooking Essentials",
        "Canned, Jarred & Preserved",
        "Sauces, Pastes & Condiments",
        "Spices & Masalas",
        "Rice, Atta, Flours & Grains",
        "Pulses & Lentils",
        "Pasta & Noodles",
        "Breakfast & Cereals",
        "Baking & Desserts",
        "Beverages & Juices",
        "Water & Carbonated Drinks",
        "Snacks, Sweets & Chocolates",
        "Deli & Ready-to-Eat",
        "Baby Care",
        "Personal Care",
        "Household & Cleaning",
        "Pets",
        "Unrecognized",
    ],
    rules=[
        CategoryRule(
            category="Frozen Foods",
            keywords=["frozen", "ice cream", "fries", "nuggets", "waffles", "popsicle", "ice pop"],
        ),
        CategoryRule(
            category="Baby Care",
            keywords=[
                "diaper", "nappy", "nappies", "baby food", "baby wipes", "baby formula",
                "baby milk", "baby shampoo", "infant", "cerelac", "wipes",
            ],
        ),
        CategoryRule(
            category="Pets",
            keywords=[
                "cat food", "dog food", "pet food", "cat litter", "kitty litter",
                "dog treat", "bird seed", "fish food",
            ],
        ),
        CategoryRule(
            category="Household & Cleaning",
            keywords=[
                "detergent", "bleach", "dishwash", "dish soap", "dish liquid", "sponge",
                "paper towel", "kitchen roll", "toilet paper", "toilet roll", "tissue",
                "foil", "cling film", "garbage bag", "trash bag", "bin bag", "cleaner",
                "fabric softener", "air freshener", "washing powder", "dettol", "clorox",
                "napkin", "batteries", "light bulb",
            ],
        ),
        CategoryRule(
            category="Personal Care",
            keywords=[
                "shampoo", "conditioner", "toothpaste", "toothbrush", "dental floss",
                "deodorant", "razor", "shaving", "lotion", "body wash", "face wash",
                "hand wash", "mouthwash", "soap", "sanitary", "cotton buds", "moisturi",
                "sunscreen",
            ],
        ),
        CategoryRule(
            category="Deli & Ready-to-Eat",
            keywords=[
                "hummus", "falafel", "shawarma", "samosa", "sandwich", "rotisserie",
                "ready meal", "cold cuts", "salami", "pastrami", "deli", "mutabal",
                "tabbouleh", "fattoush",
            ],
        ),
        CategoryRule(
            category="Baking & Desserts",
            keywords=[
                "baking", "yeast", "vanilla", "cocoa", "icing", "custard", "jelly",
                "cake mix", "chocolate chips", "food colouring", "gelatin", "sprinkles",
                "condensed milk",
            ],
        ),
        CategoryRule(
            category="Breakfast & Cereals",
            keywords=[
                "cereal", "cornflakes", "corn flakes", "oats", "oatmeal", "muesli",
                "granola", "peanut butter", "jam", "honey", "nutella", "pancake",
                "maple syrup",
            ],
        ),
        CategoryRule(
            category="Sauces, Pastes & Condiments",
            keywords=[
                "ketchup", "mayo", "mustard", "sauce", "paste", "vinegar", "tahini",
                "dressing", "chutney", "sriracha", "salsa",
            ],
        ),
        CategoryRule(
            category="Oils, Ghee & Cooking Essentials",
            keywords=["oil", "ghee", "salt", "sugar", "stock cube", "stock", "broth"],
        ),
        CategoryRule(
            category="Spices & Masalas",
            keywords=[
                "spice", "masala", "cumin", "jeera", "turmeric", "haldi", "paprika",
                "cinnamon", "cardamom", "elaichi", "chili powder", "chilli powder",
                "black pepper", "pepper powder", "coriander powder", "garam", "saffron",
                "bay leaf", "zaatar", "za'atar", "sumac", "curry powder", "mixed herbs",
                "oregano", "nutmeg",
            ],
        ),
        CategoryRule(
            category="Canned, Jarred & Preserved",
            keywords=[
                "canned", "tinned", "baked beans", "sardine", "tuna", "olives", "pickle",
                "coconut milk", "jarred", "in brine",
            ],
        ),
        CategoryRule(
            category="Pasta & Noodles",
            keywords=[
                "pasta", "spaghetti", "macaroni", "penne", "noodle", "vermicelli",
                "lasagne", "lasagna", "fusilli", "indomie", "ramen",
            ],
        ),
        CategoryRule(
            category="Rice, Atta, Flours & Grains",
            keywords=[
                "rice", "basmati", "atta", "flour", "maida", "semolina", "sooji", "suji",
                "rava", "quinoa", "bulgur", "burghul", "couscous", "barley", "poha",
                "freekeh",
            ],
        ),
        CategoryRule(
            category="Pulses & Lentils",
            keywords=[
                "lentil", "dal", "daal", "dhal", "chickpea", "chana", "moong", "masoor",
                "toor", "urad", "rajma", "kidney bean", "black bean", "fava", "black eyed",
                "split peas",
            ],
        ),
        CategoryRule(
            category="Snacks, Sweets & Chocolates",
            keywords=[
                "chips", "crisps", "chocolate", "biscuit", "cookie", "candy", "sweets",
                "nuts", "popcorn", "crackers", "wafer", "jerky",
            ],
        ),
        CategoryRule(
            category="Meat & Poultry",
            keywords=[
                "chicken", "beef", "mutton", "lamb", "goat", "veal", "mince", "keema",
                "steak", "sausage", "turkey",
            ],
        ),
        CategoryRule(
            category="Fish & Seafood",
            keywords=[
                "fish", "salmon", "hammour", "hamour", "shrimp", "prawn", "squid", "crab",
                "kingfish", "shaari", "safi",
            ],
        ),
        CategoryRule(
            category="Beverages & Juices",
            keywords=[
                "juice", "coffee", "tea", "nescafe", "lemonade", "coconut water",
                "ginger ale", "smoothie", "vimto",
            ],
        ),
        CategoryRule(
            category="Fresh Fruits",
            keywords=[
                "apple", "banana", "orange", "mango", "grape", "berr", "watermelon",
                "melon", "lemon", "lime", "dates", "pomegranate", "kiwi", "pear", "peach",
                "plum", "cherr", "pineapple", "papaya", "guava", "avocado", "coconut",
                "apricot", "fig",
            ],
        ),
        CategoryRule(
            category="Water & Carbonated Drinks",
            keywords=[
                "water", "soda", "cola", "pepsi", "sprite", "fanta", "7up", "sparkling",
                "energy drink", "red bull", "tonic",
            ],
        ),
        CategoryRule(
            category="Fresh Vegetables & Herbs",
            keywords=[
                "tomato", "potato", "onion", "garlic", "ginger", "carrot", "cucumber",
                "lettuce", "spinach", "cabbage", "cauliflower", "broccoli", "capsicum",
                "pepper", "chilli", "chili", "eggplant", "aubergine", "brinjal", "okra",
                "bhindi", "lauki", "tinda", "karela", "zucchini", "courgette",
                "coriander", "cilantro", "parsley", "mint", "dill", "mushroom",
                "green beans", "peas", "beetroot", "radish", "celery", "leek", "pumpkin",
                "spring onion", "kale", "herb", "molokhia", "salad", "corn",
            ],
        ),
        CategoryRule(
            category="Dairy, Laban & Cheese",
            keywords=[
                "milk", "laban", "cheese", "yogurt", "yoghurt", "labneh", "butter",
                "cream", "eggs", "egg", "curd", "paneer", "halloumi",
            ],
        ),
        CategoryRule(
            category="Bakery & Khubz",
            keywords=[
                "bread", "khubz", "khubus", "pita", "bun", "croissant", "bagel",
                "tortilla", "samoon", "baguette", "cake", "muffin", "roll", "paratha",
                "rusk", "toast",
            ],
        ),
    ],
)

AISLES_TAXONOMY = Taxonomy(
    name="aisles",
    version=1,
    sentinel="Other / Miscellaneous",
    categories=[
        "Produce",
        "Dairy",
        "Bakery",
        "Meat/Seafood",
        "Frozen",
        "Pantry",
        "Beverages",
        "Household",
        "Personal Care",
        "Other / Miscellaneous",
    ],
    rules=[
        CategoryRule(
            category="Frozen",
            keywords=["frozen", "ice cream", "pizza", "veggies", "fries", "nuggets", "waffles"],
        ),
        CategoryRule(
            category="Produce",
            keywords=[
                "apple", "banana", "lettuce", "tomato", "onion", "garlic", "spinach",
                "avocado", "carrot", "pepper", "cucumber", "broccoli", "herb", "cilantro",
                "parsley", "lime", "lemon", "berry", "grape", "mango", "potato",
                "sweet potato", "mushroom",
            ],
        ),
        CategoryRule(
            category="Dairy",
            keywords=["milk", "cheese", "yogurt", "butter", "cream", "half-and-half", "eggs"],
        ),
        CategoryRule(
            category="Bakery",
            keywords=["bread", "bun", "bagel", "tortilla", "pastry", "roll", "croissant", "pita"],
        ),
        CategoryRule(
            category="Meat/Seafood",
            keywords=[
                "chicken", "beef", "pork", "turkey", "salmon", "fish", "shrimp", "steak",
                "thigh", "breast", "ground",
            ],
        ),
        CategoryRule(
            category="Pantry",
            keywords=[
                "rice", "pasta", "noodles", "bean", "beans", "lentil", "flour", "sugar",
                "salt", "pepper", "oil", "olive", "vinegar", "spice", "sauce",
                "tomato sauce", "cereal", "oats", "oatmeal", "tuna", "broth", "stock",
                "baking", "yeast", "chip", "crackers", "nut", "peanut butter", "jam",
                "honey",
            ],
        ),
        CategoryRule(
            category="Beverages",
            keywords=["water", "soda", "juice", "coffee", "tea", "beer", "wine", "milk"],
        ),
        CategoryRule(
            category="Household",
            keywords=[
                "paper towel", "toilet paper", "foil", "wrap", "bag", "trash", "detergent",
                "cleaner", "soap", "dish", "sponge",
            ],
        ),
        CategoryRule(
            category="Personal Care",
            keywords=[
                "shampoo", "conditioner", "toothpaste", "toothbrush", "deodorant", "soap",
                "razor", "lotion", "tissue",
            ],
        ),
    ],
)

BUILTIN_TAXONOMIES: dict[str, Taxonomy] = {
    UAE_TAXONOMY.name: UAE_TAXONOMY,
    AISLES_TAXONOMY.name: AISLES_TAXONOMY,
}

DEFAULT_TAXONOMY = UAE_TAXONOMY


def get_taxonomy(name: str) -> Taxonomy:
    """Look up a built-in taxonomy by name.

    Raises:
        TaxonomyError: If no built-in taxonomy has that name
    """
    try:
        return BUILTIN_TAXONOMIES[name.lower()]
    except KeyError:
        known = ", ".join(sorted(BUILTIN_TAXONOMIES))
        raise TaxonomyError(f"Unknown taxonomy '{name}' (known: {known})") from None


def taxonomy_from_dict(data: dict[str, Any]) -> Taxonomy:
    """Build a taxonomy from parsed TOML data.

    Raises:
        TaxonomyError: If the data does not describe a valid taxonomy
    """
    try:
        return Taxonomy.model_validate(data)
    except ValidationError as e:
        raise TaxonomyError(f"Invalid taxonomy definition: {e}") from e


def load_taxonomy(path: Path) -> Taxonomy:
    """Load a taxonomy from a TOML file.

    Expected layout::

        name = "my-store"
        version = 2
        sentinel = "Other"
        categories = ["Produce", "Dairy", "Other"]

        [[rules]]
        category = "Dairy"
        keywords = ["milk", "cheese"]

    Raises:
        TaxonomyError: If the file is missing or invalid
    """
    if not path.exists():
        raise TaxonomyError(f"Taxonomy file not found: {path}")

    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise TaxonomyError(f"Could not parse taxonomy file {path}: {e}") from e

    taxonomy = taxonomy_from_dict(data)
    logger.debug("Loaded taxonomy %s v%s from %s", taxonomy.name, taxonomy.version, path)
    return taxonomy
