"""Quantity and unit extraction for raw item strings."""

import re

from .models import ParsedQuantity

# Verbose unit words mapped to a short canonical token.
UNIT_SYNONYMS: dict[str, str] = {
    "kg": "kg",
    "kgs": "kg",
    "kilo": "kg",
    "kilos": "kg",
    "kilogram": "kg",
    "kilograms": "kg",
    "kilogramme": "kg",
    "kilogrammes": "kg",
    "g": "g",
    "gm": "g",
    "gms": "g",
    "gr": "g",
    "gram": "g",
    "grams": "g",
    "gramme": "g",
    "grammes": "g",
    "mg": "mg",
    "lb": "lb",
    "lbs": "lb",
    "pound": "lb",
    "pounds": "lb",
    "oz": "oz",
    "ounce": "oz",
    "ounces": "oz",
    "l": "l",
    "ltr": "l",
    "ltrs": "l",
    "litre": "l",
    "litres": "l",
    "liter": "l",
    "liters": "l",
    "ml": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "milliliter": "ml",
    "milliliters": "ml",
    "tsp": "tsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "tbsp": "tbsp",
    "tbs": "tbsp",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "cup": "cup",
    "cups": "cup",
    "dozen": "dozen",
    "doz": "dozen",
    "pack": "pack",
    "packs": "pack",
    "pk": "pack",
    "pkt": "pack",
    "pkts": "pack",
    "packet": "pack",
    "packets": "pack",
    "bottle": "pack",
    "bottles": "pack",
    "jar": "pack",
    "jars": "pack",
    "can": "pack",
    "cans": "pack",
    "tin": "pack",
    "tins": "pack",
    "box": "pack",
    "boxes": "pack",
    "bag": "pack",
    "bags": "pack",
    "tub": "pack",
    "tubs": "pack",
    "carton": "pack",
    "cartons": "pack",
    "pc": "pc",
    "pcs": "pc",
    "piece": "pc",
    "pieces": "pc",
    "bunch": "bunch",
    "bunches": "bunch",
    "loaf": "loaf",
    "loaves": "loaf",
}

FRACTION_GLYPHS: dict[str, float] = {
    "½": 0.5,
    "¼": 0.25,
    "¾": 0.75,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "⅛": 0.125,
}

_GLYPHS = "".join(FRACTION_GLYPHS)
_UNIT_WORDS = "|".join(
    re.escape(word) for word in sorted(UNIT_SYNONYMS, key=len, reverse=True)
)
_FRACTION = rf"(?:\d+\s+\d+/\d+|\d+/\d+|\d+(?:\.\d+)?\s*[{_GLYPHS}]|[{_GLYPHS}])"
_NUMBER = r"\d+(?:\.\d+)?"
_UNIT = rf"(?P<unit>{_UNIT_WORDS})(?![a-z])"

_FRACTION_WITH_UNIT = re.compile(rf"(?<![\w./])(?P<qty>{_FRACTION})\s*{_UNIT}", re.IGNORECASE)
_NUMBER_WITH_UNIT = re.compile(rf"(?<![\w./])(?P<qty>{_NUMBER})\s*{_UNIT}", re.IGNORECASE)
_MULTIPLIER = re.compile(
    r"(?<!\w)[x×]\s*(?P<after>\d+)(?!\w)"
    r"|(?<![\w.])(?P<before>\d+)\s*[x×](?!\w)"
    r"|\(\s*(?P<paren>\d+)\s*\)",
    re.IGNORECASE,
)
_LEADING_NUMBER = re.compile(rf"^\s*(?P<qty>{_FRACTION}|{_NUMBER})(?=\s|$)")
_LEADING_FILLER = re.compile(r"^of\s+", re.IGNORECASE)


def canonical_unit(unit: str) -> str:
    """Map a unit word to its canonical token; unknown words pass through lowercased."""
    key = unit.strip().lower()
    return UNIT_SYNONYMS.get(key, key)


def parse_number(text: str) -> float | None:
    """Parse "2", "1.5", "3/4", "1 1/2", "½" or "1½" into a float.

    Returns None for a zero denominator or unparseable text.
    """
    total = 0.0
    for glyph, value in FRACTION_GLYPHS.items():
        if glyph in text:
            text = text.replace(glyph, " ")
            total += value

    for part in text.split():
        try:
            if "/" in part:
                numerator, denominator = part.split("/", 1)
                if float(denominator) == 0:
                    return None
                total += float(numerator) / float(denominator)
            else:
                total += float(part)
        except ValueError:
            return None
    return total


def _remainder(text: str, match: re.Match[str]) -> str:
    rest = f"{text[: match.start()]} {text[match.end():]}"
    rest = " ".join(rest.split())
    return _LEADING_FILLER.sub("", rest)


def extract_quantity(text: str) -> ParsedQuantity:
    """Pull a quantity and unit out of an item string.

    Patterns are tried in priority order: fraction or mixed number with a
    unit, plain number with a unit, a multiplier or parenthetical count, and
    finally a bare leading number. Whatever is left becomes the notes. With no
    match the quantity is 1, the unit empty and the whole string the notes.

    Args:
        text: A single cleaned item string, e.g. "1 1/2 kg flour"

    Returns:
        ParsedQuantity
    """
    for pattern in (_FRACTION_WITH_UNIT, _NUMBER_WITH_UNIT):
        match = pattern.search(text)
        if match is None:
            continue
        quantity = parse_number(match.group("qty"))
        if quantity is None:
            continue
        return ParsedQuantity(
            quantity=quantity,
            unit=canonical_unit(match.group("unit")),
            display_notes=_remainder(text, match),
        )

    match = _MULTIPLIER.search(text)
    if match is not None:
        count = match.group("after") or match.group("before") or match.group("paren")
        return ParsedQuantity(quantity=float(count), display_notes=_remainder(text, match))

    match = _LEADING_NUMBER.match(text)
    if match is not None:
        quantity = parse_number(match.group("qty"))
        if quantity is not None:
            return ParsedQuantity(quantity=quantity, display_notes=_remainder(text, match))

    return ParsedQuantity(display_notes=text.strip())
