import re
from decimal import Decimal, InvalidOperation
from typing import List, NamedTuple, Optional

from mise_recipes.app.services.text_normalizer import FRACTION_GLYPHS, FRACTION_VALUES, decode_entities

_AMOUNT_UNITS = {
    "g": "g",
    "gram": "g",
    "grams": "g",
    "kg": "kg",
    "kilogram": "kg",
    "kilograms": "kg",
    "mg": "mg",
    "ml": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "milliliter": "ml",
    "milliliters": "ml",
    "l": "l",
    "litre": "l",
    "litres": "l",
    "liter": "l",
    "liters": "l",
    "oz": "oz",
    "ounce": "oz",
    "ounces": "oz",
    "lb": "lb",
    "lbs": "lb",
    "pound": "lb",
    "pounds": "lb",
    "cup": "cup",
    "cups": "cup",
    "tbsp": "tbsp",
    "tbs": "tbsp",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "tsp": "tsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "clove": "clove",
    "cloves": "clove",
    "can": "can",
    "cans": "can",
    "tin": "can",
    "tins": "can",
    "bunch": "bunch",
    "bunches": "bunch",
    "pinch": "pinch",
    "sprig": "sprig",
    "sprigs": "sprig",
    "slice": "slice",
    "slices": "slice",
    "stalk": "stalk",
    "stalks": "stalk",
    "package": "package",
    "packages": "package",
    "packet": "package",
    "packets": "package",
}

_COMPACT = re.compile(r"^(\d+(?:\.\d+)?)([a-z]+)$")
_AMOUNT_FRAGMENT = re.compile(
    rf"^([\d{FRACTION_GLYPHS}][\d{FRACTION_GLYPHS}/.\-–]*"
    rf"(?:\s+(?:to|-|–)\s+[\d{FRACTION_GLYPHS}][\d{FRACTION_GLYPHS}/.]*)?)\s*([A-Za-z]+\.?)?"
)
# Units written as words; the rest are abbreviations and never pluralized.
_COUNTABLE_UNITS = {"cup", "clove", "can", "bunch", "pinch", "sprig", "slice", "stalk", "package"}


class ParsedAmount(NamedTuple):
    quantity: Decimal
    unit: str


def parse_quantity_display(raw: Optional[str]) -> Optional[Decimal]:
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None
    if value in FRACTION_VALUES:
        return FRACTION_VALUES[value]

    # Whole or decimal numbers
    try:
        if "/" not in value and " " not in value:
            return Decimal(value)
    except InvalidOperation:
        pass

    # Fractions like "1/2" or "1 1/2"
    try:
        if " " in value:
            whole_part, frac_part = value.split(" ", 1)
            whole = Decimal(whole_part)
            num_str, denom_str = frac_part.split("/", 1)
            num = Decimal(num_str)
            denom = Decimal(denom_str)
            if denom == 0:
                return None
            return whole + (num / denom)
        if "/" in value:
            num_str, denom_str = value.split("/", 1)
            num = Decimal(num_str)
            denom = Decimal(denom_str)
            if denom == 0:
                return None
            return num / denom
    except (InvalidOperation, ValueError):
        return None

    return None


def normalize_amount_unit(unit: str) -> Optional[str]:
    return _AMOUNT_UNITS.get(unit.lower().strip("."))


def parse_leading_amount(line: str) -> Optional[ParsedAmount]:
    """Read the quantity and unit at the start of an ingredient line.

    Handles "2 cups", "1 1/2 tbsp", "200g" and bare counts such as "3 eggs"
    (unit ``""``). Returns None when the line does not start with a number.
    """
    tokens = decode_entities(line or "").replace(",", " ").split()
    if not tokens:
        return None

    first = tokens[0].lower()
    compact = _COMPACT.match(first)
    if compact:
        unit = normalize_amount_unit(compact.group(2))
        if unit is None:
            return None
        return ParsedAmount(Decimal(compact.group(1)), unit)

    quantity = parse_quantity_display(tokens[0])
    if quantity is None:
        return None
    index = 1
    if len(tokens) > 1 and re.fullmatch(r"\d+/\d+", tokens[1]):
        mixed = parse_quantity_display(f"{tokens[0]} {tokens[1]}")
        if mixed is not None:
            quantity = mixed
            index = 2

    unit = ""
    if index < len(tokens):
        unit = normalize_amount_unit(tokens[index]) or ""
    return ParsedAmount(quantity, unit)


def format_quantity(value: Decimal) -> str:
    """Render a Decimal without trailing zeros; thirds are rounded to two places."""
    if value == value.to_integral_value():
        return str(int(value))
    rounded = value.quantize(Decimal("0.01")).normalize()
    return format(rounded, "f")


def amount_fragment(line: str) -> Optional[str]:
    """Leading quantity text that could not be summed, e.g. "1-2" or "2-3 cups"."""
    match = _AMOUNT_FRAGMENT.match(decode_entities(line or "").strip())
    if match is None:
        return None
    quantity, word = match.groups()
    if word and normalize_amount_unit(word):
        return f"{quantity} {word}"
    return quantity


def unit_label(unit: str, total: Decimal) -> str:
    if unit not in _COUNTABLE_UNITS or total <= 1:
        return unit
    if unit.endswith(("ch", "sh")):
        return f"{unit}es"
    return f"{unit}s"


def summarize_amounts(lines: List[str]) -> Optional[str]:
    """Sum leading amounts per unit, keeping unparseable amount fragments verbatim.

    ``["200g mushrooms", "400 g mushroom"]`` -> ``"600 g"``. Units keep the
    order in which they were first seen; fragments such as ``"1-2"`` trail the
    sums. Lines without any leading amount ("Salt, to taste") add nothing.
    """
    totals: dict = {}
    fragments: List[str] = []
    for line in lines:
        parsed = parse_leading_amount(line)
        if parsed is None:
            fragment = amount_fragment(line)
            if fragment and fragment not in fragments:
                fragments.append(fragment)
            continue
        totals[parsed.unit] = totals.get(parsed.unit, Decimal(0)) + parsed.quantity

    parts = [f"{format_quantity(total)} {unit_label(unit, total)}".strip() for unit, total in totals.items()]
    parts.extend(fragments)
    return " + ".join(parts) if parts else None
