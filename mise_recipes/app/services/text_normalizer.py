"""Line cleaning shared by URL, markdown and OCR ingestion."""

import html
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import List, NamedTuple, Optional, Tuple

FRACTION_MAP = {
    "¼": "1/4",
    "½": "1/2",
    "¾": "3/4",
    "⅓": "1/3",
    "⅔": "2/3",
    "⅛": "1/8",
    "⅜": "3/8",
    "⅝": "5/8",
    "⅞": "7/8",
}
FRACTION_GLYPHS = "".join(FRACTION_MAP.keys())

FRACTION_VALUES = {
    glyph: Decimal(value.split("/")[0]) / Decimal(value.split("/")[1])
    for glyph, value in FRACTION_MAP.items()
}

NOTE_PATTERN = re.compile(r"\(+\s*(note[^)]*)\)+", re.IGNORECASE)
_CHECKBOX = re.compile(r"^\s*\[\s*[xX]?\s*\]\s*")
_BULLET = re.compile(r"^\s*(?:[•·▪◦□☐☑■]|-|\*)\s+")
_LEADING_BOX = re.compile(r"^\s*[□☐☑■]\s*")
_BOX_GLYPHS = re.compile("[\u2610-\u2612\u25a0-\u25a9\u25aa\u25ab\u25fb\u25fc]")
_PAREN_COMMA = re.compile(r"\(\s*,\s*")
_EMPTY_PAREN = re.compile(r"\(\s*\)")
_SPACE_BEFORE_CLOSE = re.compile(r"\s+\)")
_MULTI_OPEN = re.compile(r"\({2,}")
_MULTI_CLOSE = re.compile(r"\){2,}")
_TRAILING_OPEN = re.compile(r"\(\s*$")
_LEADING_CLOSE = re.compile(r"^\s*\)")

NOTES_LINE = re.compile(r"^\s*notes?\b[:\s-]*", re.IGNORECASE)
METADATA_LINE = re.compile(
    r"^(?:course|cuisine|keyword|keywords|servings?|yield|author|calories|"
    r"prep(?:\s+time)?|cook(?:\s+time)?|total(?:\s+time)?|equipment)\b[:\s-]*",
    re.IGNORECASE,
)


class CleanedLine(NamedTuple):
    line: str
    notes: List[str]


class CleanedLines(NamedTuple):
    lines: List[str]
    notes: List[str]


def clean_text(text: str) -> str:
    """Normalize whitespace in text."""
    return re.sub(r"\s+", " ", text or "").strip()


def decode_entities(value: str) -> str:
    """Decode HTML entities and translate vulgar fraction glyphs to ASCII."""
    decoded = html.unescape(value or "")
    # "1½" -> "1 1/2" rather than "11/2"
    decoded = re.sub(rf"(\d)([{FRACTION_GLYPHS}])", r"\1 \2", decoded)
    for glyph, ascii_value in FRACTION_MAP.items():
        decoded = decoded.replace(glyph, ascii_value)
    return decoded


def balance_parentheses(value: str) -> str:
    open_count = value.count("(")
    close_count = value.count(")")
    if open_count == close_count:
        return value
    if open_count > close_count:
        return value + ")" * (open_count - close_count)
    trimmed = value
    for _ in range(close_count - open_count):
        trimmed = re.sub(r"\)\s*$", "", trimmed)
    return trimmed


def clean_line_base(line: str) -> str:
    cleaned = decode_entities(line)
    cleaned = _CHECKBOX.sub("", cleaned)
    cleaned = _BULLET.sub("", cleaned)
    cleaned = _LEADING_BOX.sub("", cleaned)
    cleaned = _BOX_GLYPHS.sub("", cleaned)
    cleaned = _PAREN_COMMA.sub("(", cleaned)
    cleaned = _EMPTY_PAREN.sub("", cleaned)
    cleaned = _SPACE_BEFORE_CLOSE.sub(")", cleaned)
    cleaned = _MULTI_OPEN.sub("(", cleaned)
    cleaned = _MULTI_CLOSE.sub(")", cleaned)
    cleaned = _TRAILING_OPEN.sub("", cleaned)
    cleaned = _LEADING_CLOSE.sub("", cleaned)
    return clean_text(balance_parentheses(cleaned))


def strip_note_text(value: str) -> str:
    return re.sub(r"^notes?[:\s-]*", "Note ", value.strip(), flags=re.IGNORECASE).strip()


def clean_ingredient_line(line: str) -> CleanedLine:
    """Clean one ingredient line, moving ``(note ...)`` annotations into notes."""
    base = clean_line_base(line)
    notes = [strip_note_text(match.group(1)) for match in NOTE_PATTERN.finditer(base)]
    cleaned = clean_text(NOTE_PATTERN.sub("", base))
    return CleanedLine(line=cleaned, notes=[note for note in notes if note])


def clean_ingredient_lines(lines: List[str]) -> CleanedLines:
    cleaned_lines: List[str] = []
    notes: List[str] = []
    for line in lines:
        result = clean_ingredient_line(line)
        if result.line:
            cleaned_lines.append(result.line)
        notes.extend(result.notes)
    return CleanedLines(lines=cleaned_lines, notes=notes)


def clean_instruction_lines(lines: List[str]) -> CleanedLines:
    """Clean instruction lines; metadata rows are dropped and note rows redirected."""
    cleaned_lines: List[str] = []
    notes: List[str] = []
    for line in lines:
        trimmed = clean_line_base(line)
        if not trimmed:
            continue
        if NOTES_LINE.match(trimmed):
            notes.append(strip_note_text(trimmed))
            continue
        if METADATA_LINE.match(trimmed):
            continue
        cleaned_lines.append(trimmed)
    return CleanedLines(lines=cleaned_lines, notes=notes)


def clean_text_lines(lines: List[str]) -> List[str]:
    return [cleaned for cleaned in (clean_line_base(line) for line in lines) if cleaned]


def parse_lines(value: str) -> List[str]:
    return [line.strip() for line in (value or "").split("\n") if line.strip()]


def parse_tags(value: str) -> List[str]:
    return [tag.strip() for tag in (value or "").split(",") if tag.strip()]


# --- metric conversion -----------------------------------------------------

_AMOUNT = rf"(?:\d+\s+\d+/\d+|\d+/\d+|\d+[{FRACTION_GLYPHS}]|\d+(?:\.\d+)?|[{FRACTION_GLYPHS}])"
_UNIT = (
    r"pounds?|lbs?\.?|ounces?|oz\.?|cups?|tablespoons?|tbsps?\.?|tbs\.?|teaspoons?|tsps?\.?"
)
MEASUREMENT_PATTERN = re.compile(
    rf"(?<![A-Za-z0-9/])({_AMOUNT})(?:\s*(?:-|–|—|to)\s*({_AMOUNT}))?\s*[- ]?\s*({_UNIT})\b\.?",
    re.IGNORECASE,
)

_UNIT_BASES = {
    "lb": "lb",
    "lbs": "lb",
    "pound": "lb",
    "pounds": "lb",
    "oz": "oz",
    "ounce": "oz",
    "ounces": "oz",
    "cup": "cup",
    "cups": "cup",
    "tbsp": "tbsp",
    "tbsps": "tbsp",
    "tbs": "tbsp",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "tsp": "tsp",
    "tsps": "tsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
}

GRAMS_PER_POUND = Decimal("453.59237")
GRAMS_PER_OUNCE = Decimal("28.349523125")
MILLILITRES_PER_UNIT = {"cup": Decimal(240), "tbsp": Decimal(15), "tsp": Decimal(5)}


def parse_measurement_amount(raw: str) -> Optional[Decimal]:
    """Parse "2", "1.5", "1/2", "1 1/2", "3½" or "½" into a Decimal."""
    value = (raw or "").strip()
    if not value:
        return None
    if value in FRACTION_VALUES:
        return FRACTION_VALUES[value]
    try:
        mixed = re.fullmatch(r"(\d+)\s+(\d+)/(\d+)", value)
        if mixed:
            denominator = Decimal(mixed.group(3))
            if denominator == 0:
                return None
            return Decimal(mixed.group(1)) + Decimal(mixed.group(2)) / denominator
        compact = re.fullmatch(rf"(\d+)([{FRACTION_GLYPHS}])", value)
        if compact:
            return Decimal(compact.group(1)) + FRACTION_VALUES[compact.group(2)]
        fraction = re.fullmatch(r"(\d+)/(\d+)", value)
        if fraction:
            denominator = Decimal(fraction.group(2))
            if denominator == 0:
                return None
            return Decimal(fraction.group(1)) / denominator
        return Decimal(value)
    except InvalidOperation:
        return None


def parse_merged_fraction_as_mixed(raw: str, max_value: Decimal) -> Optional[Decimal]:
    """Read "31/2" as 3 1/2 when the plain reading cannot start a range ending at ``max_value``."""
    match = re.fullmatch(r"(\d+)/(\d+)", (raw or "").strip())
    if not match:
        return None
    numerator_digits = match.group(1)
    denominator = int(match.group(2))
    if len(numerator_digits) < 2 or denominator <= 0:
        return None
    whole = int(numerator_digits[:-1])
    numerator = int(numerator_digits[-1])
    if numerator >= denominator:
        return None
    candidate = Decimal(whole) + Decimal(numerator) / Decimal(denominator)
    return candidate if candidate <= max_value else None


def _round(value: Decimal, decimals: int) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


def format_amount(value: Decimal) -> str:
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f")


def convert_to_metric_amount(amount: Decimal, unit_base: str) -> Optional[Tuple[Decimal, str]]:
    if unit_base == "lb":
        grams = amount * GRAMS_PER_POUND
        if grams < 1000:
            return _round(grams, 0), "g"
        return _round(grams / 1000, 1), "kg"
    if unit_base == "oz":
        return _round(amount * GRAMS_PER_OUNCE, 0), "g"
    if unit_base in MILLILITRES_PER_UNIT:
        millilitres = amount * MILLILITRES_PER_UNIT[unit_base]
        if millilitres < 1000:
            return _round(millilitres, 0), "ml"
        return _round(millilitres / 1000, 1), "l"
    return None


def _convert_measurement(match: re.Match) -> str:
    raw_first, raw_second, raw_unit = match.groups()
    original = match.group(0)

    first = parse_measurement_amount(raw_first)
    if first is None:
        return original
    second = parse_measurement_amount(raw_second) if raw_second else None
    if second is not None and first > second:
        merged = parse_merged_fraction_as_mixed(raw_first, second)
        if merged is not None:
            first = merged

    unit_base = _UNIT_BASES.get(re.sub(r"[.\s]", "", raw_unit.lower()))
    if not unit_base:
        return original
    first_converted = convert_to_metric_amount(first, unit_base)
    if first_converted is None:
        return original
    first_amount, unit = first_converted
    if second is None:
        return f"{format_amount(first_amount)} {unit}"

    second_converted = convert_to_metric_amount(second, unit_base)
    if second_converted is None or second_converted[1] != unit:
        return original
    return f"{format_amount(first_amount)}-{format_amount(second_converted[0])} {unit}"


def convert_ingredient_measurement_to_metric(line: str) -> str:
    """Convert every pound/ounce/cup/spoon measurement in a line to metric.

    A measurement counts only when the character before it is not a letter, digit or
    slash, so "1 can (14-oz) tomatoes" becomes "1 can (397 g) tomatoes" while "x2 cups"
    is left alone. Ranges are converted end by end and kept only when both ends land
    on the same metric unit.
    """
    if not line:
        return line
    return MEASUREMENT_PATTERN.sub(_convert_measurement, line)
