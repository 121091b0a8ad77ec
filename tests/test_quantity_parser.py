from decimal import Decimal

from mise_recipes.app.services.quantity_parser import (
    ParsedAmount,
    format_quantity,
    parse_leading_amount,
    parse_quantity_display,
    summarize_amounts,
)


def test_parse_quantity_valid():
    assert parse_quantity_display("1") == Decimal("1")
    assert parse_quantity_display("0.5") == Decimal("0.5")
    assert parse_quantity_display("1/2") == Decimal("0.5")
    assert parse_quantity_display("1 1/2") == Decimal("1.5")
    assert parse_quantity_display("¾") == Decimal("0.75")


def test_parse_quantity_invalid():
    assert parse_quantity_display(None) is None
    assert parse_quantity_display("") is None
    assert parse_quantity_display("   ") is None
    assert parse_quantity_display("1/0") is None
    assert parse_quantity_display("abc") is None


def test_parse_leading_amount():
    assert parse_leading_amount("200g mushrooms") == ParsedAmount(Decimal("200"), "g")
    assert parse_leading_amount("1 1/2 cups flour") == ParsedAmount(Decimal("1.5"), "cup")
    assert parse_leading_amount("3 eggs") == ParsedAmount(Decimal("3"), "")
    assert parse_leading_amount("2 Tablespoons butter") == ParsedAmount(Decimal("2"), "tbsp")
    assert parse_leading_amount("salt to taste") is None
    assert parse_leading_amount("2cm piece ginger") is None


def test_format_quantity():
    assert format_quantity(Decimal("600")) == "600"
    assert format_quantity(Decimal("1.50")) == "1.5"
    assert format_quantity(Decimal(1) / Decimal(3)) == "0.33"


def test_summarize_amounts_sums_per_unit():
    assert summarize_amounts(["200g mushrooms", "400g mushroom"]) == "600 g"
    assert summarize_amounts(["1 cup milk", "250 ml milk", "1/2 cup milk"]) == "1.5 cups + 250 ml"


def test_summarize_amounts_keeps_unparsed_amount_fragments():
    assert summarize_amounts(["2 onions", "1-2 onions"]) == "2 + 1-2"
    assert summarize_amounts(["2-3 cups flour", "1 cup flour", "1½ cups flour"]) == "2.5 cups + 2-3 cups"


def test_summarize_amounts_ignores_lines_without_amounts():
    assert summarize_amounts(["2 onions", "half an onion"]) == "2"
    assert summarize_amounts(["Salt, to taste", "sea salt flakes"]) is None
    assert summarize_amounts(["pinch of salt"]) is None
    assert summarize_amounts([]) is None


def test_summarize_amounts_pluralizes_word_units():
    assert summarize_amounts(["2 cloves garlic, minced", "2 cloves garlic"]) == "4 cloves"
    assert summarize_amounts(["1 bunch coriander", "1 bunch coriander"]) == "2 bunches"
    assert summarize_amounts(["1 tbsp oil", "1 tbsp oil"]) == "2 tbsp"
    assert summarize_amounts(["1 can chickpeas"]) == "1 can"
