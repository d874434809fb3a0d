import pytest

from recipe_pipeline.app.services.ingredient_parser import parse_ingredient_text


@pytest.mark.parametrize(
    "text, amount, unit, name, notes",
    [
        ("2 cups water", 2.0, "cups", "water", ""),
        ("1/2 tsp salt", 0.5, "tsp", "salt", ""),
        ("1.5 cups all purpose flour (sifted)", 1.5, "cups", "all purpose flour", "sifted"),
        ("3 tbsp. butter (softened, divided)", 3.0, "tbsp", "butter", "softened, divided"),
        ("1 1/2 cups milk", 1.5, "cups", "milk", ""),
        ("½ cup sugar", 0.5, "cup", "sugar", ""),
        ("8 fl oz cream", 8.0, "fl oz", "cream", ""),
        ("250g flour", 250.0, "g", "flour", ""),
    ],
)
def test_parse_ingredient_text(text, amount, unit, name, notes):
    ing = parse_ingredient_text(text)
    assert ing.amount == pytest.approx(amount)
    assert ing.unit == unit
    assert ing.name == name
    assert ing.notes == notes
    assert ing.description == text


def test_count_without_unit_keeps_name():
    ing = parse_ingredient_text("2 eggs")
    assert ing.amount == 2.0
    assert ing.unit == ""
    assert ing.name == "eggs"


def test_no_leading_quantity():
    ing = parse_ingredient_text("salt and pepper to taste")
    assert ing.amount == 0.0
    assert ing.unit == ""
    assert ing.name == "salt and pepper to taste"


def test_notes_without_quantity():
    ing = parse_ingredient_text("fresh basil (optional)")
    assert ing.amount == 0.0
    assert ing.name == "fresh basil"
    assert ing.notes == "optional"


def test_zero_denominator_does_not_raise():
    ing = parse_ingredient_text("1/0 cup x")
    assert ing.amount == 0.0
    assert ing.unit == "cup"
    assert ing.name == "x"


@pytest.mark.parametrize("text", ["", "   ", "(just notes)", "12"])
def test_degenerate_input_never_raises(text):
    parse_ingredient_text(text)
