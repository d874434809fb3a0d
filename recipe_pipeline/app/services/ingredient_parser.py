"""Decomposition of free-text ingredient lines.

Grammar: ``[quantity][unit] name [(notes)]``. The parser never fails; fields
it cannot recover keep their zero value.
"""

import re

from recipe_pipeline.app.schemas.recipe import Ingredient
from recipe_pipeline.app.services.quantity_parser import normalize_fractions, parse_quantity

_QUANTITY_RE = re.compile(
    r"^\s*(?P<quantity>\d+\s+\d+/\d+|\d+(?:\.\d+)?/\d+(?:\.\d+)?|\d+(?:\.\d+)?|\.\d+)"
    r"(?=\s|[A-Za-z]|$)\s*(?P<rest>.*)$"
)
_NOTES_RE = re.compile(r"^(?P<head>[^(]*)\((?P<notes>.*)\)\s*$")
_UNIT_TOKEN_RE = re.compile(r"^([A-Za-z]+)\.?$")

# Two-token units; the first token alone would be ambiguous.
COMPOUND_UNITS = {
    ("fl", "oz"),
    ("fluid", "ounce"),
    ("fluid", "ounces"),
    ("heaping", "tablespoon"),
    ("heaping", "tablespoons"),
    ("heaping", "teaspoon"),
    ("heaping", "teaspoons"),
    ("level", "tablespoon"),
    ("level", "teaspoon"),
}


def _split_unit(tokens: list[str]) -> tuple[str, list[str]]:
    if len(tokens) >= 3:
        first = _UNIT_TOKEN_RE.match(tokens[0])
        second = _UNIT_TOKEN_RE.match(tokens[1])
        if first and second:
            pair = (first.group(1).lower(), second.group(1).lower())
            if pair in COMPOUND_UNITS:
                return f"{first.group(1)} {second.group(1)}", tokens[2:]
    if len(tokens) >= 2:
        m = _UNIT_TOKEN_RE.match(tokens[0])
        if m:
            return m.group(1), tokens[1:]
    return "", tokens


def parse_ingredient_text(text: str) -> Ingredient:
    """Split ``"2 cups flour (sifted)"`` into amount, unit, name and notes.

    A unit is only taken when a name remains after it, so ``"2 eggs"`` yields
    name ``eggs`` with no unit. Lines without a leading quantity are returned
    whole as the name.
    """
    description = (text or "").strip()
    if not description:
        return Ingredient(description=description)

    head = description
    notes = ""
    m = _NOTES_RE.match(description)
    if m:
        head = m.group("head")
        notes = m.group("notes").strip()

    head = normalize_fractions(head).strip()
    amount = 0.0
    unit = ""
    name = head

    m = _QUANTITY_RE.match(head)
    if m:
        amount = parse_quantity(m.group("quantity"))
        unit, name_tokens = _split_unit(m.group("rest").split())
        name = " ".join(name_tokens)

    return Ingredient(
        name=name.strip(),
        description=description,
        amount=amount,
        unit=unit,
        notes=notes,
    )
