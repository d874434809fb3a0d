"""Normalisation of raw model text into domain records.

Models are asked for bare JSON but routinely wrap it in prose or markdown
fences, so every parser first cleans the text and then slices out the
outermost JSON value before validating it.
"""

import json
import logging
import re
from typing import Any, List, Optional, Sequence

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from recipe_pipeline.app.core.errors import MalformedModelResponseError, RecipeTitleMissingError
from recipe_pipeline.app.schemas.recipe import Instruction, Nutrition, Recipe
from recipe_pipeline.app.schemas.shopping_list import Category
from recipe_pipeline.app.services.ingredient_parser import parse_ingredient_text

logger = logging.getLogger(__name__)


def _strip_invalid_control_chars(s: str) -> str:
    """Remove ASCII control chars that frequently break json.loads (except \n, \r, \t)."""
    return re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F]", "", s)


def _strip_code_fence(text: str) -> str:
    txt = text.strip()
    if txt.startswith("```"):
        txt = re.sub(r"^```[a-zA-Z0-9_-]*\s*", "", txt, count=1)
        txt = re.sub(r"\s*```$", "", txt, count=1).strip()
    return txt


def _clean(raw: Optional[str]) -> str:
    if not isinstance(raw, str):
        raise MalformedModelResponseError("model returned no text")
    return _strip_code_fence(_strip_invalid_control_chars(raw))


def _slice(text: str, opener: str, closer: str) -> str:
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end == -1 or end < start:
        kind = "object" if opener == "{" else "array"
        raise MalformedModelResponseError(f"no JSON {kind} found in response")
    return text[start : end + 1]


def _loads(fragment: str) -> Any:
    try:
        return json.loads(fragment)
    except json.JSONDecodeError as exc:
        raise MalformedModelResponseError(f"failed to parse JSON response: {exc.msg}") from exc


class _ModelIngredient(BaseModel):
    model_config = ConfigDict(extra="ignore")

    description: str = ""


class _ModelInstruction(BaseModel):
    model_config = ConfigDict(extra="ignore")

    step_number: Optional[int] = Field(None, validation_alias=AliasChoices("stepNumber", "step_number", "step"))
    description: str = Field("", validation_alias=AliasChoices("description", "instruction", "text"))


class _ModelNutrition(BaseModel):
    model_config = ConfigDict(extra="ignore")

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0
    saturated_fat: float = Field(0.0, validation_alias=AliasChoices("saturatedFat", "saturated_fat"))
    cholesterol: float = 0.0
    sodium: float = 0.0

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_zero(cls, value):
        return 0.0 if value is None else value


class _ModelRecipe(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    servings: Optional[int] = None
    prep_time: Optional[int] = Field(None, validation_alias=AliasChoices("prepTime", "prep_time"))
    cook_time: Optional[int] = Field(None, validation_alias=AliasChoices("cookTime", "cook_time"))
    ingredients: List[_ModelIngredient] = Field(default_factory=list)
    instructions: List[_ModelInstruction] = Field(default_factory=list)
    notes: Optional[str] = None
    nutrition: Optional[_ModelNutrition] = None

    @field_validator("servings", "prep_time", "cook_time", mode="before")
    @classmethod
    def _leading_integer(cls, value):
        # "4 servings", "30 min", 4.0
        if isinstance(value, str):
            m = re.search(r"\d+", value)
            return int(m.group()) if m else None
        if isinstance(value, float):
            return int(round(value))
        return value

    @field_validator("ingredients", mode="before")
    @classmethod
    def _plain_ingredient_lines(cls, value):
        if isinstance(value, list):
            return [{"description": v} if isinstance(v, str) else v for v in value]
        return value

    @field_validator("instructions", mode="before")
    @classmethod
    def _plain_instruction_lines(cls, value):
        if isinstance(value, list):
            return [{"description": v} if isinstance(v, str) else v for v in value]
        return value


_instruction_list = TypeAdapter(List[_ModelInstruction])


def _number_instructions(items: Sequence[_ModelInstruction]) -> List[Instruction]:
    # Model-supplied step numbers are kept; gaps are filled from position.
    return [
        Instruction(
            step_number=item.step_number if item.step_number and item.step_number > 0 else idx + 1,
            instruction=item.description.strip(),
        )
        for idx, item in enumerate(items)
    ]


def parse_recipe_response(raw: str) -> Recipe:
    """Build a :class:`Recipe` from the recipe-prompt response."""
    data = _loads(_slice(_clean(raw), "{", "}"))
    if isinstance(data, dict) and isinstance(data.get("recipe"), dict):
        data = data["recipe"]
    try:
        parsed = _ModelRecipe.model_validate(data)
    except ValidationError as exc:
        raise MalformedModelResponseError(
            f"response does not match recipe structure ({exc.error_count()} errors)"
        ) from exc

    if not (parsed.title or "").strip():
        raise RecipeTitleMissingError()

    nutrition = None
    if parsed.nutrition is not None:
        nutrition = Nutrition(per_serving=True, **parsed.nutrition.model_dump())

    recipe = Recipe(
        title=parsed.title,
        description=(parsed.description or "").strip(),
        servings=parsed.servings or 0,
        prep_time=parsed.prep_time or 0,
        cook_time=parsed.cook_time or 0,
        notes=(parsed.notes or "").strip(),
        ingredients=[
            parse_ingredient_text(ing.description)
            for ing in parsed.ingredients
            if ing.description.strip()
        ],
        instructions=_number_instructions(parsed.instructions),
        nutrition=nutrition,
    )
    logger.debug(
        "Normalized recipe %r: %d ingredients, %d steps",
        recipe.title,
        len(recipe.ingredients),
        len(recipe.instructions),
    )
    return recipe


def parse_instructions_response(raw: str) -> List[Instruction]:
    data = _loads(_slice(_clean(raw), "[", "]"))
    try:
        items = _instruction_list.validate_python(data)
    except ValidationError as exc:
        raise MalformedModelResponseError(
            f"response does not match instruction structure ({exc.error_count()} errors)"
        ) from exc
    return _number_instructions(items)


def parse_categories_response(raw: str, items: Sequence[str]) -> List[Category]:
    """Read category labels for ``items``.

    Accepts the requested ``{"item": "category"}`` mapping, looked up per item
    (exact, then case-insensitive), or a positional array of labels. An array
    is returned as-is and may be shorter than ``items``.
    """
    text = _clean(raw)
    obj_start = text.find("{")
    arr_start = text.find("[")

    if obj_start != -1 and (arr_start == -1 or obj_start < arr_start):
        mapping = _loads(_slice(text, "{", "}"))
        if not isinstance(mapping, dict):
            raise MalformedModelResponseError("categorisation response is not an object")
        folded = {str(k).strip().lower(): v for k, v in mapping.items()}
        categories = []
        for item in items:
            label = mapping.get(item)
            if label is None:
                label = folded.get(item.strip().lower())
            categories.append(Category.coerce(label))
        return categories

    labels = _loads(_slice(text, "[", "]"))
    if not isinstance(labels, list):
        raise MalformedModelResponseError("categorisation response is not an array")
    return [Category.coerce(label) for label in labels]
