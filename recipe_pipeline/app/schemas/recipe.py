import enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class SourceType(str, enum.Enum):
    MANUAL = "MANUAL"
    URL = "URL"
    PDF = "PDF"
    IMAGE = "IMAGE"


class Ingredient(BaseModel):
    name: str = ""
    description: str = ""
    amount: float = 0.0
    unit: str = ""
    notes: str = ""


class Instruction(BaseModel):
    step_number: int
    instruction: str


class Nutrition(BaseModel):
    calories: float = 0.0
    per_serving: bool = True
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0
    saturated_fat: float = 0.0
    cholesterol: float = 0.0
    sodium: float = 0.0


class Recipe(BaseModel):
    id: Optional[str] = None
    user_id: Optional[str] = None
    title: str
    description: str = ""
    servings: int = 0
    prep_time: int = 0
    cook_time: int = 0
    notes: str = ""
    ingredients: List[Ingredient] = Field(default_factory=list)
    instructions: List[Instruction] = Field(default_factory=list)
    nutrition: Optional[Nutrition] = None
    source: Optional[str] = None
    source_type: SourceType = SourceType.MANUAL
    image_url: Optional[str] = None
    status: str = "draft"
    is_private: bool = False

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title is required")
        return value
