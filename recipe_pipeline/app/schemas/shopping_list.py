import enum
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field


class Category(str, enum.Enum):
    PRODUCE = "PRODUCE"
    MEAT = "MEAT"
    DAIRY = "DAIRY"
    BAKERY = "BAKERY"
    PANTRY = "PANTRY"
    FROZEN = "FROZEN"
    BEVERAGES = "BEVERAGES"
    HOUSEHOLD = "HOUSEHOLD"
    OTHER = "OTHER"

    @classmethod
    def coerce(cls, value) -> "Category":
        """Map a free-form label onto a category, falling back to OTHER."""
        if isinstance(value, Category):
            return value
        if not isinstance(value, str):
            return cls.OTHER
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.OTHER


class SortType(str, enum.Enum):
    CATEGORY = "CATEGORY"
    STORE = "STORE"


def _new_id() -> str:
    return uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ShoppingListItem(BaseModel):
    id: str = Field(default_factory=_new_id)
    list_id: str
    recipe_id: Optional[str] = None
    name: str
    amount: float = 0.0
    unit: str = ""
    category: Category = Category.OTHER
    is_checked: bool = False
    notes: str = ""
    created_at: datetime = Field(default_factory=_utcnow)


class ShoppingList(BaseModel):
    id: str = Field(default_factory=_new_id)
    user_id: str
    name: str
    description: str = ""
    sort_type: SortType = SortType.CATEGORY
    store_chain_id: Optional[str] = None
    items: List[ShoppingListItem] = Field(default_factory=list)


class ShoppingListItemRequest(BaseModel):
    name: str
    amount: float = 0.0
    unit: str = ""
    category: Optional[Category] = None
    notes: str = ""
