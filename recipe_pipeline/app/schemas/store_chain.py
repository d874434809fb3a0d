from typing import List

from pydantic import BaseModel, Field

from recipe_pipeline.app.schemas.shopping_list import Category


class StoreSection(BaseModel):
    order: int
    name: str
    categories: List[Category] = Field(default_factory=list)


class StoreChain(BaseModel):
    id: str
    name: str
    country: str = ""
    layout: List[StoreSection] = Field(default_factory=list)
