"""Persistence interfaces required by the orchestration services.

Lookups return ``None`` when the record does not exist; ownership is checked
by the caller.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from recipe_pipeline.app.schemas.ai_config import UserAIConfig
from recipe_pipeline.app.schemas.recipe import Recipe
from recipe_pipeline.app.schemas.shopping_list import ShoppingList, ShoppingListItem
from recipe_pipeline.app.schemas.store_chain import StoreChain


class RecipeRepository(ABC):
    @abstractmethod
    async def get_by_id(self, recipe_id: str) -> Optional[Recipe]:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def save(self, recipe: Recipe) -> Recipe:  # pragma: no cover - interface
        raise NotImplementedError


class ShoppingListRepository(ABC):
    @abstractmethod
    async def get_by_id(self, list_id: str) -> Optional[ShoppingList]:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def add_items(self, list_id: str, items: List[ShoppingListItem]) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def update(self, shopping_list: ShoppingList) -> None:  # pragma: no cover - interface
        raise NotImplementedError


class StoreChainRepository(ABC):
    @abstractmethod
    async def get_chain(self, chain_id: str) -> Optional[StoreChain]:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def get_chain_by_name(self, name: str) -> Optional[StoreChain]:  # pragma: no cover - interface
        raise NotImplementedError


class AIConfigRepository(ABC):
    @abstractmethod
    async def get_default_config(self, user_id: str) -> Optional[UserAIConfig]:  # pragma: no cover - interface
        raise NotImplementedError
