"""Dictionary-backed repositories for tests and the command-line tool.

Records are deep-copied on the way in and out so callers cannot mutate
stored state without going through the repository.
"""

from typing import Dict, Iterable, List, Optional
from uuid import uuid4

from recipe_pipeline.app.core.errors import NotFoundError
from recipe_pipeline.app.repositories.base import (
    AIConfigRepository,
    RecipeRepository,
    ShoppingListRepository,
    StoreChainRepository,
)
from recipe_pipeline.app.schemas.ai_config import UserAIConfig
from recipe_pipeline.app.schemas.recipe import Recipe
from recipe_pipeline.app.schemas.shopping_list import ShoppingList, ShoppingListItem
from recipe_pipeline.app.schemas.store_chain import StoreChain


class InMemoryRecipeRepository(RecipeRepository):
    def __init__(self, recipes: Iterable[Recipe] = ()):
        self._recipes: Dict[str, Recipe] = {}
        for recipe in recipes:
            self._store(recipe)

    def _store(self, recipe: Recipe) -> Recipe:
        if not recipe.id:
            recipe = recipe.model_copy(update={"id": uuid4().hex})
        self._recipes[recipe.id] = recipe.model_copy(deep=True)
        return recipe

    async def get_by_id(self, recipe_id: str) -> Optional[Recipe]:
        recipe = self._recipes.get(recipe_id)
        return recipe.model_copy(deep=True) if recipe else None

    async def save(self, recipe: Recipe) -> Recipe:
        return self._store(recipe)


class InMemoryShoppingListRepository(ShoppingListRepository):
    def __init__(self, lists: Iterable[ShoppingList] = ()):
        self._lists: Dict[str, ShoppingList] = {
            sl.id: sl.model_copy(deep=True) for sl in lists
        }

    async def get_by_id(self, list_id: str) -> Optional[ShoppingList]:
        sl = self._lists.get(list_id)
        return sl.model_copy(deep=True) if sl else None

    async def add_items(self, list_id: str, items: List[ShoppingListItem]) -> None:
        sl = self._lists.get(list_id)
        if sl is None:
            raise NotFoundError(f"shopping list {list_id} not found")
        sl.items.extend(item.model_copy(deep=True) for item in items)

    async def update(self, shopping_list: ShoppingList) -> None:
        if shopping_list.id not in self._lists:
            raise NotFoundError(f"shopping list {shopping_list.id} not found")
        self._lists[shopping_list.id] = shopping_list.model_copy(deep=True)


class InMemoryStoreChainRepository(StoreChainRepository):
    def __init__(self, chains: Iterable[StoreChain] = ()):
        self._chains: Dict[str, StoreChain] = {c.id: c for c in chains}

    async def get_chain(self, chain_id: str) -> Optional[StoreChain]:
        return self._chains.get(chain_id)

    async def get_chain_by_name(self, name: str) -> Optional[StoreChain]:
        wanted = name.strip().lower()
        for chain in self._chains.values():
            if chain.name.lower() == wanted:
                return chain
        return None


class InMemoryAIConfigRepository(AIConfigRepository):
    def __init__(self, configs: Iterable[UserAIConfig] = ()):
        self._configs: List[UserAIConfig] = list(configs)

    async def get_default_config(self, user_id: str) -> Optional[UserAIConfig]:
        for config in self._configs:
            if config.user_id == user_id and config.is_default:
                return config
        return None
