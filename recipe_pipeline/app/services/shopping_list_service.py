"""Shopping-list mutation and ordering."""

import logging
from typing import List, Optional, Sequence

from recipe_pipeline.app.core.deadline import run_with_deadline
from recipe_pipeline.app.core.errors import (
    InvalidRequestError,
    MalformedModelResponseError,
    ModelError,
    NotFoundError,
    RecipePipelineError,
    UnauthorizedError,
)
from recipe_pipeline.app.repositories.base import (
    AIConfigRepository,
    RecipeRepository,
    ShoppingListRepository,
    StoreChainRepository,
)
from recipe_pipeline.app.schemas.shopping_list import (
    Category,
    ShoppingList,
    ShoppingListItem,
    ShoppingListItemRequest,
    SortType,
)
from recipe_pipeline.app.schemas.store_chain import StoreChain
from recipe_pipeline.app.services.ai.models import ModelFactory
from recipe_pipeline.app.services.ai_preferences import ModelDefaults, resolve_model_preferences
from recipe_pipeline.app.services.store_layout import organize_items, reverse_items, sort_items

logger = logging.getLogger(__name__)


class ShoppingListService:
    def __init__(
        self,
        lists: ShoppingListRepository,
        recipes: RecipeRepository,
        store_chains: StoreChainRepository,
        model_factory: ModelFactory,
        ai_configs: AIConfigRepository,
        defaults: ModelDefaults,
    ):
        self.lists = lists
        self.recipes = recipes
        self.store_chains = store_chains
        self.model_factory = model_factory
        self.ai_configs = ai_configs
        self.defaults = defaults

    async def _owned_list(self, user_id: str, list_id: str) -> ShoppingList:
        shopping_list = await self.lists.get_by_id(list_id)
        if shopping_list is None:
            raise NotFoundError(f"shopping list {list_id} not found")
        if shopping_list.user_id != user_id:
            raise UnauthorizedError(f"shopping list {list_id} belongs to another user")
        return shopping_list

    async def _chain(self, chain_id: str) -> StoreChain:
        chain = await self.store_chains.get_chain(chain_id)
        if chain is None:
            raise NotFoundError(f"store chain {chain_id} not found")
        return chain

    async def _categorize(self, user_id: str, names: Sequence[str]) -> List[Category]:
        """Categorise ``names`` in one model call.

        Any model failure is logged and yields an empty list, which callers
        treat as OTHER for every item.
        """
        try:
            config = await self.ai_configs.get_default_config(user_id)
            prefs = resolve_model_preferences(config, self.defaults)
            model = self.model_factory.create_model(prefs.model_type, prefs.api_key)
            return await model.categorize_items(list(names))
        except (ModelError, MalformedModelResponseError) as exc:
            logger.warning("Failed to classify %d items, defaulting to OTHER: %s", len(names), exc)
            return []

    async def add_recipe_to_list(
        self,
        user_id: str,
        list_id: str,
        recipe_id: str,
        servings: float,
        timeout: Optional[float] = None,
    ) -> List[ShoppingListItem]:
        """Append a recipe's ingredients, scaled to ``servings``."""
        try:
            return await run_with_deadline(
                self._add_recipe_to_list(user_id, list_id, recipe_id, servings), timeout
            )
        except RecipePipelineError as exc:
            logger.warning("Adding recipe %s to list %s failed: %s", recipe_id, list_id, exc)
            raise exc.with_context(f"add recipe={recipe_id} list={list_id}")

    async def _add_recipe_to_list(
        self, user_id: str, list_id: str, recipe_id: str, servings: float
    ) -> List[ShoppingListItem]:
        if servings <= 0:
            raise InvalidRequestError("servings must be positive")
        await self._owned_list(user_id, list_id)

        recipe = await self.recipes.get_by_id(recipe_id)
        if recipe is None:
            raise NotFoundError(f"recipe {recipe_id} not found")
        if recipe.is_private and recipe.user_id != user_id:
            raise UnauthorizedError(f"recipe {recipe_id} is private")
        if recipe.servings <= 0:
            raise InvalidRequestError(f"recipe {recipe_id} has no serving count to scale from")

        scale = servings / recipe.servings
        names = [ing.name or ing.description for ing in recipe.ingredients]
        categories = await self._categorize(user_id, names) if names else []
        if names and len(categories) < len(names):
            logger.info("Received %d categories for %d items; rest set to OTHER", len(categories), len(names))

        items = [
            ShoppingListItem(
                list_id=list_id,
                recipe_id=recipe.id,
                name=name,
                amount=ing.amount * scale,
                unit=ing.unit,
                category=categories[i] if i < len(categories) else Category.OTHER,
                notes=ing.notes,
            )
            for i, (ing, name) in enumerate(zip(recipe.ingredients, names))
        ]
        await self.lists.add_items(list_id, items)
        logger.info("Added %d items from recipe %s to list %s", len(items), recipe_id, list_id)
        return items

    async def add_item(self, user_id: str, list_id: str, request: ShoppingListItemRequest) -> ShoppingListItem:
        await self._owned_list(user_id, list_id)
        category = request.category
        if category is None:
            categories = await self._categorize(user_id, [request.name])
            category = categories[0] if categories else Category.OTHER

        item = ShoppingListItem(
            list_id=list_id,
            name=request.name,
            amount=request.amount,
            unit=request.unit,
            category=category,
            notes=request.notes,
        )
        await self.lists.add_items(list_id, [item])
        return item

    async def get_sorted(
        self, user_id: str, list_id: str, sort_by: str = "name", direction: str = "asc"
    ) -> ShoppingList:
        shopping_list = await self._owned_list(user_id, list_id)
        sort_items(shopping_list.items, sort_by, direction)
        return shopping_list

    async def get_sorted_for_store(self, user_id: str, list_id: str, chain_id: str) -> ShoppingList:
        """Return the list in the chain's walking order without saving it."""
        shopping_list = await self._owned_list(user_id, list_id)
        organize_items(shopping_list.items, await self._chain(chain_id))
        return shopping_list

    async def sort_for_store(self, user_id: str, list_id: str, chain_id: str) -> ShoppingList:
        shopping_list = await self._owned_list(user_id, list_id)
        organize_items(shopping_list.items, await self._chain(chain_id))
        shopping_list.sort_type = SortType.STORE
        shopping_list.store_chain_id = chain_id
        await self.lists.update(shopping_list)
        return shopping_list

    async def get_sorted_by_store_name(
        self, user_id: str, list_id: str, store_name: str, direction: str = "asc"
    ) -> ShoppingList:
        shopping_list = await self._owned_list(user_id, list_id)
        chain = await self.store_chains.get_chain_by_name(store_name)
        if chain is None:
            raise NotFoundError(f"store chain {store_name!r} not found")
        organize_items(shopping_list.items, chain)
        if direction == "desc":
            reverse_items(shopping_list.items)
        return shopping_list
