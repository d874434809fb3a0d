"""Ordering of shopping-list items.

All sorts are stable, so items that compare equal keep their prior relative
order.
"""

from typing import Callable, Dict, List

from recipe_pipeline.app.schemas.shopping_list import Category, ShoppingListItem
from recipe_pipeline.app.schemas.store_chain import StoreChain


def section_order(chain: StoreChain) -> Dict[Category, int]:
    """Map each category to the order of the section that stocks it.

    A category listed in more than one section takes the last one seen.
    """
    order: Dict[Category, int] = {}
    for section in chain.layout:
        for category in section.categories:
            order[category] = section.order
    return order


def organize_items(items: List[ShoppingListItem], chain: StoreChain) -> None:
    """Sort ``items`` in place into the walking order of ``chain``.

    Categories the layout does not mention sort with key 0.
    """
    order = section_order(chain)
    items.sort(key=lambda item: order.get(item.category, 0))


_SORT_KEYS: Dict[str, Callable[[ShoppingListItem], object]] = {
    "name": lambda item: item.name,
    "category": lambda item: item.category.value,
    "amount": lambda item: item.amount,
    "checked": lambda item: item.is_checked,
    "created_at": lambda item: item.created_at,
}


def sort_items(items: List[ShoppingListItem], sort_by: str = "name", direction: str = "asc") -> None:
    key = _SORT_KEYS.get(sort_by, _SORT_KEYS["name"])
    items.sort(key=key, reverse=direction == "desc")


def reverse_items(items: List[ShoppingListItem]) -> None:
    items.reverse()
