from typing import Callable

from steam_lib.inventory.inventory_item import InventoryItem


ItemFilter = Callable[[InventoryItem], bool]


def all_of(*filters: ItemFilter) -> ItemFilter:
    """
    Фильтры проверяются по порядку, первый отказ прекращает проверку.
    Пустой набор пропускает всё.
    """
    def predicate(item: InventoryItem) -> bool:
        return all(item_filter(item) for item_filter in filters)
    return predicate


def is_tradable(item: InventoryItem) -> bool:
    return item.tradable


def is_marketable(item: InventoryItem) -> bool:
    return item.marketable


def has_amount(item: InventoryItem) -> bool:
    return item.amount > 0


def has_description(item: InventoryItem) -> bool:
    return item.description is not None


def by_name(*names: str) -> ItemFilter:
    wanted = frozenset(names)

    def predicate(item: InventoryItem) -> bool:
        return item.market_hash_name in wanted
    return predicate
