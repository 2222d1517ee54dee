from .inventory import Inventory, InventoryPage
from .inventory_item import InventoryItem, Description, DescriptionKey, ItemTag
from .inventory_context import InventoryAppStats, InventoryContext
from .filters import ItemFilter, all_of, is_tradable, is_marketable, has_amount, has_description, by_name

__all__ = [
    "Inventory",
    "InventoryPage",
    "InventoryItem",
    "Description",
    "DescriptionKey",
    "ItemTag",
    "InventoryAppStats",
    "InventoryContext",
    "ItemFilter",
    "all_of",
    "is_tradable",
    "is_marketable",
    "has_amount",
    "has_description",
    "by_name"
]
