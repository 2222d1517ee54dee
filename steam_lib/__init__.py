from .guard import ConfirmationExecutor, ConfirmationAction, ConfirmationType, SteamTimeOracle
from .inventory import Inventory, InventoryItem
from .marketplace import Marketplace

__all__ = [
    "ConfirmationExecutor",
    "ConfirmationAction",
    "ConfirmationType",
    "SteamTimeOracle",
    "Inventory",
    "InventoryItem",
    "Marketplace"
]
