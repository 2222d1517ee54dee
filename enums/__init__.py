from .config import Config
from .currency import Currency, WALLET_CURRENCY
from .urls import Urls

__all__ = [
    "Config",
    "Currency",
    "WALLET_CURRENCY",
    "Urls"
]
