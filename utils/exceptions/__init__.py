from .steam_error import SteamError, TransportError, ProtocolError, DecodeError, CryptoError, InventoryError
from .web import TooManyRequestsError

__all__ = [
    "SteamError",
    "TransportError",
    "ProtocolError",
    "DecodeError",
    "CryptoError",
    "InventoryError",
    "TooManyRequestsError"
]
