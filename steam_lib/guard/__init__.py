from .guard import generate_device_id, generate_confirmation_key
from .time_oracle import SteamTimeOracle
from .confirmations import (
    ConfirmationExecutor, ConfirmationType, ConfirmationAction, ConfirmationStep,
    ConfirmationTag, Confirmation, ConfirmationResult
)

__all__ = [
    "ConfirmationExecutor",
    "ConfirmationType",
    "ConfirmationAction",
    "ConfirmationStep",
    "ConfirmationTag",
    "Confirmation",
    "ConfirmationResult",
    "SteamTimeOracle",
    "generate_confirmation_key",
    "generate_device_id"
]
