from .service_limit import ServiceLimit
from .dec_rate_limited import rate_limited

__all__ = [
    "ServiceLimit",
    "rate_limited"
]
