from .too_many_requests_error import TooManyRequestsError

__all__ = [
    "TooManyRequestsError"
]
