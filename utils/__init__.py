from .utils import is_str_int, to_uint
from .web_utils import api_request, decode_json

__all__ = [
    "is_str_int",
    "to_uint",
    "api_request",
    "decode_json"
]
