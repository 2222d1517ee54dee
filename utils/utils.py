import re
from typing import Any


def is_str_int(s: str) -> bool:
    pattern = r'^-?\d+$'
    return bool(re.match(pattern, s))


def to_uint(value: Any) -> int:
    """
    Steam передаёт большинство идентификаторов числовыми строками.
    :raises ValueError: значение не является неотрицательным целым
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected unsigned integer, got {value!r}")
    if isinstance(value, int):
        result = value
    elif isinstance(value, str) and is_str_int(value):
        result = int(value)
    else:
        raise ValueError(f"Expected unsigned integer, got {value!r}")

    if result < 0:
        raise ValueError(f"Expected unsigned integer, got {value!r}")
    return result
