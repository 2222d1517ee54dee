from typing import Any, NamedTuple

from utils.exceptions import ProtocolError


class MarketItemPrice(NamedTuple):
    date: str
    price: float
    count: str


def parse_price_history_entry(entry: Any) -> MarketItemPrice:
    """
    Элемент pricehistory: ["Jul 02 2014 01: +0", 0.217, "1"] (дата, цена, количество).
    Любое отклонение от этой формы считается ошибкой протокола.
    """
    if not isinstance(entry, (list, tuple)) or len(entry) != 3:
        raise ProtocolError(f"Price history entry must be [date, price, count], got {entry!r}")

    date, price, count = entry
    if not isinstance(date, str):
        raise ProtocolError(f"Price history date must be a string, got {date!r}")
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise ProtocolError(f"Price history price must be a number, got {price!r}")
    if not isinstance(count, str):
        raise ProtocolError(f"Price history count must be a string, got {count!r}")

    return MarketItemPrice(date, float(price), count)
