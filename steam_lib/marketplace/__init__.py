from .marketplace import Marketplace
from .market_item_price import MarketItemPrice, parse_price_history_entry
from .market_responses import (
    MarketItemPriceOverview, MarketSellResponse, MarketBuyOrderResponse,
    MyListings, Listing, BuyOrder, MarketSearchResult, MarketItem
)

__all__ = [
    "Marketplace",
    "MarketItemPrice",
    "parse_price_history_entry",
    "MarketItemPriceOverview",
    "MarketSellResponse",
    "MarketBuyOrderResponse",
    "MyListings",
    "Listing",
    "BuyOrder",
    "MarketSearchResult",
    "MarketItem"
]
