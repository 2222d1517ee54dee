from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class MarketItemPriceOverview:
    success: bool
    lowest_price: str = ""
    median_price: str = ""
    volume: str = ""

    @property
    def sales_per_day(self) -> int:
        return int(self.volume.replace(",", "")) if self.volume else 0


@dataclass
class MarketSellResponse:
    success: bool
    requires_confirmation: int = 0
    needs_mobile_confirmation: bool = False
    needs_email_confirmation: bool = False
    email_domain: str = ""
    message: str = ""


@dataclass
class MarketBuyOrderResponse:
    err_code: int
    message: str = ""  # Заполняется, если err_code != 1
    order_id: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.err_code == 1


@dataclass
class Listing:
    listing_id: str
    time_created: int = 0
    price: int = 0
    fee: int = 0
    currency_id: str = ""
    status: int = 0
    active: int = 0
    steamid_lister: str = ""
    asset: dict[str, Any] = field(default_factory=dict)

    @property
    def market_hash_name(self) -> str:
        return self.asset.get("market_hash_name", "")

    @classmethod
    def from_json(cls, data: dict) -> "Listing":
        return cls(
            listing_id=str(data["listingid"]),
            time_created=int(data.get("time_created") or 0),
            price=int(data.get("price") or 0),
            fee=int(data.get("fee") or 0),
            currency_id=str(data.get("currencyid", "")),
            status=int(data.get("status") or 0),
            active=int(data.get("active") or 0),
            steamid_lister=str(data.get("steamid_lister", "")),
            asset=data.get("asset") or {}
        )


@dataclass
class BuyOrder:
    buy_order_id: int
    app_id: int = 0
    hash_name: str = ""
    price: int = 0
    quantity: int = 0
    quantity_remaining: int = 0

    @classmethod
    def from_json(cls, data: dict) -> "BuyOrder":
        return cls(
            buy_order_id=int(data["buy_orderid"]),
            app_id=int(data.get("appid") or 0),
            hash_name=data.get("hash_name", ""),
            price=int(data.get("price") or 0),
            quantity=int(data.get("quantity") or 0),
            quantity_remaining=int(data.get("quantity_remaining") or 0)
        )


@dataclass
class MyListings:
    success: bool
    page_size: int = 0
    total_count: int = 0
    start: int = 0
    num_active_listings: int = 0
    listings: list[Listing] = field(default_factory=list)
    listings_on_hold: list[Listing] = field(default_factory=list)
    listings_to_confirm: list[Listing] = field(default_factory=list)
    buy_orders: list[BuyOrder] = field(default_factory=list)


@dataclass
class MarketItem:
    name: str
    hash_name: str
    sell_listings: int = 0
    sell_price: int = 0
    sell_price_text: str = ""
    sale_price_text: str = ""
    app_icon: str = ""
    app_name: str = ""


@dataclass
class MarketSearchResult:
    success: bool
    start: int = 0
    page_size: int = 0
    total_count: int = 0
    results: list[MarketItem] = field(default_factory=list)
