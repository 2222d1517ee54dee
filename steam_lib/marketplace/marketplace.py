import re
import unicodedata
from typing import Any, Optional
from urllib.parse import quote

import requests
from bs4 import BeautifulSoup

from enums import Config, Currency, Urls, WALLET_CURRENCY
from steam_lib.inventory import InventoryItem
from steam_lib.marketplace.market_item_price import MarketItemPrice, parse_price_history_entry
from steam_lib.marketplace.market_responses import (
    MarketItemPriceOverview, MarketSellResponse, MarketBuyOrderResponse,
    MyListings, Listing, BuyOrder, MarketSearchResult, MarketItem
)
from tools import BasicLogger
from tools.rate_limiter import rate_limited
from utils import api_request, decode_json
from utils.exceptions import ProtocolError


class Marketplace(BasicLogger):
    def __init__(self, session: requests.Session, currency: Currency = Currency.USD,
                 country: str = "US", language: str = Config.LANGUAGE) -> None:
        """
        :param session: авторизованная сессия
        :param currency: валюта
        :param country: страна для цен
        """
        super().__init__(
            logger_name=f"{self.__class__.__name__}",
            dir_specify="market",
            file_name=f"{self.__class__.__name__}"
        )

        self.session = session
        self.currency = currency
        self.country = country
        self.language = language

    # region Prices
    @rate_limited(3)
    def get_price_overview(self, app_id: int, market_hash_name: str) -> MarketItemPriceOverview:
        params = {
            "appid": app_id,
            "country": self.country,
            "currency": int(self.currency),
            "market_hash_name": market_hash_name
        }
        data = self._get_json(Urls.MARKET_PRICE_OVERVIEW, params=params, headers={
            "Referer": f"{Urls.MARKET}/listings/{app_id}/{quote(market_hash_name)}"
        })
        return MarketItemPriceOverview(
            success=bool(data.get("success")),
            lowest_price=data.get("lowest_price", ""),
            median_price=data.get("median_price", ""),
            volume=data.get("volume", "")
        )

    @rate_limited(3)
    def get_price_history(self, app_id: int, market_hash_name: str) -> list[MarketItemPrice]:
        params = {
            "appid": app_id,
            "market_hash_name": market_hash_name
        }
        data = self._get_json(Urls.MARKET_PRICE_HISTORY, params=params)

        prices = data.get("prices")
        if not data.get("success") or not isinstance(prices, list):
            raise ProtocolError("Unable to load prices at this time", url=Urls.MARKET_PRICE_HISTORY)

        return [parse_price_history_entry(entry) for entry in prices]
    # endregion

    # region Orders
    @rate_limited(1)
    def sell_item(self, steam_id: str, item: InventoryItem, amount: int, price: int) -> MarketSellResponse:
        """
        :param price: цена, которую получит продавец, в минимальных единицах валюты
        """
        data = {
            'sessionid': self._session_id(),
            'appid': item.app_id,
            'contextid': item.context_id,
            'assetid': item.asset_id,
            'amount': amount,
            'price': price
        }
        response = self._post_json(f"{Urls.MARKET}/sellitem/", data, headers={
            "Referer": f"{Urls.PROFILES}/{steam_id}/inventory/"
        })
        result = MarketSellResponse(
            success=bool(response.get("success")),
            requires_confirmation=int(response.get("requires_confirmation") or 0),
            needs_mobile_confirmation=bool(response.get("needs_mobile_confirmation")),
            needs_email_confirmation=bool(response.get("needs_email_confirmation")),
            email_domain=response.get("email_domain") or "",
            message=response.get("message") or ""
        )
        self.logger.info(f"Продажа {item.asset_id} '{item.market_hash_name}' ({price}): success={result.success}")
        return result

    @rate_limited(1)
    def place_buy_order(self, app_id: int, market_hash_name: str, price: float, quantity: int) -> MarketBuyOrderResponse:
        """
        :param price: цена за единицу в валюте кошелька
        """
        data = {
            'sessionid': self._session_id(),
            'currency': int(self.currency),
            'appid': app_id,
            'market_hash_name': market_hash_name,
            'price_total': round(price * 100 * quantity),
            'quantity': quantity
        }
        response = self._post_json(f"{Urls.MARKET}/createbuyorder/", data, headers={
            "Referer": f"{Urls.MARKET}/listings/{app_id}/{quote(market_hash_name)}"
        })
        order_id = response.get("buy_orderid")
        result = MarketBuyOrderResponse(
            err_code=int(response.get("success") or 0),
            message=response.get("message") or "",
            order_id=int(order_id) if order_id else None
        )
        self.logger.info(f"Buy order '{market_hash_name}' ({price} x {quantity}): {result.err_code} {result.message}")
        return result

    @rate_limited(1)
    def cancel_buy_order(self, buy_order_id: int) -> None:
        data = {
            'sessionid': self._session_id(),
            'buy_orderid': buy_order_id
        }
        with api_request(
            self.session,
            "POST",
            f"{Urls.MARKET}/cancelbuyorder/",
            headers={
                "Referer": Urls.MARKET
            },
            data=data,
            logger=self.logger
        ):
            self.logger.info(f"Cancel buy order {buy_order_id}")

    @rate_limited(3)
    def get_my_listings(self, start: int = 0, count: int = 100) -> MyListings:
        params = {
            "start": start,
            "count": count,
            "norender": 1
        }
        data = self._get_json(Urls.MARKET_MY_LISTINGS, params=params)
        try:
            return MyListings(
                success=bool(data.get("success")),
                page_size=int(data.get("pagesize") or 0),
                total_count=int(data.get("total_count") or 0),
                start=int(data.get("start") or 0),
                num_active_listings=int(data.get("num_active_listings") or 0),
                listings=[Listing.from_json(i) for i in data.get("listings") or []],
                listings_on_hold=[Listing.from_json(i) for i in data.get("listings_on_hold") or []],
                listings_to_confirm=[Listing.from_json(i) for i in data.get("listings_to_confirm") or []],
                buy_orders=[BuyOrder.from_json(i) for i in data.get("buy_orders") or []]
            )
        except (KeyError, TypeError, ValueError) as ex:
            raise ProtocolError(f"Malformed listings response: {ex!r}", url=Urls.MARKET_MY_LISTINGS) from ex
    # endregion

    @rate_limited(3)
    def search_market_items(self, app_id: int, start: int = 0, count: int = 100) -> MarketSearchResult:
        params = {
            "norender": 1,
            "appid": app_id,
            "start": start,
            "count": count
        }
        data = self._get_json(Urls.MARKET_SEARCH, params=params)
        return MarketSearchResult(
            success=bool(data.get("success")),
            start=int(data.get("start") or 0),
            page_size=int(data.get("pagesize") or 0),
            total_count=int(data.get("total_count") or 0),
            results=[
                MarketItem(
                    name=item.get("name", ""),
                    hash_name=item.get("hash_name", ""),
                    sell_listings=int(item.get("sell_listings") or 0),
                    sell_price=int(item.get("sell_price") or 0),
                    sell_price_text=item.get("sell_price_text", ""),
                    sale_price_text=item.get("sale_price_text", ""),
                    app_icon=item.get("app_icon", ""),
                    app_name=item.get("app_name", "")
                )
                for item in data.get("results") or []
            ]
        )

    # region Wallet
    def get_wallet(self) -> str:
        with api_request(self.session, "GET", Urls.COMMUNITY, logger=self.logger) as response:
            soup = BeautifulSoup(response.content, "html.parser")

        wallet = ""
        for element in soup.select(".responsive_menu_user_wallet"):
            balance = element.find("b")
            if balance:
                wallet = balance.get_text(strip=True)

        if not wallet:
            raise ProtocolError("Failed to get wallet", url=Urls.COMMUNITY)
        return wallet

    @staticmethod
    def clean_price(price: str) -> tuple[str, str, Optional[Currency]]:
        """
        Разбор строки баланса вида "1 234,56₽".
        :return: число, символ валюты, ID валюты (None, если символ неизвестен)
        """
        currency_symbol = "".join(
            char for char in price
            if unicodedata.category(char).startswith("L") or unicodedata.category(char) == "Sc"
        ).strip()
        cleaned_price = re.sub(r"[^\d,.]", "", price)
        return cleaned_price, currency_symbol, WALLET_CURRENCY.get(currency_symbol)
    # endregion

    def _session_id(self) -> str:
        return self.session.cookies.get("sessionid", domain="steamcommunity.com")

    def _get_json(self, url: str, params: dict = None, headers: dict = None) -> dict[str, Any]:
        with api_request(self.session, "GET", url, params=params, headers=headers, logger=self.logger) as response:
            data = decode_json(response, url)
        if not isinstance(data, dict):
            raise ProtocolError(f"Unexpected response shape from {url}", url=url)
        return data

    def _post_json(self, url: str, data: dict, headers: dict = None) -> dict[str, Any]:
        with api_request(self.session, "POST", url, data=data, headers=headers, logger=self.logger) as response:
            result = decode_json(response, url)
        if not isinstance(result, dict):
            raise ProtocolError(f"Unexpected response shape from {url}", url=url)
        return result
