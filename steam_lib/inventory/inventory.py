import json
import re
from typing import Any, NamedTuple, Optional, Sequence

import requests

from enums import Config, Urls
from steam_lib.inventory.filters import ItemFilter, all_of
from steam_lib.inventory.inventory_context import InventoryAppStats, InventoryContext
from steam_lib.inventory.inventory_item import InventoryItem, Description, DescriptionKey, ItemTag
from tools import BasicLogger
from utils import api_request, decode_json, to_uint
from utils.exceptions import ProtocolError, DecodeError, InventoryError


class InventoryPage(NamedTuple):
    items: list[InventoryItem]
    has_more: bool
    last_asset_id: Optional[int]  # Курсор следующей страницы
    total_inventory_count: int


class Inventory(BasicLogger):
    _app_context_pattern = re.compile(r"g_rgAppContextData\s*=\s*(\{.*?\}|\[.*?\]);", re.DOTALL)

    def __init__(self, session: requests.Session, language: str = Config.LANGUAGE) -> None:
        """
        :param session: авторизованная сессия
        :param language: язык описаний предметов
        """
        super().__init__(
            logger_name=f"{self.__class__.__name__}",
            dir_specify="inventory",
            file_name=f"{self.__class__.__name__}"
        )

        self.session = session
        self.language = language

    def get_inventory_page(
            self, steam_id: str, app_id: int, context_id: int,
            start_asset_id: Optional[int] = None, item_filter: Optional[ItemFilter] = None
    ) -> InventoryPage:
        url = f"{Urls.INVENTORY}/{steam_id}/{app_id}/{context_id}"
        params = {"l": self.language}
        # Первая страница без курсора и крупнее последующих
        if start_asset_id:
            params["start_assetid"] = str(start_asset_id)
            params["count"] = Config.INVENTORY_NEXT_PAGE_SIZE
        else:
            params["count"] = Config.INVENTORY_FIRST_PAGE_SIZE

        with api_request(self.session, "GET", url, params=params, logger=self.logger) as response:
            data = decode_json(response, url)

        if not isinstance(data, dict):
            raise ProtocolError(f"Unexpected inventory response shape from {url}", url=url)

        if not data.get("success"):
            error = data.get("error") or ""
            if error:
                self.logger.error(f"Ошибка при получении инвентаря {steam_id}/{app_id}/{context_id}: {error}")
                raise InventoryError(error, url=url)
            # Пустой инвентарь неотличим от сбоя Steam без текста ошибки
            self.logger.warning(f"success=0 без текста ошибки для {steam_id}/{app_id}/{context_id}, "
                                f"инвентарь считается пустым")
            return InventoryPage([], False, None, 0)

        descriptions = self._parse_descriptions(data.get("descriptions") or [], url)

        items = []
        for asset in data.get("assets") or []:
            item = self._parse_asset(asset, descriptions, url)
            if item_filter is None or item_filter(item):
                items.append(item)

        has_more = bool(data.get("more_items"))
        last_asset_id = None
        if has_more:
            last_asset_id = self._parse_cursor(data.get("last_assetid"), url)

        try:
            total_inventory_count = to_uint(data.get("total_inventory_count") or 0)
        except ValueError as ex:
            raise ProtocolError(f"Invalid total_inventory_count in {url}: {ex}", url=url) from ex

        return InventoryPage(items, has_more, last_asset_id, total_inventory_count)

    def get_inventory(
            self, steam_id: str, app_id: int, context_id: int,
            filters: ItemFilter | Sequence[ItemFilter] | None = None
    ) -> list[InventoryItem]:
        """
        Весь инвентарь по страницам. При ошибке на любой странице уже
        собранные предметы отбрасываются: неполный инвентарь легко принять за полный.
        """
        if filters is None or callable(filters):
            item_filter = filters
        else:
            item_filter = all_of(*filters)

        items: list[InventoryItem] = []
        start_asset_id = None
        pages = 0
        while True:
            page = self.get_inventory_page(steam_id, app_id, context_id, start_asset_id, item_filter)
            pages += 1
            items.extend(page.items)
            if not page.has_more:
                break
            start_asset_id = page.last_asset_id

        self.logger.info(f"Инвентарь {steam_id}/{app_id}/{context_id}: {len(items)} предметов, {pages} страниц")
        return items

    def get_app_contexts(self, steam_id: str) -> dict[str, InventoryAppStats]:
        url = f"{Urls.PROFILES}/{steam_id}/inventory/"
        with api_request(self.session, "GET", url, logger=self.logger) as response:
            text = response.text

        match = self._app_context_pattern.search(text)
        if not match:
            raise ProtocolError(f"g_rgAppContextData not found on {url}", url=url)

        try:
            raw_apps = json.loads(match.group(1))
        except ValueError as ex:
            raise DecodeError(f"Malformed g_rgAppContextData on {url}: {ex}", url=url) from ex

        if not raw_apps:
            return {}

        try:
            return self._parse_app_contexts(raw_apps)
        except (KeyError, TypeError, ValueError, AttributeError) as ex:
            raise ProtocolError(f"Malformed g_rgAppContextData on {url}: {ex!r}", url=url) from ex

    @staticmethod
    def _parse_app_contexts(raw_apps: dict) -> dict[str, InventoryAppStats]:
        result = {}
        for key, app in raw_apps.items():
            contexts = {
                context_key: InventoryContext(
                    id=to_uint(context.get("id", context_key)),
                    asset_count=to_uint(context.get("asset_count", 0)),
                    name=context.get("name", "")
                )
                for context_key, context in (app.get("rgContexts") or {}).items()
            }
            result[key] = InventoryAppStats(
                app_id=to_uint(app.get("appid", key)),
                name=app.get("name", ""),
                asset_count=to_uint(app.get("asset_count", 0)),
                icon=app.get("icon", ""),
                link=app.get("link", ""),
                inventory_logo=app.get("inventory_logo", ""),
                trade_permissions=app.get("trade_permissions", ""),
                contexts=contexts
            )
        return result

    @staticmethod
    def _parse_cursor(last_asset_id: Any, url: str) -> int:
        # Курсор 0 означает начало инвентаря, повторно его запрашивать нельзя
        try:
            cursor = to_uint(last_asset_id)
        except ValueError as ex:
            raise ProtocolError(f"more_items set but last_assetid is {last_asset_id!r}", url=url) from ex
        if cursor == 0:
            raise ProtocolError("more_items set but last_assetid is 0", url=url)
        return cursor

    @staticmethod
    def _parse_descriptions(raw_descriptions: list[dict], url: str) -> dict[DescriptionKey, Description]:
        descriptions = {}
        for raw in raw_descriptions:
            try:
                description = Description(
                    app_id=to_uint(raw.get("appid", 0)),
                    class_id=to_uint(raw["classid"]),
                    instance_id=to_uint(raw.get("instanceid", "0")),
                    name=raw.get("name", ""),
                    market_name=raw.get("market_name", ""),
                    market_hash_name=raw.get("market_hash_name", ""),
                    type=raw.get("type", ""),
                    icon_url=raw.get("icon_url", ""),
                    name_color=raw.get("name_color", ""),
                    background_color=raw.get("background_color", ""),
                    tradable=bool(raw.get("tradable")),
                    marketable=bool(raw.get("marketable")),
                    commodity=bool(raw.get("commodity")),
                    market_tradable_restriction=int(raw.get("market_tradable_restriction") or 0),
                    market_marketable_restriction=int(raw.get("market_marketable_restriction") or 0),
                    has_owner_descriptions="owner_descriptions" in raw,
                    tags=tuple(
                        ItemTag(
                            category=tag.get("category", ""),
                            internal_name=tag.get("internal_name", ""),
                            localized_category_name=tag.get("localized_category_name", ""),
                            localized_tag_name=tag.get("localized_tag_name", "")
                        )
                        for tag in raw.get("tags") or []
                    )
                )
            except (KeyError, TypeError, ValueError, AttributeError) as ex:
                raise ProtocolError(f"Malformed description in {url}: {ex!r}", url=url) from ex
            descriptions[description.key] = description
        return descriptions

    @staticmethod
    def _parse_asset(asset: dict, descriptions: dict[DescriptionKey, Description], url: str) -> InventoryItem:
        try:
            key = DescriptionKey(to_uint(asset["classid"]), to_uint(asset.get("instanceid", "0")))
            return InventoryItem(
                app_id=to_uint(asset["appid"]),
                context_id=to_uint(asset["contextid"]),
                asset_id=to_uint(asset["assetid"]),
                class_id=key.class_id,
                instance_id=key.instance_id,
                amount=to_uint(asset["amount"]),
                description=descriptions.get(key)
            )
        except (KeyError, TypeError, ValueError, AttributeError) as ex:
            raise ProtocolError(f"Malformed asset in {url}: {ex!r}", url=url) from ex
