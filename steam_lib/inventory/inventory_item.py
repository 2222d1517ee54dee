from dataclasses import dataclass, field
from typing import NamedTuple, Optional


class DescriptionKey(NamedTuple):
    class_id: int
    instance_id: int


class ItemTag(NamedTuple):
    category: str
    internal_name: str
    localized_category_name: str
    localized_tag_name: str


@dataclass(frozen=True)
class Description:
    app_id: int
    class_id: int
    instance_id: int
    name: str = ""
    market_name: str = ""
    market_hash_name: str = ""
    type: str = ""
    icon_url: str = ""
    name_color: str = ""
    background_color: str = ""
    tradable: bool = False
    marketable: bool = False
    commodity: bool = False
    market_tradable_restriction: int = 0
    market_marketable_restriction: int = 0
    has_owner_descriptions: bool = False  # Для определения предметов с временным ограничением
    tags: tuple[ItemTag, ...] = ()

    @property
    def key(self) -> DescriptionKey:
        return DescriptionKey(self.class_id, self.instance_id)


@dataclass(frozen=True)
class InventoryItem:
    app_id: int
    context_id: int
    asset_id: int
    class_id: int
    instance_id: int
    amount: int
    # Общее описание страницы, None если Steam его не вернул
    description: Optional[Description] = field(default=None, compare=False)

    @property
    def key(self) -> DescriptionKey:
        return DescriptionKey(self.class_id, self.instance_id)

    @property
    def name(self) -> str:
        return self.description.name if self.description else ""

    @property
    def market_hash_name(self) -> str:
        return self.description.market_hash_name if self.description else ""

    @property
    def tradable(self) -> bool:
        return bool(self.description and self.description.tradable)

    @property
    def marketable(self) -> bool:
        return bool(self.description and self.description.marketable)

    @property
    def has_owner_descriptions(self) -> bool:
        return bool(self.description and self.description.has_owner_descriptions)
