from dataclasses import dataclass, field


@dataclass
class InventoryContext:
    id: int
    asset_count: int = 0
    name: str = ""


@dataclass
class InventoryAppStats:
    app_id: int
    name: str = ""
    asset_count: int = 0
    icon: str = ""
    link: str = ""
    inventory_logo: str = ""
    trade_permissions: str = ""
    contexts: dict[str, InventoryContext] = field(default_factory=dict)
