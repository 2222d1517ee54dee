import os
from collections import Counter

import requests
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
from rich.text import Text
from tqdm import tqdm

from enums import Config, Currency
from steam_lib.guard import ConfirmationExecutor, ConfirmationAction, Confirmation
from steam_lib.inventory import Inventory, is_tradable, is_marketable
from steam_lib.marketplace import Marketplace
from tools import rich_auto_text
from tools.console import BasicConsole, command


def create_session() -> requests.Session:
    """
    Сессия собирается из cookies, полученных вне программы (.env):
    вход в аккаунт здесь не выполняется.
    """
    session = requests.Session()
    for name, env_name in (("steamLoginSecure", "STEAM_LOGIN_SECURE"), ("sessionid", "SESSION_ID")):
        value = os.getenv(env_name)
        if value:
            session.cookies.set(name, value, domain="steamcommunity.com")
    return session


class App(BasicConsole):
    def __init__(self) -> None:
        load_dotenv()
        self.console = Console()
        self.session = create_session()
        self.steam_id = os.getenv("STEAM_ID", "")

        self.inventory = Inventory(self.session)
        self.marketplace = Marketplace(self.session, Currency.from_setting(os.getenv("CURRENCY", "USD")))
        self.confirmation_executor = ConfirmationExecutor(
            os.getenv("IDENTITY_SECRET", ""),
            self.steam_id,
            self.session,
            device_id=os.getenv("DEVICE_ID") or None
        )

    # region Inventory
    @command(
        aliases=["inv", "inventory"],
        description="Вывести инвентарь (по умолчанию текущего аккаунта)",
        usage="inv <app_id> <context_id> [-t] [-m] [-u STEAM_ID]",
        flags={
            "tradable_only": (["-t"], "Только предметы, доступные для обмена"),
            "marketable_only": (["-m"], "Только предметы, доступные для продажи"),
            "steam_id": (["-u"], "Чужой Steam ID")
        }
    )
    def _show_inventory(self, app_id: int, context_id: int, tradable_only: bool = False,
                        marketable_only: bool = False, steam_id: str = "") -> None:
        filters = []
        if tradable_only:
            filters.append(is_tradable)
        if marketable_only:
            filters.append(is_marketable)

        items = self.inventory.get_inventory(steam_id or self.steam_id, app_id, context_id, filters)

        counts = Counter()
        for item in items:
            counts[item.market_hash_name or f"{item.class_id}_{item.instance_id}"] += item.amount

        table = Table(title=f"Inventory {app_id}/{context_id}")
        table.add_column("Item", style="cyan")
        table.add_column("Amount", justify="right")
        for name, amount in counts.most_common():
            table.add_row(name, rich_auto_text(amount))
        self.console.print(table)
        self.console.print(Text(f"Всего записей: {len(items)}"))

    @command(
        aliases=["contexts"],
        description="Вывести игры и контексты инвентаря",
        usage="contexts [steam_id]"
    )
    def _show_contexts(self, steam_id: str = "") -> None:
        apps = self.inventory.get_app_contexts(steam_id or self.steam_id)
        table = Table(title="Inventory contexts")
        table.add_column("App ID", justify="right")
        table.add_column("Name", style="cyan")
        table.add_column("Contexts")
        for app in apps.values():
            contexts = ", ".join(f"{c.id} ({c.name}: {c.asset_count})" for c in app.contexts.values())
            table.add_row(rich_auto_text(app.app_id), app.name, contexts)
        self.console.print(table)
    # endregion

    # region Confirmations
    @command(
        aliases=["conf", "confirmations"],
        description="Вывести ожидающие подтверждения"
    )
    def _show_confirmations(self) -> list[Confirmation]:
        confirmations = self.confirmation_executor.get_confirmations()
        if not confirmations:
            self.console.print(Text("Нет ожидающих подтверждений", style="yellow"))
            return confirmations

        table = Table(title="Confirmations")
        table.add_column("ID", style="cyan")
        table.add_column("Type")
        table.add_column("Description", style="magenta")
        for confirmation in confirmations:
            table.add_row(confirmation.id, confirmation.type_name, str(confirmation))
        self.console.print(table)
        return confirmations

    def _respond(self, confirmation_id: str, action: ConfirmationAction) -> None:
        confirmations = self.confirmation_executor.get_confirmations()
        confirmation = next((i for i in confirmations if i.id == confirmation_id), None)
        if not confirmation:
            self.console.print(Text(f"Подтверждение {confirmation_id} не найдено", style="red"))
            return

        result = self.confirmation_executor.respond_to_confirmation(confirmation, action)
        style = "green" if result.success else "red"
        self.console.print(Text(f"{action.name} {confirmation}: {result.success} {result.message}", style=style))

    @command(
        aliases=["accept"],
        description="Принять подтверждение",
        usage="accept <confirmation_id>"
    )
    def _accept(self, confirmation_id: str) -> None:
        self._respond(confirmation_id, ConfirmationAction.ACCEPT)

    @command(
        aliases=["reject"],
        description="Отклонить подтверждение",
        usage="reject <confirmation_id>"
    )
    def _reject(self, confirmation_id: str) -> None:
        self._respond(confirmation_id, ConfirmationAction.REJECT)

    @command(
        aliases=["accept_all"],
        description="Принять все подтверждения (или только указанных типов)",
        usage="accept_all [type_1] ... [type_N]"
    )
    def _accept_all(self, *types: int) -> None:
        confirmations = [
            i for i in self.confirmation_executor.get_confirmations()
            if not types or i.type in types
        ]
        failed = 0
        for confirmation in tqdm(confirmations, unit="conf", ncols=Config.TQDM_CONSOLE_WIDTH):
            if not self.confirmation_executor.respond_to_confirmation(confirmation).success:
                failed += 1
        self.console.print(Text(f"Принято: {len(confirmations) - failed}, ошибок: {failed}"))
    # endregion

    # region Market
    @command(
        aliases=["wallet"],
        description="Баланс кошелька Steam"
    )
    def _show_wallet(self) -> None:
        wallet = self.marketplace.get_wallet()
        price, symbol, currency = self.marketplace.clean_price(wallet)
        currency_name = currency.name if currency else "unknown"
        self.console.print(Text(f"{wallet} ({price} {symbol}, {currency_name})"))

    @command(
        aliases=["price"],
        description="Текущая цена предмета на торговой площадке",
        usage="price <app_id> <market_hash_name>"
    )
    def _show_price(self, app_id: int, market_hash_name: str) -> None:
        overview = self.marketplace.get_price_overview(app_id, market_hash_name)
        self.console.print(
            Text(f"lowest: {overview.lowest_price}, median: {overview.median_price}, volume: {overview.volume}")
        )

    @command(
        aliases=["history"],
        description="История цен предмета (последние записи)",
        usage="history <app_id> <market_hash_name> [-n COUNT]",
        flags={
            "count": (["-n"], "Количество записей")
        }
    )
    def _show_price_history(self, app_id: int, market_hash_name: str, count: int = 10) -> None:
        prices = self.marketplace.get_price_history(app_id, market_hash_name)
        table = Table(title=market_hash_name)
        table.add_column("Date", style="cyan")
        table.add_column("Price", justify="right")
        table.add_column("Count", justify="right")
        for price in prices[-count:]:
            table.add_row(price.date, rich_auto_text(price.price), price.count)
        self.console.print(table)
    # endregion


if __name__ == "__main__":
    try:
        app = App()
    except ValueError as ex:
        Console().print(Text(f"Configuration error: {ex}", style="red"))
        raise SystemExit(1) from ex
    app.run("SteamClient")
