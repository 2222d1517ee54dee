from typing import Callable, NamedTuple


class CommandInfo(NamedTuple):
    aliases: list[str]
    description: str
    usage: str
    # {имя параметра: ([алиасы флага], описание)}
    flags: dict[str, tuple[list[str], str]]


def command(*, aliases: list[str], description: str = "", usage: str = "", flags: dict = None) -> Callable:
    """
    Помечает метод как консольную команду. Регистрация выполняется
    в register_commands при запуске консоли.
    """
    if not aliases:
        raise ValueError("Command needs at least one alias")

    def decorator(func):
        func.command_info = CommandInfo(list(aliases), description, usage or aliases[0], dict(flags or {}))
        return func
    return decorator


def register_commands(obj, console_manager) -> None:
    for attr_name in dir(obj):
        method = getattr(obj, attr_name)
        info = getattr(method, "command_info", None)
        if not callable(method) or not isinstance(info, CommandInfo):
            continue

        flag_aliases = {
            alias: param
            for param, (aliases, _) in info.flags.items()
            for alias in aliases
        }
        console_manager.register_command(
            action=method,
            aliases=info.aliases,
            description=info.description,
            usage=info.usage,
            flag_aliases=flag_aliases,
            flag_descriptions={param: desc for param, (_, desc) in info.flags.items()}
        )
