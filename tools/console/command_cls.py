import inspect
from typing import Callable, Any, Sequence

from rich.text import Text
from rich.console import Console

from utils.exceptions import SteamError


class Command:
    def __init__(
            self,
            *,
            action: Callable[..., Any],
            aliases: list[str],
            description: str,
            usage: str,
            flag_aliases: dict[str, str],
            flag_descriptions: dict[str, str]
    ) -> None:
        self.action = action
        self.aliases = aliases
        self.description = description
        self.usage = usage
        self.flag_aliases = flag_aliases
        self.flag_descriptions = flag_descriptions
        self.signature = inspect.signature(action)

    def _convert(self, name: str, value: str) -> Any:
        annotation = self.signature.parameters[name].annotation
        if annotation is inspect.Parameter.empty or not callable(annotation):
            return value
        return annotation(value)

    def _split_flags(self, args: Sequence[str]) -> tuple[list[str], dict[str, Any]]:
        # Флаг булева параметра не принимает значения, остальные берут следующий аргумент
        positional = []
        kwargs = {}
        i = 0
        while i < len(args):
            param_name = self.flag_aliases.get(args[i])
            if param_name is None:
                positional.append(args[i])
                i += 1
                continue

            if self.signature.parameters[param_name].annotation is bool:
                kwargs[param_name] = True
                i += 1
            else:
                if i + 1 >= len(args):
                    raise ValueError(f"Флагу {args[i]} требуется значение")
                kwargs[param_name] = self._convert(param_name, args[i + 1])
                i += 2
        return positional, kwargs

    def convert_args(self, args: Sequence[str]) -> tuple[list[Any], dict[str, Any]]:
        positional, kwargs = self._split_flags(args)
        converted_args = []
        params = [p for p in self.signature.parameters.values() if p.name not in kwargs]
        for param in params:
            if param.kind is inspect.Parameter.VAR_POSITIONAL:
                converted_args.extend(self._convert(param.name, arg) for arg in positional)
                positional = []
                break
            if not positional:
                if param.default is inspect.Parameter.empty and param.kind is not inspect.Parameter.KEYWORD_ONLY:
                    raise TypeError(f"Не передан обязательный аргумент {param.name}")
                continue
            converted_args.append(self._convert(param.name, positional.pop(0)))

        if positional:
            raise TypeError(f"Лишние аргументы: {' '.join(positional)}")
        return converted_args, kwargs

    def execute(self, *args) -> Any:
        try:
            converted_args, kwargs = self.convert_args(args)
            return self.action(*converted_args, **kwargs)
        except (ValueError, TypeError) as ex:
            result = Text(f"{ex}\n", style="red")
            result.append("Usage: ", style="green")
            result.append(f"{self.usage}", style="white")
            Console().print(result)
        except SteamError as ex:
            Console().print(Text(f"Steam error: {ex}", style="red"))
        return None
