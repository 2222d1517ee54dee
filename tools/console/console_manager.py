import shlex
from abc import ABC
from typing import Callable

from rich.console import Console
from rich.table import Table
from rich.text import Text

from tools import escape_brackets
from tools.console.command_cls import Command
from tools.console.decorators import command, register_commands


class ConsoleManager:
    def __init__(self, name="console"):
        self.commands: dict[str, Command] = {}
        self.name = name
        self.is_running = False
        self.console = Console()

        register_commands(self, self)

    def register_command(
            self, *,
            action: Callable, aliases: list, description: str, usage: str,
            flag_aliases: dict = None, flag_descriptions: dict = None
    ):
        cmd_obj = Command(
            action=action,
            aliases=aliases,
            description=description,
            usage=usage,
            flag_aliases=flag_aliases or {},
            flag_descriptions=flag_descriptions or {}
        )
        for alias in cmd_obj.aliases:
            self.commands[alias] = cmd_obj

    def execute_line(self, command_line: str) -> None:
        try:
            command_name, *args = shlex.split(command_line)
        except ValueError as ex:
            self.console.print(Text(f"Error parsing command: {ex}", style="red"))
            return

        command_obj = self.commands.get(command_name)
        if not command_obj:
            self.console.print(Text("Unknown command. Type 'help' for available commands.", style="red"))
            return

        command_obj.execute(*args)

    def run(self):
        self.is_running = True
        while self.is_running:
            command_line = input(f"\n{self.name}: ").strip()
            if command_line:
                self.execute_line(command_line)

    @command(
        aliases=["exit", "stop", "quit", "s"],
        description="Stop Console Manager",
        usage="stop"
    )
    def _stop(self) -> None:
        self.is_running = False

    @command(
        aliases=["help", "h"],
        description="Show help for all commands or entered command",
        usage="help [command]"
    )
    def _show_help(self, *args: str) -> None:
        def collect_flags(cmd: Command) -> str:
            aliases_by_param = {}
            for alias, param_name in cmd.flag_aliases.items():
                aliases_by_param.setdefault(param_name, []).append(alias)
            return "\n".join(
                f"{', '.join(aliases_by_param.get(param_name, []))}: {description}"
                for param_name, description in cmd.flag_descriptions.items()
            )

        if len(args) > 1:
            self.console.print(Text("Too many arguments.", style="red"))
            return

        if args:
            cmd = self.commands.get(args[0])
            if not cmd:
                self.console.print(Text(f"No such command: {args[0]}", style="red"))
                return
            result = Text()
            result.append(f"Command: {', '.join(cmd.aliases)}\n", style="cyan")
            result.append(f"Description: {cmd.description}\n", style="magenta")
            result.append(f"Usage: {cmd.usage}", style="green")
            if cmd.flag_aliases:
                result.append(f"\nFlags:\n{collect_flags(cmd)}", style="yellow")
            self.console.print(result)
            return

        table = Table(title="Available commands", show_lines=True)
        table.add_column("Aliases", style="cyan")
        table.add_column("Description", style="magenta")
        table.add_column("Usage", style="green")
        table.add_column("Params", style="yellow")
        printed_commands = set()
        for cmd in self.commands.values():
            if cmd in printed_commands:
                continue
            table.add_row(
                ", ".join(cmd.aliases),
                cmd.description,
                escape_brackets(cmd.usage) or "N/A",
                collect_flags(cmd) or "N/A"
            )
            printed_commands.add(cmd)
        self.console.print(table)


class BasicConsole(ABC):
    def run(self, name: str) -> None:
        console_manager = ConsoleManager(name)
        register_commands(self, console_manager)
        console_manager.run()
