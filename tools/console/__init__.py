from .decorators import command, register_commands
from .command_cls import Command
from .console_manager import ConsoleManager, BasicConsole

__all__ = [
    "ConsoleManager",
    "Command",
    "BasicConsole",
    "command",
    "register_commands",
]
