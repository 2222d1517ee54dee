from .tools import escape_brackets, rich_auto_text
from .basic_logger import BasicLogger

__all__ = [
    "escape_brackets",
    "rich_auto_text",
    "BasicLogger"
]
