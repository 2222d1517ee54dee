import os

from _root import project_root


class Config:
    LANGUAGE = os.getenv("STEAM_LANGUAGE", "english")

    # Steam отклоняет или молча обрезает страницы другого размера
    INVENTORY_FIRST_PAGE_SIZE = 250
    INVENTORY_NEXT_PAGE_SIZE = 75

    REQUEST_TIMEOUT = float(os.getenv("STEAM_REQUEST_TIMEOUT", "15"))
    LOGS_DIR = os.getenv("STEAM_LOGS_DIR", f"{project_root}/logs")
    LOG_LEVEL = os.getenv("STEAM_LOG_LEVEL", "DEBUG").upper()
    LOG_MAX_BYTES = 1024 * 1024
    LOG_BACKUP_COUNT = 5

    TQDM_CONSOLE_WIDTH = 80
