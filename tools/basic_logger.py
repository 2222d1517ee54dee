import os
import logging
from logging.handlers import RotatingFileHandler

from enums import Config


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _file_handler(dir_specify: str, file_name: str) -> RotatingFileHandler:
    log_dir = os.path.join(Config.LOGS_DIR, dir_specify)
    os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(
        os.path.join(log_dir, f"{file_name}.log"),
        encoding="utf-8",
        maxBytes=Config.LOG_MAX_BYTES,
        backupCount=Config.LOG_BACKUP_COUNT
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


class BasicLogger:
    """
    Примесь, дающая классу именованный логгер с файлом
    <LOGS_DIR>/<dir_specify>/<file_name>.log.
    Обработчик добавляется один раз на имя логгера.
    """
    def __init__(self, logger_name: str, dir_specify: str, file_name: str) -> None:
        self.logger = logging.getLogger(logger_name)
        if not any(isinstance(i, RotatingFileHandler) for i in self.logger.handlers):
            self.logger.addHandler(_file_handler(dir_specify, file_name))
        self.logger.setLevel(Config.LOG_LEVEL)
