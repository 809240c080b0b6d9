"""
Logging setup: console output plus an optional rotating log file.
Modules just call logging.getLogger(__name__).
"""

import logging
import logging.handlers
import sys
from pathlib import Path

from professor_aid import config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


def setup_logging(level: str = None, log_file: str = None, max_file_size: int = 10 * 1024 * 1024, backup_count: int = 5) -> None:
    level = (level or config.LOG_LEVEL).upper()
    log_file = log_file or config.LOG_FILE
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level, logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # SQL echo is controlled by SQL_ECHO, keep the engine quiet otherwise
    if level in ("WARNING", "ERROR", "CRITICAL"):
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging initialized - level: %s, file: %s", level, log_file or "-")


def setup_testing_logging() -> None:
    logging.basicConfig(level=logging.ERROR, format="%(levelname)s - %(name)s - %(message)s")
    logging.getLogger("sqlalchemy").setLevel(logging.ERROR)
