# catalog/logger.py
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

LOGGER_NAME = "catalog"


def setup_logger(level: str = "INFO", log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configure the logger shared by the access log and the error translator.

    - Console output through rich
    - Optional daily rotating file under log_dir (one file per day, 7 kept)
    - Safe to call more than once: handlers are only attached the first time
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    if logger.handlers:
        return logger

    console_handler = RichHandler(show_path=False, rich_tracebacks=True)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(console_handler)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            filename=path / "catalog.log",
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(file_handler)

    return logger
