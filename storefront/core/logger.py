import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

from storefront.core.config import settings

LOGGER_NAME = "storefront"


def setup_logger(level: Optional[str] = None, log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configure the storefront logger.

    - Console output always
    - Daily rotating file under ``log_dir`` when one is configured
    - Calling it again returns the already configured logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level or settings.log_level)

    # Avoid duplicate handlers if setup_logger() is called multiple times
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_dir = log_dir if log_dir is not None else settings.log_dir
    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            filename=path / "storefront.log",
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logger initialized (level=%s)", logging.getLevelName(logger.level))
    return logger
