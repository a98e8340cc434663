import logging
import os
from logging.handlers import RotatingFileHandler

LOG_LEVEL = os.getenv("PLANIT_LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("PLANIT_LOG_FILE", "").strip()

logger = logging.getLogger("planit")
logger.setLevel(LOG_LEVEL)

formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # file output only when configured
    if LOG_FILE:
        file_handler = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)


def log_debug(message: str):
    logger.debug(message)


def log_info(message: str):
    logger.info(message)


def log_warning(message: str):
    logger.warning(message)


def log_error(message: str, exc: Exception = None):
    if exc:
        logger.error(message, exc_info=True)
    else:
        logger.error(message)
