# wp_utils/logger.py - shared console logger for the client and smoke runner
import logging
import os


def get_logger(name: str = "wp-api"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        level = logging.getLevelName(os.environ.get("WP_API_LOG_LEVEL", "INFO").upper())
        logger.setLevel(level if isinstance(level, int) else logging.INFO)
    return logger
