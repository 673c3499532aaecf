# utils/log.py - shared logger setup for the api engine
import logging

from api_config import API_LOG_LEVEL


def get_logger(name: str = "api-engine"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, API_LOG_LEVEL.upper(), logging.INFO))
    return logger
