# app/logger.py
import logging
import os
import sys

def setup_logger(name: str, level: str = None):
    logger = logging.getLogger(name)
    level = (level or os.getenv("LOG_LEVEL") or "DEBUG").upper()
    logger.setLevel(level)  # DEBUG by default so .debug() shows up locally
    if logger.handlers:
        # reloads / repeated create_app() calls must not stack handlers
        return logger
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger

logger = setup_logger("Oviro")
