"""Package logger."""

import logging
import os

logger = logging.getLogger("crazy-eights")
logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

# Console handler with formatter
console_handler = logging.StreamHandler()
formatter = logging.Formatter("[%(asctime)s] %(levelname)s - %(message)s", datefmt="%H:%M:%S")
console_handler.setFormatter(formatter)

# Avoid duplicate handlers when re-imported in notebooks or scripts
if not logger.hasHandlers():
    logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger for a module name."""
    return logger.getChild(name.rpartition(".")[2])
