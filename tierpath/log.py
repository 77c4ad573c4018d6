# tierpath/log.py
from __future__ import annotations
from typing import Optional
import sys

from loguru import logger

CONSOLE_FORMAT = ("<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                  "<level>{level: <8}</level> | "
                  "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
                  "<level>{message}</level>")
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """Route loguru to stderr (and optionally a file). Stdout stays reserved for the report."""
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)
    if log_file:
        logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
