#!/usr/bin/env python3
"""
Logging setup for the exporter
"""

import logging
import sys
from typing import Optional
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LEVEL_COLORS = {
    logging.DEBUG: '\033[36m',
    logging.INFO: '\033[32m',
    logging.WARNING: '\033[33m',
    logging.ERROR: '\033[31m',
    logging.CRITICAL: '\033[35m',
}
_RESET = '\033[0m'


class ColoredFormatter(logging.Formatter):
    """Console formatter coloring the level name"""

    def format(self, record):
        # Color a copy so file handlers sharing the record stay plain
        colored = logging.makeLogRecord(record.__dict__)
        color = _LEVEL_COLORS.get(record.levelno)
        if color:
            colored.levelname = f"{color}{record.levelname}{_RESET}"
        return super().format(colored)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    enable_colors: bool = True,
    log_format: str = DEFAULT_FORMAT
) -> None:
    """
    Replace the root handlers with a console handler and an optional file handler

    Args:
        level: Logging level name
        log_file: Optional log file path, parent directories are created
        enable_colors: Color level names on the console
        log_format: Format string shared by both handlers
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColoredFormatter(log_format) if enable_colors else logging.Formatter(log_format))
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(logging.Formatter(log_format))
        root_logger.addHandler(file_handler)

    # The watch and the HTTP server log every request at INFO
    for noisy in ("urllib3", "kubernetes", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(f"Logging configured at {level} level")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
