import sys
import logging

from colorlog import ColoredFormatter
from loguru import logger


def setup_library_logger(name: str, level: int = logging.WARNING) -> logging.Logger:
    """Colorize a third-party stdlib logger (matplotlib, PIL) and cap its level."""
    lib_logger = logging.getLogger(name)
    lib_logger.setLevel(level)

    if not lib_logger.handlers:
        handler = logging.StreamHandler()
        formatter = ColoredFormatter(
            fmt="%(log_color)s[%(levelname)s] %(name)s: %(message)s",
            log_colors={
                "DEBUG":    "cyan",
                "INFO":     "green",
                "WARNING":  "yellow",
                "ERROR":    "red",
                "CRITICAL": "bold_red",
            }
        )
        handler.setFormatter(formatter)
        lib_logger.addHandler(handler)
        lib_logger.propagate = False

    return lib_logger


DEFAULT_FORMAT = "<bold>{time:YYYY-MM-DD HH:mm:ss}</bold> | <level>{level}</level> | <cyan>{message}</cyan>"


def setup_logger(level: str = "INFO", fmt: str = DEFAULT_FORMAT, colorize: bool = True):
    """Route loguru to stdout with the given level and format (both come from the `logging` config block)."""
    logger.remove()  # drop loguru's default stderr handler

    logger.add(
        sys.stdout,
        format=fmt,
        level=str(level).upper(),
        colorize=colorize
    )

    return logger
