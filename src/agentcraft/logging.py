"""
Logging setup shared by agentcraft entry points.
"""
import logging
import sys
from typing import Optional

from .settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(name: Optional[str] = None, level: Optional[str] = None) -> logging.Logger:
    """
    Configure a logger to write to stdout.

    Args:
        name: Logger name. ``None`` or ``"root"`` configures the root logger.
        level: Log level name. Defaults to the ``log_level`` setting.

    Returns:
        The configured logger
    """
    logger = logging.getLogger(None if name in (None, "root") else name)
    log_level = getattr(logging, (level or get_settings().log_level).upper(), logging.INFO)
    logger.setLevel(log_level)

    # Only attach one console handler per logger
    if not any(getattr(h, "_agentcraft", False) for h in logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        console_handler._agentcraft = True
        logger.addHandler(console_handler)

    for handler in logger.handlers:
        handler.setLevel(log_level)

    return logger
