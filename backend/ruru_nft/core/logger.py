"""
Custom logging configuration.

Responsibilities:
- Setup the shared application logger
- Configure log level and format from settings
- Output logs to the console
"""

import logging
from typing import Optional

from ruru_nft.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str = "ruru_nft", level: Optional[str] = None) -> logging.Logger:
    """Configures the application logger."""
    app_logger = logging.getLogger(name)
    app_logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not app_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        app_logger.addHandler(handler)

    return app_logger


logger = setup_logger()
