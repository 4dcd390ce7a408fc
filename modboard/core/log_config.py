"""Logging setup shared by the web app and the API client."""

import logging
import sys

from modboard.core.config import settings

LOG_FORMAT = "%(asctime)s - [%(levelname)s] - %(name)s - %(message)s"
HANDLER_NAME = "modboard-stdout"


def configure_logging(level: str | None = None) -> None:
    """Install a single stdout handler on the root logger."""
    root_logger = logging.getLogger()
    root_logger.setLevel((level or settings.log_level).upper())

    if any(handler.get_name() == HANDLER_NAME for handler in root_logger.handlers):
        return

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.set_name(HANDLER_NAME)
    stdout_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(stdout_handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
