from __future__ import annotations

import logging
import sys

from .config import get_settings

# Parent logger of every module in this service.
SERVICE_LOGGER = "pricecheck"


def configure_logging() -> None:
    settings = get_settings()
    if settings.log_level:
        log_level = getattr(logging, settings.log_level)
    else:
        log_level = logging.DEBUG if settings.environment != "production" else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger(SERVICE_LOGGER).setLevel(log_level)


__all__ = ["SERVICE_LOGGER", "configure_logging"]
