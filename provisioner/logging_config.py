"""Logging setup shared by host processes."""

from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
HANDLER_NAME = "provisioner"


def configure_logging(level: Optional[str] = None) -> None:
    """Install a single stream handler on the ``provisioner`` logger."""

    logger = logging.getLogger("provisioner")
    logger.setLevel((level or "INFO").upper())
    if any(handler.get_name() == HANDLER_NAME for handler in logger.handlers):
        return
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
