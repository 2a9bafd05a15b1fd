"""Logging setup for the application logger namespaces."""

from __future__ import annotations

import logging
import sys

LOGGER_NAMESPACES = ("app", "config", "core")


def setup_logging(level: int | str = logging.INFO) -> None:
    """Attach a single stdout handler to each application logger namespace.

    Streamlit re-executes the script on every interaction, so existing
    handlers are replaced rather than stacked.
    """

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    for namespace in LOGGER_NAMESPACES:
        logger = logging.getLogger(namespace)
        logger.setLevel(level)
        if logger.hasHandlers():
            logger.handlers.clear()

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
