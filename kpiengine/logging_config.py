"""Logging setup for the command line and HTTP entry points.

Library modules only create ``logging.getLogger(__name__)`` loggers; call
``configure_logging()`` once from an entry point.
"""
from __future__ import annotations
import logging
import os

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for noisy in ("werkzeug",):
        logging.getLogger(noisy).setLevel(logging.WARNING)
