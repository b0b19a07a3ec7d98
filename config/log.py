"""
config/log.py
─────────────
Logging setup shared by the demo entry point and any embedding service.
"""
import logging
import sys

from config.settings import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Route log records to stderr at the configured level."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
