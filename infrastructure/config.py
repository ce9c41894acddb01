"""Runtime configuration read from the environment"""
import logging
import os

from domain.value_objects import DEFAULT_CURRENCY  # noqa: F401

APP_TITLE = os.getenv("APP_TITLE", "Campsite Booking API")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s %(levelname)s %(name)s: %(message)s")


def configure_logging() -> None:
    """Apply LOG_LEVEL and LOG_FORMAT to the root logger"""
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO), format=LOG_FORMAT)
