"""
Logging configuration for the kiosk core.

The engine modules (reducers, initializer, builder, step flow) log every
rejected tap, clamp and screen change at DEBUG. On a busy kiosk that is one
line per touch, so they get their own level, independent of the session
logger that reports added items and confirmed orders at INFO.

Usage:
    from kiosk_core.logging_config import setup_logging
    setup_logging()  # Call once when the kiosk host starts

Environment variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, or CRITICAL (default: INFO)
    ENGINE_LOG_LEVEL: Level of the engine loggers (default: WARNING, or
        DEBUG when LOG_LEVEL is DEBUG)
"""
import logging
import os
import sys

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

ENGINE_LOGGERS = [
    "kiosk_core.customization.toppings",
    "kiosk_core.customization.options",
    "kiosk_core.customization.initializer",
    "kiosk_core.customization.cart_builder",
    "kiosk_core.customization.flow",
]


def _parse_level(value: str, default: str) -> str:
    value = (value or "").strip().upper()
    return value if value in VALID_LEVELS else default


def setup_logging(level: str = None, engine_level: str = None) -> None:
    """
    Configure logging for the kiosk core.

    Args:
        level: Level for the kiosk_core loggers. If not provided, reads
               LOG_LEVEL, defaults to INFO.
        engine_level: Level for the per-tap engine loggers. If not provided,
               reads ENGINE_LOG_LEVEL; otherwise DEBUG when `level` is DEBUG
               and WARNING for anything else.
    """
    level = _parse_level(level if level is not None else os.getenv("LOG_LEVEL"), "INFO")
    engine_default = "DEBUG" if level == "DEBUG" else "WARNING"
    if engine_level is None:
        engine_level = os.getenv("ENGINE_LOG_LEVEL")
    engine_level = _parse_level(engine_level, engine_default)

    numeric_level = getattr(logging, level)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

    logging.getLogger("kiosk_core").setLevel(numeric_level)
    for name in ENGINE_LOGGERS:
        logging.getLogger(name).setLevel(getattr(logging, engine_level))

    logger = logging.getLogger(__name__)
    logger.debug("Logging configured at %s level (engine %s)", level, engine_level)
