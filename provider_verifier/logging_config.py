# Logging setup for verification runs.

import logging
import sys
from typing import Optional, TextIO

from provider_verifier.settings import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

DEFAULT_LOG_LEVEL = "INFO"

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Per-request transport logs; only shown when verifying at DEBUG
NOISY_LIBRARIES = ["httpx", "httpcore"]


class _VerifierHandler(logging.StreamHandler):
    """Marks the handler installed by setup_logging so a second call replaces it."""

    pass


def setup_logging(level: Optional[str] = None, stream: Optional[TextIO] = None) -> str:
    """
    Routes verifier logs to a single stream handler on the root logger.

    Args:
        level: Log level name. Defaults to LOG_LEVEL from the environment, then INFO.
        stream: Where log lines go. Defaults to stderr.

    Returns:
        The level name that was applied. An unknown name falls back to INFO.
    """
    requested = (level or Settings().get_log_level(default=DEFAULT_LOG_LEVEL)).upper()
    level_name = requested if requested in VALID_LOG_LEVELS else DEFAULT_LOG_LEVEL

    root_logger = logging.getLogger()
    root_logger.setLevel(level_name)
    for handler in [h for h in root_logger.handlers if isinstance(h, _VerifierHandler)]:
        root_logger.removeHandler(handler)

    handler = _VerifierHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    library_level = logging.DEBUG if level_name == "DEBUG" else logging.WARNING
    for lib_name in NOISY_LIBRARIES:
        logging.getLogger(lib_name).setLevel(library_level)

    logger = logging.getLogger(__name__)
    if requested != level_name:
        logger.warning(
            f"Invalid LOG_LEVEL '{requested}'. Defaulting to {DEFAULT_LOG_LEVEL}. "
            f"Valid levels are: {', '.join(VALID_LOG_LEVELS)}"
        )
    logger.info(f"Logging configured with level {level_name}.")
    return level_name
