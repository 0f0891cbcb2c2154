"""Package settings read from the environment."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

_TRUE = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """
    Runtime switches.

    Attributes:
        verify_ar_quiver: Build the AR quiver a second time from source maps
            and compare it with the one built from sink maps
        log_level: Level used by configure_logging when none is given
    """
    verify_ar_quiver: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> 'Settings':
        """Create settings from QUIVER_ALGEBRAS_* environment variables."""
        return cls(
            verify_ar_quiver=os.environ.get("QUIVER_ALGEBRAS_VERIFY_AR", "").strip().lower() in _TRUE,
            log_level=os.environ.get("QUIVER_ALGEBRAS_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
        )


settings = Settings.from_env()


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Args:
        level: Logging level name; defaults to settings.log_level

    Returns:
        The package logger
    """
    logger = logging.getLogger("quiver_algebras")
    logger.setLevel((level or settings.log_level).upper())
    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.NullHandler)
               for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
        logger.addHandler(handler)
    return logger
