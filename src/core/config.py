"""Runtime configuration, read from environment variables."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Self

DEFAULT_DATABASE_URL = "sqlite:///templates.db"
TRUTHY = ("1", "true", "yes", "on")
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = DEFAULT_LOG_LEVEL
    debug_logs: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """
        Supported variables
        ----
        * PUZZLE_DATABASE_URL: SQLAlchemy URL of the template catalogue
        * PUZZLE_LOG_LEVEL: level name for the root logger (DEBUG, INFO, ...). Unknown names fall back to WARNING
        * PUZZLE_DEBUG_LOGS: any of 1/true/yes/on switches the validation trace on (forces DEBUG on the puzzle loggers)
        """
        env = os.environ if environ is None else environ
        return cls(
            database_url=env.get("PUZZLE_DATABASE_URL", DEFAULT_DATABASE_URL),
            log_level=_known_level(env.get("PUZZLE_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
            debug_logs=env.get("PUZZLE_DEBUG_LOGS", "").strip().lower() in TRUTHY,
        )


def configure_logging(settings: Settings) -> None:
    """Set up the standard library logging once, at application start."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    if settings.debug_logs:
        logging.getLogger("src.puzzle").setLevel(logging.DEBUG)
        logging.getLogger("src.services").setLevel(logging.DEBUG)


def _known_level(name: str) -> str:
    level = name.strip().upper()
    if level not in logging.getLevelNamesMapping():
        return DEFAULT_LOG_LEVEL
    return level
