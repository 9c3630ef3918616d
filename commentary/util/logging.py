"""Logging configuration for the application.

Application events go through logfire; this sets up the stdlib loggers of
uvicorn, SQLAlchemy and alembic so their output lands in the same stream.
"""

import logging
import sys

from commentary.config import Settings

# Loggers kept at WARNING unless debugging
_NOISY_LOGGERS = ("sqlalchemy.engine", "asyncpg", "uvicorn.access", "smtplib")


def setup_logging(settings: Settings) -> None:
    """Configure stdout logging.

    Args:
        settings: Application settings, ``debug`` lowers the level
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    if not settings.debug:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("commentary").setLevel(level)
    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
