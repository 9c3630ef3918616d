#!/usr/bin/env python3
"""Apply the comment schema migrations with Logfire error tracking.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3f1c9a2b7d40
"""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from commentary.config import Settings
from commentary.util.observability import configure_logfire


def main() -> int:
    """Upgrade the database and report failures to Logfire."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "revision", nargs="?", default="head", help="Target revision (default: head)"
    )
    args = parser.parse_args()

    settings = Settings()
    configure_logfire(settings)

    # Never log credentials
    database = make_url(settings.database_url)
    with logfire.span(
        "run_migrations",
        revision=args.revision,
        database_host=database.host,
        database_name=database.database,
    ):
        try:
            command.upgrade(Config("alembic.ini"), args.revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=args.revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy rather than serve a half-migrated schema
            raise

        logfire.info("Comment schema is at revision", revision=args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
