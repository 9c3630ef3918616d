#!/usr/bin/env python3
"""Send queued reply notifications. Meant to run periodically (cron)."""

import argparse
import asyncio
import sys

import logfire

from commentary.application.usecase.notification import (
    DispatchNotificationsRequest,
    DispatchNotificationsUseCase,
)
from commentary.config import Settings
from commentary.util.di.container import create_container
from commentary.util.logging import setup_logging
from commentary.util.observability import configure_logfire


async def run(limit: int) -> int:
    """Drain up to ``limit`` queue entries in one request scope.

    Returns:
        Number of entries that failed to send
    """
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(DispatchNotificationsUseCase)
            report = await use_case.execute(DispatchNotificationsRequest(limit=limit))
    finally:
        await container.close()

    logfire.info(
        "Notification dispatch finished",
        sent=report.sent,
        failed=report.failed,
        skipped=report.skipped,
    )
    return report.failed


def main() -> int:
    """Dispatch notifications and log any errors to Logfire."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--limit", type=int, default=100, help="maximum mails sent in this run"
    )
    args = parser.parse_args()

    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    try:
        failed = asyncio.run(run(args.limit))
        return 1 if failed else 0
    except Exception as e:
        logfire.error(
            "Notification dispatch failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
