"""Shared plumbing for PostgreSQL repositories."""

from typing import Any

import logfire
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from commentary.domain.error import PersistenceError


class PostgresRepository:
    """Base class holding the request session.

    Every statement goes through ``_execute`` so driver and database
    failures surface as ``PersistenceError``.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _execute(self, stmt: Any, operation: str) -> Result:
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except SQLAlchemyError as e:
            logfire.error("Database operation failed", operation=operation, error=str(e))
            raise PersistenceError(operation, e) from e
        return result
