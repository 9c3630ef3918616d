"""PostgreSQL implementation of Vote repository."""

from datetime import datetime
from typing import List

from sqlalchemy import desc, select

from commentary.domain.model import Vote
from commentary.domain.repository import VoteRepository
from commentary.domain.value import CommentId, VoterIdentity
from commentary.persistence.mappers import row_to_vote, vote_to_dict
from commentary.persistence.tables import votes_table

from .base import PostgresRepository


class PostgresVoteRepository(PostgresRepository, VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    async def find_recent(
        self,
        comment_id: CommentId,
        identity: VoterIdentity,
        since: datetime,
    ) -> List[Vote]:
        """Find votes by an identity on a comment cast after ``since``."""
        stmt = (
            select(votes_table)
            .where(votes_table.c.comment_id == comment_id)
            .where(votes_table.c.user_id == identity.user_id)
            .where(votes_table.c.ip == identity.ip)
            .where(votes_table.c.user_agent == identity.user_agent)
            .where(votes_table.c.created_at > since)
            .order_by(desc(votes_table.c.created_at))
        )
        result = await self._execute(stmt, "find_recent_votes")
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_comment(self, comment_id: CommentId) -> List[Vote]:
        """Find all votes on a comment."""
        stmt = (
            select(votes_table)
            .where(votes_table.c.comment_id == comment_id)
            .order_by(votes_table.c.created_at, votes_table.c.id)
        )
        result = await self._execute(stmt, "find_votes")
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def save(self, vote: Vote) -> Vote:
        """Insert a new vote."""
        stmt = (
            votes_table.insert()
            .values(**vote_to_dict(vote))
            .returning(*votes_table.c)
        )
        result = await self._execute(stmt, "insert_vote")
        return row_to_vote(result.one()._asdict())
