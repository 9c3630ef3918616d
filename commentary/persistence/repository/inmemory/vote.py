"""In-memory vote repository for testing."""

import asyncio
from datetime import datetime
from typing import Optional

from commentary.domain.model.vote import Vote
from commentary.domain.repository.vote import VoteRepository
from commentary.domain.value import CommentId, VoterIdentity

from .store import InMemoryStore


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, store: Optional[InMemoryStore] = None) -> None:
        self.store = store or InMemoryStore()

    async def find_recent(
        self,
        comment_id: CommentId,
        identity: VoterIdentity,
        since: datetime,
    ) -> list[Vote]:
        """Find votes by an identity on a comment cast after ``since``."""
        await asyncio.sleep(0)
        votes = [
            v
            for v in self.store.votes.values()
            if v.comment_id == comment_id
            and v.identity == identity
            and v.created_at > since
        ]
        return sorted(votes, key=lambda v: v.created_at, reverse=True)

    async def find_by_comment(self, comment_id: CommentId) -> list[Vote]:
        """Find all votes on a comment."""
        votes = [v for v in self.store.votes.values() if v.comment_id == comment_id]
        return sorted(votes, key=lambda v: (v.created_at, v.id or 0))

    async def save(self, vote: Vote) -> Vote:
        """Insert a new vote."""
        vote_id = self.store.next_vote_id()
        saved = vote.model_copy(update={"id": vote_id})
        self.store.votes[vote_id] = saved
        return saved
