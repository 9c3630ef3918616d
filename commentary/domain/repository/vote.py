"""Vote repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from commentary.domain.model.vote import Vote
from commentary.domain.value import CommentId, VoterIdentity


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_recent(
        self,
        comment_id: CommentId,
        identity: VoterIdentity,
        since: datetime,
    ) -> List[Vote]:
        """Find votes on a comment by an identity cast at or after ``since``.

        The identity matches on the full (user_id, ip, user_agent) tuple.

        Args:
            comment_id: The comment voted on
            identity: The voter fingerprint
            since: Start of the cooldown window

        Returns:
            Matching votes, newest first
        """
        pass

    @abstractmethod
    async def find_by_comment(self, comment_id: CommentId) -> List[Vote]:
        """Find all votes on a comment.

        Args:
            comment_id: The comment ID

        Returns:
            Votes ordered by creation time
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Save a new vote.

        Args:
            vote: The vote to store

        Returns:
            The stored vote with its id assigned
        """
        pass
