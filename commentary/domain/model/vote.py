"""Vote entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from commentary.domain.model.comment import utcnow
from commentary.domain.model.common import DomainModel
from commentary.domain.value import (
    CommentId,
    UserId,
    VoteDirection,
    VoteId,
    VoterIdentity,
)


class Vote(DomainModel):
    """Vote entity.

    One row per cast vote. Votes are never updated and only disappear
    together with their comment.
    """

    id: Optional[VoteId] = None
    comment_id: CommentId
    user_id: UserId = UserId(0)
    ip: str = ""
    user_agent: str = ""
    direction: VoteDirection
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def identity(self) -> VoterIdentity:
        return VoterIdentity(
            user_id=self.user_id, ip=self.ip, user_agent=self.user_agent
        )
