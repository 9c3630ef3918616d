"""Cast vote use case."""

from typing import Literal

from pydantic import BaseModel

from commentary.application.usecase.base import BaseUseCase
from commentary.domain.model import AlreadyVoted
from commentary.domain.service import VoteService
from commentary.domain.value import CommentId, UserId, VoteDirection, VoterIdentity


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    comment_id: int
    direction: Literal["up", "down"]
    user_id: int = 0  # 0 for guests
    ip: str = ""
    user_agent: str = ""


class CastVoteResponse(BaseModel):
    """Cast vote response.

    On rejection ``tally`` is None and ``cooldown_remaining_seconds`` tells
    when this identity may vote again.
    """

    comment_id: int
    direction: Literal["up", "down"]
    accepted: bool
    tally: int | None = None
    cooldown_remaining_seconds: int | None = None
    message: str


class CastVoteUseCase(BaseUseCase):
    """Use case for up- and downvoting a comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute vote flow.

        Args:
            request: Cast vote request

        Returns:
            Vote outcome

        Raises:
            NotFoundError: If the comment is unknown or not published
        """
        outcome = await self.vote_service.cast_vote(
            CommentId(request.comment_id),
            VoterIdentity(
                user_id=UserId(request.user_id),
                ip=request.ip,
                user_agent=request.user_agent,
            ),
            VoteDirection.parse(request.direction),
        )

        if isinstance(outcome, AlreadyVoted):
            days = self.vote_service.settings.vote_cooldown_days
            return CastVoteResponse(
                comment_id=request.comment_id,
                direction=request.direction,
                accepted=False,
                cooldown_remaining_seconds=int(
                    outcome.cooldown_remaining.total_seconds()
                ),
                message=(
                    "It looks like you have already rated this comment within "
                    f"the last {days} days. In this case you are not allowed "
                    "to vote again."
                ),
            )

        return CastVoteResponse(
            comment_id=request.comment_id,
            direction=request.direction,
            accepted=True,
            tally=outcome.tally,
            message="Thank you for your vote.",
        )
