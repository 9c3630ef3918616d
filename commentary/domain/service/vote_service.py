"""Vote domain service."""

from datetime import timedelta

import logfire

from commentary.config import CommentSettings
from commentary.domain.error import NotFoundError
from commentary.domain.model.outcome import AlreadyVoted, VoteAccepted, VoteOutcome
from commentary.domain.model.vote import Vote
from commentary.domain.repository import CommentRepository, VoteRepository
from commentary.domain.value import CommentId, VoteDirection, VoterIdentity

from .base import Service
from .clock import Clock


class VoteService(Service):
    """Domain service for vote operations.

    An identity may vote once per comment within the cooldown window.
    Check, insert and counter increment run under the per-comment lock, so
    concurrent votes never lose updates.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
        settings: CommentSettings,
        clock: Clock,
    ) -> None:
        """Initialize vote service.

        Args:
            comment_repository: Comment repository
            vote_repository: Vote repository
            settings: Comment thread configuration
            clock: Time source
        """
        self.comment_repository = comment_repository
        self.vote_repository = vote_repository
        self.settings = settings
        self.clock = clock

    @property
    def cooldown(self) -> timedelta:
        return timedelta(days=self.settings.vote_cooldown_days)

    async def cast_vote(
        self,
        comment_id: CommentId,
        identity: VoterIdentity,
        direction: VoteDirection,
    ) -> VoteOutcome:
        """Cast an up- or downvote on a comment.

        Args:
            comment_id: Comment ID
            identity: Voter fingerprint
            direction: Up or down

        Returns:
            VoteAccepted with the new counter value, or AlreadyVoted with the
            time left until this identity may vote again

        Raises:
            NotFoundError: If the comment does not exist or is not published
        """
        with logfire.span(
            "vote_service.cast_vote",
            comment_id=comment_id,
            direction=direction.name,
            user_id=identity.user_id,
        ):
            async with self.comment_repository.lock(comment_id) as comment:
                if comment is None or not comment.is_displayable:
                    logfire.warn("Vote on unavailable comment", comment_id=comment_id)
                    raise NotFoundError("Comment", str(comment_id))

                now = self.clock.now()
                cooldown = self.cooldown

                if cooldown > timedelta(0):
                    recent = await self.vote_repository.find_recent(
                        comment_id, identity, since=now - cooldown
                    )
                    if recent:
                        latest = max(vote.created_at for vote in recent)
                        remaining = max(latest + cooldown - now, timedelta(0))
                        logfire.info(
                            "Vote rejected within cooldown",
                            comment_id=comment_id,
                            remaining_seconds=int(remaining.total_seconds()),
                        )
                        return AlreadyVoted(
                            comment_id=comment_id, cooldown_remaining=remaining
                        )

                await self.vote_repository.save(
                    Vote(
                        comment_id=comment_id,
                        user_id=identity.user_id,
                        ip=identity.ip,
                        user_agent=identity.user_agent,
                        direction=direction,
                        created_at=now,
                    )
                )
                tally = await self.comment_repository.increment_votes(
                    comment_id, direction
                )

                logfire.info(
                    "Vote accepted",
                    comment_id=comment_id,
                    direction=direction.name,
                    tally=tally,
                )
                return VoteAccepted(
                    comment_id=comment_id, direction=direction, tally=tally
                )
