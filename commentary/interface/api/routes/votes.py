"""Vote routes."""

from typing import Literal

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from commentary.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from commentary.domain.error import NotFoundError

from .identity import voter_identity

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for voting on a comment."""

    direction: Literal["up", "down"]


@router.post(
    "/comments/{comment_id}/vote",
    response_model=CastVoteResponse,
    responses={409: {"model": CastVoteResponse}},
)
async def cast_vote(
    comment_id: int,
    body: CastVoteAPIRequest,
    request: Request,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    x_user_id: int = Header(default=0),
):
    """Up- or downvote a comment.

    Guests vote too; they are told apart by IP address and user agent.

    Args:
        comment_id: Comment ID
        body: Vote direction
        request: Incoming request, for the voter fingerprint
        cast_vote_use_case: Cast vote use case from DI
        x_user_id: Front-end user id, 0 for guests

    Returns:
        The new counter value, or 409 with the remaining cooldown

    Raises:
        HTTPException: If the comment does not exist or is not published
    """
    identity = voter_identity(request, x_user_id)
    try:
        response = await cast_vote_use_case.execute(
            CastVoteRequest(
                comment_id=comment_id,
                direction=body.direction,
                user_id=identity.user_id,
                ip=identity.ip,
                user_agent=identity.user_agent,
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    if not response.accepted:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=response.model_dump(mode="json"),
        )
    return response
