"""Backend moderation routes, guarded by the moderator key."""

import secrets
from typing import Literal

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from commentary.application.usecase.comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from commentary.application.usecase.moderation import (
    SetStatusRequest,
    SetStatusResponse,
    SetStatusUseCase,
)
from commentary.config import CommentSettings
from commentary.domain.error import NotFoundError
from commentary.domain.model import DeletionResult
from commentary.interface.error import ModeratorAuthError

router = APIRouter(
    prefix="/moderation", tags=["moderation"], route_class=DishkaRoute
)


def check_moderator_key(provided: str | None, settings: CommentSettings) -> None:
    """Compare the ``X-Moderator-Key`` header with the configured key.

    Raises:
        ModeratorAuthError: If the key is missing or wrong
    """
    if not provided:
        raise ModeratorAuthError(missing=True)
    if not secrets.compare_digest(provided, settings.moderator_key):
        logfire.warn("Moderation request with invalid key")
        raise ModeratorAuthError(missing=False)


def _authorize(provided: str | None, settings: CommentSettings) -> None:
    try:
        check_moderator_key(provided, settings)
    except ModeratorAuthError as e:
        raise HTTPException(
            status_code=(
                status.HTTP_401_UNAUTHORIZED
                if e.missing
                else status.HTTP_403_FORBIDDEN
            ),
            detail=str(e),
        )


class SetStatusAPIRequest(BaseModel):
    """API request for moderating a comment."""

    status: Literal["approved", "spam"]


@router.patch("/comments/{comment_id}", response_model=SetStatusResponse)
async def set_status(
    comment_id: int,
    body: SetStatusAPIRequest,
    set_status_use_case: FromDishka[SetStatusUseCase],
    settings: FromDishka[CommentSettings],
    x_moderator_key: str | None = Header(default=None),
) -> SetStatusResponse:
    """Approve a comment or mark it as spam.

    Args:
        comment_id: Comment ID
        body: The verdict
        set_status_use_case: Set status use case from DI
        settings: Comment settings holding the moderator key
        x_moderator_key: Moderator key header

    Returns:
        The applied status transition

    Raises:
        HTTPException: If the key is missing/wrong or the comment is unknown
    """
    _authorize(x_moderator_key, settings)
    try:
        return await set_status_use_case.execute(
            SetStatusRequest(comment_id=comment_id, status=body.status)
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete(
    "/comments/{comment_id}",
    response_model=DeleteCommentResponse,
    responses={409: {"model": DeleteCommentResponse}},
)
async def delete_comment(
    comment_id: int,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    settings: FromDishka[CommentSettings],
    x_moderator_key: str | None = Header(default=None),
):
    """Delete a comment without replies.

    Args:
        comment_id: Comment ID
        delete_comment_use_case: Delete comment use case from DI
        settings: Comment settings holding the moderator key
        x_moderator_key: Moderator key header

    Returns:
        The deletion result, 409 when the comment has replies

    Raises:
        HTTPException: If the key is missing/wrong or the comment is unknown
    """
    _authorize(x_moderator_key, settings)
    response = await delete_comment_use_case.execute(
        DeleteCommentRequest(comment_id=comment_id)
    )
    if response.result == DeletionResult.NOT_FOUND:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Comment not found: {comment_id}",
        )
    if response.result == DeletionResult.REFUSED_HAS_REPLIES:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=response.model_dump(mode="json"),
        )
    return response
