"""Comment thread routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel

from commentary.application.usecase.comment import (
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    LocateCommentRequest,
    LocateCommentResponse,
    LocateCommentUseCase,
    SubmitCommentRequest,
    SubmitCommentResponse,
    SubmitCommentUseCase,
)
from commentary.domain.error import NotFoundError
from commentary.domain.value import NotificationPreference

from .identity import voter_identity

router = APIRouter(prefix="/threads", tags=["comments"], route_class=DishkaRoute)


@router.get(
    "/{page_id}/{field_id}/comments",
    response_model=GetCommentsResponse,
)
async def get_comments(
    page_id: int,
    field_id: int,
    request: Request,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    page: int = Query(default=1),
):
    """Get one page of a comment thread.

    Args:
        page_id: Page embedding the thread
        field_id: Comment field on that page
        request: Incoming request, for the redirect URL
        get_comments_use_case: Get comments use case from DI
        page: Requested page number

    Returns:
        Comments of the page with pagination and rating summary, or a
        redirect to page 1 when the page does not exist
    """
    response = await get_comments_use_case.execute(
        GetCommentsRequest(page_id=page_id, field_id=field_id, page=page)
    )
    if response.redirected and page != 1:
        return RedirectResponse(
            url=f"{request.url.path}?page=1",
            status_code=status.HTTP_307_TEMPORARY_REDIRECT,
        )
    return response


class SubmitCommentAPIRequest(BaseModel):
    """API request for posting a comment.

    Lengths and formats are checked by the comment service so that every
    field error is reported at once.
    """

    parent_id: int = 0
    author: str = ""
    email: str = ""
    website: str | None = None
    text: str = ""
    stars: int | None = None
    notification: NotificationPreference = NotificationPreference.NONE


@router.post(
    "/{page_id}/{field_id}/comments",
    response_model=SubmitCommentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": SubmitCommentResponse}},
)
async def submit_comment(
    page_id: int,
    field_id: int,
    body: SubmitCommentAPIRequest,
    request: Request,
    submit_comment_use_case: FromDishka[SubmitCommentUseCase],
    x_user_id: int = Header(default=0),
):
    """Post a comment or a reply.

    Args:
        page_id: Page embedding the thread
        field_id: Comment field on that page
        body: Form values
        request: Incoming request, for the submitter fingerprint
        submit_comment_use_case: Submit comment use case from DI
        x_user_id: Front-end user id, 0 for guests

    Returns:
        The accepted comment, or 422 with an error per field
    """
    identity = voter_identity(request, x_user_id)
    response = await submit_comment_use_case.execute(
        SubmitCommentRequest(
            page_id=page_id,
            field_id=field_id,
            **body.model_dump(),
            user_id=identity.user_id,
            ip=identity.ip,
            user_agent=identity.user_agent,
        )
    )
    if not response.accepted:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=response.model_dump(mode="json"),
        )
    return response


@router.get(
    "/{page_id}/{field_id}/comments/{comment_id}/page",
    response_model=LocateCommentResponse,
)
async def locate_comment(
    page_id: int,
    field_id: int,
    comment_id: int,
    locate_comment_use_case: FromDishka[LocateCommentUseCase],
) -> LocateCommentResponse:
    """Find the page a comment is shown on.

    Args:
        page_id: Page embedding the thread
        field_id: Comment field on that page
        comment_id: Comment ID
        locate_comment_use_case: Locate comment use case from DI

    Returns:
        Page number and link to the comment

    Raises:
        HTTPException: If the comment is not shown in this thread
    """
    try:
        return await locate_comment_use_case.execute(
            LocateCommentRequest(
                page_id=page_id, field_id=field_id, comment_id=comment_id
            )
        )
    except NotFoundError as e:
        logfire.info("Comment not located", comment_id=comment_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
