"""Remote link route.

Target of the links in moderator and notification mails.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import JSONResponse

from commentary.application.usecase.moderation import (
    RemoteActionRequest,
    RemoteActionResponse,
    RemoteActionUseCase,
)
from commentary.domain.model import RemoteLinkRejection

router = APIRouter(tags=["remote"], route_class=DishkaRoute)

_REJECTION_STATUS = {
    RemoteLinkRejection.UNKNOWN_CODE.value: status.HTTP_404_NOT_FOUND,
    RemoteLinkRejection.INVALID_STATUS.value: status.HTTP_400_BAD_REQUEST,
    RemoteLinkRejection.ALREADY_USED.value: status.HTTP_409_CONFLICT,
}


@router.get("/remote", response_model=RemoteActionResponse)
async def remote_action(
    remote_action_use_case: FromDishka[RemoteActionUseCase],
    code: str = Query(),
    status_value: str | None = Query(default=None, alias="status"),
    notification: str | None = Query(default=None),
):
    """Apply a remote link.

    Args:
        remote_action_use_case: Remote action use case from DI
        code: Comment code from the link
        status_value: ``approve``/``1`` or ``spam``/``2``
        notification: ``0`` to unsubscribe from reply notifications

    Returns:
        The outcome with the message to show

    Raises:
        HTTPException: If the link does not carry exactly one action
    """
    try:
        request = RemoteActionRequest(
            code=code, status=status_value, notification=notification
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    response = await remote_action_use_case.execute(request)
    if not response.success and response.reason is not None:
        return JSONResponse(
            status_code=_REJECTION_STATUS[response.reason],
            content=response.model_dump(mode="json"),
        )
    return response
