"""Request fingerprint shared by the comment and vote routes."""

from fastapi import Request

from commentary.domain.value import UserId, VoterIdentity


def voter_identity(request: Request, user_id: int = 0) -> VoterIdentity:
    """Build the submitter/voter fingerprint of a request.

    Args:
        request: Incoming request
        user_id: Value of the ``X-User-Id`` header, 0 for guests

    Returns:
        User id, client IP and user agent
    """
    return VoterIdentity(
        user_id=UserId(max(user_id, 0)),
        ip=request.client.host if request.client else "",
        user_agent=request.headers.get("user-agent", ""),
    )
