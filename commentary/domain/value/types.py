"""Domain value objects for Commentary.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
import secrets
import string
from enum import IntEnum

from pydantic import field_validator

from commentary.domain.value.common import RootValueObject, ValueObject
from commentary.domain.value.identifiers import FieldId, PageId, UserId


class CommentStatus(IntEnum):
    """Moderation status of a comment.

    The integer values are the ones stored in the database.
    """

    PENDING_APPROVAL = 0
    APPROVED = 1
    SPAM = 2
    # Marked as spam, but kept in the tree because it has replies
    SPAM_WITH_REPLIES = 3

    @property
    def is_displayable(self) -> bool:
        """Whether comments with this status appear in the reader-facing tree."""
        return self in DISPLAYABLE_STATUSES

    @property
    def is_spam(self) -> bool:
        return self in (CommentStatus.SPAM, CommentStatus.SPAM_WITH_REPLIES)

    @classmethod
    def parse_remote(cls, value: str) -> "CommentStatus | None":
        """Parse the ``status`` parameter of a remote link.

        Accepts the words used in links (``approve``, ``spam``) and the
        numeric form (``1``, ``2``). Anything else is not a valid remote
        target and yields None.
        """
        return _REMOTE_STATUS_VALUES.get(value.strip().lower())


DISPLAYABLE_STATUSES = frozenset(
    {CommentStatus.APPROVED, CommentStatus.SPAM_WITH_REPLIES}
)

# Statuses a moderator (remote link or backend) may ask for
MODERATION_TARGETS = frozenset({CommentStatus.APPROVED, CommentStatus.SPAM})

_REMOTE_STATUS_VALUES = {
    "approve": CommentStatus.APPROVED,
    "approved": CommentStatus.APPROVED,
    "1": CommentStatus.APPROVED,
    "spam": CommentStatus.SPAM,
    "2": CommentStatus.SPAM,
}


class NotificationPreference(IntEnum):
    """Which new comments a commenter wants to hear about."""

    NONE = 0
    ON_REPLIES = 1
    ON_ALL = 2


class VoteDirection(IntEnum):
    """Direction of a vote, stored as +1 / -1."""

    UP = 1
    DOWN = -1

    @classmethod
    def parse(cls, value: str) -> "VoteDirection":
        """Parse ``up`` / ``down``."""
        try:
            return {"up": cls.UP, "down": cls.DOWN}[value.strip().lower()]
        except KeyError:
            raise ValueError(f"Invalid vote direction: {value!r}")


class ThreadKey(ValueObject):
    """Identifies one comment thread instance (a comment field on a page)."""

    page_id: PageId
    field_id: FieldId


class VoterIdentity(ValueObject):
    """Heuristic fingerprint of a voter.

    Guests all share ``user_id`` 0, so ip and user agent tell them apart.
    This is a cheap fingerprint, not an authenticated identity.
    """

    user_id: UserId = UserId(0)
    ip: str = ""
    user_agent: str = ""


REMOTE_CODE_LENGTH = 120
_REMOTE_CODE_ALPHABET = string.ascii_letters + string.digits


class RemoteCode(RootValueObject[str]):
    """Capability token embedded in remote links.

    120 alphanumeric characters, unique per comment.
    """

    @field_validator("root")
    @classmethod
    def validate_code_format(cls, v: str) -> str:
        """Validate the code is a non-empty alphanumeric string."""
        if not re.fullmatch(r"[A-Za-z0-9]{1,255}", v):
            raise ValueError("Code must be 1-255 alphanumeric characters")
        return v

    @classmethod
    def generate(cls) -> "RemoteCode":
        """Create a new random code."""
        return cls(
            root="".join(
                secrets.choice(_REMOTE_CODE_ALPHABET)
                for _ in range(REMOTE_CODE_LENGTH)
            )
        )


class CommentForm(ValueObject):
    """Raw values of the comment form, before validation."""

    author: str = ""
    email: str = ""
    website: str | None = None
    text: str = ""
    stars: int | None = None
    notification: NotificationPreference = NotificationPreference.NONE
