"""Strongly typed identifiers for Commentary domain entities.

Comment, vote and queue ids are integers assigned by the store.
Page and field ids come from the embedding CMS; together they name one
comment thread.
"""

from typing import NewType

CommentId = NewType("CommentId", int)
VoteId = NewType("VoteId", int)
QueueEntryId = NewType("QueueEntryId", int)
PageId = NewType("PageId", int)
FieldId = NewType("FieldId", int)
UserId = NewType("UserId", int)

# parent_id of a top-level comment
ROOT_PARENT_ID = CommentId(0)
