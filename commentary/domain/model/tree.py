"""Comment tree structures handed to the rendering layer."""

from typing import Iterator

from commentary.domain.model.comment import Comment
from commentary.domain.model.common import DomainModel
from commentary.domain.value import CommentId, CommentStatus


class CommentNode(DomainModel):
    """A comment placed in the tree, with the metadata templates need.

    Attributes:
        comment_id: ID of the placed comment, always assigned
        depth: True nesting depth, 0 for top-level comments
        level: Rendering level, ``depth`` clamped to the max reply depth
        ordinal: 1-based position among its siblings
        level_index: ``"<level>-<ordinal>"``, stable per rendering level
        sibling_count: Number of siblings including this node
        can_reply: Whether the reply link is offered
    """

    comment: Comment
    comment_id: CommentId
    depth: int
    level: int
    ordinal: int
    level_index: str
    is_first: bool
    is_last: bool
    sibling_count: int
    can_reply: bool
    children: list["CommentNode"] = []

    @property
    def is_removed(self) -> bool:
        """Text is hidden behind a "removed by moderator" placeholder."""
        return self.comment.status == CommentStatus.SPAM_WITH_REPLIES

    def walk(self) -> Iterator["CommentNode"]:
        """Yield this node and its descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()


class OrderedForest(DomainModel):
    """Ordered top-level nodes of one thread."""

    roots: list[CommentNode] = []

    def flatten(self) -> list[CommentNode]:
        """Depth-first order, each node directly followed by its replies."""
        return [node for root in self.roots for node in root.walk()]

    @property
    def total(self) -> int:
        return len(self.flatten())

    @property
    def is_empty(self) -> bool:
        return not self.roots
