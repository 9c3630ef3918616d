"""Comment tree assembly."""

from collections import defaultdict
from typing import Iterable

import logfire

from commentary.domain.model.comment import Comment, sort_key
from commentary.domain.model.tree import CommentNode, OrderedForest
from commentary.domain.value import ROOT_PARENT_ID, CommentId

from .base import Service


class CommentTreeBuilder(Service):
    """Turns the flat comment rows of a thread into an ordered forest.

    Only published comments (approved, or spam kept for its replies) are
    placed. Replies are never dropped for being deep; past ``max_depth``
    they share the deepest rendering level and lose the reply link.
    """

    def build(
        self,
        comments: Iterable[Comment],
        max_depth: int,
        sort_descending: bool = False,
    ) -> OrderedForest:
        """Build the reader-facing forest.

        Args:
            comments: All comments of a thread, any status, any order
            max_depth: Deepest rendering level, also the reply cut-off
            sort_descending: Show newest top-level comments first

        Returns:
            The ordered forest. Comments whose parent is not published are
            unreachable and left out.

        Raises:
            ValueError: If a placed comment was never stored
        """
        children: dict[CommentId, list[Comment]] = defaultdict(list)
        for comment in comments:
            if comment.is_displayable:
                children[comment.parent_id].append(comment)

        for siblings in children.values():
            siblings.sort(key=sort_key)

        top_level = list(children.get(ROOT_PARENT_ID, []))
        if sort_descending:
            top_level.reverse()

        roots = self._build_level(top_level, children, 0, max(max_depth, 0))
        forest = OrderedForest(roots=roots)

        placed = forest.total
        displayable = sum(len(siblings) for siblings in children.values())
        if placed != displayable:
            logfire.debug(
                "Unreachable comments left out of tree",
                placed=placed,
                unreachable=displayable - placed,
            )
        return forest

    def _build_level(
        self,
        siblings: list[Comment],
        children: dict[CommentId, list[Comment]],
        depth: int,
        max_depth: int,
    ) -> list[CommentNode]:
        level = min(depth, max_depth)
        count = len(siblings)
        nodes = []
        for ordinal, comment in enumerate(siblings, start=1):
            if comment.id is None:
                raise ValueError("Cannot place an unsaved comment in a tree")
            nodes.append(
                CommentNode(
                    comment=comment,
                    comment_id=comment.id,
                    depth=depth,
                    level=level,
                    ordinal=ordinal,
                    level_index=f"{level}-{ordinal}",
                    is_first=ordinal == 1,
                    is_last=ordinal == count,
                    sibling_count=count,
                    can_reply=depth < max_depth,
                    children=self._build_level(
                        children.get(comment.id, []), children, depth + 1, max_depth
                    ),
                )
            )
        return nodes
