"""Unit tests for CommentTreeBuilder."""

import pytest

from commentary.domain.service import CommentTreeBuilder
from commentary.domain.value import CommentStatus
from tests.conftest import make_comment


def _ids(nodes):
    return [node.comment.id for node in nodes]


class TestBuildTree:
    """Tests for building the ordered forest."""

    def test_only_published_comments_are_placed(self):
        """Pending and spam comments are left out, spam with replies stays."""
        # Arrange
        comments = [
            make_comment(1, status=CommentStatus.APPROVED),
            make_comment(2, status=CommentStatus.PENDING_APPROVAL),
            make_comment(3, status=CommentStatus.SPAM),
            make_comment(4, status=CommentStatus.SPAM_WITH_REPLIES),
            make_comment(5, parent_id=4, status=CommentStatus.APPROVED),
        ]

        # Act
        forest = CommentTreeBuilder().build(comments, max_depth=3)

        # Assert
        assert sorted(_ids(forest.flatten())) == [1, 4, 5]
        assert forest.total == 3

    def test_parents_precede_children_in_flattened_order(self):
        """Depth-first order places each node after its parent."""
        # Arrange
        comments = [
            make_comment(1, sort_index=1),
            make_comment(2, sort_index=2),
            make_comment(3, parent_id=1, sort_index=3),
            make_comment(4, parent_id=3, sort_index=4),
            make_comment(5, parent_id=2, sort_index=5),
            make_comment(6, parent_id=1, sort_index=6),
        ]

        # Act
        flat = CommentTreeBuilder().build(comments, max_depth=3).flatten()

        # Assert
        assert _ids(flat) == [1, 3, 4, 6, 2, 5]
        position = {node.comment.id: i for i, node in enumerate(flat)}
        for node in flat:
            if not node.comment.is_top_level:
                assert position[node.comment.parent_id] < position[node.comment.id]

    def test_input_order_does_not_matter(self):
        """Siblings are ordered by sort index whatever the row order."""
        # Arrange
        comments = [
            make_comment(3, parent_id=1, sort_index=3),
            make_comment(2, sort_index=2),
            make_comment(1, sort_index=1),
        ]

        # Act
        forest = CommentTreeBuilder().build(comments, max_depth=3)

        # Assert
        assert _ids(forest.flatten()) == [1, 3, 2]

    def test_descending_reverses_only_top_level(self):
        """Newest-first flips the roots but keeps reply order."""
        # Arrange
        comments = [
            make_comment(1, sort_index=1),
            make_comment(2, sort_index=2),
            make_comment(3, parent_id=1, sort_index=3),
            make_comment(4, parent_id=1, sort_index=4),
        ]
        builder = CommentTreeBuilder()

        # Act
        ascending = builder.build(comments, max_depth=3)
        descending = builder.build(comments, max_depth=3, sort_descending=True)

        # Assert
        assert _ids(ascending.roots) == [1, 2]
        assert _ids(descending.roots) == [2, 1]
        assert _ids(descending.roots[1].children) == [3, 4]
        assert _ids(ascending.roots[0].children) == [3, 4]

    def test_deep_replies_are_clamped_not_dropped(self):
        """Replies past the max depth share the deepest level."""
        # Arrange
        comments = [make_comment(1)]
        for comment_id in range(2, 6):
            comments.append(make_comment(comment_id, parent_id=comment_id - 1))

        # Act
        flat = CommentTreeBuilder().build(comments, max_depth=2).flatten()

        # Assert
        assert [node.depth for node in flat] == [0, 1, 2, 3, 4]
        assert [node.level for node in flat] == [0, 1, 2, 2, 2]
        assert [node.can_reply for node in flat] == [True, True, False, False, False]

    def test_sibling_metadata(self):
        """Ordinal, first/last flags and level index describe the position."""
        # Arrange
        comments = [
            make_comment(1, sort_index=1),
            make_comment(2, parent_id=1, sort_index=2),
            make_comment(3, parent_id=1, sort_index=3),
            make_comment(4, parent_id=1, sort_index=4),
        ]

        # Act
        replies = CommentTreeBuilder().build(comments, max_depth=3).roots[0].children

        # Assert
        assert [node.ordinal for node in replies] == [1, 2, 3]
        assert [node.level_index for node in replies] == ["1-1", "1-2", "1-3"]
        assert replies[0].is_first and not replies[0].is_last
        assert replies[2].is_last and not replies[2].is_first
        assert all(node.sibling_count == 3 for node in replies)

    def test_replies_to_unpublished_parents_are_unreachable(self):
        """A reply whose parent is pending is not shown."""
        # Arrange
        comments = [
            make_comment(1, status=CommentStatus.PENDING_APPROVAL),
            make_comment(2, parent_id=1),
            make_comment(3),
        ]

        # Act
        forest = CommentTreeBuilder().build(comments, max_depth=3)

        # Assert
        assert _ids(forest.flatten()) == [3]

    def test_empty_thread(self):
        """No comments gives an empty forest."""
        forest = CommentTreeBuilder().build([], max_depth=3)

        assert forest.is_empty
        assert forest.flatten() == []

    def test_zero_max_depth_flattens_rendering_only(self):
        """With max depth 0 nothing can be replied to, but edges remain."""
        # Arrange
        comments = [
            make_comment(1),
            make_comment(2, parent_id=1),
            make_comment(3, parent_id=2),
        ]

        # Act
        forest = CommentTreeBuilder().build(comments, max_depth=0)
        flat = forest.flatten()

        # Assert
        assert [node.level for node in flat] == [0, 0, 0]
        assert [node.depth for node in flat] == [0, 1, 2]
        assert not any(node.can_reply for node in flat)
        assert _ids(forest.roots[0].children) == [2]

    def test_unsaved_comment_is_rejected(self):
        """Every placed comment needs the id its replies point to."""
        comments = [make_comment(1), make_comment(parent_id=1)]

        with pytest.raises(ValueError):
            CommentTreeBuilder().build(comments, max_depth=3)

    def test_nodes_carry_comment_ids(self):
        forest = CommentTreeBuilder().build(
            [make_comment(1), make_comment(2, parent_id=1)], max_depth=3
        )

        assert [node.comment_id for node in forest.flatten()] == [1, 2]
