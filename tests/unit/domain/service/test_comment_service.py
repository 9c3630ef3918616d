"""Unit tests for CommentService."""

import pytest

from commentary.domain.model import DeletionResult, SubmissionAccepted, SubmissionInvalid
from commentary.domain.repository import (
    CommentRepository,
    NotificationQueueRepository,
    VoteRepository,
)
from commentary.domain.service import (
    CommentService,
    MailSender,
    ModerationService,
    ThreadService,
    VoteService,
)
from commentary.domain.service.comment_service import MESSAGE_PENDING, MESSAGE_PUBLISHED
from commentary.domain.value import (
    ROOT_PARENT_ID,
    CommentForm,
    CommentStatus,
    FieldId,
    NotificationPreference,
    PageId,
    ThreadKey,
    VoteDirection,
    VoterIdentity,
)
from tests.conftest import THREAD, make_comment
from tests.harness import create_env_fixture

unit_env = create_env_fixture(
    env={"COMMENTS__MODERATOR_EMAILS": '["moderator@example.org"]'}
)
open_env = create_env_fixture(env={"COMMENTS__MODERATION": "none"})
stars_required_env = create_env_fixture(env={"COMMENTS__STAR_RATING": "required"})
stars_off_env = create_env_fixture(env={"COMMENTS__STAR_RATING": "off"})
replies_only_env = create_env_fixture(
    env={"COMMENTS__NOTIFICATION_MODE": "replies_only"}
)
shallow_env = create_env_fixture(env={"COMMENTS__MAX_REPLY_DEPTH": "1"})

VISITOR = VoterIdentity(ip="192.0.2.10", user_agent="Mozilla/5.0")


def _form(**overrides) -> CommentForm:
    values = {
        "author": "Ada",
        "email": "ada@example.org",
        "text": "Interesting article.",
    }
    values.update(overrides)
    return CommentForm(**values)


class TestSubmitComment:
    """Tests for submit_comment."""

    @pytest.mark.asyncio
    async def test_comment_waits_for_approval(self, unit_env):
        """With moderation, new comments are stored as pending."""
        # Arrange
        service = await unit_env.get(CommentService)
        mail = await unit_env.get(MailSender)

        # Act
        outcome = await service.submit_comment(THREAD, _form(), ROOT_PARENT_ID, VISITOR)

        # Assert
        assert isinstance(outcome, SubmissionAccepted)
        assert outcome.comment.status == CommentStatus.PENDING_APPROVAL
        assert outcome.message == MESSAGE_PENDING
        assert outcome.page is None
        assert outcome.comment.ip == VISITOR.ip
        assert len(mail.sent_to("moderator@example.org")) == 1

    @pytest.mark.asyncio
    async def test_comment_published_without_moderation(self, open_env):
        """Without moderation the comment is shown right away."""
        # Arrange
        service = await open_env.get(CommentService)

        # Act
        outcome = await service.submit_comment(THREAD, _form(), ROOT_PARENT_ID, VISITOR)

        # Assert
        assert isinstance(outcome, SubmissionAccepted)
        assert outcome.comment.status == CommentStatus.APPROVED
        assert outcome.message == MESSAGE_PUBLISHED
        assert outcome.page == 1

    @pytest.mark.asyncio
    async def test_values_are_trimmed(self, unit_env):
        # Arrange
        service = await unit_env.get(CommentService)

        # Act
        outcome = await service.submit_comment(
            THREAD,
            _form(author="  Ada ", email=" ada@example.org ", website="  "),
            ROOT_PARENT_ID,
            VISITOR,
        )

        # Assert
        assert outcome.comment.author == "Ada"
        assert outcome.comment.email == "ada@example.org"
        assert outcome.comment.website is None

    @pytest.mark.asyncio
    async def test_sort_index_follows_insertion(self, unit_env):
        """Each comment of a thread gets the next sort index."""
        # Arrange
        service = await unit_env.get(CommentService)

        # Act
        first = await service.submit_comment(THREAD, _form(), ROOT_PARENT_ID, VISITOR)
        second = await service.submit_comment(THREAD, _form(), ROOT_PARENT_ID, VISITOR)

        # Assert
        assert second.comment.sort_index == first.comment.sort_index + 1

    @pytest.mark.asyncio
    async def test_comment_after_deletions_is_last(self, open_env):
        """Deleting earlier comments does not let a new one jump the queue."""
        # Arrange
        service = await open_env.get(CommentService)
        thread_service = await open_env.get(ThreadService)
        submitted = [
            await service.submit_comment(
                THREAD, _form(text=f"Comment {i}"), ROOT_PARENT_ID, VISITOR
            )
            for i in range(5)
        ]
        for outcome in submitted[:2]:
            await service.delete_comment(outcome.comment.id)

        # Act
        newest = await service.submit_comment(
            THREAD, _form(text="Newest"), ROOT_PARENT_ID, VISITOR
        )

        # Assert
        assert newest.comment.sort_index == submitted[-1].comment.sort_index + 1
        forest = await thread_service.get_forest(THREAD)
        assert [node.comment_id for node in forest.flatten()] == [
            outcome.comment.id for outcome in submitted[2:]
        ] + [newest.comment.id]

    @pytest.mark.asyncio
    async def test_each_comment_gets_its_own_code(self, unit_env):
        service = await unit_env.get(CommentService)

        first = await service.submit_comment(THREAD, _form(), ROOT_PARENT_ID, VISITOR)
        second = await service.submit_comment(THREAD, _form(), ROOT_PARENT_ID, VISITOR)

        assert first.comment.code != second.comment.code

    @pytest.mark.asyncio
    async def test_published_reply_queues_notification(self, open_env):
        """Auto-published replies notify the subscribed parent author."""
        # Arrange
        service = await open_env.get(CommentService)
        queue_repo = await open_env.get(NotificationQueueRepository)
        parent = await service.submit_comment(
            THREAD,
            _form(email="alice@example.org", notification=NotificationPreference.ON_REPLIES),
            ROOT_PARENT_ID,
            VISITOR,
        )

        # Act
        reply = await service.submit_comment(
            THREAD, _form(email="bob@example.org"), parent.comment.id, VISITOR
        )

        # Assert
        assert await queue_repo.find_recipients(reply.comment.id) == {
            "alice@example.org"
        }


class TestValidation:
    """Form validation."""

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"author": "   "}, "author"),
            ({"author": "x" * 129}, "author"),
            ({"email": ""}, "email"),
            ({"email": "not-an-email"}, "email"),
            ({"website": "ftp://example.org"}, "website"),
            ({"text": ""}, "text"),
            ({"text": "x" * 1025}, "text"),
            ({"text": "Click <a href='x'>here</a>"}, "text"),
            ({"stars": 6}, "stars"),
        ],
    )
    @pytest.mark.asyncio
    async def test_invalid_field(self, unit_env, overrides, field):
        """Invalid forms are rejected and nothing is stored."""
        # Arrange
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)

        # Act
        outcome = await service.submit_comment(
            THREAD, _form(**overrides), ROOT_PARENT_ID, VISITOR
        )

        # Assert
        assert isinstance(outcome, SubmissionInvalid)
        assert field in outcome.errors
        assert await comment_repo.find_by_thread(THREAD) == []

    @pytest.mark.asyncio
    async def test_all_errors_are_reported_at_once(self, unit_env):
        service = await unit_env.get(CommentService)

        outcome = await service.submit_comment(
            THREAD, CommentForm(), ROOT_PARENT_ID, VISITOR
        )

        assert set(outcome.errors) == {"author", "email", "text"}

    @pytest.mark.asyncio
    async def test_valid_website_is_kept(self, unit_env):
        service = await unit_env.get(CommentService)

        outcome = await service.submit_comment(
            THREAD, _form(website="https://ada.example.org"), ROOT_PARENT_ID, VISITOR
        )

        assert outcome.comment.website == "https://ada.example.org"

    @pytest.mark.asyncio
    async def test_reply_to_unknown_parent(self, unit_env):
        service = await unit_env.get(CommentService)

        outcome = await service.submit_comment(THREAD, _form(), 42, VISITOR)

        assert isinstance(outcome, SubmissionInvalid)
        assert "parent_id" in outcome.errors

    @pytest.mark.asyncio
    async def test_reply_across_threads(self, unit_env):
        """A parent from another thread is not a valid parent."""
        # Arrange
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        other_thread = ThreadKey(page_id=PageId(2), field_id=FieldId(1))
        parent = await comment_repo.save(make_comment(thread=other_thread))

        # Act
        outcome = await service.submit_comment(THREAD, _form(), parent.id, VISITOR)

        # Assert
        assert isinstance(outcome, SubmissionInvalid)
        assert "parent_id" in outcome.errors

    @pytest.mark.asyncio
    async def test_reply_to_pending_parent(self, unit_env):
        """Replies need a published parent."""
        # Arrange
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        parent = await comment_repo.save(
            make_comment(status=CommentStatus.PENDING_APPROVAL)
        )

        # Act
        outcome = await service.submit_comment(THREAD, _form(), parent.id, VISITOR)

        # Assert
        assert "parent_id" in outcome.errors

    @pytest.mark.asyncio
    async def test_required_rating(self, stars_required_env):
        service = await stars_required_env.get(CommentService)

        missing = await service.submit_comment(THREAD, _form(), ROOT_PARENT_ID, VISITOR)
        given = await service.submit_comment(
            THREAD, _form(stars=4), ROOT_PARENT_ID, VISITOR
        )

        assert "stars" in missing.errors
        assert isinstance(given, SubmissionAccepted)
        assert given.comment.stars == 4

    @pytest.mark.asyncio
    async def test_rating_disabled(self, stars_off_env):
        service = await stars_off_env.get(CommentService)

        outcome = await service.submit_comment(
            THREAD, _form(stars=3), ROOT_PARENT_ID, VISITOR
        )

        assert "stars" in outcome.errors

    @pytest.mark.asyncio
    async def test_all_subscription_needs_all_mode(self, replies_only_env):
        """Subscribing to all comments is not offered in replies-only mode."""
        service = await replies_only_env.get(CommentService)

        outcome = await service.submit_comment(
            THREAD,
            _form(notification=NotificationPreference.ON_ALL),
            ROOT_PARENT_ID,
            VISITOR,
        )

        assert "notification" in outcome.errors

    @pytest.mark.asyncio
    async def test_no_reply_subscription_past_reply_depth(self, shallow_env):
        """Comments that cannot be replied to cannot subscribe to replies."""
        # Arrange
        service = await shallow_env.get(CommentService)
        comment_repo = await shallow_env.get(CommentRepository)
        parent = await comment_repo.save(make_comment())

        # Act
        top = await service.submit_comment(
            THREAD,
            _form(notification=NotificationPreference.ON_REPLIES),
            ROOT_PARENT_ID,
            VISITOR,
        )
        reply = await service.submit_comment(
            THREAD,
            _form(notification=NotificationPreference.ON_REPLIES),
            parent.id,
            VISITOR,
        )

        # Assert
        assert isinstance(top, SubmissionAccepted)
        assert "notification" in reply.errors


class TestDeleteComment:
    """Tests for delete_comment."""

    @pytest.mark.asyncio
    async def test_delete_leaf_removes_votes(self, unit_env):
        """A comment without replies is deleted with its votes."""
        # Arrange
        service = await unit_env.get(CommentService)
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        vote_repo = await unit_env.get(VoteRepository)
        comment = await comment_repo.save(make_comment())
        await vote_service.cast_vote(comment.id, VISITOR, VoteDirection.UP)

        # Act
        result = await service.delete_comment(comment.id)

        # Assert
        assert result == DeletionResult.DELETED
        assert await comment_repo.find_by_id(comment.id) is None
        assert await vote_repo.find_by_comment(comment.id) == []

    @pytest.mark.asyncio
    async def test_comment_with_replies_is_kept(self, unit_env):
        """Deleting a comment with replies is refused."""
        # Arrange
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        parent = await comment_repo.save(make_comment())
        await comment_repo.save(
            make_comment(parent_id=parent.id, status=CommentStatus.PENDING_APPROVAL)
        )

        # Act
        result = await service.delete_comment(parent.id)

        # Assert
        assert result == DeletionResult.REFUSED_HAS_REPLIES
        assert await comment_repo.find_by_id(parent.id) is not None

    @pytest.mark.asyncio
    async def test_deleting_last_reply_of_spam_parent(self, unit_env):
        """A spam parent without replies left is no longer shown."""
        # Arrange
        service = await unit_env.get(CommentService)
        moderation = await unit_env.get(ModerationService)
        comment_repo = await unit_env.get(CommentRepository)
        parent = await comment_repo.save(make_comment())
        reply = await comment_repo.save(make_comment(parent_id=parent.id))
        await moderation.set_status(parent.id, CommentStatus.SPAM)

        # Act
        result = await service.delete_comment(reply.id)

        # Assert
        assert result == DeletionResult.DELETED
        stored = await comment_repo.find_by_id(parent.id)
        assert stored.status == CommentStatus.SPAM

    @pytest.mark.asyncio
    async def test_unknown_comment(self, unit_env):
        service = await unit_env.get(CommentService)

        assert await service.delete_comment(999) == DeletionResult.NOT_FOUND
