"""Unit tests for RemoteActionUseCase."""

import pytest
from pydantic import ValidationError

from commentary.application.usecase.moderation import (
    RemoteActionRequest,
    RemoteActionUseCase,
)
from commentary.domain.repository import CommentRepository
from commentary.domain.value import CommentStatus, NotificationPreference
from tests.conftest import make_comment
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestRemoteActionRequest:
    """Link parameter validation."""

    @pytest.mark.parametrize(
        "params",
        [
            {"code": "abc"},
            {"code": "abc", "status": "approve", "notification": "0"},
            {"code": "abc", "notification": "1"},
        ],
    )
    def test_invalid_parameter_combinations(self, params):
        with pytest.raises(ValidationError):
            RemoteActionRequest(**params)

    def test_single_action(self):
        request = RemoteActionRequest(code="abc", notification="0")

        assert request.status is None


class TestRemoteActionUseCase:
    """Tests for RemoteActionUseCase."""

    @pytest.mark.asyncio
    async def test_approve_link(self, unit_env):
        # Arrange
        use_case = await unit_env.get(RemoteActionUseCase)
        repo = await unit_env.get(CommentRepository)
        comment = await repo.save(make_comment(status=CommentStatus.PENDING_APPROVAL))

        # Act
        response = await use_case.execute(
            RemoteActionRequest(code=str(comment.code), status="approve")
        )

        # Assert
        assert response.success
        assert response.action == "status"
        assert response.old_status == "pending_approval"
        assert response.new_status == "approved"
        assert response.page == 1

    @pytest.mark.asyncio
    async def test_second_use_is_rejected(self, unit_env):
        # Arrange
        use_case = await unit_env.get(RemoteActionUseCase)
        repo = await unit_env.get(CommentRepository)
        comment = await repo.save(make_comment(status=CommentStatus.PENDING_APPROVAL))
        request = RemoteActionRequest(code=str(comment.code), status="spam")
        await use_case.execute(request)

        # Act
        response = await use_case.execute(request)

        # Assert
        assert not response.success
        assert response.reason == "already_used"
        assert "already been changed" in response.message

    @pytest.mark.asyncio
    async def test_unknown_status_value(self, unit_env):
        # Arrange
        use_case = await unit_env.get(RemoteActionUseCase)
        repo = await unit_env.get(CommentRepository)
        comment = await repo.save(make_comment())

        # Act
        response = await use_case.execute(
            RemoteActionRequest(code=str(comment.code), status="pending")
        )

        # Assert
        assert response.reason == "invalid_status"
        assert (await repo.find_by_id(comment.id)).remote_change_used is False

    @pytest.mark.asyncio
    async def test_unsubscribe_twice(self, unit_env):
        """Unsubscribing is idempotent and says so the second time."""
        # Arrange
        use_case = await unit_env.get(RemoteActionUseCase)
        repo = await unit_env.get(CommentRepository)
        comment = await repo.save(
            make_comment(notification=NotificationPreference.ON_REPLIES)
        )
        request = RemoteActionRequest(code=str(comment.code), notification="0")

        # Act
        first = await use_case.execute(request)
        second = await use_case.execute(request)

        # Assert
        assert first.success and not first.already_cancelled
        assert second.success and second.already_cancelled
        stored = await repo.find_by_id(comment.id)
        assert stored.notification == NotificationPreference.NONE

    @pytest.mark.asyncio
    async def test_unknown_code(self, unit_env):
        use_case = await unit_env.get(RemoteActionUseCase)

        response = await use_case.execute(
            RemoteActionRequest(code="doesnotexist", notification="0")
        )

        assert not response.success
        assert response.action == "unsubscribe"
        assert response.reason == "unknown_code"
