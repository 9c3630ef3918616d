"""Unit tests for SubmitCommentUseCase."""

import pytest

from commentary.application.usecase.comment import (
    SubmitCommentRequest,
    SubmitCommentUseCase,
)
from commentary.domain.repository import CommentRepository
from tests.conftest import THREAD
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _request(**overrides) -> SubmitCommentRequest:
    values = {
        "page_id": THREAD.page_id,
        "field_id": THREAD.field_id,
        "author": "Ada",
        "email": "ada@example.org",
        "text": "Nice write-up.",
        "ip": "192.0.2.1",
        "user_agent": "pytest",
    }
    values.update(overrides)
    return SubmitCommentRequest(**values)


class TestSubmitCommentUseCase:
    """Tests for SubmitCommentUseCase."""

    @pytest.mark.asyncio
    async def test_accepted_submission(self, unit_env):
        # Arrange
        use_case = await unit_env.get(SubmitCommentUseCase)
        repo = await unit_env.get(CommentRepository)

        # Act
        response = await use_case.execute(_request(user_id=7))

        # Assert
        assert response.accepted
        assert response.status == "pending_approval"
        assert response.errors == {}
        stored = await repo.find_by_id(response.comment_id)
        assert stored.user_id == 7
        assert stored.user_agent == "pytest"

    @pytest.mark.asyncio
    async def test_rejected_submission(self, unit_env):
        use_case = await unit_env.get(SubmitCommentUseCase)

        response = await use_case.execute(_request(email="nope"))

        assert not response.accepted
        assert response.comment_id is None
        assert set(response.errors) == {"email"}
