"""Test harness for unit, integration and E2E tests.

Integration tests assume a PostgreSQL database is reachable through
``DATABASE__URL`` with the migrations applied.
"""

import pytest_asyncio

from commentary.util.di import Component
from tests.di import build_test_container


def create_env_fixture(
    unmock: set[Component] | None = None, env: dict[str, str] | None = None
):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Sets the given environment variables (settings overrides)
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access

    Args:
        unmock: Components to use real implementations for
        env: Environment variables read by Settings, e.g.
            ``{"COMMENTS__MODERATION": "none"}``

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_something(unit_env):
            service = await unit_env.get(VoteService)
    """

    @pytest_asyncio.fixture
    async def _test_environment(monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "test")
        for key, value in (env or {}).items():
            monkeypatch.setenv(key, value)

        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
