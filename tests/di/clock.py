"""Mock clock providers for testing."""

from dishka import Scope, provide

from commentary.domain.service import Clock, FixedClock
from commentary.util.di.infrastructure.clock import ClockProvider


class MockClockProvider(ClockProvider):
    """Mock clock provider with a clock tests can move forward."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_clock(self) -> Clock:
        """Provide fixed clock."""
        return FixedClock()
