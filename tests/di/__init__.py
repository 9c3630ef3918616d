"""Mock providers for testing."""

from .clock import MockClockProvider
from .mail import MockMailProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockClockProvider",
    "MockMailProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
