"""Mock providers for testing."""

from .clock import FakeClock, FakeClockProvider
from .container import build_test_container
from .persistence import MockPersistenceProvider

__all__ = [
    "FakeClock",
    "FakeClockProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
