"""Controllable time for testing."""

from datetime import datetime, timedelta, timezone

from dishka import Provider, Scope, provide

from intranet.util.clock import Clock


class FakeClock(Clock):
    """Clock that only moves when told to.

    Starts at the real current time so session tokens issued in tests are
    not already expired.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime.now(timezone.utc)

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> datetime:
        """Move forward by ``timedelta(**kwargs)``."""
        self.current += timedelta(**kwargs)
        return self.current

    def rewind(self, **kwargs: float) -> datetime:
        """Move backward, as a skewed clock on another node would."""
        self.current -= timedelta(**kwargs)
        return self.current


class FakeClockProvider(Provider):
    """Overrides the production clock in every test container."""

    @provide(scope=Scope.APP)
    def get_clock(self) -> Clock:
        return FakeClock()
