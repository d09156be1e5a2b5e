"""Time source."""

from datetime import datetime, timezone


class Clock:
    """Source of the current time (timezone-aware UTC).

    Injected wherever business rules compare or record instants so tests
    can control time.
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
