"""
Time adapters implementing the analytics TimePort.

The display timezone for calendar days comes from rules, not from here.
"""

from __future__ import annotations

from datetime import UTC, datetime


class LocalTimeAdapter:
    """
    System clock.
    """

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        return datetime.now(UTC)


class FrozenTimeAdapter(LocalTimeAdapter):
    """
    Time adapter that returns a fixed time.

    Useful for deterministic testing.
    """

    def __init__(self, frozen_utc: datetime) -> None:
        """
        Initialize with frozen time.

        Args:
            frozen_utc: The time to return from now_utc(); naive means UTC
        """
        if frozen_utc.tzinfo is None:
            frozen_utc = frozen_utc.replace(tzinfo=UTC)
        self._frozen_utc = frozen_utc.astimezone(UTC)

    def now_utc(self) -> datetime:
        """Get frozen UTC time."""
        return self._frozen_utc
