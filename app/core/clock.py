"""
Injected time source.

Deadline logic never reads the wall clock directly: callers pass ``now``
explicitly, or hand a :data:`Clock` to the services that need one.
Timestamps are naive UTC, matching what the database stores.
"""

import datetime
from typing import Callable

Clock = Callable[[], datetime.datetime]


def system_clock() -> datetime.datetime:
    """Current naive UTC time."""
    return datetime.datetime.utcnow()


class FixedClock:
    """A clock frozen at a given instant.  Can be moved forward in tests."""

    def __init__(self, now: datetime.datetime):
        self.now = now

    def __call__(self) -> datetime.datetime:
        return self.now

    def advance(self, **delta) -> datetime.datetime:
        self.now = self.now + datetime.timedelta(**delta)
        return self.now
