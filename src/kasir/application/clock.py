"""Time source for the use cases.

Handlers ask a clock for ``now`` once per call and pass it down
explicitly; the domain never reads the wall clock itself.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    return datetime.now(timezone.utc)


def fixed_clock(moment: datetime) -> Clock:
    """A clock frozen at ``moment``, for reproducible runs and tests."""
    return lambda: moment
