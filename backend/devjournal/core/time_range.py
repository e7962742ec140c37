"""Time Range Windows — pure cutoff computation for AI summaries."""

from datetime import datetime, timedelta

from devjournal.core.domain_types import TimeRange

_WINDOWS = {
    TimeRange.DAILY: timedelta(days=1),
    TimeRange.WEEKLY: timedelta(days=7),
}


def window_start(time_range: TimeRange, now: datetime) -> datetime:
    """Earliest entry date included in the given window ending at `now`."""
    return now - _WINDOWS[time_range]
