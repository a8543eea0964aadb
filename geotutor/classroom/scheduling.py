"""
Review scheduling - increasing-interval spaced repetition.

The first review uses the module's own interval from the catalog. Later
reviews follow a fixed 5 / 8 / 13 day progression that stops growing at 13.
"""

from datetime import datetime, timedelta


# Interval (days) by review count before the event. Counts past the end use the last entry.
FOLLOW_UP_INTERVALS = {1: 5, 2: 8}
MAX_INTERVAL_DAYS = 13


def next_interval_days(review_count: int, base_interval: int) -> int:
    """
    Days until the next review.

    Args:
        review_count: reviewCount before the current event (0 for the first scheduling)
        base_interval: the module's catalog review interval in days

    Returns:
        Interval in days
    """
    if review_count < 0:
        raise ValueError(f"review_count must be >= 0, got {review_count}")
    if review_count == 0:
        return base_interval
    return FOLLOW_UP_INTERVALS.get(review_count, MAX_INTERVAL_DAYS)


def add_calendar_days(moment: datetime, days: int) -> datetime:
    """Advance the calendar date by ``days``, keeping time of day and tzinfo."""
    target_date = moment.date() + timedelta(days=days)
    return datetime.combine(target_date, moment.timetz())


def next_review_date(now: datetime, review_count: int, base_interval: int) -> datetime:
    """Compute the next review timestamp for a scheduling event happening at ``now``."""
    return add_calendar_days(now, next_interval_days(review_count, base_interval))
