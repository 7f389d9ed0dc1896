"""
Week boundary math for the Sunday-to-Saturday week.

Sunday is the boundary day in both directions: it closes the old week
and opens the new one. No timezone conversion happens here, every
calculation works on the fields of the instant it is given.
"""

from datetime import datetime, timedelta

# ISO weekday numbers (Monday=1 .. Sunday=7)
SUNDAY = 7
SATURDAY = 6


def _days_since_sunday(now: datetime) -> int:
    # Sunday -> 0, Monday -> 1, ... Saturday -> 6
    return now.isoweekday() % 7


def start_of_week(now: datetime) -> datetime:
    """
    Most recent Sunday 00:00 on or before `now`.
    """
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=_days_since_sunday(now))


def end_of_week(now: datetime) -> datetime:
    """
    Upcoming Saturday 23:59:59 on or after `now`.
    """
    days_to_add = SATURDAY - _days_since_sunday(now)
    last_second = now.replace(hour=23, minute=59, second=59, microsecond=0)
    return last_second + timedelta(days=days_to_add)


def is_within_current_week(date: datetime, now: datetime) -> bool:
    """
    True iff `date` falls strictly between the week boundaries of `now`.
    """
    return start_of_week(now) < date < end_of_week(now)


def days_remaining_in_week(now: datetime) -> int:
    """
    Days until the next purge day.

    Returns 0 on Sunday itself (the purge day), otherwise the number of
    days until the coming Sunday (Monday -> 6, Saturday -> 1).
    """
    if now.isoweekday() == SUNDAY:
        return 0
    return 7 - now.isoweekday()


def is_purge_day(now: datetime) -> bool:
    return now.isoweekday() == SUNDAY


def is_same_day(a: datetime, b: datetime) -> bool:
    return a.date() == b.date()


def next_purge_at(now: datetime) -> datetime:
    """
    Sunday 00:00 that opens the following week.
    """
    return start_of_week(now) + timedelta(days=7)
