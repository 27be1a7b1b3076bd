"""Bookable slot generation for a doctor's rolling booking window.

Pure functions only: the same (now, slots_booked) always yields the same
buckets, so views can regenerate slots on every state change.

Window rules:
- 7 calendar days starting today
- 30-minute slots from 10:00 until (not including) 21:00
- Today starts at the next hour after ``now`` (minute 30 when the current
  minute is past :30), never before 10:00
- Labels booked in ``slots_booked[date_key]`` are skipped
"""
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any, FrozenSet, List, Mapping, Optional

from medibook import config
from medibook.formatting import (
    format_date_key,
    format_time_label,
    normalize_time_label,
    weekday_abbreviation,
)


@dataclass(frozen=True)
class Slot:
    """One candidate appointment start."""
    datetime: datetime
    time: str

    @property
    def date_key(self) -> str:
        return format_date_key(self.datetime.date())


@dataclass(frozen=True)
class DayBucket:
    """Available slots of one calendar day, earliest first."""
    date: date
    slots: List[Slot] = field(default_factory=list)

    @property
    def date_key(self) -> str:
        return format_date_key(self.date)

    @property
    def weekday(self) -> str:
        return weekday_abbreviation(self.date)

    @property
    def times(self) -> List[str]:
        return [slot.time for slot in self.slots]


def booked_labels(slots_booked: Optional[Mapping[str, Any]], date_key: str) -> FrozenSet[str]:
    """
    Return the normalized labels booked on ``date_key``.

    Anything that is not a list of strings counts as no bookings.
    """
    if not isinstance(slots_booked, Mapping):
        return frozenset()
    entries = slots_booked.get(date_key)
    if not isinstance(entries, (list, tuple, set, frozenset)):
        return frozenset()
    return frozenset(
        normalize_time_label(entry) for entry in entries if isinstance(entry, str)
    )


def window_start(now: datetime, day_offset: int) -> datetime:
    """
    First candidate instant for the day ``day_offset`` days after ``now``.

    Today uses the coarse "next half hour after opening" rule: the hour is
    bumped by one only after 10 o'clock and the minute is 30 whenever the
    current minute is past 30. An hour of 24 lands on the next day.
    """
    day = now.date() + timedelta(days=day_offset)
    if day_offset == 0:
        hour = now.hour + 1 if now.hour > config.OPENING_HOUR else config.OPENING_HOUR
        minute = 30 if now.minute > 30 else 0
        return datetime.combine(day, time()) + timedelta(hours=hour, minutes=minute)
    return datetime.combine(day, time(config.OPENING_HOUR))


def window_end(now: datetime, day_offset: int) -> datetime:
    """Closing instant of the day ``day_offset`` days after ``now``."""
    day = now.date() + timedelta(days=day_offset)
    return datetime.combine(day, time(config.CLOSING_HOUR))


def slots_for_day(
    now: datetime,
    day_offset: int,
    slots_booked: Optional[Mapping[str, Any]] = None
) -> DayBucket:
    """Enumerate the unbooked slots of one day in the window."""
    day = now.date() + timedelta(days=day_offset)
    step = timedelta(minutes=config.SLOT_DURATION_MINUTES)
    current = window_start(now, day_offset)
    end = window_end(now, day_offset)

    slots = []
    while current < end:
        label = format_time_label(current)
        if label not in booked_labels(slots_booked, format_date_key(current.date())):
            slots.append(Slot(datetime=current, time=label))
        current += step

    return DayBucket(date=day, slots=slots)


def plan_slots(
    now: datetime,
    slots_booked: Optional[Mapping[str, Any]] = None,
    days: int = config.BOOKING_WINDOW_DAYS
) -> List[DayBucket]:
    """
    Build the day buckets of available slots for the next ``days`` days.

    Args:
        now: Reference instant in local wall-clock time (naive)
        slots_booked: Doctor's ``{date_key: [time_label, ...]}`` map
        days: Window length in calendar days

    Returns:
        Non-empty day buckets, today first

    Example:
        >>> buckets = plan_slots(datetime(2025, 7, 9, 9, 0))
        >>> buckets[0].times[0], buckets[0].times[-1]
        ('10:00 AM', '08:30 PM')
    """
    buckets = []
    for day_offset in range(days):
        bucket = slots_for_day(now, day_offset, slots_booked)
        if bucket.slots:
            buckets.append(bucket)
    return buckets
