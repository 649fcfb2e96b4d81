"""Completion Calculations - Pure functions for day status and streaks.

All functions are pure: same input always produces same output, no side effects.
"""

from datetime import date, timedelta
from typing import Optional

from .calendar_ranges import date_key
from .catalog import MAX_STREAK_DAYS, PARTIAL_RATIO, TIME_SLOTS
from .models import DayRecord, DayStatus, RecordStore


def build_checklist(record: DayRecord) -> list[bool]:
    """Flatten a record into the booleans that count towards completion.

    Only supplements present in the record count, so the checklist length
    depends on what was toggled that day, not on the catalog size.

    Args:
        record: The day's record

    Returns:
        Supplement flags for every slot, then training, hydration and fasting
    """
    checklist = [
        bool(taken)
        for slot in TIME_SLOTS
        for taken in (record.supplements.get(slot) or {}).values()
    ]
    checklist.append(bool(record.training))
    checklist.append(bool(record.hydration))
    checklist.append(bool(record.fasting))
    return checklist


def classify_day(record: Optional[DayRecord]) -> DayStatus:
    """Classify a day from its record.

    Args:
        record: The day's record, or None if nothing was stored for that date

    Returns:
        EMPTY without a record, COMPLETE when every item is done, PARTIAL
        above the partial ratio, INCOMPLETE otherwise
    """
    if record is None:
        return DayStatus.EMPTY

    checklist = build_checklist(record)
    done = sum(checklist)
    total = len(checklist)

    # Nothing to check off: no ratio, counted as incomplete
    if total == 0:
        return DayStatus.INCOMPLETE
    if done == total:
        return DayStatus.COMPLETE
    if done > total * PARTIAL_RATIO:
        return DayStatus.PARTIAL
    return DayStatus.INCOMPLETE


def day_status(store: RecordStore, key: str) -> DayStatus:
    """Status of the day stored under a date key."""
    return classify_day(store.get(key))


def calculate_streak(
    store: RecordStore,
    today: date | None = None,
    max_days: int = MAX_STREAK_DAYS,
) -> int:
    """Count consecutive complete days ending today.

    Today must itself be complete, otherwise the streak is 0. The walk goes
    backward one day at a time and stops at the first day that is not
    complete, without skipping gaps.

    Args:
        store: The record store
        today: Day the streak ends on (defaults to today)
        max_days: Number of days examined at most

    Returns:
        Streak length, never more than max_days
    """
    if today is None:
        today = date.today()

    streak = 0
    for offset in range(max_days):
        key = date_key(today - timedelta(days=offset))
        if day_status(store, key) != DayStatus.COMPLETE:
            break
        streak += 1

    return streak
