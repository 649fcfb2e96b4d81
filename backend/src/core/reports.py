"""Report Generation - Pure functions for progress series and calendar views.

All functions are pure: same input always produces same output, no side effects.
"""

import math
import re
from datetime import date
from typing import Optional

from .calendar_ranges import (
    WEEKDAY_HEADERS,
    WEEKDAY_SHORT,
    can_page_forward,
    format_day_month,
    format_month_year,
    format_short_date,
    month_dates,
    parse_date_key,
    target_month,
    week_dates,
)
from .completion import day_status
from .models import (
    CalendarDay,
    HistoryItem,
    MonthView,
    ProgressPoint,
    ProgressSummary,
    RecordStore,
    WeekView,
)

# Leading number of a text input, the way a browser's parseFloat/parseInt reads it
_DECIMAL_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INTEGER_PREFIX = re.compile(r"^\s*([+-]?\d+)")

# History shows at most this many characters of a comment
COMMENT_PREVIEW_CHARS = 80


def parse_decimal(text: str) -> Optional[float]:
    """Parse the leading decimal number of a text value ('92.5kg' -> 92.5).

    Returns:
        The number, or None if the text does not start with one
    """
    match = _DECIMAL_PREFIX.match(str(text))
    if match is None:
        return None
    value = float(match.group(1))
    return value if math.isfinite(value) else None


def parse_integer(text: str) -> Optional[int]:
    """Parse the leading integer of a text value ('8000 pas' -> 8000)."""
    match = _INTEGER_PREFIX.match(str(text))
    return int(match.group(1)) if match else None


def _dated_records(store: RecordStore):
    """(date, record) pairs in ascending date order, skipping bad keys."""
    dated = []
    for key, record in store.items():
        try:
            dated.append((parse_date_key(key), record))
        except ValueError:
            continue
    return sorted(dated, key=lambda item: item[0])


def _count_by(labels: list[str]) -> list[ProgressPoint]:
    """Count labels, keeping the order each label is first seen."""
    counts: dict[str, int] = {}
    for label in labels:
        counts[label] = counts.get(label, 0) + 1
    return [ProgressPoint(label=label, value=count) for label, count in counts.items()]


def build_progress_series(store: RecordStore, metric: str) -> list[ProgressPoint]:
    """Extract one metric across all stored days.

    weight/steps: one point per day with a parseable value, oldest first.
    training: sessions counted per formatted day label (not per week).
    fasting: days counted per fasting type.

    Args:
        store: The record store
        metric: "weight", "steps", "training" or "fasting"

    Returns:
        Ordered points; empty for an unknown metric
    """
    dated = _dated_records(store)

    if metric == "weight":
        points = []
        for day, record in dated:
            value = parse_decimal(record.weight) if record.weight else None
            if value is not None:
                points.append(ProgressPoint(label=format_short_date(day), value=value))
        return points

    if metric == "steps":
        points = []
        for day, record in dated:
            value = parse_integer(record.steps) if record.steps else None
            if value is not None:
                points.append(ProgressPoint(label=format_short_date(day), value=value))
        return points

    if metric == "training":
        return _count_by([format_short_date(day) for day, record in dated if record.training])

    if metric == "fasting":
        return _count_by([record.fasting for _, record in dated if record.fasting])

    return []


def summarize_progress(points: list[ProgressPoint], metric: str) -> ProgressSummary:
    """Compute the headline number for a progress series.

    weight: kilograms lost between the first and last point (needs two points).
    steps: average steps, rounded.
    training/fasting: total count.

    Args:
        points: Series from build_progress_series
        metric: The metric the series was built for

    Returns:
        ProgressSummary, with value None if there is not enough data
    """
    value: Optional[float] = None

    if metric == "weight" and len(points) >= 2:
        value = round(points[0].value - points[-1].value, 1)
    elif metric == "steps" and points:
        value = math.floor(sum(p.value for p in points) / len(points) + 0.5)
    elif metric in ("training", "fasting") and points:
        value = sum(p.value for p in points)

    return ProgressSummary(metric=metric, value=value, points=len(points))


def _calendar_day(store: RecordStore, key: str, today: date, in_month: bool = True) -> CalendarDay:
    day = parse_date_key(key)
    record = store.get(key)
    return CalendarDay(
        date_key=key,
        day_label=WEEKDAY_SHORT[day.weekday()],
        day_of_month=day.day,
        status=day_status(store, key),
        weight=str(record.weight or "") if record else "",
        is_today=day == today,
        in_month=in_month,
    )


def build_week_view(store: RecordStore, offset: int = 0, today: date | None = None) -> WeekView:
    """Build the week grid for a page offset.

    Args:
        store: The record store
        offset: 0 for this week, negative for past weeks
        today: Reference date (defaults to today)

    Returns:
        WeekView with seven days starting on Monday
    """
    if today is None:
        today = date.today()

    keys = week_dates(offset, today)
    return WeekView(
        offset=offset,
        title=f"Semaine du {format_day_month(parse_date_key(keys[0]))}",
        days=[_calendar_day(store, key, today) for key in keys],
        can_go_forward=can_page_forward(offset),
    )


def build_month_view(store: RecordStore, offset: int = 0, today: date | None = None) -> MonthView:
    """Build the six-week month grid for a page offset.

    Padding days from the neighbouring months are kept, flagged in_month=False.
    """
    if today is None:
        today = date.today()

    year, month = target_month(offset, today)
    days = []
    for key in month_dates(offset, today):
        day = parse_date_key(key)
        in_month = (day.year, day.month) == (year, month)
        days.append(_calendar_day(store, key, today, in_month=in_month))

    return MonthView(
        offset=offset,
        year=year,
        month=month,
        title=format_month_year(year, month),
        headers=list(WEEKDAY_HEADERS),
        days=days,
        can_go_forward=can_page_forward(offset),
    )


def build_history(store: RecordStore) -> list[HistoryItem]:
    """List every stored day, newest first, with its status.

    The training label is shortened to the text before its parenthesis and
    comments are cut to COMMENT_PREVIEW_CHARS characters followed by "...".
    """
    items = []
    for key in sorted(store, reverse=True):
        record = store[key]
        training = (record.training or "").split("(")[0].strip()
        comments = str(record.comments or "")
        if len(comments) > COMMENT_PREVIEW_CHARS:
            comments = comments[:COMMENT_PREVIEW_CHARS] + "..."
        items.append(
            HistoryItem(
                date_key=key,
                status=day_status(store, key),
                weight=str(record.weight or ""),
                training=training,
                steps=str(record.steps or ""),
                fasting=record.fasting or "",
                hydration=bool(record.hydration),
                mood=list(record.mood),
                comments=comments,
            )
        )
    return items

