"""Calendar Ranges - Pure functions for date keys and week/month grids.

Every range is recomputed from the current date and a page offset on each
call, so paging back and forth always lands on the same dates.
Weeks start on Monday.
"""

from datetime import date, timedelta

MONTH_GRID_DAYS = 42

WEEKDAY_HEADERS = ["Lun", "Mar", "Mer", "Jeu", "Ven", "Sam", "Dim"]
WEEKDAY_SHORT = ["lun.", "mar.", "mer.", "jeu.", "ven.", "sam.", "dim."]
MONTH_NAMES = [
    "janvier", "février", "mars", "avril", "mai", "juin",
    "juillet", "août", "septembre", "octobre", "novembre", "décembre",
]
MONTH_SHORT = [
    "janv.", "févr.", "mars", "avr.", "mai", "juin",
    "juil.", "août", "sept.", "oct.", "nov.", "déc.",
]


def date_key(d: date) -> str:
    """Format a local calendar date as a YYYY-MM-DD key."""
    return d.isoformat()


def parse_date_key(key: str) -> date:
    """Parse a YYYY-MM-DD key.

    Raises:
        ValueError: If the key is not a valid ISO date
    """
    return date.fromisoformat(key)


def week_start(d: date) -> date:
    """Monday on or before the given date (a Sunday rolls back six days)."""
    return d - timedelta(days=d.weekday())


def week_dates(offset: int = 0, today: date | None = None) -> list[str]:
    """Date keys of the week `offset` weeks away from the current one.

    Args:
        offset: 0 for this week, negative for past weeks
        today: Reference date (defaults to today)

    Returns:
        Seven date keys, Monday first
    """
    if today is None:
        today = date.today()

    monday = week_start(today) + timedelta(weeks=offset)
    return [date_key(monday + timedelta(days=i)) for i in range(7)]


def target_month(offset: int = 0, today: date | None = None) -> tuple[int, int]:
    """Year and month `offset` months away from the current month."""
    if today is None:
        today = date.today()

    index = today.year * 12 + (today.month - 1) + offset
    return index // 12, index % 12 + 1


def month_dates(offset: int = 0, today: date | None = None) -> list[str]:
    """Date keys of the six-week grid for a month.

    The grid starts on the Monday on or before the 1st and always holds 42
    days; days of the neighbouring months are included as padding.

    Args:
        offset: 0 for this month, negative for past months
        today: Reference date (defaults to today)

    Returns:
        42 date keys, Monday first
    """
    year, month = target_month(offset, today)
    start = week_start(date(year, month, 1))
    return [date_key(start + timedelta(days=i)) for i in range(MONTH_GRID_DAYS)]


def shift_day(key: str, days: int) -> str:
    """Date key `days` days before (negative) or after (positive) a key."""
    return date_key(parse_date_key(key) + timedelta(days=days))


def can_advance(key: str, today: date | None = None) -> bool:
    """Whether the day view may move forward from this date."""
    if today is None:
        today = date.today()
    return key < date_key(today)


def can_page_forward(offset: int) -> bool:
    """Week and month paging stops at the current period."""
    return offset < 0


def is_weigh_in_day(key: str) -> bool:
    """Weight is entered on Mondays."""
    return parse_date_key(key).weekday() == 0


def format_short_date(d: date) -> str:
    """Two-digit day and abbreviated month, e.g. '08 janv.'."""
    return f"{d.day:02d} {MONTH_SHORT[d.month - 1]}"


def format_day_month(d: date) -> str:
    """Day and full month name, e.g. '8 janvier'."""
    return f"{d.day} {MONTH_NAMES[d.month - 1]}"


def format_month_year(year: int, month: int) -> str:
    """Full month name and year, e.g. 'janvier 2024'."""
    return f"{MONTH_NAMES[month - 1]} {year}"
