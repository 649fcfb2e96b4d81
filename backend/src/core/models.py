"""Core Data Models - Pydantic models for type safety.

All models are value objects with no behavior beyond validation.
Updates go through model_copy() so a stored record is never mutated in place.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .catalog import TIME_SLOTS


def empty_supplements() -> dict[str, dict[str, bool]]:
    """Supplement mapping with every time-slot present and nothing taken."""
    return {slot: {} for slot in TIME_SLOTS}


class DayStatus(str, Enum):
    """Completion status of one calendar day."""

    EMPTY = "empty"
    INCOMPLETE = "incomplete"
    PARTIAL = "partial"
    COMPLETE = "complete"


class DayRecord(BaseModel):
    """Everything tracked for a single day.

    Text inputs (steps, weight) are kept as typed by the user; they are only
    parsed when a progress series is built.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    supplements: dict[str, dict[str, bool]] = Field(
        default_factory=empty_supplements,
        description="time-slot -> supplement name -> taken",
    )
    training: Optional[str] = Field(default=None, description="Selected training session")
    steps: str = Field(default="", description="Step count as entered")
    hydration: bool = Field(default=False)
    weight: str = Field(default="", description="Body weight in kg as entered")
    fasting: Optional[str] = Field(default=None, description="Selected fasting protocol")
    comments: str = Field(default="")
    mood: list[str] = Field(default_factory=list, description="Mood tags in selection order")

    @field_validator("supplements", mode="before")
    @classmethod
    def _known_slots_only(cls, value):
        if not isinstance(value, dict):
            return value
        return {slot: value.get(slot) or {} for slot in TIME_SLOTS}

    @field_validator("mood")
    @classmethod
    def _unique_moods(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))


# Date key (YYYY-MM-DD) -> record, in insertion order.
RecordStore = dict[str, DayRecord]


class ProgressPoint(BaseModel):
    """One plotted point: a date label (or category) and its value."""

    label: str
    value: float


class ProgressSummary(BaseModel):
    """Headline number shown above a progress chart."""

    metric: str
    value: Optional[float] = Field(default=None, description="None if not enough data")
    points: int = Field(ge=0, description="Number of points the value was computed from")


class CalendarDay(BaseModel):
    """One cell of a week or month grid."""

    date_key: str
    day_label: str = Field(description="Short French weekday, e.g. 'lun.'")
    day_of_month: int
    status: DayStatus
    weight: str = ""
    is_today: bool = False
    in_month: bool = True


class WeekView(BaseModel):
    """Seven days starting on a Monday."""

    offset: int
    title: str
    days: list[CalendarDay]
    can_go_forward: bool


class MonthView(BaseModel):
    """Six full weeks covering one month, padded with neighbouring days."""

    offset: int
    year: int
    month: int
    title: str
    headers: list[str]
    days: list[CalendarDay]
    can_go_forward: bool


class HistoryItem(BaseModel):
    """Compact summary of one stored day for the history list."""

    date_key: str
    status: DayStatus
    weight: str = ""
    training: str = ""
    steps: str = ""
    fasting: str = ""
    hydration: bool = False
    mood: list[str] = Field(default_factory=list)
    comments: str = ""
