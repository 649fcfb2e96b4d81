"""MCP Server - Tool definitions for the daily tracker.

Defines the MCP tools used to log a day and read the derived views.
The record store is loaded once and kept in memory; every change is written
back in full right away. Selected date and page offsets are tool arguments.
"""

import logging
import os
from datetime import date
from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from ..core.calendar_ranges import can_advance, date_key, is_weigh_in_day, parse_date_key
from ..core.catalog import (
    FASTING_TYPES,
    MOODS,
    PROGRESS_METRICS,
    STORE_KEY,
    SUPPLEMENT_CATALOG,
    TIME_SLOTS,
    TRAINING_SESSIONS,
)
from ..core.completion import calculate_streak, day_status
from ..core.export import export_csv as render_csv, export_filename
from ..core.models import RecordStore
from ..core.records import (
    count_taken,
    get_record,
    is_slot_complete,
    select_option,
    set_field,
    slot_size,
    toggle_all_supplements as toggle_slot,
    toggle_mood as toggle_mood_tag,
    toggle_supplement as toggle_one_supplement,
)
from ..core.reports import (
    build_history,
    build_month_view,
    build_progress_series,
    build_week_view,
    summarize_progress,
)
from .firestore_client import FirestoreConfig, FirestoreKeyValueStore, RecordStoreRepository


logger = logging.getLogger(__name__)

# Fields set directly from a text box or switch, with the type each must hold
EDITABLE_FIELDS: dict[str, type] = {
    "steps": str,
    "weight": str,
    "comments": str,
    "hydration": bool,
}

transport_security = TransportSecuritySettings(
    enable_dns_rebinding_protection=True,
    allowed_hosts=["localhost:*", "127.0.0.1:*"],
)

mcp = FastMCP(
    "tracker",
    instructions="""Transformation tracker - daily habit and body-transformation log.

Use these tools to tick off supplements, training, hydration and fasting for a
day, record steps, weight (on Mondays), mood and notes, and to read the week,
month, progress and history views.

Dates are YYYY-MM-DD and default to today. After changing a day, show its
updated status.""",
    stateless_http=True,
    transport_security=transport_security,
)

# Lazy-initialized state
_repository: RecordStoreRepository | None = None
_records: RecordStore | None = None


def get_repository() -> RecordStoreRepository:
    """Get or create the record store repository."""
    global _repository
    if _repository is None:
        config = FirestoreConfig(
            project_id=os.environ.get("FIRESTORE_PROJECT") or None,
            database=os.environ.get("FIRESTORE_DATABASE", "tracker"),
            collection=os.environ.get("FIRESTORE_COLLECTION", "kv"),
        )
        key = os.environ.get("TRACKER_STORE_KEY", STORE_KEY)
        _repository = RecordStoreRepository(FirestoreKeyValueStore(config), key)
    return _repository


def get_records() -> RecordStore:
    """Get the in-memory record store, loading it on first use."""
    global _records
    if _records is None:
        _records = get_repository().load()
    return _records


def commit(records: RecordStore) -> None:
    """Replace the in-memory store and write it back in full.

    A failed write is logged by the repository; the in-memory store keeps
    the change either way.
    """
    global _records
    _records = records
    if not get_repository().save(records):
        logger.warning("Record store not persisted; keeping in-memory changes")


def resolve_date(date_str: str | None) -> str:
    """Turn an optional YYYY-MM-DD argument into a date key.

    Raises:
        ValueError: If the string is not a valid date
    """
    if not date_str:
        return date_key(date.today())
    return date_key(parse_date_key(date_str))


def day_payload(records: RecordStore, key: str) -> dict[str, Any]:
    """Everything the day view shows for one date."""
    record = get_record(records, key)
    return {
        "date": key,
        "record": record.model_dump(),
        "status": day_status(records, key).value,
        "supplements_taken": {
            slot: {
                "taken": count_taken(record, slot),
                "total": slot_size(slot),
                "all_taken": is_slot_complete(record, slot),
            }
            for slot in TIME_SLOTS
        },
        "is_weigh_in_day": is_weigh_in_day(key),
        "can_advance": can_advance(key),
    }


INVALID_DATE = {"error": "Invalid date format. Use YYYY-MM-DD."}


# ==================== Catalog Tools ====================


@mcp.tool()
def get_catalog() -> dict:
    """List what can be tracked: supplements per slot, trainings, fasting types, moods.

    Returns:
        Dictionary with every option the day view offers
    """
    return {
        "supplements": {slot: list(SUPPLEMENT_CATALOG[slot]) for slot in TIME_SLOTS},
        "trainings": list(TRAINING_SESSIONS),
        "fasting_types": list(FASTING_TYPES),
        "moods": [{"emoji": emoji, "label": label} for emoji, label in MOODS],
        "progress_metrics": list(PROGRESS_METRICS),
    }


# ==================== Day Tools ====================


@mcp.tool()
def get_day(date_str: str | None = None) -> dict:
    """Get one day's record and status.

    Args:
        date_str: Date in YYYY-MM-DD format (defaults to today)

    Returns:
        Record, status, per-slot supplement counters and navigation flags
    """
    try:
        key = resolve_date(date_str)
    except ValueError:
        return INVALID_DATE
    return day_payload(get_records(), key)


@mcp.tool()
def set_day_field(field: str, value: str | bool, date_str: str | None = None) -> dict:
    """Set steps, weight, comments or hydration for a day.

    Steps, weight and comments take text (steps and weight stay text);
    hydration takes a boolean. Values of the wrong type are refused so the
    stored document always loads back.

    Args:
        field: One of steps, weight, comments, hydration
        value: New value
        date_str: Date in YYYY-MM-DD format (defaults to today)

    Returns:
        Updated day
    """
    if field not in EDITABLE_FIELDS:
        return {"error": f"Unknown field '{field}'. Use one of: {', '.join(EDITABLE_FIELDS)}."}
    expected = EDITABLE_FIELDS[field]
    if not isinstance(value, expected):
        kind = "true or false" if expected is bool else "text"
        return {"error": f"Field '{field}' takes {kind}."}
    try:
        key = resolve_date(date_str)
    except ValueError:
        return INVALID_DATE

    records = set_field(get_records(), key, field, value)
    commit(records)
    return day_payload(records, key)


@mcp.tool()
def toggle_supplement(slot: str, name: str, date_str: str | None = None) -> dict:
    """Mark a supplement taken, or untaken if it already was.

    Args:
        slot: morning, evening or meal
        name: Supplement name from the catalog
        date_str: Date in YYYY-MM-DD format (defaults to today)

    Returns:
        Updated day
    """
    if slot not in SUPPLEMENT_CATALOG:
        return {"error": f"Unknown slot '{slot}'."}
    if name not in SUPPLEMENT_CATALOG[slot]:
        return {"error": f"'{name}' is not a {slot} supplement."}
    try:
        key = resolve_date(date_str)
    except ValueError:
        return INVALID_DATE

    records = toggle_one_supplement(get_records(), key, slot, name)
    commit(records)
    return day_payload(records, key)


@mcp.tool()
def toggle_all_supplements(slot: str, date_str: str | None = None) -> dict:
    """Tick every supplement of a slot, or clear them all if all are ticked.

    Args:
        slot: morning, evening or meal
        date_str: Date in YYYY-MM-DD format (defaults to today)

    Returns:
        Updated day
    """
    if slot not in SUPPLEMENT_CATALOG:
        return {"error": f"Unknown slot '{slot}'."}
    try:
        key = resolve_date(date_str)
    except ValueError:
        return INVALID_DATE

    records = toggle_slot(get_records(), key, slot)
    commit(records)
    return day_payload(records, key)


@mcp.tool()
def toggle_mood(mood: str, date_str: str | None = None) -> dict:
    """Add a mood emoji to the day, or remove it if already there.

    Args:
        mood: Mood emoji from the catalog
        date_str: Date in YYYY-MM-DD format (defaults to today)

    Returns:
        Updated day
    """
    if mood not in [emoji for emoji, _ in MOODS]:
        return {"error": f"Unknown mood '{mood}'."}
    try:
        key = resolve_date(date_str)
    except ValueError:
        return INVALID_DATE

    records = toggle_mood_tag(get_records(), key, mood)
    commit(records)
    return day_payload(records, key)


@mcp.tool()
def select_training(training: str, date_str: str | None = None) -> dict:
    """Select the day's training session; selecting it again clears it.

    Args:
        training: Session label from the catalog
        date_str: Date in YYYY-MM-DD format (defaults to today)

    Returns:
        Updated day
    """
    if training not in TRAINING_SESSIONS:
        return {"error": f"Unknown training '{training}'."}
    try:
        key = resolve_date(date_str)
    except ValueError:
        return INVALID_DATE

    records = select_option(get_records(), key, "training", training)
    commit(records)
    return day_payload(records, key)


@mcp.tool()
def select_fasting(fasting: str, date_str: str | None = None) -> dict:
    """Select the day's fasting protocol; selecting it again clears it.

    Args:
        fasting: Fasting type from the catalog
        date_str: Date in YYYY-MM-DD format (defaults to today)

    Returns:
        Updated day
    """
    if fasting not in FASTING_TYPES:
        return {"error": f"Unknown fasting type '{fasting}'."}
    try:
        key = resolve_date(date_str)
    except ValueError:
        return INVALID_DATE

    records = select_option(get_records(), key, "fasting", fasting)
    commit(records)
    return day_payload(records, key)


# ==================== View Tools ====================


@mcp.tool()
def get_streak() -> dict:
    """Count consecutive complete days ending today.

    Returns:
        Dictionary with the streak in days (0 if today is not complete)
    """
    return {"streak": calculate_streak(get_records())}


@mcp.tool()
def get_week(offset: int = 0) -> dict:
    """Get the week grid with each day's status.

    Args:
        offset: 0 for this week, -1 for last week, and so on

    Returns:
        Week title, seven days from Monday, and whether paging forward is allowed
    """
    return build_week_view(get_records(), offset).model_dump(mode="json")


@mcp.tool()
def get_month(offset: int = 0) -> dict:
    """Get the six-week month grid with each day's status.

    Args:
        offset: 0 for this month, -1 for last month, and so on

    Returns:
        Month title, weekday headers, 42 days (padding days flagged in_month=false)
    """
    return build_month_view(get_records(), offset).model_dump(mode="json")


@mcp.tool()
def get_progress(metric: str = "weight") -> dict:
    """Get a progress series and its headline number.

    Args:
        metric: weight, steps, training or fasting

    Returns:
        Chart points and summary (weight lost, average steps, or totals)
    """
    points = build_progress_series(get_records(), metric)
    summary = summarize_progress(points, metric)
    return {
        "metric": metric,
        "points": [p.model_dump() for p in points],
        "summary": summary.model_dump(),
    }


@mcp.tool()
def get_history() -> list[dict]:
    """List every recorded day, newest first, with its status.

    Returns:
        One summary per stored day
    """
    return [item.model_dump(mode="json") for item in build_history(get_records())]


@mcp.tool()
def export_csv() -> dict:
    """Export every recorded day as CSV.

    Returns:
        Suggested file name and the CSV text
    """
    return {"filename": export_filename(), "csv": render_csv(get_records())}
