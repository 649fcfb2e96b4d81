"""Record Operations - Pure functions for reading and updating day records.

All functions are pure: the store passed in is never mutated, a new store is
returned instead. Values are not validated; bad input only shows up later
when progress series are built.
"""

from typing import Any

from .catalog import SUPPLEMENT_CATALOG
from .models import DayRecord, RecordStore


def get_record(store: RecordStore, date_key: str) -> DayRecord:
    """Return the record for a date, or an empty one if nothing is stored.

    Args:
        store: The record store
        date_key: Date in YYYY-MM-DD format

    Returns:
        The stored DayRecord, or a zero-valued DayRecord
    """
    return store.get(date_key) or DayRecord()


def set_field(store: RecordStore, date_key: str, field: str, value: Any) -> RecordStore:
    """Replace one field of one record.

    The record is created from defaults if the date has none yet.

    Args:
        store: The record store
        date_key: Date in YYYY-MM-DD format
        field: DayRecord field name
        value: New value, stored as given

    Returns:
        New store with only that field changed

    Raises:
        KeyError: If field is not a DayRecord field
    """
    if field not in DayRecord.model_fields:
        raise KeyError(field)

    record = get_record(store, date_key).model_copy(update={field: value})
    return {**store, date_key: record}


def toggle_supplement(store: RecordStore, date_key: str, slot: str, name: str) -> RecordStore:
    """Flip the taken flag of one supplement in a time-slot."""
    supplements = dict(get_record(store, date_key).supplements)
    taken = dict(supplements.get(slot) or {})
    taken[name] = not taken.get(name, False)
    supplements[slot] = taken
    return set_field(store, date_key, "supplements", supplements)


def is_slot_complete(record: DayRecord, slot: str) -> bool:
    """Check whether every catalog supplement of a slot is taken."""
    taken = record.supplements.get(slot) or {}
    return all(taken.get(name, False) for name in SUPPLEMENT_CATALOG[slot])


def toggle_all_supplements(store: RecordStore, date_key: str, slot: str) -> RecordStore:
    """Select or clear every supplement of a slot.

    If the whole slot is already taken it is cleared, otherwise (including any
    partial selection) every catalog supplement is marked taken. The slot is
    rebuilt from the catalog, so stray names are dropped.
    """
    record = get_record(store, date_key)
    new_value = not is_slot_complete(record, slot)

    supplements = dict(record.supplements)
    supplements[slot] = {name: new_value for name in SUPPLEMENT_CATALOG[slot]}
    return set_field(store, date_key, "supplements", supplements)


def toggle_mood(store: RecordStore, date_key: str, mood: str) -> RecordStore:
    """Add a mood tag if absent, remove it if present."""
    moods = list(get_record(store, date_key).mood)
    if mood in moods:
        moods.remove(mood)
    else:
        moods.append(mood)
    return set_field(store, date_key, "mood", moods)


def select_option(store: RecordStore, date_key: str, field: str, option: str) -> RecordStore:
    """Select a training or fasting option; selecting it again clears it.

    Args:
        store: The record store
        date_key: Date in YYYY-MM-DD format
        field: "training" or "fasting"
        option: Label of the option picked

    Returns:
        New store with the field set to option, or to None if it already was
    """
    current = getattr(get_record(store, date_key), field)
    return set_field(store, date_key, field, None if current == option else option)


def count_taken(record: DayRecord, slot: str) -> int:
    """Number of supplements marked taken in a slot."""
    return sum(1 for taken in (record.supplements.get(slot) or {}).values() if taken)


def slot_size(slot: str) -> int:
    """Number of supplements the catalog lists for a slot."""
    return len(SUPPLEMENT_CATALOG[slot])
