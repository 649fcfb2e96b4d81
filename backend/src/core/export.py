"""CSV Export - Pure functions turning the record store into a CSV text.

One-way export: there is no import path back from this format.
"""

from datetime import date

from .catalog import TIME_SLOTS
from .models import DayRecord, RecordStore

CSV_HEADER = (
    "Date,Poids,Training,Pas,Hydratation,Jeûne,Mood,"
    "Compléments Matin,Compléments Soir,Compléments Repas,Commentaires"
)


def _taken_names(record: DayRecord, slot: str) -> str:
    taken = record.supplements.get(slot) or {}
    return ";".join(name for name, checked in taken.items() if checked)


def export_row(key: str, record: DayRecord) -> str:
    """Format one record as a CSV line.

    Missing values become empty cells; commas in comments are replaced with
    semicolons so the line stays one row.
    """
    cells = [
        key,
        record.weight or "",
        record.training or "",
        record.steps or "",
        "Oui" if record.hydration else "Non",
        record.fasting or "",
        ";".join(record.mood or []),
        *(_taken_names(record, slot) for slot in TIME_SLOTS),
        str(record.comments or "").replace(",", ";"),
    ]
    return ",".join(str(cell) for cell in cells)


def export_csv(store: RecordStore) -> str:
    """Serialize the whole store, one row per date in store order.

    Args:
        store: The record store

    Returns:
        CSV text: header line then one line per record, joined with newlines
    """
    lines = [CSV_HEADER]
    lines.extend(export_row(key, record) for key, record in store.items())
    return "\n".join(lines)


def export_filename(today: date | None = None) -> str:
    """Download name for an export made today."""
    if today is None:
        today = date.today()
    return f"transformation-{today.isoformat()}.csv"
