"""Tracker Catalog - Fixed configuration for what can be tracked.

Catalog entries are configuration, not data: records only store names drawn
from these lists.
"""

TIME_SLOTS = ("morning", "evening", "meal")

SUPPLEMENT_CATALOG: dict[str, list[str]] = {
    "morning": ["NAC 1200mg", "Vitamine C 1000mg", "Magnésium 200mg", "Électrolytes 500ml"],
    "evening": ["NAC 1200mg", "Vitamine C 500mg", "Électrolytes 500ml"],
    "meal": ["Créatine 5g", "Magnésium 200mg", "Zinc 30mg"],
}

TRAINING_SESSIONS = [
    "Séance A (Squat/Poussée)",
    "Séance B (Deadlift/Traction)",
    "Séance C (Mixte)",
]

FASTING_TYPES = ["16/8", "OMAD", "OMAD Sec", "Jeûne Total 24h", "Jeûne Sec Total"]

MOODS: list[tuple[str, str]] = [
    ("😊", "Très bien"),
    ("💪", "Fort"),
    ("😴", "Fatigué"),
    ("🤕", "Mal de tête"),
    ("😰", "Faible"),
    ("🥵", "Chaud"),
]

# Key of the single document holding the whole record store
STORE_KEY = "transformation-data"

# Days walked backward when counting a streak
MAX_STREAK_DAYS = 100

# A day is "partial" when strictly more than this share of its checklist is done
PARTIAL_RATIO = 0.6

PROGRESS_METRICS = ("weight", "steps", "training", "fasting")
