"""Fixed interface strings of exported manuscripts, per language."""

from typing import Dict

LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "chapter": "Chapter",
        "chapters": "chapters",
        "contents": "Contents",
        "words": "words",
        "of": "of",
        "back": "Back to contents",
    },
    "he": {
        "chapter": "פרק",
        "chapters": "פרקים",
        "contents": "תוכן עניינים",
        "words": "מילים",
        "of": "מתוך",
        "back": "חזרה לתוכן עניינים",
    },
}


def labels_for(language: str) -> Dict[str, str]:
    """Labels for a language, falling back to English."""
    return LABELS.get(language, LABELS["en"])
