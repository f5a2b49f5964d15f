"""
Text clean-up helpers shared by the handlers.

All functions are pure: they take a string (and possibly compiled
patterns) and return a new string.
"""

from __future__ import annotations

import re
import string
import unicodedata
from typing import Iterable, Optional, Pattern

_TRAILING_SLASH = re.compile(r"\s/\s*$")
_TRAILING_COLON = re.compile(r"\s:\s*$")
_TRAILING_PUNCT = re.compile("[" + re.escape(string.punctuation) + r"]+$")
_WORD_START = re.compile(r"(^| )([^\w\s]*)(\w)")

# Letters NFKD does not decompose into ASCII
_FOLD_TABLE = str.maketrans(
    {
        "ß": "ss",
        "æ": "ae",
        "Æ": "AE",
        "ø": "o",
        "Ø": "O",
        "œ": "oe",
        "Œ": "OE",
        "ł": "l",
        "Ł": "L",
        "đ": "d",
        "Đ": "D",
        "ð": "d",
        "þ": "th",
        "ı": "i",
    }
)


def clean_title(value: str) -> str:
    """Remove << >> sorting markers and a dangling ' /' or ' :' at the end."""
    value = value.replace("<<", "").replace(">>", "")
    value = _TRAILING_SLASH.sub("", value)
    value = _TRAILING_COLON.sub("", value)
    return value.strip()


def apply_filters(value: str, filters: Optional[Iterable[Pattern[str]]]) -> str:
    """Remove every match of each filter pattern, in configured order."""
    if not filters:
        return value
    for pattern in filters:
        value = pattern.sub("", value)
    return value.strip()


def strip_trailing_punctuation(value: str) -> str:
    return _TRAILING_PUNCT.sub("", value.strip()).strip()


def capitalize_words(value: str) -> str:
    """
    Lowercase the whole string, then uppercase the first letter of every
    space-separated word (leading punctuation such as quotes is skipped).

    >>> capitalize_words("QUANTUM field THEORY")
    'Quantum Field Theory'
    """
    return _WORD_START.sub(lambda m: m.group(1) + m.group(2) + m.group(3).upper(), value.lower())


def fold_ascii(value: str) -> str:
    """Transliterate to plain ASCII: "Zürich" -> "Zurich", "Straße" -> "Strasse"."""
    decomposed = unicodedata.normalize("NFKD", value.translate(_FOLD_TABLE))
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.encode("ascii", "ignore").decode("ascii")


def fold_key(value: str) -> str:
    """Comparison key: ASCII-folded, case-insensitive, trimmed."""
    return fold_ascii(value.strip()).lower()
