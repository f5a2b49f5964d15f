from __future__ import annotations

import re
from typing import Optional

ROMAN_VALUES = {"I": 1, "V": 5, "X": 10, "L": 50, "C": 100, "D": 500, "M": 1000}

_ROMAN_RE = re.compile(r"^M{0,4}(CM|CD|D?C{0,3})(XC|XL|L?X{0,3})(IX|IV|V?I{0,3})$", re.IGNORECASE)

# Year in a free-text note; earlier patterns win
_YEAR_PATTERNS = (
    re.compile(r".*?(\d{4})-\d{4}$"),
    re.compile(r".*?(\d{4})/\d{4}$"),
    re.compile(r".*?(\d{4})$"),
    re.compile(r".*?(\d{4})-\d{2}$"),
)


def is_roman(value: str) -> bool:
    value = value.strip()
    return bool(value) and bool(_ROMAN_RE.match(value))


def roman_to_int(value: str) -> Optional[int]:
    """
    Convert a Roman numeral (either case) to an integer.

    >>> roman_to_int("MCMXCIX")
    1999
    >>> roman_to_int("xii")
    12

    Returns None for anything that is not a well-formed numeral.
    """
    value = value.strip().upper()
    if not is_roman(value):
        return None

    total = 0
    previous = 0
    for char in reversed(value):
        current = ROMAN_VALUES[char]
        if current < previous:
            total -= current
        else:
            total += current
            previous = current
    return total


def digits_only(value: str) -> str:
    return re.sub(r"\D", "", value)


def extract_year(text: str) -> Optional[str]:
    """
    Find the publication year at the end of a note. For ranges
    ("2003-2004", "2003/2004", "2003-04") the first year is returned.
    """
    text = text.strip()
    for pattern in _YEAR_PATTERNS:
        m = pattern.match(text)
        if m:
            return m.group(1)
    return None
