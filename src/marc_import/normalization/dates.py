# src/marc_import/normalization/dates.py

from __future__ import annotations

import datetime
import re
from typing import Optional, Tuple

from marc_import.normalization.text import fold_ascii

# ---------------------------------------------------------------------------
# Month names (English, German, French, Italian), matched on the first
# three or four letters after ASCII folding.
# ---------------------------------------------------------------------------

MONTHS = {
    "jan": 1,
    "feb": 2,
    "fev": 2,
    "mar": 3,
    "maer": 3,
    "apr": 4,
    "avr": 4,
    "may": 5,
    "mai": 5,
    "mag": 5,
    "jun": 6,
    "jui": 6,
    "giu": 6,
    "jul": 7,
    "lug": 7,
    "aug": 8,
    "aou": 8,
    "ago": 8,
    "sep": 9,
    "set": 9,
    "oct": 10,
    "okt": 10,
    "ott": 10,
    "nov": 11,
    "dec": 12,
    "dez": 12,
    "dic": 12,
}

_NUMERIC_DMY = re.compile(r"^(\d{1,2})[./\s]+(\d{1,2})[./\s]+(\d{4})$")
_NAMED_DMY = re.compile(r"^(\d{1,2})\.?\s*([^\W\d_]+)\.?\s+(\d{4})$")
_NAMED_MDY = re.compile(r"^([^\W\d_]+)\.?\s+(\d{1,2}),?\s+(\d{4})$")
_ISO = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_YEAR = re.compile(r"^(\d{4})$")
_NOISE = re.compile(r"[:()]")


def _month_number(name: str) -> Optional[int]:
    key = fold_ascii(name).lower()
    # "juillet" and "juin" share a prefix
    if key.startswith("juil"):
        return 7
    if key.startswith("juin"):
        return 6
    if key.startswith("maer") or key.startswith("marz"):
        return 3
    return MONTHS.get(key[:3])


def _valid(year: int, month: int, day: int) -> bool:
    try:
        datetime.date(year, month, day)
    except ValueError:
        return False
    return True


def parse_event_date(raw: str) -> Optional[str]:
    """
    Parse a conference date written in European order into ISO form.

        "2003"            -> "2003-01-01"
        "12.05.2003"      -> "2003-05-12"
        "12. Mai 2003"    -> "2003-05-12"
        "May 12, 2003"    -> "2003-05-12"

    Returns None when the text cannot be read as a date.
    """
    value = _NOISE.sub("", raw or "").strip()
    if not value:
        return None

    m = _YEAR.match(value)
    if m:
        return f"{m.group(1)}-01-01"

    m = _ISO.match(value)
    if m:
        return value if _valid(int(m.group(1)), int(m.group(2)), int(m.group(3))) else None

    ymd: Optional[Tuple[int, int, int]] = None

    m = _NUMERIC_DMY.match(value)
    if m:
        ymd = (int(m.group(3)), int(m.group(2)), int(m.group(1)))

    if ymd is None:
        m = _NAMED_DMY.match(value)
        if m:
            month = _month_number(m.group(2))
            if month:
                ymd = (int(m.group(3)), month, int(m.group(1)))

    if ymd is None:
        m = _NAMED_MDY.match(value)
        if m:
            month = _month_number(m.group(1))
            if month:
                ymd = (int(m.group(3)), month, int(m.group(2)))

    if ymd is None or not _valid(*ymd):
        return None

    year, month, day = ymd
    return f"{year:04d}-{month:02d}-{day:02d}"
