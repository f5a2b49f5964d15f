"""
Numeric handlers: publication year (260/264 $c, 502 $d) and page counts
(300 $a).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional

from marc_import.epdata.record import EPData
from marc_import.handlers.registry import handler
from marc_import.logger import get_logger
from marc_import.normalization.numbers import digits_only, is_roman, roman_to_int

if TYPE_CHECKING:
    from marc_import.walker.context import HandlerOptions

log = get_logger("handlers.extent")

_ROMAN_LETTERS = re.compile(r"[MDCLXVI]+")
_NOT_ROMAN = re.compile(r"[^MDCLXVI]")
_HAS_DIGIT = re.compile(r"\d")

# "S. 12-45", "Bl. 3-9", "Seiten 10-20", "pp. 5-8"
_PAGE_RANGE = re.compile(
    r"^(?:S\.|Seiten?|Bl\.|Blatt|Bl(?:ä|ae)tter|pp?\.|pages?|f\.|ff\.)\s?(\d+)\s?-\s?(\d+)",
    re.IGNORECASE,
)
_DIGIT_GROUP = re.compile(r"(\d+)")


def parse_year(value: str) -> Optional[int]:
    """
    Year from an imprint date: digits only ("c1999", "[2003]"), or an
    upper-case Roman numeral when no digit is present ("MCMXCIX").
    """
    if not _HAS_DIGIT.search(value) and _ROMAN_LETTERS.search(value):
        return roman_to_int(_NOT_ROMAN.sub("", value))
    digits = digits_only(value)
    return int(digits) if digits else None


@handler("marc2date")
def marc2date(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    year = parse_year(value)
    if year is None:
        return None

    max_year = options.config.max_year if options.config is not None else 2099
    if year > max_year:
        log.warning("Implausible year %s in %s", year, options.source or "date field")
        epdata.add_suggestion(f"Warning: Typo in date: {year}")
        return None

    return str(year)


def count_pages(value: str) -> Optional[int]:
    """
    Sum of the comma-separated parts of an extent statement. Each part
    contributes its first digit group, or its value as a Roman numeral.

    >>> count_pages("xii, 310")
    322
    """
    total = 0
    for token in value.split(","):
        token = token.strip()
        if not token:
            continue
        m = _DIGIT_GROUP.search(token)
        if m:
            total += int(m.group(1))
        elif is_roman(token):
            total += roman_to_int(token) or 0
    return total or None


@handler("marc2pages")
def marc2pages(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[int]:
    m = _PAGE_RANGE.match(value.strip())
    if m:
        start, end = int(m.group(1)), int(m.group(2))
        if end < start:
            log.debug("Ignoring reversed page range %r", value)
            return None
        epdata.set("pagerange", f"{start}-{end}", options.source)
        return end - start + 1

    return count_pages(value)
