"""
Plain-text handlers: titles, notes, imprint and series statements,
corporate bodies and conferences.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from marc_import.epdata.record import EPData
from marc_import.handlers.registry import handler
from marc_import.normalization.dates import parse_event_date
from marc_import.normalization.text import clean_title, strip_trailing_punctuation

if TYPE_CHECKING:
    from marc_import.walker.context import HandlerOptions


def _join(existing: Optional[str], value: str, separator: str) -> str:
    if existing:
        return f"{existing}{separator}{value}"
    return value


@handler("direct")
def direct(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Any:
    return value


@handler("marc2multiple")
def marc2multiple(epdata: EPData, fieldname: str, value: Any, options: "HandlerOptions") -> None:
    """Append to a list field unless an equal element is already there."""
    if fieldname and value not in (None, ""):
        epdata.append_unique(fieldname, value)
    return None


@handler("marc2title")
def marc2title(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    # 245 $b continues $a: "Main title : subtitle"
    title = clean_title(_join(epdata.get(fieldname), value, " : "))
    return title or None


@handler("marc2othertitles")
def marc2othertitles(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    other = clean_title(value)
    if not other:
        return None
    existing = epdata.get(fieldname)
    if existing and other in existing.split("\n"):
        return existing
    return _join(existing, other, "\n")


@handler("marc2place")
def marc2place(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    return clean_title(value) or None


@handler("marc2publisher")
def marc2publisher(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    return clean_title(value) or None


@handler("marc2series")
def marc2series(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    return value.strip() or None


@handler("marc2volume")
def marc2volume(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    return value.strip() or None


@handler("marc2note")
def marc2note(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    if not value:
        return None
    return _join(epdata.get(fieldname), value, "\n")


@handler("marc2corpcreators")
def marc2corpcreators(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    return strip_trailing_punctuation(value) or None


# ---------------------------------------------------------------------------
# Conferences (111)
# ---------------------------------------------------------------------------

@handler("marc2event_title")
def marc2event_title(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    number = options.sibling("n")
    title = f"{number} {value}" if number else value
    return title.strip() or None


@handler("marc2event_date")
def marc2event_date(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> None:
    """
    "12.05.2003-14.05.2003" -> event_start / event_end. A single date is
    both start and end; parts that cannot be parsed are left unset.
    """
    if "-" in value:
        start, end = value.split("-", 1)
    else:
        start = end = value

    start_date = parse_event_date(start)
    end_date = parse_event_date(end)

    if start_date:
        epdata.set("event_start", start_date, options.source)
    if end_date:
        epdata.set("event_end", end_date, options.source)
    return None
