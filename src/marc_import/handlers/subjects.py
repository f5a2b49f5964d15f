"""
Subject-like handlers: keywords, Dewey classes, languages and funding
notes.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Dict, Optional

from marc_import.epdata.record import EPData
from marc_import.handlers.registry import handler
from marc_import.logger import get_logger
from marc_import.normalization.names import clean_name
from marc_import.normalization.text import capitalize_words, clean_title, fold_key

if TYPE_CHECKING:
    from marc_import.walker.context import HandlerOptions

log = get_logger("handlers.subjects")

KEYWORD_SEPARATOR = ", "

_PROJECT_MARKER = re.compile(r",\sproject\s?")
_FAMILY_GIVEN = re.compile(r"^(.*?),\s(.*)$")


# ---------------------------------------------------------------------------
# Keywords
# ---------------------------------------------------------------------------

def check_keywords(existing: Optional[str], candidate: str) -> Optional[str]:
    """
    Add ``candidate`` to a comma-joined keyword string unless an entry
    that folds to the same ASCII lower-case text is already present.
    Returns the new string, or None when nothing changes.
    """
    candidate = candidate.strip()
    if not candidate:
        return None
    if not existing:
        return candidate

    key = fold_key(candidate)
    for keyword in existing.split(KEYWORD_SEPARATOR):
        if fold_key(keyword) == key:
            return None
    return f"{existing}{KEYWORD_SEPARATOR}{candidate}"


def _topical_keyword(epdata: EPData, fieldname: str, value: str) -> Optional[str]:
    keyword = capitalize_words(clean_title(value))
    return check_keywords(epdata.get(fieldname), keyword)


@handler("marc2keywords")
def marc2keywords(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    # ind1 "u": level of subject unknown; such headings are skipped
    if options.ind1 == "u":
        return None
    return _topical_keyword(epdata, fieldname, value)


@handler("marc690d2keywords")
def marc690d2keywords(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    return _topical_keyword(epdata, fieldname, value)


@handler("marc2personkeywords")
def marc2personkeywords(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    """600 $a "Family, Given" becomes the keyword "Given Family"."""
    m = _FAMILY_GIVEN.match(value)
    family, given = (m.group(1), m.group(2)) if m else (value, "")
    family, given = clean_name(family, given, options.config.name_part_shift_patterns)
    return check_keywords(epdata.get(fieldname), f"{given} {family}".strip())


# ---------------------------------------------------------------------------
# Classification and language
# ---------------------------------------------------------------------------

@handler("marc2dewey")
def marc2dewey(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    """'530.1' -> 'ddc530'; only the hundreds/tens class is kept."""
    value = value.strip()
    if not value[:1].isdigit():
        return None
    return f"ddc{value[:2]}0"


def transform_language(code: str, config) -> Optional[str]:
    code = code.strip()
    if not code:
        return None
    return config.language_map.get(code, code)


@handler("marc0412language")
def marc0412language(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    return transform_language(value, options.config)


@handler("marc0082language")
def marc0082language(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    """
    008 fixed-length data elements: position 6 's' (single known date)
    means positions 7-10 hold the publication year; positions 35-37 hold
    the language code.
    """
    if value[6:7] == "s":
        year = value[7:11]
        if year.isdigit():
            epdata.set_first("date", year, options.source, label="date")

    code = value[35:38]
    if len(code) < 3 or not code.strip() or "|" in code:
        return None
    return transform_language(code, options.config)


# ---------------------------------------------------------------------------
# Funding
# ---------------------------------------------------------------------------

@handler("marc2funding")
def marc2funding(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[Dict[str, Any]]:
    """
    536 $a "Swiss National Science Foundation, project "Title"" with the
    grant number in $c. Funding references are never deduplicated.
    """
    parts = _PROJECT_MARKER.split(value, maxsplit=1)
    funder_name = parts[0].strip()
    award_title = parts[1].replace('"', "").strip() if len(parts) > 1 else ""

    if not funder_name:
        return None

    return {
        "funder_name": funder_name,
        "funder_identifier": "",
        "funder_type": "",
        "funding_stream": "",
        "award_number": options.sibling("c") or "",
        "award_uri": "",
        "award_title": award_title,
    }
