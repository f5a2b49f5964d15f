"""
773 Host Item Entry.

$t is the title of the host (journal, series or book). Which output field
receives it depends on the control subfield $7 together with the document
type built so far; HOST_ITEM_RULES lists the combinations in priority
order. The other subfields are read from the same field:

    $b  edition                -> note
    $d  "Place : Publisher, 2003"
    $g  related parts, repeating ("yr:2003", "vl:12", "no:3" or free form
        such as "Vol. 12, No. 3 (2003), S. 45-67")
    $x  ISSN
    $z  ISBN

Year, ISSN, ISBN, place and publisher never overwrite a differing value
that is already present; the conflict is added to the suggestions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, FrozenSet, Iterable, Optional

from marc_import.epdata.record import EPData
from marc_import.handlers.identifiers import strip_hyphens
from marc_import.handlers.registry import handler
from marc_import.logger import get_logger

if TYPE_CHECKING:
    from marc_import.walker.context import HandlerOptions

log = get_logger("handlers.hostitem")


@dataclass(frozen=True)
class HostItemRule:
    control: str
    target: str
    types: FrozenSet[str] = field(default_factory=frozenset)
    exclude: FrozenSet[str] = field(default_factory=frozenset)

    def matches(self, control: Optional[str], doc_type: Optional[str]) -> bool:
        if control != self.control or doc_type is None:
            return False
        if self.types and doc_type not in self.types:
            return False
        return doc_type not in self.exclude


HOST_ITEM_RULES = (
    HostItemRule("nnas", "publication", types=frozenset({"article"})),
    HostItemRule("nnas", "series", exclude=frozenset({"book_section", "newspaper_article"})),
    HostItemRule("nnab", "series", types=frozenset({"book_section"})),
    HostItemRule("nnaa", "book_title", types=frozenset({"book_section"})),
)


def resolve_host_target(control: Optional[str], doc_type: Optional[str]) -> Optional[str]:
    for rule in HOST_ITEM_RULES:
        if rule.matches(control, doc_type):
            return rule.target
    return None


# ---------------------------------------------------------------------------
# $g related parts
# ---------------------------------------------------------------------------

TYPED_PARTS = {"yr:": "year", "vl:": "volume", "no:": "number"}

_PAGES_PART = re.compile(r"^(?:s\.|seiten|pages|pp?\.)|\sp\.", re.IGNORECASE)
_YEAR_IN_PARENS = re.compile(r"\((\d{4})\)")
_YEAR_ONLY = re.compile(r"^\d{4}$")
_VOLUME_MARKER = re.compile(r"bd\.\s?|band\s|volume\s|vol\.\s?|jg\.\s?|jahrgang\s", re.IGNORECASE)
_NUMBER_MARKER = re.compile(r"no\.\s?|nr\.\s?|heft\s|issue\s|fasc\.\s?", re.IGNORECASE)


@dataclass
class RelatedParts:
    year: Optional[str] = None
    volume: Optional[str] = None
    number: Optional[str] = None
    pagerange: Optional[str] = None


def _after_marker(marker: re.Pattern, text: str) -> Optional[str]:
    parts = marker.split(text, maxsplit=1)
    if len(parts) < 2:
        return None
    return parts[1].strip() or None


def parse_free_part(fragment: str, parts: RelatedParts) -> None:
    """One comma-separated fragment of a free-form $g value."""
    text = fragment.strip()
    if not text:
        return

    if _PAGES_PART.search(text):
        pieces = text.split(None, 1)
        if len(pieces) == 2:
            parts.pagerange = pieces[1].strip()
        return

    m = _YEAR_IN_PARENS.search(text)
    if m:
        # combined "Vol. 12 No. 3 (2003)"
        parts.year = m.group(1)
        rest = text[: m.start()].strip()
        if _NUMBER_MARKER.search(rest):
            parts.number = _after_marker(_NUMBER_MARKER, rest) or parts.number
            rest = _NUMBER_MARKER.split(rest, maxsplit=1)[0].strip()
        if _VOLUME_MARKER.search(rest):
            parts.volume = _after_marker(_VOLUME_MARKER, rest) or parts.volume
        return

    if _YEAR_ONLY.match(text):
        parts.year = text
    elif _VOLUME_MARKER.search(text):
        parts.volume = _after_marker(_VOLUME_MARKER, text) or parts.volume
    elif _NUMBER_MARKER.search(text):
        parts.number = _after_marker(_NUMBER_MARKER, text) or parts.number


def parse_related_parts(values: Iterable[str]) -> RelatedParts:
    parts = RelatedParts()
    for value in values:
        for prefix, attr in TYPED_PARTS.items():
            if value.startswith(prefix):
                setattr(parts, attr, value[len(prefix):].strip())
                break
        else:
            for fragment in value.split(","):
                parse_free_part(fragment, parts)
    return parts


# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------

def _store_book_section_title(epdata: EPData, title: str, source: str) -> None:
    pieces = [p.strip() for p in title.split(",")]
    if len(pieces) == 1:
        epdata.set("book_title", pieces[0], source)
    elif len(pieces) == 2:
        series = pieces[0]
        # "Reihe. Bd. 3, Buchtitel"
        if re.search(r"\.\s(?:Band|Bd|Vol)", series):
            series = series.split(". ", 1)[0]
        epdata.set("series", series, source)
        epdata.set("book_title", pieces[1], source)
    else:
        log.debug("Cannot split host title %r", title)


@handler("marc2hostitementry")
def marc2hostitementry(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> None:
    ctx = options.context
    if ctx is None:
        return None

    doc_type = epdata.get("type")
    control = ctx.subfield("7")

    if control is not None and doc_type is not None:
        target = resolve_host_target(control, doc_type)
        if target:
            epdata.set(target, value, options.source)
    elif doc_type == "book_section":
        _store_book_section_title(epdata, value, options.source)
    elif doc_type == "newspaper_article":
        epdata.set("newspaper_title", value, options.source)

    edition = ctx.subfield("b")
    if edition:
        note = epdata.get("note")
        epdata.set("note", f"{note}\n{edition}" if note else edition, ctx.source("b"))

    imprint = ctx.subfield("d")
    if imprint:
        place, _, publisher = imprint.partition(" : ")
        publisher = re.sub(r",\s\d{4}-?$", "", publisher).strip()
        if place.strip():
            epdata.set_first("place_of_pub", place.strip(), ctx.source("d"), label="publisher location")
        if publisher:
            epdata.set_first("publisher", publisher, ctx.source("d"), label="publisher")

    related = ctx.subfields("g")
    if related:
        parts = parse_related_parts(related)
        if parts.volume:
            epdata.set("volume", parts.volume, ctx.source("g"))
        if parts.number:
            epdata.set("number", parts.number, ctx.source("g"))
        if parts.pagerange:
            epdata.set("pagerange", parts.pagerange, ctx.source("g"))
        if parts.year:
            epdata.set_first("date", parts.year, ctx.source("g"), label="date")

    issn = ctx.subfield("x")
    if issn:
        epdata.set_first("issn", issn, ctx.source("x"), label="ISSN", normalize=strip_hyphens)

    isbn = ctx.subfield("z")
    if isbn:
        epdata.set_first("isbn", isbn, ctx.source("z"), label="ISBN", normalize=strip_hyphens)

    return None
