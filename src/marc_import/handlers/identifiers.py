"""
Identifier and link handlers: system number (001), ISBN/ISSN, DOI/PMID
(024) and electronic locations (856 $u).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Dict, Optional
from urllib.parse import urlparse

from marc_import.epdata.record import EPData
from marc_import.handlers.registry import handler
from marc_import.logger import get_logger

if TYPE_CHECKING:
    from marc_import.walker.context import HandlerOptions

log = get_logger("handlers.identifiers")

_STANDARD_NUMBER = re.compile(r"[0-9X-]+")


def strip_hyphens(value: Any) -> str:
    return re.sub(r"[-\s]", "", str(value))


def standard_number(value: str) -> Optional[str]:
    """Leading ISBN/ISSN characters, dropping qualifiers: '3-16-148410-X (pbk.)' -> '3-16-148410-X'."""
    m = _STANDARD_NUMBER.search(value)
    return m.group(0) if m else None


@handler("marc2systemnumber")
def marc2systemnumber(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[Dict[str, str]]:
    number = value.strip()
    if not number:
        return None

    settings = options.config.system_number
    epdata.set("source", f"{settings.get('source_prefix', '')}{number}", options.source)
    return {"type": "catalog", "url": f"{settings.get('permalink', '')}{number}"}


@handler("marc2isbn")
def marc2isbn(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    return standard_number(value)


@handler("marc2issn")
def marc2issn(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> None:
    """022 $a and 490 $x both carry an ISSN; the first one seen is kept."""
    issn = standard_number(value)
    if issn:
        epdata.set_first(fieldname or "issn", issn, options.source, label="ISSN", normalize=strip_hyphens)
    return None


@handler("marc2doi_pmid")
def marc2doi_pmid(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> None:
    # Only "source specified in $2" identifiers
    if options.ind1 != "7":
        return None

    scheme = (options.sibling("2") or "").strip().lower()
    target = options.config.identifier_sources.get(scheme)
    if target:
        epdata.set(target, value.strip(), options.source)
    else:
        log.debug("Ignoring 024 identifier with source %r", scheme)
    return None


@handler("marc2url")
def marc2url(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[Dict[str, str]]:
    url = value.strip()
    if not url:
        return None

    config = options.config
    for pattern in config.url_exclude_patterns:
        if pattern.search(url):
            return None

    doi = epdata.get("doi")
    if doi and doi in url:
        return None

    host = urlparse(url).netloc.lower()
    link_type = config.url_type_map.get(host, config.default("url_type", "pub"))
    return {"type": link_type, "url": url}
