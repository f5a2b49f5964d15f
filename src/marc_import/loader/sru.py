# src/marc_import/loader/sru.py

"""
Unwrap an already-fetched SRU ``searchRetrieveResponse``.

Retrieval itself belongs to the caller; this module only reads the
response body: the total hit count, diagnostics reported by the server,
and the MARC records carried in ``recordData``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from lxml import etree

from marc_import.loader.marcxml import XmlSource, parse_document, iter_record_elements, record_from_element
from marc_import.loader.record import CatalogRecord
from marc_import.logger import get_logger

log = get_logger("loader.sru")

SRW_NS = "http://www.loc.gov/zing/srw/"
DIAG_NS = "http://www.loc.gov/zing/srw/diagnostic/"


@dataclass
class SruResponse:
    total: int = 0
    records: List[CatalogRecord] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


def _first_text(root: etree._Element, path: str) -> Optional[str]:
    node = root.find(path)
    if node is None or node.text is None:
        return None
    return node.text.strip()


def parse_sru_response(source: XmlSource) -> SruResponse:
    root = parse_document(source)
    response = SruResponse()

    for message in root.iter("{%s}message" % DIAG_NS):
        text = "".join(message.itertext()).strip()
        if text:
            response.diagnostics.append(text)

    if response.diagnostics:
        log.warning("SRU response carries diagnostics: %s", "; ".join(response.diagnostics))
        return response

    total = _first_text(root, "{%s}numberOfRecords" % SRW_NS)
    try:
        response.total = int(total) if total else 0
    except ValueError:
        log.warning("SRU numberOfRecords is not an integer: %r", total)
        response.total = 0

    for record_data in root.iter("{%s}recordData" % SRW_NS):
        for element in record_data:
            if not isinstance(element.tag, str):
                continue
            for marc in iter_record_elements(element):
                response.records.append(record_from_element(marc))

    if response.total == 0:
        log.info("SRU: no records found")
    else:
        log.debug("SRU: %d of %d records in this batch", len(response.records), response.total)

    return response
