# src/marc_import/loader/marcxml.py

"""
MARC21 slim XML -> CatalogRecord.

Accepts a bare ``record`` element, a ``collection`` wrapper, or any other
document that contains MARC records (e.g. an SRU ``recordData`` block).
Namespaced and un-namespaced documents are both read. Only the first record
is converted by ``parse_record``; callers that need every record use
``iter_records``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Union

from lxml import etree

from marc_import.core.exceptions import RecordParseError
from marc_import.loader.record import (
    CONTROLFIELD,
    DATAFIELD,
    LEADER,
    CatalogRecord,
    ControlField,
    DataField,
    Field,
    Leader,
    Subfield,
    UnknownField,
)

MARC_NS = "http://www.loc.gov/MARC21/slim"

XmlSource = Union[str, bytes, Path, etree._Element]


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _text(element: etree._Element) -> str:
    return "".join(element.itertext()).strip()


def parse_document(source: XmlSource) -> etree._Element:
    if isinstance(source, etree._Element):
        return source

    parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=True)
    try:
        if isinstance(source, Path):
            return etree.parse(str(source), parser).getroot()
        if isinstance(source, str):
            source = source.encode("utf-8")
        return etree.fromstring(source, parser)
    except etree.XMLSyntaxError as exc:
        raise RecordParseError(f"Input is not well-formed XML: {exc}") from exc


def _convert_field(element: etree._Element) -> Field:
    kind = _local_name(element)

    if kind == LEADER:
        # Leader positions are significant, keep inner blanks
        return Leader(value="".join(element.itertext()))

    if kind == CONTROLFIELD:
        return ControlField(tag=element.get("tag", ""), value="".join(element.itertext()))

    if kind == DATAFIELD:
        subfields = tuple(
            Subfield(code=sf.get("code", ""), value=_text(sf))
            for sf in element
            if isinstance(sf.tag, str) and _local_name(sf) == "subfield"
        )
        return DataField(
            tag=element.get("tag", ""),
            ind1=element.get("ind1", " "),
            ind2=element.get("ind2", " "),
            subfields=subfields,
        )

    return UnknownField(field_class=kind, text=_text(element))


def record_from_element(element: etree._Element) -> CatalogRecord:
    """Build a CatalogRecord from a MARC ``record`` element."""
    fields: List[Field] = []
    for child in element:
        # Skip comments and processing instructions
        if not isinstance(child.tag, str):
            continue
        fields.append(_convert_field(child))
    return CatalogRecord(fields=tuple(fields))


def iter_record_elements(root: etree._Element) -> Iterator[etree._Element]:
    qname = etree.QName(root)
    if qname.localname == "record" and qname.namespace in (None, MARC_NS):
        yield root
        return
    for element in root.iter("{%s}record" % MARC_NS, "record"):
        yield element


def iter_records(source: XmlSource) -> Iterator[CatalogRecord]:
    """Yield every MARC record found in ``source`` in document order."""
    root = parse_document(source)
    for element in iter_record_elements(root):
        yield record_from_element(element)


def parse_record(source: XmlSource) -> CatalogRecord:
    """
    Parse the first MARC record found in ``source``.

    Raises:
        RecordParseError: when the document is not XML or holds no record.
    """
    for record in iter_records(source):
        return record
    raise RecordParseError("No MARC21 record element found in input")
