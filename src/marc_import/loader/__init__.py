# src/marc_import/loader/__init__.py

"""
Public interface for the MARC loader stack.

    from marc_import.loader import (
        CatalogRecord,
        ControlField,
        DataField,
        Leader,
        Subfield,
        UnknownField,
        parse_record,
        iter_records,
        parse_sru_response,
    )
"""

from __future__ import annotations

from .record import (
    CONTROLFIELD,
    DATAFIELD,
    FIELD_CLASSES,
    LEADER,
    CatalogRecord,
    ControlField,
    DataField,
    Field,
    Leader,
    Subfield,
    UnknownField,
)
from .marcxml import MARC_NS, iter_records, parse_document, parse_record, record_from_element
from .sru import SruResponse, parse_sru_response

__all__ = [
    "CONTROLFIELD",
    "DATAFIELD",
    "FIELD_CLASSES",
    "LEADER",
    "MARC_NS",
    "CatalogRecord",
    "ControlField",
    "DataField",
    "Field",
    "Leader",
    "Subfield",
    "UnknownField",
    "SruResponse",
    "iter_records",
    "parse_document",
    "parse_record",
    "parse_sru_response",
    "record_from_element",
]
