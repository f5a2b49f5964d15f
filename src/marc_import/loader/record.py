# src/marc_import/loader/record.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

LEADER = "leader"
CONTROLFIELD = "controlfield"
DATAFIELD = "datafield"

FIELD_CLASSES = (LEADER, CONTROLFIELD, DATAFIELD)


@dataclass(frozen=True)
class Subfield:
    code: str
    value: str


@dataclass(frozen=True)
class Leader:
    """Fixed-width coded record header (24 characters in MARC21)."""

    value: str
    field_class: str = field(default=LEADER, init=False)

    def position(self, index: int) -> Optional[str]:
        """Character at a 0-based position, or None when the leader is short."""
        if 0 <= index < len(self.value):
            return self.value[index]
        return None


@dataclass(frozen=True)
class ControlField:
    tag: str
    value: str
    field_class: str = field(default=CONTROLFIELD, init=False)


@dataclass(frozen=True)
class DataField:
    """
    A tagged data field with two indicators and an ordered tuple of
    subfields. Repeated subfield codes are kept in document order.
    """

    tag: str
    ind1: str = " "
    ind2: str = " "
    subfields: Tuple[Subfield, ...] = ()
    field_class: str = field(default=DATAFIELD, init=False)

    def values(self, code: str) -> List[str]:
        """All non-empty values of subfield ``code`` in document order."""
        return [sf.value for sf in self.subfields if sf.code == code and sf.value != ""]

    def first(self, code: str) -> Optional[str]:
        for sf in self.subfields:
            if sf.code == code and sf.value != "":
                return sf.value
        return None


@dataclass(frozen=True)
class UnknownField:
    """An element inside a record that is not a leader, control or data field."""

    field_class: str
    text: str = ""


Field = Union[Leader, ControlField, DataField, UnknownField]


@dataclass(frozen=True)
class CatalogRecord:
    """
    One MARC21 bibliographic record: an ordered, read-only sequence of
    fields exactly as they appear in the source document.
    """

    fields: Tuple[Field, ...] = ()

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)

    def __len__(self) -> int:  # pragma: no cover - trivial wrapper
        return len(self.fields)

    @property
    def leader(self) -> Optional[Leader]:
        for f in self.fields:
            if isinstance(f, Leader):
                return f
        return None

    def control_value(self, tag: str) -> Optional[str]:
        for f in self.fields:
            if isinstance(f, ControlField) and f.tag == tag:
                return f.value
        return None

    def datafields(self, tag: str) -> List[DataField]:
        return [f for f in self.fields if isinstance(f, DataField) and f.tag == tag]

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<CatalogRecord fields={len(self.fields)}>"
