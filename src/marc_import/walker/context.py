from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Optional

from marc_import.loader.record import DataField

if TYPE_CHECKING:
    from marc_import.mapping.filters import FilterRuleSet


def datafield_source(tag: str, code: str) -> str:
    return f"data field {tag}_{code}"


def controlfield_source(tag: str) -> str:
    return f"control field {tag}"


class DispatchContext:
    """
    View on the data field currently being dispatched, so a handler can
    read sibling subfields (e.g. 024 $2 to tell a DOI from a PMID).

    A new context is built for every data field and handed to the handler
    inside HandlerOptions; nothing keeps a reference once the field is done.
    """

    __slots__ = ("_field",)

    def __init__(self, field: DataField):
        self._field = field

    @property
    def field(self) -> DataField:
        return self._field

    @property
    def tag(self) -> str:
        return self._field.tag

    def subfield(self, code: str) -> Optional[str]:
        """First non-empty value of sibling subfield ``code``."""
        return self._field.first(code)

    def subfields(self, code: str) -> List[str]:
        """All non-empty values of sibling subfield ``code``."""
        return self._field.values(code)

    def source(self, code: str) -> str:
        """Provenance label for a sibling, e.g. 'data field 773_x'."""
        return datafield_source(self._field.tag, code)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<DispatchContext {self._field.tag}>"


@dataclass(frozen=True)
class HandlerOptions:
    ind1: str = " "
    ind2: str = " "
    filters: Optional["FilterRuleSet"] = None
    context: Optional[DispatchContext] = None
    config: Any = None
    source: str = ""

    def sibling(self, code: str) -> Optional[str]:
        if self.context is None:
            return None
        return self.context.subfield(code)

    def siblings(self, code: str) -> List[str]:
        if self.context is None:
            return []
        return self.context.subfields(code)
