from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

TMP_SUFFIX = "tmp"


class MergePolicy(str, Enum):
    """How a value stored into an output field combines with what is there."""

    SCALAR = "scalar"     # overwrite
    LIST = "list"         # append unless an equal element exists
    APPEND = "append"     # always append
    PERSONS = "persons"   # append unless a matching PersonEntry exists
    FIRST = "first"       # first value wins, differing values are reported


@dataclass(frozen=True)
class PersonEntry:
    family: str
    given: str = ""
    orcid: Optional[str] = None

    def matches(self, other: "PersonEntry") -> bool:
        """
        Same person if the family names are equal and one given name starts
        with the other ("Anna" / "Anna-Maria", "A" / "Anna"), or if both
        carry the same identifier.
        """
        if self.family == other.family and (
            other.given.startswith(self.given) or self.given.startswith(other.given)
        ):
            return True
        return self.orcid is not None and other.orcid is not None and self.orcid == other.orcid

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": {"family": self.family, "given": self.given},
            "orcid": self.orcid,
        }


def is_tmp_field(name: str) -> bool:
    return name.endswith(TMP_SUFFIX)


class EPData:
    """
    Output record accumulated for one catalog record.

    Values are plain strings, lists of strings/dicts, or lists of
    PersonEntry. Each field's merge behaviour comes from its declared
    MergePolicy. ``suggestions`` is an append-only list of advisory
    messages for a human reviewer.
    """

    def __init__(self, policies: Optional[Mapping[str, MergePolicy]] = None):
        self._policies: Mapping[str, MergePolicy] = policies or {}
        self._fields: Dict[str, Any] = {}
        self._provenance: Dict[str, str] = {}
        self.suggestions: List[str] = []

    # ------------------------------------------------------------------ #
    # Mapping-style access
    # ------------------------------------------------------------------ #

    def __contains__(self, name: str) -> bool:
        return self._fields.get(name) is not None

    def __getitem__(self, name: str) -> Any:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def get(self, name: str, default: Any = None) -> Any:
        value = self._fields.get(name)
        return default if value is None else value

    def set(self, name: str, value: Any, source: Optional[str] = None) -> None:
        """Unconditional overwrite, regardless of the declared policy."""
        if value is None:
            self.remove(name)
            return
        self._fields[name] = value
        if source:
            self._provenance[name] = source

    def remove(self, name: str) -> None:
        self._fields.pop(name, None)
        self._provenance.pop(name, None)

    def source_of(self, name: str) -> Optional[str]:
        return self._provenance.get(name)

    def field_names(self) -> List[str]:
        return [k for k, v in self._fields.items() if v is not None]

    def tmp_fields(self) -> List[str]:
        return [k for k in self.field_names() if is_tmp_field(k)]

    # ------------------------------------------------------------------ #
    # Policy-driven storage
    # ------------------------------------------------------------------ #

    def policy_for(self, name: str) -> MergePolicy:
        policy = self._policies.get(name)
        if policy is not None:
            return policy
        return MergePolicy.PERSONS if is_tmp_field(name) else MergePolicy.SCALAR

    def store(self, name: str, value: Any, source: Optional[str] = None) -> None:
        """Store ``value`` into ``name`` using the field's declared merge policy."""
        if value is None or value == "" or value == []:
            return

        policy = self.policy_for(name)
        values = value if isinstance(value, list) else [value]

        if policy is MergePolicy.SCALAR:
            self.set(name, value, source)
        elif policy is MergePolicy.FIRST:
            self.set_first(name, value, source)
        elif policy is MergePolicy.LIST:
            for v in values:
                self.append_unique(name, v)
        elif policy is MergePolicy.APPEND:
            for v in values:
                self.append(name, v)
        elif policy is MergePolicy.PERSONS:
            for v in values:
                self.add_person(name, v)

    def append(self, name: str, value: Any) -> None:
        self._fields.setdefault(name, []).append(value)

    def append_unique(self, name: str, value: Any) -> bool:
        """Append unless an exactly-equal element is already stored."""
        current = self._fields.setdefault(name, [])
        if value in current:
            return False
        current.append(value)
        return True

    def add_person(self, name: str, person: PersonEntry) -> bool:
        current = self._fields.setdefault(name, [])
        for existing in current:
            if person.matches(existing):
                return False
        current.append(person)
        return True

    def set_first(
        self,
        name: str,
        value: Any,
        source: Optional[str] = None,
        *,
        label: Optional[str] = None,
        normalize: Optional[Callable[[Any], Any]] = None,
    ) -> bool:
        """
        Store ``value`` only if ``name`` is unset. When a different value is
        already present it is kept and the conflict is appended to the
        suggestions, naming both sources.

        Returns True when the value was stored.
        """
        current = self._fields.get(name)
        if current is None:
            self.set(name, value, source)
            return True

        norm = normalize or (lambda v: v)
        if norm(current) != norm(value):
            self.add_conflict(label or name, current, self.source_of(name), value, source)
        return False

    # ------------------------------------------------------------------ #
    # Suggestions
    # ------------------------------------------------------------------ #

    def add_suggestion(self, message: str) -> None:
        self.suggestions.append(message)

    def add_conflict(
        self,
        label: str,
        stored: Any,
        stored_source: Optional[str],
        new: Any,
        new_source: Optional[str],
    ) -> None:
        self.add_suggestion(
            f"Warning: Conflict between {label} in {stored_source or 'earlier field'} ({stored}) "
            f"and {new_source or 'later field'} ({new})"
        )

    @property
    def suggestions_text(self) -> str:
        return "\n".join(self.suggestions)

    # ------------------------------------------------------------------ #
    # Export
    # ------------------------------------------------------------------ #

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for name in self.field_names():
            value = self._fields[name]
            if isinstance(value, list):
                out[name] = [v.to_dict() if isinstance(v, PersonEntry) else v for v in value]
            else:
                out[name] = value
        if self.suggestions:
            out["suggestions"] = self.suggestions_text
        return out

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EPData):
            return NotImplemented
        return self._fields == other._fields and self.suggestions == other.suggestions

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<EPData fields={self.field_names()}>"
