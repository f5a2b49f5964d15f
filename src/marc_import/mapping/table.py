"""
Mapping Table: (field class, tag, subfield) -> MappingRule.

Built once per configuration load and immutable afterwards, so a single
table can be shared by any number of conversions. Every rule is validated
while loading; an unknown handler, filter set or output field is a
ConfigurationError before any record is touched.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from marc_import.core.exceptions import ConfigurationError
from marc_import.epdata.fields import is_declared, load_field_policies
from marc_import.epdata.record import MergePolicy
from marc_import.loader.record import CONTROLFIELD, DATAFIELD, FIELD_CLASSES, LEADER
from marc_import.logger import get_logger
from marc_import.mapping.filters import FilterRuleSet, build_filter_set

log = get_logger("mapping.table")

RuleKey = Tuple[str, str, str]


@dataclass(frozen=True)
class MappingRule:
    field_class: str
    tag: str
    subfield: str
    fieldname: str
    handler: str
    filter: Optional[str] = None

    @property
    def key(self) -> RuleKey:
        return (self.field_class, self.tag, self.subfield)


class MappingTable:
    def __init__(
        self,
        rules: Mapping[RuleKey, MappingRule],
        filters: Optional[Mapping[str, FilterRuleSet]] = None,
        policies: Optional[Mapping[str, MergePolicy]] = None,
    ):
        self._rules = MappingProxyType(dict(rules))
        self._filters = MappingProxyType(dict(filters or {}))
        self._policies = MappingProxyType(dict(policies or {}))

    def lookup(self, field_class: str, tag: str, subfield: str = "") -> Optional[MappingRule]:
        return self._rules.get((field_class, tag, subfield or ""))

    def filter_set(self, name: Optional[str]) -> Optional[FilterRuleSet]:
        if not name:
            return None
        return self._filters.get(name)

    @property
    def policies(self) -> Mapping[str, MergePolicy]:
        return self._policies

    @property
    def filters(self) -> Mapping[str, FilterRuleSet]:
        return self._filters

    def __iter__(self) -> Iterator[MappingRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<MappingTable rules={len(self._rules)} filters={len(self._filters)}>"


def _rule_from_entry(
    index: int,
    entry: Any,
    filters: Mapping[str, FilterRuleSet],
    policies: Mapping[str, MergePolicy],
    handler_names: Iterable[str],
) -> MappingRule:
    where = f"mappings[{index}]"
    if isinstance(entry, MappingRule):
        entry = {
            "field_class": entry.field_class,
            "tag": entry.tag,
            "subfield": entry.subfield,
            "fieldname": entry.fieldname,
            "handler": entry.handler,
            "filter": entry.filter,
        }
    if not isinstance(entry, dict):
        raise ConfigurationError(f"{where} must be a mapping, got {type(entry).__name__}")

    field_class = str(entry.get("field_class") or "")
    if field_class not in FIELD_CLASSES:
        raise ConfigurationError(f"{where}: unknown field_class {field_class!r}")

    tag = str(entry.get("tag") or "")
    if field_class != LEADER and not tag:
        raise ConfigurationError(f"{where}: missing tag")

    subfield = str(entry.get("subfield") or "")
    if field_class == DATAFIELD and len(subfield) != 1:
        raise ConfigurationError(f"{where}: datafield rules need a one-character subfield code")
    if field_class == CONTROLFIELD and subfield:
        raise ConfigurationError(f"{where}: controlfield rules take no subfield")

    handler = str(entry.get("handler") or "")
    if not handler:
        raise ConfigurationError(f"{where}: missing handler name")
    if handler not in handler_names:
        raise ConfigurationError(f"{where}: unknown handler {handler!r}")

    fieldname = str(entry.get("fieldname") or "")
    if fieldname and not is_declared(fieldname, policies):
        raise ConfigurationError(f"{where}: output field {fieldname!r} is not declared")

    filter_name = entry.get("filter") or None
    if filter_name is not None and filter_name not in filters:
        raise ConfigurationError(f"{where}: unknown filter set {filter_name!r}")

    return MappingRule(
        field_class=field_class,
        tag=tag,
        subfield=subfield,
        fieldname=fieldname,
        handler=handler,
        filter=filter_name,
    )


def load_mapping_table(
    rules: Iterable[Any],
    filters: Optional[Mapping[str, Iterable[Any]]] = None,
    fields: Optional[Mapping[str, Any]] = None,
    handler_names: Optional[Iterable[str]] = None,
) -> MappingTable:
    """
    Validate rule entries and build an immutable MappingTable.

    Args:
        rules: rule dicts (or MappingRule objects) with field_class, tag,
            subfield, fieldname, handler and an optional filter name.
        filters: filter set name -> regexes (strings or compiled).
        fields: output field name -> merge policy name.
        handler_names: names accepted as handlers; defaults to the registry.

    Raises:
        ConfigurationError: on the first invalid entry.
    """
    if handler_names is None:
        from marc_import.handlers import HANDLERS

        handler_names = HANDLERS.keys()
    handler_names = frozenset(handler_names)

    filter_sets: Dict[str, FilterRuleSet] = {
        name: build_filter_set(name, patterns or []) for name, patterns in (filters or {}).items()
    }
    policies = load_field_policies(fields or {})

    table: Dict[RuleKey, MappingRule] = {}
    for index, entry in enumerate(rules or []):
        rule = _rule_from_entry(index, entry, filter_sets, policies, handler_names)
        if rule.key in table:
            log.warning("Mapping for %s is defined twice; the later rule wins", "/".join(rule.key))
        table[rule.key] = rule

    log.debug("Loaded mapping table with %d rules and %d filter sets", len(table), len(filter_sets))
    return MappingTable(table, filter_sets, policies)


def build_mapping_table(config) -> MappingTable:
    """Build the table from an ImportConfig."""
    return load_mapping_table(config.mappings, config.filters, config.fields)
