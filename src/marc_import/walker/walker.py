"""
Record Walker.

Visits the fields of one CatalogRecord in document order, resolves each
(field class, tag, subfield) through the MappingTable and invokes the
bound handler. Returned values are stored according to the merge policy
declared for the rule's output field. The reconciliation pass runs once
when the walk is complete.
"""

from __future__ import annotations

from typing import Any, Optional

from marc_import.config import get_config
from marc_import.epdata.record import EPData
from marc_import.handlers import get_handler
from marc_import.loader.record import CatalogRecord, ControlField, DataField, Leader
from marc_import.logger import get_logger
from marc_import.mapping.table import MappingRule, MappingTable, build_mapping_table
from marc_import.postprocess.reconciliation import finalize as reconcile
from marc_import.walker.context import (
    DispatchContext,
    HandlerOptions,
    controlfield_source,
    datafield_source,
)
from marc_import.walker.leader import interpret_leader

log = get_logger("walker")


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


class RecordWalker:
    """
    Converts catalog records with one MappingTable and configuration.
    The walker itself holds no per-record state, so one instance can
    convert any number of records.
    """

    def __init__(self, table: MappingTable, config=None):
        self.table = table
        self.config = config if config is not None else get_config()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def walk(self, record: CatalogRecord, epdata: Optional[EPData] = None) -> EPData:
        """Run every field through its handler; no reconciliation."""
        if epdata is None:
            epdata = EPData(self.table.policies)

        for field in record:
            if isinstance(field, DataField):
                self._datafield(field, epdata)
            elif isinstance(field, ControlField):
                self._controlfield(field, epdata)
            elif isinstance(field, Leader):
                self._leader(field, epdata)
            else:
                log.warning("Undefined MARC field class %r, skipped", getattr(field, "field_class", field))

        return epdata

    def convert(self, record: CatalogRecord, finalize: bool = True) -> EPData:
        epdata = self.walk(record)
        if finalize:
            reconcile(epdata, self.config)
        return epdata

    # ------------------------------------------------------------------ #
    # Field classes
    # ------------------------------------------------------------------ #

    def _leader(self, field: Leader, epdata: EPData) -> None:
        interpret_leader(field, epdata, self.config)

        rule = self.table.lookup(field.field_class, "", "")
        if rule is not None:
            options = HandlerOptions(config=self.config, source="leader")
            self._invoke(rule, epdata, field.value, options)

    def _controlfield(self, field: ControlField, epdata: EPData) -> None:
        rule = self.table.lookup(field.field_class, field.tag, "")
        if rule is None:
            return
        options = HandlerOptions(config=self.config, source=controlfield_source(field.tag))
        self._invoke(rule, epdata, field.value, options)

    def _datafield(self, field: DataField, epdata: EPData) -> None:
        for subfield in field.subfields:
            rule = self.table.lookup(field.field_class, field.tag, subfield.code)
            if rule is None:
                continue

            filters = self.table.filter_set(rule.filter)
            value = filters.apply(subfield.value) if filters is not None else subfield.value

            options = HandlerOptions(
                ind1=field.ind1,
                ind2=field.ind2,
                filters=filters,
                context=DispatchContext(field),
                config=self.config,
                source=datafield_source(field.tag, subfield.code),
            )
            self._invoke(rule, epdata, value, options)

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #

    def _invoke(self, rule: MappingRule, epdata: EPData, value: str, options: HandlerOptions) -> None:
        fn = get_handler(rule.handler)
        result = fn(epdata, rule.fieldname, value, options)

        if rule.fieldname and not _is_empty(result):
            epdata.store(rule.fieldname, result, options.source)


def convert(
    record: CatalogRecord,
    table: Optional[MappingTable] = None,
    config=None,
    finalize: bool = True,
) -> EPData:
    """
    Convert one catalog record into an EPData output record.

    Without an explicit table, one is built from ``config`` (or the
    packaged default configuration).
    """
    if config is None:
        config = get_config()
    if table is None:
        table = build_mapping_table(config)
    return RecordWalker(table, config).convert(record, finalize=finalize)
