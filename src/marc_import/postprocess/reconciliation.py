"""
Reconciliation pass, run once after the record walk.

1. Provisional person lists (``creatorstmp``, ``editorstmp``,
   ``examinerstmp``) are merged into their canonical lists with the person
   dedup rule and removed.
2. Type-specific defaults: thesis types get a default subtype; articles
   carry the journal title in ``publication`` rather than ``series``.
3. Fixed defaults for access status and copyright.
4. Edited works: creators become editors; a record with editors but no
   creators is an edited work.

The pass is deterministic and idempotent: running it on its own output
changes nothing.
"""

from __future__ import annotations

from marc_import.epdata.record import TMP_SUFFIX, EPData
from marc_import.logger import get_logger

log = get_logger("postprocess.reconciliation")


def merge_provisional_lists(epdata: EPData) -> None:
    for tmp_name in epdata.tmp_fields():
        canonical = tmp_name[: -len(TMP_SUFFIX)]
        added = 0
        for person in epdata.get(tmp_name, []):
            if epdata.add_person(canonical, person):
                added += 1
        epdata.remove(tmp_name)
        if not epdata.get(canonical):
            epdata.remove(canonical)
        log.debug("Merged %s into %s (%d new)", tmp_name, canonical, added)


def apply_type_defaults(epdata: EPData, config) -> None:
    doc_type = epdata.get("type")

    if doc_type in config.thesis_types and "thesis_subtype" not in epdata:
        subtype = (config.default("thesis_subtypes") or {}).get(doc_type)
        if subtype:
            epdata.set("thesis_subtype", subtype, "default")

    if doc_type == config.default("article_type", "article") and "series" in epdata:
        epdata.set("publication", epdata.get("series"), epdata.source_of("series"))
        epdata.remove("series")


def apply_fixed_defaults(epdata: EPData, config) -> None:
    oa_status = config.default("oa_status")
    if oa_status:
        epdata.set("oa_status", oa_status, "default")

    copyright_statement = config.default("copyright")
    if copyright_statement:
        epdata.set("copyright", [copyright_statement], "default")


def reclassify_edited_work(epdata: EPData, config) -> None:
    edited_type = config.edited_type

    if epdata.get("type") == edited_type:
        for person in epdata.get("creators", []):
            epdata.add_person("editors", person)
        epdata.remove("creators")

    creators = epdata.get("creators", [])
    editors = epdata.get("editors", [])
    if editors and not creators:
        if epdata.get("type") != edited_type:
            log.debug("Record has editors only; type %s -> %s", epdata.get("type"), edited_type)
        epdata.set("type", edited_type, "reconciliation")
        epdata.remove("creators")


def finalize(epdata: EPData, config) -> EPData:
    merge_provisional_lists(epdata)
    apply_type_defaults(epdata, config)
    apply_fixed_defaults(epdata, config)
    reclassify_edited_work(epdata, config)
    return epdata
