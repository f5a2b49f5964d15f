"""
Person handlers.

Headings (100/700, 900) are "Family, Given"; the statement of
responsibility (245 $c) is free text such as "hrsg. von Anna Müller und
Ludwig van Beethoven". Names from the statement go into provisional
``*tmp`` lists which the reconciliation pass merges into the canonical
lists afterwards.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable, List, Optional

from marc_import.epdata.record import EPData, PersonEntry
from marc_import.handlers.registry import handler
from marc_import.logger import get_logger
from marc_import.normalization.names import parse_person_fragment, split_person_name

if TYPE_CHECKING:
    from marc_import.walker.context import HandlerOptions

log = get_logger("handlers.persons")

HEADING_SEPARATOR = r",\s"
ORCID_PREFIX = "(orcid)"

_CONTINUATION = re.compile(r"^(.*?)\s?;\s(.*)$")
_COLLABORATION = re.compile(r"in\scollaboration\swith")
_STATEMENT_SEPARATORS = re.compile(r",\s|\sund\s|\sand\s|/|\s\|\s|\s&\s")


def relator_target(codes: Iterable[Optional[str]], relator_map, default: str = "creators") -> str:
    """Last mapped relator wins; pass codes in increasing priority."""
    target = default
    for code in codes:
        if code and code in relator_map:
            target = relator_map[code]
    return target


def orcid_from(values: Iterable[str]) -> Optional[str]:
    for value in values:
        if value.startswith(ORCID_PREFIX):
            return value[len(ORCID_PREFIX):].strip() or None
    return None


def split_statement(text: str) -> List[str]:
    text = _COLLABORATION.sub("and", text)
    return [p for p in _STATEMENT_SEPARATORS.split(text) if p.strip()]


@handler("marc2person")
def marc2person(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> None:
    config = options.config
    # $4 (relator code) beats $e (relator term)
    target = relator_target(
        [options.sibling("e"), options.sibling("4")],
        config.relator_map,
    )

    heading = value.strip().rstrip(".").strip()
    if not heading:
        return None

    family, given = split_person_name(heading, HEADING_SEPARATOR, config.name_part_shift_patterns)
    person = PersonEntry(family=family, given=given, orcid=orcid_from(options.siblings("0")))
    epdata.store(target, person, options.source)
    return None


@handler("marc2name")
def marc2name(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[PersonEntry]:
    """Heading as a person for the rule's own field; the walker merges it."""
    heading = value.strip().rstrip(".").strip()
    if not heading:
        return None

    family, given = split_person_name(heading, HEADING_SEPARATOR, options.config.name_part_shift_patterns)
    return PersonEntry(family=family, given=given, orcid=orcid_from(options.siblings("0")))


@handler("marc245c2person")
def marc245c2person(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> None:
    config = options.config
    target = "creatorstmp"

    # only the first statement; "; translated by ..." and the like are dropped
    m = _CONTINUATION.match(value)
    text = m.group(1) if m else value

    for pattern in config.editor_patterns:
        if pattern.search(text):
            text = pattern.sub("", text)
            epdata.set("type", config.edited_type, options.source)
            target = "editorstmp"

    for fragment in split_statement(text):
        parsed = parse_person_fragment(
            fragment,
            config.honorific_patterns,
            config.name_part_shift_patterns,
        )
        if parsed is None:
            continue
        family, given = parsed
        epdata.store(target, PersonEntry(family=family, given=given), options.source)

    log.debug("245c: %d provisional entries in %s", len(epdata.get(target, [])), target)
    return None


@handler("marc9002examiners")
def marc9002examiners(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> None:
    """
    900 $a: examiner headings (ind1 1 or 6), or local degree codes
    "<prefix><degree>" with the granting faculty in $b.
    """
    config = options.config

    if options.ind1 in ("1", "6"):
        family, given = split_person_name(value, HEADING_SEPARATOR, config.name_part_shift_patterns)
        epdata.store("examiners", PersonEntry(family=family, given=given), options.source)
        return None

    prefix = str(config.default("local_code_prefix", ""))
    if not prefix or not value.startswith(prefix):
        return None

    degree = value.replace(prefix, "").strip()
    organisation = (options.sibling("b") or "").replace(prefix, "").strip()

    doc_type = config.degree_type_map.get(degree)
    if doc_type:
        epdata.set("type", doc_type, options.source)

    faculty = config.faculty_map.get(organisation)
    if faculty:
        epdata.set("faculty", faculty, options.context.source("b") if options.context else options.source)

    for collection in config.collections_map.get(organisation, []):
        epdata.store("subjects", collection)
    return None
