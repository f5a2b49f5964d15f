"""
Thesis handlers: dissertation note (502), degree type, genre, institution
and faculty.

A typical 502 $a reads

    Diss. phil. Univ. Zürich, 2003. - Ref.: Gudela Grote ; Korref.: François Stoll

The part before ". - " describes the thesis and is classified with the
ordered ``thesis_rules`` from the configuration (first match wins); the
part after it lists the examiners.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Tuple

from marc_import.epdata.record import EPData, PersonEntry
from marc_import.handlers.registry import handler
from marc_import.logger import get_logger
from marc_import.normalization.names import parse_person_fragment
from marc_import.normalization.numbers import extract_year

if TYPE_CHECKING:
    from marc_import.walker.context import HandlerOptions

log = get_logger("handlers.thesis")

GUESS = "guess"

_NOTE_PARTS = re.compile(r"^(.*?)\.\s-\s(.*?)$")
_EXAMINER_SEPARATORS = re.compile(r"\s;\s|\s\.\s-\s")


def split_thesis_note(note: str) -> Tuple[str, Optional[str]]:
    """Split on the first ". - " into (thesis part, examiners part)."""
    m = _NOTE_PARTS.match(note)
    if m:
        return m.group(1), m.group(2)
    return note, None


def match_thesis_rule(text: str, rules: Iterable[Dict[str, Any]]) -> Optional[Tuple[Dict[str, Any], re.Match]]:
    for rule in rules:
        m = rule["pattern"].search(text)
        if m:
            return rule, m
    return None


def clean_institution(guess: str, config) -> str:
    """Canonical institution name for a guessed spelling ("Univ. Zürich")."""
    guess = guess.strip()
    for pattern, name in config.institution_aliases:
        if pattern.search(guess):
            return name
    for pattern, replacement in config.institution_substitutions:
        guess = pattern.sub(replacement, guess)
    return guess


def apply_thesis_rule(epdata: EPData, rule: Dict[str, Any], match: re.Match, config, source: str) -> None:
    epdata.set("type", rule["type"], source)
    if rule["subtype"]:
        epdata.set("thesis_subtype", rule["subtype"], source)

    if "institution" not in epdata:
        if rule["institution"] == GUESS:
            guessed = match.group(1) if match.lastindex else None
            if guessed:
                epdata.set("institution", clean_institution(guessed, config), source)
        elif rule["institution"]:
            epdata.set("institution", rule["institution"], source)

    if rule["faculty"]:
        epdata.set("faculty", rule["faculty"], source)


def parse_examiners(text: str, config) -> List[PersonEntry]:
    persons = []
    for fragment in _EXAMINER_SEPARATORS.split(text):
        parsed = parse_person_fragment(
            fragment,
            config.honorific_patterns,
            config.name_part_shift_patterns,
        )
        if parsed:
            persons.append(PersonEntry(family=parsed[0], given=parsed[1]))
    return persons


@handler("marc5022examiners")
def marc5022examiners(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> None:
    config = options.config
    thesis_part, examiners_part = split_thesis_note(value)

    year = extract_year(thesis_part)
    if year:
        epdata.set_first("date", year, options.source, label="date")

    found = match_thesis_rule(thesis_part, config.thesis_rules)
    if found:
        rule, m = found
        apply_thesis_rule(epdata, rule, m, config, options.source)
    else:
        log.debug("No thesis rule matches %r", thesis_part)

    if examiners_part:
        target = fieldname or "examinerstmp"
        for person in parse_examiners(examiners_part, config):
            epdata.store(target, person, options.source)
    return None


@handler("marc2degreetype")
def marc2degreetype(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    degree_map = options.config.degree_type_map
    return degree_map.get(value) or degree_map.get(value.rstrip(". "))


@handler("marc655a2type")
def marc655a2type(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    """Genre term -> document type, unless a thesis type is already set."""
    config = options.config
    if epdata.get("type") in config.thesis_types:
        return None
    return config.genre_type_map.get(value.rstrip(". "))


@handler("marc2institution")
def marc2institution(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    config = options.config
    for pattern, name in config.institution_aliases:
        if pattern.search(value):
            return name

    existing = epdata.get(fieldname)
    if not existing or existing == value:
        return value
    separator = config.default("institution_separator", " / ")
    return f"{existing}{separator}{value}"


@handler("marc2faculty")
def marc2faculty(epdata: EPData, fieldname: str, value: str, options: "HandlerOptions") -> Optional[str]:
    """909 $b with ind1 'U': faculty name, plus its collections as subjects."""
    if options.ind1 != "U":
        return None

    config = options.config
    faculty = config.faculty_map.get(value)
    existing = epdata.get(fieldname)

    result = None
    if faculty is None:
        if existing is None:
            epdata.add_suggestion(f"Faculty could not be assigned from {value}. Please check fulltext.")
    elif existing is not None and existing != faculty:
        epdata.add_suggestion(
            f"Conflicting faculty assignments from metadata: {existing}, {faculty}. Please check fulltext."
        )
    else:
        result = faculty

    for collection in config.collections_map.get(value, []):
        epdata.store("subjects", collection)
    return result
