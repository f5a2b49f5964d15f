"""
Person-name helpers.

Catalog headings come as "Family, Given", statements of responsibility as
"Given Family", and both may carry particles ("van", "von der") or
<<bracketed>> sorting fragments. The helpers below turn any of these into a
(family, given) pair.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Pattern, Tuple

from marc_import.normalization.text import apply_filters

NameParts = Tuple[str, str]

_BRACKETED = re.compile(r"^(.*?)\s*<<(.*?)>>(.*)$")
_CATALOG_NOISE = re.compile(r"100\sL")
_DEFAULT_SEPARATOR = r",\s"


def shift_bracketed(part: str) -> str:
    """
    Drop << >> markers and move the bracketed fragment to the front:

    >>> shift_bracketed("Gogh <<van>>")
    'van Gogh'
    """
    m = _BRACKETED.match(part)
    if not m:
        return part
    front = m.group(2).strip()
    rest = (m.group(1) + m.group(3)).strip()
    return f"{front} {rest}".strip()


def match_shift_pattern(text: str, patterns: Iterable[Pattern[str]]) -> Optional[NameParts]:
    """
    Try the name-part shift patterns in order. Each pattern captures
    (given, family-part); the first match wins.
    """
    for pattern in patterns:
        m = pattern.search(text)
        if m and m.lastindex and m.lastindex >= 2:
            return m.group(1).strip(), m.group(2).strip()
    return None


def clean_name(family: str, given: str, shift_patterns: Iterable[Pattern[str]] = ()) -> NameParts:
    """
    Final clean-up of a (family, given) pair:
    - << >> fragments are shifted to the front of the family name
    - a trailing particle in the given name moves to the family name
      ("Ludwig van", "Beethoven" -> "Ludwig", "van Beethoven")
    - dots in given names become spaces
    """
    family = (family or "").strip()
    given = _CATALOG_NOISE.sub("", given or "")

    family_clean = shift_bracketed(family)
    given_clean = given

    shifted = match_shift_pattern(given, shift_patterns)
    if shifted:
        given_clean, particle = shifted
        family_clean = f"{particle} {family_clean}".strip()

    given_clean = " ".join(given_clean.replace(".", " ").split())
    return family_clean, given_clean


def split_first_space(name: str) -> NameParts:
    """'Family Given Middle' -> ('Family', 'Given Middle')."""
    name = name.strip()
    family, _, given = name.partition(" ")
    return family, given.strip()


def split_last_space(name: str) -> NameParts:
    """'Given Middle Family' -> ('Family', 'Given Middle')."""
    name = name.strip()
    given, _, family = name.rpartition(" ")
    return family, given.strip()


def split_person_name(
    name: str,
    separator: str = _DEFAULT_SEPARATOR,
    shift_patterns: Iterable[Pattern[str]] = (),
) -> NameParts:
    """
    Split a heading such as "Müller, Anna" at ``separator`` (a regex).
    Without a separator the heading is read as "Family Given".
    """
    parts = re.split(separator, name)
    if len(parts) >= 2:
        family, given = parts[0], parts[1]
    else:
        family, given = split_first_space(name)
    return clean_name(family, given, shift_patterns)


def guess_name_parts(name: str, shift_patterns: Iterable[Pattern[str]] = ()) -> NameParts:
    """
    Split a name written in natural order ("Anna Maria van Dijk"). A shift
    pattern match decides the family part, otherwise the last word is the
    family name.
    """
    shifted = match_shift_pattern(name, shift_patterns)
    if shifted:
        given, family = shifted
        return family, given
    return split_last_space(name)


def parse_person_fragment(
    fragment: str,
    honorific_patterns: Iterable[Pattern[str]] = (),
    shift_patterns: Iterable[Pattern[str]] = (),
) -> Optional[NameParts]:
    """
    One name out of a statement of responsibility or examiner list.
    Returns None when nothing is left after removing honorifics.
    """
    person = apply_filters(fragment, list(honorific_patterns))
    person = person.strip().rstrip(".").strip()
    if not person:
        return None

    family, given = guess_name_parts(person, shift_patterns)
    return clean_name(family, given, shift_patterns)
