"""
Shared pure helpers: text clean-up, person names, numbers and dates.
"""

from .text import (
    apply_filters,
    capitalize_words,
    clean_title,
    fold_ascii,
    fold_key,
    strip_trailing_punctuation,
)
from .names import (
    clean_name,
    guess_name_parts,
    match_shift_pattern,
    parse_person_fragment,
    shift_bracketed,
    split_first_space,
    split_last_space,
    split_person_name,
)
from .numbers import digits_only, extract_year, is_roman, roman_to_int
from .dates import parse_event_date

__all__ = [
    "apply_filters",
    "capitalize_words",
    "clean_name",
    "clean_title",
    "digits_only",
    "extract_year",
    "fold_ascii",
    "fold_key",
    "guess_name_parts",
    "is_roman",
    "match_shift_pattern",
    "parse_event_date",
    "parse_person_fragment",
    "roman_to_int",
    "shift_bracketed",
    "split_first_space",
    "split_last_space",
    "split_person_name",
    "strip_trailing_punctuation",
]
