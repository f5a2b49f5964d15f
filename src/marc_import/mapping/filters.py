from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Pattern, Tuple, Union

from marc_import.core.exceptions import ConfigurationError
from marc_import.normalization.text import apply_filters


@dataclass(frozen=True)
class FilterRuleSet:
    """
    Named, ordered list of regexes whose matches are removed from a raw
    value before a handler interprets it. Matching is case-insensitive.
    """

    name: str
    patterns: Tuple[Pattern[str], ...] = ()

    def apply(self, value: str) -> str:
        return apply_filters(value, self.patterns)

    def __iter__(self) -> Iterator[Pattern[str]]:
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)


def build_filter_set(name: str, patterns: Iterable[Union[str, Pattern[str]]]) -> FilterRuleSet:
    compiled = []
    for p in patterns:
        if isinstance(p, str):
            try:
                p = re.compile(p, re.IGNORECASE)
            except re.error as exc:
                raise ConfigurationError(f"Invalid regular expression in filter set '{name}': {p!r} ({exc})") from exc
        compiled.append(p)
    return FilterRuleSet(name=name, patterns=tuple(compiled))
