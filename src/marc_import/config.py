"""
Configuration store for marc-import.

A single YAML document supplies the mapping rules, filter rule-sets and the
coded-value lookup tables used during conversion. It is loaded once and
treated as read-only afterwards; regexes are compiled here so that a bad
pattern is reported before any record is processed.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern, Union

import yaml

from marc_import.core.exceptions import ConfigurationError

CONFIG_PATH = Path(__file__).resolve().parent / "resources" / "marc_import.yml"
CONFIG_ENV_VAR = "MARC_IMPORT_CONFIG"


def _compile(pattern: str, where: str, flags: int = 0) -> Pattern[str]:
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise ConfigurationError(f"Invalid regular expression in {where}: {pattern!r} ({exc})") from exc


def _compile_list(patterns: Any, where: str, flags: int = 0) -> List[Pattern[str]]:
    if patterns is None:
        return []
    if not isinstance(patterns, list):
        raise ConfigurationError(f"{where} must be a list of patterns")
    return [_compile(str(p), where, flags) for p in patterns]


def _as_mapping(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"Configuration section '{key}' must be a mapping")
    return {str(k): v for k, v in value.items()}


class ImportConfig:
    def __init__(self, data: Dict[str, Any]):
        self.raw = data
        self.paths = data.get("paths", {}) or {}
        self.logging = data.get("logging", {}) or {}
        self.debug = bool(data.get("debug", False))

        # Rule data, consumed by marc_import.mapping
        self.fields: Dict[str, str] = _as_mapping(data, "fields")
        self.mappings: List[Dict[str, Any]] = list(data.get("mappings") or [])
        self.filters: Dict[str, List[Pattern[str]]] = {
            name: _compile_list(patterns, f"filters.{name}", re.IGNORECASE)
            for name, patterns in _as_mapping(data, "filters").items()
        }

        # Pattern lists
        self.editor_patterns = _compile_list(data.get("editor_patterns"), "editor_patterns", re.IGNORECASE)
        self.honorific_patterns = _compile_list(data.get("honorific_patterns"), "honorific_patterns", re.IGNORECASE)
        self.name_part_shift_patterns = _compile_list(
            data.get("name_part_shift_patterns"), "name_part_shift_patterns", re.IGNORECASE
        )
        self.url_exclude_patterns = _compile_list(data.get("url_exclude_patterns"), "url_exclude_patterns")

        # Coded-value lookup tables
        self.biblevel_type_map: Dict[str, str] = _as_mapping(data, "biblevel_type_map")
        self.encoding_status_map: Dict[str, str] = _as_mapping(data, "encoding_status_map")
        self.language_map: Dict[str, str] = _as_mapping(data, "language_map")
        self.degree_type_map: Dict[str, str] = _as_mapping(data, "degree_type_map")
        self.genre_type_map: Dict[str, str] = _as_mapping(data, "genre_type_map")
        self.faculty_map: Dict[str, str] = _as_mapping(data, "faculty_map")
        self.collections_map: Dict[str, List[str]] = {
            k: [str(c) for c in (v or [])] for k, v in _as_mapping(data, "collections_map").items()
        }
        self.relator_map: Dict[str, str] = _as_mapping(data, "relator_map")
        self.url_type_map: Dict[str, str] = _as_mapping(data, "url_type_map")
        self.identifier_sources: Dict[str, str] = _as_mapping(data, "identifier_sources")
        self.system_number: Dict[str, str] = _as_mapping(data, "system_number")
        self.defaults: Dict[str, Any] = _as_mapping(data, "defaults")

        self.thesis_rules = [self._thesis_rule(i, r) for i, r in enumerate(data.get("thesis_rules") or [])]
        self.institution_aliases = [
            (_compile(str(a.get("pattern", "")), "institution_aliases"), str(a.get("name", "")))
            for a in (data.get("institution_aliases") or [])
        ]
        self.institution_substitutions = [
            (_compile(str(s.get("pattern", "")), "institution_substitutions"), str(s.get("replacement", "")))
            for s in (data.get("institution_substitutions") or [])
        ]

    @staticmethod
    def _thesis_rule(index: int, rule: Any) -> Dict[str, Any]:
        if not isinstance(rule, dict) or not rule.get("pattern") or not rule.get("type"):
            raise ConfigurationError(f"thesis_rules[{index}] needs at least 'pattern' and 'type'")
        return {
            "pattern": _compile(str(rule["pattern"]), f"thesis_rules[{index}]"),
            "type": str(rule["type"]),
            "subtype": str(rule.get("subtype") or ""),
            "institution": str(rule.get("institution") or ""),
            "faculty": str(rule.get("faculty") or ""),
        }

    # Convenience accessors for the defaults section

    def default(self, key: str, fallback: Any = None) -> Any:
        return self.defaults.get(key, fallback)

    @property
    def edited_type(self) -> str:
        return str(self.default("edited_type", "edited_scientific_work"))

    @property
    def thesis_types(self) -> List[str]:
        return [str(t) for t in (self.default("thesis_types") or [])]

    @property
    def max_year(self) -> int:
        return int(self.default("max_year", 2099))


def load_config(path: Optional[Union[str, Path]] = None) -> "ImportConfig":
    """
    Load a configuration file. Resolution order: explicit path, the
    MARC_IMPORT_CONFIG environment variable, the packaged default.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or CONFIG_PATH
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Config file {path} is not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping at top level")

    return ImportConfig(data)


_config_cache = None


def get_config() -> "ImportConfig":
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache
