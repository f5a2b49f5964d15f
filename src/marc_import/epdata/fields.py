from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from marc_import.core.exceptions import ConfigurationError
from marc_import.epdata.record import MergePolicy, is_tmp_field


def load_field_policies(fields: Mapping[str, Any]) -> Mapping[str, MergePolicy]:
    """
    Turn the ``fields`` configuration section (name -> policy name) into a
    read-only mapping of MergePolicy values.
    """
    policies = {}
    for name, policy in (fields or {}).items():
        try:
            policies[str(name)] = MergePolicy(str(policy))
        except ValueError:
            allowed = ", ".join(p.value for p in MergePolicy)
            raise ConfigurationError(
                f"Field '{name}' declares unknown merge policy '{policy}' (expected one of: {allowed})"
            ) from None
    return MappingProxyType(policies)


def is_declared(name: str, policies: Mapping[str, MergePolicy]) -> bool:
    """Output fields must be declared, except provisional ``*tmp`` lists."""
    return name in policies or is_tmp_field(name)
