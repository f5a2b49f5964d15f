from .filters import FilterRuleSet, build_filter_set
from .table import MappingRule, MappingTable, build_mapping_table, load_mapping_table

__all__ = [
    "FilterRuleSet",
    "MappingRule",
    "MappingTable",
    "build_filter_set",
    "build_mapping_table",
    "load_mapping_table",
]
