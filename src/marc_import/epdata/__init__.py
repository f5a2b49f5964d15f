from .record import EPData, MergePolicy, PersonEntry, TMP_SUFFIX, is_tmp_field
from .fields import is_declared, load_field_policies

__all__ = [
    "EPData",
    "MergePolicy",
    "PersonEntry",
    "TMP_SUFFIX",
    "is_declared",
    "is_tmp_field",
    "load_field_policies",
]
