from .reconciliation import (
    apply_fixed_defaults,
    apply_type_defaults,
    finalize,
    merge_provisional_lists,
    reclassify_edited_work,
)

__all__ = [
    "apply_fixed_defaults",
    "apply_type_defaults",
    "finalize",
    "merge_provisional_lists",
    "reclassify_edited_work",
]
