"""Filter builder package."""

from report_filters.builder.operations import (
    PatchInput,
    add_condition,
    add_group,
    remove_condition,
    remove_group,
    update_condition,
)

__all__ = [
    "PatchInput",
    "add_condition",
    "add_group",
    "remove_condition",
    "remove_group",
    "update_condition",
]
