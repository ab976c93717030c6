"""
Filter Builder Operations

Pure edits on a FilterExpression, one per editor action:

    "Add filter group" / "Add AND group"  -> add_group
    "Remove group"                        -> remove_group
    "Add OR condition"                    -> add_condition
    "Remove condition"                    -> remove_condition
    field select / value picker / text    -> update_condition

The input expression is never changed; a new expression is returned.
Indexes come straight from UI events and may be stale by the time they
arrive (two quick clicks, a re-render in between). An out-of-range index
is a no-op that returns the input object itself. No operation raises.
"""

from collections.abc import Mapping
from typing import Any, Union

from pydantic import ValidationError

from report_filters.log import get_logger
from report_filters.models.expression import (
    Condition,
    ConditionPatch,
    FilterExpression,
    FilterGroup,
    condition_for,
    default_condition,
)


logger = get_logger(__name__)

PatchInput = Union[ConditionPatch, Mapping[str, Any]]


def _in_range(index: int, size: int) -> bool:
    return 0 <= index < size


def _with_group(
    expr: FilterExpression,
    group_index: int,
    group: FilterGroup,
) -> FilterExpression:
    groups = list(expr.groups)
    groups[group_index] = group
    return FilterExpression(tuple(groups))


def add_group(expr: FilterExpression) -> FilterExpression:
    """Append a group holding one default condition."""
    result = FilterExpression(
        expr.groups + (FilterGroup(conditions=(default_condition(),)),)
    )
    logger.debug("filter_group_added", group_count=len(result))
    return result


def remove_group(expr: FilterExpression, group_index: int) -> FilterExpression:
    """Delete the group at ``group_index``."""
    if not _in_range(group_index, len(expr)):
        logger.debug(
            "stale_index_ignored",
            operation="remove_group",
            group_index=group_index,
            group_count=len(expr),
        )
        return expr

    result = FilterExpression(expr.groups[:group_index] + expr.groups[group_index + 1:])
    logger.debug("filter_group_removed", group_index=group_index, group_count=len(result))
    return result


def add_condition(expr: FilterExpression, group_index: int) -> FilterExpression:
    """Append a default condition to one group; other groups are untouched."""
    if not _in_range(group_index, len(expr)):
        logger.debug(
            "stale_index_ignored",
            operation="add_condition",
            group_index=group_index,
            group_count=len(expr),
        )
        return expr

    group = expr[group_index]
    updated = FilterGroup(conditions=group.conditions + (default_condition(),))
    logger.debug(
        "filter_condition_added",
        group_index=group_index,
        condition_count=len(updated.conditions),
    )
    return _with_group(expr, group_index, updated)


def remove_condition(
    expr: FilterExpression,
    group_index: int,
    condition_index: int,
) -> FilterExpression:
    """
    Delete one condition.

    Removing a group's last condition removes the group as well, so later
    groups shift down by one.
    """
    if not _in_range(group_index, len(expr)) or not _in_range(
        condition_index, len(expr[group_index].conditions)
    ):
        logger.debug(
            "stale_index_ignored",
            operation="remove_condition",
            group_index=group_index,
            condition_index=condition_index,
        )
        return expr

    conditions = expr[group_index].conditions
    remaining = conditions[:condition_index] + conditions[condition_index + 1:]
    if not remaining:
        logger.debug("filter_group_emptied", group_index=group_index)
        return FilterExpression(expr.groups[:group_index] + expr.groups[group_index + 1:])

    logger.debug(
        "filter_condition_removed",
        group_index=group_index,
        condition_index=condition_index,
    )
    return _with_group(expr, group_index, FilterGroup(conditions=remaining))


def _rejected(reason: str, **context: Any) -> None:
    logger.warning("condition_patch_rejected", reason=reason, **context)


def _supplied_keys(patch: PatchInput) -> dict[str, Any]:
    if isinstance(patch, ConditionPatch):
        return {key: getattr(patch, key) for key in patch.model_fields_set}
    return dict(patch)


def update_condition(
    expr: FilterExpression,
    group_index: int,
    condition_index: int,
    patch: PatchInput,
) -> FilterExpression:
    """
    Merge ``patch`` into one condition.

    Changing the field resets the value to the new field's empty default
    (empty set for entity fields, "" for text), and any value in the same
    patch is dropped without being looked at. With the field unchanged the
    patch value replaces the current one as given.

    A patch the condition cannot hold (unknown field, a string for an entity
    field, a list for text) leaves the expression unchanged and logs a
    warning.
    """
    if not _in_range(group_index, len(expr)) or not _in_range(
        condition_index, len(expr[group_index].conditions)
    ):
        logger.debug(
            "stale_index_ignored",
            operation="update_condition",
            group_index=group_index,
            condition_index=condition_index,
        )
        return expr

    try:
        supplied = _supplied_keys(patch)
        field_patch = ConditionPatch.model_validate(
            {"field": supplied["field"]} if "field" in supplied else {}
        )
    except (TypeError, ValueError) as e:
        _rejected(
            "invalid_patch",
            group_index=group_index,
            condition_index=condition_index,
            error=str(e),
        )
        return expr

    current: Condition = expr[group_index].conditions[condition_index]

    if field_patch.has_field and field_patch.field != current.field:
        updated = condition_for(field_patch.field)
    elif supplied.get("value") is not None:
        try:
            updated = condition_for(current.field, supplied["value"])
        except ValidationError as e:
            _rejected(
                "value_shape_mismatch",
                group_index=group_index,
                condition_index=condition_index,
                field=current.field,
                error=str(e),
            )
            return expr
    else:
        # Same field, no value: nothing to merge.
        return expr

    conditions = list(expr[group_index].conditions)
    conditions[condition_index] = updated
    logger.debug(
        "filter_condition_updated",
        group_index=group_index,
        condition_index=condition_index,
        field=updated.field,
    )
    return _with_group(expr, group_index, FilterGroup(conditions=tuple(conditions)))
