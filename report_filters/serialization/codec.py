"""
Expression Wire Codec

The wire shape is the model shape:

    [{"conditions": [{"field": "category", "value": ["cat-1"]}]},
     {"conditions": [{"field": "account", "value": ["acc-1"]}]}]

reads as "(category in {cat-1}) AND (account in {acc-1})".

Decoding also accepts what older saved reports contain: an entity condition
whose value is one identifier string rather than a list, and groups with no
conditions, which are skipped. Encoding always produces the current shape,
so ``deserialize(serialize(expr)) == expr``.

No versioning happens here; the document embedding the expression owns it.
"""

import json
from typing import Any, Union

from pydantic import ValidationError

from report_filters.log import get_logger
from report_filters.models.expression import FilterExpression, is_entity_field


logger = get_logger(__name__)


class ExpressionDecodeError(ValueError):
    """Stored or transmitted data is not a filter expression."""
    pass


def _upgrade_condition(condition: Any) -> Any:
    if not isinstance(condition, dict):
        return condition
    value = condition.get("value")
    if is_entity_field(condition.get("field")) and isinstance(value, str):
        return {**condition, "value": [value] if value else []}
    return condition


def normalize_wire_groups(data: Any) -> Any:
    """
    Bring stored groups up to the current shape before validation.

    Anything that is not recognizably a group list is passed through
    untouched so validation can report it.
    """
    if not isinstance(data, (list, tuple)):
        return data

    groups = []
    for index, group in enumerate(data):
        if isinstance(group, dict) and isinstance(group.get("conditions"), (list, tuple)):
            if not group["conditions"]:
                logger.debug("empty_filter_group_skipped", group_index=index)
                continue
            group = {
                **group,
                "conditions": [_upgrade_condition(c) for c in group["conditions"]],
            }
        groups.append(group)
    return groups


def to_wire(expr: FilterExpression) -> list[dict[str, Any]]:
    """Plain JSON-compatible lists and dicts."""
    return expr.model_dump(mode="json")


def from_wire(data: Any) -> FilterExpression:
    """
    Validate decoded JSON data into an expression.

    Raises:
        ExpressionDecodeError: If ``data`` does not describe an expression
    """
    if data is None:
        return FilterExpression()
    try:
        return FilterExpression.model_validate(normalize_wire_groups(data))
    except (ValidationError, RecursionError) as e:
        raise ExpressionDecodeError(f"Invalid filter expression: {e}") from e


def serialize(expr: FilterExpression) -> str:
    """Compact JSON text."""
    return json.dumps(to_wire(expr), separators=(",", ":"))


def deserialize(text: Union[str, bytes]) -> FilterExpression:
    """
    Parse JSON text produced by ``serialize`` (or stored by older reports).

    Raises:
        ExpressionDecodeError: If the text is not JSON or not an expression
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError, RecursionError) as e:
        raise ExpressionDecodeError(f"Filter expression is not valid JSON: {e}") from e
    return from_wire(data)
