"""Expression serialization package."""

from report_filters.serialization.codec import (
    ExpressionDecodeError,
    deserialize,
    from_wire,
    normalize_wire_groups,
    serialize,
    to_wire,
)

__all__ = [
    "ExpressionDecodeError",
    "deserialize",
    "from_wire",
    "normalize_wire_groups",
    "serialize",
    "to_wire",
]
