"""Expression review package."""

from report_filters.validation.validator import (
    ExpressionValidator,
    describe_condition,
    describe_expression,
)

__all__ = [
    "ExpressionValidator",
    "describe_condition",
    "describe_expression",
]
