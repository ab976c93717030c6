"""
Data Models Package

This package contains all Pydantic models used by the filter builder.
Everything that crosses a module boundary conforms to these schemas.
"""

from report_filters.models.expression import (
    ENTITY_FIELDS,
    FIELD_LABELS,
    TRANSFER,
    UNCATEGORIZED,
    CategorySpecialValue,
    Condition,
    ConditionPatch,
    EntityCondition,
    FilterExpression,
    FilterField,
    FilterGroup,
    TextCondition,
    condition_for,
    default_condition,
    empty_value_for,
    is_entity_field,
)
from report_filters.models.options import (
    AccountEntry,
    CategoryEntry,
    PayeeEntry,
    SelectOption,
)
from report_filters.models.transaction import (
    TransactionRecord,
    TransactionSplit,
)
from report_filters.models.report import ReportFilters
from report_filters.models.validation import (
    IssueSeverity,
    IssueType,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Expression models
    "ENTITY_FIELDS",
    "FIELD_LABELS",
    "TRANSFER",
    "UNCATEGORIZED",
    "CategorySpecialValue",
    "Condition",
    "ConditionPatch",
    "EntityCondition",
    "FilterExpression",
    "FilterField",
    "FilterGroup",
    "TextCondition",
    "condition_for",
    "default_condition",
    "empty_value_for",
    "is_entity_field",
    # Directory models
    "AccountEntry",
    "CategoryEntry",
    "PayeeEntry",
    "SelectOption",
    # Transactions
    "TransactionRecord",
    "TransactionSplit",
    # Saved reports
    "ReportFilters",
    # Review models
    "IssueSeverity",
    "IssueType",
    "ValidationIssue",
    "ValidationResult",
]
