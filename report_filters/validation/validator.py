"""
Expression Review

Structural validity is guaranteed by the models: an expression that exists
is well-formed. What the models cannot know is whether it says what the
user meant. Before a report is saved the editor reviews it for:

- entity conditions with nothing selected (they match no transaction)
- text conditions with a blank search string (same)
- identifiers that no longer exist in the directories
- the same condition repeated within one group

Review never blocks saving and never raises.
"""

from collections.abc import Callable, Mapping
from typing import Optional

from report_filters.log import get_logger
from report_filters.models.expression import (
    FIELD_LABELS,
    TRANSFER,
    UNCATEGORIZED,
    Condition,
    FilterExpression,
    FilterField,
    is_entity_field,
)
from report_filters.models.options import SelectOption
from report_filters.models.validation import (
    IssueSeverity,
    IssueType,
    ValidationIssue,
    ValidationResult,
)


logger = get_logger(__name__)

LabelLookup = Callable[[str, str], str]

_PSEUDO_CATEGORIES = (UNCATEGORIZED, TRANSFER)


class ExpressionValidator:
    """
    Reviews an expression against the currently selectable options.

    Without options, unknown-identifier checks are skipped.
    """

    def __init__(
        self,
        options: Optional[Mapping[str, list[SelectOption]]] = None,
    ):
        """
        Initialize validator.

        Args:
            options: Selectable options per field name, as returned by
                     OptionProvider.all_options().
        """
        self._known: Optional[dict[str, set[str]]] = None
        if options is not None:
            self._known = {
                field: {option.value for option in field_options}
                for field, field_options in options.items()
            }

    def _check_condition(
        self,
        condition: Condition,
        group_index: int,
        condition_index: int,
    ) -> list[ValidationIssue]:
        issues = []
        label = FIELD_LABELS[condition.field]

        if condition.field == FilterField.TEXT:
            if not condition.value.strip():
                issues.append(ValidationIssue(
                    group_index=group_index,
                    condition_index=condition_index,
                    issue_type=IssueType.BLANK_TEXT,
                    message="Text condition has no search text and matches nothing",
                    suggested_fix="Type the text to search for, or remove the condition",
                ))
            return issues

        if not condition.value:
            issues.append(ValidationIssue(
                group_index=group_index,
                condition_index=condition_index,
                issue_type=IssueType.EMPTY_VALUE,
                message=f"{label} condition has nothing selected and matches nothing",
                suggested_fix=f"Select at least one {label.lower()}, or remove the condition",
            ))
            return issues

        if self._known is not None:
            known = self._known.get(condition.field, set())
            for value in condition.value:
                if condition.field == FilterField.CATEGORY and value in _PSEUDO_CATEGORIES:
                    continue
                if value not in known:
                    issues.append(ValidationIssue(
                        group_index=group_index,
                        condition_index=condition_index,
                        issue_type=IssueType.UNKNOWN_VALUE,
                        message=f"{label} '{value}' no longer exists",
                        suggested_fix=f"Remove it from the selected {label.lower()} values",
                    ))

        return issues

    def validate(self, expr: FilterExpression) -> ValidationResult:
        """
        Review every condition of every group.

        Returns:
            ValidationResult with all issues found
        """
        issues = []

        for gi, group in enumerate(expr):
            seen = set()
            for ci, condition in enumerate(group.conditions):
                issues.extend(self._check_condition(condition, gi, ci))

                key = (condition.field, condition.value)
                if key in seen:
                    issues.append(ValidationIssue(
                        group_index=gi,
                        condition_index=ci,
                        issue_type=IssueType.DUPLICATE_CONDITION,
                        message="Same condition appears twice in this group",
                        severity=IssueSeverity.INFO,
                        suggested_fix="Remove the repeated condition",
                    ))
                seen.add(key)

        result = ValidationResult(issues=issues)
        if not result.is_complete:
            logger.info(
                "filter_expression_incomplete",
                group_count=len(expr),
                warning_count=result.warning_count,
            )
        return result

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """One line per issue, suitable for the editor."""
        if not result.issues:
            return "✅ All filters are complete."

        lines = []
        if result.warnings:
            lines.append("⚠️ Some filters need attention:")
        for issue in result.issues:
            where = f"Group {issue.group_index + 1}"
            if issue.condition_index is not None:
                where += f", condition {issue.condition_index + 1}"
            lines.append(f"   • {where}: {issue.message}")
        return "\n".join(lines)


def _plain_label(field: str, value: str) -> str:
    return value


def describe_condition(condition: Condition, label_for: Optional[LabelLookup] = None) -> str:
    """E.g. ``Category is Food or Transfers`` or ``Text contains "rent"``."""
    label_for = label_for or _plain_label
    name = FIELD_LABELS[condition.field]

    if not is_entity_field(condition.field):
        return f'{name} contains "{condition.value}"'
    if not condition.value:
        return f"{name} is (nothing selected)"
    values = " or ".join(label_for(condition.field, v) for v in condition.value)
    return f"{name} is {values}"


def describe_expression(expr: FilterExpression, label_for: Optional[LabelLookup] = None) -> str:
    """
    Human-readable summary of an expression.

    Args:
        expr: The expression to describe
        label_for: Maps (field, identifier) to a display label;
                   defaults to showing identifiers as-is.
    """
    if expr.is_empty:
        return "All transactions"

    groups = []
    for group in expr:
        parts = [describe_condition(c, label_for) for c in group.conditions]
        groups.append("(" + " or ".join(parts) + ")")
    return " and ".join(groups)
