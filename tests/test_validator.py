"""
Tests for expression review and descriptions
"""

import pytest

from report_filters.models import FilterExpression, IssueSeverity, IssueType
from report_filters.services import OptionProvider
from report_filters.validation import (
    ExpressionValidator,
    describe_condition,
    describe_expression,
)

from tests.conftest import make_expr


class TestExpressionValidator:
    """Tests for ExpressionValidator."""

    def test_empty_expression_is_complete(self):
        """Test that no filters need no attention."""
        result = ExpressionValidator().validate(FilterExpression())
        assert result.is_complete
        assert result.issues == []

    def test_filled_expression_is_complete(self, two_group_expr):
        """Test an expression with every condition filled in."""
        assert ExpressionValidator().validate(two_group_expr).is_complete

    def test_empty_selection_is_flagged(self):
        """Test an entity condition with nothing selected."""
        expr = make_expr([{"conditions": [{"field": "payee", "value": []}]}])
        result = ExpressionValidator().validate(expr)
        assert not result.is_complete
        assert result.issues[0].issue_type == IssueType.EMPTY_VALUE
        assert result.issues[0].group_index == 0
        assert result.issues[0].condition_index == 0
        assert "Payee" in result.issues[0].message

    def test_blank_text_is_flagged(self):
        """Test a text condition with only whitespace."""
        expr = make_expr([{"conditions": [
            {"field": "account", "value": ["a1"]},
            {"field": "text", "value": "  "},
        ]}])
        result = ExpressionValidator().validate(expr)
        assert [i.issue_type for i in result.issues] == [IssueType.BLANK_TEXT]
        assert result.issues_for(0, 1) == result.issues
        assert result.issues_for(0, 0) == []

    def test_unknown_identifiers_are_flagged(self, directory, settings):
        """Test identifiers missing from the directories."""
        options = OptionProvider(directory, settings).all_options()
        expr = make_expr([
            {"conditions": [{"field": "account", "value": ["acc-1", "acc-closed"]}]},
            {"conditions": [{"field": "category", "value": ["uncategorized", "transfer", "cat-food"]}]},
        ])
        result = ExpressionValidator(options).validate(expr)
        assert [(i.issue_type, i.group_index) for i in result.issues] == [
            (IssueType.UNKNOWN_VALUE, 0),
        ]
        assert "acc-closed" in result.issues[0].message

    def test_unknown_identifiers_skipped_without_options(self):
        """Test that no options means no directory check."""
        expr = make_expr([{"conditions": [{"field": "account", "value": ["anything"]}]}])
        assert ExpressionValidator().validate(expr).is_complete

    def test_duplicate_condition_is_informational(self):
        """Test a condition repeated within a group."""
        expr = make_expr([{"conditions": [
            {"field": "payee", "value": ["p1"]},
            {"field": "payee", "value": ["p1"]},
        ]}])
        result = ExpressionValidator().validate(expr)
        assert result.issues[0].issue_type == IssueType.DUPLICATE_CONDITION
        assert result.issues[0].severity == IssueSeverity.INFO
        assert result.is_complete

    def test_summary(self):
        """Test the user-facing summary."""
        validator = ExpressionValidator()
        expr = make_expr([
            {"conditions": [{"field": "account", "value": ["a1"]}]},
            {"conditions": [{"field": "category", "value": []}]},
        ])
        summary = validator.get_user_friendly_summary(validator.validate(expr))
        assert "Group 2, condition 1" in summary

    def test_summary_when_complete(self, two_group_expr):
        """Test the summary without issues."""
        validator = ExpressionValidator()
        summary = validator.get_user_friendly_summary(validator.validate(two_group_expr))
        assert "complete" in summary


class TestDescribeExpression:
    """Tests for human-readable descriptions."""

    def test_empty_expression(self):
        """Test the no-filter description."""
        assert describe_expression(FilterExpression()) == "All transactions"

    def test_groups_and_conditions(self, two_group_expr):
        """Test AND across groups and OR within."""
        assert describe_expression(two_group_expr) == (
            "(Category is c1 or Payee is p1) and (Account is a1)"
        )

    def test_uses_labels(self, directory, settings):
        """Test descriptions with directory labels."""
        provider = OptionProvider(directory, settings)
        expr = make_expr([{"conditions": [
            {"field": "category", "value": ["cat-groc", "transfer"]},
            {"field": "text", "value": "rent"},
        ]}])
        assert describe_expression(expr, provider.label_for) == (
            '(Category is Food: Groceries or Transfers or Text contains "rent")'
        )

    @pytest.mark.parametrize("condition,expected", [
        ({"field": "account", "value": []}, "Account is (nothing selected)"),
        ({"field": "text", "value": ""}, 'Text contains ""'),
    ])
    def test_unfilled_conditions(self, condition, expected):
        """Test conditions still being edited."""
        expr = make_expr([{"conditions": [condition]}])
        assert describe_condition(expr[0].conditions[0]) == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
