"""
Saved Report Filters

The ``filters`` block of a saved custom report. Older reports carry flat
lists (``accountIds``, ``categoryIds``, ``payeeIds``, ``searchText``);
newer ones carry ``filterGroups``. When filter groups are present the flat
lists are ignored.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from report_filters.models.expression import (
    EntityCondition,
    FilterExpression,
    FilterField,
    FilterGroup,
    TextCondition,
)
from report_filters.models.transaction import TransactionRecord


class ReportFilters(BaseModel):
    """Selection criterion of a custom report."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Flat filters, kept for reports saved before filter groups existed
    account_ids: list[str] = Field(default_factory=list)
    category_ids: list[str] = Field(default_factory=list)
    payee_ids: list[str] = Field(default_factory=list)
    search_text: Optional[str] = None

    filter_groups: Optional[FilterExpression] = Field(
        default=None,
        description="Filter groups; take precedence over the flat filters"
    )

    @field_validator('filter_groups', mode='before')
    @classmethod
    def upgrade_filter_groups(cls, v: Any) -> Any:
        """Accept stored groups in any shape the wire decoder accepts."""
        if v is None or isinstance(v, FilterExpression):
            return v
        from report_filters.serialization.codec import normalize_wire_groups
        return normalize_wire_groups(v)

    @property
    def uses_filter_groups(self) -> bool:
        return self.filter_groups is not None and not self.filter_groups.is_empty

    def to_expression(self) -> FilterExpression:
        """
        The effective expression for this report.

        Flat filters translate to one single-condition group each, AND-ed
        together, which is how they were always applied.
        """
        if self.uses_filter_groups:
            return self.filter_groups

        groups = []
        legacy_lists = (
            (FilterField.ACCOUNT, self.account_ids),
            (FilterField.CATEGORY, self.category_ids),
            (FilterField.PAYEE, self.payee_ids),
        )
        for field, ids in legacy_lists:
            if ids:
                groups.append(FilterGroup(conditions=(
                    EntityCondition(field=field.value, value=tuple(ids)),
                )))

        if self.search_text and self.search_text.strip():
            groups.append(FilterGroup(conditions=(
                TextCondition(value=self.search_text.strip()),
            )))

        return FilterExpression(tuple(groups))

    def matches(self, record: TransactionRecord) -> bool:
        """Evaluate the effective expression against one transaction."""
        from report_filters.evaluation import matches
        return matches(self.to_expression(), record)
