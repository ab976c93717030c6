"""
Expression Review Models

Results of reviewing an expression before it is saved. Issues are
informational: they never block saving and the builder never produces an
invalid expression, but a half-filled condition excludes every transaction
and the user should hear about it.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class IssueSeverity(str, Enum):
    """How loudly the editor should show an issue."""
    WARNING = "warning"
    INFO = "info"


class IssueType(str, Enum):
    EMPTY_VALUE = "empty_value"
    BLANK_TEXT = "blank_text"
    UNKNOWN_VALUE = "unknown_value"
    DUPLICATE_CONDITION = "duplicate_condition"


class ValidationIssue(BaseModel):
    """A single issue found in an expression."""

    group_index: int = Field(
        ...,
        ge=0,
        description="Index of the group containing the issue"
    )
    condition_index: Optional[int] = Field(
        default=None,
        ge=0,
        description="Index of the condition, if the issue is condition-level"
    )
    issue_type: IssueType
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: IssueSeverity = IssueSeverity.WARNING
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """Outcome of reviewing one expression."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.WARNING]

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def is_complete(self) -> bool:
        """True when nothing in the expression needs the user's attention."""
        return not self.warnings

    def issues_for(self, group_index: int, condition_index: Optional[int] = None) -> list[ValidationIssue]:
        """Issues attached to a group, or to one condition within it."""
        return [
            i for i in self.issues
            if i.group_index == group_index
            and (condition_index is None or i.condition_index == condition_index)
        ]
