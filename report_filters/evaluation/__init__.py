"""Filter evaluation package."""

from report_filters.evaluation.evaluator import (
    condition_matches,
    filter_transactions,
    group_matches,
    matches,
    searchable_text,
)

__all__ = [
    "condition_matches",
    "filter_transactions",
    "group_matches",
    "matches",
    "searchable_text",
]
