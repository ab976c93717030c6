"""
Report Filters - Source Package

The filter-expression core of the personal finance app: the data model a
user composes in the filter builder ("match transactions where (A or B)
and (C or D)"), the pure operations that edit it, and the evaluator that
tests a transaction against it.

PRINCIPLES:
1. Expressions are immutable values - every edit returns a new one
2. UI events never raise - stale indexes are no-ops
3. Half-edited filters match nothing, never everything
4. The in-memory shape is the wire shape
"""

__version__ = "1.0.0"
__author__ = "Report Filters Maintainers"
