"""
Filter Evaluation

Tests transactions against a FilterExpression:

- no groups                -> every transaction matches
- groups                   -> all groups must match (AND)
- group                    -> any condition must match (OR)
- account / payee          -> identifier is in the selected set
- category                 -> category (own or any split's) is in the set,
                              or "uncategorized" is selected and there is no
                              category anywhere, or "transfer" is selected
                              and the transaction is a transfer
- text                     -> trimmed, lower-cased search string is a
                              substring of the searchable text

An empty selection or blank search string never matches, so a condition
the user has not filled in yet excludes everything instead of nothing.

Evaluation is stateless; the same expression can be applied to any number
of records, in any order, from any thread.
"""

from collections.abc import Iterable

from report_filters.log import get_logger
from report_filters.models.expression import (
    TRANSFER,
    UNCATEGORIZED,
    Condition,
    FilterExpression,
    FilterField,
    FilterGroup,
    TextCondition,
)
from report_filters.models.transaction import TransactionRecord


logger = get_logger(__name__)


def searchable_text(record: TransactionRecord) -> str:
    """
    Lower-cased text a ``text`` condition searches.

    Description, payee name, memo and split memos, one per line so a search
    string cannot match across two of them.
    """
    parts = [record.description, record.payee_name, record.memo]
    parts.extend(split.memo for split in record.splits)
    return "\n".join(part for part in parts if part).lower()


def _category_matches(selected: tuple[str, ...], record: TransactionRecord) -> bool:
    if any(category_id in selected for category_id in record.category_ids):
        return True
    if UNCATEGORIZED in selected and not record.has_category:
        return True
    if TRANSFER in selected and record.is_transfer:
        return True
    return False


def _text_matches(condition: TextCondition, record: TransactionRecord) -> bool:
    needle = condition.value.strip().lower()
    if not needle:
        return False
    return needle in searchable_text(record)


def condition_matches(condition: Condition, record: TransactionRecord) -> bool:
    """Evaluate one condition against one record."""
    if condition.field == FilterField.TEXT:
        return _text_matches(condition, record)

    selected = condition.value
    if not selected:
        return False

    if condition.field == FilterField.ACCOUNT:
        return record.account_id in selected
    if condition.field == FilterField.PAYEE:
        return record.payee_id in selected
    if condition.field == FilterField.CATEGORY:
        return _category_matches(selected, record)
    return False


def group_matches(group: FilterGroup, record: TransactionRecord) -> bool:
    """A group matches when any of its conditions does."""
    return any(condition_matches(condition, record) for condition in group.conditions)


def matches(expr: FilterExpression, record: TransactionRecord) -> bool:
    """A record matches when every group does; the empty expression matches all."""
    return all(group_matches(group, record) for group in expr)


def filter_transactions(
    expr: FilterExpression,
    records: Iterable[TransactionRecord],
) -> list[TransactionRecord]:
    """
    Records matching ``expr``, in input order.

    Each record is evaluated on its own, so callers with large batches may
    split ``records`` and map this over the chunks in parallel.
    """
    total = 0
    matched = []
    for record in records:
        total += 1
        if matches(expr, record):
            matched.append(record)

    logger.debug(
        "transactions_filtered",
        group_count=len(expr),
        total=total,
        matched=len(matched),
    )
    return matched
