"""
Shared fixtures for the filter tests.

Expressions are written in their wire shape and validated into models, so
tests read like the JSON a saved report would contain.
"""

import pytest

from report_filters.config import FilterSettings
from report_filters.models import (
    AccountEntry,
    CategoryEntry,
    FilterExpression,
    PayeeEntry,
    TransactionRecord,
)
from report_filters.services import InMemoryDirectory


def make_expr(data) -> FilterExpression:
    """Build an expression from its wire shape."""
    return FilterExpression.model_validate(data)


def make_record(**kwargs) -> TransactionRecord:
    """Build a transaction record with only the attributes a test cares about."""
    return TransactionRecord(**kwargs)


@pytest.fixture
def settings() -> FilterSettings:
    return FilterSettings(
        uncategorized_label="Uncategorized",
        transfer_label="Transfers",
    )


@pytest.fixture
def directory() -> InMemoryDirectory:
    return InMemoryDirectory(
        accounts=[
            AccountEntry(id="acc-2", name="savings"),
            AccountEntry(id="acc-1", name="Chequing"),
            AccountEntry(id="acc-3", name="Visa"),
        ],
        categories=[
            CategoryEntry(id="cat-rest", name="Restaurants", parent_id="cat-food"),
            CategoryEntry(id="cat-sal", name="Salary"),
            CategoryEntry(id="cat-food", name="Food"),
            CategoryEntry(id="cat-rent", name="Rent", parent_id="cat-home"),
            CategoryEntry(id="cat-groc", name="Groceries", parent_id="cat-food"),
            CategoryEntry(id="cat-home", name="Housing"),
        ],
        payees=[
            PayeeEntry(id="pay-2", name="Landlord"),
            PayeeEntry(id="pay-1", name="corner market"),
        ],
    )


@pytest.fixture
def two_group_expr() -> FilterExpression:
    """(category in {c1} or payee in {p1}) and (account in {a1})"""
    return make_expr([
        {"conditions": [
            {"field": "category", "value": ["c1"]},
            {"field": "payee", "value": ["p1"]},
        ]},
        {"conditions": [
            {"field": "account", "value": ["a1"]},
        ]},
    ])
