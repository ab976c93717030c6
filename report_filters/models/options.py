"""
Directory Entries and Selectable Options

Accounts, categories and payees come from the app's directories. The filter
editor only needs their identifiers and names, turned into ordered
``SelectOption`` lists by ``report_filters.services.options``.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _DirectoryEntry(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
        frozen=True,
    )

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)


class AccountEntry(_DirectoryEntry):
    """An account the user can filter on."""


class PayeeEntry(_DirectoryEntry):
    """A payee the user can filter on."""


class CategoryEntry(_DirectoryEntry):
    """A category; top-level categories have no parent."""

    parent_id: Optional[str] = None


class SelectOption(BaseModel):
    """One selectable identifier with its display label."""
    model_config = ConfigDict(frozen=True)

    value: str
    label: str
