"""
Option Provider

Turns directory contents into the ordered ``SelectOption`` lists the value
picker shows for each field:

- accounts, payees: sorted by name, case-insensitively
- categories: "Uncategorized" and "Transfers" first, then top-level
  categories by name, each followed by its children labelled
  "Parent: Child"
- text: no options

Nothing is cached. Callers recompute whenever the directories change.
"""

from collections import defaultdict
from typing import Iterable, Optional, Union

from report_filters.config import FilterSettings, get_settings
from report_filters.log import get_logger
from report_filters.models.expression import (
    TRANSFER,
    UNCATEGORIZED,
    FilterField,
)
from report_filters.models.options import (
    AccountEntry,
    CategoryEntry,
    PayeeEntry,
    SelectOption,
)
from report_filters.services.directory import DirectoryInterface


logger = get_logger(__name__)


def _by_name(entry: Union[AccountEntry, CategoryEntry, PayeeEntry]) -> tuple[str, str]:
    return (entry.name.casefold(), entry.name)


def account_options(accounts: Iterable[AccountEntry]) -> list[SelectOption]:
    return [SelectOption(value=a.id, label=a.name) for a in sorted(accounts, key=_by_name)]


def payee_options(payees: Iterable[PayeeEntry]) -> list[SelectOption]:
    return [SelectOption(value=p.id, label=p.name) for p in sorted(payees, key=_by_name)]


def category_options(
    categories: Iterable[CategoryEntry],
    uncategorized_label: str = "Uncategorized",
    transfer_label: str = "Transfers",
) -> list[SelectOption]:
    """
    Flatten the category hierarchy into picker options.

    A category whose parent is not in the list is shown at the top level.
    """
    categories = list(categories)
    known_ids = {c.id for c in categories}

    children: dict[Optional[str], list[CategoryEntry]] = defaultdict(list)
    for category in categories:
        parent_id = category.parent_id if category.parent_id in known_ids else None
        children[parent_id].append(category)

    options = [
        SelectOption(value=UNCATEGORIZED, label=uncategorized_label),
        SelectOption(value=TRANSFER, label=transfer_label),
    ]

    def add_level(parent_id: Optional[str], prefix: Optional[str]) -> None:
        for category in sorted(children.get(parent_id, []), key=_by_name):
            label = f"{prefix}: {category.name}" if prefix else category.name
            options.append(SelectOption(value=category.id, label=label))
            add_level(category.id, label)

    add_level(None, None)

    listed = len(options) - 2
    if listed != len(categories):
        logger.warning(
            "categories_unreachable",
            listed=listed,
            total=len(categories),
        )
    return options


class OptionProvider:
    """
    Selectable values per filter field, read from a directory.

    Every call reads the directory again. DirectoryError from the backend
    propagates to the caller.
    """

    def __init__(
        self,
        directory: DirectoryInterface,
        settings: Optional[FilterSettings] = None,
    ):
        self._directory = directory
        self._settings = settings or get_settings()

    def options_for(self, field: Union[FilterField, str]) -> list[SelectOption]:
        """Ordered options for one field; the text field has none."""
        field = FilterField(field)
        if field == FilterField.ACCOUNT:
            return account_options(self._directory.list_accounts())
        if field == FilterField.PAYEE:
            return payee_options(self._directory.list_payees())
        if field == FilterField.CATEGORY:
            return category_options(
                self._directory.list_categories(),
                uncategorized_label=self._settings.uncategorized_label,
                transfer_label=self._settings.transfer_label,
            )
        return []

    def all_options(self) -> dict[str, list[SelectOption]]:
        """Options for every field, keyed by field name."""
        return {field.value: self.options_for(field) for field in FilterField}

    def label_map(self) -> dict[str, dict[str, str]]:
        """Identifier to label lookup per field."""
        return {
            field: {option.value: option.label for option in options}
            for field, options in self.all_options().items()
        }

    def label_for(self, field: Union[FilterField, str], value: str) -> str:
        """Display label for one identifier; unknown identifiers show as-is."""
        for option in self.options_for(field):
            if option.value == value:
                return option.label
        return value
