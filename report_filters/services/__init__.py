"""Services package."""

from report_filters.services.directory import (
    DirectoryError,
    DirectoryInterface,
    DirectoryUnavailableError,
    InMemoryDirectory,
)
from report_filters.services.options import (
    OptionProvider,
    account_options,
    category_options,
    payee_options,
)

__all__ = [
    # Directory services
    "DirectoryError",
    "DirectoryInterface",
    "DirectoryUnavailableError",
    "InMemoryDirectory",
    # Option provider
    "OptionProvider",
    "account_options",
    "category_options",
    "payee_options",
]
