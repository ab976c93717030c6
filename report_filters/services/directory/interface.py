"""
Abstract Directory Interface

The filter editor picks identifiers from three directories owned by the
rest of the app: accounts, categories and payees. This interface is the
only thing the option provider knows about them, so the backend can be the
remote API, a JSON file or an in-memory fixture.

Implementations are read-only from this package's point of view.
"""

from abc import ABC, abstractmethod

from report_filters.models.options import AccountEntry, CategoryEntry, PayeeEntry


class DirectoryInterface(ABC):
    """
    Read access to the account, category and payee directories.

    Implementations return entries in any order; sorting is the option
    provider's job.
    """

    @abstractmethod
    def list_accounts(self) -> list[AccountEntry]:
        """
        List all accounts.

        Raises:
            DirectoryError: If the directory cannot be read
        """
        pass

    @abstractmethod
    def list_categories(self) -> list[CategoryEntry]:
        """
        List all categories, parents and children alike.

        Raises:
            DirectoryError: If the directory cannot be read
        """
        pass

    @abstractmethod
    def list_payees(self) -> list[PayeeEntry]:
        """
        List all payees.

        Raises:
            DirectoryError: If the directory cannot be read
        """
        pass


class DirectoryError(Exception):
    """Base exception for directory access."""
    pass


class DirectoryUnavailableError(DirectoryError):
    """Could not reach or read the directory backend."""
    pass
