"""
In-Memory Directory

Backs the editor's demo mode and the tests. Can also be loaded from a JSON
document shaped like the app's API responses:

    {"accounts": [{"id": ..., "name": ...}],
     "categories": [{"id": ..., "name": ..., "parentId": ...}],
     "payees": [{"id": ..., "name": ...}]}
"""

import json
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from report_filters.log import get_logger
from report_filters.models.options import AccountEntry, CategoryEntry, PayeeEntry
from report_filters.services.directory.interface import (
    DirectoryInterface,
    DirectoryUnavailableError,
)


logger = get_logger(__name__)


class InMemoryDirectory(DirectoryInterface):
    """Directory backed by plain lists."""

    def __init__(
        self,
        accounts: Optional[Iterable[AccountEntry]] = None,
        categories: Optional[Iterable[CategoryEntry]] = None,
        payees: Optional[Iterable[PayeeEntry]] = None,
    ):
        self._accounts = list(accounts or [])
        self._categories = list(categories or [])
        self._payees = list(payees or [])

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InMemoryDirectory":
        """
        Build a directory from decoded JSON.

        Raises:
            DirectoryUnavailableError: If the document has the wrong shape
        """
        try:
            return cls(
                accounts=[AccountEntry.model_validate(a) for a in data.get("accounts", [])],
                categories=[CategoryEntry.model_validate(c) for c in data.get("categories", [])],
                payees=[PayeeEntry.model_validate(p) for p in data.get("payees", [])],
            )
        except (AttributeError, ValidationError) as e:
            raise DirectoryUnavailableError(f"Invalid directory document: {e}") from e

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "InMemoryDirectory":
        """
        Load a directory from a JSON file.

        Raises:
            DirectoryUnavailableError: If the file is missing or malformed
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise DirectoryUnavailableError(f"Could not read directory file {path}: {e}") from e

        directory = cls.from_dict(data)
        logger.info(
            "directory_loaded",
            path=str(path),
            accounts=len(directory._accounts),
            categories=len(directory._categories),
            payees=len(directory._payees),
        )
        return directory

    def list_accounts(self) -> list[AccountEntry]:
        return list(self._accounts)

    def list_categories(self) -> list[CategoryEntry]:
        return list(self._categories)

    def list_payees(self) -> list[PayeeEntry]:
        return list(self._payees)
