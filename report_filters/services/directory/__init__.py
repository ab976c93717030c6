"""
Directory Services Package

Abstract access to the account, category and payee directories plus an
in-memory implementation.
"""

from report_filters.services.directory.interface import (
    DirectoryError,
    DirectoryInterface,
    DirectoryUnavailableError,
)
from report_filters.services.directory.memory import InMemoryDirectory

__all__ = [
    # Interfaces
    "DirectoryInterface",
    # Exceptions
    "DirectoryError",
    "DirectoryUnavailableError",
    # In-memory implementation
    "InMemoryDirectory",
]
