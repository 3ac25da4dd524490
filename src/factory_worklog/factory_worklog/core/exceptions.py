from __future__ import annotations

from typing import Mapping, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    `errors` maps a stable field key (e.g. ``timeRange`` or
    ``log_range_<id>``) to a user-facing message.
    """

    def __init__(self, message: str, errors: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.errors = dict(errors or {})


class StorageError(DomainError):
    """Raised when the record store cannot be read or written."""


class OperationInProgressError(DomainError):
    """Raised when save/delete/navigate is requested while another one is running."""


class ConfigurationError(DomainError):
    """Raised when injected data files (operators, products) cannot be loaded."""
