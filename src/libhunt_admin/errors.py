"""Exception hierarchy for the catalog admin core."""

from __future__ import annotations
from collections.abc import Sequence
import httpx


class CatalogError(RuntimeError):
    """Base class for recoverable catalog admin failures."""


class ApiRequestError(CatalogError):
    """Raised when a request to the library service cannot be completed."""

    def __init__(
        self,
        message: str,
        *,
        server_message: str | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        """Initialise the error with optional HTTP response context."""
        super().__init__(message)
        self.server_message = server_message
        self.response = response

    @property
    def status_code(self) -> int | None:
        """Return the HTTP status code when a response was received."""
        if self.response is None:
            return None
        return self.response.status_code


class LoadError(CatalogError):
    """Raised when the catalog snapshot cannot be fetched."""


class ValidationError(CatalogError):
    """Raised when a draft is rejected before reaching the service."""


class MissingFieldsError(ValidationError):
    """Raised when required draft fields are absent or empty."""

    def __init__(self, missing: Sequence[str]) -> None:
        """Record which required fields are missing."""
        self.missing = tuple(missing)
        super().__init__(f"Missing required fields: {', '.join(self.missing)}")


class UnknownFieldError(ValidationError):
    """Raised when a draft update targets a field the entry does not have."""


class MutationError(CatalogError):
    """Raised when a create, update or delete call fails remotely."""

    def __init__(
        self, action: str, message: str, *, server_message: str | None = None
    ) -> None:
        """Store the failed action alongside the server provided message."""
        super().__init__(message)
        self.action = action
        self.server_message = server_message


class BulkImportError(CatalogError):
    """Base class for bulk import failures."""


class MalformedInputError(BulkImportError):
    """Raised when an import file cannot be decoded or parsed."""


class InvalidFormatError(BulkImportError):
    """Raised when an import file does not hold an array of records."""


class ImportRejectedError(BulkImportError):
    """Raised when the service rejects a bulk import request."""


class DialogStateError(CatalogError):
    """Raised when a session operation is invalid in the current dialog state."""


__all__ = [
    "ApiRequestError",
    "BulkImportError",
    "CatalogError",
    "DialogStateError",
    "ImportRejectedError",
    "InvalidFormatError",
    "LoadError",
    "MalformedInputError",
    "MissingFieldsError",
    "MutationError",
    "UnknownFieldError",
    "ValidationError",
]
