"""Bulk import of catalog entries from a JSON document."""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from typing import Any
from .client import LibraryClient
from .credentials import CredentialProvider
from .errors import (
    ApiRequestError,
    ImportRejectedError,
    InvalidFormatError,
    LoadError,
    MalformedInputError,
)
from .store import CatalogStore


logger = logging.getLogger(__name__)

INVALID_FORMAT_MESSAGE = "JSON must be an array of library objects."
UNKNOWN_ERROR_MESSAGE = "Unknown error"


@dataclass(frozen=True, slots=True)
class ImportResult:
    """Outcome of a successful bulk import."""

    created_count: int
    refreshed: bool = False


def parse_import(raw: bytes) -> list[Any]:
    """Decode and parse an import document, requiring a JSON array.

    Raises:
        MalformedInputError: the bytes are not UTF-8 JSON.
        InvalidFormatError: the document is valid JSON but not an array.
    """
    try:
        text = raw.decode("utf-8-sig")
        parsed = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedInputError(f"Could not parse the file: {exc}") from exc
    if not isinstance(parsed, list):
        raise InvalidFormatError(INVALID_FORMAT_MESSAGE)
    return parsed


def _created_count(body: Any, submitted: int) -> int:
    if isinstance(body, list):
        return len(body)
    if isinstance(body, dict):
        count = body.get("count")
        if isinstance(count, int) and not isinstance(count, bool):
            return count
    return submitted


class BulkImporter:
    """Submit a batch of records to the service in a single request.

    No schema is enforced beyond "is an array"; the service validates the
    records. When a store is attached and ``refresh`` is enabled, the store
    is reloaded after a successful import so the new entries show up.
    """

    def __init__(
        self,
        client: LibraryClient,
        credentials: CredentialProvider,
        *,
        store: CatalogStore | None = None,
        refresh: bool = True,
    ) -> None:
        """Configure the importer's client, credentials and refresh policy."""
        self._client = client
        self._credentials = credentials
        self._store = store
        self.refresh = refresh

    def import_from(self, raw: bytes) -> ImportResult:
        """Parse ``raw`` and submit its records.

        Raises:
            MalformedInputError: ``raw`` is not parseable JSON.
            InvalidFormatError: the JSON value is not an array.
            ImportRejectedError: the service refused or could not be reached.
        """
        records = parse_import(raw)
        try:
            body = self._client.bulk_create(records, token=self._credentials())
        except ApiRequestError as exc:
            logger.warning("Bulk import of %d records failed: %s", len(records), exc)
            if exc.response is not None:
                message = exc.server_message or UNKNOWN_ERROR_MESSAGE
            else:
                message = str(exc)
            raise ImportRejectedError(message) from exc

        count = _created_count(body, len(records))
        logger.info("Bulk import created %d libraries", count)
        return ImportResult(created_count=count, refreshed=self._reload())

    def _reload(self) -> bool:
        if self._store is None or not self.refresh:
            return False
        try:
            self._store.load()
        except LoadError:
            logger.warning("Catalog left stale after import; reload failed")
            return False
        return True


__all__ = [
    "INVALID_FORMAT_MESSAGE",
    "BulkImporter",
    "ImportResult",
    "parse_import",
]
