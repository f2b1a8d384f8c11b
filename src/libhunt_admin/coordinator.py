"""Remote mutations reconciled into the catalog store."""

from __future__ import annotations
import logging
from typing import Any
from .client import LibraryClient
from .credentials import CredentialProvider
from .errors import ApiRequestError, MutationError
from .models import CatalogEntry
from .store import CatalogStore


logger = logging.getLogger(__name__)


class MutationCoordinator:
    """Run create, update and delete calls and apply their results.

    The store is only touched after the service acknowledges a call, using
    the object the service returned. A failed call raises
    :class:`MutationError` and leaves the store as it was.
    """

    def __init__(
        self,
        client: LibraryClient,
        store: CatalogStore,
        credentials: CredentialProvider,
    ) -> None:
        """Bind the coordinator to its client, store and credential source."""
        self._client = client
        self._store = store
        self._credentials = credentials

    def create(self, draft: dict[str, Any]) -> CatalogEntry:
        """Create ``draft`` remotely and append the created entry."""
        payload = dict(draft)
        payload.pop("_id", None)
        try:
            created = self._client.create_library(payload, token=self._credentials())
        except ApiRequestError as exc:
            raise self._failure("create", exc) from exc
        self._store.apply_created(created)
        logger.info("Created library %s (%s)", created.id, created.name)
        return created

    def update(self, entry_id: str, draft: dict[str, Any]) -> CatalogEntry:
        """Update ``entry_id`` remotely and replace it with the returned entry."""
        try:
            updated = self._client.update_library(
                entry_id, draft, token=self._credentials()
            )
        except ApiRequestError as exc:
            raise self._failure("update", exc) from exc
        self._store.apply_updated(updated)
        logger.info("Updated library %s", updated.id)
        return updated

    def delete(self, entry_id: str) -> None:
        """Delete ``entry_id`` remotely and drop it from the store."""
        try:
            self._client.delete_library(entry_id, token=self._credentials())
        except ApiRequestError as exc:
            raise self._failure("delete", exc) from exc
        self._store.apply_deleted(entry_id)
        logger.info("Deleted library %s", entry_id)

    @staticmethod
    def _failure(action: str, exc: ApiRequestError) -> MutationError:
        logger.warning("Library %s failed: %s", action, exc)
        message = exc.server_message or str(exc)
        return MutationError(action, message, server_message=exc.server_message)


__all__ = ["MutationCoordinator"]
