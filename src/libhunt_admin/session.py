"""Admin session: the dialog state machine tying the catalog components together."""

from __future__ import annotations
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal
from .buffer import EditBuffer
from .client import LibraryClient
from .coordinator import MutationCoordinator
from .credentials import CredentialProvider
from .errors import (
    DialogStateError,
    ImportRejectedError,
    InvalidFormatError,
    LoadError,
    MalformedInputError,
    MissingFieldsError,
    MutationError,
)
from .importer import BulkImporter, ImportResult
from .models import CatalogEntry
from .projection import ViewProjector
from .store import CatalogStore


logger = logging.getLogger(__name__)


class DialogState(str, Enum):
    """Which dialog, if any, is open."""

    CLOSED = "closed"
    CREATE_DRAFT = "create_draft"
    EDIT_DRAFT = "edit_draft"
    CONFIRMING_DELETE = "confirming_delete"


@dataclass(frozen=True, slots=True)
class Notification:
    """A transient message for the operator."""

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"

    @property
    def is_error(self) -> bool:
        """Return ``True`` for destructive notifications."""
        return self.variant == "destructive"


NotificationSink = Callable[[Notification], None]


@dataclass(slots=True)
class NotificationLog:
    """Default sink that keeps every notification in order."""

    items: list[Notification] = field(default_factory=list)

    def __call__(self, notification: Notification) -> None:
        """Record ``notification``."""
        self.items.append(notification)

    @property
    def last(self) -> Notification | None:
        """Return the most recent notification."""
        return self.items[-1] if self.items else None


class AdminSession:
    """Drive the catalog the way the admin panel does.

    States are ``CLOSED``, ``CREATE_DRAFT``, ``EDIT_DRAFT(id)`` and
    ``CONFIRMING_DELETE(id)``. Drafts close only when a save succeeds; the
    delete confirmation closes whether or not the delete succeeded.
    """

    def __init__(
        self,
        store: CatalogStore,
        coordinator: MutationCoordinator,
        importer: BulkImporter,
        *,
        projector: ViewProjector | None = None,
        notify: NotificationSink | None = None,
    ) -> None:
        """Assemble a session from its collaborators."""
        self.store = store
        self.projector = projector or ViewProjector(store)
        self._coordinator = coordinator
        self._importer = importer
        self._notify = notify or NotificationLog()
        self._state = DialogState.CLOSED
        self._target_id: str | None = None
        self._buffer: EditBuffer | None = None
        self._pending_delete: CatalogEntry | None = None

    @property
    def state(self) -> DialogState:
        """Return the current dialog state."""
        return self._state

    @property
    def target_id(self) -> str | None:
        """Return the entry id bound to ``EDIT_DRAFT``/``CONFIRMING_DELETE``."""
        return self._target_id

    @property
    def buffer(self) -> EditBuffer | None:
        """Return the open draft, if any."""
        return self._buffer

    @property
    def importer(self) -> BulkImporter:
        """Return the bulk importer used by :meth:`import_file`."""
        return self._importer

    @property
    def pending_delete(self) -> CatalogEntry | None:
        """Return the entry awaiting delete confirmation."""
        return self._pending_delete

    def start(self) -> bool:
        """Load the catalog, reporting a failure as a notification."""
        try:
            self.store.load()
        except LoadError:
            self._error("Error", "Failed to load libraries.")
            return False
        return True

    def open_create(self) -> EditBuffer:
        """Open the create dialog with a blank draft."""
        self._require(DialogState.CLOSED, "open the create dialog")
        self._buffer = EditBuffer.open_for_create()
        self._state = DialogState.CREATE_DRAFT
        return self._buffer

    def open_edit(self, entry: CatalogEntry) -> EditBuffer:
        """Open the edit dialog on a copy of ``entry``."""
        self._require(DialogState.CLOSED, "open the edit dialog")
        if not entry.id:
            msg = "Only persisted libraries can be edited"
            raise DialogStateError(msg)
        self._buffer = EditBuffer.open_for_edit(entry)
        self._target_id = entry.id
        self._state = DialogState.EDIT_DRAFT
        return self._buffer

    def request_delete(self, entry: CatalogEntry) -> None:
        """Ask for confirmation before deleting ``entry``."""
        self._require(DialogState.CLOSED, "request a delete")
        if not entry.id:
            msg = "Only persisted libraries can be deleted"
            raise DialogStateError(msg)
        self._pending_delete = entry
        self._target_id = entry.id
        self._state = DialogState.CONFIRMING_DELETE

    def set_field(self, key: str, value: Any) -> None:
        """Update one field of the open draft."""
        self._require_draft("edit a field").set_field(key, value)

    def save(self) -> CatalogEntry | None:
        """Commit the open draft; return the saved entry or ``None`` on failure."""
        buffer = self._require_draft("save")
        try:
            buffer.validate()
        except MissingFieldsError:
            self._error("Missing Fields", "Please fill in all required fields.")
            return None

        try:
            if self._state is DialogState.EDIT_DRAFT and self._target_id:
                saved = self._coordinator.update(self._target_id, buffer.to_payload())
                self._info("Updated", "Library updated successfully.")
            else:
                saved = self._coordinator.create(buffer.to_payload())
                self._info("Created", "Library created successfully.")
        except MutationError:
            self._error("Error", "Failed to save library.")
            return None
        self._close()
        return saved

    def confirm_delete(self) -> bool:
        """Delete the pending entry; the dialog closes either way."""
        self._require(DialogState.CONFIRMING_DELETE, "confirm a delete")
        entry_id = self._target_id
        deleted = False
        try:
            if entry_id:
                self._coordinator.delete(entry_id)
                self._info("Deleted", "Library deleted successfully.")
                deleted = True
        except MutationError:
            self._error("Error", "Failed to delete library.")
        self._close()
        return deleted

    def cancel(self) -> None:
        """Close whichever dialog is open and discard its draft."""
        self._close()

    def import_file(self, raw: bytes) -> ImportResult | None:
        """Bulk import ``raw`` and report the outcome."""
        try:
            result = self._importer.import_from(raw)
        except InvalidFormatError as exc:
            self._error("Invalid Format", str(exc))
            return None
        except (MalformedInputError, ImportRejectedError) as exc:
            self._error("Upload Failed", str(exc) or "Could not process the file.")
            return None
        self._info(
            "Upload Successful",
            f"{result.created_count} libraries added to the database.",
        )
        return result

    def _require(self, expected: DialogState, action: str) -> None:
        if self._state is not expected:
            msg = f"Cannot {action} while the session is {self._state.value}"
            raise DialogStateError(msg)

    def _require_draft(self, action: str) -> EditBuffer:
        if (
            self._state not in (DialogState.CREATE_DRAFT, DialogState.EDIT_DRAFT)
            or self._buffer is None
        ):
            msg = f"Cannot {action} while the session is {self._state.value}"
            raise DialogStateError(msg)
        return self._buffer

    def _close(self) -> None:
        self._state = DialogState.CLOSED
        self._target_id = None
        self._buffer = None
        self._pending_delete = None

    def _info(self, title: str, description: str) -> None:
        self._notify(Notification(title, description))

    def _error(self, title: str, description: str) -> None:
        logger.debug("%s: %s", title, description)
        self._notify(Notification(title, description, "destructive"))


def create_session(
    client: LibraryClient,
    credentials: CredentialProvider,
    *,
    refresh_after_import: bool = True,
    notify: NotificationSink | None = None,
) -> AdminSession:
    """Wire a store, coordinator and importer around ``client``."""
    store = CatalogStore(client)
    return AdminSession(
        store,
        MutationCoordinator(client, store, credentials),
        BulkImporter(
            client, credentials, store=store, refresh=refresh_after_import
        ),
        notify=notify,
    )


__all__ = [
    "AdminSession",
    "DialogState",
    "Notification",
    "NotificationLog",
    "NotificationSink",
    "create_session",
]
