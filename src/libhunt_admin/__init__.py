"""Client-side collection management for the library catalog admin console.

The package keeps an in-memory projection of the remote catalog
(:class:`CatalogStore`), derives filtered pages from it
(:class:`ViewProjector`), edits drafts (:class:`EditBuffer`) and pushes
changes back through :class:`MutationCoordinator` and :class:`BulkImporter`.
:class:`AdminSession` ties these together behind the dialog state machine.
"""

from libhunt_admin.buffer import EditBuffer, from_comma_list, to_comma_list
from libhunt_admin.client import LibraryClient
from libhunt_admin.coordinator import MutationCoordinator
from libhunt_admin.credentials import TokenFileProvider, static_token
from libhunt_admin.errors import (
    ApiRequestError,
    BulkImportError,
    CatalogError,
    DialogStateError,
    ImportRejectedError,
    InvalidFormatError,
    LoadError,
    MalformedInputError,
    MissingFieldsError,
    MutationError,
)
from libhunt_admin.importer import BulkImporter, ImportResult
from libhunt_admin.models import CatalogEntry, Popularity
from libhunt_admin.projection import Projection, ViewProjector, project
from libhunt_admin.session import (
    AdminSession,
    DialogState,
    Notification,
    NotificationLog,
    create_session,
)
from libhunt_admin.store import CatalogStats, CatalogStore


__all__ = [
    "AdminSession",
    "ApiRequestError",
    "BulkImportError",
    "BulkImporter",
    "CatalogEntry",
    "CatalogError",
    "CatalogStats",
    "CatalogStore",
    "DialogState",
    "DialogStateError",
    "EditBuffer",
    "ImportRejectedError",
    "ImportResult",
    "InvalidFormatError",
    "LibraryClient",
    "LoadError",
    "MalformedInputError",
    "MissingFieldsError",
    "MutationCoordinator",
    "MutationError",
    "Notification",
    "NotificationLog",
    "Popularity",
    "Projection",
    "TokenFileProvider",
    "ViewProjector",
    "create_session",
    "from_comma_list",
    "project",
    "static_token",
    "to_comma_list",
]
