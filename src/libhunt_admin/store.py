"""Client-side snapshot of the remote catalog."""

from __future__ import annotations
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol
from .errors import ApiRequestError, LoadError
from .models import CatalogEntry


logger = logging.getLogger(__name__)


class CatalogSource(Protocol):
    """Anything able to return the full remote listing."""

    def list_libraries(self) -> list[CatalogEntry]:
        """Return every catalog entry in server order."""
        ...  # pragma: no cover


@dataclass(frozen=True, slots=True)
class CatalogStats:
    """Dashboard counters shown above the library table."""

    total: int
    frontend: int
    backend: int
    recently_updated: int


class CatalogStore:
    """Hold the catalog entries acknowledged by the library service.

    The sequence only changes through :meth:`load` and the three ``apply_*``
    reconcilers, each called after the corresponding remote operation has
    succeeded. ``version`` increases on every change so that derived views
    can tell when to recompute.
    """

    def __init__(self, source: CatalogSource) -> None:
        """Create an empty store that loads from ``source``."""
        self._source = source
        self._entries: list[CatalogEntry] = []
        self._version = 0
        self._loaded = False

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        """Return the entries in server fetch order."""
        return tuple(self._entries)

    @property
    def version(self) -> int:
        """Return a counter bumped on every change to the sequence."""
        return self._version

    @property
    def loaded(self) -> bool:
        """Return ``True`` once a load has succeeded."""
        return self._loaded

    def __len__(self) -> int:
        """Return the number of entries held."""
        return len(self._entries)

    def load(self) -> None:
        """Replace the snapshot with a fresh remote listing.

        Raises:
            LoadError: the listing failed; the current entries are kept.
        """
        try:
            entries = self._source.list_libraries()
        except ApiRequestError as exc:
            logger.warning("Failed to load libraries: %s", exc)
            raise LoadError("Failed to load libraries.") from exc
        self._replace(entries)
        self._loaded = True
        logger.info("Loaded %d libraries", len(entries))

    def get(self, entry_id: str) -> CatalogEntry | None:
        """Return the entry with ``entry_id`` if present."""
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def apply_created(self, entry: CatalogEntry) -> None:
        """Append an entry the service has just created."""
        self._entries.append(entry)
        self._bump()

    def apply_updated(self, entry: CatalogEntry) -> None:
        """Replace the entry sharing ``entry.id`` with the canonical copy."""
        for index, current in enumerate(self._entries):
            if current.id == entry.id:
                self._entries[index] = entry
                self._bump()
                return
        logger.warning("Ignoring update for unknown library %s", entry.id)

    def apply_deleted(self, entry_id: str) -> None:
        """Remove the entry with ``entry_id``."""
        for index, current in enumerate(self._entries):
            if current.id == entry_id:
                del self._entries[index]
                self._bump()
                return
        logger.warning("Ignoring delete for unknown library %s", entry_id)

    def stats(self) -> CatalogStats:
        """Return the dashboard counters for the current snapshot."""
        return CatalogStats(
            total=len(self._entries),
            frontend=sum(
                1 for e in self._entries if e.category == "Frontend Framework"
            ),
            backend=sum(1 for e in self._entries if e.category == "Backend Framework"),
            recently_updated=sum(1 for e in self._entries if "month" in e.last_update),
        )

    def _replace(self, entries: Sequence[CatalogEntry]) -> None:
        self._entries = list(entries)
        self._bump()

    def _bump(self) -> None:
        self._version += 1


__all__ = ["CatalogSource", "CatalogStats", "CatalogStore"]
