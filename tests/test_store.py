"""Catalog store tests."""

from __future__ import annotations
import pytest
from factories import EntryFactory
from libhunt_admin.errors import ApiRequestError, LoadError
from libhunt_admin.models import CatalogEntry
from libhunt_admin.store import CatalogStats, CatalogStore


class FakeSource:
    """Return canned listings or fail on demand."""

    def __init__(self, entries: list[CatalogEntry] | None = None) -> None:
        self.entries = entries or []
        self.fail = False
        self.calls = 0

    def list_libraries(self) -> list[CatalogEntry]:
        self.calls += 1
        if self.fail:
            raise ApiRequestError("boom")
        return list(self.entries)


@pytest.fixture()
def loaded_store(make_entry: EntryFactory) -> CatalogStore:
    source = FakeSource([make_entry(str(i)) for i in range(1, 5)])
    store = CatalogStore(source)
    store.load()
    return store


def test_load_replaces_entries_in_server_order(make_entry: EntryFactory) -> None:
    source = FakeSource([make_entry("b"), make_entry("a")])
    store = CatalogStore(source)
    assert not store.loaded

    store.load()

    assert [e.id for e in store.entries] == ["b", "a"]
    assert store.loaded
    source.entries = [make_entry("c")]
    store.load()
    assert [e.id for e in store.entries] == ["c"]


def test_load_failure_keeps_previous_snapshot(loaded_store: CatalogStore) -> None:
    before = loaded_store.entries
    version = loaded_store.version
    loaded_store._source.fail = True  # type: ignore[attr-defined]

    with pytest.raises(LoadError):
        loaded_store.load()

    assert loaded_store.entries == before
    assert loaded_store.version == version


def test_load_failure_on_first_load_leaves_store_empty() -> None:
    source = FakeSource()
    source.fail = True
    store = CatalogStore(source)
    with pytest.raises(LoadError, match="Failed to load libraries"):
        store.load()
    assert store.entries == ()
    assert not store.loaded


def test_apply_created_appends(
    loaded_store: CatalogStore, make_entry: EntryFactory
) -> None:
    version = loaded_store.version
    loaded_store.apply_created(make_entry("new"))
    assert loaded_store.entries[-1].id == "new"
    assert len(loaded_store) == 5
    assert loaded_store.version == version + 1


def test_apply_updated_replaces_only_matching_entry(
    loaded_store: CatalogStore, make_entry: EntryFactory
) -> None:
    others = {e.id: e for e in loaded_store.entries if e.id != "3"}
    updated = make_entry("3", name="Renamed")

    loaded_store.apply_updated(updated)

    assert loaded_store.get("3") is updated
    assert [e.id for e in loaded_store.entries] == ["1", "2", "3", "4"]
    for entry in loaded_store.entries:
        if entry.id != "3":
            assert entry is others[entry.id]


def test_apply_updated_unknown_id_is_noop(
    loaded_store: CatalogStore, make_entry: EntryFactory
) -> None:
    before = loaded_store.entries
    version = loaded_store.version
    loaded_store.apply_updated(make_entry("missing"))
    assert loaded_store.entries == before
    assert loaded_store.version == version


def test_apply_deleted_removes_exactly_one(loaded_store: CatalogStore) -> None:
    loaded_store.apply_deleted("2")
    assert [e.id for e in loaded_store.entries] == ["1", "3", "4"]
    loaded_store.apply_deleted("missing")
    assert [e.id for e in loaded_store.entries] == ["1", "3", "4"]


def test_stats_counts(make_entry: EntryFactory) -> None:
    source = FakeSource(
        [
            make_entry("1", category="Frontend Framework", lastUpdate="1 month ago"),
            make_entry("2", category="Frontend Framework"),
            make_entry("3", category="Backend Framework", lastUpdate="3 months ago"),
            make_entry("4", category="frontend framework"),
        ]
    )
    store = CatalogStore(source)
    store.load()
    assert store.stats() == CatalogStats(
        total=4, frontend=2, backend=1, recently_updated=2
    )
