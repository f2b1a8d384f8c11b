"""Catalog entry model tests."""

from __future__ import annotations
import pytest
from factories import entry_payload
from pydantic import ValidationError
from libhunt_admin.models import (
    CATEGORIES,
    DEFAULT_LICENSE,
    LICENSES,
    CatalogEntry,
    Popularity,
    coerce_count,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (5, 5),
        ("42", 42),
        ("  7 ", 7),
        ("12k", 12),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (-3, 0),
        ("-8", 0),
        (3.9, 3),
        (float("nan"), 0),
        (True, 0),
    ],
)
def test_coerce_count(value: object, expected: int) -> None:
    assert coerce_count(value) == expected


def test_popularity_coerces_counters() -> None:
    popularity = Popularity.model_validate({"stars": "oops", "downloads": "15"})
    assert popularity.stars == 0
    assert popularity.downloads == 15


def test_entry_parses_wire_keys() -> None:
    entry = CatalogEntry.model_validate(
        entry_payload(
            "abc",
            supportedOS=["Linux"],
            usageExample="import x",
            lastUpdate="1 month ago",
            featured=True,
        )
    )
    assert entry.id == "abc"
    assert entry.supported_os == ["Linux"]
    assert entry.usage_example == "import x"
    assert entry.last_update == "1 month ago"
    assert entry.is_featured


def test_entry_tolerates_sparse_payload() -> None:
    entry = CatalogEntry.model_validate({"_id": 17, "name": "Solo", "popularity": None})
    assert entry.id == "17"
    assert entry.description == ""
    assert entry.dependencies == []
    assert entry.popularity == Popularity()
    assert entry.featured is None
    assert not entry.is_featured


def test_to_wire_keeps_unknown_keys_and_can_drop_id() -> None:
    entry = CatalogEntry.model_validate(entry_payload("9", createdAt="yesterday"))
    wire = entry.to_wire()
    assert wire["_id"] == "9"
    assert wire["createdAt"] == "yesterday"
    assert wire["supportedOS"] == ["Linux", "macOS"]
    assert "_id" not in entry.to_wire(include_id=False)


def test_vocabularies() -> None:
    assert DEFAULT_LICENSE in LICENSES
    assert "Frontend Framework" in CATEGORIES
    assert len(CATEGORIES) == 10


@pytest.mark.parametrize(
    "overrides",
    [{"supportedOS": 5}, {"dependencies": {"a": 1}}, {"popularity": "lots"}],
)
def test_entry_rejects_malformed_fields(overrides: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        CatalogEntry.model_validate(entry_payload("1", **overrides))
