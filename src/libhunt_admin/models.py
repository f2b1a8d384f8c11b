"""Catalog entry models and the fixed vocabularies of the admin console."""

from __future__ import annotations
import math
import re
from collections.abc import Iterable
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


__all__ = [
    "ALL_CATEGORIES",
    "CATEGORIES",
    "DEFAULT_LICENSE",
    "LICENSES",
    "PAGE_SIZE",
    "CatalogEntry",
    "Popularity",
    "coerce_count",
]


CATEGORIES: tuple[str, ...] = (
    "Frontend Framework",
    "Backend Framework",
    "Database",
    "State Management",
    "UI Components",
    "CSS Framework",
    "Testing",
    "Framework",
    "Authentication",
    "Data Fetching",
)
"""Categories offered by the create form."""

LICENSES: tuple[str, ...] = ("MIT", "Apache-2.0", "GPL-3.0", "BSD-3-Clause", "ISC")
"""Recognized license identifiers."""

DEFAULT_LICENSE = "MIT"
ALL_CATEGORIES = "All"
"""Category filter sentinel matching every entry."""

PAGE_SIZE = 8

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def coerce_count(value: Any) -> int:
    """Return ``value`` as a non-negative integer, falling back to ``0``.

    Strings are read up to the first non-digit character so ``"12k"`` yields
    ``12``. Anything that does not start with a number becomes ``0`` and
    negative numbers are clamped to ``0``.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return max(0, value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return 0
        return max(0, int(value))
    match = _LEADING_INT_RE.match(str(value))
    if match is None:
        return 0
    return max(0, int(match.group(1)))


class Popularity(BaseModel):
    """Star and download counters for a library."""

    model_config = ConfigDict(extra="allow")

    stars: int = 0
    downloads: int = 0

    @field_validator("stars", "downloads", mode="before")
    @classmethod
    def _coerce_counter(cls, value: object) -> int:
        return coerce_count(value)


class CatalogEntry(BaseModel):
    """One library record as returned by the library service.

    Attribute names are snake_case; the wire format keeps the service's
    camelCase keys and Mongo-style ``_id`` through field aliases. Keys the
    console does not know about are preserved so that round-tripping an
    entry through an edit never drops server data.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str | None = Field(default=None, alias="_id")
    name: str = ""
    description: str = ""
    category: str = ""
    version: str = ""
    license: str = ""
    cost: str = ""
    supported_os: list[str] = Field(default_factory=list, alias="supportedOS")
    dependencies: list[str] = Field(default_factory=list)
    popularity: Popularity = Field(default_factory=Popularity)
    usage_example: str = Field(default="", alias="usageExample")
    last_update: str = Field(default="", alias="lastUpdate")
    featured: bool | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> str | None:
        if value is None:
            return None
        return str(value)

    @field_validator(
        "name",
        "description",
        "category",
        "version",
        "license",
        "cost",
        "usage_example",
        "last_update",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: object) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("supported_os", "dependencies", mode="before")
    @classmethod
    def _coerce_list(cls, value: object) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if not isinstance(value, Iterable) or isinstance(value, dict):
            msg = f"expected a list of strings, got {type(value).__name__}"
            raise ValueError(msg)
        return [str(item) for item in value]

    @field_validator("popularity", mode="before")
    @classmethod
    def _default_popularity(cls, value: object) -> object:
        return {} if value is None else value

    def to_wire(self, *, include_id: bool = True) -> dict[str, Any]:
        """Return the entry keyed the way the library service expects."""
        payload = self.model_dump(by_alias=True, exclude_none=True)
        if not include_id:
            payload.pop("_id", None)
        return payload

    @property
    def is_featured(self) -> bool:
        """Return ``True`` when the entry is flagged for the homepage."""
        return bool(self.featured)
