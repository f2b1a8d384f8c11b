"""Draft editing for the create and edit dialogs."""

from __future__ import annotations
import copy
from collections.abc import Iterable, Mapping
from typing import Any
from .errors import MissingFieldsError, UnknownFieldError
from .models import DEFAULT_LICENSE, CatalogEntry, coerce_count


REQUIRED_FIELDS: tuple[str, ...] = ("name", "category", "description")

_TEXT_FIELDS = frozenset(
    {
        "name",
        "description",
        "category",
        "version",
        "license",
        "cost",
        "usageExample",
        "lastUpdate",
    }
)
_LIST_FIELDS = frozenset({"supportedOS", "dependencies"})
_COUNT_FIELDS = frozenset({"stars", "downloads"})

# Attribute spellings accepted alongside the wire keys.
_ALIASES = {
    "supported_os": "supportedOS",
    "usage_example": "usageExample",
    "last_update": "lastUpdate",
}


def to_comma_list(items: Iterable[str]) -> str:
    """Render a list field as the comma separated text shown in the form."""
    return ", ".join(items)


def from_comma_list(text: str) -> list[str]:
    """Split comma separated text into trimmed items.

    Empty pieces and duplicates are kept (``"a,,a"`` gives ``["a", "", "a"]``);
    only a completely empty field yields an empty list.
    """
    if text == "":
        return []
    return [piece.strip() for piece in text.split(",")]


def _blank_draft() -> dict[str, Any]:
    return {
        "name": "",
        "description": "",
        "category": "",
        "version": "",
        "license": DEFAULT_LICENSE,
        "cost": "",
        "supportedOS": [],
        "dependencies": [],
        "popularity": {"stars": 0, "downloads": 0},
        "usageExample": "",
        "lastUpdate": "",
        "featured": False,
    }


class EditBuffer:
    """A transient draft of one catalog entry.

    The draft is kept in the service's wire format so it can be submitted as
    is. It never touches the catalog store; committing goes through the
    mutation coordinator.
    """

    def __init__(self, draft: dict[str, Any], *, is_editing: bool) -> None:
        """Wrap ``draft``; prefer :meth:`open_for_create`/:meth:`open_for_edit`."""
        self._draft = draft
        self.is_editing = is_editing

    @classmethod
    def open_for_create(cls) -> EditBuffer:
        """Return an empty draft with the default license selected."""
        return cls(_blank_draft(), is_editing=False)

    @classmethod
    def open_for_edit(cls, entry: CatalogEntry) -> EditBuffer:
        """Return a draft holding a full copy of ``entry``."""
        return cls(copy.deepcopy(entry.to_wire()), is_editing=True)

    @property
    def entry_id(self) -> str | None:
        """Return the identifier of the entry being edited, if any."""
        value = self._draft.get("_id")
        return str(value) if value is not None else None

    @property
    def draft(self) -> dict[str, Any]:
        """Return a copy of the current draft."""
        return copy.deepcopy(self._draft)

    def get(self, key: str) -> Any:
        """Return the current value of ``key`` (dotted for popularity counters)."""
        field, _, nested = self._resolve(key)
        if nested:
            return self._draft.get("popularity", {}).get(nested)
        return self._draft.get(field)

    def set_field(self, key: str, value: Any) -> None:
        """Update one field, leaving every other field untouched.

        ``popularity.stars`` and ``popularity.downloads`` are merged into the
        nested record. List fields accept comma text or a sequence.

        Raises:
            UnknownFieldError: ``key`` is not an editable entry field, or
                ``popularity`` was given something other than a mapping.
        """
        field, _, nested = self._resolve(key)
        if nested:
            popularity = dict(self._draft.get("popularity") or {})
            popularity[nested] = coerce_count(value)
            self._draft["popularity"] = popularity
        elif field == "popularity":
            if not isinstance(value, Mapping):
                msg = "popularity must be a mapping of stars and downloads"
                raise UnknownFieldError(msg)
            popularity = dict(self._draft.get("popularity") or {})
            for counter in _COUNT_FIELDS:
                if counter in value:
                    popularity[counter] = coerce_count(value[counter])
            self._draft["popularity"] = popularity
        elif field in _LIST_FIELDS:
            if isinstance(value, str):
                self._draft[field] = from_comma_list(value)
            else:
                self._draft[field] = [str(item).strip() for item in value]
        elif field == "featured":
            self._draft[field] = bool(value)
        else:
            self._draft[field] = "" if value is None else str(value)

    def comma_text(self, key: str) -> str:
        """Return a list field rendered as comma separated text."""
        field, _, _ = self._resolve(key)
        if field not in _LIST_FIELDS:
            msg = f"{key!r} is not a list field"
            raise UnknownFieldError(msg)
        return to_comma_list(self._draft.get(field) or [])

    def missing_fields(self) -> list[str]:
        """Return the required fields that are absent or empty."""
        return [name for name in REQUIRED_FIELDS if not self._draft.get(name)]

    def validate(self) -> None:
        """Raise :class:`MissingFieldsError` unless all required fields are set.

        Only presence is checked; whitespace counts as a value.
        """
        missing = self.missing_fields()
        if missing:
            raise MissingFieldsError(missing)

    def to_payload(self) -> dict[str, Any]:
        """Return the request body for the draft, without its identifier."""
        payload = copy.deepcopy(self._draft)
        payload.pop("_id", None)
        return payload

    @staticmethod
    def _resolve(key: str) -> tuple[str, str, str]:
        field, sep, nested = key.partition(".")
        field = _ALIASES.get(field, field)
        if sep:
            if field != "popularity" or nested not in _COUNT_FIELDS:
                msg = f"Unknown field {key!r}"
                raise UnknownFieldError(msg)
            return field, sep, nested
        if field in _COUNT_FIELDS:
            return "popularity", ".", field
        known = _TEXT_FIELDS | _LIST_FIELDS | {"popularity", "featured"}
        if field not in known:
            msg = f"Unknown field {key!r}"
            raise UnknownFieldError(msg)
        return field, "", ""


__all__ = [
    "REQUIRED_FIELDS",
    "EditBuffer",
    "from_comma_list",
    "to_comma_list",
]
