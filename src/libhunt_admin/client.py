"""HTTP client for the library service."""

from __future__ import annotations
import logging
from collections.abc import Sequence
from typing import Any
import httpx
from pydantic import ValidationError
from .errors import ApiRequestError
from .models import CatalogEntry


logger = logging.getLogger(__name__)

_LIBRARIES_PATH = "/libraries"


def _server_message(response: httpx.Response) -> str | None:
    """Return the error text the service put in a response body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    for key in ("error", "message", "detail"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return None


class LibraryClient:
    """Small wrapper around :class:`httpx.Client` for the libraries resource."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Create a client bound to the provided API endpoint."""
        headers: dict[str, str] = {"User-Agent": "libhunt-admin/1.0"}
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> LibraryClient:
        """Return the client for use as a context manager."""
        return self

    def __exit__(self, *exc_info: object) -> None:
        """Close the client when leaving a ``with`` block."""
        self.close()

    def request_json(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        token: str | None = None,
        description: str = "resource",
    ) -> Any:
        """Send a request and return the decoded JSON body (``None`` if empty)."""
        headers: dict[str, str] = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            response = self._client.request(method, path, json=json, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            server_message = _server_message(exc.response)
            logger.warning(
                "%s %s failed with status %s: %s",
                method,
                path,
                status,
                server_message or "no message",
            )
            msg = f"API request failed with status {status} while {description}"
            raise ApiRequestError(
                msg, server_message=server_message, response=exc.response
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            msg = f"Unable to reach the library service while {description}"
            raise ApiRequestError(msg) from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def list_libraries(self, *, token: str | None = None) -> list[CatalogEntry]:
        """Fetch every catalog entry in server order."""
        data = self.request_json(
            "GET", _LIBRARIES_PATH, token=token, description="fetching libraries"
        )
        if not isinstance(data, list):
            msg = "Library listing did not return an array"
            raise ApiRequestError(msg)
        try:
            return [CatalogEntry.model_validate(item) for item in data]
        except ValidationError as exc:
            msg = "Library listing contained a malformed record"
            raise ApiRequestError(msg) from exc

    def create_library(
        self, payload: dict[str, Any], *, token: str | None = None
    ) -> CatalogEntry:
        """Create an entry and return it with its server-assigned identifier."""
        data = self.request_json(
            "POST",
            _LIBRARIES_PATH,
            json=payload,
            token=token,
            description="creating a library",
        )
        return self._expect_entry(data, "creating a library")

    def update_library(
        self, entry_id: str, payload: dict[str, Any], *, token: str | None = None
    ) -> CatalogEntry:
        """Update the entry ``entry_id`` and return the canonical result."""
        data = self.request_json(
            "PUT",
            f"{_LIBRARIES_PATH}/{entry_id}",
            json=payload,
            token=token,
            description="updating a library",
        )
        return self._expect_entry(data, "updating a library")

    def delete_library(self, entry_id: str, *, token: str | None = None) -> None:
        """Delete the entry ``entry_id``."""
        self.request_json(
            "DELETE",
            f"{_LIBRARIES_PATH}/{entry_id}",
            token=token,
            description="deleting a library",
        )

    def bulk_create(
        self, records: Sequence[Any], *, token: str | None = None
    ) -> Any:
        """Submit ``records`` in one request and return the raw response body."""
        return self.request_json(
            "POST",
            f"{_LIBRARIES_PATH}/bulk",
            json=list(records),
            token=token,
            description="importing libraries",
        )

    @staticmethod
    def _expect_entry(data: Any, description: str) -> CatalogEntry:
        if not isinstance(data, dict):
            msg = f"Unexpected response while {description}"
            raise ApiRequestError(msg)
        try:
            entry = CatalogEntry.model_validate(data)
        except ValidationError as exc:
            msg = f"Malformed library record while {description}"
            raise ApiRequestError(msg) from exc
        if not entry.id:
            msg = f"Response without an identifier while {description}"
            raise ApiRequestError(msg)
        return entry


__all__ = ["LibraryClient"]
