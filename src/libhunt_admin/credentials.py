"""Credential providers injected into components that talk to the service."""

from __future__ import annotations
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path


logger = logging.getLogger(__name__)

CredentialProvider = Callable[[], str | None]
"""Callable returning the current bearer token, or ``None`` when signed out."""


def static_token(token: str | None) -> CredentialProvider:
    """Return a provider that always yields ``token``."""
    value = token.strip() if token else None

    def _provider() -> str | None:
        return value or None

    return _provider


@dataclass(slots=True)
class TokenFileProvider:
    """Read the token persisted by the login flow on every call.

    The file is re-read each time so that a token refreshed elsewhere is
    picked up without rebuilding the components holding the provider. A
    missing or unreadable file yields ``None``; the service then rejects the
    request, which is how an absent token surfaces.
    """

    path: Path

    def __call__(self) -> str | None:
        """Return the stripped file contents, or ``None`` when unavailable."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Unable to read token file %s: %s", self.path, exc)
            return None
        token = text.strip()
        return token or None


__all__ = ["CredentialProvider", "TokenFileProvider", "static_token"]
