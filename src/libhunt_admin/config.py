"""Runtime configuration helpers for the catalog admin console."""

from __future__ import annotations
from functools import lru_cache
from dynaconf import Dynaconf


_DEFAULTS: dict[str, object] = {
    "API_URL": "http://localhost:5002/api",
    "REQUEST_TIMEOUT": 30.0,
    "TOKEN": None,
    "TOKEN_PATH": None,
    "REFRESH_AFTER_IMPORT": True,
}


def _build_loader() -> Dynaconf:
    """Create a Dynaconf loader wired to environment variables only."""
    return Dynaconf(
        envvar_prefix="LIBHUNT",
        settings_files=[],  # No config files, env vars only
        load_dotenv=True,
        environments=False,
    )


def _coerce_bool(value: object, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    candidate = str(value).strip().lower()
    if candidate in {"1", "true", "yes", "on"}:
        return True
    if candidate in {"0", "false", "no", "off"}:
        return False
    return default


def normalize_api_url(value: object, *, source: str = "LIBHUNT_API_URL") -> str:
    """Return ``value`` as an http(s) URL without a trailing slash.

    Raises:
        ValueError: ``value`` is not an http:// or https:// URL.
    """
    api_url = str(value).strip()
    if not api_url.startswith(("http://", "https://")):
        msg = f"{source} must be an http:// or https:// URL."
        raise ValueError(msg)
    return api_url.rstrip("/")


def _normalize_settings(source: Dynaconf) -> Dynaconf:
    """Validate and fill defaults on the raw Dynaconf settings."""
    normalized = Dynaconf(
        envvar_prefix="LIBHUNT",
        settings_files=[],
        load_dotenv=False,
        environments=False,
    )

    api_url = source.get("API_URL") or _DEFAULTS["API_URL"]
    normalized.set("API_URL", normalize_api_url(api_url))

    timeout_raw = source.get("REQUEST_TIMEOUT", _DEFAULTS["REQUEST_TIMEOUT"])
    try:
        timeout = float(timeout_raw)
    except (TypeError, ValueError) as exc:
        msg = "LIBHUNT_REQUEST_TIMEOUT must be a number."
        raise ValueError(msg) from exc
    if timeout <= 0:
        msg = "LIBHUNT_REQUEST_TIMEOUT must be greater than zero."
        raise ValueError(msg)
    normalized.set("REQUEST_TIMEOUT", timeout)

    token = source.get("TOKEN")
    normalized.set("TOKEN", str(token) if token else None)

    token_path = source.get("TOKEN_PATH")
    normalized.set("TOKEN_PATH", str(token_path) if token_path else None)

    normalized.set(
        "REFRESH_AFTER_IMPORT",
        _coerce_bool(
            source.get("REFRESH_AFTER_IMPORT"),
            bool(_DEFAULTS["REFRESH_AFTER_IMPORT"]),
        ),
    )
    return normalized


@lru_cache(maxsize=1)
def _load_settings() -> Dynaconf:
    """Load settings once and cache the normalized Dynaconf instance."""
    return _normalize_settings(_build_loader())


def get_settings(*, refresh: bool = False) -> Dynaconf:
    """Return the cached Dynaconf settings, reloading them if requested."""
    if refresh:
        _load_settings.cache_clear()
    return _load_settings()


__all__ = ["get_settings", "normalize_api_url"]
