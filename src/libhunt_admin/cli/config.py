"""Configuration helpers for the libhunt-admin CLI."""

from __future__ import annotations
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from libhunt_admin.config import get_settings, normalize_api_url


@dataclass(slots=True)
class ProfileConfig:
    """Configuration declared within a named CLI profile."""

    api_url: str | None = None
    token: str | None = None
    token_path: str | None = None


@dataclass(slots=True)
class CLISettings:
    """Resolved CLI configuration after applying precedence rules."""

    api_url: str
    token: str | None
    token_path: Path | None
    profile: str | None
    config_path: Path
    request_timeout: float
    refresh_after_import: bool


class ProfileNotFoundError(ValueError):
    """Raised when a requested profile cannot be located."""


class InvalidApiUrlError(ValueError):
    """Raised when the resolved service URL is not an http(s) URL."""


def _default_config_path() -> Path:
    config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return config_home / "libhunt" / "cli.toml"


def load_profiles(path: Path) -> Mapping[str, ProfileConfig]:
    """Return profiles defined in the provided configuration file."""
    if not path.exists():
        return {}

    with path.open("rb") as handle:
        data = tomllib.load(handle)

    raw_profiles = data.get("profiles", {})
    profiles: dict[str, ProfileConfig] = {}
    for name, payload in raw_profiles.items():
        if not isinstance(payload, dict):
            continue
        profiles[name] = ProfileConfig(
            api_url=payload.get("api_url"),
            token=payload.get("token"),
            token_path=payload.get("token_path"),
        )
    return profiles


def resolve_settings(
    *,
    api_url: str | None,
    token: str | None,
    profile: str | None,
    config_path: Path | None,
    env: Mapping[str, str] | None = None,
) -> CLISettings:
    """Combine CLI options, environment variables, profiles and defaults."""
    env = dict(env or {})
    defaults = get_settings()

    profile_name = profile or env.get("LIBHUNT_PROFILE")
    resolved_config_path = config_path or Path(
        env.get("LIBHUNT_CLI_CONFIG", _default_config_path())
    )

    profiles = load_profiles(resolved_config_path)
    profile_config: ProfileConfig | None = None
    if profile_name:
        profile_config = profiles.get(profile_name)
        if profile_config is None:
            msg = f"Profile '{profile_name}' not found in {resolved_config_path}"
            raise ProfileNotFoundError(msg)

    candidates = (
        ("--api-url", api_url),
        ("LIBHUNT_API_URL", env.get("LIBHUNT_API_URL")),
        (
            f"api_url of profile '{profile_name}'",
            profile_config.api_url if profile_config else None,
        ),
    )
    url_source, raw_api_url = next(
        ((label, value) for label, value in candidates if value),
        ("LIBHUNT_API_URL", defaults.API_URL),
    )
    try:
        resolved_api_url = normalize_api_url(raw_api_url, source=url_source)
    except ValueError as exc:
        raise InvalidApiUrlError(str(exc)) from exc

    resolved_token = (
        token
        or env.get("LIBHUNT_TOKEN")
        or (profile_config.token if profile_config else None)
        or defaults.TOKEN
    )

    token_path_raw = (
        env.get("LIBHUNT_TOKEN_PATH")
        or (profile_config.token_path if profile_config else None)
        or defaults.TOKEN_PATH
    )

    return CLISettings(
        api_url=resolved_api_url,
        token=resolved_token,
        token_path=Path(token_path_raw).expanduser() if token_path_raw else None,
        profile=profile_name,
        config_path=resolved_config_path,
        request_timeout=float(defaults.REQUEST_TIMEOUT),
        refresh_after_import=bool(defaults.REFRESH_AFTER_IMPORT),
    )


__all__ = [
    "CLISettings",
    "InvalidApiUrlError",
    "ProfileConfig",
    "ProfileNotFoundError",
    "load_profiles",
    "resolve_settings",
]
