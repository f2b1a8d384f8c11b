"""Typer application wiring for the libhunt-admin CLI."""

from __future__ import annotations
import os
from pathlib import Path
from typing import Annotated
import typer
from rich.console import Console
from libhunt_admin.client import LibraryClient
from libhunt_admin.credentials import (
    CredentialProvider,
    TokenFileProvider,
    static_token,
)
from libhunt_admin.session import NotificationLog, create_session
from . import libraries
from .config import (
    CLISettings,
    InvalidApiUrlError,
    ProfileNotFoundError,
    resolve_settings,
)
from .state import CLIContext


app = typer.Typer(help="Administer the library catalog.")
libraries.register(app)


def _credentials_for(settings: CLISettings) -> CredentialProvider:
    if settings.token:
        return static_token(settings.token)
    if settings.token_path is not None:
        return TokenFileProvider(settings.token_path)
    return static_token(None)


@app.callback()
def _configure(
    ctx: typer.Context,
    api_url: Annotated[
        str | None,
        typer.Option(help="Override the library service URL."),
    ] = None,
    token: Annotated[
        str | None,
        typer.Option(help="Bearer token used for authentication."),
    ] = None,
    profile: Annotated[
        str | None,
        typer.Option(
            "--profile",
            "-p",
            help="Named profile from the CLI config file.",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(help="Path to cli.toml with saved profiles."),
    ] = None,
) -> None:
    """Initialise shared CLI state before executing a command."""
    try:
        settings = resolve_settings(
            api_url=api_url,
            token=token,
            profile=profile,
            config_path=config_path,
            env=os.environ,
        )
    except (ProfileNotFoundError, InvalidApiUrlError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    client = LibraryClient(
        base_url=settings.api_url, timeout=settings.request_timeout
    )
    notifications = NotificationLog()
    session = create_session(
        client,
        _credentials_for(settings),
        refresh_after_import=settings.refresh_after_import,
        notify=notifications,
    )
    ctx.obj = CLIContext(
        settings=settings,
        client=client,
        session=session,
        notifications=notifications,
        console=Console(),
    )
    ctx.call_on_close(client.close)


def main() -> None:
    """Entry point for console script execution."""
    app()


__all__ = ["app", "main"]
