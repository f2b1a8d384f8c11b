"""Runtime state shared across CLI commands."""

from __future__ import annotations
from dataclasses import dataclass
from rich.console import Console
from libhunt_admin.client import LibraryClient
from libhunt_admin.session import AdminSession, NotificationLog
from .config import CLISettings


@dataclass(slots=True)
class CLIContext:
    """Object stored on :class:`typer.Context` for command access."""

    settings: CLISettings
    client: LibraryClient
    session: AdminSession
    notifications: NotificationLog
    console: Console


__all__ = ["CLIContext"]
