"""Shared helpers used across CLI command modules."""

from __future__ import annotations
import typer
from rich.markup import escape
from libhunt_admin.models import CatalogEntry
from .render import render_notification
from .state import CLIContext


def get_context(ctx: typer.Context) -> CLIContext:
    """Return the CLI context stored on the Typer context object."""
    obj = ctx.obj
    if not isinstance(obj, CLIContext):  # pragma: no cover
        msg = "CLI context has not been initialised"
        raise RuntimeError(msg)
    return obj


def flush_notifications(context: CLIContext) -> bool:
    """Print pending notifications; return ``True`` if any reported a failure."""
    failed = False
    for notification in context.notifications.items:
        render_notification(context.console, notification)
        failed = failed or notification.is_error
    context.notifications.items.clear()
    return failed


def exit_on_failure(context: CLIContext) -> None:
    """Print notifications and exit with status 1 when one was an error."""
    if flush_notifications(context):
        raise typer.Exit(code=1)


def load_catalog(context: CLIContext) -> None:
    """Load the catalog snapshot or abort the command."""
    context.session.start()
    exit_on_failure(context)


def find_entry(context: CLIContext, identifier: str) -> CatalogEntry:
    """Return the loaded entry matching an id or (case-insensitive) name."""
    store = context.session.store
    entry = store.get(identifier)
    if entry is None:
        lowered = identifier.lower()
        entry = next((e for e in store.entries if e.name.lower() == lowered), None)
    if entry is None:
        context.console.print(
            f"[red]Library '{escape(identifier)}' not found.[/red]"
        )
        raise typer.Exit(code=1)
    return entry


__all__ = [
    "exit_on_failure",
    "find_entry",
    "flush_notifications",
    "get_context",
    "load_catalog",
]
