"""Rendering helpers for CLI output."""

from __future__ import annotations
from collections.abc import Iterable, Sequence
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from libhunt_admin.buffer import to_comma_list
from libhunt_admin.models import CatalogEntry
from libhunt_admin.session import Notification


def render_table(
    console: Console,
    *,
    title: str,
    columns: Sequence[str],
    rows: Iterable[Sequence[str]],
    caption: str | None = None,
) -> None:
    """Render a simple table using :mod:`rich`."""
    table = Table(title=title, caption=caption, show_lines=False)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*row)
    console.print(table)


def render_kv_section(
    console: Console,
    *,
    title: str,
    pairs: Sequence[tuple[str, str]],
) -> None:
    """Render key/value pairs in a bordered panel."""
    lines = [f"[bold]{key}[/]: {escape(value)}" for key, value in pairs]
    panel = Panel("\n".join(lines), title=title, expand=False)
    console.print(panel)


def entry_pairs(entry: CatalogEntry) -> list[tuple[str, str]]:
    """Return the detail rows shown for a single library."""
    return [
        ("ID", entry.id or ""),
        ("Name", entry.name),
        ("Description", entry.description),
        ("Category", entry.category),
        ("Version", entry.version),
        ("License", entry.license),
        ("Cost", entry.cost),
        ("Supported OS", to_comma_list(entry.supported_os)),
        ("Dependencies", to_comma_list(entry.dependencies)),
        ("Stars", str(entry.popularity.stars)),
        ("Downloads", str(entry.popularity.downloads)),
        ("Last Update", entry.last_update),
        ("Featured", "yes" if entry.is_featured else "no"),
        ("Usage Example", entry.usage_example),
    ]


def render_notification(console: Console, notification: Notification) -> None:
    """Print a notification, in red when it reports a failure."""
    style = "red" if notification.is_error else "green"
    console.print(
        f"[{style}][bold]{escape(notification.title)}[/bold]: "
        f"{escape(notification.description)}[/{style}]"
    )


__all__ = [
    "entry_pairs",
    "render_kv_section",
    "render_notification",
    "render_table",
]
