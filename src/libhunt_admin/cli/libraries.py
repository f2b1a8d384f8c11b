"""Library catalog commands."""

from __future__ import annotations
from pathlib import Path
from typing import Any
import typer
from rich.markup import escape
from libhunt_admin.models import (
    ALL_CATEGORIES,
    CATEGORIES,
    DEFAULT_LICENSE,
    LICENSES,
)
from .render import entry_pairs, render_kv_section, render_table
from .utils import exit_on_failure, find_entry, get_context, load_catalog


def register(app: typer.Typer) -> None:
    """Attach the catalog commands to ``app``."""
    app.command("list")(list_libraries)
    app.command("show")(show_library)
    app.command("stats")(show_stats)
    app.command("categories")(list_categories)
    app.command("add")(add_library)
    app.command("edit")(edit_library)
    app.command("delete")(delete_library)
    app.command("import")(import_libraries)


def list_libraries(
    ctx: typer.Context,
    search: str = typer.Option("", "--search", "-s", help="Match name or description."),
    category: str = typer.Option(
        ALL_CATEGORIES, "--category", "-c", help="Exact category, or 'All'."
    ),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page to display."),
) -> None:
    """List libraries one page at a time."""
    context = get_context(ctx)
    load_catalog(context)

    projector = context.session.projector
    projector.set_search(search)
    projector.set_category(category)
    projector.go_to_page(page)
    projection = projector.projection

    if not projection.page_items:
        context.console.print("[yellow]No libraries found.[/yellow]")
        return

    rows = [
        (
            escape(entry.id or ""),
            escape(entry.name),
            escape(entry.category),
            escape(entry.version),
            escape(entry.license),
        )
        for entry in projection.page_items
    ]
    caption = (
        f"{projection.range_label()} · page {projection.current_page}"
        f"/{max(1, projection.page_count)}"
    )
    render_table(
        context.console,
        title="Libraries",
        columns=("ID", "Name", "Category", "Version", "License"),
        rows=rows,
        caption=caption,
    )


def show_library(
    ctx: typer.Context,
    library: str = typer.Argument(..., help="Library identifier or name."),
) -> None:
    """Display every field of one library."""
    context = get_context(ctx)
    load_catalog(context)
    entry = find_entry(context, library)
    render_kv_section(context.console, title=entry.name, pairs=entry_pairs(entry))


def show_stats(ctx: typer.Context) -> None:
    """Show the dashboard counters."""
    context = get_context(ctx)
    load_catalog(context)
    stats = context.session.store.stats()
    render_table(
        context.console,
        title="Dashboard",
        columns=("Total", "Frontend", "Backend", "Recently Updated"),
        rows=[
            (
                str(stats.total),
                str(stats.frontend),
                str(stats.backend),
                str(stats.recently_updated),
            )
        ],
    )


def list_categories(ctx: typer.Context) -> None:
    """Print the known categories and licenses."""
    context = get_context(ctx)
    context.console.print("[bold]Categories[/bold]")
    for category in CATEGORIES:
        context.console.print(f"  {category}")
    context.console.print("[bold]Licenses[/bold]")
    for license_id in LICENSES:
        marker = " (default)" if license_id == DEFAULT_LICENSE else ""
        context.console.print(f"  {license_id}{marker}")


def add_library(
    ctx: typer.Context,
    name: str = typer.Option("", help="Library name."),
    description: str = typer.Option("", help="Short description."),
    category: str = typer.Option("", help="Category, e.g. 'Database'."),
    version: str = typer.Option("", help="Current version."),
    license_id: str = typer.Option(DEFAULT_LICENSE, "--license", help="License."),
    cost: str = typer.Option("", help="Cost, e.g. Free or Paid."),
    supported_os: str = typer.Option(
        "", "--supported-os", help="Comma-separated operating systems."
    ),
    dependencies: str = typer.Option("", help="Comma-separated dependencies."),
    stars: str = typer.Option("0", help="GitHub stars."),
    downloads: str = typer.Option("0", help="Download count."),
    usage_example: str = typer.Option("", "--usage-example", help="Usage snippet."),
    last_update: str = typer.Option(
        "", "--last-update", help="Recency, e.g. '2 weeks ago'."
    ),
    featured: bool = typer.Option(False, help="Feature on the homepage."),
) -> None:
    """Create a library."""
    context = get_context(ctx)
    session = context.session
    session.open_create()
    fields: dict[str, Any] = {
        "name": name,
        "description": description,
        "category": category,
        "version": version,
        "license": license_id,
        "cost": cost,
        "supportedOS": supported_os,
        "dependencies": dependencies,
        "popularity.stars": stars,
        "popularity.downloads": downloads,
        "usageExample": usage_example,
        "lastUpdate": last_update,
        "featured": featured,
    }
    for key, value in fields.items():
        session.set_field(key, value)

    created = session.save()
    exit_on_failure(context)
    if created is not None:
        render_kv_section(
            context.console, title="Library Created", pairs=entry_pairs(created)
        )


def edit_library(
    ctx: typer.Context,
    library: str = typer.Argument(..., help="Library identifier or name."),
    name: str | None = typer.Option(None, help="Library name."),
    description: str | None = typer.Option(None, help="Short description."),
    category: str | None = typer.Option(None, help="Category."),
    version: str | None = typer.Option(None, help="Current version."),
    license_id: str | None = typer.Option(None, "--license", help="License."),
    cost: str | None = typer.Option(None, help="Cost."),
    supported_os: str | None = typer.Option(
        None, "--supported-os", help="Comma-separated operating systems."
    ),
    dependencies: str | None = typer.Option(
        None, help="Comma-separated dependencies."
    ),
    stars: str | None = typer.Option(None, help="GitHub stars."),
    downloads: str | None = typer.Option(None, help="Download count."),
    usage_example: str | None = typer.Option(
        None, "--usage-example", help="Usage snippet."
    ),
    last_update: str | None = typer.Option(
        None, "--last-update", help="Recency, e.g. '2 weeks ago'."
    ),
    featured: bool | None = typer.Option(
        None, "--featured/--not-featured", help="Feature on the homepage."
    ),
) -> None:
    """Edit a library; only the given fields change."""
    context = get_context(ctx)
    load_catalog(context)
    entry = find_entry(context, library)

    session = context.session
    session.open_edit(entry)
    changes: dict[str, Any] = {
        "name": name,
        "description": description,
        "category": category,
        "version": version,
        "license": license_id,
        "cost": cost,
        "supportedOS": supported_os,
        "dependencies": dependencies,
        "popularity.stars": stars,
        "popularity.downloads": downloads,
        "usageExample": usage_example,
        "lastUpdate": last_update,
        "featured": featured,
    }
    for key, value in changes.items():
        if value is not None:
            session.set_field(key, value)

    updated = session.save()
    exit_on_failure(context)
    if updated is not None:
        render_kv_section(
            context.console, title="Library Updated", pairs=entry_pairs(updated)
        )


def delete_library(
    ctx: typer.Context,
    library: str = typer.Argument(..., help="Library identifier or name."),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Delete a library after confirmation."""
    context = get_context(ctx)
    load_catalog(context)
    entry = find_entry(context, library)

    session = context.session
    session.request_delete(entry)
    if not force and not typer.confirm(f"Delete library '{entry.name}'?"):
        session.cancel()
        context.console.print("[yellow]Delete cancelled.[/yellow]")
        return
    session.confirm_delete()
    exit_on_failure(context)


def import_libraries(
    ctx: typer.Context,
    path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="JSON array file."
    ),
    refresh: bool | None = typer.Option(
        None,
        "--refresh/--no-refresh",
        help="Reload the catalog afterwards (defaults to configuration).",
    ),
) -> None:
    """Bulk import libraries from a JSON file."""
    context = get_context(ctx)
    if refresh is not None:
        context.session.importer.refresh = refresh
    result = context.session.import_file(path.read_bytes())
    exit_on_failure(context)
    if result is not None and result.refreshed:
        context.console.print(
            f"Catalog now holds {len(context.session.store)} libraries."
        )


__all__ = ["register"]
