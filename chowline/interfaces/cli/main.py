"""
CLI Main - Typer-based command-line interface.

Usage:
    chowline init
    chowline import data/seed.json
    chowline search "jollof" --lat 6.5244 --lon 3.3792 --radius 5
    chowline serve
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from chowline.config import ChowlineError, get_settings
from chowline.domains.search import SearchCriteria, SearchPage, SortField, SortOrder

app = typer.Typer(
    name="chowline",
    help="Chowline - Menu discovery for the food marketplace",
    add_completion=False,
)
console = Console()


@app.callback()
def _configure_logging(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(level=level, format="%(levelname)s: %(name)s: %(message)s")


@app.command()
def init(
    db_path: Path | None = typer.Option(None, "--db", help="Database path"),
) -> None:
    """Create the database schema."""
    asyncio.run(_init_async(db_path))


async def _init_async(db_path: Path | None) -> None:
    from chowline.adapters.sqlite import SQLiteMenuRepository

    path = db_path or get_settings().db_path
    repo = SQLiteMenuRepository(path)
    try:
        await repo.initialize()
    finally:
        await repo.close()

    console.print("\n[green]Initialization complete![/green]")
    console.print(f"[dim]Database: {path}[/dim]")


@app.command("import")
def import_data(
    seed_file: Path = typer.Argument(..., help="Seed JSON file"),
    db_path: Path | None = typer.Option(None, "--db", help="Database path"),
) -> None:
    """Import vendors, categories and menu items from JSON."""
    if not seed_file.exists():
        console.print(f"[red]Error:[/red] File not found: {seed_file}")
        raise typer.Exit(1)

    asyncio.run(_import_async(seed_file, db_path))


async def _import_async(seed_file: Path, db_path: Path | None) -> None:
    from chowline.adapters.sqlite import SQLiteMenuRepository, import_seed, load_seed_file

    repo = SQLiteMenuRepository(db_path or get_settings().db_path)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task("Importing...", total=None)
        try:
            await repo.initialize()
            stats = await import_seed(repo, load_seed_file(seed_file))
            total_items = await repo.get_menu_item_count()
        except (ChowlineError, ValueError, KeyError) as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
        finally:
            await repo.close()

    table = Table(title="Import Summary")
    table.add_column("Entity", style="cyan")
    table.add_column("Created", style="green")
    for name, count in stats.items():
        table.add_row(name.title(), str(count))
    console.print(table)
    console.print(f"[dim]Menu items in database: {total_items}[/dim]")


@app.command()
def search(
    query: str | None = typer.Argument(None, help="Text to match in name/description"),
    lat: float | None = typer.Option(None, "--lat", help="Origin latitude"),
    lon: float | None = typer.Option(None, "--lon", help="Origin longitude"),
    address_id: str | None = typer.Option(None, "--address", help="Saved address ID as origin"),
    radius: float = typer.Option(10.0, "--radius", "-r", help="Max distance in km"),
    min_price: float | None = typer.Option(None, "--min-price"),
    max_price: float | None = typer.Option(None, "--max-price"),
    category_id: str | None = typer.Option(None, "--category"),
    vendor_id: str | None = typer.Option(None, "--vendor"),
    sort_by: SortField | None = typer.Option(None, "--sort-by"),
    sort_order: SortOrder | None = typer.Option(None, "--sort-order"),
    no_distance_priority: bool = typer.Option(
        False, "--no-distance-priority", help="Order by --sort-by instead of distance"
    ),
    page: int = typer.Option(1, "--page", "-p"),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Results per page"),
    db_path: Path | None = typer.Option(None, "--db", help="Database path"),
) -> None:
    """Search menu items, optionally around a location."""
    try:
        criteria = SearchCriteria(
            query=query,
            latitude=lat,
            longitude=lon,
            address_id=address_id,
            max_distance=radius,
            min_price=min_price,
            max_price=max_price,
            category_id=category_id,
            vendor_id=vendor_id,
            sort_by=sort_by,
            sort_order=sort_order,
            prioritize_distance=not no_distance_priority,
            page=page,
            limit=limit or get_settings().search_default_limit,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid search:[/red] {e}")
        raise typer.Exit(2)

    asyncio.run(_search_async(criteria, db_path))


async def _search_async(criteria: SearchCriteria, db_path: Path | None) -> None:
    from chowline.adapters.sqlite import SQLiteMenuRepository
    from chowline.domains.search import ProximitySearchEngine

    repo = SQLiteMenuRepository(db_path or get_settings().db_path)
    try:
        await repo.initialize()
        result = await ProximitySearchEngine(repo).search(criteria)
    except ChowlineError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)
    finally:
        await repo.close()

    _print_results(result)


def _print_results(result: SearchPage) -> None:
    table = Table(title=f"Menu items (page {result.page}/{max(result.pages, 1)}, {result.total} total)")
    table.add_column("Name", style="cyan")
    table.add_column("Vendor")
    table.add_column("Category", style="dim")
    table.add_column("Price", justify="right", style="green")
    if result.with_distance:
        table.add_column("Distance", justify="right", style="yellow")

    for hit in result.items:
        row = [hit.name, hit.vendor_name or "-", hit.category_name or "-", f"{hit.price:,.2f}"]
        if result.with_distance:
            row.append("-" if hit.distance is None else f"{hit.distance:.2f} km")
        table.add_row(*row)

    console.print(table)
    if not result.items:
        console.print("[yellow]No menu items on this page.[/yellow]")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Host to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print("\n[green]Starting Chowline API server[/green]")
    console.print(f"[dim]http://{host}:{port}[/dim]\n")

    uvicorn.run(
        "chowline.interfaces.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    from chowline import __version__

    console.print(f"Chowline v{__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
