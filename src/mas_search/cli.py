import logging

import typer  # type: ignore
from rich.console import Console  # type: ignore
from rich.table import Table  # type: ignore

from mas_search import urls
from mas_search.base import SearchResult
from mas_search.config import Settings
from mas_search.itunes import ITunesStoreSearch
from mas_search.store_search import SyncStoreSearch

app = typer.Typer(help="Mac App Store catalog search")
url_app = typer.Typer(help="Print catalog request URLs without sending them")
app.add_typer(url_app, name="url")
console = Console()


def _load_settings() -> Settings:
    try:
        settings = Settings.from_env()
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e

    logging.basicConfig(level=settings.log_level)
    return settings


def _results_table(title: str, results: list[SearchResult]) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Version", style="green")
    table.add_column("Price", style="white")

    for res in results:
        table.add_row(
            str(res.track_id),
            res.track_name,
            res.version,
            res.formatted_price or "",
        )
    return table


@app.command("search")
def search(
    app_name: str = typer.Argument(..., help="Name of the app to search for"),
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", help="Seconds to wait for the catalog to answer"
    ),
) -> None:
    """Search the catalog by app name."""
    settings = _load_settings()
    wait_timeout = timeout if timeout is not None else settings.wait_timeout_seconds

    with ITunesStoreSearch(settings=settings) as provider:
        store = SyncStoreSearch(provider, timeout=wait_timeout)
        with console.status(f"Searching for '{app_name}'..."):
            try:
                results = store.search(app_name)
            except Exception as e:
                console.print(f"[red]Search failed:[/red] {e}")
                raise typer.Exit(code=1) from e

    if not results:
        console.print("[yellow]No results found.[/yellow]")
        return

    console.print(_results_table(f"Results for '{app_name}' ({len(results)})", results))


@app.command("lookup")
def lookup(
    app_id: int = typer.Argument(..., help="App Store identifier"),
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", help="Seconds to wait for the catalog to answer"
    ),
) -> None:
    """Look up a single app by its identifier."""
    settings = _load_settings()
    wait_timeout = timeout if timeout is not None else settings.wait_timeout_seconds

    with ITunesStoreSearch(settings=settings) as provider:
        store = SyncStoreSearch(provider, timeout=wait_timeout)
        with console.status(f"Looking up {app_id}..."):
            try:
                result = store.lookup(app_id)
            except Exception as e:
                console.print(f"[red]Search failed:[/red] {e}")
                raise typer.Exit(code=1) from e

    if result is None:
        console.print(f"[yellow]No app found with id {app_id}.[/yellow]")
        raise typer.Exit(code=1)

    console.print(_results_table(f"App {app_id}", [result]))
    if result.track_view_url:
        console.print(result.track_view_url)


@url_app.command("search")
def url_search(
    app_name: str = typer.Argument(..., help="Name of the app to search for"),
) -> None:
    """Print the search URL for an app name."""
    url = urls.search_url(app_name)
    if url is None:
        console.print(f"[red]Error:[/red] Cannot encode '{app_name}'.")
        raise typer.Exit(code=1)
    typer.echo(str(url))


@url_app.command("lookup")
def url_lookup(
    app_id: int = typer.Argument(..., help="App Store identifier"),
) -> None:
    """Print the lookup URL for an app identifier."""
    url = urls.lookup_url(app_id)
    if url is None:
        console.print(f"[red]Error:[/red] Cannot build a lookup URL for {app_id}.")
        raise typer.Exit(code=1)
    typer.echo(str(url))


if __name__ == "__main__":
    app()
