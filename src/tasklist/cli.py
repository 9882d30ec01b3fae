"""CLI interface for tasklist.

Requires the 'cli' extra: pip install tasklist[cli]
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

try:
    import typer
    from rich.console import Console
    from rich.logging import RichHandler
    from rich.table import Table
except ImportError:
    print(
        "CLI dependencies not installed. Install with: pip install tasklist[cli]",
        file=sys.stderr,
    )
    sys.exit(1)

from tasklist import __version__
from tasklist.cache.user_tasks import UserTaskCache
from tasklist.config import get_settings
from tasklist.exceptions import StorageError
from tasklist.models.task import TaskCreate
from tasklist.protocols.storage import TaskStore
from tasklist.service.tasks import TaskService
from tasklist.storage import InMemoryTaskStore, JsonFileTaskStore

app = typer.Typer(
    name="tasklist",
    help="Per-user task lists with a read-through cache.",
    add_completion=False,
)
console = Console()

_DEMO_USER_ID = 1


def configure_logging(level: int) -> None:
    """Route library logs through rich.  Only the CLI configures handlers."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", "-v", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    if verbose:
        configure_logging(logging.DEBUG)
    if version:
        console.print(f"tasklist {__version__}")
        raise typer.Exit()


@app.command()
def info() -> None:
    """Show information about the tasklist installation."""
    settings = get_settings()
    table = Table(title="tasklist info")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Version", __version__)
    table.add_row("Python", sys.version.split()[0])
    table.add_row("Cache TTL (s)", f"{settings.cache_ttl_seconds:g}")
    table.add_row("Store", str(settings.store_path) if settings.store_path else "in-memory")

    for dep_name in ["pydantic", "fastapi"]:
        try:
            mod = importlib.import_module(dep_name)
            ver = getattr(mod, "__version__", "installed")
            table.add_row(dep_name, str(ver))
        except ImportError:
            table.add_row(dep_name, "[red]not installed[/red]")

    console.print(table)


@app.command()
def demo(
    store_path: Path | None = typer.Option(  # noqa: B008
        None, "--store", "-s", help="JSON file to use instead of an in-memory store"
    ),
) -> None:
    """Walk through a cache miss, a cache hit, and a cached create for one user."""
    try:
        store: TaskStore = (
            JsonFileTaskStore(store_path) if store_path is not None else InMemoryTaskStore()
        )
    except StorageError as exc:
        console.print(f"[red]Error: {exc}[/red]", soft_wrap=True)
        raise typer.Exit(code=1) from exc

    cache = UserTaskCache()
    service = TaskService(store, cache)
    if not store.list_for_owner(_DEMO_USER_ID):
        store.add(_DEMO_USER_ID, "Buy milk")

    table = Table(title=f"Tasks for user {_DEMO_USER_ID}")
    table.add_column("Step", style="cyan")
    table.add_column("Served from", style="magenta")
    table.add_column("Tasks", style="green")

    def _read(step: str) -> None:
        misses = cache.stats().misses
        tasks = service.list_tasks(_DEMO_USER_ID)
        source = "store" if cache.stats().misses > misses else "cache"
        table.add_row(step, source, ", ".join(t.title for t in tasks) or "-")

    _read("GET /tasks")
    _read("GET /tasks")
    created = service.create_task(_DEMO_USER_ID, TaskCreate(title="Walk dog"))
    table.add_row(f"POST /tasks -> #{created.id}", "store + cache", created.title)
    _read("GET /tasks")

    console.print(table)
    stats = cache.stats()
    console.print(f"[dim]hits={stats.hits} misses={stats.misses} entries={stats.entries}[/dim]")


if __name__ == "__main__":
    app()
