"""Main Typer application — registers the eventrouter CLI commands.

Entry point: ``eventrouter`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import importlib
from typing import Any

import typer
from rich.console import Console

from eventrouter.cli.commands.demo import demo_cmd
from eventrouter.cli.renderer import routes_table
from eventrouter.core.builder import PendingAttachment, RouterBuilder
from eventrouter.core.router import EventRouter
from eventrouter.errors import EventRouterError

app = typer.Typer(
    name="eventrouter",
    help="eventrouter: synchronous in-process event routing.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(name="demo", help="Compare depth-first and breadth-first delivery.")(demo_cmd)


def load_router(target: str) -> EventRouter:
    """Import ``module:attribute`` and turn it into a built router.

    The attribute may be a router, a builder (or pending attachment) that
    has not been built yet, or a zero-argument callable returning either.
    """
    module_name, _, attr_name = target.partition(":")
    if not module_name or not attr_name:
        raise typer.BadParameter(f"Expected MODULE:ATTRIBUTE, got {target!r}")

    module = importlib.import_module(module_name)
    obj: Any = getattr(module, attr_name)
    if callable(obj) and not isinstance(obj, EventRouter):
        obj = obj()
    if isinstance(obj, (RouterBuilder, PendingAttachment)):
        obj = obj.build()
    if not isinstance(obj, EventRouter):
        raise typer.BadParameter(
            f"{target} is a {type(obj).__name__}, not a router or builder"
        )
    return obj


@app.command(name="routes", help="Show the route table of a router.")
def routes_cmd(
    target: str = typer.Argument(
        ..., help="MODULE:ATTRIBUTE naming a router, builder or factory."
    ),
) -> None:
    """Print every route with its handlers in delivery order."""
    console = Console()
    try:
        router = load_router(target)
    except (ImportError, AttributeError) as exc:
        console.print(f"[bold red]Cannot load {target}:[/bold red] {exc}")
        raise typer.Exit(code=1)
    except EventRouterError as exc:
        console.print(f"[bold red]Invalid configuration:[/bold red] {exc}")
        raise typer.Exit(code=1)

    routes = router.routes()
    if not routes:
        console.print("[dim]No routes configured.[/dim]")
        return
    console.print(routes_table(routes, title=f"{type(router).__name__} routes"))


if __name__ == "__main__":
    app()
