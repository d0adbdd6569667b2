"""``eventrouter demo`` — show how nested dispatch is ordered.

Builds the three-route cascade below and dispatches one ``Event1``:

    Event1 -> [Forwarder1, Handler1]    Forwarder1 dispatches a new Event2
    Event2 -> [Forwarder2, Handler2]    Forwarder2 dispatches a new Event3
    Event3 -> [Handler4]

Depth-first the observed order is Handler4, Handler2, Handler1; breadth-first
it is Handler1, Handler2, Handler4.
"""

from __future__ import annotations

from abc import ABC

import typer
from pydantic import BaseModel, ConfigDict
from rich.console import Console
from rich.panel import Panel

from eventrouter.cli.renderer import routes_table, trace_table
from eventrouter.config import settings
from eventrouter.core.builder import RouterBuilder
from eventrouter.core.router import EventRouter
from eventrouter.errors import ConfigurationError
from eventrouter.log import configure_logging
from eventrouter.models.routing import DispatchOrder, LookupStrategy
from eventrouter.protocols import Dispatcher, UsesDispatcher

console = Console()

Journal = list[tuple[str, str]]


# ---------------------------------------------------------------------------
# Cascade events
# ---------------------------------------------------------------------------


class Notice(ABC):
    """Contract implemented directly by ``Event2``."""


class Event1(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str = "event-1"


class Event2(Notice, BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str = "event-2"


class Event3(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str = "event-3"


# ---------------------------------------------------------------------------
# Cascade handlers
# ---------------------------------------------------------------------------


class _Recorder:
    def __init__(self, journal: Journal) -> None:
        self._journal = journal

    def _record(self, event: BaseModel) -> None:
        self._journal.append((type(self).__name__, type(event).__name__))


class Handler1(_Recorder):
    def on(self, event: Event1) -> None:
        self._record(event)


class Handler2(_Recorder):
    def on(self, event: Notice) -> None:
        self._record(event)


class Handler4(_Recorder):
    def on_first(self, event: Event1) -> None:
        self._record(event)

    def on_third(self, event: Event3) -> None:
        self._record(event)


class Forwarder1(UsesDispatcher):
    """On ``Event1``, dispatches a new ``Event2``."""

    def __init__(self) -> None:
        self.dispatcher: Dispatcher | None = None

    def set_dispatcher(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    def on(self, event: Event1) -> None:
        self.dispatcher.dispatch(Event2())


class Forwarder2(UsesDispatcher):
    """On ``Event2``, dispatches a new ``Event3``."""

    def __init__(self) -> None:
        self.dispatcher: Dispatcher | None = None

    def set_dispatcher(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    def on(self, event: Event2) -> None:
        self.dispatcher.dispatch(Event3())


def build_cascade(
    journal: Journal,
    order: DispatchOrder = DispatchOrder.DEPTH_FIRST,
    lookup: LookupStrategy = LookupStrategy.KEYED,
) -> EventRouter:
    """Build the demo cascade, recording deliveries into *journal*."""
    return (
        RouterBuilder(order=order, lookup=lookup)
        .route(Event1).to(Forwarder1(), Handler1(journal))
        .route(Event2).to(Forwarder2(), Handler2(journal)).log_as("debug")
        .route(Event3).to(Handler4(journal))
        .build()
    )


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------


def demo_cmd(
    order: str = typer.Option(
        settings.dispatch_order.value,
        "--order",
        "-o",
        help="Dispatch order: depth_first or breadth_first.",
    ),
    lookup: str = typer.Option(
        settings.lookup_strategy.value,
        "--lookup",
        help="Route table lookup: keyed or linear.",
    ),
    log_level: str = typer.Option(
        settings.log_level,
        "--log-level",
        help="Threshold for dispatch diagnostics (TRACE, DEBUG, INFO, ...).",
    ),
) -> None:
    """Dispatch one Event1 through the cascade and show the delivery order."""
    configure_logging(log_level, console=console)

    journal: Journal = []
    try:
        router = build_cascade(
            journal,
            DispatchOrder(order.replace("-", "_")),
            LookupStrategy(lookup),
        )
    except (ValueError, ConfigurationError) as exc:
        console.print(f"[bold red]Invalid configuration:[/bold red] {exc}")
        raise typer.Exit(code=1)

    console.print(
        Panel(
            f"[bold]{type(router).__name__}[/bold] ({lookup} lookup)\n\n"
            "Dispatching a single Event1.",
            border_style="cyan",
            padding=(1, 2),
        )
    )
    console.print(routes_table(router.routes()))

    router.dispatch(Event1())

    console.print(trace_table(journal))
