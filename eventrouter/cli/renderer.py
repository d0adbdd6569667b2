"""Rich terminal rendering for route tables and dispatch traces.

Severity colours
----------------
- dim        : trace
- cyan       : debug
- green      : info
- yellow     : warn
- bold red   : error
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from rich.table import Table

from eventrouter.models.routing import RouteSummary
from eventrouter.models.severity import Severity

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.TRACE: "dim",
    Severity.DEBUG: "cyan",
    Severity.INFO: "green",
    Severity.WARN: "yellow",
    Severity.ERROR: "bold red",
}


def severity_markup(severity: Severity) -> str:
    style = _SEVERITY_STYLES[severity]
    return f"[{style}]{severity.value}[/{style}]"


def routes_table(routes: Iterable[RouteSummary], *, title: str = "Routes") -> Table:
    """Render route summaries, one row per binding in delivery order."""
    table = Table(title=title)
    table.add_column("Event type", style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Handler")
    table.add_column("Operation", style="magenta")
    table.add_column("Severity", justify="center")

    for route in routes:
        for position, binding in enumerate(route.bindings, start=1):
            table.add_row(
                route.event_type if position == 1 else "",
                str(position),
                binding.handler_type,
                binding.operation,
                severity_markup(binding.severity),
            )
    return table


def trace_table(calls: Sequence[tuple[str, str]], *, title: str = "Delivery order") -> Table:
    """Render observed ``(handler, event)`` calls in the order they happened."""
    table = Table(title=title)
    table.add_column("Step", justify="right")
    table.add_column("Handler", style="bold")
    table.add_column("Event", style="cyan")
    for step, (handler, event) in enumerate(calls, start=1):
        table.add_row(str(step), handler, event)
    return table
