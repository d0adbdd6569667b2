"""Finalized route tables.

A route table maps an event's exact runtime type to the bindings that
receive it.  Lookup compares types by identity: a subclass of a routed
type is *not* routed unless it was registered itself.

Two implementations share one contract:

* ``KeyedRouteTable`` — a dict keyed by type.  Scales with many types.
* ``LinearRouteTable`` — a scan over a compact tuple.  Fine for a handful.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from eventrouter.core.binding import HandlerBinding
from eventrouter.errors import RoutingError
from eventrouter.models.routing import LookupStrategy, RouteSummary

Routes = Mapping[type, Sequence[HandlerBinding]]


class RouteTable(ABC):
    """Immutable mapping of event type to ordered handler bindings."""

    @abstractmethod
    def lookup(self, event_type: type) -> tuple[HandlerBinding, ...]:
        """Return the bindings for *event_type* in registration order.

        Raises
        ------
        RoutingError
            If *event_type* has no route.
        """

    @property
    @abstractmethod
    def event_types(self) -> tuple[type, ...]:
        """Routed event types in registration order."""

    def deliver(self, event: Any) -> None:
        """Invoke every binding for ``type(event)``, stopping at the first failure."""
        for binding in self.lookup(type(event)):
            binding.invoke(event)

    def summaries(self) -> tuple[RouteSummary, ...]:
        return tuple(
            RouteSummary(
                event_type=event_type.__name__,
                bindings=tuple(b.summary() for b in self.lookup(event_type)),
            )
            for event_type in self.event_types
        )

    def __len__(self) -> int:
        return len(self.event_types)

    def __contains__(self, event_type: object) -> bool:
        return any(event_type is t for t in self.event_types)


class KeyedRouteTable(RouteTable):
    """Route table backed by a dict."""

    def __init__(self, routes: Routes) -> None:
        self._routes: dict[type, tuple[HandlerBinding, ...]] = {
            event_type: tuple(bindings) for event_type, bindings in routes.items()
        }

    def lookup(self, event_type: type) -> tuple[HandlerBinding, ...]:
        try:
            return self._routes[event_type]
        except KeyError:
            raise RoutingError(event_type) from None

    @property
    def event_types(self) -> tuple[type, ...]:
        return tuple(self._routes)


class LinearRouteTable(RouteTable):
    """Route table backed by parallel tuples scanned in order."""

    def __init__(self, routes: Routes) -> None:
        self._types: tuple[type, ...] = tuple(routes)
        self._bindings: tuple[tuple[HandlerBinding, ...], ...] = tuple(
            tuple(bindings) for bindings in routes.values()
        )

    def lookup(self, event_type: type) -> tuple[HandlerBinding, ...]:
        for index, routed in enumerate(self._types):
            if routed is event_type:
                return self._bindings[index]
        raise RoutingError(event_type)

    @property
    def event_types(self) -> tuple[type, ...]:
        return self._types


_TABLES: dict[LookupStrategy, type[RouteTable]] = {
    LookupStrategy.KEYED: KeyedRouteTable,
    LookupStrategy.LINEAR: LinearRouteTable,
}


def create_table(routes: Routes, lookup: LookupStrategy = LookupStrategy.KEYED) -> RouteTable:
    """Build the route table implementation selected by *lookup*."""
    return _TABLES[lookup](routes)
