"""Route configuration — builds an immutable ``EventRouter``.

Example
-------
>>> router = (
...     RouterBuilder()
...     .route(Start).to(price_handler, trade_handler)
...     .route(Stop).to(trade_handler, price_handler)
...     .route(NewTrade).to(trade_handler).log_as("debug")
...     .route(Tick).to(price_handler)
...     .build()
... )  # doctest: +SKIP

Handlers passed to ``to()`` are searched for the one public method whose
parameter is annotated with the event type (or one of its direct
contracts).  ``bind()`` takes the callable explicitly instead.  Either
way the operation is resolved and validated when it is attached, and
every configuration error surfaces before a router exists.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from eventrouter.core.binding import HandlerBinding
from eventrouter.core.resolution import (
    check_event_type,
    resolve_operation,
    validate_binding,
)
from eventrouter.core.router import EventRouter, create_router
from eventrouter.core.table import create_table
from eventrouter.errors import ConfigurationError
from eventrouter.models.routing import DispatchOrder, LookupStrategy
from eventrouter.models.severity import Severity
from eventrouter.protocols import UsesDispatcher

if TYPE_CHECKING:
    from eventrouter.config import RouterSettings

logger = logging.getLogger(__name__)

_E = TypeVar("_E", bound=Enum)

# (handler, bound operation, display name)
_Resolved = tuple[Any, Callable[[Any], Any], str]


def _coerce(enum_cls: type[_E], value: Any, what: str) -> _E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(
            f"Unknown {what}: {value!r} (expected one of {allowed})"
        ) from None


class RouterBuilder:
    """Accumulates routes and finalizes them into a router.

    Parameters
    ----------
    default_severity:
        Severity for handlers attached without ``log_as()``.
    order:
        Depth-first (default) or breadth-first delivery of nested events.
    lookup:
        Route table implementation; does not change observable behaviour.
    """

    def __init__(
        self,
        default_severity: Severity | str = Severity.INFO,
        *,
        order: DispatchOrder | str = DispatchOrder.DEPTH_FIRST,
        lookup: LookupStrategy | str = LookupStrategy.KEYED,
    ) -> None:
        self.default_severity = Severity.parse(default_severity)
        self.order = _coerce(DispatchOrder, order, "dispatch order")
        self.lookup = _coerce(LookupStrategy, lookup, "lookup strategy")
        # Insertion ordered, so routes are summarized in registration order.
        self._routes: dict[type, list[HandlerBinding]] = {}
        self._attached: set[tuple[int, type]] = set()
        self._uses_dispatcher: dict[int, UsesDispatcher] = {}
        self._pending: PendingAttachment | None = None
        self._built = False

    @classmethod
    def from_settings(cls, settings: RouterSettings | None = None) -> RouterBuilder:
        """Create a builder from ``RouterSettings`` (the module singleton by default)."""
        if settings is None:
            from eventrouter.config import settings as default_settings

            settings = default_settings
        return cls(
            settings.default_severity,
            order=settings.dispatch_order,
            lookup=settings.lookup_strategy,
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def route(self, event_type: type) -> RouteEvent:
        """Begin a route for *event_type*.

        Raises
        ------
        ConfigurationError
            If *event_type* is a contract type or already has a route.
        """
        self._check_open()
        self._commit_pending()
        event_type = check_event_type(event_type)
        if event_type in self._routes:
            raise ConfigurationError(
                f"There's already a routing for {event_type.__name__}"
            )
        self._routes[event_type] = []
        return RouteEvent(self, event_type)

    def build(self) -> EventRouter:
        """Finalize the routes and return the router.

        Every handler implementing ``UsesDispatcher`` receives the router
        once before it is returned.

        Raises
        ------
        ConfigurationError
            If a declared route has no handlers, or the builder was
            already built.
        """
        self._check_open()
        self._commit_pending()

        empty = [t.__name__ for t, bindings in self._routes.items() if not bindings]
        if empty:
            raise ConfigurationError(
                f"No handlers attached for event type(s): {', '.join(empty)}"
            )

        table = create_table(self._routes, self.lookup)
        router = create_router(table, self.order)
        self._built = True

        for handler in self._uses_dispatcher.values():
            handler.set_dispatcher(router)

        logger.debug(
            "Built %s: %d route(s), %s lookup, dispatcher injected into %d handler(s)",
            type(router).__name__,
            len(table),
            self.lookup.value,
            len(self._uses_dispatcher),
        )
        return router

    # ------------------------------------------------------------------
    # Internals used by RouteEvent / PendingAttachment
    # ------------------------------------------------------------------

    def _check_open(self) -> None:
        if self._built:
            raise ConfigurationError("This builder has already built its router")

    def _claim(self, handler: Any, event_type: type) -> None:
        key = (id(handler), event_type)
        if key in self._attached:
            raise ConfigurationError(
                f"{type(handler).__name__} is already attached to the route for "
                f"{event_type.__name__}"
            )
        self._attached.add(key)
        if isinstance(handler, UsesDispatcher):
            self._uses_dispatcher.setdefault(id(handler), handler)

    def _resolve(self, event_type: type, handler: Any) -> _Resolved:
        name, operation = resolve_operation(handler, event_type)
        self._claim(handler, event_type)
        return handler, operation, name

    def _resolve_binding(self, event_type: type, operation: Any) -> _Resolved:
        handler, name = validate_binding(operation, event_type)
        self._claim(handler, event_type)
        return handler, operation, name

    def _stage(self, attachment: PendingAttachment) -> PendingAttachment:
        self._check_open()
        self._commit_pending()
        self._pending = attachment
        return attachment

    def _commit_pending(self) -> None:
        if self._pending is not None:
            self._commit(self._pending, self.default_severity)

    def _commit(self, attachment: PendingAttachment, severity: Severity) -> None:
        bindings = self._routes[attachment.event_type]
        for handler, operation, name in attachment.resolved:
            bindings.append(
                HandlerBinding(handler, operation, severity, operation_name=name)
            )
            logger.debug(
                "Route %s -> %s.%s (%s)",
                attachment.event_type.__name__,
                type(handler).__name__,
                name,
                severity.value,
            )
        attachment.committed = True
        if self._pending is attachment:
            self._pending = None


class BreadthFirstBuilder(RouterBuilder):
    """``RouterBuilder`` producing a breadth-first router."""

    def __init__(
        self,
        default_severity: Severity | str = Severity.INFO,
        *,
        lookup: LookupStrategy | str = LookupStrategy.KEYED,
    ) -> None:
        super().__init__(
            default_severity, order=DispatchOrder.BREADTH_FIRST, lookup=lookup
        )


class RouteEvent:
    """A route that has been started and is waiting for handlers."""

    def __init__(self, builder: RouterBuilder, event_type: type) -> None:
        self._builder = builder
        self.event_type = event_type

    def to(self, handler: Any, *handlers: Any) -> PendingAttachment:
        """Attach handler objects, resolving each one's operation now."""
        resolved = [
            self._builder._resolve(self.event_type, h) for h in (handler, *handlers)
        ]
        return self._builder._stage(PendingAttachment(self._builder, self.event_type, resolved))

    def bind(self, operation: Callable[[Any], Any], *operations: Callable[[Any], Any]) -> PendingAttachment:
        """Attach explicit callables taking the event as their only argument.

        A bound method counts as its instance for duplicate detection and
        ``UsesDispatcher`` injection.
        """
        resolved = [
            self._builder._resolve_binding(self.event_type, op)
            for op in (operation, *operations)
        ]
        return self._builder._stage(PendingAttachment(self._builder, self.event_type, resolved))

    def __repr__(self) -> str:
        return f"RouteEvent({self.event_type.__name__})"


class PendingAttachment:
    """Handlers resolved for a route, waiting for their severity.

    Unless ``log_as()`` is called, the builder's default severity is
    applied when configuration moves on (``route()``, ``build()`` or
    another attachment).
    """

    def __init__(
        self,
        builder: RouterBuilder,
        event_type: type,
        resolved: list[_Resolved],
    ) -> None:
        self._builder = builder
        self.event_type = event_type
        self.resolved = resolved
        self.committed = False

    def log_as(self, severity: Severity | str) -> RouterBuilder:
        """Log dispatches to these handlers at *severity* instead of the default."""
        if self.committed:
            raise ConfigurationError(
                f"Severity for the {self.event_type.__name__} handlers has already "
                "been applied"
            )
        self._builder._check_open()
        self._builder._commit(self, Severity.parse(severity))
        return self._builder

    def route(self, event_type: type) -> RouteEvent:
        """Continue with the next route."""
        return self._builder.route(event_type)

    def build(self) -> EventRouter:
        """Finalize the builder."""
        return self._builder.build()
