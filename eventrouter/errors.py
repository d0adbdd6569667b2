"""Exception hierarchy for event routing.

Three failure classes exist, each fatal to the operation that raised it:

* ``ConfigurationError`` — raised while building a router.
* ``RoutingError`` — raised by ``dispatch()`` for an event type with no route.
* ``InvocationError`` — raised by ``dispatch()`` when a handler fails.

None of them are retried or recovered internally.
"""

from __future__ import annotations

from typing import Any


class EventRouterError(RuntimeError):
    """Base class for all event routing failures."""


class ConfigurationError(EventRouterError):
    """Raised when a route configuration is invalid."""


class RoutingError(EventRouterError):
    """Raised when an event's exact runtime type has no registered route."""

    def __init__(self, event_type: type) -> None:
        self.event_type = event_type
        super().__init__(f"No routing for event type: {event_type.__name__}")


class InvocationError(EventRouterError):
    """Raised when a handler fails while an event is being delivered to it.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, event: Any, handler: Any, cause: BaseException) -> None:
        self.event = event
        self.handler = handler
        self.cause = cause
        super().__init__(
            f"Exception occurred while dispatching {event!r} "
            f"({type(event).__name__}) to {type(handler).__name__}: {cause}"
        )
