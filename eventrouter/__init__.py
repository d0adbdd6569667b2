"""eventrouter: synchronous in-process event routing by exact event type.

Build a router once, then dispatch:

    router = (
        RouterBuilder()
        .route(Start).to(price_handler, trade_handler)
        .route(Tick).to(price_handler).log_as("debug")
        .build()
    )
    router.dispatch(Start())

Depth-first routers (default) deliver nested events immediately;
breadth-first routers (``BreadthFirstBuilder``) queue them and deliver in
level order.
"""

__version__ = "1.0.0"
__description__ = "Synchronous in-process event routing with depth-first or breadth-first ordering"

from eventrouter.core.builder import BreadthFirstBuilder, RouterBuilder
from eventrouter.core.router import BreadthFirstRouter, DepthFirstRouter, EventRouter
from eventrouter.errors import (
    ConfigurationError,
    EventRouterError,
    InvocationError,
    RoutingError,
)
from eventrouter.models import DispatchOrder, LookupStrategy, RouteSummary, Severity
from eventrouter.protocols import Dispatcher, UsesDispatcher

__all__ = [
    "RouterBuilder",
    "BreadthFirstBuilder",
    "EventRouter",
    "DepthFirstRouter",
    "BreadthFirstRouter",
    "Dispatcher",
    "UsesDispatcher",
    "Severity",
    "DispatchOrder",
    "LookupStrategy",
    "RouteSummary",
    "EventRouterError",
    "ConfigurationError",
    "RoutingError",
    "InvocationError",
    "__version__",
]
