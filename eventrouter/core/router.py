"""Routers — the dispatch entry point returned by ``RouterBuilder.build()``.

Both routers deliver through the same route table and bindings.  They
differ only in how events dispatched *from inside a handler* are ordered:

Depth-first
    ``dispatch()`` delivers immediately.  A nested ``dispatch()`` runs to
    completion, including anything it triggers, before the outer handler
    list continues.

Breadth-first
    ``dispatch()`` appends to a private FIFO queue.  The outermost call
    drains the queue; nested calls only enqueue.  Events triggered during
    one top-level call are therefore delivered in level order.

Neither router is safe to drive from more than one thread at a time.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any

from eventrouter.core.table import RouteTable
from eventrouter.models.routing import DispatchOrder, RouteSummary
from eventrouter.protocols import Dispatcher

logger = logging.getLogger(__name__)


class EventRouter(Dispatcher):
    """Base router.  Construct through ``RouterBuilder``.

    Parameters
    ----------
    table:
        The finalized route table.  Owned exclusively by the router.
    """

    order: DispatchOrder

    def __init__(self, table: RouteTable) -> None:
        self._table = table

    def routes(self) -> tuple[RouteSummary, ...]:
        """Describe the routes this router delivers to, in registration order."""
        return self._table.summaries()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(routes={len(self._table)})"


class DepthFirstRouter(EventRouter):
    """Delivers each event immediately, nesting triggered events."""

    order = DispatchOrder.DEPTH_FIRST

    def dispatch(self, event: Any) -> None:
        self._table.deliver(event)


class BreadthFirstRouter(EventRouter):
    """Queues triggered events and delivers them in level order.

    The queue is idle (empty) between top-level calls.  If a handler fails
    while draining, the events still queued are abandoned and the failure
    propagates to the top-level caller.
    """

    order = DispatchOrder.BREADTH_FIRST

    def __init__(self, table: RouteTable) -> None:
        super().__init__(table)
        self._queue: deque[Any] = deque()

    @property
    def draining(self) -> bool:
        """Whether a top-level ``dispatch()`` is currently draining the queue."""
        return bool(self._queue)

    def dispatch(self, event: Any) -> None:
        initial = not self._queue
        self._queue.append(event)
        if not initial:
            return

        try:
            while self._queue:
                # The head stays queued during delivery so nested calls see a
                # non-empty queue and only enqueue.
                self._table.deliver(self._queue[0])
                self._queue.popleft()
        except BaseException:
            if len(self._queue) > 1:
                logger.debug(
                    "Abandoning %d queued event(s) after a failed dispatch",
                    len(self._queue) - 1,
                )
            self._queue.clear()
            raise


_ROUTERS: dict[DispatchOrder, type[EventRouter]] = {
    DispatchOrder.DEPTH_FIRST: DepthFirstRouter,
    DispatchOrder.BREADTH_FIRST: BreadthFirstRouter,
}


def create_router(table: RouteTable, order: DispatchOrder = DispatchOrder.DEPTH_FIRST) -> EventRouter:
    """Wrap *table* in the router implementing *order*."""
    return _ROUTERS[order](table)
