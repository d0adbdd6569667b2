"""Dispatch interfaces.

``Dispatcher`` is the single operation a built router exposes.
``UsesDispatcher`` is the opt-in capability for handlers that need the
router they are registered in, typically to dispatch follow-up events.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Dispatcher(ABC):
    """Dispatch an event for processing by one or more handlers."""

    @abstractmethod
    def dispatch(self, event: Any) -> None:
        """Dispatch *event* to every handler routed for its exact type.

        The event must be effectively immutable once dispatched.  Handlers
        are free to keep a reference to it, so events cannot be pooled or
        reused by the caller.
        """


class UsesDispatcher(ABC):
    """Handlers implementing this get the finished router during ``build()``.

    ``set_dispatcher`` is called exactly once per handler object, after the
    route table is finalized and before ``build()`` returns, no matter how
    many routes the handler is attached to.
    """

    @abstractmethod
    def set_dispatcher(self, dispatcher: Dispatcher) -> None:
        """Receive the router this handler is registered in."""
