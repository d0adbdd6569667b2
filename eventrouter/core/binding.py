"""Handler bindings — the unit of delivery.

A binding pairs a handler object with the operation resolved for one event
type and the severity its dispatches are logged at.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from eventrouter.errors import InvocationError, RoutingError
from eventrouter.models.routing import BindingSummary
from eventrouter.models.severity import Severity

dispatch_logger = logging.getLogger("eventrouter.dispatch")
diagnostics_logger = logging.getLogger("eventrouter.diagnostics")


class HandlerBinding:
    """A resolved ``(handler, operation, severity)`` triple.

    Parameters
    ----------
    handler:
        The handler object.  Used for identity and diagnostics only.
    operation:
        Callable taking the event as its sole argument.
    severity:
        Level of the diagnostic record written before each call.
    operation_name:
        Display name of *operation*; defaults to its ``__name__``.
    """

    def __init__(
        self,
        handler: Any,
        operation: Callable[[Any], Any],
        severity: Severity,
        *,
        operation_name: str | None = None,
    ) -> None:
        self.handler = handler
        self.operation = operation
        self.severity = severity
        self.handler_name = type(handler).__name__
        self.operation_name = operation_name or getattr(operation, "__name__", repr(operation))
        self._level = severity.logging_level

    def invoke(self, event: Any) -> None:
        """Log the dispatch, then call the operation with *event*.

        Raises
        ------
        InvocationError
            If the operation raises.  The two errors ``dispatch()`` itself
            raises, ``RoutingError`` and ``InvocationError``, propagate
            unchanged so a nested failure keeps naming the innermost event
            and handler.  Any other exception, including a
            ``ConfigurationError`` raised by the handler's own code, is
            wrapped.
        """
        self._emit(event)
        try:
            self.operation(event)
        except (RoutingError, InvocationError):
            raise
        except Exception as exc:
            raise InvocationError(event, self.handler, exc) from exc

    def _emit(self, event: Any) -> None:
        # A broken diagnostic must never stop or mask delivery.
        try:
            if dispatch_logger.isEnabledFor(self._level):
                dispatch_logger.log(self._level, "Dispatching to %s: %s", self.handler_name, event)
        except Exception:
            diagnostics_logger.debug(
                "Dropped dispatch record for %s", self.handler_name, exc_info=True
            )

    def summary(self) -> BindingSummary:
        return BindingSummary(
            handler_type=self.handler_name,
            operation=self.operation_name,
            severity=self.severity,
        )

    def __repr__(self) -> str:
        return (
            f"HandlerBinding(handler={self.handler_name}, "
            f"operation={self.operation_name!r}, severity={self.severity.value!r})"
        )
