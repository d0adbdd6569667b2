"""Routing models — dispatch order, lookup strategy, route summaries."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from eventrouter.models.severity import Severity


class DispatchOrder(str, Enum):
    """How events triggered from inside a handler are ordered."""

    DEPTH_FIRST = "depth_first"  # nested dispatch completes immediately
    BREADTH_FIRST = "breadth_first"  # nested dispatch is queued, level order


class LookupStrategy(str, Enum):
    """How the finalized route table finds the bindings for an event type."""

    KEYED = "keyed"  # dict keyed by type
    LINEAR = "linear"  # scan over a compact tuple of types


class BindingSummary(BaseModel):
    """Read-only description of a single handler binding."""

    model_config = ConfigDict(frozen=True)

    handler_type: str
    operation: str
    severity: Severity


class RouteSummary(BaseModel):
    """Read-only description of one finalized route.

    Produced by ``EventRouter.routes()`` for display and inspection.
    Bindings are listed in delivery order.
    """

    model_config = ConfigDict(frozen=True)

    event_type: str
    bindings: tuple[BindingSummary, ...] = ()

    @property
    def handler_types(self) -> list[str]:
        return [b.handler_type for b in self.bindings]
