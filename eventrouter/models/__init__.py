"""eventrouter data models — enums and frozen Pydantic summaries."""

from eventrouter.models.routing import (
    BindingSummary,
    DispatchOrder,
    LookupStrategy,
    RouteSummary,
)
from eventrouter.models.severity import Severity

__all__ = [
    # severity
    "Severity",
    # routing
    "DispatchOrder",
    "LookupStrategy",
    "BindingSummary",
    "RouteSummary",
]
