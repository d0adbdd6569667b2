"""Unit tests for eventrouter models — severity, enums, route summaries."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from eventrouter.errors import ConfigurationError
from eventrouter.models import (
    BindingSummary,
    DispatchOrder,
    LookupStrategy,
    RouteSummary,
    Severity,
)
from eventrouter.models.severity import TRACE


class TestSeverity:

    def test_fixed_order(self):
        assert [s.value for s in Severity] == ["trace", "debug", "info", "warn", "error"]
        assert Severity.TRACE.rank < Severity.INFO.rank < Severity.ERROR.rank

    @pytest.mark.parametrize("value", ["warn", "WARN", " Warn ", Severity.WARN])
    def test_parse_accepts_names_in_any_case(self, value):
        assert Severity.parse(value) is Severity.WARN

    @pytest.mark.parametrize("value", ["warning", "fatal", "", 30, None])
    def test_parse_rejects_unknown(self, value):
        with pytest.raises(ConfigurationError, match="Unknown log level"):
            Severity.parse(value)

    def test_logging_levels(self):
        assert Severity.TRACE.logging_level == TRACE
        assert Severity.WARN.logging_level == logging.WARNING
        assert logging.getLevelName(TRACE) == "TRACE"


class TestRoutingEnums:

    def test_dispatch_order_values(self):
        assert DispatchOrder("depth_first") is DispatchOrder.DEPTH_FIRST
        assert DispatchOrder("breadth_first") is DispatchOrder.BREADTH_FIRST

    def test_lookup_strategy_values(self):
        assert {s.value for s in LookupStrategy} == {"keyed", "linear"}


class TestRouteSummary:

    def test_summary_is_frozen(self):
        summary = RouteSummary(event_type="Tick")
        with pytest.raises(ValidationError):
            summary.event_type = "Tock"  # type: ignore[misc]

    def test_handler_types_in_binding_order(self):
        summary = RouteSummary(
            event_type="Tick",
            bindings=(
                BindingSummary(handler_type="A", operation="on", severity=Severity.INFO),
                BindingSummary(handler_type="B", operation="on", severity="debug"),
            ),
        )
        assert summary.handler_types == ["A", "B"]
        assert summary.bindings[1].severity is Severity.DEBUG
