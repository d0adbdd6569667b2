"""Tests for router settings — env-driven builder defaults."""

from __future__ import annotations

from eventrouter.config import RouterSettings
from eventrouter.core.builder import RouterBuilder
from eventrouter.core.router import BreadthFirstRouter, DepthFirstRouter
from eventrouter.models.routing import DispatchOrder, LookupStrategy
from eventrouter.models.severity import Severity


class Tick:
    pass


class TickHandler:
    def on(self, event: Tick) -> None:
        pass


class TestRouterSettings:
    def test_defaults(self):
        settings = RouterSettings()
        assert settings.default_severity == Severity.INFO
        assert settings.dispatch_order == DispatchOrder.DEPTH_FIRST
        assert settings.lookup_strategy == LookupStrategy.KEYED
        assert settings.log_level == "INFO"

    def test_is_breadth_first_false_by_default(self):
        assert RouterSettings().is_breadth_first is False

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("EVENTROUTER_DEFAULT_SEVERITY", "debug")
        monkeypatch.setenv("EVENTROUTER_DISPATCH_ORDER", "breadth_first")
        monkeypatch.setenv("EVENTROUTER_LOOKUP_STRATEGY", "linear")
        settings = RouterSettings()
        assert settings.default_severity == Severity.DEBUG
        assert settings.is_breadth_first is True
        assert settings.lookup_strategy == LookupStrategy.LINEAR


class TestBuilderFromSettings:
    def test_from_explicit_settings(self):
        settings = RouterSettings(
            default_severity=Severity.WARN,
            dispatch_order=DispatchOrder.BREADTH_FIRST,
            lookup_strategy=LookupStrategy.LINEAR,
        )
        builder = RouterBuilder.from_settings(settings)
        assert builder.default_severity == Severity.WARN
        assert builder.lookup == LookupStrategy.LINEAR

        router = builder.route(Tick).to(TickHandler()).build()
        assert isinstance(router, BreadthFirstRouter)
        assert router.routes()[0].bindings[0].severity == Severity.WARN

    def test_from_module_settings(self):
        router = RouterBuilder.from_settings().route(Tick).to(TickHandler()).build()
        assert isinstance(router, (DepthFirstRouter, BreadthFirstRouter))
