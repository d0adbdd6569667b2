"""Shared test fixtures for eventrouter."""

from __future__ import annotations

import logging

import pytest

from eventrouter.models.routing import LookupStrategy


@pytest.fixture
def journal() -> list[tuple[str, object]]:
    """Provide an empty call journal shared by the handlers of one test."""
    return []


@pytest.fixture(params=list(LookupStrategy), ids=lambda s: s.value)
def lookup(request: pytest.FixtureRequest) -> LookupStrategy:
    """Run the test once per route table implementation."""
    return request.param


@pytest.fixture
def dispatch_records(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture every dispatch diagnostic, including TRACE."""
    caplog.set_level(1, logger="eventrouter.dispatch")
    return caplog


@pytest.fixture(autouse=True)
def _reset_eventrouter_logger():
    """Undo handlers installed by ``configure_logging`` during a test."""
    logger = logging.getLogger("eventrouter")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
