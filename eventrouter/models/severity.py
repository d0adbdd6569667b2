"""Diagnostic severity for handler bindings."""

from __future__ import annotations

import logging
from enum import Enum

from eventrouter.errors import ConfigurationError

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class Severity(str, Enum):
    """Ordered severity used for the per-dispatch diagnostic record.

    Severity only decides how loudly a dispatch is logged.  It never
    affects which handlers run or in what order.
    """

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def logging_level(self) -> int:
        """Return the matching stdlib ``logging`` level number."""
        return _LOGGING_LEVELS[self]

    @property
    def rank(self) -> int:
        """Position in the fixed order trace < debug < info < warn < error."""
        return _ORDER.index(self)

    @classmethod
    def parse(cls, value: Severity | str) -> Severity:
        """Coerce *value* to a ``Severity``.

        Accepts a ``Severity`` or its name in any case.

        Raises
        ------
        ConfigurationError
            If *value* does not name one of the five severities.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        allowed = ", ".join(s.value for s in cls)
        raise ConfigurationError(
            f"Unknown log level: {value!r} (expected one of {allowed})"
        )


_ORDER: tuple[Severity, ...] = tuple(Severity)

_LOGGING_LEVELS: dict[Severity, int] = {
    Severity.TRACE: TRACE,
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}
