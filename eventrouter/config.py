"""Router configuration — env-driven defaults for ``RouterBuilder.from_settings``.

Reads from a ``.env`` file and ``EVENTROUTER_*`` environment variables.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from eventrouter.models.routing import DispatchOrder, LookupStrategy
from eventrouter.models.severity import Severity


class RouterSettings(BaseSettings):
    """Builder defaults with environment variable overrides.

    Examples
    --------
    Override via environment::

        export EVENTROUTER_DEFAULT_SEVERITY=debug
        export EVENTROUTER_DISPATCH_ORDER=breadth_first
        export EVENTROUTER_LOOKUP_STRATEGY=linear

    Or via .env file::

        EVENTROUTER_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="EVENTROUTER_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Builder defaults
    default_severity: Severity = Severity.INFO
    dispatch_order: DispatchOrder = DispatchOrder.DEPTH_FIRST
    lookup_strategy: LookupStrategy = LookupStrategy.KEYED

    # Logging threshold used by the CLI's configure_logging()
    log_level: str = "INFO"

    @property
    def is_breadth_first(self) -> bool:
        return self.dispatch_order == DispatchOrder.BREADTH_FIRST


# Module-level singleton: import as `from eventrouter.config import settings`
settings = RouterSettings()
