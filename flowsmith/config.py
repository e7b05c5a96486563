"""Factory configuration — env-driven.

Reads ``FLOWSMITH_*`` environment variables and an optional ``.env`` file
using pydantic-settings.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class FactoryConfig(BaseSettings):
    """Configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export FLOWSMITH_LOG_LEVEL=DEBUG
        export FLOWSMITH_CREATORS='["manager=myapp.workflow:create_manager"]'
        export FLOWSMITH_DISCOVER_ENTRY_POINTS=false
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FLOWSMITH_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # Creators, as ``kind=module:attr`` specs
    creators: list[str] = []

    # Installed-package discovery
    discover_entry_points: bool = True
    entry_point_group: str = "flowsmith.creators"

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"


# Module-level singleton — import as `from flowsmith.config import config`
config = FactoryConfig()
