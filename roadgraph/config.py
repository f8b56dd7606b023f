"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- ROADGRAPH_SEARCH_DISTANCE_METRIC=great_circle
- ROADGRAPH_SEARCH_CACHE_ENABLED=false
- ROADGRAPH_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchConfig(BaseSettings):
    """Path search configuration.

    Environment variables prefixed with ROADGRAPH_SEARCH_.
    """

    model_config = SettingsConfigDict(env_prefix="ROADGRAPH_SEARCH_")

    distance_metric: Literal["euclidean", "great_circle"] = "euclidean"
    cache_enabled: bool = True
    two_opt_max_passes: int = Field(default=50, ge=0)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with ROADGRAPH_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="ROADGRAPH_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main configuration aggregating all sub-configs.

        config = get_config()
        print(config.search.distance_metric)

    Environment variables prefixed with ROADGRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="ROADGRAPH_")

    search: SearchConfig = Field(default_factory=SearchConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
