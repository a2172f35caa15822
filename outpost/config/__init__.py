"""Configuration loading for Outpost.

Configuration is loaded from TOML files, a `.env` file and environment
variable overrides.

Usage:
    from outpost.config import get_settings

    settings = get_settings()
    port = settings.api.port
"""

from functools import lru_cache

from outpost.config.loader import load_config
from outpost.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the singleton settings instance.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{OUTPOST_ENV}.toml (environment overrides)
    4. .env file
    5. OUTPOST_* environment variables (runtime overrides)

    The result is cached for the lifetime of the process.
    Call `get_settings.cache_clear()` to reload configuration.
    """
    set_toml_config(load_config())
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
