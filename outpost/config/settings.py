"""Root settings model for Outpost configuration."""

from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from outpost.config.models.api import APIConfig, GraphQLConfig
from outpost.config.models.observability import ObservabilityConfig

# Module-level variable to store TOML config for settings source
_toml_config: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Set the TOML configuration to be used by Settings."""
    global _toml_config
    _toml_config = config


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that reads from TOML configuration."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        """Get field value from TOML config."""
        value = _toml_config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        """Return the TOML config values."""
        return _toml_config.copy()


class Settings(BaseSettings):
    """Root configuration object containing all nested configuration sections.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{OUTPOST_ENV}.toml (environment overrides)
    4. .env file in the working directory
    5. OUTPOST_* environment variables (runtime overrides)
    """

    model_config = SettingsConfigDict(
        env_prefix="OUTPOST_",
        env_nested_delimiter="__",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="outpost", description="Application name for logging/tracing")
    debug: bool = Field(default=False, description="Enable debug mode")

    api: APIConfig = Field(default_factory=APIConfig, description="API server configuration")
    graphql: GraphQLConfig = Field(
        default_factory=GraphQLConfig,
        description="GraphQL endpoint configuration",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include TOML config.

        Priority order (highest to lowest):
        1. init_settings (constructor arguments)
        2. env_settings (OUTPOST_* environment variables)
        3. dotenv_settings (.env file)
        4. toml_settings (config/*.toml files)
        5. (defaults from model)
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
        )
