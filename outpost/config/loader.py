"""Locate and merge the TOML configuration files.

Both files are optional: ``default.toml`` holds the base values and
``{OUTPOST_ENV}.toml`` overrides them key by key. Anything left unset falls
back to the model defaults in ``outpost.config.models``.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_ENV = "OUTPOST_CONFIG_DIR"
ENVIRONMENT_ENV = "OUTPOST_ENV"
DEFAULT_ENVIRONMENT = "development"


def get_config_dir() -> Path:
    """Directory holding the TOML files.

    ``OUTPOST_CONFIG_DIR`` wins and must exist. Otherwise the nearest
    ``config/`` directory at or above the working directory is used, or
    ``./config`` when there is none.
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        path = Path(override)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {override}")
        return path

    cwd = Path.cwd()
    for directory in (cwd, *cwd.parents):
        if (directory / "config").is_dir():
            return directory / "config"
    return cwd / "config"


def get_environment() -> str:
    return os.environ.get(ENVIRONMENT_ENV, DEFAULT_ENVIRONMENT)


def read_toml(path: Path) -> dict[str, Any]:
    """Parse an optional TOML file; a missing file reads as empty.

    Raises:
        tomllib.TOMLDecodeError: If the file exists but is malformed
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` applied; nested tables merge recursively."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config(
    config_dir: Path | None = None,
    environment: str | None = None,
) -> dict[str, Any]:
    """Merge ``default.toml`` with the environment's file.

    Args:
        config_dir: Directory to read (located with get_config_dir if omitted)
        environment: Environment name (OUTPOST_ENV if omitted)
    """
    config_dir = config_dir or get_config_dir()
    environment = environment or get_environment()

    return deep_merge(
        read_toml(config_dir / "default.toml"),
        read_toml(config_dir / f"{environment}.toml"),
    )
