"""User configuration for garbage.

Configuration is stored in ~/.config/garbage/config.toml::

    trash_dir = "/data/.Trash-1000"   # default trash for list/restore/empty
    confirm_copy = true               # ask before copying across filesystems
    empty_older_than_days = 30        # default cutoff for `garbage empty`

A missing file means all defaults.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from garbage.core.paths import get_config_path


class GarbageConfig(BaseModel):
    """Configuration for the garbage CLI.

    Attributes:
        trash_dir: Trash directory used by list/restore/empty when none is
            given on the command line. None means the home trash.
        confirm_copy: Ask before trashing requires a recursive copy.
        empty_older_than_days: Default age cutoff for emptying the trash.
    """

    model_config = ConfigDict(extra="forbid")

    trash_dir: Annotated[
        Path | None,
        Field(description="Default trash directory (None = home trash)"),
    ] = None
    confirm_copy: Annotated[
        bool,
        Field(description="Ask before copying across filesystems"),
    ] = True
    empty_older_than_days: Annotated[
        int | None,
        Field(ge=0, description="Default cutoff in days for empty"),
    ] = None


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> GarbageConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated GarbageConfig; defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return GarbageConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return GarbageConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: GarbageConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written to a temporary file in the same directory and
    moved into place with os.replace().

    Args:
        config: The configuration to save.
        path: Destination. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(tmp_path, config_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e

    return config_path


def config_to_dict(config: GarbageConfig) -> dict[str, object]:
    """Convert a GarbageConfig to a TOML-serializable dictionary.

    TOML has no null, so unset optional values are left out.
    """
    result: dict[str, object] = {"confirm_copy": config.confirm_copy}
    if config.trash_dir is not None:
        result["trash_dir"] = str(config.trash_dir)
    if config.empty_older_than_days is not None:
        result["empty_older_than_days"] = config.empty_older_than_days
    return result
