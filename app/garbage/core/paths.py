"""XDG-compliant path management for garbage.

This module provides standardized paths following the XDG Base Directory
Specification for user data (where the home trash lives) and
configuration.

XDG defaults:
- Data home: ~/.local/share/ (home trash: ~/.local/share/Trash)
- Config: ~/.config/garbage/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "garbage"

# Name of the home trash directory below the data home
HOME_TRASH_NAME = "Trash"


def _get_xdg_base(env_var: str, default_subdir: str) -> Path:
    """Get an XDG base directory respecting the environment override.

    Relative values are ignored, as required by the XDG specification.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_DATA_HOME").
        default_subdir: Default subdirectory under home (e.g., ".local/share").

    Returns:
        Path to the base directory (not application specific).
    """
    base = os.environ.get(env_var)
    if base and os.path.isabs(base):
        return Path(base)
    return Path.home() / default_subdir


def get_data_home() -> Path:
    """Get the user data home directory.

    Returns:
        Path to ~/.local/share (or XDG_DATA_HOME).
    """
    return _get_xdg_base("XDG_DATA_HOME", ".local/share")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/garbage/ (or XDG_CONFIG_HOME/garbage/).
    """
    return _get_xdg_base("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/garbage/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/garbage/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def ensure_dir(path: Path, name: str) -> Path:
    """Create a directory and its parents unless it already exists.

    Raises:
        RuntimeError: If the directory cannot be created; the message
            names the directory by its role (e.g. "config").
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        reason = "Permission denied" if isinstance(e, PermissionError) else str(e)
        msg = f"Cannot create {name} directory {path}: {reason}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create ~/.config/garbage if needed and return it."""
    return ensure_dir(get_config_dir(), "config")
