"""Per-user path management for winsweep.

Configuration lives in a single per-user directory following the XDG
Base Directory layout, which also works on Windows profiles:

- Config: ~/.config/winsweep/ (or $XDG_CONFIG_HOME/winsweep/)
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "winsweep"

WHITELIST_FILENAME = "whitelist.txt"
THEME_FILENAME = "theme.toml"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/winsweep/ (or XDG_CONFIG_HOME/winsweep/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_whitelist_path() -> Path:
    """Get the whitelist file path.

    Returns:
        Path to ~/.config/winsweep/whitelist.txt.
    """
    return get_config_dir() / WHITELIST_FILENAME


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/winsweep/theme.toml.
    """
    return get_config_dir() / THEME_FILENAME


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_config_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create config directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create config directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
