"""XDG-compliant path management for clir.

XDG defaults:
- Config: ~/.config/clir/
- Rules file: ~/.config/clir/rules
- Settings: ~/.config/clir/config.toml
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "clir"

RULES_FILENAME = "rules"
CONFIG_FILENAME = "config.toml"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/clir/ (or XDG_CONFIG_HOME/clir/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_rules_path() -> Path:
    """Get the default rules file path.

    Returns:
        Path to ~/.config/clir/rules.
    """
    return get_config_dir() / RULES_FILENAME


def get_config_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/clir/config.toml.
    """
    return get_config_dir() / CONFIG_FILENAME

