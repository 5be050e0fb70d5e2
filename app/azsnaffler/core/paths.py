"""XDG-compliant path management for azsnaffler.

All user-editable files live under a single configuration directory:

- Settings: ~/.config/azsnaffler/config.toml
- Rule overrides: ~/.config/azsnaffler/rules.toml
- Theme overrides: ~/.config/azsnaffler/theme.toml
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "azsnaffler"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/azsnaffler/ (or XDG_CONFIG_HOME/azsnaffler/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_settings_path() -> Path:
    """Get the default scan settings file path."""
    return get_config_dir() / "config.toml"


def get_rules_path() -> Path:
    """Get the default rule override file path."""
    return get_config_dir() / "rules.toml"


def get_theme_path() -> Path:
    """Get the user theme override file path."""
    return get_config_dir() / "theme.toml"
