"""Scan settings and their TOML persistence.

Settings are stored in ~/.config/azsnaffler/config.toml. Every field is
optional in the file; CLI options override file values.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from azsnaffler.core.paths import get_settings_path

logger = logging.getLogger(__name__)


class ScanSettings(BaseModel):
    """Tunable behaviour of a scan.

    Attributes:
        workers: Containers walked in parallel (1 = sequential).
        max_depth: Deepest directory level descended into on file shares.
        scan_shares: Walk file shares.
        scan_blobs: Walk blob containers.
        list_tables: List table names for each storage account.
        subscriptions: Subscription ids or display names to scan (empty = all).
        interactive_auth: Allow the interactive browser login fallback.
        rules_path: Rule override file (None = default location).
    """

    model_config = ConfigDict(extra="forbid")

    workers: Annotated[int, Field(ge=1, le=64, description="Parallel container walks")] = 4
    max_depth: Annotated[int, Field(ge=1, le=4096, description="Maximum share depth")] = 256
    scan_shares: Annotated[bool, Field(description="Walk file shares")] = True
    scan_blobs: Annotated[bool, Field(description="Walk blob containers")] = True
    list_tables: Annotated[bool, Field(description="List storage tables")] = True
    subscriptions: Annotated[
        list[str],
        Field(default_factory=list, description="Subscription ids or names (empty = all)"),
    ]
    interactive_auth: Annotated[bool, Field(description="Interactive login fallback")] = True
    rules_path: Annotated[Path | None, Field(description="Rule override file")] = None


class ConfigError(Exception):
    """Base exception for settings errors."""


class ConfigParseError(ConfigError):
    """Raised when the settings file is not valid TOML."""


def load_settings(path: Path | None = None) -> ScanSettings:
    """Load scan settings, falling back to defaults if no file exists.

    Args:
        path: Settings file. If None, uses the default settings path.

    Returns:
        Validated ScanSettings.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or violates the schema.
    """
    config_path = path or get_settings_path()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        logger.debug("No settings file at %s, using defaults", config_path)
        return ScanSettings()
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read settings: {e}") from e

    try:
        return ScanSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {config_path}: {e}") from e


def save_settings(settings: ScanSettings, path: Path | None = None) -> Path:
    """Write scan settings atomically.

    Args:
        settings: Settings to write.
        path: Destination. If None, uses the default settings path.

    Returns:
        Path where the settings were saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_settings_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = settings.model_dump(mode="json", exclude_none=True)

    tmp_path: Path | None = None
    try:
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
        raise ConfigError(f"Failed to write settings: {e}") from e

    return config_path
