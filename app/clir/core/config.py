"""Settings file for clir.

Settings are stored in ~/.config/clir/config.toml. The file is optional;
a missing file means every setting keeps its default.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from clir.core.paths import get_config_path

DEFAULT_WORKERS = 8


class ClirConfig(BaseModel):
    """User settings for clir.

    Attributes:
        workers: Number of worker threads used for expansion, size
            computation, resolution and deletion.
        rules_file: Alternative location of the rules file.
        absolute_paths: Display absolute patterns instead of relative ones.
        protected_paths: Extra glob patterns that must never be deleted.
    """

    model_config = ConfigDict(extra="forbid")

    workers: Annotated[
        int,
        Field(ge=1, le=64, description="Worker threads (1-64)"),
    ] = DEFAULT_WORKERS
    rules_file: Annotated[
        Path | None,
        Field(description="Rules file location (None = XDG default)"),
    ] = None
    absolute_paths: Annotated[
        bool,
        Field(description="Display absolute patterns"),
    ] = False
    protected_paths: Annotated[
        list[str],
        Field(default_factory=list, description="Additional protected glob patterns"),
    ]


class ConfigError(Exception):
    """Base exception for settings errors."""


class ConfigParseError(ConfigError):
    """Raised when the settings file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when the settings content is invalid."""


def load_config(path: Path | None = None) -> ClirConfig:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated ClirConfig. Defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
        ConfigError: If the file cannot be read.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return ClirConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return ClirConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def save_config(config: ClirConfig, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The settings to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = _config_to_dict(config)

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
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def require_config(path: Path | None = None) -> ClirConfig:
    """Load settings or exit with a helpful error message.

    Args:
        path: Optional custom settings path.

    Returns:
        Loaded settings.

    Raises:
        typer.Exit: If the settings cannot be loaded.
    """
    import typer

    from clir.utils.formatting import print_error

    try:
        return load_config(path)
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(code=1) from e


def _config_to_dict(config: ClirConfig) -> dict[str, object]:
    """Convert settings to a dictionary for TOML serialization.

    TOML has no null, so unset optional values are left out.
    """
    result: dict[str, object] = {
        "workers": config.workers,
        "absolute_paths": config.absolute_paths,
        "protected_paths": list(config.protected_paths),
    }
    if config.rules_file is not None:
        result["rules_file"] = str(config.rules_file)
    return result
