"""User configuration loaded from a YAML file."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError
from .units import DataUnit

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SYSPROBE_CONFIG"
LOG_LEVELS = ("debug", "info", "warn", "warning", "error")


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform)."""
    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "sysprobe"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "sysprobe"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "sysprobe"
    return Path.home() / ".config" / "sysprobe"


class Settings(BaseModel):
    """Defaults for command-line options."""

    delimiter: str = Field(default="\n", description="Separator between outputs")
    unit: DataUnit = Field(
        default=DataUnit.BYTES, description="Display unit for byte-valued fields"
    )
    log_level: str = Field(default="warn", description="Logging level")

    @field_validator("unit", mode="before")
    @classmethod
    def normalize_unit(cls, v):
        """Accept units in any case (e.g. "GiB")."""
        if isinstance(v, str):
            return v.lower()
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of debug, info, warn, error."""
        v = v.lower()
        if v not in LOG_LEVELS:
            raise ValueError(f"Must be debug, info, warn, or error, got {v}")
        return v

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "Settings":
        """
        Deserialize settings from a YAML string.

        An empty document yields the defaults.
        """
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("top level must be a mapping")
        return cls(**data)


def default_config_path() -> Path:
    """Config path from SYSPROBE_CONFIG, else the per-user default."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return get_user_config_dir() / "config.yaml"


def load_settings(path: Optional[Path] = None) -> Settings:
    """
    Load settings from a YAML config file.

    Args:
        path: Explicit config path. When omitted, the default location is
            used and a missing file yields default settings.

    Returns:
        Settings instance

    Raises:
        ConfigError: If an explicit file is missing, or the file is not
            valid YAML or holds invalid values
    """
    explicit = path is not None or bool(os.environ.get(CONFIG_ENV_VAR))
    config_path = Path(path).expanduser() if path is not None else default_config_path()

    if not config_path.exists():
        if explicit:
            raise ConfigError(config_path, "file does not exist")
        return Settings()

    logger.debug("Loading config from %s", config_path)
    try:
        return Settings.from_yaml(config_path.read_text())
    except OSError as e:
        raise ConfigError(config_path, str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigError(config_path, f"malformed YAML: {e}") from e
    except (ValidationError, ValueError, TypeError) as e:
        raise ConfigError(config_path, str(e)) from e
