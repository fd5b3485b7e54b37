"""
Setting Scan Runtime Configuration

Runtime defaults and configuration merging logic.
Combines defaults, YAML config, environment variables and CLI overrides.
"""

import os
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

from src.configs.constants import (
    DEFAULT_FILE_EXTENSION,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_PROPERTY_ANCHOR_NAME,
    DEFAULT_SETTING_TYPE_NAME,
)
from src.configs.logging import get_logger
from src.configs.yaml_config import load_yaml_config
from src.exceptions import ConfigurationError, MissingConfigError

logger = get_logger("configs")

# --- Default Runtime Configuration ---

DEFAULT_CONFIG = {
    "service_endpoint": None,
    "root_directory": ".",
    "file_extension": DEFAULT_FILE_EXTENSION,
    "output_path": DEFAULT_OUTPUT_PATH,
    "setting_type_name": DEFAULT_SETTING_TYPE_NAME,
    "property_anchor_name": DEFAULT_PROPERTY_ANCHOR_NAME,
    "fail_fast": False,
    "debug": False,
}

# Environment variable -> config key
ENV_OVERRIDES = {
    "SETTINGSCAN_SERVICE_ENDPOINT": "service_endpoint",
    "SETTINGSCAN_ROOT": "root_directory",
    "SETTINGSCAN_EXTENSION": "file_extension",
    "SETTINGSCAN_OUTPUT": "output_path",
    "SETTINGSCAN_SETTING_TYPE": "setting_type_name",
    "SETTINGSCAN_PROPERTY_ANCHOR": "property_anchor_name",
    "SETTINGSCAN_FAIL_FAST": "fail_fast",
    "SETTINGSCAN_DEBUG": "debug",
}

_BOOL_KEYS = {"fail_fast", "debug"}
_JAVA_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")


@dataclass(frozen=True)
class ExtractorConfig:
    """Resolved configuration for one extraction run."""

    service_endpoint: Optional[str]
    root_directory: str
    file_extension: str
    output_path: str
    setting_type_name: str
    property_anchor_name: str
    fail_fast: bool = False
    debug: bool = False

    @property
    def root_path(self) -> Path:
        return Path(self.root_directory).expanduser()


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no", ""):
            return False
    raise ConfigurationError(f"Invalid boolean for '{key}'", details={"value": value})


def _normalize(config: dict[str, Any]) -> dict[str, Any]:
    """Coerce merged values into the types ExtractorConfig expects."""
    normalized = {}
    for key, value in config.items():
        if key in _BOOL_KEYS:
            normalized[key] = _parse_bool(key, value)
        elif key == "service_endpoint":
            normalized[key] = str(value).rstrip("/") if value else None
        elif value is None:
            raise MissingConfigError(f"Configuration value '{key}' must be set")
        elif not isinstance(value, (str, Path)):
            raise ConfigurationError(
                f"Invalid value for '{key}'", details={"value": value}
            )
        else:
            normalized[key] = str(value)

    extension = normalized["file_extension"]
    if extension and not extension.startswith("."):
        normalized["file_extension"] = f".{extension}"

    for key in ("setting_type_name", "property_anchor_name"):
        if not normalized[key]:
            raise MissingConfigError(f"Configuration value '{key}' must not be empty")
        if not _JAVA_IDENTIFIER.fullmatch(normalized[key]):
            raise ConfigurationError(
                f"Configuration value '{key}' must be a Java identifier",
                details={"value": normalized[key]},
            )

    return normalized


def get_full_config(
    overrides: Optional[dict[str, Any]] = None,
    config_path: Optional[Path] = None,
) -> ExtractorConfig:
    """
    Get full configuration, merged in precedence order.

    Priority (highest first):
    1. overrides (CLI flags), ignoring None values
    2. SETTINGSCAN_* environment variables
    3. settingscan.yaml
    4. DEFAULT_CONFIG

    Args:
        overrides: Explicit values, usually from the command line
        config_path: YAML file to load instead of the default location

    Returns:
        Resolved ExtractorConfig

    Raises:
        ConfigurationError: A value has the wrong type or is missing
    """
    config = DEFAULT_CONFIG.copy()

    yaml_config = load_yaml_config(config_path)
    for key, value in yaml_config.items():
        if key not in DEFAULT_CONFIG:
            logger.warning(f"Ignoring unknown config key: {key}")
            continue
        config[key] = value

    for env_name, key in ENV_OVERRIDES.items():
        env_value = os.environ.get(env_name)
        if env_value is not None:
            config[key] = env_value

    for key, value in (overrides or {}).items():
        if value is not None and key in DEFAULT_CONFIG:
            config[key] = value

    normalized = _normalize(config)
    known = {f.name for f in fields(ExtractorConfig)}
    return ExtractorConfig(**{k: v for k, v in normalized.items() if k in known})
