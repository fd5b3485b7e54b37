"""
Setting Scan YAML Configuration

Loading, saving, and defaults for settingscan.yaml.
"""

import os
from pathlib import Path
from typing import Optional

import yaml

from src.exceptions import ConfigurationError

CONFIG_FILENAME = "settingscan.yaml"

# --- Default Config Template ---

DEFAULT_CONFIG_YAML = """\
# Setting Scan Configuration
# Edit this file to customize extraction.

# Directory whose Java sources are scanned. Output paths are relative to it.
root_directory: "."

# Only files with this extension are parsed
file_extension: ".java"

# Where the JSON record list is written
output_path: "settings.json"

# Parsing service base URL. Leave empty to parse locally with tree-sitter.
service_endpoint:

# Base identifier of the generic setting type (Setting<T>)
setting_type_name: "Setting"

# Identifier that qualifies property flags (Setting.Property.Dynamic)
property_anchor_name: "Property"

# Abort the run on the first file that cannot be parsed
fail_fast: false

# Enable debug logging
debug: false
"""


def get_config_path() -> Path:
    """Get the path to settingscan.yaml (SETTINGSCAN_CONFIG overrides)."""
    env_path = os.environ.get("SETTINGSCAN_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path.cwd() / CONFIG_FILENAME


def load_yaml_config(config_path: Optional[Path] = None) -> dict:
    """
    Load configuration from settingscan.yaml.

    Args:
        config_path: Explicit file to read. Defaults to get_config_path().

    Returns:
        Configuration dictionary (empty if file doesn't exist)

    Raises:
        ConfigurationError: File exists but is not a YAML mapping
    """
    if config_path is None:
        config_path = get_config_path()
    if not config_path.exists():
        return {}

    try:
        content = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Failed to read config file: {config_path}",
            details={"error": str(e)},
        ) from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(
            f"Config file must contain a mapping: {config_path}",
            details={"type": type(content).__name__},
        )
    return content


def create_default_config(config_path: Optional[Path] = None) -> bool:
    """
    Create default settingscan.yaml if it doesn't exist.

    Returns:
        True if file was created, False if it already exists
    """
    if config_path is None:
        config_path = get_config_path()
    if config_path.exists():
        return False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(DEFAULT_CONFIG_YAML, encoding="utf-8")
    return True
