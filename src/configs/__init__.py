"""
Setting Scan Configuration Module

Re-exports commonly used functions for cleaner imports across the codebase.
"""

# Logging (most commonly used)
from src.configs.logging import get_logger, setup_logging

# Constants
from src.configs.constants import (
    DEFAULT_FILE_EXTENSION,
    DEFAULT_IGNORE_PATTERNS,
    DEFAULT_PROPERTY_ANCHOR_NAME,
    DEFAULT_SETTING_TYPE_NAME,
    MAX_FILE_SIZE,
    RETRY,
    TIMEOUTS,
    get_timeout,
)

# YAML config
from src.configs.yaml_config import (
    DEFAULT_CONFIG_YAML,
    create_default_config,
    get_config_path,
    load_yaml_config,
)

# Runtime
from src.configs.runtime import (
    DEFAULT_CONFIG,
    ExtractorConfig,
    get_full_config,
)

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Constants
    "DEFAULT_FILE_EXTENSION",
    "DEFAULT_IGNORE_PATTERNS",
    "DEFAULT_PROPERTY_ANCHOR_NAME",
    "DEFAULT_SETTING_TYPE_NAME",
    "MAX_FILE_SIZE",
    "RETRY",
    "TIMEOUTS",
    "get_timeout",
    # YAML config
    "DEFAULT_CONFIG_YAML",
    "create_default_config",
    "get_config_path",
    "load_yaml_config",
    # Runtime
    "DEFAULT_CONFIG",
    "ExtractorConfig",
    "get_full_config",
]
