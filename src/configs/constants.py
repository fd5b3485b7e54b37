"""
Setting Scan Constants

Static configuration values that rarely change: default identifiers,
ignored directories, file size limits, and timeout/retry configuration.
"""

# --- Extraction Defaults ---

DEFAULT_SETTING_TYPE_NAME = "Setting"
DEFAULT_PROPERTY_ANCHOR_NAME = "Property"
DEFAULT_FILE_EXTENSION = ".java"
DEFAULT_OUTPUT_PATH = "settings.json"

# --- Ignored Directories ---
# Directory names never descended into during the walk

DEFAULT_IGNORE_PATTERNS = {
    # Version control
    ".git",
    ".svn",
    ".hg",
    # Build outputs
    "build",
    "out",
    "target",
    ".gradle",
    # IDE
    ".idea",
    ".vscode",
}

# --- File Size Limits ---

MAX_FILE_SIZE = 5_000_000  # 5MB, generated Java sources can be large

# --- Timeout Configuration ---
# Centralized timeout values (in seconds)

TIMEOUTS = {
    # HTTP requests
    "http_default": 10,  # Default HTTP request timeout
    "http_parse_request": 60,  # Parsing service, large files are slow
}

# --- Retry Configuration ---
# Bounded retry at the parsing-service boundary only

RETRY = {
    "attempts": 3,
    "backoff_min": 1,
    "backoff_max": 30,
}


def get_timeout(key: str, default: int | float | None = None) -> int | float:
    """
    Get a timeout value by key.

    Args:
        key: Timeout key from TIMEOUTS dict
        default: Default value if key not found

    Returns:
        Timeout value in seconds
    """
    if default is None:
        default = TIMEOUTS.get("http_default", 10)
    return TIMEOUTS.get(key, default)
