"""
Setting Scan Exception Hierarchy

Centralized exception classes for structured error handling across the codebase.
All Setting Scan exceptions inherit from SettingScanError.

Usage:
    from src.exceptions import SettingScanError, TreeAcquisitionError

    try:
        root = source.parse_file(path)
    except TreeAcquisitionError as e:
        logger.warning(f"Skipping {path}: {e}")
"""


class SettingScanError(Exception):
    """Base exception for all Setting Scan errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(SettingScanError):
    """Error in Setting Scan configuration."""

    pass


class MissingConfigError(ConfigurationError):
    """Required configuration value is missing."""

    pass


# =============================================================================
# Tree Acquisition Errors
# =============================================================================


class TreeAcquisitionError(SettingScanError):
    """Base class for failures to produce a syntax tree for a file."""

    pass


class ParseError(TreeAcquisitionError):
    """Source could not be read or parsed locally."""

    pass


class ParsingServiceError(TreeAcquisitionError):
    """The remote parsing service rejected the request or returned garbage."""

    pass


class ServiceConnectionError(ParsingServiceError):
    """Failed to connect to the parsing service."""

    pass


class ServiceTimeoutError(ParsingServiceError):
    """Parsing service request timed out."""

    pass


# =============================================================================
# Query Errors
# =============================================================================


class QuerySyntaxError(SettingScanError):
    """A tree path expression could not be compiled."""

    pass


# =============================================================================
# Output Errors
# =============================================================================


class OutputError(SettingScanError):
    """Writing the extracted records failed."""

    pass
