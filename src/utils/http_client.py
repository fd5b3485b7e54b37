"""
Standardized HTTP Client Utilities

Provides a consistent interface for talking to the parsing service.
Uses `requests` for synchronous calls with standardized error handling.

Usage:
    from src.utils.http_client import http_json_post, HTTPError

    payload = http_json_post(
        "http://localhost:9432/parse",
        json={"filename": "Foo.java", "content": source},
        timeout=60,
    )
"""

from typing import Any

import requests

from src.configs.constants import get_timeout
from src.exceptions import ParsingServiceError, ServiceConnectionError, ServiceTimeoutError

# Default timeout for HTTP requests (seconds)
DEFAULT_TIMEOUT = get_timeout("http_default", 10)


class HTTPError(ParsingServiceError):
    """HTTP request failed with a bad status code."""

    def __init__(self, message: str, status_code: int | None = None, response_text: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text


def http_post(
    url: str,
    json: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Response:
    """
    Make a POST request with standardized error handling.

    Args:
        url: Request URL
        json: JSON body (will set Content-Type automatically)
        headers: Optional headers dict
        timeout: Request timeout in seconds

    Returns:
        requests.Response object

    Raises:
        ServiceConnectionError: Connection failed
        ServiceTimeoutError: Request timed out
        HTTPError: Bad status code
    """
    try:
        response = requests.post(url, json=json, headers=headers, timeout=timeout)
        response.raise_for_status()
        return response
    except requests.exceptions.ConnectionError as e:
        raise ServiceConnectionError(f"Connection failed: {url}") from e
    except requests.exceptions.Timeout as e:
        raise ServiceTimeoutError(f"Request timed out: {url}") from e
    except requests.exceptions.HTTPError as e:
        raise HTTPError(
            f"HTTP {e.response.status_code}: {url}",
            status_code=e.response.status_code,
            response_text=e.response.text[:500] if e.response.text else None,
        ) from e


def http_json_post(
    url: str,
    json: dict[str, Any],
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Any]:
    """
    POST request with JSON body that returns parsed JSON.

    Args:
        url: Request URL
        json: JSON body to send
        headers: Optional headers dict
        timeout: Request timeout in seconds

    Returns:
        Parsed JSON as dict

    Raises:
        ServiceConnectionError: Connection failed
        ServiceTimeoutError: Request timed out
        HTTPError: Bad status code or invalid JSON
    """
    response = http_post(url, json=json, headers=headers, timeout=timeout)
    try:
        return response.json()
    except ValueError as e:
        raise HTTPError(f"Invalid JSON response from {url}") from e
