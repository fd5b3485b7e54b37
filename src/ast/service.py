"""
Parsing Service Client

Obtains syntax trees from a remote parsing service instead of parsing locally.

Request (POST <endpoint>/parse):
    {"filename": "Foo.java", "language": "java", "content": "<source>"}

Response:
    {"status": "ok", "uast": <node>}
    {"status": "error", "errors": ["..."]}

where <node> is the JSON shape of src.ast.models.Node.
"""

from pathlib import Path

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.ast.models import Node
from src.ast.parser import TreeSource
from src.configs import RETRY, get_logger, get_timeout
from src.exceptions import (
    ParseError,
    ParsingServiceError,
    ServiceConnectionError,
    ServiceTimeoutError,
)
from src.utils.http_client import http_json_post

logger = get_logger("ast.service")

PARSE_TIMEOUT = get_timeout("http_parse_request", 60)


class ParsingServiceClient(TreeSource):
    """Fetches one tree per file from the parsing service."""

    def __init__(self, endpoint: str, language: str = "java", timeout: float = PARSE_TIMEOUT):
        self.endpoint = endpoint.rstrip("/")
        self.language = language
        self.timeout = timeout

    @property
    def parse_url(self) -> str:
        return f"{self.endpoint}/parse"

    def parse_file(self, file_path: Path) -> Node:
        """
        Send a file to the parsing service and decode the returned tree.

        Connection failures and timeouts are retried with exponential
        backoff; error responses are not.

        Raises:
            ParseError: File could not be read
            ParsingServiceError: Service unreachable, or returned an error/bad tree
        """
        try:
            content = Path(file_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Failed to read file {file_path}: {e}", details={"file": str(file_path)}) from e

        payload = self._request(
            {"filename": Path(file_path).name, "language": self.language, "content": content}
        )
        return self._decode(payload, str(file_path))

    @retry(
        retry=retry_if_exception_type((ServiceConnectionError, ServiceTimeoutError)),
        wait=wait_exponential(multiplier=1, min=RETRY["backoff_min"], max=RETRY["backoff_max"]),
        stop=stop_after_attempt(RETRY["attempts"]),
        reraise=True,
    )
    def _request(self, body: dict) -> dict:
        logger.debug(f"POST {self.parse_url} ({body['filename']})")
        return http_json_post(self.parse_url, json=body, timeout=self.timeout)

    @staticmethod
    def _decode(payload: dict, file_path: str) -> Node:
        if not isinstance(payload, dict):
            raise ParsingServiceError(f"Unexpected response for {file_path}")

        status = payload.get("status", "ok")
        if status != "ok":
            errors = payload.get("errors") or []
            raise ParsingServiceError(
                f"Parsing service failed for {file_path}",
                details={"status": status, "errors": errors[:5]},
            )

        uast = payload.get("uast")
        if not isinstance(uast, dict):
            raise ParsingServiceError(f"Response for {file_path} has no tree")

        try:
            return Node.from_dict(uast)
        except (KeyError, TypeError, ValueError) as e:
            raise ParsingServiceError(f"Malformed tree for {file_path}: {e}") from e
        except RecursionError as e:
            raise ParsingServiceError(f"Tree too deep for {file_path}") from e
