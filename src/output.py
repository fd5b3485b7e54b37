"""
Record Output

Serializes extracted settings as a JSON array. Field names and order are
fixed, and the same records always produce the same bytes.
"""

import json
from pathlib import Path
from typing import Iterable

from src.configs import get_logger
from src.exceptions import OutputError
from src.extract.models import SettingRecord

logger = get_logger("output")


def render_records(records: Iterable[SettingRecord]) -> str:
    """Render records as indented JSON with a trailing newline."""
    payload = [record.to_dict() for record in records]
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def write_records(records: Iterable[SettingRecord], output_path: str | Path) -> Path:
    """
    Write records to a JSON file, creating parent directories.

    Args:
        records: Records in output order
        output_path: Destination file

    Returns:
        Path written

    Raises:
        OutputError: The file could not be written
    """
    path = Path(output_path)
    content = render_records(records)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Failed to write {path}", details={"error": str(e)}) from e

    logger.info(f"Wrote {path}")
    return path
