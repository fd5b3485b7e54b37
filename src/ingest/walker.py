"""
Codebase Walker

File system traversal selecting the source files to extract from.
"""

import fnmatch
import os
from pathlib import Path
from typing import Generator, Optional

from src.configs import DEFAULT_FILE_EXTENSION, DEFAULT_IGNORE_PATTERNS, MAX_FILE_SIZE, get_logger

logger = get_logger("ingest.walker")


def walk_codebase(
    root_path: str,
    extension: Optional[str] = DEFAULT_FILE_EXTENSION,
    ignore_patterns: Optional[set[str]] = None,
) -> Generator[Path, None, None]:
    """
    Walk a codebase depth-first yielding files to process.

    Directory entries are visited in sorted order so repeated runs see files
    in the same sequence.

    Args:
        root_path: Root directory to walk
        extension: Only yield files with this suffix (e.g. '.java'); None for all
        ignore_patterns: Additional directory/file patterns to skip (merged with defaults)

    Yields:
        Path objects for each file to process
    """
    ignore = set(DEFAULT_IGNORE_PATTERNS)
    if ignore_patterns:
        ignore |= ignore_patterns

    root = Path(root_path)
    if not root.is_dir():
        logger.warning(f"Root directory does not exist: {root}")
        return

    for dirpath, dirnames, filenames in os.walk(root):
        # Filter out ignored directories (in-place modification keeps os.walk from descending)
        dirnames[:] = sorted(
            d
            for d in dirnames
            if not d.startswith(".") and not any(fnmatch.fnmatch(d, p) for p in ignore)
        )

        for filename in sorted(filenames):
            file_path = Path(dirpath) / filename

            if filename.startswith("."):
                continue

            if extension and file_path.suffix != extension:
                continue

            rel_path = file_path.relative_to(root).as_posix()
            if any(fnmatch.fnmatch(filename, p) or fnmatch.fnmatch(rel_path, p) for p in ignore):
                continue

            try:
                if file_path.stat().st_size > MAX_FILE_SIZE:
                    logger.debug(f"Skipped (too large): {rel_path}")
                    continue
            except OSError:
                continue

            yield file_path
