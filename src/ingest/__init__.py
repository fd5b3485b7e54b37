"""
Codebase Extraction

File walking and the run driver that turns a directory of Java sources into
an ExtractionResult.
"""

from src.ingest.engine import FileProcessor, create_tree_source, extract_codebase
from src.ingest.walker import walk_codebase

__all__ = [
    "FileProcessor",
    "create_tree_source",
    "extract_codebase",
    "walk_codebase",
]
