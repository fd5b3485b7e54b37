"""
Setting Extraction

Pattern-matching over syntax trees to recover Setting declarations: key,
value type, default value and property flags.
"""

from src.extract.defaults import serialize_default
from src.extract.models import (
    Diagnostic,
    ExtractionResult,
    FileFailure,
    FileResult,
    SettingRecord,
)
from src.extract.properties import PropertyResolver
from src.extract.settings import SettingExtractor, relative_source_path

__all__ = [
    # Models
    "SettingRecord",
    "Diagnostic",
    "FileFailure",
    "FileResult",
    "ExtractionResult",
    # Components
    "SettingExtractor",
    "PropertyResolver",
    "serialize_default",
    "relative_source_path",
]
