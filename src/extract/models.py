"""
Data Models for Setting Extraction

Records produced by the extractor and the per-file / per-run result values
that carry them back to the caller.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SettingRecord:
    """One discovered configuration setting."""

    name: str  # String key, e.g. "index.refresh_interval"
    raw_name: str  # Java field the setting is assigned to
    type: str  # Value type, "Outer of Inner" for nested generics
    properties: tuple[str, ...] = ()  # Flag names in encounter order, duplicates kept
    default_value: str = ""
    source_line: int = 0
    source_file: str = ""  # Relative to the scanned root

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the stable output field names."""
        return {
            "name": self.name,
            "rawName": self.raw_name,
            "type": self.type,
            "properties": list(self.properties),
            "defaultValue": self.default_value,
            "sourceLine": self.source_line,
            "sourceFile": self.source_file,
        }


@dataclass(frozen=True)
class Diagnostic:
    """A candidate declaration that was skipped."""

    source_file: str
    source_line: int
    raw_name: str
    message: str

    def __str__(self) -> str:
        return f"{self.source_file}:{self.source_line}: {self.message}"


@dataclass(frozen=True)
class FileFailure:
    """A file whose syntax tree could not be obtained."""

    source_file: str
    error: str


@dataclass
class FileResult:
    """Extraction output for a single file."""

    records: list[SettingRecord] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


@dataclass
class ExtractionResult:
    """Merged output of a whole run, in file traversal order."""

    records: list[SettingRecord] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)
    files_scanned: int = 0

    def merge(self, result: FileResult) -> None:
        self.records.extend(result.records)
        self.diagnostics.extend(result.diagnostics)

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> dict[str, Any]:
        return {
            "files_scanned": self.files_scanned,
            "settings": len(self.records),
            "skipped": len(self.diagnostics),
            "failed_files": len(self.failures),
            "failures": [{"file": f.source_file, "error": f.error} for f in self.failures],
        }
