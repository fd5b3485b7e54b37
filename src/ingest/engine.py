"""
Extraction Engine

Drives a full run: walk the codebase, obtain one tree per file, extract
settings, and merge the per-file results in traversal order.
"""

from pathlib import Path
from typing import Iterable, Optional

from src.ast.parser import JavaTreeBuilder, TreeSource
from src.ast.service import ParsingServiceClient
from src.configs import ExtractorConfig, get_logger
from src.exceptions import TreeAcquisitionError
from src.extract.models import ExtractionResult, FileFailure, FileResult
from src.extract.settings import SettingExtractor, relative_source_path
from src.ingest.walker import walk_codebase

logger = get_logger("ingest.engine")


def create_tree_source(config: ExtractorConfig) -> TreeSource:
    """Parsing service when an endpoint is configured, local tree-sitter otherwise."""
    if config.service_endpoint:
        logger.info(f"Using parsing service at {config.service_endpoint}")
        return ParsingServiceClient(config.service_endpoint)
    logger.info("Using local tree-sitter parser")
    return JavaTreeBuilder()


class FileProcessor:
    """Processes files one at a time, turning tree failures into values."""

    def __init__(
        self,
        tree_source: TreeSource,
        extractor: SettingExtractor,
        root_dir: Path,
        fail_fast: bool = False,
    ):
        self.tree_source = tree_source
        self.extractor = extractor
        self.root_dir = root_dir
        self.fail_fast = fail_fast

    def process_file(self, file_path: Path) -> FileResult:
        """
        Extract settings from a single file.

        Raises:
            TreeAcquisitionError: The tree could not be obtained
        """
        root = self.tree_source.parse_file(file_path)
        return self.extractor.extract(root, file_path, self.root_dir)

    def process_files(self, files: Iterable[Path]) -> ExtractionResult:
        """
        Process files in order and merge their results.

        A file whose tree cannot be obtained is recorded as a failure and the
        run continues, unless fail_fast is set.

        Raises:
            TreeAcquisitionError: First failure, only when fail_fast is set
        """
        result = ExtractionResult()

        for file_path in files:
            result.files_scanned += 1
            try:
                file_result = self.process_file(file_path)
            except TreeAcquisitionError as e:
                if self.fail_fast:
                    raise
                rel_path = relative_source_path(file_path, self.root_dir)
                logger.warning(f"Error processing {rel_path}: {e}")
                result.failures.append(FileFailure(source_file=rel_path, error=str(e)))
                continue

            result.merge(file_result)

        return result


def extract_codebase(
    config: ExtractorConfig,
    tree_source: Optional[TreeSource] = None,
) -> ExtractionResult:
    """
    Extract all settings below the configured root directory.

    Args:
        config: Resolved configuration
        tree_source: Override the tree source chosen from config (used by tests)

    Returns:
        ExtractionResult with records, diagnostics and per-file failures
    """
    root_dir = config.root_path
    if tree_source is None:
        tree_source = create_tree_source(config)

    extractor = SettingExtractor(
        setting_type_name=config.setting_type_name,
        property_anchor=config.property_anchor_name,
    )
    processor = FileProcessor(tree_source, extractor, root_dir, fail_fast=config.fail_fast)

    logger.info(f"Scanning {root_dir} for *{config.file_extension} files")
    files = walk_codebase(str(root_dir), extension=config.file_extension)
    result = processor.process_files(files)

    logger.info(
        f"Scanned {result.files_scanned} files: {len(result.records)} settings, "
        f"{len(result.diagnostics)} skipped, {len(result.failures)} failed"
    )
    return result
