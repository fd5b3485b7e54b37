"""
Setting Scan Command Line

Extracts Setting declarations from a Java codebase and writes them as JSON.

Environment variables:
    SETTINGSCAN_ROOT: Directory to scan (default: .)
    SETTINGSCAN_OUTPUT: Output file (default: settings.json)
    SETTINGSCAN_SERVICE_ENDPOINT: Parsing service URL (default: local tree-sitter)
    SETTINGSCAN_DEBUG: Enable debug logging (default: false)
    SETTINGSCAN_LOG_FILE: Log file path (default: stderr only)
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from src.configs import create_default_config, get_config_path, get_full_config, get_logger, setup_logging
from src.exceptions import ConfigurationError, OutputError, TreeAcquisitionError
from src.ingest import extract_codebase
from src.output import write_records

EXIT_OK = 0
EXIT_FILE_FAILURES = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="settingscan",
        description="Extract Setting declarations from a Java codebase",
    )
    parser.add_argument("--root", dest="root_directory", help="Directory to scan")
    parser.add_argument("--output", dest="output_path", help="JSON file to write")
    parser.add_argument("--endpoint", dest="service_endpoint", help="Parsing service base URL")
    parser.add_argument("--extension", dest="file_extension", help="Source file extension (default: .java)")
    parser.add_argument("--setting-type", dest="setting_type_name", help="Generic setting type name (default: Setting)")
    parser.add_argument(
        "--property-anchor",
        dest="property_anchor_name",
        help="Identifier qualifying property flags (default: Property)",
    )
    parser.add_argument("--config", type=Path, help="YAML config file (default: ./settingscan.yaml)")
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write a default config file (at --config or ./settingscan.yaml) and exit",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=None,
        help="Abort on the first file that cannot be parsed",
    )
    parser.add_argument("--debug", action="store_true", default=None, help="Enable debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    if args.init_config:
        setup_logging(debug=bool(args.debug))
        config_path = args.config or get_config_path()
        try:
            created = create_default_config(config_path)
        except OSError as e:
            get_logger("cli").error(f"Failed to write {config_path}: {e}")
            return EXIT_CONFIG_ERROR
        if created:
            get_logger("cli").info(f"Created {config_path}")
        else:
            get_logger("cli").info(f"Config already exists: {config_path}")
        return EXIT_OK

    overrides = {key: value for key, value in vars(args).items() if key not in ("config", "init_config")}

    try:
        config = get_full_config(overrides, config_path=args.config)
    except ConfigurationError as e:
        setup_logging(debug=bool(args.debug))
        get_logger("cli").error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    setup_logging(debug=config.debug)
    logger = get_logger("cli")

    try:
        result = extract_codebase(config)
    except TreeAcquisitionError as e:
        logger.error(f"Aborting: {e}")
        return EXIT_FILE_FAILURES

    try:
        write_records(result.records, config.output_path)
    except OutputError as e:
        logger.error(str(e))
        return EXIT_FILE_FAILURES

    summary = result.summary()
    logger.info(
        f"{summary['settings']} settings from {summary['files_scanned']} files "
        f"({summary['skipped']} skipped, {summary['failed_files']} failed)"
    )
    if not result.ok:
        logger.warning(f"{summary['failed_files']} files could not be parsed:")
        for failure in summary["failures"]:
            logger.warning(f"  {failure['file']}: {failure['error']}")
        return EXIT_FILE_FAILURES

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
