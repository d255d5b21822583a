"""
Command-Line Interface for the COBOL data import.

Usage:
    cobol-dataimport --copybook CUSTOMER.cpy -r rules.json -n MAINFRAME
    cobol-dataimport --pds copylib/ -r rules.csv --rule-group COBOL -n MAINFRAME -o objects.json
    cobol-dataimport --copybook CUSTOMER.cpy -n MAINFRAME --types
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from cobol_dataimport import __version__
from cobol_dataimport.config import ImportConfig, create_default_config, merge_configs
from cobol_dataimport.logging_config import level_for, setup_logging
from cobol_dataimport.main import ImportPipeline, ImportResult
from cobol_dataimport.output.writer import (
    data_objects_to_json,
    format_type_metadata,
    write_data_objects_json,
    write_type_metadata_csv,
)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cobol-dataimport",
        description="Harvest data objects and attributes from COBOL copybooks.",
        epilog="Rules map COBOL types (UINT, SNUM, ALPHANUM, ...) to target types.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Sources
    parser.add_argument(
        "--copybook",
        type=Path,
        action="append",
        default=[],
        help="Copybook file to import (can be specified multiple times)",
        metavar="FILE",
    )

    parser.add_argument(
        "--pds",
        type=Path,
        action="append",
        default=[],
        help="Directory whose files are all copybooks (can be specified multiple times)",
        metavar="DIR",
    )

    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Configuration file (JSON)",
        metavar="FILE",
    )

    # Rules
    parser.add_argument(
        "-r", "--rules",
        type=Path,
        help="Rule file (JSON or CSV)",
        metavar="FILE",
    )

    parser.add_argument(
        "--rule-group",
        help="Rule group to use from a CSV rule file",
        metavar="NAME",
    )

    parser.add_argument(
        "-n", "--namespace-prefix",
        default="",
        help="Namespace prefix for imported data objects",
        metavar="PREFIX",
    )

    parser.add_argument(
        "--case",
        choices=["mixed", "upper", "lower"],
        default="mixed",
        help="Case conversion of names and types (default: mixed)",
    )

    parser.add_argument(
        "--encoding",
        default="latin-1",
        help="Copybook encoding (default: latin-1)",
    )

    parser.add_argument(
        "--sort-members",
        action="store_true",
        help="Import PDS members in file name order",
    )

    parser.add_argument(
        "--types",
        action="store_true",
        help="Print the COBOL type of every attribute instead of mapping it",
    )

    # Output
    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output file (JSON data objects, or CSV with --types)",
        metavar="FILE",
    )

    parser.add_argument(
        "--status-file",
        type=Path,
        help="Write reader status lines to this file",
        metavar="FILE",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress normal output",
    )

    return parser


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = create_parser()
    return parser.parse_args(args)


def args_to_config(args: argparse.Namespace) -> ImportConfig:
    """Convert parsed arguments to an ImportConfig."""
    config = create_default_config()

    config.copybooks = list(args.copybook)
    config.pds_directories = list(args.pds)
    config.rules_file = args.rules
    config.rule_group = args.rule_group
    config.namespace_prefix = args.namespace_prefix
    config.case = args.case
    config.encoding = args.encoding
    config.sort_members = args.sort_members
    config.type_mode = args.types
    config.output_file = args.output
    config.status_file = args.status_file
    config.verbose = args.verbose
    config.quiet = args.quiet
    config.log_level = level_for(args.verbose, args.quiet, config.log_level)

    # Command-line args override file config
    if args.config and args.config.exists():
        file_config = ImportConfig.load_from_file(args.config)
        config = merge_configs(file_config, config)

    return config


def write_output(config: ImportConfig, result: ImportResult) -> None:
    """Write or print the import result."""
    if config.type_mode:
        if config.output_file:
            write_type_metadata_csv(result.type_metadata, config.output_file)
        else:
            print(format_type_metadata(result.type_metadata))
        return

    if config.output_file:
        write_data_objects_json(result.data_objects, config.output_file)
    else:
        print(data_objects_to_json(result.data_objects))


def run_import(config: ImportConfig) -> int:
    """
    Run the import and write its output.

    Returns:
        Exit code (0 for success, 1 for errors)
    """
    status_writer = None
    try:
        if config.status_file:
            status_writer = open(config.status_file, "w", encoding="utf-8")

        pipeline = ImportPipeline(config, status_writer=status_writer)
        result = pipeline.run()

        if result.data_objects or result.type_metadata:
            write_output(config, result)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if status_writer is not None:
            status_writer.close()

    if not config.quiet:
        print(
            f"Imported {len(result.data_objects)} data objects, "
            f"{result.attribute_count} attributes in {result.processing_time:.2f} seconds",
            file=sys.stderr,
        )
        if config.output_file:
            print(f"Output written to {config.output_file}", file=sys.stderr)

    for error in result.errors:
        print(f"Error: {error}", file=sys.stderr)

    return 0 if result.success else 1


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    parsed = parse_args(args)
    config = args_to_config(parsed)
    setup_logging(config.log_level, verbose=config.verbose)

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Configuration error: {error}", file=sys.stderr)
        return 1

    return run_import(config)


if __name__ == "__main__":
    sys.exit(main())
