#!/usr/bin/env python3
"""Command-line interface for IgnoreParser.

This module provides the ``ignoreparser`` command:
- Argument parsing and validation
- Configuration file loading
- ``check``: print the verdict for individual paths
- ``scan``: list a directory tree and print accepted/denied entries

Example:
    >>> from ignoreparser.cli import parse_arguments
    >>> args = parse_arguments(["--rules", ".gitignore", "check", "build/out.o"])
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional, TextIO

from ignoreparser.core.constants import IGNOREPARSER_VERSION
from ignoreparser.core.errors import IgnoreParserError
from ignoreparser.fs.sources import default_directory, list_files
from ignoreparser.infrastructure.config_manager import ConfigManager, ConfigSource
from ignoreparser.infrastructure.logger import Logger, set_global_logger
from ignoreparser.rules.engine import GitignoreMatcher

DESCRIPTION = "IgnoreParser - classify paths with gitignore rules"

SHOW_CHOICES = ("accepted", "denied", "all")


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
    """
    parser = argparse.ArgumentParser(
        prog="ignoreparser",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Which of these paths does .gitignore ignore?
  ignoreparser check build/ build/out.o src/main.py

  # List every ignored file below the rule file's directory
  ignoreparser --rules project/.gitignore scan --show denied

  # Use a configuration file and a non-UTF-8 rule file
  ignoreparser --config ignoreparser.yaml --encoding latin-1 scan src
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {IGNOREPARSER_VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    # Rule options
    rule_group = parser.add_argument_group("rule options")

    rule_group.add_argument(
        "-r",
        "--rules",
        metavar="FILE",
        type=str,
        help="Rule file to load (default: .gitignore)",
    )

    rule_group.add_argument(
        "-e",
        "--encoding",
        metavar="CODEC",
        type=str,
        help="Text encoding of the rule file (default: utf-8)",
    )

    # Logging options
    log_group = parser.add_argument_group("logging options")

    log_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    log_group.add_argument(
        "--log-file",
        metavar="FILE",
        type=str,
        help="Also write log messages to this file",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    commands.required = True

    check = commands.add_parser("check", help="Print the verdict for each path")
    check.add_argument(
        "paths",
        metavar="PATH",
        nargs="+",
        help="Paths relative to the rule file's directory (directories end with /)",
    )

    scan = commands.add_parser("scan", help="Filter every entry of a directory tree")
    scan.add_argument(
        "directory",
        metavar="DIR",
        nargs="?",
        help="Directory to scan (default: the rule file's directory)",
    )
    scan.add_argument(
        "--include-directories",
        action="store_true",
        default=None,
        help="Also list subdirectories (with a trailing /)",
    )
    scan.add_argument(
        "--show",
        choices=SHOW_CHOICES,
        default="denied",
        help="Which entries to print (default: denied)",
    )

    parsed = parser.parse_args(args)

    _validate_arguments(parsed)

    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Args:
        args: Parsed arguments namespace

    Raises:
        CLIError: If validation fails
    """
    if args.config:
        config_path = Path(args.config)

        if not config_path.exists():
            raise CLIError(f"Configuration file does not exist: {args.config}")

        if not config_path.is_file():
            raise CLIError(f"Configuration path is not a file: {args.config}")

    if args.command == "scan" and args.directory:
        directory = Path(args.directory)

        if not directory.is_dir():
            raise CLIError(f"Scan directory does not exist: {args.directory}")


def build_config_from_args(args: argparse.Namespace) -> Dict:
    """
    Build configuration dictionary from command-line arguments.

    Only options given on the command line are included, so file and
    environment settings still apply to everything else.

    Args:
        args: Parsed arguments namespace

    Returns:
        Configuration dictionary for ConfigManager
    """
    section: Dict = {"rules": {}, "scan": {}, "logging": {}}

    if args.rules:
        section["rules"]["file"] = args.rules
    if args.encoding:
        section["rules"]["encoding"] = args.encoding
    if getattr(args, "include_directories", None):
        section["scan"]["include_directories"] = True
    if args.debug:
        section["logging"]["level"] = "DEBUG"
    if args.log_file:
        section["logging"]["file"] = args.log_file

    return {"ignoreparser": section}


def load_configuration(args: argparse.Namespace) -> ConfigManager:
    """
    Build the layered configuration for this invocation.

    Args:
        args: Parsed arguments namespace

    Returns:
        Configuration manager with file, environment and CLI layers
    """
    try:
        config = ConfigManager(args.config)
    except IgnoreParserError as e:
        raise CLIError(str(e))

    config.load_dict(build_config_from_args(args), ConfigSource.CLI_ARGS)
    return config


def setup_logging(config: ConfigManager) -> Logger:
    """
    Setup logging based on configuration.

    Args:
        config: Configuration manager

    Returns:
        Configured logger instance, also installed as the global logger

    Raises:
        CLIError: If the configured level is not a known level name or the
            log file cannot be opened
    """
    level = config.get("ignoreparser.logging.level", "INFO")
    try:
        logger = Logger("ignoreparser", level=level)
    except KeyError:
        raise CLIError(f"Invalid log level: {level}")

    log_file = config.get("ignoreparser.logging.file")
    if log_file:
        try:
            logger.add_handler(logger.create_file_handler(log_file))
        except OSError as e:
            raise CLIError(f"Cannot open log file {log_file}: {e}")

    set_global_logger(logger)
    return logger


def load_matcher(config: ConfigManager) -> GitignoreMatcher:
    """
    Compile the configured rule file.

    Args:
        config: Configuration manager

    Returns:
        Matcher for the rule file

    Raises:
        CLIError: If the rule file is missing
    """
    rule_file = Path(config.get("ignoreparser.rules.file"))

    if not rule_file.is_file():
        raise CLIError(f"Rule file does not exist: {rule_file}")

    return GitignoreMatcher.from_file(rule_file, config.get("ignoreparser.rules.encoding"))


def run_check(matcher: GitignoreMatcher, paths: List[str], out: TextIO) -> int:
    """
    Print ``ignored`` or ``kept`` for each path.

    Args:
        matcher: Compiled rules
        paths: Paths to classify
        out: Output stream

    Returns:
        Exit code
    """
    for path in paths:
        verdict = "ignored" if matcher.denies(path) else "kept"
        print(f"{verdict}\t{path}", file=out)
    return 0


def run_scan(
    matcher: GitignoreMatcher,
    directory: Path,
    include_directories: bool,
    show: str,
    out: TextIO,
) -> int:
    """
    Filter a directory tree and print the selected entries.

    Args:
        matcher: Compiled rules
        directory: Directory to scan
        include_directories: Also list subdirectories
        show: "accepted", "denied" or "all"
        out: Output stream

    Returns:
        Exit code
    """
    entries = list_files(directory, include_directories=include_directories)

    if show == "accepted":
        lines = matcher.accepted(entries)
    elif show == "denied":
        lines = matcher.denied(entries)
    else:
        lines = [
            f"{'ignored' if matcher.denies(entry) else 'kept'}\t{entry}" for entry in entries
        ]

    for line in lines:
        print(line, file=out)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Parses arguments, loads configuration and rules, then runs the selected
    command.
    """
    try:
        args = parse_arguments(argv)

        config = load_configuration(args)
        logger = setup_logging(config)

        matcher = load_matcher(config)
        logger.debug("Loaded rule file", rule_file=config.get("ignoreparser.rules.file"))

        if args.command == "check":
            return run_check(matcher, args.paths, sys.stdout)

        if args.directory:
            directory = Path(args.directory)
        else:
            directory = default_directory(config.get("ignoreparser.rules.file"))

        include_directories = bool(config.get("ignoreparser.scan.include_directories", False))
        logger.info("Scanning directory", directory=str(directory), show=args.show)
        return run_scan(matcher, directory, include_directories, args.show, sys.stdout)

    except (CLIError, IgnoreParserError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except (UnicodeDecodeError, LookupError) as e:
        print(f"Error: Failed to decode rules: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
