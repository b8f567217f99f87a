#!/usr/bin/env python3
"""Command-line interface for pathmap.

This module provides the CLI for editing and querying a repository kept in
a YAML store file:
- Argument parsing and validation
- Configuration file loading
- Logging setup
- One subcommand per repository operation

Example:
    >>> from pathmap.cli import parse_arguments
    >>> args = parse_arguments(["--store", "repo.yaml", "find", "/css/*"])
"""

import argparse
import os
import sys
from typing import List, Optional, TextIO

from pathmap.core.constants import ConfigKey, PATHMAP_VERSION, StoreBackend
from pathmap.core.validators import ValidationError
from pathmap.exceptions import RepositoryError
from pathmap.factory import create_repository
from pathmap.infrastructure.config_manager import ConfigError, ConfigManager, ConfigSource
from pathmap.infrastructure.logger import Logger, configure_logging
from pathmap.repository import PathMappingRepository
from pathmap.resources import (
    DirectoryResource,
    FileResource,
    FilesystemResource,
    ResourceCollection,
)
from pathmap.store import StoreError

DESCRIPTION = "pathmap - virtual path repository for filesystem resources"


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
        CLIError: If a referenced file does not exist
    """
    parser = argparse.ArgumentParser(
        prog="pathmap",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Map a real directory to /css
  pathmap --store repo.yaml add /css /srv/project/res/css

  # Map several files into /js
  pathmap --store repo.yaml add /js app.js vendor.js

  # Query the repository
  pathmap --store repo.yaml find "/css/**/*.png"
  pathmap --store repo.yaml ls /css

  # Remove a subtree
  pathmap --store repo.yaml rm /css
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {PATHMAP_VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    parser.add_argument(
        "-s",
        "--store",
        metavar="FILE",
        type=str,
        help="YAML store file holding the repository",
    )

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
        help="Write log messages to this file",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    add_parser = commands.add_parser("add", help="Map real paths to a virtual path")
    add_parser.add_argument("path", help="Virtual path")
    add_parser.add_argument(
        "filesystem_paths",
        metavar="FSPATH",
        nargs="+",
        help="Real file or directory; several are added as children of PATH",
    )

    get_parser = commands.add_parser("get", help="Show the resource at a virtual path")
    get_parser.add_argument("path", help="Virtual path")

    find_parser = commands.add_parser("find", help="List the resources matching a glob")
    find_parser.add_argument("query", help="Absolute glob")

    ls_parser = commands.add_parser("ls", help="List the children of a virtual path")
    ls_parser.add_argument("path", nargs="?", default="/", help="Virtual path (default: /)")

    rm_parser = commands.add_parser("rm", help="Remove the resources matching a glob")
    rm_parser.add_argument("query", help="Absolute glob")

    commands.add_parser("clear", help="Remove everything but the root")

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
        if not os.path.exists(args.config):
            raise CLIError(f"Configuration file does not exist: {args.config}")

        if not os.path.isfile(args.config):
            raise CLIError(f"Configuration path is not a file: {args.config}")

    if args.store and os.path.isdir(args.store):
        raise CLIError(f"Store path is a directory: {args.store}")

    if args.command == "add":
        for filesystem_path in args.filesystem_paths:
            if not os.path.exists(filesystem_path):
                raise CLIError(f"Path does not exist: {filesystem_path}")


def build_config(args: argparse.Namespace) -> ConfigManager:
    """
    Build the configuration from config files, environment and arguments.

    Command-line arguments take precedence over everything else.

    Args:
        args: Parsed arguments namespace

    Returns:
        Configuration manager
    """
    config = ConfigManager(args.config)
    config.load_standard_files()

    if args.store:
        config.set(ConfigKey.STORE_BACKEND, StoreBackend.YAML, ConfigSource.CLI_ARGS)
        config.set(ConfigKey.STORE_PATH, os.path.abspath(args.store), ConfigSource.CLI_ARGS)

    if args.debug:
        config.set(ConfigKey.LOGGING_LEVEL, "DEBUG", ConfigSource.CLI_ARGS)

    if args.log_file:
        config.set(ConfigKey.LOGGING_FILE, args.log_file, ConfigSource.CLI_ARGS)

    return config


def setup_logging(config: ConfigManager) -> Logger:
    """
    Configure the pathmap loggers from configuration.

    Repository and store loggers propagate to the logger configured here.

    Args:
        config: Configuration manager

    Returns:
        Top-level pathmap logger

    Raises:
        CLIError: If the configured level is not a log level
    """
    log_level = config.get(ConfigKey.LOGGING_LEVEL, "INFO")

    try:
        return configure_logging(log_level, config.get(ConfigKey.LOGGING_FILE))
    except KeyError:
        raise CLIError(f"Invalid log level: {log_level}")


def resource_for_path(filesystem_path: str) -> FilesystemResource:
    """
    Create the resource for a real path given on the command line.

    Raises:
        CLIError: If the path is neither a file nor a directory
    """
    if os.path.isdir(filesystem_path):
        return DirectoryResource(filesystem_path)
    if os.path.isfile(filesystem_path):
        return FileResource(filesystem_path)
    raise CLIError(f"Not a file or directory: {filesystem_path}")


def format_resource(resource: FilesystemResource) -> str:
    """Format a resource as ``<path>  <filesystem path or ->``."""
    return f"{resource.path}  {resource.filesystem_path or '-'}"


def run_command(
    args: argparse.Namespace, repository: PathMappingRepository, out: TextIO = sys.stdout
) -> int:
    """
    Run the selected subcommand.

    Args:
        args: Parsed arguments namespace
        repository: Repository to operate on
        out: Stream receiving the command output

    Returns:
        Exit code
    """
    if args.command == "add":
        if len(args.filesystem_paths) == 1:
            repository.add(args.path, resource_for_path(args.filesystem_paths[0]))
        else:
            resources = ResourceCollection(resource_for_path(p) for p in args.filesystem_paths)
            repository.add(args.path, resources)
        return 0

    if args.command == "get":
        print(format_resource(repository.get(args.path)), file=out)
        return 0

    if args.command == "find":
        for resource in repository.find(args.query):
            print(format_resource(resource), file=out)
        return 0

    if args.command == "ls":
        for resource in repository.list_children(args.path):
            print(format_resource(resource), file=out)
        return 0

    if args.command == "rm":
        removed = repository.remove(args.query)
        print(f"Removed {removed} path(s)", file=out)
        return 0

    if args.command == "clear":
        removed = repository.clear()
        print(f"Removed {removed} path(s)", file=out)
        return 0

    raise CLIError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    try:
        args = parse_arguments(argv)
        config = build_config(args)
        logger = setup_logging(config)

        store = config.get_value(ConfigKey.STORE_BACKEND)
        logger.debug("Using store", backend=store.value, source=store.source.name.lower())

        if store.value == StoreBackend.MEMORY:
            logger.warning("Using an in-memory store, changes are lost on exit")

        with logger.add_context(command=args.command):
            repository = create_repository(config)
            return run_command(args, repository)

    except (CLIError, ConfigError, StoreError, RepositoryError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
