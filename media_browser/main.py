#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Main CLI entry point for the Media Browser.
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .config import ConfigError, load_config
from .database.manager import DatabaseManager
from .library import MediaLibrary
from .commands.catalog import (
    cmd_scan, cmd_list, cmd_thumbnails, cmd_info, cmd_favorite, cmd_open, cmd_commands
)
from .jsonio import enable_json_logging


def setup_logging(verbose: bool):
    """Configure logging for the CLI tool."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)]
    )
    logging.debug("Verbose logging enabled (DEBUG level).")


def positive_int(value):
    """argparse type for counts and sizes that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def create_parser():
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="media-browser",
        description="Media Browser - media library catalog and thumbnail cache",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  # Index a directory of movies and archives
  %(prog)s scan --source ~/Videos

  # Generate missing thumbnails for everything indexed
  %(prog)s thumbnails --workers 4

  # Inspect and open entries
  %(prog)s list --favorites
  %(prog)s info --file-id 12 --json
  %(prog)s open --file-id 12 --command mpv
        """
    )

    # Global options
    parser.add_argument("--db",
                        help="SQLite database path (default: from config)")
    parser.add_argument("--config",
                        help="Configuration file (YAML or JSON)")
    parser.add_argument("--thumbnail-dir",
                        help="Override the thumbnail cache directory")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose (DEBUG) output")
    parser.add_argument("--json", action="store_true",
                        help="Output results as JSON instead of human-readable text")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    scan_parser = subparsers.add_parser("scan", help="Index media files below a directory")
    scan_parser.add_argument("--source", required=True, help="Directory to scan")

    list_parser = subparsers.add_parser("list", help="List indexed media files")
    list_parser.add_argument("--favorites", action="store_true", help="Only show favorites")

    thumb_parser = subparsers.add_parser("thumbnails", help="Create missing thumbnails")
    thumb_parser.add_argument("--count", type=positive_int,
                              help="Thumbnails per file (default: from config)")
    thumb_parser.add_argument("--size", type=positive_int,
                              help="Thumbnail width in pixels (default: from config)")
    thumb_parser.add_argument("--force", action="store_true",
                              help="Regenerate thumbnails that already exist")
    thumb_parser.add_argument("--workers", type=positive_int, default=4,
                              help="Files processed concurrently (default: 4)")

    for name, help_text in (("info", "Show details of one file"),
                            ("favorite", "Toggle the favorite flag of one file"),
                            ("commands", "List commands available for one file")):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("--file-id", type=int, required=True, help="File ID")

    open_parser = subparsers.add_parser("open", help="Open a file with its configured command")
    open_parser.add_argument("--file-id", type=int, required=True, help="File ID")
    open_parser.add_argument("--command", dest="command_name",
                             help="Named command to use instead of the main one")

    return parser


async def dispatch(args, library: MediaLibrary):
    """Run the selected command."""
    if args.command == "scan":
        logging.info("Scanning %s", args.source)
        return await cmd_scan(library, Path(args.source).expanduser(), args.json)
    if args.command == "list":
        return await cmd_list(library, args.favorites, args.json)
    if args.command == "thumbnails":
        logging.info("Creating thumbnails (force=%s, workers=%d)", args.force, args.workers)
        return await cmd_thumbnails(library, args.count, args.size, args.force, args.workers, args.json)
    if args.command == "info":
        return await cmd_info(library, args.file_id, args.json)
    if args.command == "favorite":
        logging.info("Toggling favorite for file %d", args.file_id)
        return await cmd_favorite(library, args.file_id, args.json)
    if args.command == "open":
        logging.info("Opening file %d", args.file_id)
        return await cmd_open(library, args.file_id, args.command_name, args.json)
    if args.command == "commands":
        return await cmd_commands(library, args.file_id, args.json)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv=None):
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging based on --verbose (but suppress if JSON output requested)
    if args.json:
        enable_json_logging()
    else:
        setup_logging(args.verbose)

    logging.debug("Parsed arguments: %s", args)

    try:
        config = load_config(Path(args.config).expanduser() if args.config else None)
    except ConfigError as e:
        if args.json:
            from .jsonio import error
            return error(args.command, str(e), code=2)
        logging.error("%s", e)
        return 2

    if args.thumbnail_dir:
        config = replace(config, thumbnail_dir=Path(args.thumbnail_dir).expanduser())
    db_path = Path(args.db).expanduser() if args.db else config.database
    logging.info("Using database: %s", db_path)
    db_manager = DatabaseManager(db_path)
    library = MediaLibrary(config, db_manager)

    try:
        return asyncio.run(dispatch(args, library)) or 0

    except KeyboardInterrupt:
        if args.json:
            from .jsonio import error
            return error(args.command, "Operation interrupted by user", code=130)
        logging.warning("Operation interrupted by user.")
        return 130
    except Exception as e:
        if args.json:
            from .jsonio import error
            debug_info = {"exception_type": type(e).__name__} if args.verbose else None
            return error(args.command, str(e), debug=debug_info, code=1)
        logging.error("Error occurred: %s", e, exc_info=args.verbose)
        return 1
    finally:
        db_manager.close()


if __name__ == "__main__":
    sys.exit(main())
