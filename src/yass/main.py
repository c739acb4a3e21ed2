#!/usr/bin/env python3
"""
Main entry point for YASS

This module provides the yass console command, a thin shell over the save
system for listing, writing, loading and deleting saves.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from yass.models.save_record import SaveRecord
from yass.models.save_settings import SaveFormat, SaveLocation


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(prog="yass", description="YASS - Yet Another Save System")
    parser.add_argument("--settings-dir", type=Path, default=None,
                        help="Directory holding save_settings.json")
    parser.add_argument("--verbose", action="store_true", help="Show debug messages")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List the saves in the save directory")

    save_parser = commands.add_parser("save", help="Write the loaded save to a new file")
    save_parser.add_argument("--name", default=None, help="Base name of the save file")
    save_parser.add_argument("--format", dest="save_format", default=None,
                             choices=[f.value for f in SaveFormat])
    save_parser.add_argument("--location", default=None,
                             choices=[loc.value for loc in SaveLocation])
    save_parser.add_argument("--no-timestamp", action="store_true",
                             help="Don't append the timestamp to the file name")

    load_parser = commands.add_parser("load", help="Load a save and print it")
    load_parser.add_argument("path", nargs="?", type=Path, default=None,
                             help="Save file to load, the most recent save if omitted")
    load_parser.add_argument("--format", dest="save_format", default=None,
                             choices=[f.value for f in SaveFormat])

    delete_parser = commands.add_parser("delete", help="Delete a save file")
    delete_parser.add_argument("path", type=Path)

    commands.add_parser("exit-save", help="Write an exit save of the loaded save")

    return parser


def run_command(app, args: argparse.Namespace) -> int:
    """
    Run a parsed command against an initialized application.

    Returns:
        int: Exit code
    """
    manager = app.save_manager

    if args.command == "list":
        for label, entries in (("save", manager.catalog.manual_saves),
                               ("auto", manager.catalog.auto_saves)):
            for entry in entries:
                print(f"{label}\t{entry.file}")
        return 0

    if args.command == "save":
        record = manager.active_record or SaveRecord()
        path = manager.save_as(record, args.save_format, args.location, args.name,
                               append_timestamp=not args.no_timestamp)
        if path is None:
            return 1
        print(path)
        return 0

    if args.command == "load":
        record = manager.load(args.path, args.save_format)
        print(json.dumps(record.to_dict(), indent=4, ensure_ascii=False))
        return 0

    if args.command == "delete":
        return 0 if manager.delete(args.path) else 1

    if args.command == "exit-save":
        path = manager.exit_save()
        if path is None:
            return 1
        print(path)
        return 0

    return 2


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    logger = logging.getLogger("YASS")
    logger.setLevel(logging.DEBUG if args.verbose else logging.INFO)
    formatter = logging.Formatter('%(asctime)s - %(module)s [%(levelname)s] %(message)s', datefmt='%H:%M:%S')
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    app = None
    try:
        logger.debug(f"Python version: {sys.version}")
        logger.debug(f"Working directory: {os.getcwd()}")
        logger.debug(f"Platform: {sys.platform}")

        from yass.application import SaveSystemApplication

        app = SaveSystemApplication(settings_dir=args.settings_dir)
        if not app.initialize():
            logger.error("Application initialization failed")
            return 1

        return run_command(app, args)

    except KeyboardInterrupt:
        logger.info("Shutdown requested by user (Ctrl+C)")
        return 0
    except Exception as e:
        logger.error(f"Unexpected error in main: {e}", exc_info=True)
        return 1
    finally:
        if app is not None:
            app.shutdown(exit_save=False)
        logger.removeHandler(stream_handler)


if __name__ == "__main__":
    sys.exit(main())
