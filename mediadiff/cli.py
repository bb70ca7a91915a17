"""
Command-Line Interface (CLI) setup for mediadiff.

This module uses Python's `argparse` to define and parse the command-line
arguments that control the application's behavior.
"""
import argparse
from typing import List, Optional

from . import __version__
from .config.common import DEFAULT_LOG_LEVEL, DEFAULT_MAX_WORKERS, LOG_LEVELS


def get_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parses command-line arguments for mediadiff.

    Args:
        argv: The arguments to parse. Defaults to `sys.argv[1:]`.

    Returns:
        argparse.Namespace: An object containing the parsed command-line
                            arguments as attributes.
    """
    parser = argparse.ArgumentParser(
        prog="mediadiff",
        description=(
            "Utility to generate reports on the media file contents of a folder, "
            "which can be diffed using traditional tools like diff."
        ),
    )
    parser.add_argument(
        "-r", "--root-dir", required=True, metavar="DIRECTORY",
        help="Root directory to scan."
    )
    parser.add_argument(
        "--processes", type=int, default=DEFAULT_MAX_WORKERS,
        help=f"Number of files to probe concurrently (default: {DEFAULT_MAX_WORKERS})."
    )
    parser.add_argument(
        "--log-level", type=str, default=DEFAULT_LOG_LEVEL, choices=LOG_LEVELS,
        help="Set the logging level. Logs go to stderr, the report to stdout."
    )
    parser.add_argument(
        "--unsorted", action="store_true",
        help="Keep report blocks in probe completion order instead of sorting by path."
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    args = parser.parse_args(argv)

    if args.processes < 1:
        parser.error(f"--processes must be at least 1, got {args.processes}")

    return args
