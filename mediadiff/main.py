"""
Main entry point for mediadiff.

This module configures logging, parses the command-line arguments, runs the
report pipeline on the requested root directory and prints the report to
standard output.
"""

import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from .cli import get_args
from .config.common import LOGGER_FORMAT
from .domain.exceptions import RootNotFoundException
from .pipeline.report_pipeline import ReportPipeline
from .utils.ffmpeg_utils import get_ffprobe_path, verify_ffprobe

EXIT_OK = 0
EXIT_ROOT_NOT_FOUND = 2


def configure_logger(level: str):
    """Routes all log output to stderr so it never mixes with the report."""
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOGGER_FORMAT)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Runs one scan and prints its report.

    Returns:
        0 when the scan completed (an empty report prints nothing),
        2 when the root directory is missing or not a directory.
    """
    args = get_args(argv)
    configure_logger(args.log_level)
    logger.debug(f"Parsed arguments: {args}")

    ffprobe_cmd = get_ffprobe_path()
    verify_ffprobe(ffprobe_cmd)

    pipeline = ReportPipeline(
        Path(args.root_dir),
        max_workers=args.processes,
        sort_by_path=not args.unsorted,
        ffprobe_cmd=ffprobe_cmd,
    )
    try:
        report = pipeline.run()
    except RootNotFoundException as e:
        logger.error(f"{e}")
        return EXIT_ROOT_NOT_FOUND

    if report is not None:
        print(report)
    return EXIT_OK
