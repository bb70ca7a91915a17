"""
This module turns a single candidate file into a report summary.

`probe_file` is the unit of work the report pipeline fans out to its worker
pool. It never raises for per-file problems: a file ffprobe cannot open, or one
that turns out not to be audio/video, is logged and yields None, and the
pipeline drops it from the report.
"""

from datetime import timedelta
from pathlib import Path
from typing import List, Optional

from loguru import logger

from ..config.common import RELATIVE_PATHS, STRICT_MIME_CHECK
from ..config.media import REPORTED_STREAM_KINDS
from ..domain.exceptions import MimeMismatchException, ProbeOpenException
from ..domain.media import MediaContainer, MediaSummary
from ..utils.ffmpeg_utils import get_ffprobe_path
from ..utils.format_utils import format_bit_rate, format_duration


def display_name(path: Path, root: Optional[Path] = None, relative_paths: bool = RELATIVE_PATHS) -> str:
    """
    Returns the identifier printed for `path` in the report.

    With `relative_paths` and a `root`, this is the POSIX-style path relative to
    the root, so reports of the same collection under different roots line up.
    Otherwise it is the full path.
    """
    if root is not None and relative_paths:
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            logger.debug(f"{path} is not below {root}, using the full path.")
    return str(path)


def log_stream_metadata(container: MediaContainer):
    """Writes every stream's index and tags to the debug log. Has no other effect."""
    for stream in container.streams:
        logger.debug(f"Stream Index: {stream.index} ({stream.kind})")
        for key, value in stream.metadata.items():
            logger.debug(f"{key}: {value}")


def probe_file(
    path: Path,
    *,
    root: Optional[Path] = None,
    ffprobe_cmd: Optional[str] = None,
    strict_mime: bool = STRICT_MIME_CHECK,
    relative_paths: bool = RELATIVE_PATHS,
) -> Optional[MediaSummary]:
    """
    Probes one file and summarizes it for the report.

    Steps:
    1. Open the file with ffprobe. Failure means the file is skipped.
    2. Check the MIME types declared by the container format. When some are
       declared but none is audio/video, the file is skipped if `strict_mime`
       is set, otherwise only a warning is logged.
    3. Format the container duration and overall bit rate.
    4. Describe the best video stream and the best audio stream, in that order.
    5. Log all streams' metadata for diagnostics.

    Args:
        path: The candidate file.
        root: The scan root, used for the displayed file name.
        ffprobe_cmd: The ffprobe command; resolved from the config when None.
        strict_mime: Skip files whose MIME types are declared but not audio/video.
        relative_paths: Display the path relative to `root`.

    Returns:
        A `MediaSummary`, or None if the file is not reportable media.
    """
    ffprobe_cmd = ffprobe_cmd or get_ffprobe_path()
    try:
        logger.debug(f"Probing {path} ({path.stat().st_size} bytes)")
    except OSError:
        logger.debug(f"Probing {path}")

    try:
        container = MediaContainer.open(path, cmd=ffprobe_cmd)
    except ProbeOpenException as e:
        logger.warning(f"Error processing file, ignoring: {path}")
        logger.debug(f"{e}")
        return None

    logger.debug(f"MIME types for {path.name}: {','.join(container.mime_types)}")
    try:
        container.ensure_media_mime_type()
    except MimeMismatchException as e:
        if strict_mime:
            logger.warning(f"Not an audio/video container, ignoring: {e}")
            return None
        logger.warning(f"Unexpected MIME types, reporting anyway: {e}")

    duration = format_duration(timedelta(microseconds=container.duration))
    bit_rate = format_bit_rate(container.bit_rate)

    stream_descriptions: List[str] = []
    for kind in REPORTED_STREAM_KINDS:
        stream = container.best(kind)
        if stream is not None:
            logger.debug(f"Best {kind} stream index for {path.name}: {stream.index}")
            stream_descriptions.append(stream.description())

    log_stream_metadata(container)

    return MediaSummary(
        file_name=display_name(path, root, relative_paths),
        duration=duration,
        bit_rate=bit_rate,
        streams=tuple(stream_descriptions),
        sort_key=str(path),
    )
