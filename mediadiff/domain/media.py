import re
from dataclasses import dataclass, field
from pathlib import Path
from pprint import pformat
from typing import Any, Dict, Optional, Tuple

import ffmpeg
from loguru import logger

from .exceptions import MimeMismatchException, ProbeOpenException
from ..config.media import (
    DEMUXER_MIME_TYPES,
    FRAME_RATE_FIELDS,
    UNKNOWN_FRAME_RATE,
    MEDIA_MIME_PREFIXES,
    STREAM_BIT_RATE_TAGS,
    STREAM_KIND_AUDIO,
    STREAM_KIND_LABELS,
    STREAM_KIND_VIDEO,
)


def parse_duration(duration_str: str) -> float:
    """
    Parses a duration string into total seconds.

    This function handles the two duration formats found in ffprobe output:
    1. A plain floating-point number of seconds (e.g., "91.000000").
    2. A timecode in the format 'HH:MM:SS.sss' (e.g., "01:00:00.500"), as
       written by some muxers into the Matroska `DURATION` tag.
       Hours are optional in the timecode format.

    Args:
        duration_str: The string containing the duration to parse.

    Returns:
        The total duration in seconds as a float. Returns 0.0 if parsing fails.
    """
    try:
        return float(duration_str)
    except ValueError:
        pattern = r"(?:(\d{1,2}):)?(\d{1,2}):(\d{1,2}(?:\.\d+)?)"
        match = re.fullmatch(pattern, duration_str.strip())
        if match:
            hours_str, minutes_str, seconds_str = match.groups()
            hours = int(hours_str) if hours_str else 0
            minutes = int(minutes_str)
            seconds = float(seconds_str)
            return float(hours * 3600 + minutes * 60 + seconds)
        logger.warning(f"Could not parse duration string: {duration_str}")
    return 0.0


def safe_int(value: Any) -> int:
    """Converts an ffprobe numeric field (usually a string) to int, 0 when absent or invalid."""
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return 0


@dataclass(frozen=True)
class MediaStream:
    """
    One stream of a probed container.

    Attributes:
        index (int): The stream index inside the container.
        kind (str): The ffprobe `codec_type` ('video', 'audio', 'subtitle', ...).
        bit_rate (int): Stream bit rate in bits per second, 0 when unknown.
        frame_rate (str): The stream rate as ffprobe writes it, e.g. "24000/1001".
            Audio streams usually carry "0/0".
        pixels (int): width * height for video streams, 0 otherwise.
        channels (int): Audio channel count, 0 for other kinds.
        sample_rate (int): Audio sample rate in Hz, 0 for other kinds.
        disposition (dict): The ffprobe disposition flags (0/1 values).
        metadata (dict): The stream tags, stringified.
    """

    index: int
    kind: str
    bit_rate: int = 0
    frame_rate: str = UNKNOWN_FRAME_RATE
    pixels: int = 0
    channels: int = 0
    sample_rate: int = 0
    disposition: Dict[str, int] = field(default_factory=dict)
    metadata: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_probe(cls, stream: Dict[str, Any]) -> "MediaStream":
        tags = stream.get("tags") if isinstance(stream.get("tags"), dict) else {}
        metadata = {str(k): str(v) for k, v in tags.items()}

        bit_rate = safe_int(stream.get("bit_rate"))
        if not bit_rate:
            for tag in STREAM_BIT_RATE_TAGS:
                if tag in metadata:
                    bit_rate = safe_int(metadata[tag])
                    if bit_rate:
                        break

        frame_rate = UNKNOWN_FRAME_RATE
        for key in FRAME_RATE_FIELDS:
            if stream.get(key):
                frame_rate = str(stream[key])
                break

        disposition = stream.get("disposition")
        if not isinstance(disposition, dict):
            disposition = {}

        return cls(
            index=safe_int(stream.get("index")),
            kind=str(stream.get("codec_type") or ""),
            bit_rate=bit_rate,
            frame_rate=frame_rate,
            pixels=safe_int(stream.get("width")) * safe_int(stream.get("height")),
            channels=safe_int(stream.get("channels")),
            sample_rate=safe_int(stream.get("sample_rate")),
            disposition={str(k): safe_int(v) for k, v in disposition.items()},
            metadata=metadata,
        )

    @property
    def rate(self) -> str:
        """The stream rate as a fraction string, "0/0" when unknown."""
        return self.frame_rate

    @property
    def is_attached_picture(self) -> bool:
        return bool(self.disposition.get("attached_pic"))

    @property
    def rank(self) -> Tuple[int, int, int]:
        # Same ordering as libavformat's best-stream lookup: streams flagged for
        # impaired audiences lose to regular ones, the default stream wins ties.
        impaired = self.disposition.get("hearing_impaired") or self.disposition.get(
            "visual_impaired"
        )
        disposition_score = int(not impaired) + int(bool(self.disposition.get("default")))
        return disposition_score, self.pixels, self.bit_rate

    def description(self) -> str:
        """Renders the report line for this stream, e.g. 'Video: 24000/1001 kb/s'."""
        label = STREAM_KIND_LABELS.get(self.kind, self.kind.capitalize())
        return f"{label}: {self.rate} kb/s"


class MediaContainer:
    """
    A probed media container.

    This class wraps the dictionary returned by `ffmpeg.probe` and exposes the
    handful of container-level facts mediadiff reports on. Missing or invalid
    values degrade to zero rather than failing; only a file ffprobe cannot open
    at all is an error (`ProbeOpenException`).

    Attributes:
        path (Path): The probed file.
        probe (dict): The raw ffprobe output.
        format_name (str): The demuxer name(s), e.g. 'mov,mp4,m4a,3gp,3g2,mj2'.
        streams (tuple[MediaStream, ...]): All streams in container order.
    """

    def __init__(self, path: Path, probe: Dict[str, Any]):
        self.path = path
        self.probe = probe or {}
        self.format: Dict[str, Any] = self.probe.get("format") or {}
        self.format_name: str = str(self.format.get("format_name") or "")
        raw_streams = self.probe.get("streams") or []
        self.streams: Tuple[MediaStream, ...] = tuple(
            MediaStream.from_probe(s) for s in raw_streams if isinstance(s, dict)
        )

    @classmethod
    def open(cls, path: Path, cmd: str = "ffprobe") -> "MediaContainer":
        """
        Probes `path` with ffprobe and returns the container.

        Args:
            path: The file to probe.
            cmd: The ffprobe command or absolute path to the executable.

        Raises:
            ProbeOpenException: If ffprobe fails on the file or cannot be started.
        """
        try:
            probe = ffmpeg.probe(str(path.absolute()), cmd=cmd)
        except ffmpeg.Error as e:
            stderr = e.stderr
            if isinstance(stderr, bytes):
                stderr = stderr.decode("utf-8", errors="replace")
            raise ProbeOpenException(
                f"ffprobe could not open {path}: {(stderr or '').strip()}"
            ) from e
        except OSError as e:
            raise ProbeOpenException(f"Could not run '{cmd}' on {path}: {e}") from e
        logger.trace(f"Probe data for {path.name}:\n{pformat(probe)}")
        return cls(path, probe)

    @property
    def duration(self) -> int:
        """Total container duration in microseconds, 0 when missing or invalid."""
        duration_val = self.format.get("duration")
        if duration_val is None:
            logger.debug(f"No container duration for {self.path.name}")
            return 0
        microseconds = round(parse_duration(str(duration_val)) * 1_000_000)
        return max(0, microseconds)

    @property
    def bit_rate(self) -> int:
        """Overall container bit rate in bits per second, 0 when missing."""
        return max(0, safe_int(self.format.get("bit_rate")))

    @property
    def mime_types(self) -> Tuple[str, ...]:
        """The MIME types declared by the demuxer that opened the file."""
        return DEMUXER_MIME_TYPES.get(self.format_name, ())

    def has_media_mime_type(self) -> bool:
        return any(
            mime_type.startswith(prefix)
            for mime_type in self.mime_types
            for prefix in MEDIA_MIME_PREFIXES
        )

    def ensure_media_mime_type(self):
        """
        Raises `MimeMismatchException` when MIME types are declared and none is audio/video.

        Containers whose demuxer declares no MIME types pass unchecked.
        """
        if self.mime_types and not self.has_media_mime_type():
            raise MimeMismatchException(self.path, self.mime_types)

    def best(self, kind: str) -> Optional[MediaStream]:
        """
        Selects the most representative stream of `kind`.

        Candidates are ranked the way libavformat ranks them: disposition first
        (regular before hearing/visually impaired, default stream preferred),
        then resolution for video, then bit rate. The earliest stream wins a
        tie. Cover art (attached pictures) never counts as video, and audio
        streams without channels or sample rate are not decodable candidates.

        Args:
            kind: 'video' or 'audio' (any ffprobe codec_type works).

        Returns:
            The selected `MediaStream`, or None when the container has no such stream.
        """
        candidates = [s for s in self.streams if s.kind == kind]
        if kind == STREAM_KIND_VIDEO:
            candidates = [s for s in candidates if not s.is_attached_picture]
        elif kind == STREAM_KIND_AUDIO:
            candidates = [s for s in candidates if s.channels and s.sample_rate]
        if not candidates:
            return None
        return max(candidates, key=lambda s: s.rank)


@dataclass(frozen=True)
class MediaSummary:
    """
    The result of successfully probing one file.

    Attributes:
        file_name (str): The identifier printed at the top of the report block.
        duration (str): The formatted container duration.
        bit_rate (str): The formatted overall bit rate.
        streams (tuple[str, ...]): Best-stream descriptions, video before audio.
        sort_key (str): The candidate path, used to order the report.
    """

    file_name: str
    duration: str
    bit_rate: str
    streams: Tuple[str, ...] = ()
    sort_key: str = ""

    def to_block(self) -> str:
        lines = [
            self.file_name,
            f"\tDuration: {self.duration}",
            f"\tBit rate: {self.bit_rate}",
        ]
        lines.extend(f"\t{stream}" for stream in self.streams)
        return "\n".join(lines)
