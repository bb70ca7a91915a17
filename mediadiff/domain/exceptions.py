"""
Defines custom exception types for mediadiff.

Per-file problems are expected during a scan (a sidecar file slipping through
the filter, a truncated download) and must never abort the run, so most of
these exceptions are raised by the domain layer and caught one level up, where
the file is logged and dropped from the report. Only `RootNotFoundException`
is allowed to reach the command line.

All custom exceptions inherit from the base `MediaDiffException`.
"""


class MediaDiffException(Exception):
    """Base class for all custom exceptions in mediadiff."""

    pass


# --- Scan Specific Exceptions ---
class ScanException(MediaDiffException):
    """Base class for exceptions raised while discovering files."""

    pass


class RootNotFoundException(ScanException):
    """
    Raised when the scan root does not exist or is not a directory.

    An empty report for a mistyped root would be indistinguishable from an
    empty collection, so the pipeline refuses to start instead.
    """

    pass


# --- MediaFile / Probe Specific Exceptions ---
class MediaFileException(MediaDiffException):
    """
    Base class for exceptions related to media file analysis (probing with ffprobe).
    """

    pass


class ProbeOpenException(MediaFileException):
    """
    Raised when ffprobe cannot open or parse a file as a media container.

    This is the normal outcome for non-media files that passed the filter.
    """

    pass


class MimeMismatchException(MediaFileException):
    """
    Raised when a container declares MIME types but none of them is audio or video.

    ffprobe happily opens images, subtitles and even plain text files; their
    demuxers declare non-media MIME types, which is how they are told apart.
    """

    def __init__(self, path, mime_types):
        self.path = path
        self.mime_types = tuple(mime_types)
        super().__init__(
            f"{path} declares no audio/video MIME type ({', '.join(self.mime_types)})"
        )
