"""
Configuration settings related to media inspection.

ffprobe does not report MIME types directly, so the table below lists the MIME
types libavformat's demuxers declare, keyed by the demuxer name ffprobe puts in
`format.format_name`. Demuxers that declare nothing are simply absent, and
files opened by them are never gated on MIME type.
"""

# ======================================================================================
# Stream Kinds
# ======================================================================================

# ffprobe `codec_type` values for the two stream kinds that end up in the report.
STREAM_KIND_VIDEO = "video"
STREAM_KIND_AUDIO = "audio"

# Report order of the best-stream lines, and the label used for each kind.
REPORTED_STREAM_KINDS = (STREAM_KIND_VIDEO, STREAM_KIND_AUDIO)
STREAM_KIND_LABELS = {
    STREAM_KIND_VIDEO: "Video",
    STREAM_KIND_AUDIO: "Audio",
}


# ======================================================================================
# MIME Types
# ======================================================================================

# A container counts as media when any declared MIME type starts with one of these.
MEDIA_MIME_PREFIXES = ("audio", "video")

# Only demuxers that declare a `mime_type` in libavformat are listed. ffprobe
# names the demuxer in `format_name` (the Matroska demuxer is "matroska,webm").
DEMUXER_MIME_TYPES = {
    "matroska,webm": (
        "audio/webm",
        "audio/x-matroska",
        "video/webm",
        "video/x-matroska",
    ),
    "aac": ("audio/aac", "audio/aacp", "audio/x-aac"),
    "bmp_pipe": ("image/bmp",),
    "gif_pipe": ("image/gif",),
    "jpeg_pipe": ("image/jpeg",),
    "png_pipe": ("image/png",),
    "tiff_pipe": ("image/tiff",),
    "webp_pipe": ("image/webp",),
}

# Matroska muxers store per-stream bit rates as tags rather than in the codec
# parameters. Checked in order when a stream has no `bit_rate`.
STREAM_BIT_RATE_TAGS = ("BPS", "BPS-eng")

# Stream fields holding the rate printed in the report, checked in order.
FRAME_RATE_FIELDS = ("r_frame_rate", "avg_frame_rate")
UNKNOWN_FRAME_RATE = "0/0"
