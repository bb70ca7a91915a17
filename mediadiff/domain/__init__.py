"""
This package contains the core domain models of mediadiff.

The domain layer represents the media world as this application sees it: a
container with a duration, an overall bit rate and a handful of streams. It is
kept independent of the CLI, the worker pool and the file system walk, which
keeps it easy to test with canned ffprobe output.

Modules:
    exceptions.py: Custom exception types for scan and probe failures.
    media.py: `MediaContainer`, an adapter over `ffmpeg.probe` output that
              exposes duration, bit rate, MIME types, streams and best-stream
              selection; plus the `MediaStream` and `MediaSummary` value types.
"""
