"""
Utilities Package for mediadiff.

This package contains helper modules that are not specific to any single stage
of the scan.

Modules:
    - ffmpeg_utils.py: Locates and verifies the ffprobe executable.
    - format_utils.py: Formats durations, bit rates and file sizes into stable,
      human-readable strings.
"""
