"""
Configuration Package for mediadiff.

This package centralizes the static configuration settings for the application.
Separating configuration from the application logic makes it easy to adjust the
scan and report behaviour without touching the core code.

This package includes settings for:
- Logging format and levels.
- The location of the ffprobe executable (user-overridable).
- Scan filtering, worker pool size and report ordering (user-overridable).
- Media inspection tables such as demuxer MIME types and stream kind labels.
"""
