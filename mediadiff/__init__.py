"""
mediadiff: diffable reports on the media files in a directory tree.

Each media file found under a root directory is probed with ffprobe and
summarized as a short text block (duration, overall bit rate, best video and
audio stream). Reports of two copies of a collection can then be compared with
ordinary tools such as `diff`.
"""

__version__ = "0.1.0"
