"""
Provides services for discovering the files to be probed.

This module contains the first phase of the pipeline:
- Walking the directory tree under the scan root, one directory at a time.
- Filtering the walked entries down to candidate files.

A directory that cannot be read is logged and skipped; the walk itself never
aborts. Anything that is not a directory or a known sidecar file is a
candidate, and ffprobe decides what is media.
"""

import os
from pathlib import Path
from typing import Iterable, Iterator, List

from loguru import logger

from ..config.common import EXCLUDED_SUFFIXES


def walk_directory(root: Path) -> Iterator[os.DirEntry]:
    """
    Lazily yields every entry below `root`, depth first.

    Entries of one directory are yielded in name order, each directory entry
    immediately followed by its own contents. Symbolic links to directories
    are yielded but not followed.

    A directory that cannot be listed (e.g., permission denied) is logged as a
    warning and skipped; its siblings are still walked. A `root` that is not a
    directory yields nothing.

    Args:
        root: The directory to walk.

    Yields:
        `os.DirEntry` objects for files, directories and links.
    """
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except NotADirectoryError:
        logger.debug(f"{root} is not a directory, nothing to walk.")
        return
    except OSError as e:
        logger.warning(f"Permissions error, skipping {e.filename or root}: {e.strerror or e}")
        return

    for entry in entries:
        yield entry
        try:
            descend = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            logger.warning(f"Permissions error, skipping {entry.path}: {e}")
            continue
        if descend:
            yield from walk_directory(Path(entry.path))


def should_inspect(entry: os.DirEntry, excluded_suffixes: Iterable[str] = EXCLUDED_SUFFIXES) -> bool:
    """
    Decides whether a walked entry is a candidate for probing.

    Directories are rejected, as are names ending in one of `excluded_suffixes`
    ('.nfo' by default, matched literally). Everything else is accepted.

    A name that cannot be represented as text (undecodable bytes carried as
    surrogates) is skipped with a warning rather than failing the scan.

    Args:
        entry: The directory entry to check.
        excluded_suffixes: Literal name suffixes that are never probed.

    Returns:
        True if the entry should be probed.
    """
    try:
        if entry.is_dir():
            return False
    except OSError as e:
        logger.warning(f"Could not stat {entry.path}, skipping: {e}")
        return False

    name = entry.name
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        logger.warning(f"Skipping file with a non-text name: {entry.path!r}")
        return False

    return not name.endswith(tuple(excluded_suffixes))


def discover_candidates(root: Path, excluded_suffixes: Iterable[str] = EXCLUDED_SUFFIXES) -> List[Path]:
    """
    Walks `root` and returns the paths of all entries that pass `should_inspect`.

    Args:
        root: The scan root.
        excluded_suffixes: Passed through to `should_inspect`.

    Returns:
        Candidate paths in walk order.
    """
    excluded_suffixes = tuple(excluded_suffixes)
    candidates = [
        Path(entry.path)
        for entry in walk_directory(root)
        if should_inspect(entry, excluded_suffixes)
    ]
    logger.debug(f"Discovered path count: {len(candidates)}")
    return candidates
