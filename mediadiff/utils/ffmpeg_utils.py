"""
This module provides helpers for locating and checking the ffprobe executable.

It reads the ffmpeg directory from the user's `config.user.yaml` file and falls
back to the system PATH if no directory is configured.
"""
import subprocess
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from ..config.common import FFMPEG_DIR


def get_ffprobe_path(ffmpeg_dir: Optional[Path] = FFMPEG_DIR) -> str:
    """
    Determines the ffprobe executable to use.

    The configured `ffmpeg_dir` takes priority. If it is not set, or does not
    contain ffprobe, this falls back to plain 'ffprobe', which relies on the
    executable being on the system PATH.

    Args:
        ffmpeg_dir: Directory expected to hold the ffprobe executable.

    Returns:
        The command or absolute path to run.
    """
    ffprobe_exe_name = "ffprobe.exe" if sys.platform == "win32" else "ffprobe"

    if ffmpeg_dir and ffmpeg_dir.is_dir():
        configured_path = ffmpeg_dir / ffprobe_exe_name
        if configured_path.is_file():
            logger.debug(f"Using ffprobe from configured path: '{configured_path}'")
            return str(configured_path)
        logger.warning(
            f"`ffmpeg_dir` is configured, but '{ffprobe_exe_name}' was not found there. Falling back to system PATH."
        )

    return "ffprobe"


def verify_ffprobe(ffprobe_cmd: Optional[str] = None) -> bool:
    """
    Checks that ffprobe can be executed by running `ffprobe -version`.

    Logs the first line of the version output on success, or an error explaining
    how to make ffprobe available on failure. A missing ffprobe is not fatal
    here: every file would then fail to probe and be reported as ignored.

    Returns:
        True if ffprobe ran successfully.
    """
    ffprobe_cmd = ffprobe_cmd or get_ffprobe_path()
    try:
        result = subprocess.run(
            [ffprobe_cmd, "-version"],
            check=True,
            capture_output=True,
            text=True,
            encoding="utf-8",
        )
    except subprocess.CalledProcessError as e:
        logger.error(f"ffprobe version command failed (return code {e.returncode}):\n{e.stderr}")
        return False
    except FileNotFoundError:
        logger.error(
            "ffprobe command not found. Please ensure FFmpeg is installed and accessible.\n"
            "You can either add it to your system's PATH or specify its location in the 'config.user.yaml' file."
        )
        return False
    except OSError as e:
        logger.error(f"Could not run ffprobe: {e}")
        return False

    version_lines = result.stdout.splitlines()
    logger.debug(f"ffprobe version check successful: {version_lines[0] if version_lines else ''}")
    return True
