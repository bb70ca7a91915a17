"""
Common configuration settings used throughout the application.

This module contains globally shared configuration settings and constants for
mediadiff: the logger format, the location of the ffprobe executable, the
worker pool size and the report/scan options. It also handles loading the
optional user configuration from an external YAML file, so these defaults can
be tuned without modifying the source code.
"""
from pathlib import Path

import yaml
from loguru import logger

# --- User-Defined Configuration ---
# The block at the bottom of this module loads overrides from a
# 'config.user.yaml' file located at the project root.

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
USER_CONFIG_PATH = PROJECT_ROOT / "config.user.yaml"


# --- Logging Configuration ---

# The format string for the Loguru logger. Report text goes to stdout, so this
# format is only ever used for the stderr sink.
LOGGER_FORMAT = (
    "<green>{time:MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "{process}:{thread.name} - <level>{message}</level>"
)

DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


# --- External Tools ---

# The directory containing the ffprobe executable. If None, ffprobe is
# expected on the system PATH.
FFMPEG_DIR: Path | None = None


# --- Scan Settings ---

# File name suffixes that are never probed. Matched literally against the end
# of the name (case-sensitive). '.nfo' sidecars hold release metadata, never media.
EXCLUDED_SUFFIXES: tuple[str, ...] = (".nfo",)


# --- Report Settings ---

# Number of concurrent probe workers. Each probe is a blocking ffprobe call.
DEFAULT_MAX_WORKERS = 4

# Sort report blocks by candidate path before joining. When False, blocks
# appear in the completion order of the probe tasks, which varies between runs.
SORT_REPORT_BY_PATH = True

# Identify files by their path relative to the scan root instead of the full
# path, so that two copies of a collection under different roots diff cleanly.
RELATIVE_PATHS = True

# Drop files whose container declares MIME types, none of which are audio or video.
STRICT_MIME_CHECK = True

# Thresholds for the human readable bit rate (strictly greater than).
BIT_RATE_MEGA_THRESHOLD = 1_000_000
BIT_RATE_KILO_THRESHOLD = 1_000


if USER_CONFIG_PATH.is_file():
    try:
        with USER_CONFIG_PATH.open("r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}

        paths_config = user_config.get("paths") or {}
        ffmpeg_dir_str = paths_config.get("ffmpeg_dir")
        if ffmpeg_dir_str:
            FFMPEG_DIR = Path(ffmpeg_dir_str)

        report_config = user_config.get("report") or {}
        if report_config.get("max_workers") is not None:
            DEFAULT_MAX_WORKERS = max(1, int(report_config["max_workers"]))
        if report_config.get("sort_by_path") is not None:
            SORT_REPORT_BY_PATH = bool(report_config["sort_by_path"])
        if report_config.get("relative_paths") is not None:
            RELATIVE_PATHS = bool(report_config["relative_paths"])
        if report_config.get("strict_mime") is not None:
            STRICT_MIME_CHECK = bool(report_config["strict_mime"])

        scan_config = user_config.get("scan") or {}
        if scan_config.get("excluded_suffixes") is not None:
            EXCLUDED_SUFFIXES = tuple(str(s) for s in scan_config["excluded_suffixes"])
    except (OSError, yaml.YAMLError, AttributeError, TypeError, ValueError) as e:
        logger.warning(f"Could not load or parse '{USER_CONFIG_PATH}': {e}")
else:
    logger.debug(f"User config '{USER_CONFIG_PATH}' not found. Using built-in defaults.")
