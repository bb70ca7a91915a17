import concurrent.futures
import traceback
from pathlib import Path
from typing import Iterable, List, Optional

from loguru import logger

from ..config.common import (
    DEFAULT_MAX_WORKERS,
    EXCLUDED_SUFFIXES,
    RELATIVE_PATHS,
    SORT_REPORT_BY_PATH,
    STRICT_MIME_CHECK,
)
from ..domain.exceptions import RootNotFoundException
from ..domain.media import MediaSummary
from ..services.file_discovery_service import discover_candidates
from ..services.probe_service import probe_file
from ..utils.ffmpeg_utils import get_ffprobe_path


class ReportPipeline:
    """
    Scans a directory tree and assembles the media report.

    Discovery runs first and to completion; the candidate files are then probed
    concurrently on a bounded thread pool (each probe is a blocking ffprobe
    call) and the summaries are joined into one report. Nothing is emitted
    until every candidate has been processed.

    Summaries arrive in completion order. With `sort_by_path` they are sorted
    by candidate path before joining, which makes the report identical between
    runs over the same tree.
    """

    def __init__(
        self,
        root: Path,
        max_workers: int = DEFAULT_MAX_WORKERS,
        sort_by_path: bool = SORT_REPORT_BY_PATH,
        strict_mime: bool = STRICT_MIME_CHECK,
        relative_paths: bool = RELATIVE_PATHS,
        excluded_suffixes: Iterable[str] = EXCLUDED_SUFFIXES,
        ffprobe_cmd: Optional[str] = None,
    ):
        self.root = Path(root)
        self.max_workers = max(1, max_workers)
        self.sort_by_path = sort_by_path
        self.strict_mime = strict_mime
        self.relative_paths = relative_paths
        self.excluded_suffixes = tuple(excluded_suffixes)
        self.ffprobe_cmd = ffprobe_cmd or get_ffprobe_path()

    def validate_root(self):
        if not self.root.exists():
            raise RootNotFoundException(f"Root directory does not exist: {self.root}")
        if not self.root.is_dir():
            raise RootNotFoundException(f"Root path is not a directory: {self.root}")

    def process_single_file(self, path: Path) -> Optional[MediaSummary]:
        return probe_file(
            path,
            root=self.root,
            ffprobe_cmd=self.ffprobe_cmd,
            strict_mime=self.strict_mime,
            relative_paths=self.relative_paths,
        )

    def process_multi_file(self, paths: List[Path]) -> List[MediaSummary]:
        """
        Probes `paths` on the worker pool and returns the successful summaries.

        A task that raises is logged and counted as a failed probe; it does not
        stop the other tasks.
        """
        summaries: List[MediaSummary] = []
        failed = 0
        logger.debug(f"[{self.__class__.__name__}] Using {self.max_workers} worker thread(s).")

        with concurrent.futures.ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="probe"
        ) as executor:
            futures = {
                executor.submit(self.process_single_file, file_path): file_path
                for file_path in paths
            }
            for future in concurrent.futures.as_completed(futures):
                file_path = futures[future]
                try:
                    summary = future.result()
                except Exception as exc:
                    tb_str = traceback.format_exception(type(exc), exc, exc.__traceback__)
                    logger.error(
                        f"Error processing task for {file_path}:\n"
                        f"Exception type: {type(exc).__name__}\n"
                        f"Exception message: {exc}\n"
                        f"Traceback: {''.join(tb_str)}"
                    )
                    failed += 1
                    continue
                if summary is None:
                    failed += 1
                else:
                    summaries.append(summary)

        logger.info(
            f"[{self.__class__.__name__}] Probed {len(paths)} file(s): "
            f"{len(summaries)} reported, {failed} ignored."
        )
        return summaries

    def run(self) -> Optional[str]:
        """
        Runs discovery, probing and aggregation.

        Returns:
            The report text, or None when there is nothing to report.

        Raises:
            RootNotFoundException: If the root is missing or not a directory.
        """
        self.validate_root()
        logger.info(f"Path: {self.root}")

        paths = discover_candidates(self.root, self.excluded_suffixes)
        if not paths:
            logger.info(f"[{self.__class__.__name__}] No candidate files under {self.root}.")
            return None

        summaries = self.process_multi_file(paths)
        if not summaries:
            return None

        if self.sort_by_path:
            summaries.sort(key=lambda s: s.sort_key)

        return "\n".join(summary.to_block() for summary in summaries)


def generate_report(root: Path, **kwargs) -> Optional[str]:
    """Convenience wrapper: `ReportPipeline(root, **kwargs).run()`."""
    return ReportPipeline(root, **kwargs).run()
