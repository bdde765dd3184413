from __future__ import annotations

import logging
import os
import time
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, List, Optional

from tqdm.auto import tqdm

from site_index.errors import IndexBuildError, ScanError
from site_index.model import ParsedFile, ScanSettings, SiteIndex
from sitecheck.core.utils.parallel_workers import scan_file_worker
from sitecheck.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "**/*.html"


class IndexController:
    """
    Walks a rendered site and builds the SiteIndex used by the validator.
    Indexing is all-or-nothing: the first file that fails aborts the run with an IndexBuildError.
    Scanning is spread over a process pool when more than one worker is requested.
    """

    def __init__(
            self,
            *,
            settings: Optional[ScanSettings] = None,
            pattern: str = DEFAULT_PATTERN,
            default_workers: Optional[int] = None,
    ) -> None:
        self.settings = settings or ScanSettings()
        self.pattern = pattern
        self.default_workers = default_workers or (os.cpu_count() or 4)

    def discover(self, root: Path) -> List[Path]:
        """Returns every regular file under `root` matching the HTML pattern."""
        return PathUtils.find_files(root, self.pattern)

    def build_index(
            self,
            root: Path,
            *,
            workers: Optional[int] = None,
            show_progress: bool = False,
    ) -> SiteIndex:
        root = Path(root)
        if not root.is_dir():
            raise IndexBuildError(None, message=f"Site root `{root}` is not a directory")
        root = root.resolve()

        files = self.discover(root)
        n_workers = int(workers or self.default_workers)
        if n_workers <= 0:
            n_workers = os.cpu_count() or 4

        start = time.perf_counter()
        if n_workers == 1 or len(files) <= 1:
            pages = self._scan_sequential(files, show_progress)
        else:
            pages = self._scan_parallel(files, n_workers, show_progress)

        index = SiteIndex(root, pages, frozenset(PathUtils.all_files(root)))
        logger.info(
            "Indexed %d pages under %s in %.3fs (%d workers).",
            len(index), root, time.perf_counter() - start, min(n_workers, max(len(files), 1)),
        )
        return index

    # -------- Scanning strategies --------

    def _scan_sequential(self, files: List[Path], show_progress: bool) -> Dict[Path, ParsedFile]:
        pages: Dict[Path, ParsedFile] = {}

        with tqdm(total=len(files), desc="Indexing pages", unit=" page", disable=not show_progress) as bar:
            for path in files:
                try:
                    pages[path] = scan_file_worker(path, self.settings)
                except IndexBuildError:
                    raise
                except Exception as e:
                    raise self._wrap(path, e) from e
                bar.update(1)
        return pages

    def _scan_parallel(self, files: List[Path], n_workers: int, show_progress: bool) -> Dict[Path, ParsedFile]:
        pages: Dict[Path, ParsedFile] = {}

        with ProcessPoolExecutor(max_workers=min(n_workers, len(files))) as pool:
            futures: Dict[Future, Path] = {
                pool.submit(scan_file_worker, path, self.settings): path
                for path in files
            }
            with tqdm(total=len(futures), desc="Indexing pages", unit=" page", disable=not show_progress) as bar:
                for fut in as_completed(futures):
                    path = futures[fut]
                    try:
                        record = fut.result()
                    except Exception as e:
                        # In-flight scans are left to finish; their results are discarded
                        pool.shutdown(wait=False, cancel_futures=True)
                        if isinstance(e, IndexBuildError):
                            raise
                        raise self._wrap(path, e) from e
                    pages[path] = record
                    bar.update(1)
        return pages

    @staticmethod
    def _wrap(path: Path, error: Exception) -> IndexBuildError:
        if isinstance(error, ScanError):
            logger.debug("Scan failed for %s: %s", path, error)
            return IndexBuildError(path, error)
        logger.error("Unexpected failure indexing %s: %s", path, error, exc_info=True)
        return IndexBuildError(path, error, "unexpected error")
