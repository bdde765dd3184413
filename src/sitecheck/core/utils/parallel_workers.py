# file: src/sitecheck/core/utils/parallel_workers.py
import logging
from pathlib import Path

from site_index.errors import IndexBuildError, ScanError
from site_index.model import ParsedFile, ScanSettings
from site_index.services.document_scan_service import DocumentScanService
from sitecheck.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


def scan_file_worker(path: Path, settings: ScanSettings) -> ParsedFile:
    """
    Worker function reading and scanning one HTML file.
    Runs in-process or in a pool process; everything it returns or raises is picklable.

    Raises:
        IndexBuildError: the file could not be read or decoded.
        ScanError: an href/src value in the file could not be classified.
    """
    try:
        content = path.read_text(encoding="utf-8")
        modified_at = PathUtils.last_modified(path)
    except (OSError, UnicodeDecodeError) as e:
        raise IndexBuildError(path, e, "could not read file") from e

    svc = DocumentScanService(settings)
    try:
        result = svc.scan(content, source=path)
    except ScanError:
        logger.debug("Worker failed scanning %s", path)
        raise

    logger.debug(
        "Scanned %s: %d links, %d images, %d fragments",
        path, len(result.links), len(result.images), len(result.fragments),
    )
    return ParsedFile.from_scan(
        path, content, result, modified_at=modified_at, parser=settings.parser
    )
