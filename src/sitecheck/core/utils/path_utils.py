# src/sitecheck/core/utils/path_utils.py
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for retrieving package paths and walking a site tree.
    """

    # --- Package specific paths

    @staticmethod
    def get_package_root() -> Path:
        """Returns the directory of the installed `sitecheck` package."""
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    # --- Site tree helpers ---

    @staticmethod
    def find_files(root: Path, pattern: str) -> List[Path]:
        """
        Returns resolved regular files under `root` matching the glob `pattern`.
        Directories and dangling symlinks are skipped.
        """
        found = set()
        for path in root.glob(pattern):
            if not path.is_file():
                logger.debug("Skipping non-file match %s", path)
                continue
            found.add(path.resolve())
        return sorted(found)

    @staticmethod
    def all_files(root: Path) -> List[Path]:
        return PathUtils.find_files(root, "**/*")

    @staticmethod
    def display(path: Path, root: Path) -> str:
        """Root-relative posix path for reports; falls back to the absolute path."""
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            return str(path)

    @staticmethod
    def last_modified(path: Path) -> datetime:
        """Modification time of `path` as a naive UTC datetime, to the second."""
        ts = int(path.stat().st_mtime)
        return datetime.fromtimestamp(ts, tz=timezone.utc).replace(tzinfo=None)
