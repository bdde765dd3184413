# src/site_audit/managers/ignore_manager.py
import json
import logging
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Set

from site_index.utils.site_url import ImgUrl, SiteUrl

logger = logging.getLogger(__name__)


class IgnoreManager:
    """
    Holds the glob patterns of link and image targets that validation should skip.
    Patterns are matched against the normalized URL, e.g. '/drafts/*' or '*.pdf'.
    """

    def __init__(self, links: Iterable[str] = (), images: Iterable[str] = ()):
        self.ignored_links: Set[str] = {p.strip() for p in links if p and p.strip()}
        self.ignored_images: Set[str] = {p.strip() for p in images if p and p.strip()}

    @classmethod
    def from_file(cls, path: Path, links: Iterable[str] = (), images: Iterable[str] = ()) -> "IgnoreManager":
        """
        Loads `{"links": [...], "images": [...]}` from a JSON file and merges it with
        the given patterns. A missing file only logs a warning.
        """
        manager = cls(links, images)
        if not path.exists():
            logger.warning("Ignore file %s not found; using configured patterns only.", path)
            return manager
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Ignore file {path} must contain a JSON object")
        manager.update(data.get("links") or [], data.get("images") or [])
        logger.debug(
            "Loaded ignore file %s (%d link, %d image patterns).",
            path, len(manager.ignored_links), len(manager.ignored_images),
        )
        return manager

    def update(self, links: Iterable[str] = (), images: Iterable[str] = ()) -> None:
        self.ignored_links.update(p.strip() for p in links if p and p.strip())
        self.ignored_images.update(p.strip() for p in images if p and p.strip())

    def is_ignored(self, url: SiteUrl) -> bool:
        patterns = self.ignored_images if isinstance(url, ImgUrl) else self.ignored_links
        if not patterns:
            return False
        text = str(url)
        return any(fnmatchcase(text, p) for p in patterns)
