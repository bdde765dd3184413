from __future__ import annotations

import logging
from pathlib import Path
from typing import FrozenSet, Optional, Set

from bs4 import BeautifulSoup, Tag

from site_index.errors import MalformedUrlError, ScanError
from site_index.model import ScanResult, ScanSettings
from site_index.utils.site_url import HrefUrl, ImgUrl

logger = logging.getLogger(__name__)

ELEMENT_PREVIEW_CHARS = 200


class DocumentScanService:
    """
    Extracts outbound links, image targets and fragment ids from one HTML document.
    Stateless apart from the injected settings; one instance can scan any number of documents.
    """

    def __init__(self, settings: Optional[ScanSettings] = None):
        self.settings = settings or ScanSettings()

    def parse(self, content: str) -> BeautifulSoup:
        # html.parser tolerates unclosed tags and unknown attributes
        return BeautifulSoup(content or "", self.settings.parser)

    def scan(self, content: str, source: Optional[Path] = None) -> ScanResult:
        """Parses `content` and returns its links, images and fragments. Raises ScanError."""
        return self.scan_document(self.parse(content), source)

    def scan_document(self, document: BeautifulSoup, source: Optional[Path] = None) -> ScanResult:
        return ScanResult(
            links=self.collect_links(document, source),
            images=self.collect_images(document, source),
            fragments=self.collect_fragments(document),
        )

    # -------- Collectors --------

    def collect_links(self, document: BeautifulSoup, source: Optional[Path] = None) -> FrozenSet[HrefUrl]:
        hrefs: Set[HrefUrl] = set()
        for element in document.select(self.settings.selectors.links):
            href = element.get("href")
            if href is None:
                continue
            hrefs.add(self._classify(HrefUrl, element, "href", href, source))
        return frozenset(hrefs)

    def collect_images(self, document: BeautifulSoup, source: Optional[Path] = None) -> FrozenSet[ImgUrl]:
        imgs: Set[ImgUrl] = set()
        for element in document.select(self.settings.selectors.images):
            src = element.get("src")
            if src is None:
                continue
            imgs.add(self._classify(ImgUrl, element, "src", src, source))
        return frozenset(imgs)

    def collect_fragments(self, document: BeautifulSoup) -> FrozenSet[str]:
        # Duplicate ids are tolerated here
        fragments: Set[str] = set()
        for element in document.select(self.settings.selectors.fragments):
            value = element.get("id")
            if value is None:
                continue
            fragments.add(f"#{value}")
        return frozenset(fragments)

    # -------- Helpers --------

    @staticmethod
    def _attr_text(value) -> str:
        # bs4 hands back a list for multi-valued attributes
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def _classify(self, url_type, element: Tag, attribute: str, value, source: Optional[Path]):
        try:
            return url_type.parse(self._attr_text(value))
        except MalformedUrlError as err:
            raise ScanError(
                element=self.describe_element(element),
                attribute=attribute,
                cause=err,
                file=source,
            ) from err

    @staticmethod
    def describe_element(element: Tag) -> str:
        """Serialized element, truncated for log output."""
        text = str(element)
        if len(text) > ELEMENT_PREVIEW_CHARS:
            text = text[:ELEMENT_PREVIEW_CHARS - 3] + "..."
        return text
