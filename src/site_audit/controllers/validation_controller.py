import logging
import os
from pathlib import Path
from typing import Iterable, NamedTuple, Optional, Sequence

from site_audit.managers.ignore_manager import IgnoreManager
from site_audit.model import BrokenFragment, BrokenLink, ValidationReport
from site_audit.services.fragment_suggestion_service import FragmentSuggestionService
from site_index.model import ParsedFile, SiteIndex
from site_index.utils.site_url import ImgUrl, SiteUrl
from sitecheck.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class Resolution(NamedTuple):
    """Where an internal URL points. `page` is set only when the target is an indexed page."""
    candidate: Path
    exists: bool
    page: Optional[ParsedFile] = None
    reason: str = "not found"


class ValidationController:
    """
    Checks every internal link and image of a SiteIndex against the index itself.

    Unlike indexing, validation never stops early: every broken target and every
    unknown fragment is collected into one ValidationReport.
    """

    def __init__(
            self,
            *,
            check_images: bool = True,
            index_files: Sequence[str] = ("index.html",),
            ignore: Optional[IgnoreManager] = None,
            suggester: Optional[FragmentSuggestionService] = None,
    ) -> None:
        self.check_images = check_images
        self.index_files = tuple(index_files)
        self.ignore = ignore or IgnoreManager()
        self.suggester = suggester or FragmentSuggestionService()

    def resolve(self, index: SiteIndex, source: Path, url: SiteUrl) -> Resolution:
        """Maps an internal URL found in `source` onto the site tree."""
        root = index.root
        if url.path is None:
            candidate = source
        elif url.is_root_relative:
            candidate = root / url.path.lstrip("/")
        else:
            candidate = source.parent / url.path
        candidate = Path(os.path.normpath(candidate))

        if candidate != root and root not in candidate.parents:
            return Resolution(candidate, False, reason="outside site root")

        # Index keys are canonical, so symlinked files and directories must be followed
        real = candidate.resolve()
        if real in index:
            return Resolution(real, True, index[real])
        if real in index.assets:
            return Resolution(real, True)

        for name in self.index_files:
            dir_index = (real / name).resolve()
            if dir_index in index:
                return Resolution(dir_index, True, index[dir_index])
            if dir_index in index.assets:
                return Resolution(dir_index, True)

        return Resolution(candidate, False)

    def validate(self, index: SiteIndex) -> ValidationReport:
        report = ValidationReport(root=str(index.root), pages_checked=len(index))

        for source in sorted(index):
            record = index[source]
            self._check_urls(index, record, sorted(record.links, key=str), report)
            if self.check_images:
                self._check_urls(index, record, sorted(record.images, key=str), report)

        report.broken_links.sort(key=lambda b: (b.from_file, b.kind, b.target))
        report.broken_fragments.sort(key=lambda b: (b.from_file, b.target_file, b.fragment))
        logger.info(
            "Validated %d pages: %d broken links, %d broken fragments.",
            report.pages_checked, len(report.broken_links), len(report.broken_fragments),
        )
        return report

    def _check_urls(
            self,
            index: SiteIndex,
            record: ParsedFile,
            urls: Iterable[SiteUrl],
            report: ValidationReport,
    ) -> None:
        root = index.root
        from_file = PathUtils.display(record.path, root)

        for url in urls:
            is_image = isinstance(url, ImgUrl)
            if url.is_external:
                report.external_skipped += 1
                continue
            if self.ignore.is_ignored(url):
                report.ignored += 1
                continue

            if is_image:
                report.images_checked += 1
            else:
                report.links_checked += 1

            res = self.resolve(index, record.path, url)
            if not res.exists:
                report.broken_links.append(BrokenLink(
                    from_file=from_file,
                    target=str(url),
                    kind="src" if is_image else "href",
                    resolved=PathUtils.display(res.candidate, root),
                    reason=res.reason,
                ))
                logger.debug("Broken %s in %s: %s", "image" if is_image else "link", from_file, url)
                continue

            # Fragments only mean something on pages, and never on images
            if is_image or not url.fragment or res.page is None:
                continue
            if url.fragment not in res.page.fragments:
                report.broken_fragments.append(BrokenFragment(
                    from_file=from_file,
                    target_file=PathUtils.display(res.page.path, root),
                    fragment=url.fragment,
                    suggestions=self.suggester.suggest(url.fragment, res.page.fragments),
                ))
