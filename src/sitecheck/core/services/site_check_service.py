# src/sitecheck/core/services/site_check_service.py
import logging
from pathlib import Path
from typing import Optional

from site_audit.controllers.validation_controller import ValidationController
from site_audit.managers.ignore_manager import IgnoreManager
from site_audit.services.fragment_suggestion_service import FragmentSuggestionService
from site_index.controllers.index_controller import DEFAULT_PATTERN, IndexController
from site_index.model import ScanSelectors, ScanSettings
from sitecheck.core.managers.config_manager import ConfigManager, config_manager

logger = logging.getLogger(__name__)


class SiteCheckService:
    """
    Builds the index and validation controllers from configuration.
    Explicit arguments always win over configured values.
    """

    def __init__(self, config: Optional[ConfigManager] = None):
        self.config = config or config_manager

    def scan_settings(self) -> ScanSettings:
        selectors = self.config.get_nested("scanner.selectors", {}) or {}
        return ScanSettings(
            parser=self.config.get_nested("scanner.parser", "html.parser"),
            selectors=ScanSelectors(**selectors),
        )

    def index_controller(self, *, workers: Optional[int] = None, pattern: Optional[str] = None) -> IndexController:
        cfg_workers = int(self.config.get_nested("indexer.workers", 0) or 0)
        return IndexController(
            settings=self.scan_settings(),
            pattern=pattern or self.config.get_nested("indexer.pattern", DEFAULT_PATTERN),
            default_workers=workers or cfg_workers or None,
        )

    def validation_controller(
            self,
            *,
            check_images: Optional[bool] = None,
            ignore_file: Optional[Path] = None,
    ) -> ValidationController:
        links = self.config.get_nested("validator.ignore_links", []) or []
        images = self.config.get_nested("validator.ignore_images", []) or []
        if ignore_file is not None:
            ignore = IgnoreManager.from_file(ignore_file, links, images)
        else:
            ignore = IgnoreManager(links, images)

        if check_images is None:
            check_images = bool(self.config.get_nested("validator.check_images", True))

        return ValidationController(
            check_images=check_images,
            index_files=self.config.get_nested("validator.index_files", ["index.html"]),
            ignore=ignore,
            suggester=FragmentSuggestionService(
                max_suggestions=self.config.get_nested("validator.max_suggestions", 3)
            ),
        )

    def show_progress(self) -> bool:
        return bool(self.config.get_nested("indexer.show_progress", True))
