# ============================================
# file: src/sitecheck/core/handlers/index_handler.py
# ============================================
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from site_index.errors import SiteCheckError
from sitecheck.core.services.site_check_service import SiteCheckService

logger = logging.getLogger(__name__)

index_help_text = """
  index <root> [--workers <N>] [--pattern <glob>] [--no-progress]
      Scans every HTML file under <root> and prints link, image and fragment counts.
      Fails on the first file with an unclassifiable href/src.
""".strip()


def handle_index(args: List[str]) -> int:
    parser = argparse.ArgumentParser(prog="sitecheck index", description="Index a rendered site.")
    parser.add_argument("root", type=Path, help="Root directory of the rendered site.")
    parser.add_argument("--workers", type=int, default=None,
                        help="Number of parallel processes (default: from config, 0 = CPU count).")
    parser.add_argument("--pattern", type=str, default=None, help="Glob for HTML files (default: **/*.html).")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")

    try:
        pargs = parser.parse_args(args)
    except SystemExit as e:
        return int(e.code or 0)

    service = SiteCheckService()
    controller = service.index_controller(workers=pargs.workers, pattern=pargs.pattern)

    try:
        index = controller.build_index(
            pargs.root,
            workers=pargs.workers,
            show_progress=service.show_progress() and not pargs.no_progress,
        )
    except SiteCheckError as e:
        logger.debug("Indexing failed", exc_info=True)
        print(f"❌ Index error: {e}")
        return 1

    stats = index.stats()
    print(
        f"✅ Indexed {stats['pages']} pages under {index.root}: "
        f"{stats['links']} links, {stats['images']} images, {stats['fragments']} fragments, "
        f"{stats['assets']} files total."
    )
    return 0
