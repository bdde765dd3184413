# ============================================
# file: src/sitecheck/core/handlers/check_handler.py
# ============================================
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from site_audit.model import ValidationReport
from site_index.errors import SiteCheckError
from sitecheck.core.services import report_export_service
from sitecheck.core.services.site_check_service import SiteCheckService

logger = logging.getLogger(__name__)

check_help_text = """
  check <root> [--workers <N>] [--no-img] [--ignore-file <json>] [--out <json>] [--csv <csv>]
      Indexes <root>, then reports every internal link, image and fragment that does not resolve.
      Exit code 0 when clean, 2 when findings were reported, 1 on errors.
""".strip()

EXIT_FINDINGS = 2


def _print_report(report: ValidationReport) -> None:
    for b in report.broken_links:
        label = "image" if b.kind == "src" else "link"
        print(f"  ✗ broken {label}: {b.message}")
    for f in report.broken_fragments:
        print(f"  ✗ broken fragment: {f.message}")


def handle_check(args: List[str]) -> int:
    parser = argparse.ArgumentParser(prog="sitecheck check", description="Verify internal links of a rendered site.")
    parser.add_argument("root", type=Path, help="Root directory of the rendered site.")
    parser.add_argument("--workers", type=int, default=None,
                        help="Number of parallel processes (default: from config, 0 = CPU count).")
    parser.add_argument("--no-img", action="store_true", help="Skip checking <img src> targets.")
    parser.add_argument("--ignore-file", type=Path, default=None,
                        help='JSON file with {"links": [...], "images": [...]} glob patterns to skip.')
    parser.add_argument("--out", type=Path, default=None, help="Write the full report as JSON.")
    parser.add_argument("--csv", type=Path, default=None, help="Write one row per finding as CSV.")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")

    try:
        pargs = parser.parse_args(args)
    except SystemExit as e:
        return int(e.code or 0)

    service = SiteCheckService()
    try:
        index = service.index_controller(workers=pargs.workers).build_index(
            pargs.root,
            workers=pargs.workers,
            show_progress=service.show_progress() and not pargs.no_progress,
        )
        validator = service.validation_controller(
            check_images=False if pargs.no_img else None,
            ignore_file=pargs.ignore_file,
        )
    except SiteCheckError as e:
        logger.debug("Indexing failed", exc_info=True)
        print(f"❌ Index error: {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.error("Could not prepare validation: %s", e, exc_info=True)
        print(f"❌ Error: {e}")
        return 1

    report = validator.validate(index)

    try:
        if pargs.out:
            print(f"Report written to {report_export_service.write_json(report, pargs.out)}")
        if pargs.csv:
            print(f"Findings exported to {report_export_service.write_csv(report, pargs.csv)}")
    except OSError as e:
        logger.error("Export failed: %s", e, exc_info=True)
        print(f"❌ Export error: {e}")
        return 1

    summary = (
        f"{report.pages_checked} pages, {report.links_checked} links, {report.images_checked} images checked; "
        f"{report.external_skipped} external skipped, {report.ignored} ignored"
    )
    if report.ok:
        print(f"✅ No broken links ({summary}).")
        return 0

    print(f"❌ {report.findings_count} problems found ({summary}):")
    _print_report(report)
    return EXIT_FINDINGS
