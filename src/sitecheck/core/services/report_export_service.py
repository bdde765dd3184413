import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from site_audit.model import ValidationReport
from sitecheck.core.utils.text_utils import slugify

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["Type", "Source", "Target", "Resolved", "Detail"]


def default_report_name(root: Path, suffix: str) -> str:
    """e.g. 'sitecheck_public_html.csv' for a site rooted at .../Public HTML."""
    name = slugify(Path(root).name) or "site"
    return f"sitecheck_{name}{suffix}"


def _target(path: Optional[Path], report: ValidationReport, suffix: str) -> Path:
    if path is None:
        return Path.cwd() / default_report_name(Path(report.root), suffix)
    path = Path(path)
    if path.is_dir():
        return path / default_report_name(Path(report.root), suffix)
    return path


def write_json(report: ValidationReport, path: Optional[Path] = None) -> Path:
    """Writes the full report (counters and findings) as JSON."""
    out = _target(path, report, ".json")
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(report.model_dump_json(indent=2), encoding="utf-8")
    logger.info("Report written to %s", out)
    return out


def write_csv(report: ValidationReport, path: Optional[Path] = None) -> Path:
    """Writes one row per finding. An empty report still gets a header row."""
    out = _target(path, report, ".csv")
    out.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(report.rows(), columns=CSV_COLUMNS)
    df.to_csv(out, index=False)
    logger.info("Exported %d findings to %s", len(df), out)
    return out
