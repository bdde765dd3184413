# tests/core/test_check_handler.py
import json
from unittest.mock import MagicMock, patch

import pandas as pd
import pytest

from site_index.errors import IndexBuildError
from sitecheck.app import main
from sitecheck.core.handlers.check_handler import EXIT_FINDINGS, handle_check
from sitecheck.core.handlers.index_handler import handle_index


@pytest.fixture
def clean_site(make_site, html_page):
    return make_site({
        "index.html": html_page('<a href="about.html#team">About</a><img src="logo.png">'),
        "about.html": html_page('<h2 id="team">Team</h2><a href="/">Home</a>'),
        "logo.png": b"\x89PNG",
    })


@pytest.fixture
def broken_site(make_site, html_page):
    return make_site({
        "index.html": html_page('<a href="missing.html">x</a><a href="about.html#nope">y</a><img src="gone.png">'),
        "about.html": html_page('<h2 id="team">Team</h2>'),
    })


def test_check_clean_site(clean_site, capsys):
    exit_code = handle_check([str(clean_site), "--workers", "1", "--no-progress"])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "No broken links" in captured.out


def test_check_reports_findings(broken_site, capsys):
    exit_code = handle_check([str(broken_site), "--workers", "1", "--no-progress"])
    out = capsys.readouterr().out

    assert exit_code == EXIT_FINDINGS
    assert "3 problems found" in out
    assert "broken link: index.html -> missing.html" in out
    assert "broken image: index.html -> gone.png" in out
    assert "broken fragment: index.html -> about.html#nope" in out


def test_check_no_img_skips_images(broken_site, capsys):
    handle_check([str(broken_site), "--workers", "1", "--no-progress", "--no-img"])
    out = capsys.readouterr().out
    assert "2 problems found" in out
    assert "gone.png" not in out


def test_check_exports_json_and_csv(broken_site, tmp_path, capsys):
    json_out = tmp_path / "out" / "report.json"
    csv_out = tmp_path / "out" / "findings.csv"

    exit_code = handle_check([
        str(broken_site), "--workers", "1", "--no-progress",
        "--out", str(json_out), "--csv", str(csv_out),
    ])
    assert exit_code == EXIT_FINDINGS

    data = json.loads(json_out.read_text(encoding="utf-8"))
    assert data["pages_checked"] == 2
    assert [b["target"] for b in data["broken_links"]] == ["missing.html", "gone.png"]
    assert data["broken_fragments"][0]["fragment"] == "#nope"

    df = pd.read_csv(csv_out)
    assert list(df.columns) == ["Type", "Source", "Target", "Resolved", "Detail"]
    assert sorted(df["Type"]) == ["broken_fragment", "broken_image", "broken_link"]


def test_check_export_into_directory_uses_default_name(broken_site, tmp_path):
    out_dir = tmp_path / "reports"
    out_dir.mkdir()
    handle_check([str(broken_site), "--workers", "1", "--no-progress", "--csv", str(out_dir)])
    assert (out_dir / "sitecheck_site.csv").is_file()


def test_check_index_failure_returns_error(make_site, html_page, capsys):
    root = make_site({"bad.html": html_page('<a href="ht!tp://bad">bad</a>')})

    exit_code = handle_check([str(root), "--workers", "1", "--no-progress"])
    out = capsys.readouterr().out

    assert exit_code == 1
    assert "Index error" in out
    assert "bad.html" in out


@patch("sitecheck.core.handlers.check_handler.SiteCheckService")
def test_check_uses_configured_controllers(mock_service_class, tmp_path, capsys):
    mock_service = MagicMock()
    mock_service.show_progress.return_value = False
    mock_service.index_controller.return_value.build_index.side_effect = IndexBuildError(
        None, message="Site root `x` is not a directory"
    )
    mock_service_class.return_value = mock_service

    exit_code = handle_check([str(tmp_path / "x"), "--workers", "3"])

    assert exit_code == 1
    mock_service.index_controller.assert_called_once_with(workers=3)
    mock_service.index_controller.return_value.build_index.assert_called_once()
    assert "not a directory" in capsys.readouterr().out


def test_index_command_prints_counts(clean_site, capsys):
    exit_code = handle_index([str(clean_site), "--workers", "1", "--no-progress"])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert "Indexed 2 pages" in out
    assert "2 fragments" not in out
    assert "1 fragments" in out


def test_main_dispatches_commands(clean_site, capsys):
    assert main(["check", str(clean_site), "--workers", "1", "--no-progress"]) == 0
    assert "No broken links" in capsys.readouterr().out


def test_main_help_and_unknown_command(capsys):
    assert main(["--help"]) == 0
    assert "check <root>" in capsys.readouterr().out

    assert main(["frobnicate"]) == 1
    assert "Unknown command: frobnicate" in capsys.readouterr().out


def test_main_rejects_unreadable_config(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "missing.json"), "check", str(tmp_path)]) == 1
    assert "Could not load settings" in capsys.readouterr().out
