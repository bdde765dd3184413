# tests/core/test_text_utils.py
import re
from datetime import datetime

import pytest

from sitecheck.core.utils.path_utils import PathUtils
from sitecheck.core.utils.text_utils import TextPatterns, slugify, to_id


@pytest.mark.parametrize("text, expected", [
    ("One Two", "one-two"),
    ("1-2_3?4#5(6) 7!8&9", "1-2_3456-789"),
    ("Mods & Symbols", "mods-symbols"),
    ("()one---two???", "one-two"),
    ("-trimmed--", "trimmed"),
    ("_trimmed__", "trimmed"),
])
def test_to_id(text, expected):
    assert to_id(text) == expected


@pytest.mark.parametrize("text, expected", [
    ("One Two", "one_two"),
    ("1-2_3?4#5(6) 7!8&9", "1-2_3456_789"),
    ("Mods & Symbols", "mods_symbols"),
    ("()one___two???", "one_two"),
    ("-trimmed--", "trimmed"),
    ("_trimmed__", "trimmed"),
])
def test_slugify(text, expected):
    assert slugify(text) == expected


def test_patterns_can_be_injected():
    # Keep dots instead of stripping them
    patterns = TextPatterns(symbols=re.compile(r"[^\sa-zA-Z0-9_.-]+"))
    assert to_id("Version 1.2!", patterns) == "version-1.2"
    assert to_id("Version 1.2!") == "version-12"


def test_last_modified(tmp_path):
    with pytest.raises(FileNotFoundError):
        PathUtils.last_modified(tmp_path / "non_existent")

    f = tmp_path / "page.html"
    f.write_text("<p>x</p>")
    modified = PathUtils.last_modified(f)
    assert isinstance(modified, datetime)
    assert modified.tzinfo is None
    assert modified.year >= 2020
