# tests/conftest.py
from pathlib import Path
from typing import Callable, Dict, Union

import pytest

PAGE = """<!DOCTYPE html>
<html><head><title>{title}</title></head>
<body>
{body}
</body></html>
"""


def page(body: str, title: str = "Test") -> str:
    return PAGE.format(title=title, body=body)


@pytest.fixture
def make_site(tmp_path) -> Callable[[Dict[str, Union[str, bytes]]], Path]:
    """
    Writes a site tree below tmp_path/site from {relative_path: content}.
    Bytes are written raw, strings as UTF-8.
    """

    def _make(files: Dict[str, Union[str, bytes]]) -> Path:
        root = tmp_path / "site"
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def html_page() -> Callable[..., str]:
    """Wraps a body snippet in a minimal HTML document."""
    return page
