# ============================================
# file: src/site_index/model.py
# ============================================
from __future__ import annotations

from datetime import datetime
from functools import cached_property
from pathlib import Path
from collections.abc import Mapping
from typing import Dict, FrozenSet, Iterator, Optional

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, Field

from site_index.utils.site_url import HrefUrl, ImgUrl


class ScanSelectors(BaseModel):
    """CSS selectors used to find link, image and fragment carrying elements."""
    model_config = ConfigDict(frozen=True)

    links: str = "[href]"
    images: str = "[src]"
    fragments: str = "[id]"


class ScanSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    parser: str = "html.parser"
    selectors: ScanSelectors = Field(default_factory=ScanSelectors)


class ScanResult(BaseModel):
    """The three unordered collections extracted from one document."""
    model_config = ConfigDict(frozen=True)

    links: FrozenSet[HrefUrl] = frozenset()
    images: FrozenSet[ImgUrl] = frozenset()
    fragments: FrozenSet[str] = frozenset()


class ParsedFile(BaseModel):
    """
    One scanned page. `html` is rebuilt from `content` on first access so records
    can be produced in worker processes without pickling parse trees.
    """
    model_config = ConfigDict(frozen=True)

    path: Path
    content: str
    links: FrozenSet[HrefUrl] = frozenset()
    images: FrozenSet[ImgUrl] = frozenset()
    fragments: FrozenSet[str] = frozenset()
    modified_at: Optional[datetime] = None
    parser: str = "html.parser"

    @cached_property
    def html(self) -> BeautifulSoup:
        return BeautifulSoup(self.content, self.parser)

    @classmethod
    def from_scan(
            cls,
            path: Path,
            content: str,
            result: ScanResult,
            *,
            modified_at: Optional[datetime] = None,
            parser: str = "html.parser",
    ) -> "ParsedFile":
        return cls(
            path=path,
            content=content,
            links=result.links,
            images=result.images,
            fragments=result.fragments,
            modified_at=modified_at,
            parser=parser,
        )


class SiteIndex(Mapping):
    """
    Read-only mapping of resolved page path -> ParsedFile for one verification run.
    `assets` lists every regular file under the root, pages included.
    """

    def __init__(self, root: Path, pages: Dict[Path, ParsedFile], assets: FrozenSet[Path] = frozenset()):
        self._root = root
        self._pages = dict(pages)
        self._assets = frozenset(assets) | frozenset(self._pages)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def assets(self) -> FrozenSet[Path]:
        return self._assets

    def __getitem__(self, path: Path) -> ParsedFile:
        return self._pages[path]

    def __iter__(self) -> Iterator[Path]:
        return iter(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def __repr__(self) -> str:
        return f"<SiteIndex root={self._root} pages={len(self._pages)} assets={len(self._assets)}>"

    def stats(self) -> Dict[str, int]:
        return {
            "pages": len(self._pages),
            "assets": len(self._assets),
            "links": sum(len(p.links) for p in self._pages.values()),
            "images": sum(len(p.images) for p in self._pages.values()),
            "fragments": sum(len(p.fragments) for p in self._pages.values()),
        }
