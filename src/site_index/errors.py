# ============================================
# file: src/site_index/errors.py
# ============================================
from __future__ import annotations

from pathlib import Path
from typing import Optional


class SiteCheckError(Exception):
    """Base class for every failure raised while indexing a site."""


class MalformedUrlError(SiteCheckError, ValueError):
    """An href/src value could not be classified."""

    def __init__(self, raw: str, reason: str):
        # args must mirror the constructor so the error survives pickling
        super().__init__(raw, reason)
        self.raw = raw
        self.reason = reason

    def __str__(self) -> str:
        return f"Malformed url {self.raw!r}: {self.reason}"


class ScanError(SiteCheckError):
    """
    A single document could not be fully scanned.
    Carries the serialized element and the classifier error that caused it.
    """

    def __init__(
            self,
            element: str,
            attribute: str,
            cause: MalformedUrlError,
            file: Optional[Path] = None,
    ):
        super().__init__(element, attribute, cause, file)
        self.element = element
        self.attribute = attribute
        self.cause = cause
        self.file = file

    def __str__(self) -> str:
        where = f" of `{self.file}`" if self.file else ""
        return f"Error in parsing {self.attribute} in element{where}: {self.element}\n  {self.cause}"


class IndexBuildError(SiteCheckError):
    """
    The tree walk could not complete.
    `cause` is usually a ScanError; read failures carry the OSError/UnicodeDecodeError.
    """

    def __init__(self, file: Optional[Path], cause: Optional[BaseException] = None, message: str = ""):
        super().__init__(file, cause, message)
        self.file = file
        self.cause = cause
        self.message = message

    def __str__(self) -> str:
        if self.file is None:
            return self.message or "Index construction failed"
        text = f"Error parsing file `{self.file}`"
        if self.message:
            text += f": {self.message}"
        if self.cause is not None:
            text += f":\n  {self.cause}"
        return text
