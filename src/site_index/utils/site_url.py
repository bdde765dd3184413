# src/site_index/utils/site_url.py
import logging
import posixpath
import re
from enum import Enum
from typing import Optional, Type, TypeVar, Union
from urllib.parse import unquote, urlsplit, urlunsplit

from pydantic import BaseModel, ConfigDict

from site_index.errors import MalformedUrlError

logger = logging.getLogger(__name__)

# Schemes whose URLs are meaningless without a host.
NETWORK_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

T = TypeVar("T", bound="SiteUrl")


class UrlKind(str, Enum):
    HREF = "href"
    SRC = "src"


class SiteUrl(BaseModel):
    """
    A classified, normalized URL found in a rendered page.

    Exactly one of two shapes:
    - external: `external` holds the normalized absolute URL, `path`/`fragment` are None.
    - internal: `external` is None, `path` is a normalized posix path (leading '/' means
      root-relative, None means "this page") and `fragment` is '#id' or None.
    """
    model_config = ConfigDict(frozen=True)

    external: Optional[str] = None
    path: Optional[str] = None
    fragment: Optional[str] = None

    @property
    def is_external(self) -> bool:
        return self.external is not None

    @property
    def is_internal(self) -> bool:
        return self.external is None

    @property
    def is_root_relative(self) -> bool:
        return self.path is not None and self.path.startswith("/")

    @property
    def is_self_reference(self) -> bool:
        """True for '#section', '' and '?q=1' style references to the containing page."""
        return self.is_internal and self.path is None

    def __str__(self) -> str:
        if self.external is not None:
            return self.external
        return f"{self.path or ''}{self.fragment or ''}"

    @classmethod
    def parse(cls: Type[T], raw: str) -> T:
        """Classifies a raw attribute value. Raises MalformedUrlError."""
        if raw is None:
            raise MalformedUrlError("", "missing value")
        value = raw.strip()

        if _CONTROL_CHARS.search(value):
            raise MalformedUrlError(raw, "contains control characters")
        if "\\" in value:
            raise MalformedUrlError(raw, "contains a backslash")

        try:
            parts = urlsplit(value)
            # .port validates lazily and raises ValueError on garbage
            _ = parts.port
        except ValueError as e:
            raise MalformedUrlError(raw, str(e)) from e

        scheme = parts.scheme.lower()
        if scheme:
            if scheme in NETWORK_SCHEMES and not parts.hostname:
                raise MalformedUrlError(raw, f"missing host for '{scheme}' url")
            return cls(external=UrlUtils.normalize_external(parts))

        if parts.netloc:
            # Protocol-relative (//cdn.example.com/x.js)
            if not parts.hostname:
                raise MalformedUrlError(raw, "missing host")
            return cls(external=UrlUtils.normalize_external(parts))

        first_segment = parts.path.split("/", 1)[0]
        if ":" in first_segment:
            raise MalformedUrlError(raw, "invalid scheme")

        return cls(
            path=UrlUtils.normalize_path(parts.path),
            fragment=UrlUtils.normalize_fragment(parts.fragment),
        )


class HrefUrl(SiteUrl):
    """URL taken from an `href` attribute."""


class ImgUrl(SiteUrl):
    """URL taken from a `src` attribute. Fragments are kept but carry no meaning."""


class UrlUtils:
    """Static normalization helpers shared by the URL types."""

    @staticmethod
    def normalize_path(path: str) -> Optional[str]:
        """
        Collapses './', '..', duplicate and trailing slashes.
        Returns None for an empty path (a reference to the current page).
        """
        if not path:
            return None
        decoded = unquote(path)
        rooted = decoded.startswith("/")
        normalized = posixpath.normpath(decoded.lstrip("/") if rooted else decoded)
        if rooted:
            # normpath keeps leading '..' for relative input; nothing exists above the root
            segments = [s for s in normalized.split("/") if s not in ("", ".", "..")]
            return "/" + "/".join(segments)
        return normalized

    @staticmethod
    def normalize_fragment(fragment: str) -> Optional[str]:
        if not fragment:
            return None
        return "#" + unquote(fragment)

    @staticmethod
    def normalize_external(parts) -> str:
        scheme = parts.scheme.lower()
        netloc = parts.netloc
        if parts.hostname:
            # Lower-case the host but leave any userinfo/port untouched
            host = parts.hostname
            start = netloc.lower().rfind(host)
            netloc = netloc[:start] + host + netloc[start + len(host):]
        path = parts.path
        if (scheme in NETWORK_SCHEMES or not scheme) and not path:
            path = "/"
        return urlunsplit((scheme, netloc, path, parts.query, parts.fragment))


def classify(raw: str, kind: Union[UrlKind, str]) -> SiteUrl:
    """Parses an attribute value into an HrefUrl (kind=href) or ImgUrl (kind=src)."""
    kind = UrlKind(kind)
    url_type = HrefUrl if kind is UrlKind.HREF else ImgUrl
    return url_type.parse(raw)
