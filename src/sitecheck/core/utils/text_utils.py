# src/sitecheck/core/utils/text_utils.py
import re
from dataclasses import dataclass, field
from typing import Pattern


@dataclass(frozen=True)
class TextPatterns:
    """Compiled patterns for identifier normalization. Build once, pass where needed."""
    underscores: Pattern = field(default_factory=lambda: re.compile(r"\s+|_+"))
    dashes: Pattern = field(default_factory=lambda: re.compile(r"\s+|-+"))
    symbols: Pattern = field(default_factory=lambda: re.compile(r"[^\sa-zA-Z0-9_-]+"))


DEFAULT_PATTERNS = TextPatterns()


def _trim(s: str) -> str:
    s = s.lstrip("_").lstrip("-")
    return s.rstrip("_").rstrip("-")


def to_id(s: str, patterns: TextPatterns = DEFAULT_PATTERNS) -> str:
    """Turns a heading-like string into an `id` value: 'Mods & Symbols' -> 'mods-symbols'."""
    s = patterns.symbols.sub("", s.strip())
    s = patterns.dashes.sub("-", s)
    return _trim(s).lower()


def slugify(s: str, patterns: TextPatterns = DEFAULT_PATTERNS) -> str:
    """Like to_id but joins words with underscores: 'One Two' -> 'one_two'."""
    s = patterns.symbols.sub("", s.strip())
    s = patterns.underscores.sub("_", s)
    return _trim(s).lower()
