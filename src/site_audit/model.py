from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class BrokenLink(BaseModel):
    """
    An internal href/src whose target exists neither as an indexed page nor as a file.
    Paths are root-relative posix strings so reports are stable across machines.
    """
    model_config = ConfigDict(frozen=True)

    from_file: str
    target: str
    kind: Literal["href", "src"] = "href"
    resolved: Optional[str] = None
    reason: str = "not found"

    @property
    def message(self) -> str:
        return f"{self.from_file} -> {self.target} ({self.reason})"


class BrokenFragment(BaseModel):
    """A link to an existing page whose fragment matches no `id` on that page."""
    model_config = ConfigDict(frozen=True)

    from_file: str
    target_file: str
    fragment: str
    suggestions: List[str] = Field(default_factory=list)

    @property
    def message(self) -> str:
        text = f"{self.from_file} -> {self.target_file}{self.fragment}"
        if self.suggestions:
            text += f" (did you mean {', '.join(self.suggestions)}?)"
        return text


class ValidationReport(BaseModel):
    """Every finding of one validation run plus the counters needed for a summary line."""
    root: str
    pages_checked: int = 0
    links_checked: int = 0
    images_checked: int = 0
    external_skipped: int = 0
    ignored: int = 0
    broken_links: List[BrokenLink] = Field(default_factory=list)
    broken_fragments: List[BrokenFragment] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def ok(self) -> bool:
        return not self.broken_links and not self.broken_fragments

    @property
    def findings_count(self) -> int:
        return len(self.broken_links) + len(self.broken_fragments)

    def rows(self) -> List[Dict[str, Any]]:
        """Flat rows for tabular export, one per finding."""
        out: List[Dict[str, Any]] = []
        for b in self.broken_links:
            out.append({
                "Type": "broken_image" if b.kind == "src" else "broken_link",
                "Source": b.from_file,
                "Target": b.target,
                "Resolved": b.resolved,
                "Detail": b.reason,
            })
        for f in self.broken_fragments:
            out.append({
                "Type": "broken_fragment",
                "Source": f.from_file,
                "Target": f"{f.target_file}{f.fragment}",
                "Resolved": f.target_file,
                "Detail": ", ".join(f.suggestions),
            })
        return out
