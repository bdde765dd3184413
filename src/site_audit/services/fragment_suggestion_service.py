from difflib import get_close_matches
from typing import Iterable, List

from sitecheck.core.utils.text_utils import DEFAULT_PATTERNS, TextPatterns, to_id


class FragmentSuggestionService:
    """Proposes existing fragments for a fragment that matched nothing on its page."""

    def __init__(self, max_suggestions: int = 3, patterns: TextPatterns = DEFAULT_PATTERNS):
        self.max_suggestions = max(0, int(max_suggestions))
        self.patterns = patterns

    def _key(self, fragment: str) -> str:
        return to_id(fragment.lstrip("#"), self.patterns)

    def suggest(self, fragment: str, candidates: Iterable[str]) -> List[str]:
        if not self.max_suggestions:
            return []
        pool = sorted(candidates)
        wanted = self._key(fragment)

        # Same id after normalization ('#Install--Guide' vs '#install-guide') wins outright
        exact = [c for c in pool if wanted and self._key(c) == wanted]
        if exact:
            return exact[:self.max_suggestions]

        return get_close_matches(fragment, pool, n=self.max_suggestions, cutoff=0.6)
