"""Search package exports.

Combines the recursive name search, the search-mode session record, and the
debounced background scheduler in one import surface.
"""

from __future__ import annotations

from .scheduler import DEFAULT_DEBOUNCE_SECONDS, SearchCompletion, SearchRequest, SearchScheduler
from .session import SearchSession
from .tree import SearchResult, normalize_query, search_tree

__all__ = [
    "DEFAULT_DEBOUNCE_SECONDS",
    "SearchCompletion",
    "SearchRequest",
    "SearchResult",
    "SearchScheduler",
    "SearchSession",
    "normalize_query",
    "search_tree",
]
