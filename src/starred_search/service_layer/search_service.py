"""Search service orchestration layer.

Owns the session's search engine and rebuilds it from scratch whenever the
repository set changes. There is no incremental re-indexing path.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging

from starred_search.config import Settings
from starred_search.domain.model import RepositorySearchResult, StarredRepository
from starred_search.observability.metrics import (
    INDEX_DOC_COUNT,
    REBUILD_LATENCY,
    SEARCH_LATENCY,
    SEARCH_RESULTS,
    track_latency,
)
from starred_search.observability.tracing import create_span
from starred_search.search.engine import RepositorySearchEngine


logger = logging.getLogger(__name__)


class RepositorySearchService:
    """High-level search API over the user's starred repositories.

    Searches return nothing until ``rebuild`` has indexed a non-empty
    repository set.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self._engine: RepositorySearchEngine | None = None

    @property
    def is_ready(self) -> bool:
        return self._engine is not None

    @property
    def indexed_count(self) -> int:
        return self._engine.size if self._engine is not None else 0

    @property
    def engine(self) -> RepositorySearchEngine | None:
        return self._engine

    def rebuild(self, repositories: Sequence[StarredRepository]) -> int:
        """Replace the active index with one built from ``repositories``.

        Returns:
            Number of indexed repositories (duplicates by owner/name collapse)
        """
        if not repositories:
            self._engine = None
            INDEX_DOC_COUNT.set(0)
            logger.info("Search index cleared: no repositories to index")
            return 0

        with (
            create_span("starred_search.rebuild", attributes={"repositories.received": len(repositories)}) as span,
            track_latency(REBUILD_LATENCY),
        ):
            engine = RepositorySearchEngine(self.settings.engine_config())
            engine.add_all(repositories)
            engine.consolidate()
            span.set_attribute("repositories.indexed", engine.size)

        self._engine = engine
        INDEX_DOC_COUNT.set(engine.size)
        logger.info("Search index rebuilt with %d repositories (%d received)", engine.size, len(repositories))
        return engine.size

    def search(self, keywords: Iterable[str], *, limit: int | None = None) -> list[RepositorySearchResult]:
        """Rank indexed repositories for the given keywords.

        Args:
            keywords: Free-text keywords; each may contain several words
            limit: Maximum results, defaulting to ``Settings.default_limit``

        Returns:
            Ranked results, empty when the index is not ready or nothing matched
        """
        engine = self._engine
        if engine is None:
            logger.debug("Search skipped: index not ready")
            return []

        keyword_list = [keywords] if isinstance(keywords, str) else list(keywords)
        effective_limit = self.settings.default_limit if limit is None else limit
        with (
            create_span(
                "starred_search.search",
                attributes={"search.keywords": len(keyword_list), "search.limit": effective_limit},
            ) as span,
            track_latency(SEARCH_LATENCY),
        ):
            results = engine.search(keyword_list, limit=effective_limit)
            span.set_attribute("search.results", len(results))

        SEARCH_RESULTS.observe(len(results))
        logger.debug("Search completed: %d keywords -> %d results", len(keyword_list), len(results))
        return results
