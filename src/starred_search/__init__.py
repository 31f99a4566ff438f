"""starred-search - in-memory BM25+ ranking over starred GitHub repositories."""

from starred_search.config import EngineConfig, FieldWeights, Settings, compose_config
from starred_search.domain.model import RepositorySearchResult, SearchOptions, StarredRepository
from starred_search.search.engine import IndexInvariantError, RepositorySearchEngine
from starred_search.service_layer.search_service import RepositorySearchService


__version__ = "0.1.0"

__all__ = [
    "EngineConfig",
    "FieldWeights",
    "IndexInvariantError",
    "RepositorySearchEngine",
    "RepositorySearchResult",
    "RepositorySearchService",
    "SearchOptions",
    "Settings",
    "StarredRepository",
    "compose_config",
]
