"""Domain layer - repository records and search value objects.

No dependencies on infrastructure: the fetch layer, caches and UI live
outside this package and only exchange these models with the engine.
"""

from starred_search.domain.model import RepositorySearchResult, SearchOptions, StarredRepository


__all__ = [
    "RepositorySearchResult",
    "SearchOptions",
    "StarredRepository",
]
