"""Service layer - orchestrates the engine for a user session."""

from starred_search.service_layer.search_service import RepositorySearchService


__all__ = ["RepositorySearchService"]
