"""Domain models for repository search.

Value objects are immutable (frozen=True) and carry no infrastructure
dependencies. Repository records arrive from the fetch layer in camelCase, so
the models accept both camelCase aliases and snake_case field names.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from starred_search.config import DEFAULT_SEARCH_LIMIT


class StarredRepository(BaseModel):
    """A repository the user has starred, as supplied by the fetch layer.

    Only ``owner``, ``name``, ``description`` and ``readme`` are indexed; the
    remaining metadata is passed through to search results untouched.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    owner: str
    name: str
    description: str | None = None
    readme: str | None = None
    stargazer_count: int = 0
    fork_count: int = 0
    pushed_at: datetime | None = None
    updated_at: datetime | None = None
    starred_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class SearchOptions(BaseModel):
    """Per-call search options. Non-positive limits are floored by the engine."""

    model_config = ConfigDict(frozen=True)

    limit: int = DEFAULT_SEARCH_LIMIT


class RepositorySearchResult(BaseModel):
    """A ranked repository plus the query tokens that matched it."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    repository: StarredRepository
    score: float
    matched_tokens: list[str] = Field(default_factory=list)
