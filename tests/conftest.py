"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
import logging
import os

import pytest

from starred_search.domain.model import StarredRepository
from starred_search.search.engine import RepositorySearchEngine


FIXED_TIMESTAMP = datetime(2024, 1, 1, tzinfo=timezone.utc)

RepositoryFactory = Callable[..., StarredRepository]


def make_repository(
    owner: str,
    name: str,
    description: str | None = None,
    readme: str | None = None,
) -> StarredRepository:
    return StarredRepository(
        owner=owner,
        name=name,
        description=description,
        readme=readme,
        stargazer_count=100,
        fork_count=10,
        pushed_at=FIXED_TIMESTAMP,
        updated_at=FIXED_TIMESTAMP,
        starred_at=FIXED_TIMESTAMP,
    )


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Keep host STARRED_SEARCH_* variables and .env files out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("STARRED_SEARCH_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def repository_factory() -> RepositoryFactory:
    return make_repository


@pytest.fixture
def frontend_repositories() -> list[StarredRepository]:
    return [
        make_repository(
            "facebook",
            "react",
            "A JavaScript library for building user interfaces",
            "# React\nReact is a JavaScript library for building user interfaces.",
        ),
        make_repository(
            "vercel",
            "next.js",
            "The React Framework for Production",
            "# Next.js\nNext.js is a React framework for production.",
        ),
        make_repository(
            "angular",
            "angular",
            "The modern web developer's platform",
            "# Angular\nAngular is a platform for building web applications.",
        ),
    ]


@pytest.fixture
def frontend_engine(frontend_repositories) -> RepositorySearchEngine:
    engine = RepositorySearchEngine()
    engine.add_all(frontend_repositories)
    engine.consolidate()
    return engine


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by configure_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
