"""In-memory BM25+ ranking engine over starred repository metadata.

Documents are added one at a time, ``consolidate`` finalizes corpus statistics
and per-token scores, and ``search`` sums the precomputed scores of every query
token a document contains.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
import logging
from typing import Any

from starred_search.config import DEFAULT_SEARCH_LIMIT, EngineConfig, compose_config
from starred_search.domain.model import RepositorySearchResult, SearchOptions, StarredRepository
from starred_search.search.analyzers import normalize_keywords, tokenize
from starred_search.search.stats import CorpusStats, bm25_plus, calculate_idf


logger = logging.getLogger(__name__)

MIN_SEARCH_RESULTS = 1


class IndexInvariantError(RuntimeError):
    """Raised when the inverted index references a document that is not stored."""


@dataclass
class RepositoryDocument:
    """Forward-store entry for one repository.

    ``term_frequency`` holds the raw weighted counts gathered at ingestion and
    is never rewritten. ``term_scores`` is derived from it by each
    consolidation.
    """

    id: str
    repository: StarredRepository
    term_frequency: dict[str, float] = field(default_factory=dict)
    term_scores: dict[str, float] = field(default_factory=dict)
    length: float = 0.0


class RepositorySearchEngine:
    """Field-weighted BM25+ index for a user's starred repositories.

    Not thread-safe: callers serialize access. Any change to the repository set
    is handled by building a fresh engine.
    """

    def __init__(self, config: EngineConfig | Mapping[str, Any] | None = None) -> None:
        self.config = compose_config(config)
        self.documents: dict[str, RepositoryDocument] = {}
        # token -> ids in add order; dict keys act as an ordered set
        self.inverted_index: dict[str, dict[str, None]] = {}
        self.document_frequency: dict[str, int] = {}
        self.inverse_document_frequency: dict[str, float] = {}
        self.total_corpus_length = 0.0
        self.average_document_length = 0.0

    @property
    def size(self) -> int:
        return len(self.documents)

    @property
    def stats(self) -> CorpusStats:
        return CorpusStats(total_length=self.total_corpus_length, document_count=len(self.documents))

    def reset(self) -> None:
        """Drop every document and all corpus statistics."""
        self.documents.clear()
        self.inverted_index.clear()
        self.document_frequency.clear()
        self.inverse_document_frequency.clear()
        self.total_corpus_length = 0.0
        self.average_document_length = 0.0

    def add(self, repository: StarredRepository) -> None:
        """Ingest one repository. A repository whose id is already indexed is ignored."""

        doc_id = repository.full_name
        if doc_id in self.documents:
            return

        doc = RepositoryDocument(id=doc_id, repository=repository)
        weights = self.config.field_weights
        self._ingest_field(doc, repository.owner, weights.owner)
        self._ingest_field(doc, repository.name, weights.name)
        self._ingest_field(doc, repository.description, weights.description)
        self._ingest_field(doc, repository.readme, weights.readme, self.config.max_readme_tokens)

        self.total_corpus_length += doc.length
        self.documents[doc_id] = doc

    def add_all(self, repositories: Iterable[StarredRepository]) -> None:
        for repository in repositories:
            self.add(repository)

    def consolidate(self) -> None:
        """Refresh corpus statistics and recompute every document's token scores.

        Scores are always derived from the raw frequencies, so repeated calls
        without intervening ``add`` produce identical state.
        """

        total_docs = len(self.documents)
        if total_docs == 0:
            return

        self.average_document_length = self.stats.average_length

        self.document_frequency = {token: len(doc_ids) for token, doc_ids in self.inverted_index.items()}
        self.inverse_document_frequency = {
            token: calculate_idf(doc_freq, total_docs, k=self.config.k)
            for token, doc_freq in self.document_frequency.items()
        }

        for doc in self.documents.values():
            doc.term_scores = self._score_document(doc)

        logger.debug(
            "Consolidated %d documents: %d terms, average length %.3f",
            total_docs,
            len(self.inverse_document_frequency),
            self.average_document_length,
        )

    def search(
        self,
        keywords: Iterable[str],
        options: SearchOptions | Mapping[str, Any] | None = None,
        *,
        limit: int | None = None,
    ) -> list[RepositorySearchResult]:
        """Return repositories ranked by descending BM25+ score.

        Ties keep the order in which documents first accumulated a score. The
        effective limit is never below one.
        """

        if not self.documents:
            return []

        query_tokens = normalize_keywords(keywords, self.config.max_keywords)
        if not query_tokens:
            return []

        scores: dict[str, float] = defaultdict(float)
        matches: dict[str, list[str]] = defaultdict(list)
        for token in query_tokens:
            self._accumulate_token(token, scores, matches)

        max_results = max(_resolve_limit(options, limit), MIN_SEARCH_RESULTS)
        ranked = sorted(
            ((doc_id, score) for doc_id, score in scores.items() if score != 0),
            key=lambda item: item[1],
            reverse=True,
        )[:max_results]

        results: list[RepositorySearchResult] = []
        for doc_id, score in ranked:
            doc = self.documents.get(doc_id)
            if doc is None:
                raise IndexInvariantError(f"Invariant violated: missing repository document {doc_id!r}")
            results.append(
                RepositorySearchResult(
                    id=doc_id,
                    repository=doc.repository,
                    score=score,
                    matched_tokens=matches[doc_id],
                )
            )
        return results

    def _accumulate_token(
        self,
        token: str,
        scores: dict[str, float],
        matches: dict[str, list[str]],
    ) -> None:
        doc_ids = self.inverted_index.get(token)
        if not doc_ids:
            return

        for doc_id in doc_ids:
            doc = self.documents.get(doc_id)
            if doc is None:
                continue
            scores[doc_id] += doc.term_scores.get(token, 0.0)
            matches[doc_id].append(token)

    def _ingest_field(
        self,
        doc: RepositoryDocument,
        raw_value: str | None,
        weight: float,
        token_limit: int | None = None,
    ) -> None:
        if not raw_value or weight <= 0:
            return

        tokens = list(tokenize(raw_value, token_limit))
        if not tokens:
            return

        for token in tokens:
            doc.term_frequency[token] = doc.term_frequency.get(token, 0.0) + weight
            self.inverted_index.setdefault(token, {})[doc.id] = None

        doc.length += len(tokens) * weight

    def _score_document(self, doc: RepositoryDocument) -> dict[str, float]:
        scores: dict[str, float] = {}
        for token, freq in doc.term_frequency.items():
            idf = self.inverse_document_frequency.get(token)
            if idf is None:
                continue
            weight = bm25_plus(
                freq,
                doc.length,
                self.average_document_length,
                k1=self.config.k1,
                b=self.config.b,
                delta=self.config.delta,
            )
            if weight is None:
                continue
            scores[token] = weight * idf
        return scores


def _resolve_limit(options: SearchOptions | Mapping[str, Any] | None, limit: int | None) -> int:
    if limit is not None:
        return limit
    if isinstance(options, SearchOptions):
        return options.limit
    if options is not None and options.get("limit") is not None:
        return int(options["limit"])
    return DEFAULT_SEARCH_LIMIT
