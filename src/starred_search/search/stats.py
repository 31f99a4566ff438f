"""Statistical helpers for BM25+ style scoring.

The functions here stay independent of the engine's storage so they can be
unit tested on their own.
"""

from __future__ import annotations

from dataclasses import dataclass
import math


IDF_SMOOTHING = 0.5


@dataclass(frozen=True)
class CorpusStats:
    """Aggregated weighted length statistics for the whole corpus."""

    total_length: float
    document_count: int

    @property
    def average_length(self) -> float:
        if self.document_count == 0:
            return 0.0
        return self.total_length / self.document_count


def calculate_idf(doc_freq: int, total_docs: int, *, k: float = 1.0) -> float:
    """Return inverse document frequency with ``k`` added inside the logarithm.

    IDF(t) = ln((N - df + 0.5) / (df + 0.5) + k)

    With ``k >= 1`` the value stays non-negative even for a term present in
    every document.
    """

    ratio = (total_docs - doc_freq + IDF_SMOOTHING) / (doc_freq + IDF_SMOOTHING)
    return math.log(ratio + k)


def bm25_plus(
    freq: float,
    doc_length: float,
    avg_doc_length: float,
    *,
    k1: float = 1.2,
    b: float = 0.75,
    delta: float = 0.5,
) -> float | None:
    """Compute the BM25+ term weight without IDF.

    Returns ``None`` when the term should not be scored at all: a
    non-positive frequency or a zero denominator.
    """

    if freq <= 0:
        return None
    average = avg_doc_length or 1.0
    normalization = 1 - b + b * (doc_length / average)
    denominator = freq + k1 * normalization
    if denominator == 0:
        return None
    return (freq * (k1 + 1)) / denominator + delta
