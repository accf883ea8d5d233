"""Okapi BM25 over a small in-memory corpus.

Formula:
    score(q, d) = Σ idf(t) × (tf × (k1 + 1)) / (tf + k1 × (1 - b + b × dl/avgdl))

Where:
    tf = occurrences of query term t in document d
    dl = token count of d
    avgdl = mean token count across the corpus
    idf(t) = ln((N - df + 0.5) / (df + 0.5) + 1)

The ``+ 1`` inside the logarithm keeps IDF non-negative even for terms that
occur in every document.

No inverted index is built: scoring walks every document. Corpora here are
tens to low hundreds of rows.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import TYPE_CHECKING

from uxrank.search.tokenizer import tokenize

if TYPE_CHECKING:
    from collections.abc import Sequence

    from uxrank.types import ScoredDocument

__all__ = ["DEFAULT_B", "DEFAULT_K1", "BM25"]

logger = logging.getLogger(__name__)

DEFAULT_K1 = 1.5
DEFAULT_B = 0.75


class BM25:
    """BM25 index fitted once over a list of document strings.

    Args:
        k1: Term frequency saturation. Higher values let repeated
            occurrences keep adding score for longer.
        b: Length normalization strength, 0.0 (none) to 1.0 (full).
            Higher values penalize documents longer than average more.

    Usage::

        bm25 = BM25()
        bm25.fit(["red modern dashboard app", "minimalist blog theme"])
        ranked = bm25.score("dashboard")  # [(0, 0.98...), (1, 0.0)]
    """

    def __init__(self, k1: float = DEFAULT_K1, b: float = DEFAULT_B) -> None:
        self.k1 = k1
        self.b = b
        self._corpus: list[list[str]] = []
        self._term_freqs: list[Counter[str]] = []
        self._doc_lengths: list[int] = []
        self._avgdl = 0.0
        self._doc_freqs: dict[str, int] = {}
        self._idf: dict[str, float] = {}

    @property
    def doc_count(self) -> int:
        """Number of fitted documents."""
        return len(self._corpus)

    @property
    def avgdl(self) -> float:
        """Average document length in tokens (0.0 for an empty corpus)."""
        return self._avgdl

    @property
    def doc_lengths(self) -> tuple[int, ...]:
        return tuple(self._doc_lengths)

    @property
    def doc_freqs(self) -> dict[str, int]:
        return dict(self._doc_freqs)

    @property
    def idf(self) -> dict[str, float]:
        return dict(self._idf)

    def fit(self, documents: Sequence[str]) -> None:
        """Tokenize documents and compute corpus statistics.

        Replaces any previously fitted state.

        Args:
            documents: Searchable text, one string per document.
        """
        self._corpus = [tokenize(doc) for doc in documents]
        self._term_freqs = [Counter(tokens) for tokens in self._corpus]
        self._doc_lengths = [len(tokens) for tokens in self._corpus]
        self._doc_freqs = {}
        self._idf = {}

        n = len(self._corpus)
        if n == 0:
            self._avgdl = 0.0
            return

        self._avgdl = sum(self._doc_lengths) / n

        for counts in self._term_freqs:
            for term in counts:
                self._doc_freqs[term] = self._doc_freqs.get(term, 0) + 1

        for term, df in self._doc_freqs.items():
            self._idf[term] = math.log((n - df + 0.5) / (df + 0.5) + 1)

        logger.debug(
            "BM25 fitted: %d docs, %d terms, avgdl=%.2f", n, len(self._idf), self._avgdl
        )

    def score(self, query: str) -> list[ScoredDocument]:
        """Score every fitted document against a query.

        Query tokens missing from the fitted vocabulary contribute nothing.

        Args:
            query: Free-text query, tokenized like the documents.

        Returns:
            ``(index, score)`` for every document, highest score first.
            Zero-score documents are included. Empty when the corpus was empty.
        """
        if not self._corpus:
            return []

        query_tokens = [t for t in tokenize(query) if t in self._idf]
        scores: list[ScoredDocument] = []

        for idx, counts in enumerate(self._term_freqs):
            doc_len = self._doc_lengths[idx]
            norm = self.k1 * (1 - self.b + self.b * doc_len / self._avgdl) if self._avgdl else 0.0
            total = 0.0
            for token in query_tokens:
                tf = counts.get(token, 0)
                if tf == 0:
                    continue
                total += self._idf[token] * (tf * (self.k1 + 1)) / (tf + norm)
            scores.append((idx, total))

        scores.sort(key=lambda item: item[1], reverse=True)
        return scores
