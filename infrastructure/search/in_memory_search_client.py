"""Similarity search over section embeddings held in process memory."""
from __future__ import annotations

import logging
import threading
from typing import Sequence

import numpy as np

from application.refinement.filters import section_matches
from domain.entities import ContentChunkMatch, ContentSection, Query, SearchRequest
from domain.interfaces import Embedder, IndexableSearchClient

logger = logging.getLogger(__name__)


def latest_rows_by_id(sections: Sequence[ContentSection]) -> dict[str, int]:
    """Map each section id to the row of its last occurrence in ``sections``."""

    rows: dict[str, int] = {}
    for row, section in enumerate(sections):
        rows[section.id] = row
    return rows


class InMemorySimilaritySearchClient(IndexableSearchClient):
    """Brute-force Euclidean search with numpy; suited to demos and tests.

    Rows are keyed by section id: adding a known id replaces its section and
    vector in place.
    """

    def __init__(self, embedder: Embedder) -> None:
        self._embedder = embedder
        self._lock = threading.Lock()
        self._positions: dict[str, int] = {}
        self._sections: list[ContentSection] = []
        self._vectors = np.zeros((0, embedder.dimension), dtype="float32")

    def __len__(self) -> int:
        return len(self._sections)

    def add(self, sections: Sequence[ContentSection], embeddings: Sequence[Sequence[float]]) -> None:
        if not sections:
            return
        vectors = np.asarray(embeddings, dtype="float32")
        if vectors.ndim != 2 or vectors.shape != (len(sections), self._embedder.dimension):
            raise ValueError(
                f"Expected {len(sections)} embeddings of dimension {self._embedder.dimension}, got {vectors.shape}."
            )
        with self._lock:
            stored = list(self._sections)
            matrix = self._vectors.copy()
            appended: list[np.ndarray] = []
            replaced = 0
            for section_id, row in latest_rows_by_id(sections).items():
                position = self._positions.get(section_id)
                if position is None:
                    self._positions[section_id] = len(stored)
                    stored.append(sections[row])
                    appended.append(vectors[row])
                else:
                    stored[position] = sections[row]
                    matrix[position] = vectors[row]
                    replaced += 1
            if appended:
                matrix = np.vstack([matrix, np.stack(appended)])
            self._sections, self._vectors = stored, matrix
        logger.debug("Indexed %d new sections, replaced %d", len(appended), replaced)

    def search(
        self,
        query: str,
        *,
        limit: int,
        threshold: float | None = None,
        filters: SearchRequest | None = None,
    ) -> list[ContentChunkMatch]:
        with self._lock:
            sections, vectors = self._sections, self._vectors
        if not sections or limit <= 0:
            return []
        query_vector = np.asarray(self._embedder.embed_query(Query(text=query)), dtype="float32")
        distances = np.linalg.norm(vectors - query_vector, axis=1)

        matches: list[ContentChunkMatch] = []
        for idx in np.argsort(distances, kind="stable"):
            distance = float(distances[idx])
            if threshold is not None and distance > threshold:
                break
            section = sections[idx]
            if filters is not None and not section_matches(section, filters):
                continue
            matches.append(ContentChunkMatch(distance=distance, section=section, chunk_id=section.id, text=section.text))
            if len(matches) >= limit:
                break
        logger.debug("In-memory search over %d sections returned %d hits", len(sections), len(matches))
        return matches


__all__ = ["InMemorySimilaritySearchClient", "latest_rows_by_id"]
