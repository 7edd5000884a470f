"""FAISS-backed similarity search over section embeddings."""
from __future__ import annotations

import logging
import math
import threading
from typing import Sequence

import faiss
import numpy as np

from application.refinement.filters import section_matches
from domain.entities import ContentChunkMatch, ContentSection, Query, SearchRequest
from domain.interfaces import Embedder, IndexableSearchClient
from infrastructure.search.in_memory_search_client import latest_rows_by_id

logger = logging.getLogger(__name__)


class FaissSimilaritySearchClient(IndexableSearchClient):
    """Exact L2 search with ``faiss.IndexFlatL2`` wrapped in ``IndexIDMap2``.

    FAISS reports squared L2 distances; hits carry their square root so that
    distances are comparable with the numpy client. Re-adding a section id
    removes its previous vector first.
    """

    def __init__(self, embedder: Embedder, filter_overfetch: int = 4) -> None:
        self._embedder = embedder
        self._index = faiss.IndexIDMap2(faiss.IndexFlatL2(embedder.dimension))
        self._lock = threading.Lock()
        self._internal_ids: dict[str, int] = {}
        self._sections: dict[int, ContentSection] = {}
        self._next_id = 0
        self._filter_overfetch = max(1, filter_overfetch)

    def __len__(self) -> int:
        return len(self._sections)

    def add(self, sections: Sequence[ContentSection], embeddings: Sequence[Sequence[float]]) -> None:
        if not sections:
            return
        vectors = np.asarray(embeddings, dtype="float32")
        if vectors.ndim != 2 or vectors.shape[1] != self._index.d or len(vectors) != len(sections):
            raise ValueError("Embedding dimension does not match FAISS index.")

        latest = latest_rows_by_id(sections)
        with self._lock:
            stale: list[int] = []
            ids: list[int] = []
            for section_id, row in latest.items():
                previous = self._internal_ids.get(section_id)
                if previous is not None:
                    stale.append(previous)
                    del self._sections[previous]
                internal_id = self._next_id
                self._next_id += 1
                self._internal_ids[section_id] = internal_id
                self._sections[internal_id] = sections[row]
                ids.append(internal_id)
            if stale:
                self._index.remove_ids(np.array(stale, dtype="int64"))
            rows = np.array(list(latest.values()), dtype="int64")
            self._index.add_with_ids(vectors[rows], np.array(ids, dtype="int64"))
        logger.debug("Indexed %d sections into FAISS, replaced %d", len(ids), len(stale))

    def search(
        self,
        query: str,
        *,
        limit: int,
        threshold: float | None = None,
        filters: SearchRequest | None = None,
    ) -> list[ContentChunkMatch]:
        if limit <= 0:
            return []
        vector = np.array([self._embedder.embed_query(Query(text=query))], dtype="float32")
        with self._lock:
            total = self._index.ntotal
            if total == 0:
                return []
            fetch = limit * self._filter_overfetch if filters is not None else limit
            squared, ids = self._index.search(vector, min(fetch, total))
            sections = dict(self._sections)

        matches: list[ContentChunkMatch] = []
        for value, idx in zip(squared[0], ids[0]):
            if idx < 0:
                continue
            distance = math.sqrt(max(float(value), 0.0))
            if threshold is not None and distance > threshold:
                break
            section = sections.get(int(idx))
            if section is None:
                continue
            if filters is not None and not section_matches(section, filters):
                continue
            matches.append(ContentChunkMatch(distance=distance, section=section, chunk_id=section.id, text=section.text))
            if len(matches) >= limit:
                break
        logger.debug("FAISS search over %d vectors returned %d hits", total, len(matches))
        return matches


__all__ = ["FaissSimilaritySearchClient"]
