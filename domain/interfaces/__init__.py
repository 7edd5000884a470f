"""Abstract interfaces for the content refinement system."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from domain.entities import ContentChunkMatch, ContentSection, Query, SearchRequest


class Embedder(ABC):
    """Turns text (sections or queries) into vector embeddings."""

    @property
    @abstractmethod
    def model_id(self) -> str:
        """Return the stable identifier for this embedding model."""

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the embedding dimension for this model."""

    @abstractmethod
    def embed_texts(self, texts: Sequence[str]) -> list[list[float]]:
        """Embed an iterable of texts into dense vectors."""

    @abstractmethod
    def embed_query(self, query: Query) -> list[float]:
        """Embed a user query for retrieval."""


class SimilaritySearchClient(ABC):
    """Ranked source of candidate chunks for a free-text query.

    Distances are non-negative and ascending: smaller means closer.
    """

    @abstractmethod
    def search(
        self,
        query: str,
        *,
        limit: int,
        threshold: float | None = None,
        filters: SearchRequest | None = None,
    ) -> list[ContentChunkMatch]:
        """Return at most ``limit`` hits ordered by ascending distance."""


class IndexableSearchClient(SimilaritySearchClient):
    """A search client that keeps its own vectors and can be fed sections."""

    @abstractmethod
    def add(self, sections: Sequence[ContentSection], embeddings: Sequence[Sequence[float]]) -> None:
        """Register section embeddings for later search."""


class SectionRepository(ABC):
    """Persists enriched sections and looks them up by section key."""

    @abstractmethod
    def add(self, section: ContentSection) -> None:
        """Store a section record."""

    @abstractmethod
    def get(self, section_id: str) -> ContentSection | None:
        """Retrieve a section by id."""

    @abstractmethod
    def list(self) -> list[ContentSection]:
        """Return all stored sections."""

    @abstractmethod
    def find_by_section_key(self, key: str, limit: int) -> list[ContentSection]:
        """Return up to ``limit`` sections carrying the given section key."""


__all__ = [
    "Embedder",
    "SimilaritySearchClient",
    "IndexableSearchClient",
    "SectionRepository",
]
