"""Use case for making stored sections searchable."""
from __future__ import annotations

import logging
from typing import Iterable

from domain.entities import ContentSection
from domain.interfaces import Embedder, IndexableSearchClient, SectionRepository

logger = logging.getLogger(__name__)


def section_search_text(section: ContentSection) -> str:
    """Text embedded for a section; falls back to its name, tags and keywords."""

    if section.text and section.text.strip():
        return section.text
    parts = [section.original_field_name or "", *(section.tags or ()), *(section.keywords or ())]
    return " ".join(part for part in parts if part and part.strip())


def index_sections(
    sections: Iterable[ContentSection],
    *,
    embedder: Embedder,
    search_client: IndexableSearchClient,
    section_repository: SectionRepository | None = None,
) -> list[ContentSection]:
    """Embed sections into the search client, storing them in the repository when given."""

    indexed: list[ContentSection] = []
    for section in sections:
        if section_repository is not None:
            section_repository.add(section)
        indexed.append(section)

    searchable = [section for section in indexed if section_search_text(section)]
    if not searchable:
        return indexed
    embeddings = embedder.embed_texts([section_search_text(section) for section in searchable])
    search_client.add(searchable, embeddings)
    logger.info("Indexed %d of %d sections with %s", len(searchable), len(indexed), embedder.model_id)
    return indexed
