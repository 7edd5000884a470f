"""Use case that runs a similarity search narrowed by selected chips."""
from __future__ import annotations

from typing import Iterable

from application.refinement.aggregation import similarity_from_distance
from application.refinement.filters import build_search_request
from domain.entities import ContentChunkMatch, RefinementChip
from domain.interfaces import SimilaritySearchClient


def search_sections(
    query_text: str,
    *,
    search_client: SimilaritySearchClient,
    chips: Iterable[RefinementChip] = (),
    top_k: int = 10,
    threshold: float | None = None,
) -> list[ContentChunkMatch]:
    """Search for sections relevant to the query and matching every selected chip."""

    request = build_search_request(query_text, chips)
    matches = search_client.search(
        query_text,
        limit=top_k,
        threshold=threshold,
        filters=request if request.has_filters() else None,
    )
    return sorted(matches, key=lambda match: similarity_from_distance(match.distance), reverse=True)
