"""Use case that suggests refinement chips for a free-text query."""
from __future__ import annotations

from typing import Any

from application.refinement.models import RefinementSettings
from application.refinement.service import RefinementEngine
from domain.interfaces import SectionRepository, SimilaritySearchClient


def refine(
    query_text: str,
    *,
    search_client: SimilaritySearchClient,
    section_repository: SectionRepository,
    settings: RefinementSettings | None = None,
    limit: int | None = None,
) -> list[dict[str, Any]]:
    """Return serialized ``{value, type, count}`` chips for the query."""

    engine = RefinementEngine(search_client, section_repository, settings)
    return [chip.as_dict() for chip in engine.get_refinement_chips(query_text, limit)]
