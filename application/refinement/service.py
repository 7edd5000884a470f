"""Refinement-chip engine: similarity hits in, ranked typed suggestions out."""
from __future__ import annotations

import logging
from functools import partial

from application.refinement.aggregation import (
    ChipScores,
    count_chips,
    score_hits,
    score_literal_tokens,
    score_sections,
    union_sections,
)
from application.refinement.chips import extract_scoring_chips
from application.refinement.models import SECTION_KEY, SECTION_NAME, RefinementSettings
from application.refinement.query_analysis import extract_role_hints, extract_section_keys
from application.refinement.ranking import (
    attach_counts,
    ensure_type_included,
    ensure_value_included,
    sort_chips,
)
from domain.entities import ContentSection, RefinementChip
from domain.interfaces import SectionRepository, SimilaritySearchClient

logger = logging.getLogger(__name__)


class RefinementEngine:
    """Suggests refinement chips for a free-text query.

    The engine holds no per-call state; every score and count map lives for the
    duration of a single :meth:`get_refinement_chips` call, so one instance can
    serve concurrent callers.
    """

    def __init__(
        self,
        search_client: SimilaritySearchClient,
        section_repository: SectionRepository,
        settings: RefinementSettings | None = None,
    ) -> None:
        self._search_client = search_client
        self._section_repository = section_repository
        self._settings = settings or RefinementSettings()

    @property
    def settings(self) -> RefinementSettings:
        return self._settings

    def get_refinement_chips(self, query: str, limit: int | None = None) -> list[RefinementChip]:
        """Return at most ``limit`` chips, ordered by relevance, each carrying its count.

        Errors raised by the search client propagate unchanged.
        """

        settings = self._settings
        chip_limit = settings.normalize_limit(limit)
        width = settings.candidate_width(chip_limit)
        matches = self._search_client.search(query, limit=width, threshold=settings.similarity_threshold)
        logger.debug("Refinement search for %r returned %d hits (width=%d)", query, len(matches), width)
        if not matches:
            return []

        extractor = partial(extract_scoring_chips, pattern=settings.section_key_pattern)
        scores: ChipScores = {}
        score_hits(scores, matches, extractor)

        section_keys = extract_section_keys(query, settings.section_key_pattern)
        supplemental = self._load_supplemental_sections(section_keys)
        if supplemental:
            score_sections(scores, supplemental, settings.supplemental_weight, extractor)

        role_hints = extract_role_hints(query, section_keys, settings.stop_words)
        score_literal_tokens(
            scores,
            section_keys,
            role_hints,
            section_key_weight=settings.section_key_weight,
            role_hint_weight=settings.role_hint_weight,
        )

        counts = count_chips(union_sections(matches, supplemental), settings.section_key_pattern)

        sorted_chips = sort_chips(scores)
        limited = sorted_chips[:chip_limit]
        ensure_type_included(limited, sorted_chips, SECTION_NAME, chip_limit)
        ensure_type_included(limited, sorted_chips, SECTION_KEY, chip_limit)
        for key in section_keys:
            ensure_value_included(limited, sorted_chips, SECTION_KEY, key, chip_limit)
        for hint in role_hints:
            ensure_value_included(limited, sorted_chips, SECTION_NAME, hint, chip_limit)

        chips = attach_counts(limited, counts)
        logger.info("Built %d refinement chips from %d scored candidates", len(chips), len(sorted_chips))
        return chips

    def _load_supplemental_sections(self, section_keys: list[str]) -> list[ContentSection]:
        sections: list[ContentSection] = []
        for key in section_keys:
            found = self._section_repository.find_by_section_key(key, self._settings.supplemental_limit)
            logger.debug("Section key %s matched %d stored sections", key, len(found))
            sections.extend(found)
        return sections


__all__ = ["RefinementEngine"]
