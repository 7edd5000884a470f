"""Score and count aggregation over the sections touched by one refinement call."""
from __future__ import annotations

import math
import re
from collections import Counter
from typing import Callable, Iterable, Sequence

from application.refinement.chips import extract_counting_chips, extract_scoring_chips
from application.refinement.models import SECTION_KEY, SECTION_KEY_PATTERN, SECTION_NAME
from domain.entities import ContentChunkMatch, ContentSection, RefinementChip

ChipScores = dict[RefinementChip, float]
ChipExtractor = Callable[[ContentSection], list[RefinementChip]]


def similarity_from_distance(distance: float) -> float:
    """Map a non-negative distance into (0, 1]; NaN and negatives map to 0."""

    if math.isnan(distance) or distance < 0:
        return 0.0
    return 1.0 / (1.0 + distance)


def merge_score(scores: ChipScores, chip: RefinementChip, contribution: float) -> None:
    scores[chip] = scores.get(chip, 0.0) + contribution


def score_hits(
    scores: ChipScores,
    matches: Iterable[ContentChunkMatch],
    extractor: ChipExtractor = extract_scoring_chips,
) -> None:
    for match in matches:
        score = similarity_from_distance(match.distance)
        if score <= 0:
            continue
        if match.section is None:
            continue
        for chip in extractor(match.section):
            merge_score(scores, chip, score)


def score_sections(
    scores: ChipScores,
    sections: Iterable[ContentSection],
    weight: float,
    extractor: ChipExtractor = extract_scoring_chips,
) -> None:
    for section in sections:
        if section is None:
            continue
        for chip in extractor(section):
            merge_score(scores, chip, weight)


def score_literal_tokens(
    scores: ChipScores,
    section_keys: Iterable[str],
    role_hints: Iterable[str],
    *,
    section_key_weight: float,
    role_hint_weight: float,
) -> None:
    for key in section_keys:
        merge_score(scores, RefinementChip(key, SECTION_KEY), section_key_weight)
    for hint in role_hints:
        merge_score(scores, RefinementChip(hint, SECTION_NAME), role_hint_weight)


def union_sections(
    matches: Iterable[ContentChunkMatch],
    supplemental: Iterable[ContentSection],
) -> list[ContentSection]:
    """De-duplicate hit and supplemental sections by id, keeping first-seen order."""

    merged: dict[str, ContentSection] = {}
    for match in matches:
        section = match.section if match is not None else None
        if section is not None and section.id:
            merged.setdefault(section.id, section)
    for section in supplemental:
        if section is not None and section.id:
            merged.setdefault(section.id, section)
    return list(merged.values())


def count_chips(
    sections: Sequence[ContentSection],
    pattern: re.Pattern[str] = SECTION_KEY_PATTERN,
) -> Counter[RefinementChip]:
    counts: Counter[RefinementChip] = Counter()
    for section in sections:
        counts.update(extract_counting_chips(section, pattern))
    return counts


__all__ = [
    "ChipScores",
    "similarity_from_distance",
    "merge_score",
    "score_hits",
    "score_sections",
    "score_literal_tokens",
    "union_sections",
    "count_chips",
]
