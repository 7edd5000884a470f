from __future__ import annotations

import re
from dataclasses import dataclass, field

SECTION_NAME = "sectionName"
SECTION_KEY = "sectionKey"
TAG = "Tag"
KEYWORD = "Keyword"
CONTEXT_PREFIX = "Context:"

DEFAULT_ROLE_STOP_WORDS = frozenset(
    {"section", "sections", "for", "of", "in", "on", "and", "the", "a", "an", "to", "with"}
)
SECTION_KEY_PATTERN = re.compile(
    r"\b([a-z0-9]+(?:-[a-z0-9]+)*)-section(?:-[a-z0-9]+)*\b",
    re.IGNORECASE | re.ASCII,
)


@dataclass(slots=True, frozen=True)
class RefinementSettings:
    """Immutable weights and bounds used by the refinement engine."""

    default_limit: int = 15
    max_limit: int = 50
    candidate_multiplier: int = 6
    min_candidates: int = 50
    max_candidates: int = 200
    supplemental_limit: int = 200
    section_key_weight: float = 0.2
    role_hint_weight: float = 0.15
    min_supplemental_weight: float = 0.01
    similarity_threshold: float | None = None
    stop_words: frozenset[str] = field(default=DEFAULT_ROLE_STOP_WORDS)
    section_key_pattern: re.Pattern[str] = field(default=SECTION_KEY_PATTERN)

    def normalize_limit(self, limit: int | None) -> int:
        if limit is None or limit <= 0:
            return self.default_limit
        return min(limit, self.max_limit)

    def candidate_width(self, chip_limit: int) -> int:
        return min(max(self.min_candidates, chip_limit * self.candidate_multiplier), self.max_candidates)

    @property
    def supplemental_weight(self) -> float:
        return max(self.min_supplemental_weight, self.section_key_weight)


__all__ = [
    "RefinementSettings",
    "SECTION_NAME",
    "SECTION_KEY",
    "TAG",
    "KEYWORD",
    "CONTEXT_PREFIX",
    "DEFAULT_ROLE_STOP_WORDS",
    "SECTION_KEY_PATTERN",
]
