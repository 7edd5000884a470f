"""Turn a content section into typed chip candidates."""
from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from application.refinement.models import (
    CONTEXT_PREFIX,
    KEYWORD,
    SECTION_KEY,
    SECTION_KEY_PATTERN,
    SECTION_NAME,
    TAG,
)
from domain.entities import ContentSection, RefinementChip

SCORING_FACET_FIELDS = ("sectionKey", "sectionName", "eventType")
# Counting also reads facets.sectionModel while scoring does not. Kept as
# observed; unverified whether the difference is intended.
COUNTING_FACET_FIELDS = ("sectionKey", "sectionName", "sectionModel", "eventType")
ENVELOPE_FIELDS = ("sectionName", "locale", "country")


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _text_or_none(mapping: Any, key: str) -> str | None:
    if not isinstance(mapping, Mapping):
        return None
    value = mapping.get(key)
    return value if _has_text(value) else None


def section_key_from_context(context: Any) -> str | None:
    if not isinstance(context, Mapping):
        return None
    for candidate in (
        _text_or_none(context.get("facets"), "sectionKey"),
        _text_or_none(context.get("envelope"), "sectionKey"),
        _text_or_none(context, "sectionKey"),
    ):
        if candidate:
            return candidate.lower()
    return None


def section_key_from_path(path: str | None, pattern: re.Pattern[str] = SECTION_KEY_PATTERN) -> str | None:
    if not _has_text(path):
        return None
    match = pattern.search(path)
    if match:
        return match.group(0).lower()
    last = path.split("/")[-1]
    if last.strip() and "section" in last.lower():
        return last.lower()
    return None


def resolve_section_key(section: ContentSection, pattern: re.Pattern[str] = SECTION_KEY_PATTERN) -> str | None:
    """Resolve the section key from context facets, then from path locators."""

    return (
        section_key_from_context(section.context)
        or section_key_from_path(section.section_path, pattern)
        or section_key_from_path(section.section_uri, pattern)
    )


def _context_chips(context: Any, group: str, fields: Iterable[str]) -> list[RefinementChip]:
    if not isinstance(context, Mapping):
        return []
    parent = context.get(group)
    if not isinstance(parent, Mapping):
        return []
    chips: list[RefinementChip] = []
    for key in fields:
        value = _text_or_none(parent, key)
        if value is not None:
            chips.append(RefinementChip(value, f"{CONTEXT_PREFIX}{group}.{key}"))
    return chips


def _chips(
    section: ContentSection,
    facet_fields: Iterable[str],
    pattern: re.Pattern[str],
) -> list[RefinementChip]:
    chips: list[RefinementChip] = []
    if _has_text(section.original_field_name):
        chips.append(RefinementChip(section.original_field_name.strip(), SECTION_NAME))
    section_key = resolve_section_key(section, pattern)
    if section_key:
        chips.append(RefinementChip(section_key, SECTION_KEY))
    chips.extend(RefinementChip(tag, TAG) for tag in section.tags or () if _has_text(tag))
    chips.extend(RefinementChip(keyword, KEYWORD) for keyword in section.keywords or () if _has_text(keyword))
    chips.extend(_context_chips(section.context, "facets", facet_fields))
    chips.extend(_context_chips(section.context, "envelope", ENVELOPE_FIELDS))
    return chips


def extract_scoring_chips(
    section: ContentSection,
    pattern: re.Pattern[str] = SECTION_KEY_PATTERN,
) -> list[RefinementChip]:
    """Chips that earn score when the section is a search hit or a supplemental match."""

    return _chips(section, SCORING_FACET_FIELDS, pattern)


def extract_counting_chips(
    section: ContentSection,
    pattern: re.Pattern[str] = SECTION_KEY_PATTERN,
) -> list[RefinementChip]:
    """Chips tallied for the ``count`` annotation."""

    return _chips(section, COUNTING_FACET_FIELDS, pattern)


__all__ = [
    "resolve_section_key",
    "section_key_from_context",
    "section_key_from_path",
    "extract_scoring_chips",
    "extract_counting_chips",
    "SCORING_FACET_FIELDS",
    "COUNTING_FACET_FIELDS",
    "ENVELOPE_FIELDS",
]
