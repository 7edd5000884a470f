"""Conversion between section entities and JSON-compatible dicts."""
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Mapping

from domain.entities import ContentChunkMatch, ContentSection


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple, set)):
        return []
    return [item for item in value if isinstance(item, str)]


def _text_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def section_from_dict(payload: Mapping[str, Any]) -> ContentSection:
    """Build a section from a dict, accepting snake_case or camelCase keys."""

    def pick(*names: str) -> Any:
        for name in names:
            if name in payload:
                return payload[name]
        return None

    section_id = pick("id", "sectionId")
    if section_id is None or not str(section_id).strip():
        raise ValueError("Section payload is missing an id.")
    context = pick("context")
    return ContentSection(
        id=str(section_id),
        original_field_name=_text_or_none(pick("original_field_name", "originalFieldName")),
        section_path=_text_or_none(pick("section_path", "sectionPath")),
        section_uri=_text_or_none(pick("section_uri", "sectionUri")),
        tags=_string_list(pick("tags")),
        keywords=_string_list(pick("keywords")),
        context=dict(context) if isinstance(context, Mapping) else None,
        text=_text_or_none(pick("text", "content")) or "",
    )


def section_to_dict(section: ContentSection) -> dict[str, Any]:
    return asdict(section)


def match_from_dict(payload: Mapping[str, Any]) -> ContentChunkMatch:
    section = payload.get("section")
    distance = payload.get("distance")
    return ContentChunkMatch(
        distance=float("nan") if distance is None else float(distance),
        section=section_from_dict(section) if isinstance(section, Mapping) else None,
        chunk_id=payload.get("chunk_id") or payload.get("chunkId"),
        text=payload.get("text"),
    )


__all__ = ["section_from_dict", "section_to_dict", "match_from_dict"]
