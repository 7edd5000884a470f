"""Domain entities for the content refinement system."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class ContentSection:
    """A stored, previously enriched content section."""

    id: str
    original_field_name: str | None = None
    section_path: str | None = None
    section_uri: str | None = None
    tags: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    context: dict[str, Any] | None = None
    text: str = ""


@dataclass(slots=True)
class ContentChunkMatch:
    """A single similarity-search hit pointing at its owning section."""

    distance: float
    section: ContentSection | None
    chunk_id: str | None = None
    text: str | None = None


@dataclass(slots=True, frozen=True)
class RefinementChip:
    """A typed refinement suggestion.

    Identity is the ``(value, type)`` pair; ``count`` is display data attached
    after ranking and takes no part in equality or hashing.
    """

    value: str
    type: str
    count: int = field(default=0, compare=False)

    def as_dict(self) -> dict[str, Any]:
        return {"value": self.value, "type": self.type, "count": self.count}


@dataclass(slots=True)
class Query:
    """A user query issued to the system."""

    text: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class SearchRequest:
    """A similarity search narrowed by the facets of selected chips."""

    query: str
    tags: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    original_field_name: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def has_filters(self) -> bool:
        return bool(self.tags or self.keywords or self.original_field_name or self.context)


__all__ = [
    "ContentSection",
    "ContentChunkMatch",
    "RefinementChip",
    "Query",
    "SearchRequest",
]
