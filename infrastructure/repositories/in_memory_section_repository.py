"""Section repository kept in a Python dict."""
from __future__ import annotations

from application.refinement.chips import resolve_section_key
from domain.entities import ContentSection
from domain.interfaces import SectionRepository


class InMemorySectionRepository(SectionRepository):
    """Insertion-ordered section store with the same key lookup as the SQLite one."""

    def __init__(self, sections: list[ContentSection] | None = None) -> None:
        self._sections: dict[str, ContentSection] = {}
        for section in sections or ():
            self.add(section)

    def add(self, section: ContentSection) -> None:
        self._sections[section.id] = section

    def get(self, section_id: str) -> ContentSection | None:
        return self._sections.get(section_id)

    def list(self) -> list[ContentSection]:
        return list(self._sections.values())

    def find_by_section_key(self, key: str, limit: int) -> list[ContentSection]:
        normalized = (key or "").strip().lower()
        if not normalized or limit <= 0:
            return []
        found: list[ContentSection] = []
        for section in self._sections.values():
            locators = [
                value.lower() for value in (section.section_path, section.section_uri) if isinstance(value, str)
            ]
            if resolve_section_key(section) == normalized or any(normalized in locator for locator in locators):
                found.append(section)
                if len(found) >= limit:
                    break
        return found


__all__ = ["InMemorySectionRepository"]
