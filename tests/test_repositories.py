"""Тесты репозиториев секций."""
from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from domain.entities import ContentSection
from infrastructure.repositories.in_memory_section_repository import InMemorySectionRepository
from infrastructure.repositories.sqlite_section_repository import SqliteSectionRepository


def _sections() -> list[ContentSection]:
    return [
        ContentSection(
            id="s1",
            original_field_name="Headline",
            tags=["Hero"],
            keywords=["Launch"],
            context={"facets": {"sectionKey": "Homepage-Section", "sectionModel": "hero"}},
            text="Big launch headline",
        ),
        ContentSection(id="s2", section_uri="/content/site/homepage-section/cta", tags=["CTA"]),
        ContentSection(id="s3", section_path="/content/site/promo-section"),
        ContentSection(id="s4", section_path="/content/site/homepage_section"),
    ]


class SectionRepositoryContract:
    def make_repository(self):
        raise NotImplementedError

    def test_add_get_list(self) -> None:
        repo = self.make_repository()
        for section in _sections():
            repo.add(section)
        stored = repo.get("s1")
        self.assertIsNotNone(stored)
        assert stored is not None
        self.assertEqual(stored.tags, ["Hero"])
        self.assertEqual(stored.context["facets"]["sectionModel"], "hero")
        self.assertEqual(stored.text, "Big launch headline")
        self.assertEqual([section.id for section in repo.list()], ["s1", "s2", "s3", "s4"])
        self.assertIsNone(repo.get("missing"))

    def test_find_by_section_key(self) -> None:
        repo = self.make_repository()
        for section in _sections():
            repo.add(section)
        self.assertEqual([s.id for s in repo.find_by_section_key("homepage-section", 200)], ["s1", "s2"])
        self.assertEqual([s.id for s in repo.find_by_section_key(" HOMEPAGE-SECTION ", 1)], ["s1"])
        self.assertEqual(repo.find_by_section_key("missing-section", 200), [])
        self.assertEqual(repo.find_by_section_key("", 200), [])

    def test_replacing_a_section_keeps_one_row(self) -> None:
        repo = self.make_repository()
        repo.add(ContentSection(id="s1", tags=["Old"]))
        repo.add(ContentSection(id="s1", tags=["New"]))
        self.assertEqual(len(repo.list()), 1)
        self.assertEqual(repo.get("s1").tags, ["New"])

    def test_non_string_locators_are_ignored_by_key_lookup(self) -> None:
        repo = self.make_repository()
        repo.add(ContentSection(id="n1", section_path=42, section_uri=None, tags=["Odd"]))
        repo.add(ContentSection(id="n2", section_path="/content/site/homepage-section"))
        self.assertEqual([s.id for s in repo.find_by_section_key("homepage-section", 200)], ["n2"])


class TestInMemorySectionRepository(SectionRepositoryContract, unittest.TestCase):
    def make_repository(self):
        return InMemorySectionRepository()


class TestSqliteSectionRepository(SectionRepositoryContract, unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)

    def make_repository(self):
        return SqliteSectionRepository(db_path=Path(self._tmp.name) / "nested" / "contentlake.db")

    def test_underscore_in_key_is_literal(self) -> None:
        repo = self.make_repository()
        for section in _sections():
            repo.add(section)
        self.assertEqual([s.id for s in repo.find_by_section_key("homepage_section", 200)], ["s4"])


if __name__ == "__main__":
    unittest.main()
