import unittest

from application.refinement.filters import build_search_request, section_matches
from domain.entities import ContentSection, RefinementChip


class TestBuildSearchRequest(unittest.TestCase):
    def test_maps_chip_types_to_filters(self):
        request = build_search_request(
            "hero",
            [
                RefinementChip("Hero", "Tag"),
                RefinementChip("Launch", "Keyword"),
                RefinementChip("Headline", "sectionName"),
                RefinementChip("Subhead", "sectionName"),
                RefinementChip("Headline", "sectionName"),
                RefinementChip("homepage-section", "sectionKey"),
                RefinementChip("en_US", "Context:envelope.locale"),
                RefinementChip("en_US", "Context:envelope.locale"),
                RefinementChip("", "Tag"),
            ],
        )
        self.assertEqual(request.query, "hero")
        self.assertEqual(request.tags, ["Hero"])
        self.assertEqual(request.keywords, ["Launch"])
        self.assertEqual(request.original_field_name, "Headline")
        self.assertEqual(
            request.context,
            {
                "facets": {"sectionName": ["Subhead"], "sectionKey": ["homepage-section"]},
                "envelope": {"locale": ["en_US"]},
            },
        )
        self.assertTrue(request.has_filters())

    def test_no_chips_means_no_filters(self):
        self.assertFalse(build_search_request("hero", []).has_filters())


class TestSectionMatches(unittest.TestCase):
    def setUp(self):
        self.section = ContentSection(
            id="s1",
            original_field_name=" Headline ",
            section_path="/content/homepage-section/copy",
            tags=["Hero", "CTA"],
            keywords=["Launch"],
            context={"envelope": {"locale": "en_US"}},
        )

    def test_all_filters_must_match(self):
        chips = [
            RefinementChip("Hero", "Tag"),
            RefinementChip("Headline", "sectionName"),
            RefinementChip("HOMEPAGE-section", "sectionKey"),
            RefinementChip("en_US", "Context:envelope.locale"),
        ]
        self.assertTrue(section_matches(self.section, build_search_request("q", chips)))

    def test_any_mismatch_rejects(self):
        for chip in (
            RefinementChip("Promo", "Tag"),
            RefinementChip("Other", "Keyword"),
            RefinementChip("Body", "sectionName"),
            RefinementChip("promo-section", "sectionKey"),
            RefinementChip("fr_FR", "Context:envelope.locale"),
            RefinementChip("US", "Context:envelope.country"),
        ):
            with self.subTest(chip=chip):
                self.assertFalse(section_matches(self.section, build_search_request("q", [chip])))


if __name__ == "__main__":
    unittest.main()
