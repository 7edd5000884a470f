import unittest

from application.refinement.models import RefinementSettings
from application.refinement.ranking import (
    attach_counts,
    ensure_type_included,
    ensure_value_included,
    sort_chips,
)
from domain.entities import RefinementChip


class TestSorting(unittest.TestCase):
    def test_sorts_by_score_then_value_then_type(self):
        scores = {
            RefinementChip("b", "Tag"): 1.0,
            RefinementChip("a", "Tag"): 1.0,
            RefinementChip("a", "Keyword"): 1.0,
            RefinementChip("z", "Tag"): 2.0,
        }
        self.assertEqual(
            sort_chips(scores),
            [
                RefinementChip("z", "Tag"),
                RefinementChip("a", "Keyword"),
                RefinementChip("a", "Tag"),
                RefinementChip("b", "Tag"),
            ],
        )


class TestLimitNormalization(unittest.TestCase):
    def test_defaults_and_caps(self):
        settings = RefinementSettings()
        self.assertEqual(settings.normalize_limit(None), 15)
        self.assertEqual(settings.normalize_limit(0), 15)
        self.assertEqual(settings.normalize_limit(-3), 15)
        self.assertEqual(settings.normalize_limit(7), 7)
        self.assertEqual(settings.normalize_limit(500), 50)

    def test_candidate_width_is_clamped(self):
        settings = RefinementSettings()
        self.assertEqual(settings.candidate_width(1), 50)
        self.assertEqual(settings.candidate_width(15), 90)
        self.assertEqual(settings.candidate_width(50), 200)


class TestInclusionGuarantees(unittest.TestCase):
    def setUp(self):
        self.sorted_chips = [
            RefinementChip("Hero", "Tag"),
            RefinementChip("Launch", "Keyword"),
            RefinementChip("Headline", "sectionName"),
            RefinementChip("hero-section", "sectionKey"),
        ]

    def test_type_is_appended_when_there_is_room(self):
        limited = self.sorted_chips[:2]
        ensure_type_included(limited, self.sorted_chips, "sectionName", 3)
        self.assertEqual(limited[-1], RefinementChip("Headline", "sectionName"))
        self.assertEqual(len(limited), 3)

    def test_type_replaces_last_element_when_full(self):
        limited = self.sorted_chips[:2]
        ensure_type_included(limited, self.sorted_chips, "sectionKey", 2)
        self.assertEqual(limited, [RefinementChip("Hero", "Tag"), RefinementChip("hero-section", "sectionKey")])

    def test_type_missing_everywhere_is_a_no_op(self):
        limited = self.sorted_chips[:1]
        ensure_type_included(limited, self.sorted_chips, "Context:envelope.locale", 1)
        self.assertEqual(limited, [RefinementChip("Hero", "Tag")])

    def test_value_match_is_case_insensitive(self):
        limited = self.sorted_chips[:3]
        ensure_value_included(limited, self.sorted_chips, "sectionName", "headline", 3)
        self.assertEqual(len(limited), 3)
        self.assertIn(RefinementChip("Headline", "sectionName"), limited)

    def test_value_placeholder_is_synthesized(self):
        limited: list[RefinementChip] = []
        ensure_value_included(limited, [], "sectionKey", "promo-section", 5)
        self.assertEqual(limited, [RefinementChip("promo-section", "sectionKey")])
        self.assertEqual(limited[0].count, 0)

    def test_evictions_stack_on_the_last_slot(self):
        limited = self.sorted_chips[:2]
        ensure_type_included(limited, self.sorted_chips, "sectionName", 2)
        ensure_type_included(limited, self.sorted_chips, "sectionKey", 2)
        self.assertEqual(limited, [RefinementChip("Hero", "Tag"), RefinementChip("hero-section", "sectionKey")])

    def test_counts_default_to_zero(self):
        chips = attach_counts(self.sorted_chips[:2], {RefinementChip("Hero", "Tag"): 4})
        self.assertEqual([chip.count for chip in chips], [4, 0])


if __name__ == "__main__":
    unittest.main()
