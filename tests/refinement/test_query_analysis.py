import unittest

from application.refinement.query_analysis import extract_role_hints, extract_section_keys


class TestSectionKeys(unittest.TestCase):
    def test_extracts_lowercased_keys_in_first_seen_order(self):
        keys = extract_section_keys("Hero-CTA-Section-v2 and homepage-section, then HOMEPAGE-SECTION")
        self.assertEqual(keys, ["hero-cta-section-v2", "homepage-section"])

    def test_plain_words_are_not_keys(self):
        self.assertEqual(extract_section_keys("section headline"), [])

    def test_only_ascii_letters_fold_to_keys(self):
        self.assertEqual(extract_section_keys("promo-\u017fection banner"), [])
        self.assertEqual(extract_section_keys("\u212aey-section"), ["ey-section"])
        keys = extract_section_keys("\u0130ntro-section headline")
        self.assertEqual(keys, ["ntro-section"])
        self.assertTrue(all(key.isascii() for key in keys))

    def test_blank_query(self):
        self.assertEqual(extract_section_keys(""), [])
        self.assertEqual(extract_section_keys("   "), [])
        self.assertEqual(extract_section_keys(None), [])


class TestRoleHints(unittest.TestCase):
    def test_filters_keys_stopwords_and_short_tokens(self):
        query = "homepage-section the Headline, for a CTA in hero-section!"
        keys = extract_section_keys(query)
        self.assertEqual(extract_role_hints(query, keys), ["headline", "cta"])

    def test_strips_punctuation_and_deduplicates(self):
        self.assertEqual(extract_role_hints("Headline headline! (headline)", []), ["headline"])

    def test_drops_tokens_ending_with_section_even_when_not_extracted(self):
        self.assertEqual(extract_role_hints("promo_block-section copy", []), ["copy"])

    def test_keeps_underscores_and_digits(self):
        self.assertEqual(extract_role_hints("hero_2 ok", []), ["hero_2"])

    def test_blank_query(self):
        self.assertEqual(extract_role_hints("", []), [])
        self.assertEqual(extract_role_hints("  \t ", None), [])


if __name__ == "__main__":
    unittest.main()
