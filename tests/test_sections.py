import unittest

from agents.prompts import local_expert_sections
from extraction.sections import LOCAL_EXPERT_SECTIONS, parse_recommendations, split_numbered_sections


class SectionSplitterTests(unittest.TestCase):
    def test_sections_map_onto_categories_in_order(self):
        text = (
            "1. Hidden gems\nCanal Saint-Martin walks\nRue Cremieux\n"
            "2. Customs\nGreet shopkeepers with bonjour\n"
            "3. Transportation\nBuy a Navigo pass\n"
        )
        recs = parse_recommendations(text)

        self.assertEqual(recs.hidden_gems, ["Hidden gems", "Canal Saint-Martin walks", "Rue Cremieux"])
        self.assertEqual(recs.customs, ["Customs", "Greet shopkeepers with bonjour"])
        self.assertEqual(recs.transportation, ["Transportation", "Buy a Navigo pass"])
        self.assertEqual(recs.dining, [])
        self.assertEqual(recs.shopping, [])

    def test_extra_sections_are_dropped(self):
        text = "\n".join(f"{n}. item {n}" for n in range(1, 13))
        recs = parse_recommendations(text)

        self.assertEqual(recs.hidden_gems, ["item 1"])
        self.assertEqual(recs.shopping, ["item 10"])

    def test_preamble_shifts_categories(self):
        # Positional mapping: an intro paragraph occupies the first slot.
        recs = parse_recommendations("Welcome to Paris!\n1. Rue Cremieux\n2. Say bonjour")

        self.assertEqual(recs.hidden_gems, ["Welcome to Paris!"])
        self.assertEqual(recs.customs, ["Rue Cremieux"])
        self.assertEqual(recs.transportation, ["Say bonjour"])

    def test_empty_text_gives_empty_categories(self):
        recs = parse_recommendations("")
        self.assertTrue(all(value == [] for value in recs.model_dump().values()))

    def test_whitespace_fragments_are_skipped(self):
        self.assertEqual(split_numbered_sections("1.   \n2. Metro\n"), [["Metro"]])

    def test_prompt_lists_categories_in_parser_order(self):
        lines = local_expert_sections().splitlines()

        self.assertEqual(len(lines), len(LOCAL_EXPERT_SECTIONS))
        for idx, (line, (_field, heading)) in enumerate(zip(lines, LOCAL_EXPERT_SECTIONS), start=1):
            self.assertEqual(line, f"{idx}. {heading}")


if __name__ == "__main__":
    unittest.main()
