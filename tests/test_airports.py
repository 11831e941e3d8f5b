import unittest

from tools.airports import POPULAR_CITIES, lookup_airport_code


class AirportLookupTests(unittest.TestCase):
    def test_exact_match(self):
        result = lookup_airport_code("Paris")

        self.assertTrue(result.success)
        self.assertEqual(result.airport_code, "CDG")
        self.assertEqual(result.confidence, "high")
        self.assertEqual(result.city, "Paris")

    def test_alias_resolves_before_fuzzy(self):
        result = lookup_airport_code("NYC")

        self.assertEqual(result.airport_code, "JFK")
        self.assertEqual(result.matched_city, "new york")
        self.assertEqual(result.confidence, "high")

    def test_zurich_uses_zrh(self):
        self.assertEqual(lookup_airport_code("zurich").airport_code, "ZRH")

    def test_substring_match_is_medium(self):
        result = lookup_airport_code("Greater London")

        self.assertEqual(result.airport_code, "LHR")
        self.assertEqual(result.confidence, "medium")

    def test_alias_with_unknown_target_falls_through(self):
        result = lookup_airport_code("Vegas")

        self.assertTrue(result.success)
        self.assertEqual(result.airport_code, "VEG")
        self.assertEqual(result.confidence, "low")
        self.assertTrue(result.note)

    def test_unknown_city_gets_estimated_code(self):
        result = lookup_airport_code("Springfield")

        self.assertEqual(result.airport_code, "SPR")
        self.assertEqual(result.confidence, "low")
        self.assertEqual(result.country, "Unknown")

    def test_short_input_fails_with_suggestions(self):
        result = lookup_airport_code("Zq")

        self.assertFalse(result.success)
        self.assertEqual(result.suggestions, ["zurich"])
        self.assertIn("Zq", result.error)

    def test_blank_input_suggests_popular_cities(self):
        result = lookup_airport_code("")

        self.assertFalse(result.success)
        self.assertEqual(result.suggestions, POPULAR_CITIES)


if __name__ == "__main__":
    unittest.main()
