import unittest

from extraction.advice import keyword_recommendations, labelled_recommendations, labelled_summary, leading_summary


class LeadingLinesTests(unittest.TestCase):
    def test_summary_joins_first_two_lines(self):
        text = "\nMild spring weather.\n  Light showers midweek.\nPack layers."
        self.assertEqual(leading_summary(text, "default"), "Mild spring weather. Light showers midweek.")

    def test_summary_default_for_blank_text(self):
        self.assertEqual(leading_summary("  \n ", "default"), "default")

    def test_recommendations_filter_and_cap(self):
        text = "\n".join(
            [
                "Overview line",
                "I recommend an umbrella",
                "We suggest early starts",
                "A useful tip: museums open late on Fridays",
                "You could consider a rail pass",
                "Another recommend line",
            ]
        )
        picked = keyword_recommendations(text, ("recommend", "suggest", "tip"), 2)
        self.assertEqual(picked, ["I recommend an umbrella", "We suggest early starts"])

    def test_recommendations_default_when_nothing_matches(self):
        picked = keyword_recommendations("Sunny all week.", ("recommend",), 4, ["Bring sunscreen"])
        self.assertEqual(picked, ["Bring sunscreen"])


class LabelledAdviceTests(unittest.TestCase):
    TEXT = (
        "SUMMARY: Two well-located hotels fit the budget.\n"
        "Both offer free cancellation.\n"
        "\n"
        "RECOMMENDATIONS:\n"
        "• Book the Grand hotel early\n"
        "- Ask for a courtyard room\n"
        "Not a bullet\n"
        "* Check breakfast options\n"
    )

    def test_summary_block(self):
        self.assertEqual(
            labelled_summary(self.TEXT, "default"),
            "Two well-located hotels fit the budget.\nBoth offer free cancellation.",
        )

    def test_bullets_after_heading(self):
        self.assertEqual(
            labelled_recommendations(self.TEXT),
            ["Book the Grand hotel early", "Ask for a courtyard room", "Check breakfast options"],
        )

    def test_missing_labels(self):
        self.assertEqual(labelled_summary("Nice places.", "fallback"), "fallback")
        self.assertEqual(labelled_recommendations("Nice places."), [])


if __name__ == "__main__":
    unittest.main()
