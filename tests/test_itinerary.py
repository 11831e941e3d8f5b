import unittest
from datetime import date, timedelta

from extraction.itinerary import estimate_duration, extract_activities, extract_location, parse_itinerary

TODAY = date(2030, 5, 1)


class ItineraryParserTests(unittest.TestCase):
    def test_parses_timed_entries_for_one_day(self):
        text = "Day 1: 9:00 Visit the Museum - Explore ancient artifacts\n9:00 AM Lunch at Cafe Nile"
        days = parse_itinerary(text, today=TODAY)

        self.assertEqual(len(days), 1)
        first, second = days[0].activities
        self.assertEqual(first.name, "Visit the Museum")
        self.assertEqual(first.description, "Explore ancient artifacts")
        self.assertEqual(first.duration, "2-3 hours")
        self.assertIn("Museum", first.location)
        self.assertEqual(second.name, "Lunch at Cafe Nile")
        self.assertEqual(second.duration, "1-2 hours")
        self.assertEqual(second.location, "Cafe Nile")

    def test_days_are_contiguous_and_dated_from_today(self):
        text = (
            "Here is your plan!\n"
            "Day 1: Arrival\n10:00 AM - Check in at Hotel Lumiere\n"
            "Day 2:\n9:00 AM - Walking tour of Montmartre\n"
            "Day 3 - Departure\n8:00 AM - Breakfast at Cafe Flore\n"
        )
        days = parse_itinerary(text, today=TODAY)

        self.assertEqual([d.day for d in days], [1, 2, 3])
        self.assertEqual([d.date for d in days], [TODAY + timedelta(days=n) for n in range(3)])
        self.assertEqual(days[1].activities[0].name, "Walking tour of Montmartre")
        self.assertEqual(days[1].activities[0].duration, "2-3 hours")

    def test_day_words_inside_other_words_are_not_markers(self):
        text = "Day 1:\n9:00 AM - Holiday market stroll\nToday we rest."
        days = parse_itinerary(text, today=TODAY)

        self.assertEqual(len(days), 1)
        self.assertEqual(days[0].activities[0].name, "Holiday market stroll")

    def test_no_markers_collects_everything_into_one_day(self):
        text = "9:00 AM - Visit the Louvre\n1:00 PM - Lunch near the river"
        days = parse_itinerary(text, today=TODAY)

        self.assertEqual(len(days), 1)
        self.assertEqual(days[0].day, 1)
        self.assertEqual(days[0].date, TODAY)
        self.assertEqual(len(days[0].activities), 2)

    def test_empty_text_yields_placeholder_day(self):
        days = parse_itinerary("", today=TODAY)

        self.assertEqual(len(days), 1)
        placeholder = days[0].activities[0]
        self.assertEqual(placeholder.name, "Explore destination")
        self.assertEqual(placeholder.duration, "Full day")
        self.assertEqual(placeholder.location, "Various locations")

    def test_out_of_range_day_number_uses_position_for_date(self):
        days = parse_itinerary("Day 99999999: 9:00 Museum tour", today=TODAY)

        self.assertEqual(len(days), 1)
        self.assertEqual(days[0].day, 1)
        self.assertEqual(days[0].date, TODAY)
        self.assertEqual(days[0].activities[0].name, "Museum tour")

    def test_day_without_activities_is_kept(self):
        days = parse_itinerary("Day 1:\nDay 2:\n10:00 AM - Boat tour on the Seine", today=TODAY)

        self.assertEqual(len(days), 2)
        self.assertEqual(days[0].activities, [])
        self.assertEqual(len(days[1].activities), 1)


class ActivityExtractionTests(unittest.TestCase):
    def test_untimed_lines_need_some_length(self):
        activities = extract_activities("Short line\n- Stroll along the Canal Saint-Martin")

        self.assertEqual(len(activities), 1)
        self.assertEqual(activities[0].duration, "30-60 minutes")

    def test_daypart_headings_are_skipped(self):
        activities = extract_activities("Morning: explore the old town\nAfternoon\n")
        self.assertEqual(activities, [])

    def test_time_ranges_are_consumed(self):
        activities = extract_activities("2:00 PM - 4:00 PM - Shopping at Le Marais")

        self.assertEqual(activities[0].name, "Shopping at Le Marais")
        self.assertEqual(activities[0].duration, "1-3 hours")
        self.assertEqual(activities[0].location, "Le Marais")

    def test_duration_defaults(self):
        self.assertEqual(estimate_duration("Relax by the pool"), "1-2 hours")
        self.assertEqual(estimate_duration("Dinner cruise"), "1-2 hours")

    def test_location_sentinel(self):
        self.assertEqual(extract_location("relax and unwind"), "Location TBD")


if __name__ == "__main__":
    unittest.main()
