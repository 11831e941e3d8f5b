import json
import unittest
from datetime import date, timedelta
from unittest.mock import patch

from fastapi.testclient import TestClient

from agents.coordinator import TravelPlanningCoordinator
from api import main
from core.config import PlannerSettings


def trip_dates(offset: int = 1, days: int = 2):
    start = date.today() + timedelta(days=offset)
    return start.isoformat(), (start + timedelta(days=days - 1)).isoformat()


class ApiTests(unittest.TestCase):
    def setUp(self):
        patcher = patch.object(main, "coordinator", TravelPlanningCoordinator(PlannerSettings()))
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = TestClient(main.app)

    def test_health(self):
        resp = self.client.get("/health")

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")

    def test_generate_returns_plan(self):
        start, end = trip_dates()
        resp = self.client.post(
            "/api/generate",
            json={"destination": "Rome", "start_date": start, "end_date": end, "preferences": {"origin": "Paris"}},
        )

        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["destination"], "Rome")
        self.assertEqual(body["budget"]["total"], 1050)
        self.assertEqual(body["flight_info"]["origin"], "Paris")
        self.assertEqual(len(body["weather_info"]["forecast"]), 2)

    def test_generate_invalid_dates_is_server_error(self):
        start, end = trip_dates(offset=-3)
        resp = self.client.post("/api/generate", json={"destination": "Rome", "start_date": start, "end_date": end})

        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"detail": "Invalid dates provided"})

    def test_generate_requires_destination(self):
        start, end = trip_dates()
        resp = self.client.post("/api/generate", json={"destination": "", "start_date": start, "end_date": end})

        self.assertEqual(resp.status_code, 422)

    def test_stream_emits_progress_then_plan(self):
        start, end = trip_dates()
        resp = self.client.get(
            "/api/generate/stream",
            params={"destination": "Lisbon", "start_date": start, "end_date": end, "accommodation_type": "hostel"},
        )

        self.assertEqual(resp.status_code, 200)
        events = [json.loads(line[len("data: "):]) for line in resp.text.splitlines() if line.startswith("data: ")]
        stages = [event["stage"] for event in events]
        self.assertEqual(stages, ["local_expert", "itinerary", "budget", "enrichment", "done"])
        plan = events[-1]["plan"]
        self.assertEqual(plan["accommodation_info"]["accommodations"][0]["type"], "hostel")

    def test_stream_reports_errors(self):
        start, end = trip_dates(offset=-3)
        resp = self.client.get("/api/generate/stream", params={"destination": "Lisbon", "start_date": start, "end_date": end})

        events = [json.loads(line[len("data: "):]) for line in resp.text.splitlines() if line.startswith("data: ")]
        self.assertEqual(events[-1], {"stage": "error", "message": "Invalid dates provided"})


if __name__ == "__main__":
    unittest.main()
