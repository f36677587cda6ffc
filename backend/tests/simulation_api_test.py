import sys
import unittest
from datetime import datetime
from pathlib import Path

from fastapi.testclient import TestClient


# Ensure `backend/` is on sys.path so `import app...` works
REPO_ROOT = Path(__file__).resolve().parents[2]
BACKEND_DIR = REPO_ROOT / "backend"
sys.path.insert(0, str(BACKEND_DIR))
sys.path.insert(0, str(REPO_ROOT))

from app.dependencies.services import get_simulation_service  # noqa: E402
from app.main import app  # noqa: E402
from app.services.simulation_service import SimulationService  # noqa: E402


FIXED_NOW = datetime(2025, 1, 15, 12, 0)

PLAYER_CONTEXT = {
    "current_points": 12000,
    "current_nights": 45,
    "current_tier": "Prime",
    "current_level": "Platinum",
    "average_points_per_night": 150,
    "average_nights_per_month": 7,
    "average_spend_per_cruise": 2000,
}

BOOKED_CRUISES = [
    {"id": "c1", "nights": 7, "total_price": 1500, "retail_value": 2500, "earned_points": 1000},
    {"id": "c2", "nights": 5, "price": 900},
]


class SimulationApiTests(unittest.TestCase):
    def setUp(self):
        app.dependency_overrides[get_simulation_service] = lambda: SimulationService(now=lambda: FIXED_NOW)
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _simulation_payload(self, scenario, **extra):
        payload = {
            "player_context": PLAYER_CONTEXT,
            "booked_cruises": BOOKED_CRUISES,
            "scenario": scenario,
        }
        payload.update(extra)
        return payload

    def test_simulate_add_cruise(self):
        resp = self.client.post(
            "/api/v1/simulation",
            json=self._simulation_payload({"type": "add_cruise"}),
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()

        self.assertEqual(body["tier_forecast"]["points_gained"], 1050)
        self.assertEqual(body["tier_forecast"]["projected_tier"], "Prime")
        self.assertEqual(body["tier_forecast"]["months_to_next_tier"], 12)
        self.assertTrue(body["tier_forecast"]["projected_date"].startswith("2026-01-10"))
        self.assertEqual(body["loyalty_forecast"]["nights_to_next_level"], 3)
        self.assertEqual(body["roi_projection"]["total_investment"], 4400)
        self.assertIn(body["risk_analysis"]["overall_risk"], {"low", "medium", "high"})
        self.assertIsNone(body["comparison"])

    def test_simulate_unknown_type_is_no_change(self):
        resp = self.client.post(
            "/api/v1/simulation",
            json=self._simulation_payload({"type": "teleport", "custom_points": 5000}),
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()

        self.assertEqual(body["tier_forecast"]["points_gained"], 0)
        self.assertEqual(body["loyalty_forecast"]["nights_gained"], 0)

    def test_book_offer(self):
        resp = self.client.post(
            "/api/v1/simulation",
            json=self._simulation_payload(
                {"type": "book_offer", "offer_id": "o1"},
                offers=[{"id": "o1", "min_nights": 5, "freeplay_amount": 200, "obc_amount": 100}],
            ),
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()

        self.assertEqual(body["loyalty_forecast"]["nights_gained"], 5)
        self.assertEqual(body["roi_projection"]["comp_value"], 300)

    def test_compare(self):
        resp = self.client.post(
            "/api/v1/simulation/compare",
            json=self._simulation_payload({"type": "add_cruise", "new_nights": 10}),
        )
        self.assertEqual(resp.status_code, 200)
        comparison = resp.json()["comparison"]

        self.assertEqual(comparison["difference"]["points_diff"], 1500)
        self.assertEqual(comparison["difference"]["nights_diff"], 10)
        self.assertEqual(comparison["baseline"]["tier_forecast"]["points_gained"], 0)
        self.assertNotIn("comparison", comparison["baseline"])

    def test_strict_validation_rejects_negative_values(self):
        context = dict(PLAYER_CONTEXT, current_points=-100)
        resp = self.client.post(
            "/api/v1/simulation",
            json={"player_context": context, "scenario": {"type": "add_cruise"}, "strict": True},
        )
        self.assertEqual(resp.status_code, 400)
        body = resp.json()

        self.assertIn("detail", body)
        self.assertEqual(body["detail"]["error"]["code"], "VALIDATION_ERROR")
        self.assertEqual(len(body["detail"]["error"]["details"]["problems"]), 1)

    def test_lenient_by_default(self):
        context = dict(PLAYER_CONTEXT, current_points=-100)
        resp = self.client.post(
            "/api/v1/simulation",
            json={"player_context": context, "scenario": {"type": "add_cruise"}},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["tier_forecast"]["current_tier"], "Choice")

    def test_missing_scenario_is_validation_error(self):
        resp = self.client.post("/api/v1/simulation", json={"player_context": PLAYER_CONTEXT})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"]["code"], "VALIDATION_ERROR")

    def test_timeline_default_months(self):
        resp = self.client.post(
            "/api/v1/simulation/timeline",
            json={"player_context": PLAYER_CONTEXT, "booked_cruises": BOOKED_CRUISES},
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()

        self.assertEqual(body["months_ahead"], 24)
        self.assertEqual(len(body["projections"]), 25)
        self.assertEqual(body["projections"][3]["points"], 0)

    def test_timeline_months_limits(self):
        too_many = self.client.post(
            "/api/v1/simulation/timeline",
            json={"player_context": PLAYER_CONTEXT, "months_ahead": 100000},
        )
        self.assertEqual(too_many.status_code, 400)
        self.assertEqual(too_many.json()["detail"]["error"]["code"], "VALIDATION_ERROR")

        negative = self.client.post(
            "/api/v1/simulation/timeline",
            json={"player_context": PLAYER_CONTEXT, "months_ahead": -1},
        )
        self.assertEqual(negative.status_code, 400)
        self.assertEqual(negative.json()["error"]["code"], "VALIDATION_ERROR")

    def test_build_context(self):
        resp = self.client.post(
            "/api/v1/simulation/context",
            json={"booked_cruises": BOOKED_CRUISES, "current_points": 30000, "current_nights": 60},
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()

        self.assertEqual(body["current_tier"], "Signature")
        self.assertEqual(body["current_level"], "Emerald")
        self.assertEqual(body["average_spend_per_cruise"], 1200)

    def test_loyalty_tables(self):
        resp = self.client.get("/api/v1/loyalty/tables")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()

        self.assertEqual([t["name"] for t in body["tiers"]], ["Choice", "Prime", "Signature", "Masters"])
        self.assertEqual(body["tiers"][1]["threshold"], 2501)
        self.assertEqual(body["tiers"][1]["points_per_night"], 150)
        self.assertEqual(len(body["levels"]), 6)
        self.assertIsNone(body["levels"][0]["points_per_night"])

    def test_loyalty_status(self):
        resp = self.client.get("/api/v1/loyalty/status", params={"points": 12000, "nights": 45})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()

        self.assertEqual(body["tier"]["current"], "Prime")
        self.assertEqual(body["tier"]["next_name"], "Signature")
        self.assertEqual(body["tier"]["remaining"], 13001)
        self.assertEqual(body["level"]["current"], "Platinum")
        self.assertEqual(body["level"]["remaining"], 10)

    def test_loyalty_status_rejects_negative_points(self):
        resp = self.client.get("/api/v1/loyalty/status", params={"points": -1})
        self.assertEqual(resp.status_code, 400)


if __name__ == "__main__":
    unittest.main()
