import unittest
from fastapi.testclient import TestClient

from wellness.api.api_run import create_app
from wellness.api.dependencies import WellnessServices
from wellness.logic.planning.resolution import PlanResolver
from wellness.utilities.config import Settings
from wellness.tests.fakes import TODAY, TODAY_KEY, CountingGenerator, FakeSender, MemoryStore

ADMIN = {"Authorization": "Bearer admin-secret"}
CRON = {"Authorization": "Bearer cron-secret"}


def build_client(generator=None, email_sender=None, **settings):
    options = {"admin_secret": "admin-secret", "cron_secret": "cron-secret"}
    options.update(settings)
    config = Settings(environ={}, **options)
    store = MemoryStore()
    generator = generator or CountingGenerator()
    resolver = PlanResolver(store, generator, config.store_mode, clock=lambda: TODAY)
    services = WellnessServices(config, store, generator, resolver=resolver, email_sender=email_sender)
    return TestClient(create_app(services)), services


class TestDailyPlanApi(unittest.TestCase):

    def setUp(self):
        self.client, self.services = build_client()

    def test_admin_generate_then_read_back(self):
        resp = self.client.get("/api/daily-plan", params={"date": "2025-03-01"})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json().get("detail"), "No plan found for the specified date")

        resp = self.client.post("/api/admin/generate-plan", json={"date": "2025-03-01"}, headers=ADMIN)
        self.assertEqual(resp.status_code, 200, resp.text)
        created = resp.json()
        self.assertTrue(created["success"])
        self.assertEqual(len(created["plan"]["workout"]), 7)
        self.assertEqual(sorted(created["plan"]["meals"]), ["breakfast", "dinner", "lunch"])

        resp = self.client.get("/api/daily-plan", params={"date": "2025-03-01"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        metadata = body.pop("_metadata")
        self.assertEqual(body, created["plan"])
        self.assertEqual(metadata["source"], "store")

    def test_existing_plan_needs_force(self):
        self.client.post("/api/admin/generate-plan", json={"date": "2025-03-01"}, headers=ADMIN)
        resp = self.client.post("/api/admin/generate-plan", json={"date": "2025-03-01"}, headers=ADMIN)
        self.assertEqual(resp.status_code, 409)

        resp = self.client.post("/admin/generate-plan", json={"date": "2025-03-01", "force": True}, headers=ADMIN)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.services.generator.calls, 2)

    def test_exists_check(self):
        resp = self.client.get("/api/admin/generate-plan", params={"date": "2025-03-01"}, headers=ADMIN)
        self.assertEqual(resp.json(), {"date": "2025-03-01", "exists": False})

    def test_today_is_generated_once(self):
        first = self.client.get("/api/daily-plan")
        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json()["date"], TODAY_KEY)
        self.assertEqual(first.json()["_metadata"]["source"], "generated")
        self.assertIn("no-store", first.headers["cache-control"])

        second = self.client.get("/plan")
        self.assertEqual(second.json()["_metadata"]["source"], "store")
        self.assertEqual(self.services.generator.calls, 1)

    def test_refresh_flag_regenerates(self):
        self.client.get("/api/daily-plan")
        resp = self.client.get("/api/daily-plan", params={"refresh": "true"})
        self.assertTrue(resp.json()["_metadata"]["forceRefresh"])
        self.assertEqual(self.services.generator.calls, 2)

    def test_force_refresh_route(self):
        resp = self.client.get("/api/force-refresh")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["x-force-refresh"], "true")
        self.assertEqual(resp.json()["_metadata"]["storeMode"], "persistent")

    def test_bad_date_is_400(self):
        resp = self.client.get("/api/daily-plan", params={"date": "03/10/2025"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("YYYY-MM-DD", resp.json()["detail"])

    def test_pdf_download(self):
        resp = self.client.get("/api/daily-plan/pdf")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["content-type"], "application/pdf")
        self.assertIn(f"wellness-plan-{TODAY_KEY}.pdf", resp.headers["content-disposition"])
        self.assertTrue(resp.content.startswith(b"%PDF"))

    def test_pdf_for_missing_date(self):
        self.assertEqual(self.client.get("/api/daily-plan/pdf", params={"date": "2020-01-01"}).status_code, 404)


class TestAdminAuth(unittest.TestCase):

    def test_missing_and_wrong_bearer(self):
        client, services = build_client()
        resp = client.post("/api/admin/generate-plan", json={"date": "2025-03-01"})
        self.assertEqual(resp.status_code, 401)
        resp = client.post("/api/admin/generate-plan", json={"date": "2025-03-01"},
                           headers={"Authorization": "Bearer nope"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(services.generator.calls, 0)

    def test_unconfigured_secret_is_500(self):
        client, _ = build_client(admin_secret=None)
        resp = client.post("/api/admin/generate-plan", json={"date": "2025-03-01"}, headers=ADMIN)
        self.assertEqual(resp.status_code, 500)
        self.assertIn("ADMIN_SECRET", resp.json()["detail"])

    def test_invalid_body_is_400(self):
        client, _ = build_client()
        resp = client.post("/api/admin/generate-plan", json={"date": "tomorrow"}, headers=ADMIN)
        self.assertEqual(resp.status_code, 400)
        resp = client.post("/api/admin/generate-plan", json={}, headers=ADMIN)
        self.assertEqual(resp.status_code, 400)


class TestAdminMaintenance(unittest.TestCase):

    def setUp(self):
        self.client, self.services = build_client()

    def test_clear_today(self):
        self.client.get("/api/daily-plan")
        resp = self.client.post("/api/clear-today", headers=ADMIN)
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["deleted"])
        self.assertNotIn(TODAY_KEY, self.services.store.plans)

    def test_cleanup_uses_window(self):
        for day in ("2024-12-01", "2025-03-01"):
            self.client.post("/api/admin/generate-plan", json={"date": day}, headers=ADMIN)
        resp = self.client.post("/api/admin/cleanup", json={"days": 30}, headers=ADMIN)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["plansRemoved"], 1)
        self.assertEqual(list(self.services.store.plans), ["2025-03-01"])

    def test_cleanup_without_body(self):
        resp = self.client.post("/api/admin/cleanup", headers=ADMIN)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["days"], 30)

    def test_cleanup_empty_body_uses_configured_retention(self):
        client, services = build_client(retention_days=90)
        for day in ("2024-11-01", "2025-01-01"):
            client.post("/api/admin/generate-plan", json={"date": day}, headers=ADMIN)
        resp = client.post("/api/admin/cleanup", json={}, headers=ADMIN)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["days"], 90)
        self.assertEqual(resp.json()["plansRemoved"], 1)
        self.assertEqual(list(services.store.plans), ["2025-01-01"])

    def test_monthly_disabled(self):
        resp = self.client.post("/api/admin/generate-monthly-plan", json={"monthKey": "2025-04"}, headers=ADMIN)
        self.assertEqual(resp.status_code, 400)


class TestCron(unittest.TestCase):

    def test_requires_bearer(self):
        client, _ = build_client(email_sender=FakeSender(), recipient_emails=["a@example.com"])
        self.assertEqual(client.post("/api/cron/daily-plan").status_code, 401)
        self.assertEqual(client.post("/api/cron/daily-plan", headers=ADMIN).status_code, 401)

    def test_unconfigured_cron_secret(self):
        client, _ = build_client(cron_secret=None)
        resp = client.post("/api/cron/daily-plan", headers=CRON)
        self.assertEqual(resp.status_code, 500)
        self.assertIn("CRON_SECRET", resp.json()["detail"])

    def test_missing_email_configuration(self):
        client, _ = build_client(recipient_emails=["a@example.com"])
        resp = client.post("/api/cron/daily-plan", headers=CRON)
        self.assertEqual(resp.status_code, 500)
        self.assertIn("RESEND_API_KEY", resp.json()["detail"])

        client, _ = build_client(email_sender=FakeSender())
        resp = client.post("/cron/daily-job", headers=CRON)
        self.assertEqual(resp.status_code, 500)
        self.assertIn("RECIPIENT_EMAILS", resp.json()["detail"])

    def test_runs_daily_job(self):
        sender = FakeSender(failing={"b@example.com"})
        client, services = build_client(email_sender=sender, recipient_emails=["a@example.com", "b@example.com"])
        resp = client.post("/api/cron/daily-plan", headers=CRON)
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["planDate"], TODAY_KEY)
        self.assertEqual(body["emailsSent"], 1)
        self.assertEqual(body["emailsFailed"], 1)
        self.assertIn(TODAY_KEY, services.store.plans)

    def test_info_route(self):
        client, _ = build_client()
        resp = client.get("/api/cron/daily-plan")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["method"], "POST")


class TestPages(unittest.TestCase):

    def setUp(self):
        self.client, self.services = build_client()

    def test_dashboard_requires_premium(self):
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("Premium Access Required", resp.text)
        self.assertEqual(self.services.generator.calls, 0)

    def test_premium_dashboard_shows_plan(self):
        resp = self.client.get("/", params={"is_premium": "true"})
        self.assertEqual(resp.status_code, 200)
        self.assertIn("AI1 quote", resp.text)
        self.assertIn("AI1 move 6", resp.text)
        self.assertIn("AI1 dinner", resp.text)
        self.assertIn("Monday, March 10, 2025", resp.text)

    def test_health_and_debug(self):
        self.assertEqual(self.client.get("/health").json()["status"], "ok")
        debug = self.client.get("/api/debug").json()
        self.assertEqual(debug["today"], TODAY_KEY)
        self.assertEqual(debug["store"]["backend"], "file")
        self.assertEqual(debug["openai"]["keyLength"], 0)


if __name__ == "__main__":
    unittest.main()
