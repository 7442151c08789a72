import unittest
from datetime import date, timedelta

from fastapi.testclient import TestClient

from app.core.dates import utc_today
from app.main import app
from tests.support import DatabaseTestCase


class ApiTest(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.client = TestClient(app)
        self.admin = self._register("admin", "admin@pharmacy.com", "admin123", role="admin")
        self.pharmacist = self._register("test", "test@pharmacy.com", "test123")

    def _register(self, username, email, password, role=None):
        body = {"username": username, "email": email, "password": password}
        if role:
            body["role"] = role
        response = self.client.post("/api/users/register", json=body)
        self.assertEqual(response.status_code, 201, response.text)
        return {"Authorization": "Bearer {}".format(response.json()["token"])}

    def _create_supplier(self, **overrides):
        body = {
            "name": "HealthPlus",
            "contact": "555-0100",
            "email": "orders@healthplus.example",
            "address": "12 Market Street",
        }
        body.update(overrides)
        response = self.client.post("/api/suppliers", json=body, headers=self.admin)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def _create_medicine(self, **overrides):
        body = {
            "name": "Amoxicillin",
            "category": "Antibiotic",
            "manufacturer": "Acme",
            "purchase_price": 8.0,
            "selling_price": 12.5,
            "stock_quantity": 10,
            "expiry_date": (date.today() + timedelta(days=365)).isoformat(),
            "batch_number": "AMX-1",
        }
        body.update(overrides)
        response = self.client.post("/api/medicines", json=body, headers=self.admin)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")

    def test_login_and_profile(self):
        response = self.client.post(
            "/api/users/login", json={"email": "TEST@pharmacy.com", "password": "test123"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["role"], "pharmacist")

        token = response.json()["token"]
        profile = self.client.get("/api/users/profile", headers={"Authorization": "Bearer " + token})
        self.assertEqual(profile.json()["username"], "test")

        bad = self.client.post(
            "/api/users/login", json={"email": "test@pharmacy.com", "password": "wrong"}
        )
        self.assertEqual(bad.status_code, 401)
        self.assertEqual(bad.json()["detail"], "Invalid email or password")

    def test_duplicate_registration(self):
        response = self.client.post(
            "/api/users/register",
            json={"username": "test", "email": "test@pharmacy.com", "password": "test123"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "User already exists")

    def test_last_admin_keeps_admin_registration_closed(self):
        admin_id = self.client.get("/api/users/profile", headers=self.admin).json()["id"]

        demote = self.client.put(
            "/api/users/{}".format(admin_id), json={"role": "pharmacist"}, headers=self.admin
        )
        self.assertEqual(demote.status_code, 409)
        removed = self.client.delete("/api/users/{}".format(admin_id), headers=self.admin)
        self.assertEqual(removed.status_code, 409)

        anonymous = self.client.post(
            "/api/users/register",
            json={"username": "intruder", "email": "intruder@example.com", "password": "secret1", "role": "admin"},
        )
        self.assertEqual(anonymous.status_code, 403)

    def test_access_control(self):
        self.assertEqual(self.client.get("/api/medicines").status_code, 200)
        self.assertEqual(self.client.get("/api/sales").status_code, 401)
        self.assertEqual(self.client.get("/api/dashboard/summary").status_code, 401)
        self.assertEqual(
            self.client.get("/api/sales", headers={"Authorization": "Bearer junk"}).status_code, 401
        )
        self.assertEqual(self.client.get("/api/suppliers", headers=self.pharmacist).status_code, 403)

        response = self.client.post(
            "/api/medicines",
            json={
                "name": "X",
                "category": "Other",
                "manufacturer": "Acme",
                "purchase_price": 1,
                "selling_price": 2,
                "expiry_date": "2030-01-01",
                "batch_number": "X-1",
            },
            headers=self.pharmacist,
        )
        self.assertEqual(response.status_code, 403)

    def test_medicine_lifecycle_with_supplier(self):
        supplier = self._create_supplier()
        medicine = self._create_medicine(supplier_id=supplier["id"])
        self.assertEqual(medicine["supplier"]["name"], "HealthPlus")

        detail = self.client.get("/api/suppliers/{}".format(supplier["id"]), headers=self.admin).json()
        self.assertEqual([item["id"] for item in detail["supplied_medicines"]], [medicine["id"]])

        blocked = self.client.delete("/api/suppliers/{}".format(supplier["id"]), headers=self.admin)
        self.assertEqual(blocked.status_code, 409)
        self.assertEqual(blocked.json()["detail"], "Cannot delete supplier with associated medicines")

        updated = self.client.put(
            "/api/medicines/{}".format(medicine["id"]),
            json={"supplier_id": None, "stock_quantity": 3},
            headers=self.admin,
        )
        self.assertEqual(updated.status_code, 200)
        self.assertIsNone(updated.json()["supplier_id"])

        low = self.client.get("/api/medicines/lowstock").json()
        self.assertEqual([item["id"] for item in low], [medicine["id"]])

        deleted = self.client.delete("/api/suppliers/{}".format(supplier["id"]), headers=self.admin)
        self.assertEqual(deleted.status_code, 200)

        removed = self.client.delete("/api/medicines/{}".format(medicine["id"]), headers=self.admin)
        self.assertEqual(removed.status_code, 200)
        missing = self.client.get("/api/medicines/{}".format(medicine["id"]))
        self.assertEqual(missing.status_code, 404)

    def test_checkout_and_report(self):
        amoxicillin = self._create_medicine()
        paracetamol = self._create_medicine(name="Paracetamol", selling_price=4.0, batch_number="PCM-1")

        response = self.client.post(
            "/api/sales",
            json={
                "items": [
                    {"medicine_id": amoxicillin["id"], "quantity": 3},
                    {"medicine_id": paracetamol["id"], "quantity": 2},
                ],
                "customer_name": "Ann",
                "payment_method": "card",
            },
            headers=self.pharmacist,
        )
        self.assertEqual(response.status_code, 201, response.text)
        sale = response.json()
        self.assertAlmostEqual(sale["total_amount"], 45.5)
        self.assertEqual(sale["pharmacist"]["username"], "test")
        self.assertEqual(self.client.get("/api/medicines/{}".format(amoxicillin["id"])).json()["stock_quantity"], 7)

        short = self.client.post(
            "/api/sales",
            json={"items": [{"medicine_id": paracetamol["id"], "quantity": 50}]},
            headers=self.pharmacist,
        )
        self.assertEqual(short.status_code, 409)
        self.assertEqual(short.json()["detail"], "Insufficient stock for Paracetamol. Available: 8")

        invalid = self.client.post(
            "/api/sales",
            json={"items": [{"medicine_id": paracetamol["id"], "quantity": 0}]},
            headers=self.pharmacist,
        )
        self.assertEqual(invalid.status_code, 422)

        today = utc_today().isoformat()
        report = self.client.get(
            "/api/sales/report",
            params={"start_date": today, "end_date": today},
            headers=self.pharmacist,
        ).json()
        self.assertEqual(report["total_sales"], 1)
        self.assertAlmostEqual(report["total_revenue"], 45.5)

        summary = self.client.get("/api/dashboard/summary", headers=self.pharmacist).json()
        self.assertEqual(summary["total_customers"], 1)
        self.assertEqual(len(summary["recent_sales"]), 1)

    def test_prescription_flow(self):
        medicine = self._create_medicine()
        created = self.client.post(
            "/api/prescriptions",
            json={
                "prescription_number": "RX-100",
                "patient_name": "Pat",
                "doctor_name": "Dr. Grey",
                "items": [{"medicine_id": medicine["id"], "dosage": "500mg", "duration": "7 days"}],
            },
            headers=self.pharmacist,
        )
        self.assertEqual(created.status_code, 201, created.text)
        prescription = created.json()
        self.assertEqual(prescription["status"], "pending")

        pending = self.client.get("/api/prescriptions/pending", headers=self.pharmacist).json()
        self.assertEqual([item["id"] for item in pending], [prescription["id"]])

        fulfilled = self.client.patch(
            "/api/prescriptions/{}/status".format(prescription["id"]),
            json={"status": "fulfilled"},
            headers=self.pharmacist,
        )
        self.assertEqual(fulfilled.json()["status"], "fulfilled")
        self.assertEqual(self.client.get("/api/prescriptions/pending", headers=self.pharmacist).json(), [])


if __name__ == "__main__":
    unittest.main()
