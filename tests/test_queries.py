import unittest
from datetime import date, datetime, timedelta, timezone

from app.core.exceptions import NotFoundError
from app.schemas.prescription import PrescriptionCreate
from app.schemas.sale import SaleCreate
from app.services.dashboard_service import dashboard_summary
from app.services.medicine_service import expiring_medicines, expiry_cutoff, low_stock_medicines
from app.services.prescription_service import (
    create_prescription,
    get_prescription_by_number,
    pending_prescriptions,
    update_prescription_status,
)
from app.services.sale_service import process_sale
from tests.support import DatabaseTestCase


class LowStockTest(DatabaseTestCase):
    def test_compares_each_medicine_with_its_own_threshold(self):
        below = self.make_medicine(name="A", stock_quantity=5, min_stock_threshold=10)
        self.make_medicine(name="B", stock_quantity=20, min_stock_threshold=10)
        at_threshold = self.make_medicine(name="C", stock_quantity=3, min_stock_threshold=3)
        self.make_medicine(name="D", stock_quantity=3, min_stock_threshold=2)

        names = {medicine.name for medicine in low_stock_medicines(self.db)}

        self.assertEqual(names, {below.name, at_threshold.name})

    def test_default_threshold_is_ten(self):
        medicine = self.make_medicine(stock_quantity=10)
        self.assertEqual(medicine.min_stock_threshold, 10)
        self.assertEqual([item.id for item in low_stock_medicines(self.db)], [medicine.id])


class ExpiringTest(DatabaseTestCase):
    def test_window_is_thirty_days_inclusive(self):
        today = date(2026, 10, 19)
        self.assertEqual(expiry_cutoff(today), date(2026, 11, 18))

        expired = self.make_medicine(name="Expired", expiry_date=today - timedelta(days=3))
        boundary = self.make_medicine(name="Boundary", expiry_date=today + timedelta(days=30))
        self.make_medicine(name="Later", expiry_date=today + timedelta(days=31))

        result = expiring_medicines(self.db, today=today)

        self.assertEqual([medicine.id for medicine in result], [expired.id, boundary.id])


class PrescriptionQueryTest(DatabaseTestCase):
    def _prescription(self, number, created_at, medicine_id):
        prescription = create_prescription(
            self.db,
            PrescriptionCreate(
                prescription_number=number,
                patient_name="Pat",
                doctor_name="Dr. Who",
                items=[{"medicine_id": medicine_id, "dosage": "1 tab", "duration": "5 days"}],
            ),
        )
        prescription.created_at = created_at
        self.db.commit()
        return prescription

    def test_pending_are_newest_first(self):
        medicine = self.make_medicine()
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        oldest = self._prescription("RX-1", base, medicine.id)
        fulfilled = self._prescription("RX-2", base + timedelta(days=1), medicine.id)
        newest = self._prescription("RX-3", base + timedelta(days=2), medicine.id)

        update_prescription_status(self.db, fulfilled.id, "fulfilled")

        pending = pending_prescriptions(self.db)
        self.assertEqual([item.id for item in pending], [newest.id, oldest.id])

    def test_status_change_does_not_touch_stock(self):
        medicine = self.make_medicine(stock_quantity=7)
        prescription = self._prescription("RX-9", datetime.now(timezone.utc), medicine.id)

        update_prescription_status(self.db, prescription.id, "fulfilled")
        self.db.refresh(medicine)

        self.assertEqual(medicine.stock_quantity, 7)

    def test_lookup_by_number(self):
        medicine = self.make_medicine()
        created = self._prescription("RX-42", datetime.now(timezone.utc), medicine.id)

        found = get_prescription_by_number(self.db, "RX-42")
        self.assertEqual(found.id, created.id)
        self.assertEqual(found.items[0].medicine.name, medicine.name)

        with self.assertRaises(NotFoundError):
            get_prescription_by_number(self.db, "RX-404")

    def test_unknown_medicine_is_rejected(self):
        with self.assertRaises(NotFoundError):
            create_prescription(
                self.db,
                PrescriptionCreate(
                    prescription_number="RX-X",
                    patient_name="Pat",
                    doctor_name="Dr. No",
                    items=[{"medicine_id": 777, "dosage": "1", "duration": "1"}],
                ),
            )


class DashboardSummaryTest(DatabaseTestCase):
    def test_summary_counts(self):
        cheap = self.make_medicine(name="Cheap", selling_price=2.0, stock_quantity=30)
        self.make_medicine(name="Low", stock_quantity=1)
        for customer in ("Ann", "Bob", "Ann", None):
            process_sale(
                self.db,
                SaleCreate(
                    items=[{"medicine_id": cheap.id, "quantity": 1}],
                    customer_name=customer,
                ),
                pharmacist=None,
            )

        summary = dashboard_summary(self.db)

        self.assertEqual(summary["total_medicines"], 2)
        self.assertEqual(summary["low_stock_items"], 1)
        self.assertAlmostEqual(summary["today_sales"], 8.0)
        self.assertEqual(summary["total_customers"], 2)
        self.assertEqual(len(summary["recent_sales"]), 3)


if __name__ == "__main__":
    unittest.main()
