import unittest
from datetime import date, timedelta

from app.database import Base, SessionLocal, create_schema, engine
from app.schemas.medicine import MedicineCreate
from app.schemas.supplier import SupplierCreate
from app.services.medicine_service import create_medicine
from app.services.supplier_service import create_supplier


class DatabaseTestCase(unittest.TestCase):
    def setUp(self):
        create_schema()
        self.db = SessionLocal()

    def tearDown(self):
        self.db.close()
        Base.metadata.drop_all(bind=engine)

    def make_supplier(self, **overrides):
        values = {
            "name": "HealthPlus",
            "contact": "555-0100",
            "email": "orders@healthplus.example",
            "address": "12 Market Street",
        }
        values.update(overrides)
        return create_supplier(self.db, SupplierCreate(**values))

    def make_medicine(self, **overrides):
        values = {
            "name": "Paracetamol",
            "category": "Analgesic",
            "manufacturer": "Acme",
            "purchase_price": 1.0,
            "selling_price": 4.0,
            "stock_quantity": 20,
            "expiry_date": date.today() + timedelta(days=365),
            "batch_number": "B-001",
        }
        values.update(overrides)
        return create_medicine(self.db, MedicineCreate(**values))
