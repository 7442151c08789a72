import argparse
import logging
from datetime import date, timedelta

from sqlalchemy import delete, select

from app.core.logging import setup_logging
from app.database import create_schema, session_scope
from app.models.medicine import Medicine
from app.models.prescription import Prescription
from app.models.sales import Sale
from app.models.supplier import Supplier
from app.schemas.medicine import MedicineCreate
from app.schemas.supplier import SupplierCreate
from app.services.medicine_service import create_medicine
from app.services.supplier_service import create_supplier

logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample suppliers and medicines.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear inventory, prescriptions and sales before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()
    create_schema()

    with session_scope() as db:
        if args.reset:
            db.execute(delete(Sale))
            db.execute(delete(Prescription))
            db.execute(delete(Medicine))
            db.execute(delete(Supplier))
            db.commit()

        has_medicine = db.execute(select(Medicine.id).limit(1)).first()
        if has_medicine:
            logger.info("Seed skipped: medicines already exist.")
            return

        today = date.today()
        health_plus = create_supplier(
            db,
            SupplierCreate(
                name="HealthPlus Distributors",
                contact="+1 555 0100",
                email="orders@healthplus.example",
                address="12 Market Street",
            ),
        )
        medilink = create_supplier(
            db,
            SupplierCreate(
                name="MediLink Wholesale",
                contact="+1 555 0142",
                email="sales@medilink.example",
                address="88 Harbor Road",
            ),
        )

        samples = [
            MedicineCreate(
                name="Paracetamol 500mg",
                category="Analgesic",
                manufacturer="Acme Pharma",
                purchase_price=2.10,
                selling_price=4.00,
                stock_quantity=120,
                supplier_id=health_plus.id,
                expiry_date=today + timedelta(days=400),
                batch_number="PCM-2401",
            ),
            MedicineCreate(
                name="Amoxicillin 250mg",
                category="Antibiotic",
                manufacturer="Zenith Labs",
                purchase_price=7.80,
                selling_price=12.50,
                stock_quantity=6,
                supplier_id=medilink.id,
                expiry_date=today + timedelta(days=20),
                batch_number="AMX-1107",
            ),
            MedicineCreate(
                name="Cetirizine 10mg",
                category="Antihistamine",
                manufacturer="Acme Pharma",
                purchase_price=1.40,
                selling_price=3.25,
                stock_quantity=45,
                supplier_id=health_plus.id,
                expiry_date=today + timedelta(days=220),
                batch_number="CTZ-0932",
                min_stock_threshold=15,
            ),
        ]
        for payload in samples:
            create_medicine(db, payload)
        logger.info("Seed data created: 2 suppliers, %d medicines.", len(samples))


if __name__ == "__main__":
    main()
