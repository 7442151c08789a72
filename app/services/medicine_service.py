import logging
from datetime import date, timedelta
from typing import Optional, cast

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.dates import utc_today
from app.core.exceptions import NotFoundError
from app.models.medicine import Medicine
from app.schemas.medicine import MedicineCreate, MedicineUpdate
from app.services.supplier_links import (
    attach_medicine,
    detach_medicine,
    reassign_medicine,
    require_supplier,
)
from app.services.unit_of_work import commit_or_rollback

logger = logging.getLogger(__name__)


def list_medicines(db: Session) -> list[Medicine]:
    rows = db.execute(select(Medicine).order_by(Medicine.name, Medicine.id)).scalars().all()
    return cast(list[Medicine], list(rows))


def get_medicine(db: Session, medicine_id: int) -> Medicine:
    medicine = db.get(Medicine, medicine_id)
    if medicine is None:
        raise NotFoundError("Medicine not found")
    return medicine


def create_medicine(db: Session, payload: MedicineCreate) -> Medicine:
    with commit_or_rollback(db):
        if payload.supplier_id is not None:
            require_supplier(db, payload.supplier_id)
        medicine = Medicine(**payload.model_dump())
        db.add(medicine)
        db.flush()
        if medicine.supplier_id is not None:
            attach_medicine(db, medicine.supplier_id, medicine.id)
    db.refresh(medicine)
    logger.info("Created medicine %s (%s)", medicine.id, medicine.name)
    return medicine


def update_medicine(db: Session, medicine_id: int, payload: MedicineUpdate) -> Medicine:
    medicine = get_medicine(db, medicine_id)
    changes = payload.model_dump(exclude_unset=True)
    old_supplier_id = medicine.supplier_id

    with commit_or_rollback(db):
        new_supplier_id = changes.get("supplier_id", old_supplier_id)
        if "supplier_id" in changes and new_supplier_id is not None:
            require_supplier(db, new_supplier_id)
        for field_name, value in changes.items():
            setattr(medicine, field_name, value)
        db.flush()
        reassign_medicine(db, medicine.id, old_supplier_id, new_supplier_id)
    db.refresh(medicine)
    return medicine


def delete_medicine(db: Session, medicine_id: int) -> None:
    medicine = get_medicine(db, medicine_id)
    with commit_or_rollback(db):
        if medicine.supplier_id is not None:
            detach_medicine(db, medicine.supplier_id, medicine.id)
        db.delete(medicine)
    logger.info("Deleted medicine %s", medicine_id)


def low_stock_medicines(db: Session) -> list[Medicine]:
    rows = (
        db.execute(
            select(Medicine)
            .where(Medicine.stock_quantity <= Medicine.min_stock_threshold)
            .order_by(Medicine.stock_quantity, Medicine.id)
        )
        .scalars()
        .all()
    )
    return cast(list[Medicine], list(rows))


def expiry_cutoff(today: Optional[date] = None, *, window_days: Optional[int] = None) -> date:
    if today is None:
        today = utc_today()
    if window_days is None:
        window_days = get_settings().EXPIRY_WINDOW_DAYS
    return today + timedelta(days=window_days)


def expiring_medicines(db: Session, *, today: Optional[date] = None) -> list[Medicine]:
    """Medicines already expired or expiring within the configured window."""
    cutoff = expiry_cutoff(today)
    rows = (
        db.execute(
            select(Medicine)
            .where(Medicine.expiry_date <= cutoff)
            .order_by(Medicine.expiry_date, Medicine.id)
        )
        .scalars()
        .all()
    )
    return cast(list[Medicine], list(rows))


__all__ = [
    "create_medicine",
    "delete_medicine",
    "expiring_medicines",
    "expiry_cutoff",
    "get_medicine",
    "list_medicines",
    "low_stock_medicines",
    "update_medicine",
]
