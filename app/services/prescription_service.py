"""Prescription records.

Prescriptions never touch medicine stock; fulfilling one is a status change
only, and dispensing goes through the sale processor.
"""
import logging
from typing import Iterable, Optional, cast

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationFailed
from app.models.medicine import Medicine
from app.models.prescription import Prescription, PrescriptionItem
from app.schemas.prescription import (
    PrescriptionCreate,
    PrescriptionItemIn,
    PrescriptionUpdate,
)
from app.services.unit_of_work import commit_or_rollback

logger = logging.getLogger(__name__)


def list_prescriptions(db: Session, *, status: Optional[str] = None) -> list[Prescription]:
    stmt = select(Prescription)
    if status is not None:
        stmt = stmt.where(Prescription.status == status)
    stmt = stmt.order_by(Prescription.created_at.desc(), Prescription.id.desc())
    return cast(list[Prescription], list(db.execute(stmt).scalars().all()))


def pending_prescriptions(db: Session) -> list[Prescription]:
    return list_prescriptions(db, status="pending")


def get_prescription(db: Session, prescription_id: int) -> Prescription:
    prescription = db.get(Prescription, prescription_id)
    if prescription is None:
        raise NotFoundError("Prescription not found")
    return prescription


def get_prescription_by_number(db: Session, prescription_number: str) -> Prescription:
    prescription = (
        db.execute(
            select(Prescription).where(
                Prescription.prescription_number == prescription_number.strip()
            )
        )
        .scalars()
        .first()
    )
    if prescription is None:
        raise NotFoundError("Prescription not found")
    return prescription


def _ensure_number_available(
    db: Session, prescription_number: str, *, exclude_id: Optional[int] = None
) -> None:
    stmt = select(Prescription.id).where(Prescription.prescription_number == prescription_number)
    if exclude_id is not None:
        stmt = stmt.where(Prescription.id != exclude_id)
    if db.execute(stmt.limit(1)).first():
        raise ValidationFailed(
            "Prescription number already exists: {}".format(prescription_number)
        )


def _build_items(db: Session, items: Iterable[PrescriptionItemIn]) -> list[PrescriptionItem]:
    built = []
    for position, item in enumerate(items):
        if db.get(Medicine, item.medicine_id) is None:
            raise NotFoundError("Medicine not found: {}".format(item.medicine_id))
        built.append(
            PrescriptionItem(
                position=position,
                medicine_id=item.medicine_id,
                dosage=item.dosage,
                duration=item.duration,
            )
        )
    return built


def create_prescription(db: Session, payload: PrescriptionCreate) -> Prescription:
    with commit_or_rollback(db):
        _ensure_number_available(db, payload.prescription_number)
        prescription = Prescription(
            prescription_number=payload.prescription_number,
            patient_name=payload.patient_name,
            doctor_name=payload.doctor_name,
            status=payload.status,
            items=_build_items(db, payload.items),
        )
        db.add(prescription)
    db.refresh(prescription)
    logger.info("Created prescription %s", prescription.prescription_number)
    return prescription


def update_prescription(
    db: Session, prescription_id: int, payload: PrescriptionUpdate
) -> Prescription:
    prescription = get_prescription(db, prescription_id)
    changes = payload.model_dump(exclude_unset=True, exclude={"items"})
    with commit_or_rollback(db):
        if "prescription_number" in changes:
            _ensure_number_available(
                db, changes["prescription_number"], exclude_id=prescription.id
            )
        for field_name, value in changes.items():
            setattr(prescription, field_name, value)
        if "items" in payload.model_fields_set:
            prescription.items = _build_items(db, payload.items)
    db.refresh(prescription)
    return prescription


def update_prescription_status(db: Session, prescription_id: int, status: str) -> Prescription:
    prescription = get_prescription(db, prescription_id)
    with commit_or_rollback(db):
        prescription.status = status
    db.refresh(prescription)
    logger.info("Prescription %s moved to %s", prescription.prescription_number, status)
    return prescription


def delete_prescription(db: Session, prescription_id: int) -> None:
    prescription = get_prescription(db, prescription_id)
    with commit_or_rollback(db):
        db.delete(prescription)


__all__ = [
    "create_prescription",
    "delete_prescription",
    "get_prescription",
    "get_prescription_by_number",
    "list_prescriptions",
    "pending_prescriptions",
    "update_prescription",
    "update_prescription_status",
]
