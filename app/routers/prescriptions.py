from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.security import Identity
from app.dependencies import get_db, require_auth
from app.schemas.common import MessageResponse
from app.schemas.prescription import (
    PrescriptionCreate,
    PrescriptionRead,
    PrescriptionStatusUpdate,
    PrescriptionUpdate,
)
from app.services import prescription_service

router = APIRouter(prefix="/prescriptions", tags=["Prescriptions"])


@router.get("", response_model=List[PrescriptionRead])
def list_prescriptions(db: Session = Depends(get_db), _auth: Identity = Depends(require_auth)):
    return prescription_service.list_prescriptions(db)


@router.get("/pending", response_model=List[PrescriptionRead])
def pending_prescriptions(db: Session = Depends(get_db), _auth: Identity = Depends(require_auth)):
    return prescription_service.pending_prescriptions(db)


@router.get("/number/{prescription_number}", response_model=PrescriptionRead)
def get_by_number(
    prescription_number: str,
    db: Session = Depends(get_db),
    _auth: Identity = Depends(require_auth),
):
    return prescription_service.get_prescription_by_number(db, prescription_number)


@router.get("/{prescription_id}", response_model=PrescriptionRead)
def get_prescription(
    prescription_id: int,
    db: Session = Depends(get_db),
    _auth: Identity = Depends(require_auth),
):
    return prescription_service.get_prescription(db, prescription_id)


@router.post("", response_model=PrescriptionRead, status_code=status.HTTP_201_CREATED)
def create_prescription(
    payload: PrescriptionCreate,
    db: Session = Depends(get_db),
    _auth: Identity = Depends(require_auth),
):
    return prescription_service.create_prescription(db, payload)


@router.put("/{prescription_id}", response_model=PrescriptionRead)
def update_prescription(
    prescription_id: int,
    payload: PrescriptionUpdate,
    db: Session = Depends(get_db),
    _auth: Identity = Depends(require_auth),
):
    return prescription_service.update_prescription(db, prescription_id, payload)


@router.patch("/{prescription_id}/status", response_model=PrescriptionRead)
def update_status(
    prescription_id: int,
    payload: PrescriptionStatusUpdate,
    db: Session = Depends(get_db),
    _auth: Identity = Depends(require_auth),
):
    return prescription_service.update_prescription_status(db, prescription_id, payload.status)


@router.delete("/{prescription_id}", response_model=MessageResponse)
def delete_prescription(
    prescription_id: int,
    db: Session = Depends(get_db),
    _auth: Identity = Depends(require_auth),
):
    prescription_service.delete_prescription(db, prescription_id)
    return MessageResponse(message="Prescription removed")


__all__ = ["router"]
