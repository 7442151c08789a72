from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.security import Identity
from app.dependencies import get_db, require_admin
from app.schemas.common import MessageResponse
from app.schemas.medicine import MedicineCreate, MedicineRead, MedicineUpdate
from app.services import medicine_service

router = APIRouter(prefix="/medicines", tags=["Medicines"])


@router.get("", response_model=List[MedicineRead])
def list_medicines(db: Session = Depends(get_db)):
    return medicine_service.list_medicines(db)


@router.get("/lowstock", response_model=List[MedicineRead])
def low_stock(db: Session = Depends(get_db)):
    return medicine_service.low_stock_medicines(db)


@router.get("/expiring", response_model=List[MedicineRead])
def expiring(db: Session = Depends(get_db)):
    return medicine_service.expiring_medicines(db)


@router.get("/{medicine_id}", response_model=MedicineRead)
def get_medicine(medicine_id: int, db: Session = Depends(get_db)):
    return medicine_service.get_medicine(db, medicine_id)


@router.post("", response_model=MedicineRead, status_code=status.HTTP_201_CREATED)
def create_medicine(
    payload: MedicineCreate,
    db: Session = Depends(get_db),
    _admin: Identity = Depends(require_admin),
):
    return medicine_service.create_medicine(db, payload)


@router.put("/{medicine_id}", response_model=MedicineRead)
def update_medicine(
    medicine_id: int,
    payload: MedicineUpdate,
    db: Session = Depends(get_db),
    _admin: Identity = Depends(require_admin),
):
    return medicine_service.update_medicine(db, medicine_id, payload)


@router.delete("/{medicine_id}", response_model=MessageResponse)
def delete_medicine(
    medicine_id: int,
    db: Session = Depends(get_db),
    _admin: Identity = Depends(require_admin),
):
    medicine_service.delete_medicine(db, medicine_id)
    return MessageResponse(message="Medicine removed")


__all__ = ["router"]
