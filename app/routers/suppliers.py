from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.security import Identity
from app.dependencies import get_db, require_admin
from app.schemas.common import MessageResponse
from app.schemas.supplier import SupplierCreate, SupplierRead, SupplierUpdate
from app.services import supplier_service

router = APIRouter(prefix="/suppliers", tags=["Suppliers"])


@router.get("", response_model=List[SupplierRead])
def list_suppliers(db: Session = Depends(get_db), _admin: Identity = Depends(require_admin)):
    return supplier_service.list_suppliers(db)


@router.get("/{supplier_id}", response_model=SupplierRead)
def get_supplier(
    supplier_id: int,
    db: Session = Depends(get_db),
    _admin: Identity = Depends(require_admin),
):
    return supplier_service.get_supplier(db, supplier_id)


@router.post("", response_model=SupplierRead, status_code=status.HTTP_201_CREATED)
def create_supplier(
    payload: SupplierCreate,
    db: Session = Depends(get_db),
    _admin: Identity = Depends(require_admin),
):
    return supplier_service.create_supplier(db, payload)


@router.put("/{supplier_id}", response_model=SupplierRead)
def update_supplier(
    supplier_id: int,
    payload: SupplierUpdate,
    db: Session = Depends(get_db),
    _admin: Identity = Depends(require_admin),
):
    return supplier_service.update_supplier(db, supplier_id, payload)


@router.delete("/{supplier_id}", response_model=MessageResponse)
def delete_supplier(
    supplier_id: int,
    db: Session = Depends(get_db),
    _admin: Identity = Depends(require_admin),
):
    supplier_service.delete_supplier(db, supplier_id)
    return MessageResponse(message="Supplier removed")


__all__ = ["router"]
