import logging
from typing import Optional, cast

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, ValidationFailed
from app.models.supplier import Supplier
from app.schemas.supplier import SupplierCreate, SupplierUpdate
from app.services.supplier_links import count_supplier_medicines
from app.services.unit_of_work import commit_or_rollback

logger = logging.getLogger(__name__)


def list_suppliers(db: Session) -> list[Supplier]:
    rows = db.execute(select(Supplier).order_by(Supplier.name, Supplier.id)).scalars().all()
    return cast(list[Supplier], list(rows))


def get_supplier(db: Session, supplier_id: int) -> Supplier:
    supplier = db.get(Supplier, supplier_id)
    if supplier is None:
        raise NotFoundError("Supplier not found")
    return supplier


def _ensure_email_available(db: Session, email: str, *, exclude_id: Optional[int] = None) -> None:
    stmt = select(Supplier.id).where(Supplier.email == email)
    if exclude_id is not None:
        stmt = stmt.where(Supplier.id != exclude_id)
    if db.execute(stmt.limit(1)).first():
        raise ValidationFailed("Supplier email already registered: {}".format(email))


def create_supplier(db: Session, payload: SupplierCreate) -> Supplier:
    with commit_or_rollback(db):
        _ensure_email_available(db, payload.email)
        supplier = Supplier(**payload.model_dump())
        db.add(supplier)
    db.refresh(supplier)
    logger.info("Created supplier %s (%s)", supplier.id, supplier.name)
    return supplier


def update_supplier(db: Session, supplier_id: int, payload: SupplierUpdate) -> Supplier:
    supplier = get_supplier(db, supplier_id)
    changes = payload.model_dump(exclude_unset=True)
    with commit_or_rollback(db):
        if "email" in changes:
            _ensure_email_available(db, changes["email"], exclude_id=supplier.id)
        for field_name, value in changes.items():
            setattr(supplier, field_name, value)
    db.refresh(supplier)
    return supplier


def delete_supplier(db: Session, supplier_id: int) -> None:
    supplier = get_supplier(db, supplier_id)
    with commit_or_rollback(db):
        if count_supplier_medicines(db, supplier.id) > 0:
            raise ConflictError("Cannot delete supplier with associated medicines")
        db.delete(supplier)
    logger.info("Deleted supplier %s", supplier_id)


__all__ = [
    "create_supplier",
    "delete_supplier",
    "get_supplier",
    "list_suppliers",
    "update_supplier",
]
