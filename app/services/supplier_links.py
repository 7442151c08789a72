"""Keeps ``Medicine.supplier_id`` and the supplier's stored medicine set in step.

Every function runs inside the caller's session and never commits; the
triggering medicine write and the set changes land in the same transaction.
"""
import logging
from typing import Optional

from sqlalchemy import delete, func, insert, select
from sqlalchemy.orm import Session
from sqlalchemy.orm.util import identity_key

from app.core.exceptions import NotFoundError
from app.models.medicine import Medicine
from app.models.supplier import Supplier, supplier_medicines

logger = logging.getLogger(__name__)


def require_supplier(db: Session, supplier_id: int) -> Supplier:
    supplier = db.get(Supplier, supplier_id)
    if supplier is None:
        raise NotFoundError("Supplier not found: {}".format(supplier_id))
    return supplier


def _expire_cached_set(db: Session, supplier_id: int) -> None:
    supplier = db.identity_map.get(identity_key(Supplier, supplier_id))
    if supplier is not None:
        db.expire(supplier, ["supplied_medicines"])


def supplied_medicine_ids(db: Session, supplier_id: int) -> set[int]:
    rows = db.execute(
        select(supplier_medicines.c.medicine_id).where(
            supplier_medicines.c.supplier_id == supplier_id
        )
    ).scalars()
    return set(rows)


def attach_medicine(db: Session, supplier_id: int, medicine_id: int) -> None:
    if medicine_id in supplied_medicine_ids(db, supplier_id):
        return
    db.execute(
        insert(supplier_medicines).values(supplier_id=supplier_id, medicine_id=medicine_id)
    )
    _expire_cached_set(db, supplier_id)
    logger.info("Linked medicine %s to supplier %s", medicine_id, supplier_id)


def detach_medicine(db: Session, supplier_id: int, medicine_id: int) -> None:
    result = db.execute(
        delete(supplier_medicines).where(
            supplier_medicines.c.supplier_id == supplier_id,
            supplier_medicines.c.medicine_id == medicine_id,
        )
    )
    _expire_cached_set(db, supplier_id)
    if result.rowcount:
        logger.info("Unlinked medicine %s from supplier %s", medicine_id, supplier_id)


def reassign_medicine(
    db: Session,
    medicine_id: int,
    old_supplier_id: Optional[int],
    new_supplier_id: Optional[int],
) -> None:
    if old_supplier_id == new_supplier_id:
        return
    if old_supplier_id is not None:
        detach_medicine(db, old_supplier_id, medicine_id)
    if new_supplier_id is not None:
        attach_medicine(db, new_supplier_id, medicine_id)


def count_supplier_medicines(db: Session, supplier_id: int) -> int:
    """Counts forward references, ignoring whatever the stored set says."""
    return db.execute(
        select(func.count(Medicine.id)).where(Medicine.supplier_id == supplier_id)
    ).scalar_one()


__all__ = [
    "attach_medicine",
    "count_supplier_medicines",
    "detach_medicine",
    "reassign_medicine",
    "require_supplier",
    "supplied_medicine_ids",
]
