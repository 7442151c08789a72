"""Checkout: validate stock, decrement it and record the sale as one unit.

The whole sale runs in a single transaction. Each decrement is a
compare-and-swap (``stock_quantity >= requested``), so a concurrent writer that
got to the row first makes the update match nothing; the sale is then rolled
back and replayed from scratch against fresh stock.
"""
import logging
from datetime import date
from typing import Optional, cast

from sqlalchemy import select, update
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, lazyload

from app.config import get_settings
from app.core.constants import DEFAULT_SALE_STATUS
from app.core.dates import end_of_day_exclusive, start_of_day, utc_now
from app.core.exceptions import ConflictError, InsufficientStockError, NotFoundError, ValidationFailed
from app.core.money import to_cents
from app.core.security import Identity
from app.models.medicine import Medicine
from app.models.sales import Sale, SaleItem
from app.schemas.sale import SaleCreate
from app.services.unit_of_work import commit_or_rollback

logger = logging.getLogger(__name__)

_LOCK_ERROR_MARKERS = ("locked", "busy", "could not serialize", "deadlock")


class StaleStockError(Exception):
    """Stock moved between the read and the conditional decrement."""

    def __init__(self, medicine_id: int):
        super().__init__("Stock changed concurrently for medicine {}".format(medicine_id))
        self.medicine_id = medicine_id


def _is_lock_contention(exc: OperationalError) -> bool:
    message = str(exc.orig or exc).lower()
    return any(marker in message for marker in _LOCK_ERROR_MARKERS)


def _load_for_sale(db: Session, medicine_id: int) -> Optional[Medicine]:
    stmt = (
        select(Medicine)
        .where(Medicine.id == medicine_id)
        .options(lazyload(Medicine.supplier))
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return db.execute(stmt).scalars().first()


def _decrement_stock(db: Session, medicine: Medicine, quantity: int) -> None:
    result = db.execute(
        update(Medicine)
        .where(Medicine.id == medicine.id, Medicine.stock_quantity >= quantity)
        .values(
            stock_quantity=Medicine.stock_quantity - quantity,
            updated_at=utc_now(),
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise StaleStockError(medicine.id)
    db.expire(medicine, ["stock_quantity", "updated_at"])


def _record_sale(db: Session, payload: SaleCreate, pharmacist: Optional[Identity]) -> Sale:
    total = 0.0
    lines = []
    for position, item in enumerate(payload.items):
        medicine = _load_for_sale(db, item.medicine_id)
        if medicine is None:
            raise NotFoundError("Medicine not found: {}".format(item.medicine_id))
        if item.quantity > medicine.stock_quantity:
            raise InsufficientStockError(medicine.name, medicine.stock_quantity)

        price = to_cents(medicine.selling_price)
        total += to_cents(price * item.quantity)
        _decrement_stock(db, medicine, item.quantity)

        lines.append(
            SaleItem(
                position=position,
                medicine_id=medicine.id,
                medicine_name=medicine.name,
                quantity=item.quantity,
                price=price,
            )
        )

    sale = Sale(
        items=lines,
        total_amount=to_cents(total),
        customer_name=payload.customer_name or None,
        payment_method=payload.payment_method,
        pharmacist_id=pharmacist.user_id if pharmacist is not None else None,
        status=DEFAULT_SALE_STATUS,
    )
    db.add(sale)
    db.flush()
    return sale


def process_sale(db: Session, payload: SaleCreate, *, pharmacist: Optional[Identity]) -> Sale:
    """Run a checkout for ``pharmacist``.

    Either every line is decremented and the sale is stored, or nothing
    changes. Not-found and insufficient-stock failures are raised as is;
    concurrent stock changes are retried up to ``SALE_MAX_RETRIES`` times.
    """
    max_attempts = max(1, get_settings().SALE_MAX_RETRIES)
    last_error: Optional[Exception] = None
    for attempt in range(1, max_attempts + 1):
        try:
            with commit_or_rollback(db):
                sale = _record_sale(db, payload, pharmacist)
        except StaleStockError as exc:
            last_error = exc
        except OperationalError as exc:
            if not _is_lock_contention(exc):
                raise
            last_error = exc
        else:
            db.refresh(sale)
            logger.info(
                "Recorded sale %s: %d line(s), total %.2f, pharmacist %s",
                sale.id,
                len(sale.items),
                sale.total_amount,
                pharmacist.username if pharmacist is not None else "-",
            )
            return sale
        logger.warning("Sale attempt %d/%d hit a stock conflict: %s", attempt, max_attempts, last_error)

    raise ConflictError("Stock changed while the sale was processed; please retry") from last_error


def list_sales(
    db: Session,
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    limit: Optional[int] = None,
) -> list[Sale]:
    stmt = select(Sale)
    if start_date is not None:
        stmt = stmt.where(Sale.created_at >= start_of_day(start_date))
    if end_date is not None:
        stmt = stmt.where(Sale.created_at < end_of_day_exclusive(end_date))
    stmt = stmt.order_by(Sale.created_at.desc(), Sale.id.desc())
    if limit is not None:
        stmt = stmt.limit(limit)
    return cast(list[Sale], list(db.execute(stmt).scalars().unique().all()))


def get_sale(db: Session, sale_id: int) -> Sale:
    sale = db.get(Sale, sale_id)
    if sale is None:
        raise NotFoundError("Sale not found")
    return sale


def sales_report(
    db: Session,
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> dict:
    """Sales created within the inclusive date range, with count and revenue."""
    if start_date is not None and end_date is not None and start_date > end_date:
        raise ValidationFailed("start_date must not be after end_date")
    sales = list_sales(db, start_date=start_date, end_date=end_date)
    return {
        "sales": sales,
        "total_sales": len(sales),
        "total_revenue": to_cents(sum(sale.total_amount for sale in sales)),
    }


__all__ = [
    "StaleStockError",
    "get_sale",
    "list_sales",
    "process_sale",
    "sales_report",
]
