from datetime import date
from typing import Optional

from sqlalchemy import distinct, func, select
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.dates import end_of_day_exclusive, start_of_day, utc_today
from app.core.money import to_cents
from app.models.medicine import Medicine
from app.models.sales import Sale
from app.services.sale_service import list_sales


def _count(db: Session, stmt) -> int:
    return int(db.execute(stmt).scalar_one() or 0)


def dashboard_summary(db: Session, *, today: Optional[date] = None) -> dict:
    settings = get_settings()
    if today is None:
        today = utc_today()

    total_medicines = _count(db, select(func.count(Medicine.id)))
    low_stock_items = _count(
        db,
        select(func.count(Medicine.id)).where(
            Medicine.stock_quantity <= Medicine.min_stock_threshold
        ),
    )
    today_sales = db.execute(
        select(func.coalesce(func.sum(Sale.total_amount), 0.0)).where(
            Sale.created_at >= start_of_day(today),
            Sale.created_at < end_of_day_exclusive(today),
        )
    ).scalar_one()
    total_customers = _count(
        db,
        select(func.count(distinct(Sale.customer_name))).where(Sale.customer_name.isnot(None)),
    )

    return {
        "total_medicines": total_medicines,
        "low_stock_items": low_stock_items,
        "today_sales": to_cents(today_sales or 0.0),
        "total_customers": total_customers,
        "recent_sales": list_sales(db, limit=settings.RECENT_SALES_LIMIT),
    }


__all__ = ["dashboard_summary"]
