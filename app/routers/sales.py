from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.security import Identity
from app.dependencies import get_db, require_auth
from app.schemas.sale import SaleCreate, SaleRead, SalesReport
from app.services import sale_service

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.get("", response_model=List[SaleRead])
def list_sales(db: Session = Depends(get_db), _auth: Identity = Depends(require_auth)):
    return sale_service.list_sales(db)


@router.get("/report", response_model=SalesReport)
def sales_report(
    start_date: Optional[date] = Query(None, description="First day included (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Last day included (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    _auth: Identity = Depends(require_auth),
):
    return sale_service.sales_report(db, start_date=start_date, end_date=end_date)


@router.get("/{sale_id}", response_model=SaleRead)
def get_sale(sale_id: int, db: Session = Depends(get_db), _auth: Identity = Depends(require_auth)):
    return sale_service.get_sale(db, sale_id)


@router.post("", response_model=SaleRead, status_code=status.HTTP_201_CREATED)
def create_sale(
    payload: SaleCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
):
    return sale_service.process_sale(db, payload, pharmacist=identity)


__all__ = ["router"]
