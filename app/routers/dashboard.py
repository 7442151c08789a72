from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.security import Identity
from app.dependencies import get_db, require_auth
from app.schemas.dashboard import DashboardSummary
from app.services.dashboard_service import dashboard_summary

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/summary", response_model=DashboardSummary)
def summary(db: Session = Depends(get_db), _auth: Identity = Depends(require_auth)):
    return dashboard_summary(db)


__all__ = ["router"]
