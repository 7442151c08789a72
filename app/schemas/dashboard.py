from typing import List

from pydantic import BaseModel, Field

from app.schemas.sale import SaleRead


class DashboardSummary(BaseModel):
    total_medicines: int
    low_stock_items: int
    today_sales: float
    total_customers: int
    recent_sales: List[SaleRead] = Field(default_factory=list)
