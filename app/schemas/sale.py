from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PaymentMethod = Literal["cash", "card", "online"]
SaleStatus = Literal["completed", "pending", "cancelled"]


class SaleItemRequest(BaseModel):
    medicine_id: int
    quantity: int = Field(ge=1)


class SaleCreate(BaseModel):
    items: List[SaleItemRequest] = Field(min_length=1)
    customer_name: Optional[str] = None
    payment_method: PaymentMethod = "cash"

    model_config = ConfigDict(str_strip_whitespace=True)


class SaleItemRead(BaseModel):
    medicine_id: Optional[int] = None
    medicine_name: str
    quantity: int
    price: float
    line_total: float

    model_config = ConfigDict(from_attributes=True)


class PharmacistSummary(BaseModel):
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class SaleRead(BaseModel):
    id: int
    items: List[SaleItemRead] = Field(default_factory=list)
    total_amount: float
    customer_name: Optional[str] = None
    payment_method: PaymentMethod
    pharmacist_id: Optional[int] = None
    pharmacist: Optional[PharmacistSummary] = None
    status: SaleStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SalesReport(BaseModel):
    sales: List[SaleRead] = Field(default_factory=list)
    total_sales: int
    total_revenue: float
