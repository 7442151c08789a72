from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.core.money import to_cents

REQUIRED_MEDICINE_FIELDS = (
    "name",
    "category",
    "manufacturer",
    "purchase_price",
    "selling_price",
    "stock_quantity",
    "expiry_date",
    "batch_number",
    "min_stock_threshold",
)


class MedicineBase(BaseModel):
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: Optional[str] = None
    manufacturer: str = Field(min_length=1)
    purchase_price: float = Field(ge=0)
    selling_price: float = Field(ge=0)
    stock_quantity: int = Field(default=0, ge=0)
    supplier_id: Optional[int] = None
    expiry_date: date
    batch_number: str = Field(min_length=1)
    min_stock_threshold: int = Field(default=10, ge=0)

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("purchase_price", "selling_price")
    @classmethod
    def _whole_cents(cls, value):
        return to_cents(value)


class MedicineCreate(MedicineBase):
    pass


class MedicineUpdate(BaseModel):
    """Partial update; only fields present in the request are applied.

    ``supplier_id`` may be sent as ``null`` to detach the medicine from its
    supplier, so callers must distinguish "absent" from "null" through
    ``model_fields_set``.
    """

    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    manufacturer: Optional[str] = Field(default=None, min_length=1)
    purchase_price: Optional[float] = Field(default=None, ge=0)
    selling_price: Optional[float] = Field(default=None, ge=0)
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    supplier_id: Optional[int] = None
    expiry_date: Optional[date] = None
    batch_number: Optional[str] = Field(default=None, min_length=1)
    min_stock_threshold: Optional[int] = Field(default=None, ge=0)

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("purchase_price", "selling_price")
    @classmethod
    def _whole_cents(cls, value):
        return None if value is None else to_cents(value)

    @model_validator(mode="after")
    def _reject_null_required(self):
        for field_name in REQUIRED_MEDICINE_FIELDS:
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                raise ValueError("{} cannot be null".format(field_name))
        return self


class SupplierSummary(BaseModel):
    id: int
    name: str
    contact: str

    model_config = ConfigDict(from_attributes=True)


class MedicineRead(BaseModel):
    id: int
    name: str
    category: str
    description: Optional[str] = None
    manufacturer: str
    purchase_price: float
    selling_price: float
    stock_quantity: int
    supplier_id: Optional[int] = None
    supplier: Optional[SupplierSummary] = None
    expiry_date: date
    batch_number: str
    min_stock_threshold: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
