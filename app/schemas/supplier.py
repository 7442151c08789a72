from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.schemas.common import normalize_email


class SupplierCreate(BaseModel):
    name: str = Field(min_length=1)
    contact: str = Field(min_length=1)
    email: str
    address: str = Field(min_length=1)

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value):
        return normalize_email(value)


class SupplierUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    contact: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    address: Optional[str] = Field(default=None, min_length=1)

    # The supplied-medicine set is derived from medicines and is not writable.
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value):
        return normalize_email(value)

    @model_validator(mode="after")
    def _reject_null_fields(self):
        for field_name in self.model_fields_set:
            if getattr(self, field_name) is None:
                raise ValueError("{} cannot be null".format(field_name))
        return self


class MedicineSummary(BaseModel):
    id: int
    name: str
    category: str
    selling_price: float
    stock_quantity: int

    model_config = ConfigDict(from_attributes=True)


class SupplierRead(BaseModel):
    id: int
    name: str
    contact: str
    email: str
    address: str
    supplied_medicines: List[MedicineSummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
