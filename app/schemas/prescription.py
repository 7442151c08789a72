from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

PrescriptionStatus = Literal["pending", "fulfilled", "cancelled"]


class PrescriptionItemIn(BaseModel):
    medicine_id: int
    dosage: str = Field(min_length=1)
    duration: str = Field(min_length=1)

    model_config = ConfigDict(str_strip_whitespace=True)


class PrescriptionCreate(BaseModel):
    prescription_number: str = Field(min_length=1)
    patient_name: str = Field(min_length=1)
    doctor_name: str = Field(min_length=1)
    items: List[PrescriptionItemIn] = Field(default_factory=list)
    status: PrescriptionStatus = "pending"

    model_config = ConfigDict(str_strip_whitespace=True)


class PrescriptionUpdate(BaseModel):
    prescription_number: Optional[str] = Field(default=None, min_length=1)
    patient_name: Optional[str] = Field(default=None, min_length=1)
    doctor_name: Optional[str] = Field(default=None, min_length=1)
    items: Optional[List[PrescriptionItemIn]] = None
    status: Optional[PrescriptionStatus] = None

    model_config = ConfigDict(str_strip_whitespace=True)

    @model_validator(mode="after")
    def _reject_null_fields(self):
        for field_name in self.model_fields_set:
            if getattr(self, field_name) is None:
                raise ValueError("{} cannot be null".format(field_name))
        return self


class PrescriptionStatusUpdate(BaseModel):
    status: PrescriptionStatus


class PrescribedMedicine(BaseModel):
    id: int
    name: str
    category: str

    model_config = ConfigDict(from_attributes=True)


class PrescriptionItemRead(BaseModel):
    medicine_id: Optional[int] = None
    medicine: Optional[PrescribedMedicine] = None
    dosage: str
    duration: str

    model_config = ConfigDict(from_attributes=True)


class PrescriptionRead(BaseModel):
    id: int
    prescription_number: str
    patient_name: str
    doctor_name: str
    items: List[PrescriptionItemRead] = Field(default_factory=list)
    status: PrescriptionStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
